"""Core: domain model, validation, response parsing and the client facade."""

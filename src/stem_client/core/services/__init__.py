"""Services: orchestration of validation, adapters and parsing."""

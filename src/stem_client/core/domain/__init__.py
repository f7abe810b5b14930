"""Domain models, enums and the error type.

Why:
- Pure data structures (Pydantic v2 / dataclasses) shared by every layer.
- The domain knows nothing about httpx or the CLI.
"""

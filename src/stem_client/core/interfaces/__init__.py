"""Core contracts (Protocol).

Why:
- The facade depends on these abstractions; adapters provide the concrete
  native and legacy implementations.
"""

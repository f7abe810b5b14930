"""Adapters: httpx transports, request building and error mapping."""

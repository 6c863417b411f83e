"""FastAPI dependency providers for the server configuration context."""

"""Application layer for the server configuration context."""

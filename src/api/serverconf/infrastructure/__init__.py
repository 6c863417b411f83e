"""Infrastructure layer for the server configuration context."""

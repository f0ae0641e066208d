"""Application layer for the visitors bounded context."""

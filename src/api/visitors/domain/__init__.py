"""Domain layer for the visitors bounded context."""

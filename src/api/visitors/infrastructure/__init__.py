"""Infrastructure adapters for the visitors bounded context."""

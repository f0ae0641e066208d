"""Domain layer for the storefront bounded context."""

"""Infrastructure adapters for the storefront bounded context."""

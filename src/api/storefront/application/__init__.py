"""Application layer for the storefront bounded context."""

"""Presentation layer for the storefront bounded context."""

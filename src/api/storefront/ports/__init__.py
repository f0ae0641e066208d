"""Ports (interfaces and exceptions) for the storefront bounded context."""

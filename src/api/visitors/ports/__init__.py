"""Ports (interfaces and exceptions) for the visitors bounded context."""

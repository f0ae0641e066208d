"""Ports (interfaces and exceptions) for the tenancy bounded context."""

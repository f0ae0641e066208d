"""Presentation layer for the visitors bounded context."""

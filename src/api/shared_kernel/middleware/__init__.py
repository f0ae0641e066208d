"""Shared middleware for cross-cutting concerns.

This module contains the ASGI middleware and request-context accessors that
are shared across bounded contexts. The request scope middleware is the
primary component: it opens the execution scope every other component reads
the store id and locale from.
"""

"""Tenancy bounded context.

Binds every inbound request to exactly one store: derives the tenant key
from the Host header, looks the store up once per request and publishes its
id into the request context.
"""

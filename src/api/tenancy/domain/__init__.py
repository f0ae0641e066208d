"""Tenancy domain layer: tenant keys, hostname resolution and store snapshots."""

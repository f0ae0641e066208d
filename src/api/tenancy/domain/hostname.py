"""Hostname to tenant key resolution.

Pure string functions with no I/O, so page metadata generation and page body
rendering always derive the same tenant key from the same Host header.

Examples:
    shop1.example.com      -> "shop1"
    Shop1.Example.com:8443 -> "shop1"
    shop1.localhost:3000   -> "shop1"
    example.com            -> None (bare apex domain)
    www.example.com        -> None (reserved label)
    127.0.0.1              -> None (IP literal)
"""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable

from tenancy.domain.value_objects import TenantKey, is_valid_label

DEFAULT_RESERVED_LABELS = frozenset({"www", "api", "admin", "app"})
DEFAULT_LOCAL_SUFFIXES = frozenset({"localhost"})


def _strip_port(hostname: str) -> str:
    """Remove a trailing ``:port``, keeping bracketed IPv6 literals intact."""
    if hostname.startswith("["):
        closing = hostname.find("]")
        return hostname[: closing + 1] if closing != -1 else hostname
    if hostname.count(":") == 1:
        return hostname.split(":", 1)[0]
    return hostname


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def normalize_hostname(hostname: str | None) -> str:
    """Lower-case a Host header value and strip its port and trailing dot."""
    if not hostname:
        return ""
    host = _strip_port(hostname.strip().lower())
    return host.rstrip(".")


def resolve_tenant_key(
    hostname: str | None,
    reserved_labels: Iterable[str] = DEFAULT_RESERVED_LABELS,
    local_suffixes: Iterable[str] = DEFAULT_LOCAL_SUFFIXES,
) -> TenantKey | None:
    """Derive the tenant key from a raw Host header.

    Total function: anything that does not name a store yields None.

    Args:
        hostname: Raw Host header value, possibly with a port.
        reserved_labels: First labels that never name a store.
        local_suffixes: Development suffixes where ``<store>.<suffix>`` names
            a store even though the host only has two labels.

    Returns:
        TenantKey of the store, or None for non-tenant hosts.
    """
    host = normalize_hostname(hostname)
    if not host or _is_ip_literal(host):
        return None

    labels = host.split(".")
    if not all(is_valid_label(label) for label in labels):
        return None

    candidate = labels[0]
    if candidate in set(reserved_labels):
        return None

    if len(labels) == 2 and labels[1] in set(local_suffixes):
        return TenantKey(value=candidate)

    if len(labels) >= 3:
        return TenantKey(value=candidate)

    return None


def is_tenant_host(
    hostname: str | None,
    reserved_labels: Iterable[str] = DEFAULT_RESERVED_LABELS,
    local_suffixes: Iterable[str] = DEFAULT_LOCAL_SUFFIXES,
) -> bool:
    """Whether the Host header names a store."""
    return resolve_tenant_key(hostname, reserved_labels, local_suffixes) is not None

"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

# A single DNS label: 1-63 chars, alphanumeric at both ends, hyphens inside
_LABEL_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")


def is_valid_label(label: str) -> bool:
    """Check whether ``label`` is a valid lower-case DNS label."""
    return bool(_LABEL_PATTERN.match(label))


@dataclass(frozen=True)
class TenantKey:
    """Normalized identifier of a store, extracted from a hostname.

    The value is a lower-case DNS label: the store's subdomain, or an
    explicit store code.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> TenantKey:
        """Create a TenantKey from an explicit store code.

        Args:
            value: Store code or subdomain label, any case.

        Returns:
            TenantKey instance with the normalized value

        Raises:
            ValueError: If value is not a valid DNS label
        """
        normalized = value.strip().lower()
        if not is_valid_label(normalized):
            raise ValueError(f"Invalid TenantKey: {value!r}")
        return cls(value=normalized)


class StorefrontStatus(StrEnum):
    """Publication status of a store's storefront."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class StoreErrorType(StrEnum):
    """Why a request could not be bound to a servable store."""

    NOT_FOUND = "STORE_NOT_FOUND"
    INACTIVE = "STORE_INACTIVE"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN = "UNKNOWN_ERROR"

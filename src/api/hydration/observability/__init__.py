"""Domain-Oriented Observability for the client runtime."""

from hydration.observability.runtime_probe import (
    ClientRuntimeProbe,
    DefaultClientRuntimeProbe,
)

__all__ = [
    "ClientRuntimeProbe",
    "DefaultClientRuntimeProbe",
]

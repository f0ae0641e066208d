"""Domain-Oriented Observability for the visitors application layer."""

from visitors.application.observability.visitor_probe import (
    DefaultVisitorProbe,
    VisitorProbe,
)

__all__ = [
    "VisitorProbe",
    "DefaultVisitorProbe",
]

"""Base type for domain ports (interfaces implemented by infrastructure adapters)."""

from typing import Protocol


class Port(Protocol):
    """Marker base for all ports. Adapters live in bastion.infrastructure."""

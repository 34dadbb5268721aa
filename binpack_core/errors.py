"""Error types raised by packing, generation and configuration."""

from __future__ import annotations

from typing import Any


class BinPackingError(Exception):
    """Base class for all bin packing errors."""


class ConfigurationError(BinPackingError, ValueError):
    """Invalid settings, solver identifiers or configuration files."""


class UnsatisfiableItemError(BinPackingError):
    """An item is larger than an empty container can hold."""

    def __init__(self, item: Any, capacity: int) -> None:
        self.item = item
        self.capacity = capacity
        super().__init__(
            f"Item of size {item.size} won't fit into an empty container "
            f"of capacity {capacity}"
        )


class InvalidPackingError(BinPackingError):
    """A packing overflows a container or does not hold exactly the input items."""

"""Base classes for issue analyzer plugins."""

from abc import ABC, abstractmethod
from typing import Iterable

from ..models import Inventory, Issue


class Analyzer(ABC):
    """Contract for analyzers that emit issues from a package inventory."""

    name: str = ""

    def supports(self, inventory: Inventory) -> bool:
        """Return True when this analyzer should run for the inventory."""
        return len(inventory) > 0

    @abstractmethod
    def analyze(self, inventory: Inventory) -> Iterable[Issue]:
        """Produce issues in a deterministic, inventory-ordered sequence."""

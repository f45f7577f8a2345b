"""
Flour Catalog Interface
The engine only knows flours through this batch lookup; storage lives elsewhere
"""

from typing import Dict, Iterable, Protocol, runtime_checkable

from core.models import FlourSpec


@runtime_checkable
class FlourCatalog(Protocol):
    """
    Protocol for flour lookups.

    Implementations return the specifications they can resolve, keyed by id.
    Unknown ids are simply absent from the result.
    """

    def batch_fetch(self, flour_ids: Iterable[str]) -> Dict[str, FlourSpec]:
        """
        Fetch several flours in one call.

        Args:
            flour_ids: Flour identifiers

        Returns:
            Dict of flour_id -> FlourSpec for the ids that were found
        """
        ...


class InMemoryFlourCatalog:
    """Flour catalog backed by a dictionary"""

    def __init__(self, flours: Iterable[FlourSpec] = ()):
        self._flours: Dict[str, FlourSpec] = {flour.flour_id: flour for flour in flours}

    def add(self, flour: FlourSpec) -> None:
        self._flours[flour.flour_id] = flour

    def batch_fetch(self, flour_ids: Iterable[str]) -> Dict[str, FlourSpec]:
        return {
            flour_id: self._flours[flour_id]
            for flour_id in dict.fromkeys(flour_ids)
            if flour_id in self._flours
        }

    def __len__(self) -> int:
        return len(self._flours)

"""Read-only intervention catalog passed explicitly to the components that need it."""

from collections.abc import Iterable, Iterator
from typing import Any

from intervention_engine.core.catalog_data import DEFAULT_INTERVENTIONS
from intervention_engine.core.schemas_interventions import EvidenceLevel, Intervention


class InterventionCatalog:
    """
    Immutable, ordered snapshot of catalog interventions.

    Catalog order is significant: filters and rankers break ties by it.
    Construct one per data source (static reference data, a storage snapshot,
    or a stub in tests) and hand it to the analyzer or services.
    """

    def __init__(self, interventions: Iterable[Intervention]):
        self._items: tuple[Intervention, ...] = tuple(interventions)

    @classmethod
    def from_rows(cls, rows: Iterable[dict[str, Any]]) -> "InterventionCatalog":
        """Build from storage-shaped dicts (snake_case or camelCase keys)."""
        return cls(Intervention.model_validate(row) for row in rows)

    def __iter__(self) -> Iterator[Intervention]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple[Intervention, ...]:
        return self._items

    def get(self, intervention_id: str) -> Intervention | None:
        for item in self._items:
            if item.id == intervention_id:
                return item
        return None

    def by_category(self, category: str) -> list[Intervention]:
        return [i for i in self._items if i.category == category]

    def by_function(self, behavior_function: str) -> list[Intervention]:
        """Items with a behavior-function tag containing ``behavior_function`` (case-insensitive)."""
        needle = behavior_function.lower()
        return [
            i for i in self._items
            if any(needle in tag.lower() for tag in i.behavior_function)
        ]

    def by_age_group(self, age_group: str) -> list[Intervention]:
        return [i for i in self._items if age_group in i.age_groups]

    def by_setting(self, setting: str) -> list[Intervention]:
        return [i for i in self._items if setting in i.settings]

    def high_evidence(self) -> list[Intervention]:
        return [i for i in self._items if i.evidence_level == EvidenceLevel.HIGH]

    def with_embeddings(self) -> list[Intervention]:
        return [i for i in self._items if i.has_embedding]


def load_default_catalog() -> InterventionCatalog:
    """Build a fresh catalog from the bundled reference interventions."""
    return InterventionCatalog.from_rows(DEFAULT_INTERVENTIONS)

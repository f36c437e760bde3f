"""Feature registry — read-only lookups over the compatibility table."""

from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from baselinebuddy.registry.models import BaselineStatus, FeatureGroup, FeatureRecord


class FeatureRegistry:
    """Immutable map of feature id to FeatureRecord.

    Lookups never raise for unknown ids; they return None (or False for
    the boolean helpers).
    """

    def __init__(self, records: Iterable[FeatureRecord]) -> None:
        features: dict[str, FeatureRecord] = {}
        for record in records:
            if record.id in features:
                raise ValueError(f"Duplicate feature id: {record.id}")
            features[record.id] = record
        self._features = MappingProxyType(features)

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[FeatureRecord]:
        return iter(self._features.values())

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._features

    def get(self, feature_id: str) -> FeatureRecord | None:
        return self._features.get(feature_id)

    def get_status(self, feature_id: str) -> BaselineStatus | None:
        record = self._features.get(feature_id)
        return record.status if record else None

    def is_safe(self, feature_id: str) -> bool:
        """Newly or widely available."""
        return self.get_status(feature_id) in (
            BaselineStatus.NEWLY,
            BaselineStatus.WIDELY,
        )

    def is_newly(self, feature_id: str) -> bool:
        return self.get_status(feature_id) is BaselineStatus.NEWLY

    def is_widely(self, feature_id: str) -> bool:
        return self.get_status(feature_id) is BaselineStatus.WIDELY

    def by_group(self, group: FeatureGroup | str) -> list[FeatureRecord]:
        group = FeatureGroup(group)
        return [f for f in self if f.group is group]

    def search(self, query: str) -> list[FeatureRecord]:
        """Case-insensitive substring match over name and description."""
        needle = query.lower()
        return [
            f
            for f in self
            if needle in f.name.lower() or needle in f.description.lower()
        ]

    def list_newly(self) -> list[FeatureRecord]:
        return [f for f in self if f.status is BaselineStatus.NEWLY]

    def list_widely(self) -> list[FeatureRecord]:
        return [f for f in self if f.status is BaselineStatus.WIDELY]

    def list_baseline(self) -> list[FeatureRecord]:
        return [f for f in self if f.status is not BaselineStatus.LIMITED]

    def feature_info(self, feature_id: str) -> dict | None:
        """Flat, JSON-friendly view of a feature for hovers and the API."""
        record = self.get(feature_id)
        if record is None:
            return None
        return {
            "id": record.id,
            "name": record.name,
            "description": record.description,
            "group": record.group.value,
            "baseline": record.status.value,
            "baseline_low_date": record.baseline_low_date or None,
            "baseline_high_date": record.baseline_high_date or None,
            "support": record.support.to_dict(),
            "compat_features": list(record.compat_features),
            "spec": record.spec_url or None,
        }


@functools.lru_cache(maxsize=1)
def load_default_registry() -> FeatureRegistry:
    """Build the process-wide registry from the built-in table (once)."""
    from baselinebuddy.registry.features import FEATURES

    return FeatureRegistry(FEATURES)

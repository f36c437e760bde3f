"""Feature registry — Baseline status of known web-platform features."""

from baselinebuddy.registry.models import (
    BaselineStatus,
    BrowserSupport,
    FeatureGroup,
    FeatureRecord,
)
from baselinebuddy.registry.registry import FeatureRegistry, load_default_registry

__all__ = [
    "BaselineStatus",
    "BrowserSupport",
    "FeatureGroup",
    "FeatureRecord",
    "FeatureRegistry",
    "load_default_registry",
]

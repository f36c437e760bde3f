"""Registry data models — immutable feature records shared across the codebase."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field


class BaselineStatus(enum.Enum):
    """Cross-browser availability tier of a web-platform feature."""

    WIDELY = "widely"
    NEWLY = "newly"
    LIMITED = False

    @classmethod
    def parse(cls, raw: str | bool) -> BaselineStatus:
        """Accept the wire value or the level name used in option files."""
        if raw is False or raw == "limited":
            return cls.LIMITED
        return cls(raw)


class FeatureGroup(enum.Enum):
    """Which part of the web platform a feature belongs to."""

    CSS = "css"
    JAVASCRIPT = "javascript"
    HTML = "html"


@dataclass(frozen=True)
class BrowserSupport:
    """Minimum supporting version per browser. Empty means no data."""

    chrome: str = ""
    chrome_android: str = ""
    edge: str = ""
    firefox: str = ""
    firefox_android: str = ""
    safari: str = ""
    safari_ios: str = ""

    def to_dict(self) -> dict[str, str]:
        return {k: v for k, v in asdict(self).items() if v}


@dataclass(frozen=True)
class FeatureRecord:
    """A known web-platform feature and its Baseline status."""

    id: str
    name: str
    description: str
    group: FeatureGroup
    status: BaselineStatus
    support: BrowserSupport = field(default_factory=BrowserSupport)
    baseline_low_date: str = ""
    baseline_high_date: str = ""
    compat_features: tuple[str, ...] = ()
    spec_url: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.status, BaselineStatus):
            raise TypeError(
                f"Feature {self.id!r} needs a BaselineStatus, got {self.status!r}"
            )

"""Scan options, glob translation, and YAML option profiles.

Glob support is a simplified translation, not a full glob engine:
``**`` matches anything including ``/`` (``**/`` may also match no
directory at all), ``*`` matches anything except ``/``, and every other
character is literal. ``?``, bracket classes and brace expansion are
rejected.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from baselinebuddy.errors import ConfigError, PatternError
from baselinebuddy.registry.models import BaselineStatus

DEFAULT_INCLUDE_PATTERNS: tuple[str, ...] = (
    "**/*.css",
    "**/*.js",
    "**/*.jsx",
    "**/*.ts",
    "**/*.tsx",
    "**/*.html",
)

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/out/**",
)

OUTPUT_FORMATS = ("text", "json", "html")

_UNSUPPORTED_GLOB_CHARS = frozenset("?[]{}")

# Higher means more worth reporting
_CONCERN = {
    BaselineStatus.WIDELY: 0,
    BaselineStatus.NEWLY: 1,
    BaselineStatus.LIMITED: 2,
}


def translate_glob(pattern: str) -> re.Pattern[str]:
    """Compile a simplified glob into a regex matched against POSIX paths."""
    if not pattern:
        raise PatternError("Empty glob pattern")
    bad = _UNSUPPORTED_GLOB_CHARS.intersection(pattern)
    if bad:
        raise PatternError(
            f"Unsupported glob syntax {''.join(sorted(bad))!r} in {pattern!r}"
        )
    if "***" in pattern:
        raise PatternError(f"Malformed glob {pattern!r}")

    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts))


def _pruned_dir_glob(pattern: str) -> str:
    """Directory part of patterns shaped like ``<dir>/**``, else ''.

    Every file below a directory matching that part is excluded, so the
    walk can skip the directory outright.
    """
    if pattern.endswith("/**"):
        return pattern[:-3]
    return ""


@dataclass(frozen=True)
class ScanOptions:
    """What to scan and what to report. Validated at construction."""

    include_patterns: tuple[str, ...] = DEFAULT_INCLUDE_PATTERNS
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    baseline_level: BaselineStatus = BaselineStatus.WIDELY
    enable_ai: bool = False
    output_format: str = "text"
    verbose: bool = False
    workers: int = 1
    max_files: int = 0
    max_depth: int = 0
    _include: tuple[re.Pattern[str], ...] = field(
        default=(), init=False, repr=False, compare=False
    )
    _exclude: tuple[re.Pattern[str], ...] = field(
        default=(), init=False, repr=False, compare=False
    )
    _prune: tuple[re.Pattern[str], ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        include = _as_patterns(self.include_patterns)
        exclude = _as_patterns(self.exclude_patterns)
        object.__setattr__(self, "include_patterns", include)
        object.__setattr__(self, "exclude_patterns", exclude)
        object.__setattr__(self, "_include", tuple(translate_glob(p) for p in include))
        object.__setattr__(self, "_exclude", tuple(translate_glob(p) for p in exclude))
        object.__setattr__(
            self,
            "_prune",
            tuple(translate_glob(d) for d in map(_pruned_dir_glob, exclude) if d),
        )

        if not isinstance(self.baseline_level, BaselineStatus):
            try:
                level = BaselineStatus.parse(self.baseline_level)
            except ValueError:
                raise ConfigError(
                    f"Unknown baseline level: {self.baseline_level!r}"
                ) from None
            object.__setattr__(self, "baseline_level", level)

        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"Unknown output format: {self.output_format!r}")
        if self.workers < 1:
            raise ConfigError("workers must be at least 1")
        if self.max_files < 0 or self.max_depth < 0:
            raise ConfigError("max_files and max_depth must not be negative")

    def is_dir_excluded(self, relative_dir: str) -> bool:
        """Whether every file under this directory is excluded."""
        return any(p.fullmatch(relative_dir) for p in self._prune)

    def is_included(self, relative_path: str) -> bool:
        return any(p.fullmatch(relative_path) for p in self._include)

    def is_excluded(self, relative_path: str) -> bool:
        return any(p.fullmatch(relative_path) for p in self._exclude)

    def should_scan(self, relative_path: str) -> bool:
        """Include must match and exclude must not; exclude always wins."""
        return self.is_included(relative_path) and not self.is_excluded(
            relative_path
        )

    def reports(self, status: BaselineStatus) -> bool:
        """Whether an issue of this status clears the baseline_level floor."""
        return _CONCERN[status] >= _CONCERN[self.baseline_level]


def _as_patterns(patterns: Sequence[str] | str) -> tuple[str, ...]:
    if isinstance(patterns, str):
        patterns = (patterns,)
    return tuple(patterns)


# -- YAML option profiles ---------------------------------------------------

_OPTION_KEYS = {
    "include": "include_patterns",
    "exclude": "exclude_patterns",
    "baseline_level": "baseline_level",
    "enable_ai": "enable_ai",
    "output_format": "output_format",
    "verbose": "verbose",
    "workers": "workers",
    "max_files": "max_files",
    "max_depth": "max_depth",
}
_PROFILE_KEYS = {"name", "description", "inherit", "fail_on_error", "fail_on_warning"}


@dataclass(frozen=True)
class ScanProfile:
    """Scan options plus the pass/fail policy used by CI runs."""

    name: str = "default"
    options: ScanOptions = field(default_factory=ScanOptions)
    fail_on_error: bool = True
    fail_on_warning: bool = False
    description: str = ""


def load_profile(path: str | Path) -> ScanProfile:
    """Load a profile from a YAML file, resolving ``inherit`` chains."""
    data = _load_raw(Path(path), resolved=set())
    return _build_profile(data)


def load_profile_from_string(text: str, base_dir: str | Path = ".") -> ScanProfile:
    """Parse a YAML string into a profile. Relative inherits use base_dir."""
    data = _parse_yaml(text, source="<string>")
    data = _merge_inherited(data, Path(base_dir), resolved=set())
    return _build_profile(data)


def _parse_yaml(text: str, source: str) -> dict:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {source}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Option file {source} must be a mapping")
    return data


def _load_raw(path: Path, resolved: set[Path]) -> dict:
    path = path.resolve()
    if path in resolved:
        raise ConfigError(f"Circular option inheritance detected: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read option file {path}: {e}") from e
    data = _parse_yaml(text, source=str(path))

    # Only the current chain counts; shared bases may be inherited twice
    resolved.add(path)
    try:
        return _merge_inherited(data, path.parent, resolved)
    finally:
        resolved.discard(path)


def _merge_inherited(data: dict, base_dir: Path, resolved: set[Path]) -> dict:
    inherit = data.get("inherit", [])
    if isinstance(inherit, str):
        inherit = [inherit]

    merged: dict = {}
    for ref in inherit:
        ref_path = Path(ref)
        if not ref_path.is_absolute():
            ref_path = base_dir / ref_path
        merged.update(_load_raw(ref_path, resolved))

    # Own keys override inherited ones
    merged.update({k: v for k, v in data.items() if k != "inherit"})
    return merged


def _flag(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _build_profile(data: dict) -> ScanProfile:
    unknown = set(data) - set(_OPTION_KEYS) - _PROFILE_KEYS
    if unknown:
        raise ConfigError(f"Unknown option keys: {', '.join(sorted(unknown))}")

    kwargs = {
        field_name: data[key] for key, field_name in _OPTION_KEYS.items() if key in data
    }
    try:
        options = ScanOptions(**kwargs)
    except TypeError as e:
        raise ConfigError(f"Invalid option value: {e}") from e

    return ScanProfile(
        name=str(data.get("name", "default")),
        options=options,
        fail_on_error=_flag(data, "fail_on_error", True),
        fail_on_warning=_flag(data, "fail_on_warning", False),
        description=str(data.get("description", "")),
    )

"""Scanner data models — detections, issues, and scan results."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import TYPE_CHECKING

from baselinebuddy.registry.models import BaselineStatus, FeatureGroup

if TYPE_CHECKING:
    from baselinebuddy.scanner.signatures import Signature


class Severity(enum.Enum):
    """Issue severity level, derived from Baseline status."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Detection:
    """A signature that fired on one line of a file."""

    feature_id: str
    line: int
    column: int = 1
    css_property: str = ""
    value: str = ""
    signature: Signature | None = field(default=None, compare=False, repr=False)


@dataclass
class Issue:
    """One detected, noteworthy use of a web-platform feature."""

    type: FeatureGroup
    feature_id: str
    feature: str
    status: BaselineStatus
    severity: Severity
    message: str
    line: int
    column: int = 1
    file: str = ""
    css_property: str = ""
    value: str = ""
    suggestion: str = ""
    auto_fix: str = ""

    @property
    def file_type(self) -> str:
        """Lower-case extension of the issue's file, without the dot."""
        return PurePath(self.file).suffix.lower().lstrip(".")

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "featureId": self.feature_id,
            "feature": self.feature,
            "property": self.css_property or None,
            "value": self.value or None,
            "status": self.status.value,
            "severity": self.severity.value,
            "message": self.message,
            "suggestion": self.suggestion or None,
            "autoFix": self.auto_fix or None,
            "line": self.line,
            "column": self.column,
            "file": self.file,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Issue:
        return cls(
            type=FeatureGroup(data["type"]),
            feature_id=data["featureId"],
            feature=data.get("feature", ""),
            status=BaselineStatus(data["status"]),
            severity=Severity(data["severity"]),
            message=data["message"],
            line=int(data["line"]),
            column=int(data.get("column", 1)),
            file=data.get("file", ""),
            css_property=data.get("property") or "",
            value=data.get("value") or "",
            suggestion=data.get("suggestion") or "",
            auto_fix=data.get("autoFix") or "",
        )


@dataclass(frozen=True)
class ScanSummary:
    """Counts derived from a complete issue list."""

    total: int = 0
    errors: int = 0
    warnings: int = 0
    info: int = 0
    baseline_safe: int = 0
    baseline_newly: int = 0
    baseline_widely: int = 0

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> ScanSummary:
        """Reduce the full issue list in one pass.

        baseline_safe and baseline_widely count the same thing; both are
        kept for report compatibility.
        """
        counts = dict.fromkeys(
            (
                "total",
                "errors",
                "warnings",
                "info",
                "baseline_safe",
                "baseline_newly",
                "baseline_widely",
            ),
            0,
        )
        for issue in issues:
            counts["total"] += 1
            if issue.severity is Severity.ERROR:
                counts["errors"] += 1
            elif issue.severity is Severity.WARNING:
                counts["warnings"] += 1
            else:
                counts["info"] += 1
            if issue.status is BaselineStatus.WIDELY:
                counts["baseline_safe"] += 1
            if issue.status is BaselineStatus.NEWLY:
                counts["baseline_newly"] += 1
            if issue.status is BaselineStatus.WIDELY:
                counts["baseline_widely"] += 1
        return cls(**counts)

    @property
    def baseline_limited(self) -> int:
        return self.total - self.baseline_widely - self.baseline_newly

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info,
            "baselineSafe": self.baseline_safe,
            "baselineNewly": self.baseline_newly,
            "baselineWidely": self.baseline_widely,
        }


@dataclass(frozen=True)
class FileStats:
    """How many files were analyzed, and how many produced issues."""

    scanned: int = 0
    with_issues: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"scanned": self.scanned, "withIssues": self.with_issues}


@dataclass
class ScanResult:
    """Aggregate result of one scan invocation."""

    issues: list[Issue] = field(default_factory=list)
    summary: ScanSummary = field(default_factory=ScanSummary)
    files: FileStats = field(default_factory=FileStats)
    root: str = field(default="", compare=False)
    duration: float = field(default=0.0, compare=False)

    @classmethod
    def build(
        cls,
        issues: list[Issue],
        scanned: int,
        with_issues: int,
        root: str = "",
        duration: float = 0.0,
    ) -> ScanResult:
        return cls(
            issues=issues,
            summary=ScanSummary.from_issues(issues),
            files=FileStats(scanned=scanned, with_issues=with_issues),
            root=root,
            duration=duration,
        )

    def to_dict(self) -> dict:
        """Canonical JSON shape consumed by reporters and integrations."""
        return {
            "issues": [i.to_dict() for i in self.issues],
            "summary": self.summary.to_dict(),
            "files": self.files.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> ScanResult:
        summary = data.get("summary", {})
        files = data.get("files", {})
        return cls(
            issues=[Issue.from_dict(i) for i in data.get("issues", [])],
            summary=ScanSummary(
                total=summary.get("total", 0),
                errors=summary.get("errors", 0),
                warnings=summary.get("warnings", 0),
                info=summary.get("info", 0),
                baseline_safe=summary.get("baselineSafe", 0),
                baseline_newly=summary.get("baselineNewly", 0),
                baseline_widely=summary.get("baselineWidely", 0),
            ),
            files=FileStats(
                scanned=files.get("scanned", 0),
                with_issues=files.get("withIssues", 0),
            ),
        )

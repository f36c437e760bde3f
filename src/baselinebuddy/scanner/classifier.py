"""Issue classifier — turns detections into Issues with derived severity."""

from __future__ import annotations

from collections.abc import Iterable

from baselinebuddy.registry.models import BaselineStatus, FeatureGroup
from baselinebuddy.registry.registry import FeatureRegistry
from baselinebuddy.scanner.models import Detection, Issue, Severity

_SEVERITY = {
    BaselineStatus.LIMITED: Severity.ERROR,
    BaselineStatus.NEWLY: Severity.WARNING,
    BaselineStatus.WIDELY: Severity.INFO,
}

_STATUS_PHRASES = {
    BaselineStatus.LIMITED: "not Baseline. Limited browser support",
    BaselineStatus.NEWLY: "Baseline Newly available. Use with caution",
    BaselineStatus.WIDELY: "Baseline Widely available. Safe to use",
}

_SUGGESTIONS = {
    Severity.ERROR: (
        "Consider using a fallback or alternative approach "
        "for better browser compatibility."
    ),
    Severity.WARNING: (
        "This feature is newly available. "
        "Consider adding a fallback for older browsers."
    ),
    Severity.INFO: "This feature is widely supported and safe to use.",
}


def severity_for(status: BaselineStatus) -> Severity:
    return _SEVERITY[status]


def display_name(feature: str, css_property: str = "", value: str = "") -> str:
    if css_property:
        return f"{css_property}: {value}" if value else css_property
    return feature


def build_message(
    feature: str,
    status: BaselineStatus,
    css_property: str = "",
    value: str = "",
) -> str:
    return f"{display_name(feature, css_property, value)} is {_STATUS_PHRASES[status]}."


def build_suggestion(severity: Severity) -> str:
    return _SUGGESTIONS[severity]


class IssueClassifier:
    """Creates Issues for detections of features known to the registry."""

    def __init__(self, registry: FeatureRegistry) -> None:
        self._registry = registry

    def create_issue(
        self,
        issue_type: FeatureGroup,
        feature_id: str,
        status: BaselineStatus | None,
        *,
        feature: str = "",
        css_property: str = "",
        value: str = "",
        line: int = 1,
        column: int = 1,
        file: str = "",
    ) -> Issue | None:
        """Build an Issue, or None when the status is unknown."""
        if status is None:
            return None

        if not feature:
            record = self._registry.get(feature_id)
            feature = record.name if record else feature_id

        severity = severity_for(status)
        return Issue(
            type=issue_type,
            feature_id=feature_id,
            feature=feature,
            status=status,
            severity=severity,
            message=build_message(feature, status, css_property, value),
            suggestion=build_suggestion(severity),
            line=line,
            column=column,
            file=file,
            css_property=css_property,
            value=value,
        )

    def classify(self, detections: Iterable[Detection], file: str) -> list[Issue]:
        """Map detector output to Issues, skipping unknown features."""
        issues: list[Issue] = []
        for detection in detections:
            record = self._registry.get(detection.feature_id)
            if record is None:
                continue
            issue = self.create_issue(
                record.group,
                record.id,
                record.status,
                feature=record.name,
                css_property=detection.css_property,
                value=detection.value,
                line=detection.line,
                column=detection.column,
                file=file,
            )
            if issue is not None:
                issues.append(issue)
        return issues

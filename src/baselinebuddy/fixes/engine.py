"""Auto-fix engine — suggestions, fix selection, and line-local fix application."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import PurePath

from baselinebuddy.fixes.database import (
    FixDatabase,
    feature_key,
    generic_suggestion,
    load_default_fix_database,
)
from baselinebuddy.fixes.models import FixProposal, FixSuggestion, Suggestion
from baselinebuddy.registry.models import BaselineStatus
from baselinebuddy.registry.registry import FeatureRegistry, load_default_registry
from baselinebuddy.scanner.classifier import IssueClassifier
from baselinebuddy.scanner.detector import SignatureDetector
from baselinebuddy.scanner.models import Issue
from baselinebuddy.scanner.signatures import SIGNATURES, Signature

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 0.7

_BROWSER_LABELS = (
    ("chrome", "Chrome"),
    ("firefox", "Firefox"),
    ("safari", "Safari"),
    ("edge", "Edge"),
)


class AutoFixEngine:
    """Looks up, ranks and applies fixes for detected issues."""

    def __init__(
        self,
        database: FixDatabase | None = None,
        registry: FeatureRegistry | None = None,
        signatures: Sequence[Signature] | None = None,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    ) -> None:
        if not 0.0 <= confidence_threshold <= 1.0:
            raise ValueError("confidence_threshold must be within [0, 1]")
        self._registry = (
            registry if registry is not None else load_default_registry()
        )
        self._signatures = tuple(signatures) if signatures is not None else SIGNATURES
        if database is None:
            if registry is None and signatures is None:
                database = load_default_fix_database()
            else:
                database = FixDatabase.build(self._registry, self._signatures)
        self._database = database
        self._detector = SignatureDetector(self._signatures)
        self._classifier = IssueClassifier(self._registry)
        self.confidence_threshold = confidence_threshold

    @property
    def database(self) -> FixDatabase:
        return self._database

    @staticmethod
    def feature_key(name: str) -> str:
        return feature_key(name)

    def generate_suggestion(self, issue: Issue) -> Suggestion:
        """Curated guidance for the issue's feature, else a generic suggestion."""
        suggestion = self._database.suggestion(feature_key(issue.feature))
        if suggestion is None and issue.feature_id:
            suggestion = self._database.suggestion(issue.feature_id)
        if suggestion is None:
            suggestion = generic_suggestion(issue.feature, issue.type, issue.status)
        return suggestion

    def get_available_fixes(
        self, feature: str, file_type: str
    ) -> tuple[FixSuggestion, ...]:
        return self._database.fixes(feature_key(feature), file_type)

    def fixes_for(
        self, issue: Issue, file_type: str | None = None
    ) -> tuple[FixSuggestion, ...]:
        """Candidates for an issue, keyed by its feature id or display name."""
        file_type = file_type or issue.file_type
        candidates = self._database.fixes(issue.feature_id, file_type)
        if not candidates:
            candidates = self.get_available_fixes(issue.feature, file_type)
        return candidates

    @staticmethod
    def select_best_fix(
        candidates: Sequence[FixSuggestion],
    ) -> FixSuggestion | None:
        """Widely-available fixes first, then confidence, then registration order."""
        if not candidates:
            return None
        # min() keeps the first of equal keys
        return min(
            candidates,
            key=lambda f: (f.status_tier is not BaselineStatus.WIDELY, -f.confidence),
        )

    @staticmethod
    def apply_fix(source: str, fix: FixSuggestion, line: int) -> str:
        """Replace fix.original_code on one 1-based line.

        The source comes back untouched when the line is out of range or no
        longer contains the original code.
        """
        lines = source.split("\n")
        if not fix.original_code or not 1 <= line <= len(lines):
            return source
        target = lines[line - 1]
        if fix.original_code not in target:
            return source
        lines[line - 1] = target.replace(fix.original_code, fix.fixed_code, 1)
        return "\n".join(lines)

    @staticmethod
    def get_fix_explanation(fix: FixSuggestion) -> str:
        support = fix.browser_support.to_dict()
        if fix.status_tier is BaselineStatus.LIMITED:
            status = "LIMITED"
        else:
            status = fix.status_tier.value.upper()
        lines = [
            f"Original: {fix.original_code}",
            f"Fixed: {fix.fixed_code}",
            "",
            f"Baseline status: {status}",
            f"Confidence: {round(fix.confidence * 100)}%",
            "",
            "Explanation:",
            fix.explanation,
        ]
        if fix.reasoning:
            lines += ["", "Reasoning:", fix.reasoning]
        lines += ["", "Browser support:"]
        for key, label in _BROWSER_LABELS:
            lines.append(f"  {label}: {support.get(key, 'unknown')}")
        if fix.alternatives:
            lines += ["", "Alternatives:"]
            lines += [f"  - {alt}" for alt in fix.alternatives]
        return "\n".join(lines)

    def analyze_and_fix(self, code: str, file_path: str) -> list[FixProposal]:
        """Best fix per detected issue, keeping only confident ones."""
        file_type = PurePath(file_path).suffix.lower().lstrip(".")
        detections = self._detector.detect(code, file_path)
        issues = self._classifier.classify(detections, file_path)

        proposals: list[FixProposal] = []
        for issue in issues:
            best = self.select_best_fix(self.fixes_for(issue, file_type))
            if best is None:
                continue
            if best.confidence < self.confidence_threshold:
                logger.debug(
                    "Dropping %s for %s:%d (confidence %.2f)",
                    best.id,
                    file_path,
                    issue.line,
                    best.confidence,
                )
                continue
            proposals.append(FixProposal(issue=issue, fix=best))
        return proposals

    def get_fix_statistics(self) -> dict:
        stats = self._database.statistics()
        stats["confidence_threshold"] = self.confidence_threshold
        return stats

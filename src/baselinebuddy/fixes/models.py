"""Auto-fix data models — fix candidates, suggestions, and proposals."""

from __future__ import annotations

from dataclasses import dataclass, field

from baselinebuddy.registry.models import BaselineStatus, BrowserSupport, FeatureGroup
from baselinebuddy.scanner.models import Issue, Severity


@dataclass(frozen=True)
class FixSuggestion:
    """A concrete, verbatim replacement that makes a line more compatible."""

    id: str
    original_code: str
    fixed_code: str
    explanation: str
    confidence: float
    status_tier: BaselineStatus
    category: FeatureGroup
    severity: Severity
    browser_support: BrowserSupport = field(default_factory=BrowserSupport)
    alternatives: tuple[str, ...] = ()
    reasoning: str = ""

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Fix {self.id!r} confidence must be within [0, 1]")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "originalCode": self.original_code,
            "fixedCode": self.fixed_code,
            "explanation": self.explanation,
            "confidence": self.confidence,
            "statusTier": self.status_tier.value,
            "browserSupport": self.browser_support.to_dict(),
            "alternatives": list(self.alternatives),
            "reasoning": self.reasoning,
            "category": self.category.value,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class Suggestion:
    """Human guidance for an issue: explanation, alternatives, and a snippet."""

    explanation: str
    alternatives: tuple[str, ...]
    auto_fix: str
    learning_url: str
    confidence: float
    reasoning: str

    def to_dict(self) -> dict:
        return {
            "explanation": self.explanation,
            "alternatives": list(self.alternatives),
            "autoFix": self.auto_fix,
            "learningUrl": self.learning_url,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class FixProposal:
    """The fix selected for one issue."""

    issue: Issue
    fix: FixSuggestion

    def to_dict(self) -> dict:
        return {"issue": self.issue.to_dict(), "fix": self.fix.to_dict()}

"""Suggestions and auto-fixes for detected Baseline issues."""

from baselinebuddy.fixes.database import FixDatabase, load_default_fix_database
from baselinebuddy.fixes.engine import AutoFixEngine
from baselinebuddy.fixes.models import FixProposal, FixSuggestion, Suggestion

__all__ = [
    "AutoFixEngine",
    "FixDatabase",
    "FixProposal",
    "FixSuggestion",
    "Suggestion",
    "load_default_fix_database",
]

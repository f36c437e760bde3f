"""Tests for the fix database and auto-fix engine."""

from __future__ import annotations

import pytest

from baselinebuddy.fixes.database import (
    GENERIC_CONFIDENCE,
    FixDatabase,
    feature_key,
    load_default_fix_database,
)
from baselinebuddy.fixes.engine import AutoFixEngine
from baselinebuddy.fixes.models import FixSuggestion
from baselinebuddy.registry.models import BaselineStatus, FeatureGroup
from baselinebuddy.registry.registry import FeatureRegistry, load_default_registry
from baselinebuddy.scanner.models import Issue, Severity


def _fix(fix_id: str, tier: BaselineStatus, confidence: float, **kw) -> FixSuggestion:
    return FixSuggestion(
        id=fix_id,
        original_code=kw.get("original", "old"),
        fixed_code=kw.get("fixed", "new"),
        explanation="",
        confidence=confidence,
        status_tier=tier,
        category=FeatureGroup.CSS,
        severity=Severity.INFO,
    )


def _issue(feature_id: str, feature: str, line: int = 1, file: str = "a.css") -> Issue:
    record = load_default_registry().get(feature_id)
    return Issue(
        type=record.group if record else FeatureGroup.CSS,
        feature_id=feature_id,
        feature=feature,
        status=record.status if record else BaselineStatus.LIMITED,
        severity=Severity.ERROR,
        message="",
        line=line,
        file=file,
    )


@pytest.fixture
def fix_engine() -> AutoFixEngine:
    return AutoFixEngine()


class TestSelectBestFix:
    def test_tier_beats_confidence(self):
        a = _fix("a", BaselineStatus.WIDELY, 0.6)
        b = _fix("b", BaselineStatus.NEWLY, 0.95)
        assert AutoFixEngine.select_best_fix([a, b]) is a
        assert AutoFixEngine.select_best_fix([b, a]) is a

    def test_confidence_within_tier(self):
        low = _fix("low", BaselineStatus.NEWLY, 0.7)
        high = _fix("high", BaselineStatus.NEWLY, 0.8)
        limited = _fix("limited", BaselineStatus.LIMITED, 0.9)
        assert AutoFixEngine.select_best_fix([low, limited, high]) is limited

    def test_first_registered_wins_ties(self):
        first = _fix("first", BaselineStatus.WIDELY, 0.8)
        second = _fix("second", BaselineStatus.WIDELY, 0.8)
        assert AutoFixEngine.select_best_fix([first, second]) is first

    def test_empty(self):
        assert AutoFixEngine.select_best_fix([]) is None

    def test_confidence_must_be_in_range(self):
        with pytest.raises(ValueError):
            _fix("bad", BaselineStatus.WIDELY, 1.5)


class TestApplyFix:
    SOURCE = "a { word-break: x; }\nb { word-break: x; word-break: x; }\nc {}\n"

    def test_replaces_on_target_line_only(self):
        fix = _fix("f", BaselineStatus.WIDELY, 0.9, original="word-break: x", fixed="Y")
        out = AutoFixEngine.apply_fix(self.SOURCE, fix, 2)
        assert out == "a { word-break: x; }\nb { Y; word-break: x; }\nc {}\n"

    def test_missing_substring_leaves_source_unchanged(self):
        fix = _fix("f", BaselineStatus.WIDELY, 0.9, original="word-break: x", fixed="Y")
        assert AutoFixEngine.apply_fix(self.SOURCE, fix, 3) == self.SOURCE

    @pytest.mark.parametrize("line", [0, -1, 4, 100])
    def test_out_of_range_line_is_ignored(self, line):
        fix = _fix("f", BaselineStatus.WIDELY, 0.9, original="word-break: x", fixed="Y")
        assert AutoFixEngine.apply_fix(self.SOURCE, fix, line) == self.SOURCE

    def test_preserves_line_endings(self):
        fix = _fix("f", BaselineStatus.WIDELY, 0.9, original="??", fixed="||")
        assert AutoFixEngine.apply_fix("a ?? b\r\nc\r\n", fix, 1) == "a || b\r\nc\r\n"

    def test_line_counting_ignores_unicode_separators(self):
        fix = _fix("f", BaselineStatus.WIDELY, 0.9, original="??", fixed="||")
        source = 'a = "x\u2028y";\nb = c ?? d;\n'
        expected = 'a = "x\u2028y";\nb = c || d;\n'
        assert AutoFixEngine.apply_fix(source, fix, 2) == expected


class TestFeatureKey:
    def test_aliases(self):
        assert feature_key("CSS Grid") == "grid"
        assert feature_key(":has()") == "has-selector"
        assert feature_key("<dialog>") == "dialog-element"

    def test_kebab_fallback(self):
        assert feature_key("Some New  Thing") == "some-new-thing"


class TestSuggestions:
    def test_curated(self, fix_engine):
        suggestion = fix_engine.generate_suggestion(_issue("grid", "CSS Grid"))
        assert suggestion.confidence == 0.95
        assert "Flexbox" in suggestion.alternatives[0]
        assert suggestion.learning_url.startswith("https://developer.mozilla.org/")

    def test_falls_back_to_feature_id(self, fix_engine):
        issue = _issue("subgrid", "Renamed Subgrid")
        suggestion = fix_engine.generate_suggestion(issue)
        assert suggestion.confidence == 0.85

    def test_generic(self, fix_engine):
        suggestion = fix_engine.generate_suggestion(_issue("mystery", "Mystery API"))
        assert suggestion.confidence == GENERIC_CONFIDENCE
        assert len(suggestion.alternatives) == 3
        assert any("fallback" in a for a in suggestion.alternatives)
        assert any("detect" in a for a in suggestion.alternatives)
        assert any("progressive enhancement" in a for a in suggestion.alternatives)
        assert "limited" in suggestion.explanation


class TestFixDatabase:
    def test_curated_fix_keyed_by_feature_and_type(self):
        database = load_default_fix_database()
        fixes = database.fixes("word-break-auto-phrase", "css")
        assert [f.id for f in fixes] == ["word-break-autophrase-fix"]
        assert database.fixes("word-break-auto-phrase", ".CSS") == fixes

    def test_generic_fallback_for_uncovered_type(self):
        database = load_default_fix_database()
        (fix,) = database.fixes("grid", "css")
        assert fix.confidence == GENERIC_CONFIDENCE
        assert fix.fixed_code == (
            "/* baseline: add a fallback for CSS Grid */display: grid"
        )

    def test_generic_comment_style_follows_feature_group(self):
        database = load_default_fix_database()
        (dialog_jsx,) = database.fixes("dialog-element", "jsx")
        assert dialog_jsx.fixed_code.startswith("{/* baseline:")
        (has_html,) = database.fixes("has-selector", "html")
        assert has_html.fixed_code.startswith("/* baseline:")
        (details_htm,) = database.fixes("details-element", "htm")
        assert details_htm.id == "details-element-fix"

    def test_unknown_key(self):
        assert load_default_fix_database().fixes("nope", "css") == ()

    def test_custom_registry(self, tiny_registry, tiny_signatures):
        database = FixDatabase.build(tiny_registry, tiny_signatures, curated=())
        (fix,) = database.fixes("alpha", "css")
        assert fix.original_code == "alpha:"
        assert database.fixes("unknown", "css") == ()

    def test_empty_injected_registry_is_kept(self):
        empty = FeatureRegistry(())
        fix_engine = AutoFixEngine(registry=empty)
        assert len(fix_engine.database) == len(FixDatabase.build(empty))
        assert len(fix_engine.database) < len(load_default_fix_database())
        assert fix_engine.analyze_and_fix("a { display: grid; }", "a.css") == []

    def test_statistics(self, fix_engine):
        stats = fix_engine.get_fix_statistics()
        assert stats["total_fixes"] == len(fix_engine.database)
        assert set(stats["categories"]) == {"css", "javascript", "html"}
        assert stats["confidence_threshold"] == 0.7


class TestAnalyzeAndFix:
    def test_returns_confident_fixes(self, fix_engine):
        css = "p { word-break: auto-phrase; }"
        proposals = fix_engine.analyze_and_fix(css, "a.css")
        assert len(proposals) == 1
        assert proposals[0].fix.fixed_code == "word-break: break-word"
        assert proposals[0].issue.feature_id == "word-break-auto-phrase"

    def test_low_confidence_fixes_are_withheld(self, fix_engine):
        assert fix_engine.analyze_and_fix("a { display: grid; }", "a.css") == []
        permissive = AutoFixEngine(confidence_threshold=0.5)
        assert len(permissive.analyze_and_fix("a { display: grid; }", "a.css")) == 1

    def test_fix_applies_to_its_issue_line(self, fix_engine):
        source = "const a = 1;\nconst b = c ?? d;\n"
        (proposal,) = fix_engine.analyze_and_fix(source, "app.js")
        patched = fix_engine.apply_fix(source, proposal.fix, proposal.issue.line)
        assert patched == "const a = 1;\nconst b = c || d;\n"

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            AutoFixEngine(confidence_threshold=2)


class TestExplanation:
    def test_contains_key_facts(self):
        fix = load_default_fix_database().fixes("word-break-auto-phrase", "css")[0]
        text = AutoFixEngine.get_fix_explanation(fix)
        assert "Baseline status: WIDELY" in text
        assert "Confidence: 95%" in text
        assert "Chrome: 1" in text
        assert "  - overflow-wrap: break-word" in text

    def test_missing_browser_data(self):
        text = AutoFixEngine.get_fix_explanation(
            _fix("f", BaselineStatus.LIMITED, 0.5)
        )
        assert "Baseline status: LIMITED" in text
        assert "Safari: unknown" in text

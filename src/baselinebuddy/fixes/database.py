"""Curated fix and suggestion tables, plus the generic fallback generator."""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from baselinebuddy.fixes.models import FixSuggestion, Suggestion
from baselinebuddy.registry.models import (
    BaselineStatus,
    BrowserSupport,
    FeatureGroup,
    FeatureRecord,
)
from baselinebuddy.registry.registry import FeatureRegistry
from baselinebuddy.scanner.classifier import severity_for
from baselinebuddy.scanner.models import Severity
from baselinebuddy.scanner.signatures import SIGNATURES, Signature

GENERIC_CONFIDENCE = 0.6

GENERIC_ALTERNATIVES: tuple[str, ...] = (
    "Add a fallback for browsers without support",
    "Feature-detect before using it",
    "Use progressive enhancement so the page works without it",
)

MDN_FALLBACK_URL = "https://developer.mozilla.org/en-US/docs/Web"

CATEGORY_FILE_TYPES: dict[FeatureGroup, tuple[str, ...]] = {
    FeatureGroup.CSS: ("css",),
    FeatureGroup.JAVASCRIPT: ("js", "jsx", "ts", "tsx", "mjs", "cjs"),
    FeatureGroup.HTML: ("html", "htm"),
}

# Display names and detection tokens that map onto a feature key
FEATURE_ALIASES: dict[str, str] = {
    "CSS Grid": "grid",
    "CSS Subgrid": "subgrid",
    "subgrid": "subgrid",
    "Container Queries": "container-queries",
    "@container": "container-queries",
    "word-break: auto-phrase": "word-break-auto-phrase",
    ":has() selector": "has-selector",
    ":has()": "has-selector",
    "CSS Nesting": "css-nesting",
    "View Transitions": "view-transitions",
    "view-transition-name": "view-transitions",
    "Flexbox": "flexbox",
    "CSS Custom Properties": "custom-properties",
    "HTML Dialog Element": "dialog-element",
    "<dialog>": "dialog-element",
    "HTML Details Element": "details-element",
    "<details>": "details-element",
    "Array.prototype.toSorted": "array-tosorted",
    "Nullish coalescing": "nullish-coalescing",
    "Optional chaining": "optional-chaining",
    "Async functions": "async-functions",
    "structuredClone": "structured-clone",
}


def feature_key(name: str) -> str:
    """Alias lookup, falling back to the lowercase-kebab form of the name."""
    alias = FEATURE_ALIASES.get(name)
    if alias:
        return alias
    return re.sub(r"\s+", "-", name.strip().lower())


SUGGESTIONS: dict[str, Suggestion] = {
    "grid": Suggestion(
        explanation=(
            "CSS Grid is a powerful layout system that provides "
            "two-dimensional grid-based layouts."
        ),
        alternatives=(
            "Use Flexbox for one-dimensional layouts",
            "Use CSS Float for simple layouts",
            "Use CSS Table for table-like layouts",
        ),
        auto_fix="/* CSS Grid is widely supported and safe to use */",
        learning_url="https://developer.mozilla.org/en-US/docs/Web/CSS/CSS_Grid_Layout",
        confidence=0.95,
        reasoning=(
            "CSS Grid has been widely available since 2017 and is supported "
            "by all modern browsers."
        ),
    ),
    "subgrid": Suggestion(
        explanation=(
            "CSS Subgrid allows grid items to inherit the grid definition "
            "of their parent grid container."
        ),
        alternatives=(
            "Use explicit grid definitions for each grid item",
            "Use CSS Grid with manual column/row definitions",
            "Use Flexbox as a fallback",
        ),
        auto_fix=(
            "/* Consider using explicit grid definitions as fallback */\n"
            ".grid-item {\n"
            "  display: grid;\n"
            "  grid-template-columns: repeat(3, 1fr);\n"
            "}"
        ),
        learning_url=(
            "https://developer.mozilla.org/en-US/docs/Web/CSS/CSS_Grid_Layout/Subgrid"
        ),
        confidence=0.85,
        reasoning=(
            "CSS Subgrid is newly available and may need fallbacks "
            "for older browsers."
        ),
    ),
    "container-queries": Suggestion(
        explanation=(
            "Container Queries allow you to apply styles based on the size "
            "of a containing element."
        ),
        alternatives=(
            "Use Media Queries for viewport-based styling",
            "Use JavaScript to detect container size",
            "Use CSS Custom Properties with JavaScript",
        ),
        auto_fix=(
            "/* Use media queries as fallback */\n"
            "@media (min-width: 300px) {\n"
            "  .card {\n"
            "    /* styles */\n"
            "  }\n"
            "}"
        ),
        learning_url=(
            "https://developer.mozilla.org/en-US/docs/Web/CSS/CSS_Container_Queries"
        ),
        confidence=0.80,
        reasoning=(
            "Container Queries are newly available and should have "
            "media query fallbacks."
        ),
    ),
    "word-break-auto-phrase": Suggestion(
        explanation=(
            "word-break: auto-phrase is a new value that provides better "
            "text breaking for phrases."
        ),
        alternatives=(
            "Use word-break: break-word for better compatibility",
            "Use word-break: break-all for aggressive breaking",
            "Use overflow-wrap: break-word as fallback",
        ),
        auto_fix="word-break: break-word; /* More compatible alternative */",
        learning_url="https://developer.mozilla.org/en-US/docs/Web/CSS/word-break",
        confidence=0.90,
        reasoning=(
            "word-break: auto-phrase has limited browser support and should "
            "be replaced with a more compatible alternative."
        ),
    ),
    "has-selector": Suggestion(
        explanation=(
            "The :has() pseudo-class allows you to select elements based "
            "on their descendants."
        ),
        alternatives=(
            "Use JavaScript querySelector with :has() support detection",
            "Use CSS classes with JavaScript toggling",
            "Use CSS :not() with complex selectors",
        ),
        auto_fix=(
            "/* Use JavaScript as fallback */\n"
            'if (CSS.supports("selector(:has(*))")) {\n'
            "  /* CSS :has() is supported */\n"
            "} else {\n"
            "  /* Use JavaScript alternative */\n"
            "}"
        ),
        learning_url="https://developer.mozilla.org/en-US/docs/Web/CSS/:has",
        confidence=0.75,
        reasoning=(
            ":has() selector is newly available and should have "
            "JavaScript fallbacks."
        ),
    ),
    "css-nesting": Suggestion(
        explanation=(
            "CSS Nesting allows you to nest CSS rules inside other rules, "
            "similar to Sass."
        ),
        alternatives=(
            "Use CSS preprocessors like Sass or Less",
            "Use CSS-in-JS solutions",
            "Use separate CSS classes",
        ),
        auto_fix=(
            "/* Use separate classes instead of nesting */\n"
            ".parent {\n"
            "  /* parent styles */\n"
            "}\n"
            ".parent .child {\n"
            "  /* child styles */\n"
            "}"
        ),
        learning_url=(
            "https://developer.mozilla.org/en-US/docs/Web/CSS/CSS_Nesting_Module"
        ),
        confidence=0.70,
        reasoning=(
            "CSS Nesting is newly available and may need preprocessor fallbacks."
        ),
    ),
    "view-transitions": Suggestion(
        explanation=(
            "View Transitions animate between DOM states or pages with "
            "browser-generated snapshots."
        ),
        alternatives=(
            "Check document.startViewTransition before calling it",
            "Use CSS transitions or the Web Animations API",
            "Skip the animation where unsupported",
        ),
        auto_fix=(
            "if (document.startViewTransition) {\n"
            "  document.startViewTransition(update);\n"
            "} else {\n"
            "  update();\n"
            "}"
        ),
        learning_url=(
            "https://developer.mozilla.org/en-US/docs/Web/API/View_Transition_API"
        ),
        confidence=0.80,
        reasoning=(
            "View Transitions are not Baseline yet; the update must still "
            "happen when the animation is unavailable."
        ),
    ),
    "dialog-element": Suggestion(
        explanation=(
            "The HTML dialog element provides a native way to create modal dialogs."
        ),
        alternatives=(
            'Use a div with role="dialog" and ARIA attributes',
            "Use a third-party modal library",
            "Use CSS-only modal solutions",
        ),
        auto_fix=(
            '<div role="dialog" aria-modal="true" aria-labelledby="dialog-title">\n'
            '  <h2 id="dialog-title">Dialog Title</h2>\n'
            "  <!-- dialog content -->\n"
            "</div>"
        ),
        learning_url=(
            "https://developer.mozilla.org/en-US/docs/Web/HTML/Element/dialog"
        ),
        confidence=0.85,
        reasoning=(
            "HTML dialog element is newly available and should have ARIA fallbacks."
        ),
    ),
    "array-tosorted": Suggestion(
        explanation=(
            "Array.prototype.toSorted() creates a new sorted array without "
            "mutating the original."
        ),
        alternatives=(
            "Use Array.prototype.sort() with spread operator",
            "Use lodash sortBy function",
            "Use a custom sorting function",
        ),
        auto_fix=(
            "const sorted = [...array].sort((a, b) => a - b); // Non-mutating sort"
        ),
        learning_url=(
            "https://developer.mozilla.org/en-US/docs/Web/JavaScript/"
            "Reference/Global_Objects/Array/toSorted"
        ),
        confidence=0.80,
        reasoning=(
            "Array.toSorted is newly available and should have spread "
            "operator fallbacks."
        ),
    ),
}


CURATED_FIXES: tuple[tuple[str, FixSuggestion], ...] = (
    (
        "word-break-auto-phrase",
        FixSuggestion(
            id="word-break-autophrase-fix",
            original_code="word-break: auto-phrase",
            fixed_code="word-break: break-word",
            explanation=(
                "Replaced auto-phrase with break-word for full Baseline support. "
                "auto-phrase is only supported in Chromium browsers."
            ),
            confidence=0.95,
            status_tier=BaselineStatus.WIDELY,
            category=FeatureGroup.CSS,
            severity=Severity.ERROR,
            browser_support=BrowserSupport(
                chrome="1", edge="12", firefox="67", safari="3"
            ),
            alternatives=(
                "word-break: break-all",
                "word-break: keep-all",
                "overflow-wrap: break-word",
            ),
            reasoning=(
                "break-word provides better cross-browser compatibility and is "
                "Baseline Widely available."
            ),
        ),
    ),
    (
        "subgrid",
        FixSuggestion(
            id="subgrid-fix",
            original_code="subgrid",
            fixed_code="grid",
            explanation=(
                "Replaced subgrid with grid for better Baseline support. "
                "Subgrid is Baseline Newly available and may need fallbacks."
            ),
            confidence=0.85,
            status_tier=BaselineStatus.NEWLY,
            category=FeatureGroup.CSS,
            severity=Severity.WARNING,
            browser_support=BrowserSupport(
                chrome="117", edge="117", firefox="71", safari="16"
            ),
            alternatives=("display: grid", "display: flex", "display: block"),
            reasoning=(
                "Standard grid provides better browser support while subgrid "
                "offers advanced features."
            ),
        ),
    ),
    (
        "container-queries",
        FixSuggestion(
            id="container-queries-fix",
            original_code="@container",
            fixed_code="@media (min-width: 768px)",
            explanation=(
                "Replaced container queries with media queries for better "
                "Baseline support. Container queries are Baseline Newly available."
            ),
            confidence=0.80,
            status_tier=BaselineStatus.NEWLY,
            category=FeatureGroup.CSS,
            severity=Severity.WARNING,
            browser_support=BrowserSupport(
                chrome="105", edge="105", firefox="110", safari="16"
            ),
            alternatives=(
                "@media (min-width: 768px)",
                "@media (max-width: 1024px)",
                "JavaScript-based container detection",
            ),
            reasoning=(
                "Media queries provide similar functionality with better "
                "browser support."
            ),
        ),
    ),
    (
        "has-selector",
        FixSuggestion(
            id="has-selector-fix",
            original_code=":has(",
            fixed_code=".has-",
            explanation=(
                "Replaced the :has() selector with a class-based approach for "
                "better Baseline support. :has() is Baseline Newly available."
            ),
            confidence=0.75,
            status_tier=BaselineStatus.NEWLY,
            category=FeatureGroup.CSS,
            severity=Severity.WARNING,
            browser_support=BrowserSupport(
                chrome="105", edge="105", firefox="121", safari="15.4"
            ),
            alternatives=(
                "JavaScript querySelector",
                "Class-based selectors",
                "CSS-in-JS solutions",
            ),
            reasoning="Class-based selectors provide better browser compatibility.",
        ),
    ),
    (
        "css-nesting",
        FixSuggestion(
            id="css-nesting-fix",
            original_code="&",
            fixed_code=".parent",
            explanation=(
                "Replaced CSS nesting with traditional selectors for better "
                "Baseline support. CSS nesting is Baseline Newly available."
            ),
            confidence=0.70,
            status_tier=BaselineStatus.NEWLY,
            category=FeatureGroup.CSS,
            severity=Severity.INFO,
            browser_support=BrowserSupport(
                chrome="112", edge="112", firefox="117", safari="16.5"
            ),
            alternatives=(
                "Traditional CSS selectors",
                "CSS-in-JS solutions",
                "SCSS/Sass preprocessing",
            ),
            reasoning=(
                "Traditional selectors provide better browser support and are "
                "more widely understood."
            ),
        ),
    ),
    (
        "nullish-coalescing",
        FixSuggestion(
            id="nullish-coalescing-fix",
            original_code="??",
            fixed_code="||",
            explanation=(
                "Replaced nullish coalescing with logical OR. Nullish coalescing "
                "is Baseline Widely available but may need transpilation for "
                "legacy targets."
            ),
            confidence=0.90,
            status_tier=BaselineStatus.WIDELY,
            category=FeatureGroup.JAVASCRIPT,
            severity=Severity.INFO,
            browser_support=BrowserSupport(
                chrome="80", edge="80", firefox="72", safari="13.1"
            ),
            alternatives=("|| (logical OR)", "Ternary operator", "if-else statements"),
            reasoning=(
                "Logical OR provides similar functionality with better browser "
                "support; note it also replaces 0 and empty strings."
            ),
        ),
    ),
    (
        "optional-chaining",
        FixSuggestion(
            id="optional-chaining-fix",
            original_code="?.",
            fixed_code=".",
            explanation=(
                "Replaced optional chaining with standard property access. "
                "Optional chaining is Baseline Widely available but may need "
                "transpilation for legacy targets."
            ),
            confidence=0.85,
            status_tier=BaselineStatus.WIDELY,
            category=FeatureGroup.JAVASCRIPT,
            severity=Severity.INFO,
            browser_support=BrowserSupport(
                chrome="80", edge="80", firefox="74", safari="13.1"
            ),
            alternatives=(
                "Standard property access",
                "if-else checks",
                "try-catch blocks",
            ),
            reasoning=(
                "Standard property access with proper null checks provides "
                "better browser support."
            ),
        ),
    ),
    (
        "dialog-element",
        FixSuggestion(
            id="dialog-element-fix",
            original_code="<dialog>",
            fixed_code='<div role="dialog">',
            explanation=(
                "Replaced the dialog element with an accessible div for better "
                "Baseline support. The dialog element is Baseline Newly available."
            ),
            confidence=0.80,
            status_tier=BaselineStatus.NEWLY,
            category=FeatureGroup.HTML,
            severity=Severity.WARNING,
            browser_support=BrowserSupport(
                chrome="37", edge="79", firefox="98", safari="15.4"
            ),
            alternatives=(
                '<div role="dialog">',
                "Modal libraries",
                "Custom modal components",
            ),
            reasoning=(
                "An accessible div with proper ARIA attributes provides better "
                "browser support."
            ),
        ),
    ),
    (
        "details-element",
        FixSuggestion(
            id="details-element-fix",
            original_code="<details>",
            fixed_code='<div class="details">',
            explanation=(
                "Replaced the details element with a div. The details element is "
                "Baseline Widely available but styling it may need JavaScript."
            ),
            confidence=0.75,
            status_tier=BaselineStatus.WIDELY,
            category=FeatureGroup.HTML,
            severity=Severity.INFO,
            browser_support=BrowserSupport(
                chrome="12", edge="79", firefox="49", safari="6"
            ),
            alternatives=(
                '<div class="details">',
                "Accordion components",
                "Collapsible sections",
            ),
            reasoning=(
                "A custom div with JavaScript provides more control over "
                "the disclosure widget."
            ),
        ),
    ),
)


def _fallback_comment(text: str, group: FeatureGroup, file_type: str) -> str:
    if group is FeatureGroup.HTML:
        if file_type in ("jsx", "tsx"):
            return f"{{/* {text} */}}"
        return f"<!-- {text} -->"
    return f"/* {text} */"


def generic_fix(
    record: FeatureRecord, signature: Signature, file_type: str
) -> FixSuggestion:
    """Low-confidence fix that annotates the trigger with a fallback reminder."""
    original = signature.trigger_text
    comment = _fallback_comment(
        f"baseline: add a fallback for {record.name}", record.group, file_type
    )
    return FixSuggestion(
        id=f"{record.id}-generic-fix",
        original_code=original,
        fixed_code=f"{comment}{original}",
        explanation=(
            f"No curated fix exists for {record.name}. The usage is annotated "
            "so a fallback can be added by hand."
        ),
        confidence=GENERIC_CONFIDENCE,
        status_tier=record.status,
        category=record.group,
        severity=severity_for(record.status),
        browser_support=record.support,
        alternatives=GENERIC_ALTERNATIVES,
        reasoning="Generic fix based on Baseline status.",
    )


def generic_suggestion(
    feature: str, group: FeatureGroup, status: BaselineStatus
) -> Suggestion:
    tier = "limited" if status is BaselineStatus.LIMITED else status.value
    return Suggestion(
        explanation=f"This {group.value} feature has {tier} browser support.",
        alternatives=GENERIC_ALTERNATIVES,
        auto_fix=f"/* Consider adding fallback for {feature} */",
        learning_url=MDN_FALLBACK_URL,
        confidence=GENERIC_CONFIDENCE,
        reasoning="Generic suggestion based on Baseline status.",
    )


class FixDatabase:
    """Read-only map of (feature key, file type) to fix candidates."""

    def __init__(
        self,
        fixes: Mapping[tuple[str, str], Sequence[FixSuggestion]],
        suggestions: Mapping[str, Suggestion],
    ) -> None:
        self._fixes = MappingProxyType({k: tuple(v) for k, v in fixes.items()})
        self._suggestions = MappingProxyType(dict(suggestions))

    @classmethod
    def build(
        cls,
        registry: FeatureRegistry,
        signatures: Iterable[Signature] = SIGNATURES,
        curated: Iterable[tuple[str, FixSuggestion]] = CURATED_FIXES,
        suggestions: Mapping[str, Suggestion] = SUGGESTIONS,
    ) -> FixDatabase:
        fixes: dict[tuple[str, str], list[FixSuggestion]] = {}

        def add(key: str, file_type: str, fix: FixSuggestion) -> None:
            fixes.setdefault((key, file_type), []).append(fix)

        for key, fix in curated:
            for file_type in CATEGORY_FILE_TYPES[fix.category]:
                add(key, file_type, fix)

        for signature in signatures:
            record = registry.get(signature.feature_id)
            if record is None or not signature.trigger_text:
                continue
            for file_type in sorted(signature.file_types):
                if (record.id, file_type) not in fixes:
                    add(record.id, file_type, generic_fix(record, signature, file_type))

        return cls(fixes, suggestions)

    def __len__(self) -> int:
        return sum(len(v) for v in self._fixes.values())

    def fixes(self, key: str, file_type: str) -> tuple[FixSuggestion, ...]:
        return self._fixes.get((key, file_type.lower().lstrip(".")), ())

    def suggestion(self, key: str) -> Suggestion | None:
        return self._suggestions.get(key)

    def statistics(self) -> dict:
        categories: dict[str, int] = {}
        for candidates in self._fixes.values():
            for fix in candidates:
                name = fix.category.value
                categories[name] = categories.get(name, 0) + 1
        return {"total_fixes": len(self), "categories": categories}


@functools.lru_cache(maxsize=1)
def load_default_fix_database() -> FixDatabase:
    """Build the process-wide fix database (once)."""
    from baselinebuddy.registry.registry import load_default_registry

    return FixDatabase.build(load_default_registry())

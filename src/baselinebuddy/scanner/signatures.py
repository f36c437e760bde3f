"""Textual signatures that tie a line of source to a registry feature.

Matching is deliberately line-local containment: a trigger inside a comment
or a string literal still fires.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

CSS_FILE_TYPES = frozenset(
    {"css", "html", "htm", "js", "jsx", "ts", "tsx", "mjs", "cjs"}
)
JS_FILE_TYPES = frozenset({"js", "jsx", "ts", "tsx", "mjs", "cjs", "html", "htm"})
HTML_FILE_TYPES = frozenset({"html", "htm", "jsx", "tsx"})


@dataclass(frozen=True)
class Signature:
    """A detection trigger for one feature.

    ``triggers`` fire when any of them is contained in the line; ``pattern``
    is an alternative simple regex. ``requires`` must all be present and
    ``excludes`` must all be absent for the signature to fire.
    """

    feature_id: str
    file_types: frozenset[str]
    triggers: tuple[str, ...] = ()
    pattern: re.Pattern[str] | None = None
    requires: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    css_property: str = ""
    value: str = ""
    snippet: str = ""

    def applies_to(self, file_type: str) -> bool:
        return file_type.lower().lstrip(".") in self.file_types

    def matches(self, line: str) -> bool:
        if any(x in line for x in self.excludes):
            return False
        if not all(r in line for r in self.requires):
            return False
        if self.pattern is not None:
            return self.pattern.search(line) is not None
        return any(t in line for t in self.triggers)

    @property
    def trigger_text(self) -> str:
        """The literal this signature reports, used for generic fixes."""
        if self.snippet:
            return self.snippet
        if self.triggers:
            return self.triggers[0]
        return self.css_property


SIGNATURES: tuple[Signature, ...] = (
    # CSS
    Signature(
        feature_id="grid",
        file_types=CSS_FILE_TYPES,
        triggers=("display: grid", "display:grid"),
        css_property="display",
        value="grid",
    ),
    Signature(
        feature_id="subgrid",
        file_types=CSS_FILE_TYPES,
        triggers=("subgrid",),
        css_property="grid-template-columns",
        value="subgrid",
    ),
    Signature(
        feature_id="word-break-auto-phrase",
        file_types=CSS_FILE_TYPES,
        triggers=("word-break: auto-phrase", "word-break:auto-phrase"),
        css_property="word-break",
        value="auto-phrase",
    ),
    Signature(
        feature_id="has-selector",
        file_types=CSS_FILE_TYPES,
        triggers=(":has(",),
        css_property=":has()",
    ),
    Signature(
        feature_id="container-queries",
        file_types=CSS_FILE_TYPES,
        triggers=("@container",),
        css_property="@container",
    ),
    Signature(
        feature_id="css-nesting",
        file_types=frozenset({"css"}),
        triggers=("&",),
        requires=("{",),
        css_property="nesting",
    ),
    Signature(
        feature_id="view-transitions",
        file_types=CSS_FILE_TYPES,
        triggers=("view-transition-name", "startViewTransition("),
        css_property="view-transition-name",
    ),
    Signature(
        feature_id="flexbox",
        file_types=CSS_FILE_TYPES,
        triggers=("display: flex", "display:flex"),
        css_property="display",
        value="flex",
    ),
    Signature(
        feature_id="custom-properties",
        file_types=CSS_FILE_TYPES,
        triggers=("var(--",),
        css_property="var()",
    ),
    # HTML
    Signature(
        feature_id="dialog-element",
        file_types=HTML_FILE_TYPES,
        triggers=("<dialog", "</dialog>"),
        css_property="dialog",
    ),
    Signature(
        feature_id="details-element",
        file_types=HTML_FILE_TYPES,
        triggers=("<details",),
        css_property="details",
    ),
    # JavaScript
    Signature(
        feature_id="array-tosorted",
        file_types=JS_FILE_TYPES,
        triggers=(".toSorted(",),
        css_property="toSorted",
    ),
    Signature(
        feature_id="nullish-coalescing",
        file_types=JS_FILE_TYPES,
        triggers=("??",),
        excludes=("??=",),
    ),
    Signature(
        feature_id="optional-chaining",
        file_types=JS_FILE_TYPES,
        triggers=("?.",),
        excludes=("?.(",),
    ),
    Signature(
        feature_id="async-functions",
        file_types=JS_FILE_TYPES,
        pattern=re.compile(r"\basync\b"),
        requires=("await",),
        snippet="async",
    ),
    Signature(
        feature_id="structured-clone",
        file_types=JS_FILE_TYPES,
        triggers=("structuredClone(",),
        css_property="structuredClone()",
    ),
)


def signatures_for(
    file_type: str,
    signatures: tuple[Signature, ...] = SIGNATURES,
) -> list[Signature]:
    """Signatures applicable to a file type, in registration order."""
    return [s for s in signatures if s.applies_to(file_type)]

"""Built-in feature table — the fixed compatibility data the scanner relies on."""

from __future__ import annotations

from baselinebuddy.registry.models import (
    BaselineStatus,
    BrowserSupport,
    FeatureGroup,
    FeatureRecord,
)

FEATURES: tuple[FeatureRecord, ...] = (
    # CSS
    FeatureRecord(
        id="grid",
        name="CSS Grid",
        description="CSS Grid Layout",
        group=FeatureGroup.CSS,
        status=BaselineStatus.WIDELY,
        support=BrowserSupport(chrome="57", edge="16", firefox="52", safari="10.1"),
        baseline_high_date="2017-03-14",
        compat_features=("css.properties.display.grid",),
        spec_url="https://www.w3.org/TR/css-grid-1/",
    ),
    FeatureRecord(
        id="subgrid",
        name="CSS Subgrid",
        description="CSS Grid Subgrid",
        group=FeatureGroup.CSS,
        status=BaselineStatus.NEWLY,
        support=BrowserSupport(chrome="117", edge="117", firefox="71", safari="16"),
        baseline_low_date="2023-09-15",
        compat_features=("css.properties.grid-template-columns.subgrid",),
        spec_url="https://www.w3.org/TR/css-grid-2/",
    ),
    FeatureRecord(
        id="container-queries",
        name="Container Queries",
        description="CSS Container Queries",
        group=FeatureGroup.CSS,
        status=BaselineStatus.NEWLY,
        support=BrowserSupport(chrome="105", edge="105", firefox="110", safari="16"),
        baseline_low_date="2023-02-14",
        compat_features=("css.at-rules.container",),
        spec_url="https://www.w3.org/TR/css-contain-3/",
    ),
    FeatureRecord(
        id="word-break-auto-phrase",
        name="word-break: auto-phrase",
        description="CSS word-break auto-phrase value",
        group=FeatureGroup.CSS,
        status=BaselineStatus.LIMITED,
        support=BrowserSupport(chrome="119", edge="119"),
        compat_features=("css.properties.word-break.auto-phrase",),
        spec_url="https://www.w3.org/TR/css-text-4/",
    ),
    FeatureRecord(
        id="has-selector",
        name=":has() selector",
        description="CSS :has() pseudo-class",
        group=FeatureGroup.CSS,
        status=BaselineStatus.NEWLY,
        support=BrowserSupport(chrome="105", edge="105", firefox="121", safari="15.4"),
        baseline_low_date="2023-12-19",
        compat_features=("css.selectors.has",),
        spec_url="https://www.w3.org/TR/selectors-4/",
    ),
    FeatureRecord(
        id="css-nesting",
        name="CSS Nesting",
        description="CSS Nesting Module",
        group=FeatureGroup.CSS,
        status=BaselineStatus.NEWLY,
        support=BrowserSupport(chrome="112", edge="112", firefox="117", safari="16.5"),
        baseline_low_date="2023-12-11",
        compat_features=("css.selectors.nesting",),
        spec_url="https://www.w3.org/TR/css-nesting-1/",
    ),
    FeatureRecord(
        id="view-transitions",
        name="View Transitions",
        description="View Transition API and view-transition-name property",
        group=FeatureGroup.CSS,
        status=BaselineStatus.LIMITED,
        support=BrowserSupport(chrome="111", edge="111", safari="18"),
        compat_features=("css.properties.view-transition-name",),
        spec_url="https://www.w3.org/TR/css-view-transitions-1/",
    ),
    FeatureRecord(
        id="flexbox",
        name="Flexbox",
        description="CSS Flexible Box Layout",
        group=FeatureGroup.CSS,
        status=BaselineStatus.WIDELY,
        support=BrowserSupport(chrome="29", edge="12", firefox="28", safari="9"),
        baseline_high_date="2015-09-30",
        compat_features=("css.properties.display.flex",),
        spec_url="https://www.w3.org/TR/css-flexbox-1/",
    ),
    FeatureRecord(
        id="custom-properties",
        name="CSS Custom Properties",
        description="CSS variables via custom properties and var()",
        group=FeatureGroup.CSS,
        status=BaselineStatus.WIDELY,
        support=BrowserSupport(chrome="49", edge="15", firefox="31", safari="9.1"),
        baseline_high_date="2017-04-05",
        compat_features=("css.properties.custom-property", "css.types.var"),
        spec_url="https://www.w3.org/TR/css-variables-1/",
    ),
    # HTML
    FeatureRecord(
        id="dialog-element",
        name="HTML Dialog Element",
        description="HTML dialog element",
        group=FeatureGroup.HTML,
        status=BaselineStatus.NEWLY,
        support=BrowserSupport(chrome="37", edge="79", firefox="98", safari="15.4"),
        baseline_low_date="2022-03-14",
        compat_features=("html.elements.dialog",),
        spec_url=(
            "https://html.spec.whatwg.org/multipage/"
            "interactive-elements.html#the-dialog-element"
        ),
    ),
    FeatureRecord(
        id="details-element",
        name="HTML Details Element",
        description="HTML details and summary disclosure widget",
        group=FeatureGroup.HTML,
        status=BaselineStatus.WIDELY,
        support=BrowserSupport(chrome="12", edge="79", firefox="49", safari="6"),
        baseline_high_date="2020-01-15",
        compat_features=("html.elements.details",),
        spec_url=(
            "https://html.spec.whatwg.org/multipage/"
            "interactive-elements.html#the-details-element"
        ),
    ),
    # JavaScript
    FeatureRecord(
        id="array-tosorted",
        name="Array.prototype.toSorted",
        description="Array toSorted method",
        group=FeatureGroup.JAVASCRIPT,
        status=BaselineStatus.NEWLY,
        support=BrowserSupport(chrome="110", edge="110", firefox="115", safari="16"),
        baseline_low_date="2023-07-04",
        compat_features=("javascript.builtins.Array.toSorted",),
        spec_url="https://tc39.es/ecma262/#sec-array.prototype.tosorted",
    ),
    FeatureRecord(
        id="nullish-coalescing",
        name="Nullish coalescing",
        description="Nullish coalescing operator (??)",
        group=FeatureGroup.JAVASCRIPT,
        status=BaselineStatus.WIDELY,
        support=BrowserSupport(chrome="80", edge="80", firefox="72", safari="13.1"),
        baseline_high_date="2022-07-28",
        compat_features=("javascript.operators.nullish_coalescing",),
        spec_url="https://tc39.es/ecma262/#prod-CoalesceExpression",
    ),
    FeatureRecord(
        id="optional-chaining",
        name="Optional chaining",
        description="Optional chaining operator (?.)",
        group=FeatureGroup.JAVASCRIPT,
        status=BaselineStatus.WIDELY,
        support=BrowserSupport(chrome="80", edge="80", firefox="74", safari="13.1"),
        baseline_high_date="2022-07-28",
        compat_features=("javascript.operators.optional_chaining",),
        spec_url="https://tc39.es/ecma262/#prod-OptionalExpression",
    ),
    FeatureRecord(
        id="async-functions",
        name="Async functions",
        description="async functions and the await operator",
        group=FeatureGroup.JAVASCRIPT,
        status=BaselineStatus.WIDELY,
        support=BrowserSupport(chrome="55", edge="15", firefox="52", safari="11"),
        baseline_high_date="2019-10-19",
        compat_features=("javascript.statements.async_function",),
        spec_url="https://tc39.es/ecma262/#sec-async-function-definitions",
    ),
    FeatureRecord(
        id="structured-clone",
        name="structuredClone",
        description="Global structuredClone() deep copy function",
        group=FeatureGroup.JAVASCRIPT,
        status=BaselineStatus.WIDELY,
        support=BrowserSupport(chrome="98", edge="98", firefox="94", safari="15.4"),
        baseline_high_date="2024-09-14",
        compat_features=("api.structuredClone",),
        spec_url=(
            "https://html.spec.whatwg.org/multipage/"
            "structured-data.html#dom-structuredclone"
        ),
    ),
)

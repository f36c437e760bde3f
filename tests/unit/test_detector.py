"""Tests for signatures and the line-local detector."""

from __future__ import annotations

from baselinebuddy.scanner.detector import SignatureDetector
from baselinebuddy.scanner.signatures import SIGNATURES, signatures_for


def _ids(detections):
    return [d.feature_id for d in detections]


class TestSignatures:
    def test_registration_order_preserved(self):
        css = signatures_for("css")
        order = [s.feature_id for s in SIGNATURES]
        assert [s.feature_id for s in css] == [
            fid for fid in order if fid in {s.feature_id for s in css}
        ]

    def test_file_type_is_normalized(self):
        assert signatures_for(".CSS") == signatures_for("css")

    def test_unknown_file_type_has_no_signatures(self):
        assert signatures_for("py") == []

    def test_nesting_needs_brace(self):
        nesting = next(s for s in SIGNATURES if s.feature_id == "css-nesting")
        assert nesting.matches("  &:hover { color: red; }")
        assert not nesting.matches("  a & b")

    def test_excludes_suppress_match(self):
        nullish = next(s for s in SIGNATURES if s.feature_id == "nullish-coalescing")
        assert nullish.matches("const a = b ?? c;")
        assert not nullish.matches("a ??= b;")

    def test_async_pattern_needs_await(self):
        sig = next(s for s in SIGNATURES if s.feature_id == "async-functions")
        assert sig.matches("async function f() { await g(); }")
        assert not sig.matches("async function f() {}")
        assert not sig.matches("const asyncValue = await g();")

    def test_trigger_text(self):
        by_id = {s.feature_id: s for s in SIGNATURES}
        assert by_id["grid"].trigger_text == "display: grid"
        assert by_id["async-functions"].trigger_text == "async"


class TestDetector:
    def test_reports_one_based_lines(self):
        detector = SignatureDetector()
        css = "a {\n  color: red;\n  display: grid;\n}\n"
        detections = detector.detect(css, "styles.css")
        assert _ids(detections) == ["grid"]
        assert detections[0].line == 3
        assert detections[0].column == 1
        assert detections[0].css_property == "display"
        assert detections[0].value == "grid"

    def test_two_features_on_one_line(self):
        detector = SignatureDetector()
        line = ".card:has(img) { grid-template-columns: subgrid; }"
        detections = detector.detect(line, "cards.css")
        assert sorted(_ids(detections)) == ["has-selector", "subgrid"]
        assert {d.line for d in detections} == {1}

    def test_ordered_by_line_then_registration(self):
        detector = SignatureDetector()
        css = "p { word-break: auto-phrase; }\n.x:has(a) { display: grid; }\n"
        detections = detector.detect(css, "a.css")
        assert [(d.line, d.feature_id) for d in detections] == [
            (1, "word-break-auto-phrase"),
            (2, "grid"),
            (2, "has-selector"),
        ]

    def test_comments_and_strings_still_match(self):
        detector = SignatureDetector()
        js = "// use structuredClone(obj) later\nconst s = 'a ?? b';\n"
        assert _ids(detector.detect(js, "notes.js")) == [
            "structured-clone",
            "nullish-coalescing",
        ]

    def test_unsupported_extension_yields_nothing(self):
        detector = SignatureDetector()
        assert detector.detect("display: grid", "README.md") == []

    def test_html_elements(self):
        detector = SignatureDetector()
        html = "<dialog open>\n  <details><summary>x</summary></details>\n</dialog>"
        assert [(d.line, d.feature_id) for d in detector.detect(html, "a.html")] == [
            (1, "dialog-element"),
            (2, "details-element"),
            (3, "dialog-element"),
        ]

    def test_css_nesting_only_in_css(self):
        detector = SignatureDetector()
        line = "if (a && b) { run(); }"
        assert "css-nesting" not in _ids(detector.detect(line, "a.js"))
        assert "css-nesting" in _ids(detector.detect(line, "a.css"))

    def test_custom_signatures(self, tiny_signatures):
        detector = SignatureDetector(tiny_signatures)
        detections = detector.detect("alpha: 1; mystery\n", "x.css")
        assert _ids(detections) == ["alpha", "unknown"]
        assert detections[0].signature is tiny_signatures[0]

"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from baselinebuddy.registry.models import (
    BaselineStatus,
    BrowserSupport,
    FeatureGroup,
    FeatureRecord,
)
from baselinebuddy.registry.registry import FeatureRegistry
from baselinebuddy.scanner.engine import ScanEngine
from baselinebuddy.scanner.signatures import Signature


@pytest.fixture
def tiny_registry() -> FeatureRegistry:
    return FeatureRegistry(
        (
            FeatureRecord(
                id="alpha",
                name="Alpha Feature",
                description="Widely supported test feature",
                group=FeatureGroup.CSS,
                status=BaselineStatus.WIDELY,
                support=BrowserSupport(chrome="1", firefox="1"),
            ),
            FeatureRecord(
                id="beta",
                name="Beta Feature",
                description="Recently interoperable test feature",
                group=FeatureGroup.JAVASCRIPT,
                status=BaselineStatus.NEWLY,
            ),
            FeatureRecord(
                id="gamma",
                name="Gamma Feature",
                description="Experimental test feature",
                group=FeatureGroup.HTML,
                status=BaselineStatus.LIMITED,
            ),
        )
    )


@pytest.fixture
def tiny_signatures() -> tuple[Signature, ...]:
    return (
        Signature(
            "alpha", frozenset({"css"}), triggers=("alpha:",), css_property="alpha"
        ),
        Signature("beta", frozenset({"js"}), triggers=("beta(",)),
        Signature("gamma", frozenset({"html"}), triggers=("<gamma",)),
        Signature("unknown", frozenset({"css"}), triggers=("mystery",)),
    )


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """A small web project with issues, clean files and skipped folders."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "layout.css").write_text(
        ".page {\n  color: red;\n  display: grid;\n}\n"
    )
    (tmp_path / "src" / "cards.css").write_text(
        ".card:has(img) { grid-template-columns: subgrid; }\n"
        "p { word-break: auto-phrase; }\n"
    )
    (tmp_path / "src" / "clean.js").write_text("const x = 1;\nexport default x;\n")
    (tmp_path / "src" / "app.js").write_text(
        "const sorted = items.toSorted();\nconst name = user?.name;\n"
    )
    (tmp_path / "index.html").write_text("<body>\n<dialog open>Hi</dialog>\n</body>\n")
    (tmp_path / "README.md").write_text("display: grid\n")

    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib" / "index.css").write_text(
        "a { display: grid; }\n"
    )
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "bundle.js").write_text("a?.b\n")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "hooks.js").write_text("a?.b\n")
    return tmp_path


@pytest.fixture
def engine() -> ScanEngine:
    return ScanEngine()

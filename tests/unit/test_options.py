"""Tests for scan options, glob translation and YAML option profiles."""

from __future__ import annotations

from pathlib import Path

import pytest

from baselinebuddy.errors import ConfigError, PatternError
from baselinebuddy.registry.models import BaselineStatus
from baselinebuddy.scanner.options import (
    ScanOptions,
    load_profile,
    load_profile_from_string,
    translate_glob,
)


class TestGlob:
    def test_double_star_slash_matches_zero_or_more_dirs(self):
        regex = translate_glob("**/*.css")
        assert regex.fullmatch("a.css")
        assert regex.fullmatch("src/deep/a.css")
        assert not regex.fullmatch("a.scss")

    def test_single_star_stops_at_separator(self):
        regex = translate_glob("src/*.js")
        assert regex.fullmatch("src/app.js")
        assert not regex.fullmatch("src/lib/app.js")

    def test_dot_is_literal(self):
        assert not translate_glob("*.css").fullmatch("acss")

    def test_trailing_double_star(self):
        regex = translate_glob("**/node_modules/**")
        assert regex.fullmatch("node_modules/x/index.js")
        assert regex.fullmatch("a/node_modules/b.css")
        assert not regex.fullmatch("my_node_modules/b.css")

    @pytest.mark.parametrize("pattern", ["*.c?s", "[ab].css", "*.{js,ts}", "a/***", ""])
    def test_unsupported_syntax_rejected(self, pattern):
        with pytest.raises(PatternError):
            translate_glob(pattern)


class TestScanOptions:
    def test_defaults(self):
        options = ScanOptions()
        assert options.baseline_level is BaselineStatus.WIDELY
        assert options.output_format == "text"
        assert options.is_dir_excluded("node_modules")
        assert options.is_dir_excluded("packages/web/dist")
        assert not options.is_dir_excluded("src")

    def test_anchored_dir_exclude_stays_anchored(self):
        options = ScanOptions(exclude_patterns=("vendor/**", "*.min.css"))
        assert options.is_dir_excluded("vendor")
        assert not options.is_dir_excluded("src/vendor")
        assert not options.is_dir_excluded("vendor.min.css")

    def test_bad_pattern_rejected_at_construction(self):
        with pytest.raises(PatternError):
            ScanOptions(include_patterns=("**/*.[cj]s",))

    def test_pattern_error_is_value_error(self):
        with pytest.raises(ValueError):
            ScanOptions(exclude_patterns=("?",))

    def test_level_parsed_from_string(self):
        assert ScanOptions(baseline_level="newly").baseline_level.value == "newly"
        assert ScanOptions(baseline_level="limited").baseline_level.value is False

    def test_invalid_values(self):
        with pytest.raises(ConfigError):
            ScanOptions(baseline_level="always")
        with pytest.raises(ConfigError):
            ScanOptions(output_format="xml")
        with pytest.raises(ConfigError):
            ScanOptions(workers=0)
        with pytest.raises(ConfigError):
            ScanOptions(max_files=-1)

    def test_exclude_always_wins(self):
        options = ScanOptions(
            include_patterns=("**/*.css",), exclude_patterns=("**/vendor/**",)
        )
        assert options.should_scan("src/a.css")
        assert options.is_included("vendor/a.css")
        assert not options.should_scan("vendor/a.css")

    def test_single_string_pattern(self):
        options = ScanOptions(include_patterns="**/*.css")
        assert options.include_patterns == ("**/*.css",)

    @pytest.mark.parametrize(
        ("level", "reported"),
        [
            ("widely", {"widely", "newly", False}),
            ("newly", {"newly", False}),
            ("limited", {False}),
        ],
    )
    def test_baseline_level_filter(self, level, reported):
        options = ScanOptions(baseline_level=level)
        assert {s.value for s in BaselineStatus if options.reports(s)} == reported


class TestProfiles:
    def test_from_string(self):
        profile = load_profile_from_string(
            "name: strict\n"
            "include: ['**/*.css']\n"
            "baseline_level: newly\n"
            "fail_on_warning: true\n"
        )
        assert profile.name == "strict"
        assert profile.options.include_patterns == ("**/*.css",)
        assert profile.options.baseline_level is BaselineStatus.NEWLY
        assert profile.fail_on_error
        assert profile.fail_on_warning

    def test_empty_document_gives_defaults(self):
        profile = load_profile_from_string("")
        assert profile.name == "default"
        assert profile.options == ScanOptions()

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="includes"):
            load_profile_from_string("includes: ['*.css']\n")

    @pytest.mark.parametrize(
        "doc", ['fail_on_error: "false"\n', "fail_on_warning: 1\n"]
    )
    def test_fail_flags_must_be_booleans(self, doc):
        with pytest.raises(ConfigError, match="must be true or false"):
            load_profile_from_string(doc)

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            load_profile_from_string("- a\n- b\n")

    def test_invalid_yaml(self):
        with pytest.raises(ConfigError):
            load_profile_from_string("include: [unclosed\n")

    def test_bad_glob_in_file(self):
        with pytest.raises(PatternError):
            load_profile_from_string("exclude: ['**/*.{js,ts}']\n")

    def test_inherit_own_keys_win(self, tmp_path: Path):
        (tmp_path / "base.yaml").write_text(
            "baseline_level: limited\nworkers: 4\nexclude: ['**/vendor/**']\n"
        )
        child = tmp_path / "child.yaml"
        child.write_text("inherit: base.yaml\nbaseline_level: newly\n")

        profile = load_profile(child)
        assert profile.options.baseline_level is BaselineStatus.NEWLY
        assert profile.options.workers == 4
        assert profile.options.exclude_patterns == ("**/vendor/**",)

    def test_inherit_from_string_uses_base_dir(self, tmp_path: Path):
        (tmp_path / "base.yaml").write_text("max_files: 10\n")
        profile = load_profile_from_string("inherit: [base.yaml]\n", base_dir=tmp_path)
        assert profile.options.max_files == 10

    def test_circular_inherit(self, tmp_path: Path):
        (tmp_path / "a.yaml").write_text("inherit: b.yaml\n")
        (tmp_path / "b.yaml").write_text("inherit: a.yaml\n")
        with pytest.raises(ConfigError, match="Circular"):
            load_profile(tmp_path / "a.yaml")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_profile(tmp_path / "nope.yaml")

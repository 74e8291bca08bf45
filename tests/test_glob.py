"""Tests for glob compilation and regex translation."""

from __future__ import annotations

import re

import pytest

from schemaindex.catalog.glob import compile_glob, escape_regex, glob_to_regex
from schemaindex.errors import GlobError


class TestEscapeRegex:
    """Test escape_regex helper."""

    def test_escapes_meta_characters(self) -> None:
        """Should escape characters that are special in regular expressions."""
        assert escape_regex(".cargo") == r"\.cargo"
        assert escape_regex("a-b~c") == r"a\-b\~c"

    def test_keeps_separators(self) -> None:
        """Should leave path separators and plain characters alone."""
        assert escape_regex("foo/bar_1") == "foo/bar_1"


class TestCompileGlob:
    """Test compile_glob function."""

    @pytest.mark.parametrize(
        ("glob", "body"),
        [
            ("*", ".*"),
            ("?", "."),
            ("**", ".*"),
            ("**/Cargo", "(?:/?|.*/)Cargo"),
            ("a/**", "a/.*"),
            ("a/**/b", "a(?:/|/.*/)b"),
            ("a**b", "a.*b"),
            ("[abc]", "[abc]"),
            ("[!a]", "[^a]"),
            ("[^a]", "[^a]"),
            ("[a-z]x", "[a-z]x"),
            ("[]]", r"[\]]"),
            ("[a-]", r"[a\-]"),
            ("{a,b}", "(?:a|b)"),
            ("x{*.y,z}", r"x(?:.*\.y|z)"),
        ],
    )
    def test_wildcard_bodies(self, glob: str, body: str) -> None:
        """Should compile wildcard globs into bare regex bodies."""
        compiled = compile_glob(glob)

        assert compiled.body == body
        assert compiled.has_wildcard is True

    def test_literal_glob(self) -> None:
        """Should escape literal globs and report no wildcard."""
        compiled = compile_glob(".cargo/config")

        assert compiled.body == r"\.cargo/config"
        assert compiled.has_wildcard is False

    def test_escaped_star_is_literal(self) -> None:
        """Should treat an escaped star as a literal character."""
        compiled = compile_glob(r"a\*b")

        assert compiled.body == r"a\*b"
        assert compiled.has_wildcard is False

    def test_comma_outside_alternates_is_literal(self) -> None:
        """Should keep commas outside of braces as plain characters."""
        assert compile_glob("a,b").body == "a,b"

    @pytest.mark.parametrize(
        "glob",
        ["[abc", "{a,b", "a}", "{a,{b}}", "[z-a]", "abc\\"],
    )
    def test_malformed_globs(self, glob: str) -> None:
        """Should reject malformed globs."""
        with pytest.raises(GlobError) as excinfo:
            compile_glob(glob)

        assert excinfo.value.glob == glob

    def test_bodies_compile_as_python_regex(self) -> None:
        """Should produce bodies accepted by the re module."""
        for glob in ["**/pyproject", "a/**/b", "[!x-z]?", "{foo,bar}*", "a+b(c)"]:
            re.compile(compile_glob(glob).body)


class TestGlobToRegex:
    """Test glob_to_regex translation."""

    def test_star_is_unanchored_suffix(self) -> None:
        """Should translate a bare star into a suffix match."""
        pattern = glob_to_regex("*")

        assert pattern == r".*\.toml$"
        assert re.search(pattern, "config/app.toml")
        assert not re.search(pattern, "config/app.json")

    def test_literal_matches_root_and_nested(self) -> None:
        """Should match a literal fragment at the root or after a separator."""
        pattern = glob_to_regex("foo/bar")

        assert pattern == r"^(.*(/|\\)foo/bar\.toml|foo/bar\.toml)$"
        assert re.search(pattern, "foo/bar.toml")
        assert re.search(pattern, "nested/dir/foo/bar.toml")
        assert re.search(pattern, "nested\\foo/bar.toml")
        assert not re.search(pattern, "xfoo/bar.toml")
        assert not re.search(pattern, "foo/bar.toml.bak")

    def test_literal_file_name(self) -> None:
        """Should only match whole file names for literal globs."""
        pattern = glob_to_regex("Cargo")

        assert re.search(pattern, "Cargo.toml")
        assert re.search(pattern, "crates/core/Cargo.toml")
        assert not re.search(pattern, "MyCargo.toml")

    def test_recursive_prefix(self) -> None:
        """Should keep the glob's own anchoring for recursive prefixes."""
        pattern = glob_to_regex("**/pyproject")

        assert pattern == r"(?:/?|.*/)pyproject\.toml$"
        assert re.search(pattern, "pyproject.toml")
        assert re.search(pattern, "a/b/pyproject.toml")

    def test_question_mark_is_unanchored_suffix(self) -> None:
        """Should treat a single-character wildcard like other wildcards."""
        pattern = glob_to_regex("?")

        assert pattern == r".\.toml$"
        assert re.search(pattern, "a.toml")
        assert re.search(pattern, "dir/a.toml")

    def test_alternates_are_unanchored_suffix(self) -> None:
        """Should translate alternates without the literal anchoring."""
        assert glob_to_regex("{a,b}") == r"(?:a|b)\.toml$"

    def test_custom_extension(self) -> None:
        """Should append the requested extension."""
        assert glob_to_regex("*", "yaml") == r".*\.yaml$"

    def test_malformed_glob_raises(self) -> None:
        """Should propagate compilation failures."""
        with pytest.raises(GlobError):
            glob_to_regex("[unclosed")

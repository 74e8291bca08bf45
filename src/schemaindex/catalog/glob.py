"""Glob compilation and translation into consumer-ready regular expressions.

Globs follow the conventional ``globset`` dialect used by the index consumer:

* ``?`` matches any single character and ``*`` any run of characters,
  path separators included.
* ``**`` forming a whole path component matches any number of directories.
* ``[ab]``, ``[a-z]`` and ``[!a-z]`` (or ``[^a-z]``) are character classes.
* ``{a,b}`` matches either alternative.
* ``\\`` escapes the following character.

The compiled body carries no anchors or flags and only uses syntax shared by
Python's :mod:`re` and the Rust ``regex`` crate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from schemaindex.errors import GlobError

# Characters treated as meta by the Rust regex crate; escaping them is also valid in Python.
_REGEX_META = frozenset("\\.+*?()|[]{}^$#&-~")

_RECURSIVE_PREFIX = "(?:/?|.*/)"
_RECURSIVE_SUFFIX = "/.*"
_RECURSIVE_INFIX = "(?:/|/.*/)"


def escape_regex(text: str) -> str:
    return "".join(f"\\{char}" if char in _REGEX_META else char for char in text)


@dataclass(frozen=True, slots=True)
class CompiledGlob:
    glob: str
    body: str
    has_wildcard: bool


class _GlobParser:
    """Single-pass compiler from a glob pattern to a regex body."""

    def __init__(self, glob: str) -> None:
        self.glob = glob
        self.pos = 0
        self.parts: List[str] = []
        self.has_wildcard = False
        # Compiled alternatives of the open `{...}` group, if any
        self.alternates: Optional[List[List[str]]] = None

    def compile(self) -> CompiledGlob:
        while self.pos < len(self.glob):
            char = self.glob[self.pos]
            self.pos += 1
            if char == "\\":
                self._parse_escape()
            elif char == "?":
                self.has_wildcard = True
                self._emit(".")
            elif char == "*":
                self.has_wildcard = True
                self._parse_star()
            elif char == "[":
                self.has_wildcard = True
                self._parse_class()
            elif char == "{":
                self.has_wildcard = True
                self._open_alternates()
            elif char == "}" and self.alternates is not None:
                self._close_alternates(self.alternates)
            elif char == "}":
                raise GlobError(self.glob, "unopened alternate group")
            elif char == "," and self.alternates is not None:
                self.alternates.append([])
            else:
                self._emit(escape_regex(char))
        if self.alternates is not None:
            raise GlobError(self.glob, "unclosed alternate group")
        return CompiledGlob(glob=self.glob, body=self._body(), has_wildcard=self.has_wildcard)

    def _body(self) -> str:
        if self.parts == [_RECURSIVE_PREFIX]:
            return ".*"
        return "".join(self.parts)

    def _current(self) -> List[str]:
        if self.alternates is not None:
            return self.alternates[-1]
        return self.parts

    def _emit(self, fragment: str) -> None:
        self._current().append(fragment)

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.glob):
            return self.glob[self.pos]
        return None

    def _parse_escape(self) -> None:
        char = self._peek()
        if char is None:
            raise GlobError(self.glob, "dangling escape")
        self.pos += 1
        self._emit(escape_regex(char))

    def _parse_star(self) -> None:
        if self._peek() != "*":
            self._emit(".*")
            return
        self.pos += 1
        current = self._current()
        # A recursive wildcard only exists as a whole path component outside alternates
        if self.alternates is not None:
            self._emit(".*")
            return
        at_start = not current
        after_separator = bool(current) and current[-1] == "/"
        following = self._peek()
        if not (at_start or after_separator) or following not in (None, "/"):
            self._emit(".*")
            return
        if at_start:
            if following == "/":
                self.pos += 1
            self._emit(_RECURSIVE_PREFIX)
            return
        current.pop()
        if following is None:
            self._emit(_RECURSIVE_SUFFIX)
        else:
            self.pos += 1
            self._emit(_RECURSIVE_INFIX)

    def _parse_class(self) -> None:
        negated = self._peek() in ("!", "^")
        if negated:
            self.pos += 1
        members: List[str] = []
        # Last single-character member, usable as the start of a range
        previous: Optional[str] = None
        first = True
        while True:
            char = self._peek()
            if char is None:
                raise GlobError(self.glob, "unclosed character class")
            self.pos += 1
            if char == "]" and not first:
                break
            first = False
            if char == "-" and previous is not None and self._peek() not in (None, "]"):
                end = self.glob[self.pos]
                self.pos += 1
                if previous > end:
                    raise GlobError(self.glob, f"invalid range {previous}-{end}")
                members[-1] = f"{escape_regex(previous)}-{escape_regex(end)}"
                previous = None
                continue
            members.append(escape_regex(char))
            previous = char
        self._emit(f"[{'^' if negated else ''}{''.join(members)}]")

    def _open_alternates(self) -> None:
        if self.alternates is not None:
            raise GlobError(self.glob, "nested alternate groups are not supported")
        self.alternates = [[]]

    def _close_alternates(self, alternates: List[List[str]]) -> None:
        choices = "|".join("".join(branch) for branch in alternates)
        self.alternates = None
        self.parts.append(f"(?:{choices})")


def compile_glob(glob: str) -> CompiledGlob:
    """Compile a glob into an unanchored regex body.

    Raises:
        GlobError: If the glob is malformed.
    """
    return _GlobParser(glob).compile()


def glob_to_regex(glob: str, extension: str = "toml") -> str:
    """Translate an extension-stripped glob into an anchored pattern.

    Wildcard globs already describe where they may match, so they become a
    plain suffix match. Literal globs must match a whole path component, either
    at the start of the path or right after a separator.

    Raises:
        GlobError: If the glob is malformed.
    """
    compiled = compile_glob(glob)
    suffix = f"\\.{escape_regex(extension)}"
    if compiled.has_wildcard:
        return f"{compiled.body}{suffix}$"
    return f"^(.*(/|\\\\){compiled.body}{suffix}|{compiled.body}{suffix})$"

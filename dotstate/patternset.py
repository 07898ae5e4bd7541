"""Glob patterns with ** support, and sets of include/exclude patterns."""

from __future__ import annotations

import functools
import os
import re


class PatternError(ValueError):
    """A glob pattern is malformed."""


_MAGIC = set("*?[{\\")


def _parse_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate the character class starting at pattern[i] == '['."""
    n = len(pattern)
    i += 1
    negate = False
    if i < n and pattern[i] in "!^":
        negate = True
        i += 1
    items: list[str] = []
    first = True
    while True:
        if i >= n:
            raise PatternError(f"{pattern}: syntax error in pattern")
        c = pattern[i]
        if c == "]" and not first:
            i += 1
            break
        first = False
        if c == "\\":
            i += 1
            if i >= n:
                raise PatternError(f"{pattern}: syntax error in pattern")
            c = pattern[i]
        i += 1
        if i + 1 < n and pattern[i] == "-" and pattern[i + 1] != "]":
            hi = pattern[i + 1]
            i += 2
            if hi == "\\":
                if i >= n:
                    raise PatternError(f"{pattern}: syntax error in pattern")
                hi = pattern[i]
                i += 1
            if hi < c:
                raise PatternError(f"{pattern}: syntax error in pattern")
            items.append(f"{re.escape(c)}-{re.escape(hi)}")
        else:
            items.append(re.escape(c))
    body = "".join(items)
    if negate:
        return f"[^/{body}]", i
    return f"(?!/)[{body}]", i


def _parse(pattern: str, i: int, depth: int) -> tuple[str, int]:
    n = len(pattern)
    out: list[str] = []
    while i < n:
        c = pattern[i]
        if depth and c in ",}":
            return "".join(out), i
        if c == "*":
            if pattern.startswith("**", i):
                at_start = i == 0 or pattern[i - 1] == "/"
                at_end = i + 2 == n
                if at_start and not at_end and pattern[i + 2] == "/":
                    out.append("(?:.*/)?")
                    i += 3
                    continue
                if at_start and at_end:
                    out.append(".*")
                    i += 2
                    continue
                i += 2
            else:
                i += 1
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "[":
            translated, i = _parse_class(pattern, i)
            out.append(translated)
        elif c == "{":
            i += 1
            alternatives: list[str] = []
            while True:
                sub, i = _parse(pattern, i, depth + 1)
                alternatives.append(sub)
                if i >= n:
                    raise PatternError(f"{pattern}: syntax error in pattern")
                i += 1
                if pattern[i - 1] == "}":
                    break
            out.append("(?:" + "|".join(alternatives) + ")")
        elif c == "\\":
            if i + 1 >= n:
                raise PatternError(f"{pattern}: syntax error in pattern")
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(c))
            i += 1
    return "".join(out), i


@functools.lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern[str]:
    regex, _ = _parse(pattern, 0, 0)
    return re.compile(regex + r"\Z", re.DOTALL)


def doublestar_match(pattern: str, name: str) -> bool:
    """Return whether the slash path name matches pattern; raise PatternError if malformed."""
    return _compile(pattern).match(name) is not None


def doublestar_glob(pattern: str, root: str | os.PathLike[str] = "") -> list[str]:
    """Return the sorted paths matching pattern.

    Paths are slash paths in the space of pattern; root, if given, is the
    directory on disk that stands for the filesystem root.
    """
    regex = _compile(pattern)
    components = pattern.split("/")
    static: list[str] = []
    for component in components:
        if _MAGIC.intersection(component):
            break
        static.append(component)

    def on_disk(path: str) -> str:
        if root:
            return os.path.join(os.fspath(root), path.lstrip("/"))
        return path or "."

    if len(static) == len(components):
        return [pattern] if os.path.lexists(on_disk(pattern)) else []

    base = "/".join(static) or ("/" if pattern.startswith("/") else "")
    base_dir = on_disk(base)
    if not os.path.isdir(base_dir):
        return []
    prefix = "" if base == "" else base.rstrip("/") + "/"
    matches: list[str] = []
    for dirpath, dirnames, filenames in os.walk(base_dir):
        rel_dir = os.path.relpath(dirpath, base_dir).replace(os.sep, "/")
        rel_dir = "" if rel_dir == "." else rel_dir + "/"
        for name in dirnames + filenames:
            candidate = prefix + rel_dir + name
            if regex.match(candidate):
                matches.append(candidate)
    return sorted(matches)


class PatternSet:
    """A set of include and exclude patterns."""

    def __init__(self) -> None:
        self.include_patterns: set[str] = set()
        self.exclude_patterns: set[str] = set()

    def add(self, pattern: str, include: bool) -> None:
        """Add pattern; raise PatternError if it is malformed."""
        _compile(pattern)
        if include:
            self.include_patterns.add(pattern)
        else:
            self.exclude_patterns.add(pattern)

    def glob(self, root: str | os.PathLike[str], prefix: str) -> list[str]:
        """Return the sorted paths under prefix in root that match, without prefix."""
        matches: set[str] = set()
        for include in self.include_patterns:
            matches.update(doublestar_glob(prefix + include, root))
        result = [
            match
            for match in matches
            if not any(
                doublestar_match(prefix + exclude, match) for exclude in self.exclude_patterns
            )
        ]
        return sorted(match[len(prefix) :] for match in result)

    def match(self, name: str) -> bool:
        """Return whether name matches an include pattern and no exclude pattern."""
        if any(doublestar_match(p, name) for p in self.exclude_patterns):
            return False
        return any(doublestar_match(p, name) for p in self.include_patterns)
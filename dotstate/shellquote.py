"""Quoting of shell arguments."""

from __future__ import annotations

import re
from collections.abc import Iterable

_NON_SHELL_LITERAL = re.compile(r"[^+\-./0-9=A-Z_a-z]")


def maybe_shell_quote(s: str) -> str:
    """Return s quoted as a shell argument, if it needs quoting."""
    if s == "":
        return "''"
    if not _NON_SHELL_LITERAL.search(s):
        return s
    parts: list[str] = []
    in_quotes = False
    for char in s:
        if char == "'":
            if in_quotes:
                parts.append("'")
                in_quotes = False
            parts.append("\\'")
            continue
        if not in_quotes:
            parts.append("'")
            in_quotes = True
        parts.append("\\\\" if char == "\\" else char)
    if in_quotes:
        parts.append("'")
    return "".join(parts)


def shell_quote_args(args: Iterable[str]) -> str:
    """Return args shell quoted and joined by spaces."""
    return " ".join(maybe_shell_quote(arg) for arg in args)
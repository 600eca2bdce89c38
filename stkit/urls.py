"""Locating URLs in terminal screen lines."""

from __future__ import annotations

from dataclasses import dataclass

URL_CHARS = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789-._~:/?#@!$&'*+,;=%"
)
URL_PREFIXES = ("http://", "https://")


@dataclass(frozen=True)
class UrlMatch:
    """A URL found on screen: its row, starting column and text."""

    row: int
    col: int
    url: str


def find_last_any(text: str, needles) -> int | None:
    """Return the rightmost index at which any needle starts, or None."""
    best = max((text.rfind(needle) for needle in needles), default=-1)
    return best if best >= 0 else None


def trim_url(text: str) -> str:
    """Return the leading run of characters that may belong to a URL."""
    for i, ch in enumerate(text):
        if ch not in URL_CHARS:
            return text[:i]
    return text


def _scan(line: str, end: int | None = None) -> str:
    # The row is read as ASCII; the first other character ends the text.
    text = line if end is None else line[:end]
    for i, ch in enumerate(text):
        if ord(ch) > 127:
            return text[:i]
    return text


def _check_bounds(lines, top: int, bot: int) -> None:
    if not 0 <= top <= bot < len(lines):
        raise ValueError("row bounds lie outside the screen")


def find_url(lines, top, bot, start_row=None, end_col=None) -> UrlMatch | None:
    """Find the last URL before a position, searching rows upwards.

    The search begins on start_row (default bot) before column end_col
    (default the whole row), moves up row by row, wraps from top to bot and
    gives up after bot + 2 rows.
    """
    _check_bounds(lines, top, bot)
    row = bot if start_row is None else min(max(start_row, top), bot)
    end = None if end_col is None else max(end_col, 0)
    for _ in range(bot + 2):
        text = _scan(lines[row], end)
        index = find_last_any(text, URL_PREFIXES)
        if index is not None:
            return UrlMatch(row, index, trim_url(text[index:]))
        row -= 1
        if row < top:
            row = bot
        end = None
    return None


def find_first_url(lines, top, bot, start_row=None) -> UrlMatch | None:
    """Find a URL on start_row (default bot) or the rows above it, wrapping.

    On each row an 'http://' match is preferred to an 'https://' one.
    """
    _check_bounds(lines, top, bot)
    row = bot if start_row is None else min(max(start_row, top), bot)
    first = row
    while True:
        text = _scan(lines[row])
        for prefix in URL_PREFIXES:
            index = text.find(prefix)
            if index >= 0:
                return UrlMatch(row, index, trim_url(text[index:]))
        row -= 1
        if row < top:
            row = bot
        if row == first:
            return None
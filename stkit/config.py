"""Terminal defaults and loading of overrides from an X resource database."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass, field
from enum import IntEnum

DEFAULT_NAME = "st"
DEFAULT_CLASS = "St"

_NORMAL_COLORS = (
    "black", "red3", "green3", "yellow3",
    "blue2", "magenta3", "cyan3", "gray90",
)
_BRIGHT_COLORS = (
    "gray50", "red", "green", "yellow",
    "#5c5cff", "magenta", "cyan", "white",
)
_EXTRA_COLORS = (
    "#add8e6",  # 256: cursor
    "#555555",  # 257: reverse cursor
    "#000000",  # 258: background
    "#e5e5e5",  # 259: foreground
)

ASCII_PRINTABLE = (
    " !\"#$%&'()*+,-./0123456789:;<=>?"
    "@ABCDEFGHIJKLMNOPQRSTUVWXYZ[\\]^_"
    "`abcdefghijklmnopqrstuvwxyz{|}~"
)


class ResourceType(IntEnum):
    STRING = 0
    INTEGER = 1
    FLOAT = 2


def default_colornames() -> list[str | None]:
    """Return the default colour names: 16 terminal colours, gaps, then extras."""
    names: list[str | None] = [*_NORMAL_COLORS, *_BRIGHT_COLORS]
    names += [None] * (256 - len(names))
    names += _EXTRA_COLORS
    return names


@dataclass
class Config:
    """Appearance and behaviour settings of the terminal."""

    font: str = "mono:pixelsize=14:antialias=true:autohint=true"
    font2: list[str] = field(
        default_factory=lambda: ["Noto Color Emoji:pixelsize=11:antialias=true:autohint=true"]
    )
    borderpx: int = 2
    shell: str = "/bin/sh"
    utmp: str | None = None
    scroll: str | None = None
    stty_args: str = "stty raw pass8 nl -echo -iexten -cstopb 38400"
    vtiden: str = "\033[?12;4c"
    cwscale: float = 1.0
    chscale: float = 0.9
    worddelimiters: str = " "
    doubleclicktimeout: int = 300
    tripleclicktimeout: int = 600
    allowaltscreen: bool = True
    allowwindowops: bool = False
    minlatency: float = 8
    maxlatency: float = 33
    blinktimeout: int = 800
    cursorthickness: int = 1
    bellvolume: int = 0
    termname: str = "st-256color"
    tabspaces: int = 8
    alpha: float = 0.95
    colorname: list[str | None] = field(default_factory=default_colornames)
    defaultfg: int = 259
    defaultbg: int = 258
    defaultcs: int = 256
    defaultrcs: int = 257
    cursorshape: int = 2
    cols: int = 80
    rows: int = 24
    mouseshape: str = "xterm"
    defaultattr: int = 11
    ascii_printable: str = ASCII_PRINTABLE
    plumb_cmd: str = "plumb"


# (resource name, type, Config attribute, index into a list attribute or None)
RESOURCES: tuple[tuple[str, ResourceType, str, int | None], ...] = (
    ("font", ResourceType.STRING, "font", None),
    *(
        (f"color{i}", ResourceType.STRING, "colorname", i)
        for i in range(16)
    ),
    ("background", ResourceType.STRING, "colorname", 258),
    ("foreground", ResourceType.STRING, "colorname", 259),
    ("cursorColor", ResourceType.STRING, "colorname", 256),
    ("termname", ResourceType.STRING, "termname", None),
    ("shell", ResourceType.STRING, "shell", None),
    ("minlatency", ResourceType.INTEGER, "minlatency", None),
    # The resource table binds maxlatency to the minlatency setting.
    ("maxlatency", ResourceType.INTEGER, "minlatency", None),
    ("blinktimeout", ResourceType.INTEGER, "blinktimeout", None),
    ("bellvolume", ResourceType.INTEGER, "bellvolume", None),
    ("tabspaces", ResourceType.INTEGER, "tabspaces", None),
    ("borderpx", ResourceType.INTEGER, "borderpx", None),
    ("cwscale", ResourceType.FLOAT, "cwscale", None),
    ("chscale", ResourceType.FLOAT, "chscale", None),
    ("alpha", ResourceType.FLOAT, "alpha", None),
)


def _logical_lines(text: str):
    pending = ""
    for raw in text.splitlines():
        trailing = len(raw) - len(raw.rstrip("\\"))
        if trailing % 2 == 1:
            pending += raw[:-1]
            continue
        yield pending + raw
        pending = ""
    if pending:
        yield pending


_ESCAPES = {"n": "\n", " ": " ", "\t": "\t", "\\": "\\"}


def _unescape(value: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch != "\\" or i + 1 >= len(value):
            out.append(ch)
            i += 1
            continue
        nxt = value[i + 1]
        octal = value[i + 1:i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(chr(int(octal, 8)))
            i += 4
        elif nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
            i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _normalize_spec(spec: str) -> str:
    return "".join(spec.split())


def parse_resource_database(text: str) -> dict[str, str]:
    """Parse resource lines of the form 'specifier: value'.

    Lines starting with '!' or '#' are skipped, as are lines without a colon.
    A trailing backslash continues a line; later entries replace earlier ones.
    """
    database: dict[str, str] = {}
    for line in _logical_lines(text):
        stripped = line.lstrip(" \t")
        if not stripped or stripped[0] in "!#":
            continue
        spec, sep, value = stripped.partition(":")
        if not sep:
            continue
        spec = _normalize_spec(spec)
        if not spec:
            continue
        database[spec] = _unescape(value.lstrip(" \t"))
    return database


def _split_spec(spec: str) -> list[tuple[bool, str]]:
    parts: list[tuple[bool, str]] = []
    loose = False
    current = ""
    for ch in spec:
        if ch in ".*":
            if current:
                parts.append((loose, current))
                current = ""
                loose = False
            loose = loose or ch == "*"
        else:
            current += ch
    if current:
        parts.append((loose, current))
    return parts


def _best_score(entry, names, classes):
    best = None

    def walk(ei, li, acc):
        nonlocal best
        if ei == len(entry):
            if li == len(names) and (best is None or acc > best):
                best = acc
            return
        if li >= len(names):
            return
        loose, comp = entry[ei]
        if comp == names[li]:
            kind = 3
        elif comp == classes[li]:
            kind = 2
        elif comp == "?":
            kind = 1
        else:
            kind = 0
        if kind:
            walk(ei + 1, li + 1, acc + ((1, kind, 0 if loose else 1),))
        if loose:
            walk(ei, li + 1, acc + ((0, 0, 0),))

    walk(0, 0, ())
    return best


def _lookup(database, fullname: str, fullclass: str) -> str | None:
    names = fullname.split(".")
    classes = fullclass.split(".")
    best_value = None
    best = None
    for spec, value in database.items():
        score = _best_score(_split_spec(spec), names, classes)
        if score is not None and (best is None or score > best):
            best, best_value = score, value
    return best_value


_ULONG_MAX = 2**64 - 1
_INT_RE = re.compile(r"\s*([+-]?)(\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))",
    re.IGNORECASE,
)


def _to_int(text: str) -> int:
    match = _INT_RE.match(text)
    if not match:
        return 0
    value = min(int(match.group(2)), _ULONG_MAX)
    if match.group(1) == "-":
        value = -value % 2**64
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def _to_float(text: str) -> float:
    match = _FLOAT_RE.match(text)
    if not match:
        return 0.0
    value = float(match.group(1))
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def load_resources(config: Config, database, name=None, klass=None) -> list[str]:
    """Apply matching database entries to config; return the names applied.

    Resources are looked up as '<name>.<resource>' with class
    '<klass>.<resource>', defaulting to 'st' and 'St'.
    """
    prefix = name or DEFAULT_NAME
    class_prefix = klass or DEFAULT_CLASS
    applied: list[str] = []
    for resource, rtype, attr, index in RESOURCES:
        raw = _lookup(database, f"{prefix}.{resource}", f"{class_prefix}.{resource}")
        if raw is None:
            continue
        if rtype is ResourceType.STRING:
            value = raw
        elif rtype is ResourceType.INTEGER:
            value = _to_int(raw)
        else:
            value = _to_float(raw)
        if index is None:
            setattr(config, attr, value)
        else:
            getattr(config, attr)[index] = value
        applied.append(resource)
    return applied
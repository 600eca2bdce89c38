"""Keyboard mapping: the key table and the lookup of the string a key sends."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag


class Modifier(IntFlag):
    """X11 modifier state bits."""

    SHIFT = 1 << 0
    LOCK = 1 << 1
    CONTROL = 1 << 2
    MOD1 = 1 << 3
    MOD2 = 1 << 4
    MOD3 = 1 << 5
    MOD4 = 1 << 6
    MOD5 = 1 << 7


ANY_MOD = 0xFFFFFFFF
NO_MOD = 0
SWITCH_MOD = (1 << 13) | (1 << 14)
# Num Lock and the keyboard layout group are ignored when matching.
IGNOREMOD = int(Modifier.MOD2) | SWITCH_MOD

KEYSYMS: dict[str, int] = {
    "BackSpace": 0xFF08,
    "Return": 0xFF0D,
    "ISO_Left_Tab": 0xFE20,
    "Home": 0xFF50,
    "Left": 0xFF51,
    "Up": 0xFF52,
    "Right": 0xFF53,
    "Down": 0xFF54,
    "Prior": 0xFF55,
    "Next": 0xFF56,
    "End": 0xFF57,
    "Insert": 0xFF63,
    "Delete": 0xFFFF,
    "KP_Enter": 0xFF8D,
    "KP_Home": 0xFF95,
    "KP_Left": 0xFF96,
    "KP_Up": 0xFF97,
    "KP_Right": 0xFF98,
    "KP_Down": 0xFF99,
    "KP_Prior": 0xFF9A,
    "KP_Next": 0xFF9B,
    "KP_End": 0xFF9C,
    "KP_Begin": 0xFF9D,
    "KP_Insert": 0xFF9E,
    "KP_Delete": 0xFF9F,
    "KP_Multiply": 0xFFAA,
    "KP_Add": 0xFFAB,
    "KP_Subtract": 0xFFAD,
    "KP_Decimal": 0xFFAE,
    "KP_Divide": 0xFFAF,
    **{f"KP_{n}": 0xFFB0 + n for n in range(10)},
    **{f"F{n}": 0xFFBD + n for n in range(1, 36)},
}


@dataclass(frozen=True)
class Key:
    """One entry of the key table.

    appkey: 0 any, >0 keypad application mode only (2: also not with Num
    Lock), <0 not in keypad application mode. appcursor likewise for cursor
    application mode.
    """

    keysym: int
    mask: int
    string: str
    appkey: int
    appcursor: int


_S = int(Modifier.SHIFT)
_C = int(Modifier.CONTROL)
_A = int(Modifier.MOD1)
_M3 = int(Modifier.MOD3)
_M4 = int(Modifier.MOD4)
_ANY = ANY_MOD
_NO = NO_MOD

_TABLE = (
    ("KP_Home", _S, "\033[2J", 0, -1),
    ("KP_Home", _S, "\033[1;2H", 0, +1),
    ("KP_Home", _ANY, "\033[H", 0, -1),
    ("KP_Home", _ANY, "\033[1~", 0, +1),
    ("KP_Up", _ANY, "\033Ox", +1, 0),
    ("KP_Up", _ANY, "\033[A", 0, -1),
    ("KP_Up", _ANY, "\033OA", 0, +1),
    ("KP_Down", _ANY, "\033Or", +1, 0),
    ("KP_Down", _ANY, "\033[B", 0, -1),
    ("KP_Down", _ANY, "\033OB", 0, +1),
    ("KP_Left", _ANY, "\033Ot", +1, 0),
    ("KP_Left", _ANY, "\033[D", 0, -1),
    ("KP_Left", _ANY, "\033OD", 0, +1),
    ("KP_Right", _ANY, "\033Ov", +1, 0),
    ("KP_Right", _ANY, "\033[C", 0, -1),
    ("KP_Right", _ANY, "\033OC", 0, +1),
    ("KP_Prior", _S, "\033[5;2~", 0, 0),
    ("KP_Prior", _ANY, "\033[5~", 0, 0),
    ("KP_Begin", _ANY, "\033[E", 0, 0),
    ("KP_End", _C, "\033[J", -1, 0),
    ("KP_End", _C, "\033[1;5F", +1, 0),
    ("KP_End", _S, "\033[K", -1, 0),
    ("KP_End", _S, "\033[1;2F", +1, 0),
    ("KP_End", _ANY, "\033[4~", 0, 0),
    ("KP_Next", _S, "\033[6;2~", 0, 0),
    ("KP_Next", _ANY, "\033[6~", 0, 0),
    ("KP_Insert", _S, "\033[2;2~", +1, 0),
    ("KP_Insert", _S, "\033[4l", -1, 0),
    ("KP_Insert", _C, "\033[L", -1, 0),
    ("KP_Insert", _C, "\033[2;5~", +1, 0),
    ("KP_Insert", _ANY, "\033[4h", -1, 0),
    ("KP_Insert", _ANY, "\033[2~", +1, 0),
    ("KP_Delete", _C, "\033[M", -1, 0),
    ("KP_Delete", _C, "\033[3;5~", +1, 0),
    ("KP_Delete", _S, "\033[2K", -1, 0),
    ("KP_Delete", _S, "\033[3;2~", +1, 0),
    ("KP_Delete", _ANY, "\033[P", -1, 0),
    ("KP_Delete", _ANY, "\033[3~", +1, 0),
    ("KP_Multiply", _ANY, "\033Oj", +2, 0),
    ("KP_Add", _ANY, "\033Ok", +2, 0),
    ("KP_Enter", _ANY, "\033OM", +2, 0),
    ("KP_Enter", _ANY, "\r", -1, 0),
    ("KP_Subtract", _ANY, "\033Om", +2, 0),
    ("KP_Decimal", _ANY, "\033On", +2, 0),
    ("KP_Divide", _ANY, "\033Oo", +2, 0),
    ("KP_0", _ANY, "\033Op", +2, 0),
    ("KP_1", _ANY, "\033Oq", +2, 0),
    ("KP_2", _ANY, "\033Or", +2, 0),
    ("KP_3", _ANY, "\033Os", +2, 0),
    ("KP_4", _ANY, "\033Ot", +2, 0),
    ("KP_5", _ANY, "\033Ou", +2, 0),
    ("KP_6", _ANY, "\033Ov", +2, 0),
    ("KP_7", _ANY, "\033Ow", +2, 0),
    ("KP_8", _ANY, "\033Ox", +2, 0),
    ("KP_9", _ANY, "\033Oy", +2, 0),
    ("Up", _S, "\033[1;2A", 0, 0),
    ("Up", _A, "\033[1;3A", 0, 0),
    ("Up", _S | _A, "\033[1;4A", 0, 0),
    ("Up", _C, "\033[1;5A", 0, 0),
    ("Up", _S | _C, "\033[1;6A", 0, 0),
    ("Up", _C | _A, "\033[1;7A", 0, 0),
    ("Up", _S | _C | _A, "\033[1;8A", 0, 0),
    ("Up", _ANY, "\033[A", 0, -1),
    ("Up", _ANY, "\033OA", 0, +1),
    ("Down", _S, "\033[1;2B", 0, 0),
    ("Down", _A, "\033[1;3B", 0, 0),
    ("Down", _S | _A, "\033[1;4B", 0, 0),
    ("Down", _C, "\033[1;5B", 0, 0),
    ("Down", _S | _C, "\033[1;6B", 0, 0),
    ("Down", _C | _A, "\033[1;7B", 0, 0),
    ("Down", _S | _C | _A, "\033[1;8B", 0, 0),
    ("Down", _ANY, "\033[B", 0, -1),
    ("Down", _ANY, "\033OB", 0, +1),
    ("Left", _S, "\033[1;2D", 0, 0),
    ("Left", _A, "\033[1;3D", 0, 0),
    ("Left", _S | _A, "\033[1;4D", 0, 0),
    ("Left", _C, "\033[1;5D", 0, 0),
    ("Left", _S | _C, "\033[1;6D", 0, 0),
    ("Left", _C | _A, "\033[1;7D", 0, 0),
    ("Left", _S | _C | _A, "\033[1;8D", 0, 0),
    ("Left", _ANY, "\033[D", 0, -1),
    ("Left", _ANY, "\033OD", 0, +1),
    ("Right", _S, "\033[1;2C", 0, 0),
    ("Right", _A, "\033[1;3C", 0, 0),
    ("Right", _S | _A, "\033[1;4C", 0, 0),
    ("Right", _C, "\033[1;5C", 0, 0),
    ("Right", _S | _C, "\033[1;6C", 0, 0),
    ("Right", _C | _A, "\033[1;7C", 0, 0),
    ("Right", _S | _C | _A, "\033[1;8C", 0, 0),
    ("Right", _ANY, "\033[C", 0, -1),
    ("Right", _ANY, "\033OC", 0, +1),
    ("ISO_Left_Tab", _S, "\033[Z", 0, 0),
    ("Return", _A, "\033\r", 0, 0),
    ("Return", _ANY, "\r", 0, 0),
    ("Insert", _S, "\033[4l", -1, 0),
    ("Insert", _S, "\033[2;2~", +1, 0),
    ("Insert", _C, "\033[L", -1, 0),
    ("Insert", _C, "\033[2;5~", +1, 0),
    ("Insert", _ANY, "\033[4h", -1, 0),
    ("Insert", _ANY, "\033[2~", +1, 0),
    ("Delete", _C, "\033[M", -1, 0),
    ("Delete", _C, "\033[3;5~", +1, 0),
    ("Delete", _S, "\033[2K", -1, 0),
    ("Delete", _S, "\033[3;2~", +1, 0),
    ("Delete", _ANY, "\033[P", -1, 0),
    ("Delete", _ANY, "\033[3~", +1, 0),
    ("BackSpace", _NO, "\177", 0, 0),
    ("BackSpace", _A, "\033\177", 0, 0),
    ("Home", _S, "\033[2J", 0, -1),
    ("Home", _S, "\033[1;2H", 0, +1),
    ("Home", _ANY, "\033[H", 0, -1),
    ("Home", _ANY, "\033[1~", 0, +1),
    ("End", _C, "\033[J", -1, 0),
    ("End", _C, "\033[1;5F", +1, 0),
    ("End", _S, "\033[K", -1, 0),
    ("End", _S, "\033[1;2F", +1, 0),
    ("End", _ANY, "\033[4~", 0, 0),
    ("Prior", _C, "\033[5;5~", 0, 0),
    ("Prior", _S, "\033[5;2~", 0, 0),
    ("Prior", _ANY, "\033[5~", 0, 0),
    ("Next", _C, "\033[6;5~", 0, 0),
    ("Next", _S, "\033[6;2~", 0, 0),
    ("Next", _ANY, "\033[6~", 0, 0),
    ("F1", _NO, "\033OP", 0, 0),
    ("F1", _S, "\033[1;2P", 0, 0),
    ("F1", _C, "\033[1;5P", 0, 0),
    ("F1", _M4, "\033[1;6P", 0, 0),
    ("F1", _A, "\033[1;3P", 0, 0),
    ("F1", _M3, "\033[1;4P", 0, 0),
    ("F2", _NO, "\033OQ", 0, 0),
    ("F2", _S, "\033[1;2Q", 0, 0),
    ("F2", _C, "\033[1;5Q", 0, 0),
    ("F2", _M4, "\033[1;6Q", 0, 0),
    ("F2", _A, "\033[1;3Q", 0, 0),
    ("F2", _M3, "\033[1;4Q", 0, 0),
    ("F3", _NO, "\033OR", 0, 0),
    ("F3", _S, "\033[1;2R", 0, 0),
    ("F3", _C, "\033[1;5R", 0, 0),
    ("F3", _M4, "\033[1;6R", 0, 0),
    ("F3", _A, "\033[1;3R", 0, 0),
    ("F3", _M3, "\033[1;4R", 0, 0),
    ("F4", _NO, "\033OS", 0, 0),
    ("F4", _S, "\033[1;2S", 0, 0),
    ("F4", _C, "\033[1;5S", 0, 0),
    ("F4", _M4, "\033[1;6S", 0, 0),
    ("F4", _A, "\033[1;3S", 0, 0),
    ("F5", _NO, "\033[15~", 0, 0),
    ("F5", _S, "\033[15;2~", 0, 0),
    ("F5", _C, "\033[15;5~", 0, 0),
    ("F5", _M4, "\033[15;6~", 0, 0),
    ("F5", _A, "\033[15;3~", 0, 0),
    ("F6", _NO, "\033[17~", 0, 0),
    ("F6", _S, "\033[17;2~", 0, 0),
    ("F6", _C, "\033[17;5~", 0, 0),
    ("F6", _M4, "\033[17;6~", 0, 0),
    ("F6", _A, "\033[17;3~", 0, 0),
    ("F7", _NO, "\033[18~", 0, 0),
    ("F7", _S, "\033[18;2~", 0, 0),
    ("F7", _C, "\033[18;5~", 0, 0),
    ("F7", _M4, "\033[18;6~", 0, 0),
    ("F7", _A, "\033[18;3~", 0, 0),
    ("F8", _NO, "\033[19~", 0, 0),
    ("F8", _S, "\033[19;2~", 0, 0),
    ("F8", _C, "\033[19;5~", 0, 0),
    ("F8", _M4, "\033[19;6~", 0, 0),
    ("F8", _A, "\033[19;3~", 0, 0),
    ("F9", _NO, "\033[20~", 0, 0),
    ("F9", _S, "\033[20;2~", 0, 0),
    ("F9", _C, "\033[20;5~", 0, 0),
    ("F9", _M4, "\033[20;6~", 0, 0),
    ("F9", _A, "\033[20;3~", 0, 0),
    ("F10", _NO, "\033[21~", 0, 0),
    ("F10", _S, "\033[21;2~", 0, 0),
    ("F10", _C, "\033[21;5~", 0, 0),
    ("F10", _M4, "\033[21;6~", 0, 0),
    ("F10", _A, "\033[21;3~", 0, 0),
    ("F11", _NO, "\033[23~", 0, 0),
    ("F11", _S, "\033[23;2~", 0, 0),
    ("F11", _C, "\033[23;5~", 0, 0),
    ("F11", _M4, "\033[23;6~", 0, 0),
    ("F11", _A, "\033[23;3~", 0, 0),
    ("F12", _NO, "\033[24~", 0, 0),
    ("F12", _S, "\033[24;2~", 0, 0),
    ("F12", _C, "\033[24;5~", 0, 0),
    ("F12", _M4, "\033[24;6~", 0, 0),
    ("F12", _A, "\033[24;3~", 0, 0),
    ("F13", _NO, "\033[1;2P", 0, 0),
    ("F14", _NO, "\033[1;2Q", 0, 0),
    ("F15", _NO, "\033[1;2R", 0, 0),
    ("F16", _NO, "\033[1;2S", 0, 0),
    ("F17", _NO, "\033[15;2~", 0, 0),
    ("F18", _NO, "\033[17;2~", 0, 0),
    ("F19", _NO, "\033[18;2~", 0, 0),
    ("F20", _NO, "\033[19;2~", 0, 0),
    ("F21", _NO, "\033[20;2~", 0, 0),
    ("F22", _NO, "\033[21;2~", 0, 0),
    ("F23", _NO, "\033[23;2~", 0, 0),
    ("F24", _NO, "\033[24;2~", 0, 0),
    ("F25", _NO, "\033[1;5P", 0, 0),
    ("F26", _NO, "\033[1;5Q", 0, 0),
    ("F27", _NO, "\033[1;5R", 0, 0),
    ("F28", _NO, "\033[1;5S", 0, 0),
    ("F29", _NO, "\033[15;5~", 0, 0),
    ("F30", _NO, "\033[17;5~", 0, 0),
    ("F31", _NO, "\033[18;5~", 0, 0),
    ("F32", _NO, "\033[19;5~", 0, 0),
    ("F33", _NO, "\033[20;5~", 0, 0),
    ("F34", _NO, "\033[21;5~", 0, 0),
    ("F35", _NO, "\033[23;5~", 0, 0),
)

KEYS: tuple[Key, ...] = tuple(
    Key(KEYSYMS[name], mask, string, appkey, appcursor)
    for name, mask, string, appkey, appcursor in _TABLE
)


def match_mask(mask: int, state: int, ignoremod: int = IGNOREMOD) -> bool:
    """Tell whether a table mask matches a modifier state."""
    return mask == ANY_MOD or mask == (state & ~ignoremod)


def find_key(keysym: int, state: int, appkeypad: bool, appcursor: bool,
             numlock: bool) -> str | None:
    """Return the string the key sends in the given modes, or None.

    The table is searched in order and the first fitting entry wins.
    """
    for key in KEYS:
        if key.keysym != keysym or not match_mask(key.mask, state, IGNOREMOD):
            continue
        if (key.appkey < 0) if appkeypad else (key.appkey > 0):
            continue
        if numlock and key.appkey == 2:
            continue
        if (key.appcursor < 0) if appcursor else (key.appcursor > 0):
            continue
        return key.string
    return None
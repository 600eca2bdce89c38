import pytest

from stkit import keys
from stkit.keys import (
    ANY_MOD,
    IGNOREMOD,
    KEYS,
    KEYSYMS,
    Modifier,
    find_key,
    match_mask,
)


def test_cursor_up_normal_and_application_mode():
    up = KEYSYMS["Up"]
    assert find_key(up, 0, False, False, False) == "\033[A"
    assert find_key(up, 0, False, True, False) == "\033OA"


def test_modified_arrows():
    up = KEYSYMS["Up"]
    assert find_key(up, Modifier.SHIFT, False, False, False) == "\033[1;2A"
    assert find_key(up, Modifier.CONTROL | Modifier.MOD1, False, False, False) == "\033[1;7A"


def test_numlock_state_is_ignored_when_matching():
    up = KEYSYMS["Up"]
    assert find_key(up, Modifier.SHIFT | Modifier.MOD2, False, False, False) == "\033[1;2A"


def test_keypad_digit_needs_application_keypad():
    kp1 = KEYSYMS["KP_1"]
    assert find_key(kp1, 0, True, False, False) == "\033Oq"
    assert find_key(kp1, 0, False, False, False) is None
    assert find_key(kp1, 0, True, False, True) is None


def test_keypad_up_prefers_application_keypad_entry():
    kpup = KEYSYMS["KP_Up"]
    assert find_key(kpup, 0, True, False, False) == "\033Ox"
    assert find_key(kpup, 0, False, False, False) == "\033[A"


def test_return_and_backspace():
    assert find_key(KEYSYMS["Return"], Modifier.MOD1, False, False, False) == "\033\r"
    assert find_key(KEYSYMS["Return"], 0, False, False, False) == "\r"
    assert find_key(KEYSYMS["BackSpace"], 0, False, False, False) == "\177"
    assert find_key(KEYSYMS["BackSpace"], Modifier.CONTROL, False, False, False) is None


def test_function_keys():
    assert find_key(KEYSYMS["F1"], 0, False, False, False) == "\033OP"
    assert find_key(KEYSYMS["F5"], Modifier.CONTROL, False, False, False) == "\033[15;5~"
    assert find_key(KEYSYMS["F35"], 0, False, False, False) == "\033[23;5~"


def test_unknown_keysym():
    assert find_key(0x61, 0, False, False, False) is None


def test_match_mask():
    assert match_mask(ANY_MOD, Modifier.SHIFT | Modifier.CONTROL, IGNOREMOD)
    assert match_mask(int(Modifier.SHIFT), Modifier.SHIFT | Modifier.MOD2, IGNOREMOD)
    assert not match_mask(int(Modifier.SHIFT), Modifier.CONTROL, IGNOREMOD)
    assert not match_mask(0, Modifier.SHIFT, IGNOREMOD)


def test_specific_mask_entries_win_over_any_mod():
    delete = KEYSYMS["Delete"]
    assert find_key(delete, Modifier.CONTROL, False, False, False) == "\033[M"
    assert find_key(delete, Modifier.CONTROL, True, False, False) == "\033[3;5~"
    assert find_key(delete, Modifier.MOD1, False, False, False) == "\033[P"
    assert find_key(delete, Modifier.MOD1, True, False, False) == "\033[3~"


@pytest.mark.parametrize("key", KEYS)
def test_every_entry_is_reachable_in_some_mode(key):
    state = 0 if key.mask == ANY_MOD else key.mask
    results = {
        find_key(key.keysym, state, pad, cur, num)
        for pad in (False, True)
        for cur in (False, True)
        for num in (False, True)
    }
    assert key.string in results or any(
        other.keysym == key.keysym and other.string == key.string and other is not key
        for other in keys.KEYS
    )
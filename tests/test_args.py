import pytest

from stkit.args import ParsedArgs, UsageError, parse_args


def test_separate_values():
    parsed = parse_args(["st", "-c", "cls", "-f", "font", "-a"], "cf")
    assert parsed == ParsedArgs("st", [("c", "cls"), ("f", "font"), ("a", None)], [])


def test_clustered_flags_and_attached_value():
    parsed = parse_args(["st", "-afmono"], "f")
    assert parsed.options == [("a", None), ("f", "mono")]
    assert parsed.operands == []


def test_double_dash_stops_and_is_dropped():
    parsed = parse_args(["st", "-a", "--", "-b"], "")
    assert parsed.options == [("a", None)]
    assert parsed.operands == ["-b"]


def test_single_dash_is_operand():
    parsed = parse_args(["st", "-", "-a"], "")
    assert parsed.options == []
    assert parsed.operands == ["-", "-a"]


def test_first_operand_stops_parsing():
    parsed = parse_args(["st", "file", "-a"], "")
    assert parsed.operands == ["file", "-a"]


def test_command_after_flag():
    parsed = parse_args(["st", "-e", "sh", "-c", "ls"], "f")
    assert parsed.options == [("e", None)]
    assert parsed.operands == ["sh", "-c", "ls"]


def test_value_may_look_like_option():
    parsed = parse_args(["st", "-t", "-x", "y"], "t")
    assert parsed.options == [("t", "-x")]
    assert parsed.operands == ["y"]


def test_missing_value_raises():
    with pytest.raises(UsageError):
        parse_args(["st", "-a", "-f"], "f")


def test_program_name():
    assert parse_args(["prog"], "").program == "prog"
import pytest

from stkit.config import (
    Config,
    default_colornames,
    load_resources,
    parse_resource_database,
)


def test_default_colornames_layout():
    names = default_colornames()
    assert len(names) == 260
    assert names[0] == "black"
    assert names[12] == "#5c5cff"
    assert names[255] is None
    assert names[256] == "#add8e6"
    assert names[259] == "#e5e5e5"


def test_default_config_values():
    config = Config()
    assert config.termname == "st-256color"
    assert config.tabspaces == 8
    assert config.colorname[config.defaultbg] == "#000000"


def test_each_resource_type_loads():
    config = Config()
    db = parse_resource_database(
        "st.termname: xterm\nst.blinktimeout: 500\nst.cwscale: 1.25\n"
    )
    applied = load_resources(config, db)
    assert config.termname == "xterm"
    assert config.blinktimeout == 500
    assert config.cwscale == 1.25
    assert set(applied) == {"termname", "blinktimeout", "cwscale"}


def test_parse_skips_comments_and_strips_value():
    db = parse_resource_database("! comment\nst.font:   Mono:size=10\nnocolon\n")
    assert db == {"st.font": "Mono:size=10"}


def test_parse_continuation_lines():
    db = parse_resource_database("st.shell: /bin/\\\nzsh\n")
    assert db["st.shell"] == "/bin/zsh"


def test_parse_escapes():
    db = parse_resource_database("st.termname: a\\nb\n")
    assert db["st.termname"] == "a\nb"


def test_later_entry_replaces_earlier():
    db = parse_resource_database("st.font: One\nst.font: Two\n")
    assert db["st.font"] == "Two"


def test_load_string_and_color():
    config = Config()
    db = parse_resource_database("st.font: Mono\nst.color1: orange\nst.background: #101010\n")
    applied = load_resources(config, db)
    assert config.font == "Mono"
    assert config.colorname[1] == "orange"
    assert config.colorname[258] == "#101010"
    assert set(applied) == {"font", "color1", "background"}


def test_missing_resources_keep_defaults():
    config = Config()
    assert load_resources(config, {}) == []
    assert config == Config()


def test_integer_and_float_resources():
    config = Config()
    db = parse_resource_database("st.tabspaces: 4\nst.bellvolume: -5\nst.chscale: 1.5\n")
    load_resources(config, db)
    assert config.tabspaces == 4
    assert config.bellvolume == -5
    assert config.chscale == 1.5


def test_integer_takes_leading_digits_and_invalid_is_zero():
    config = Config()
    db = parse_resource_database("st.tabspaces:   12abc\nst.borderpx: none\n")
    load_resources(config, db)
    assert config.tabspaces == 12
    assert config.borderpx == 0


def test_maxlatency_binds_minlatency():
    config = Config()
    db = parse_resource_database("st.maxlatency: 50\n")
    load_resources(config, db)
    assert config.minlatency == 50
    assert config.maxlatency == Config().maxlatency


def test_loose_binding_and_class_match():
    config = Config()
    db = parse_resource_database("*foreground: white\nSt.shell: /bin/ksh\n")
    load_resources(config, db)
    assert config.colorname[259] == "white"
    assert config.shell == "/bin/ksh"


def test_tight_name_beats_loose_wildcard():
    config = Config()
    db = parse_resource_database("*background: wild\nst.background: exact\n")
    load_resources(config, db)
    assert config.colorname[258] == "exact"


def test_name_beats_class():
    config = Config()
    db = parse_resource_database("St.font: ByClass\nst.font: ByName\n")
    load_resources(config, db)
    assert config.font == "ByName"


def test_custom_name_and_class():
    config = Config()
    db = parse_resource_database("st.font: Default\nmyterm.font: Custom\n")
    load_resources(config, db, name="myterm", klass="MyTerm")
    assert config.font == "Custom"


def test_other_program_entries_ignored():
    config = Config()
    db = parse_resource_database("xterm.font: Other\n")
    assert load_resources(config, db) == []
    assert config.font == Config().font


@pytest.mark.parametrize("text", ["st.alpha: 0.5", "*alpha: 0.5", "St*alpha: 0.5"])
def test_alpha_forms(text):
    config = Config()
    load_resources(config, parse_resource_database(text))
    assert config.alpha == 0.5
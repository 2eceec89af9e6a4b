import pytest

from dynmenu.config import Config, Scheme


def test_defaults_match_documented_settings():
    config = Config()
    assert config.topbar is True
    assert config.centered is False
    assert config.min_width == 500
    assert config.lines == 0
    assert config.lineheight == 21
    assert config.min_lineheight == 8
    assert config.prompt is None
    assert config.word_delimiters == " "
    assert config.fonts == ["Hack:pixelsize=12:antialias=true:autohint=true"]


def test_default_colors():
    config = Config()
    assert config.color(Scheme.NORM, "fg") == "#ebdbb2"
    assert config.color(Scheme.NORM, "bg") == "#282828"
    assert config.color(Scheme.SEL, "bg") == "#d79921"
    assert config.color(Scheme.OUT, "bg") == "#98971a"


def test_set_color_round_trip_keeps_other_part():
    config = Config()
    before = config.color(Scheme.SEL, "fg")
    config.set_color(Scheme.SEL, "bg", "#112233")
    assert config.color(Scheme.SEL, "bg") == "#112233"
    assert config.color(Scheme.SEL, "fg") == before


def test_instances_do_not_share_state():
    first = Config()
    second = Config()
    first.set_color(Scheme.NORM, "fg", "#000000")
    first.fonts[0] = "monospace:size=10"
    assert second.color(Scheme.NORM, "fg") == Config().color(Scheme.NORM, "fg")
    assert second.fonts == Config().fonts


@pytest.mark.parametrize("part", ["border", "", "FG"])
def test_unknown_part_raises(part):
    config = Config()
    with pytest.raises(ValueError):
        config.color(Scheme.NORM, part)
    with pytest.raises(ValueError):
        config.set_color(Scheme.NORM, part, "#ffffff")


def test_every_scheme_has_both_parts():
    config = Config()
    for scheme in Scheme:
        assert all(config.color(scheme, part).startswith("#") for part in ("fg", "bg"))
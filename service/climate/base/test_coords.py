import pytest

from . import coords
from . import dates


def test_dms_to_degrees():
    assert coords.dms_to_degrees("402443") == pytest.approx(40 + 24 / 60 + 43 / 3600)
    assert coords.dms_to_degrees("000000") == 0


@pytest.mark.parametrize("text", ["40244", "4024433", "40a443", "406043", "402460"])
def test_dms_to_degrees_invalid(text):
    with pytest.raises(ValueError):
        coords.dms_to_degrees(text)


def test_parse_longitude_direction():
    assert coords.parse_longitude("0340392") == pytest.approx(-3.6775)
    assert coords.parse_longitude("0022611") == pytest.approx(2.436389)


def test_parse_longitude_invalid_direction():
    with pytest.raises(ValueError):
        coords.parse_longitude("0340393")


def test_parse_latitude_strips_whitespace():
    assert coords.parse_latitude(" 402443 ") == pytest.approx(40.411944)


def test_month_helpers():
    assert dates.month_name(0) == "January"
    assert dates.month_abbr(11) == "Dec"
    assert dates.iso_date(2017, 6, 5) == "2017-07-05"

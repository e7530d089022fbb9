import pytest

from building_health.errors import InvalidBBLError
from building_health.models.bbl import BBL, normalize_bbl, parse_bbl


@pytest.mark.parametrize("raw,expected", [
    ("1000110001", "1000110001"),
    ("1-000-10001", "0100010001"),
    ("1-00001-0001", "1000010001"),
    ("123", "0000000123"),
    ("3 01234 0056 extra 999", "3012340056"),
    ("", ""),
    (None, ""),
])
def test_normalize_bbl(raw, expected):
    assert normalize_bbl(raw) == expected


def test_normalize_truncates_to_first_ten_digits():
    assert normalize_bbl("123456789012345") == "1234567890"


def test_parse_bbl_segments():
    bbl = parse_bbl("1-00012-0034")
    assert bbl == BBL("1000120034")
    assert bbl.borough == "1"
    assert bbl.block == "12"
    assert bbl.lot == "34"
    assert bbl.block_int == 12
    assert bbl.lot_int == 34
    assert str(bbl) == "1000120034"


@pytest.mark.parametrize("raw", ["", None, "abc", "---"])
def test_parse_bbl_rejects_inputs_without_digits(raw):
    with pytest.raises(InvalidBBLError):
        parse_bbl(raw)


def test_invalid_bbl_is_a_value_error():
    with pytest.raises(ValueError):
        parse_bbl("")

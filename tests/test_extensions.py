import pytest

from aprskit.extensions import (
    Dfs,
    DirectionSpeed,
    Directivity,
    Phg,
    Rng,
    parse_extension,
    require_extension,
)
from aprskit.util import UnsupportedPositionFormatError


def test_direction_speed():
    assert parse_extension(b"322/103") == DirectionSpeed(322, 103)


def test_direction_speed_encode_round_trip():
    ext = DirectionSpeed(322, 103)
    out = ext.encode()
    assert out == b"322/103"
    assert parse_extension(out) == ext


def test_rng_parse():
    assert parse_extension(b"RNG0050") == Rng(50)


def test_rng_encode():
    assert Rng(50).encode() == b"RNG0050"


def test_too_short_returns_none():
    assert parse_extension(b"12/1") is None


def test_phg_valid():
    ext = parse_extension(b"PHG5132")
    assert ext == Phg(25, 20, 3, Directivity(90))


def test_phg_encode_round_trip():
    ext = parse_extension(b"PHG5132")
    assert ext.encode() == b"PHG5132"


def test_phg_nondigit_height_returns_none():
    assert parse_extension(b"PHG0z00") is None


def test_phg_high_byte_returns_none():
    assert parse_extension(b"PHG0\xff00") is None


def test_dfs_nondigit_height_returns_none():
    assert parse_extension(b"DFS0z00") is None


def test_phg_max_digit_height():
    ext = parse_extension(b"PHG0900")
    assert isinstance(ext, Phg)
    assert ext.antenna_height_feet == 5120
    assert ext.directivity.is_omni


def test_dfs_parse_and_encode():
    ext = parse_extension(b"DFS2360")
    assert ext == Dfs(2, 80, 6, Directivity())
    assert ext.encode() == b"DFS2360"


def test_bad_directivity_digit_rejects_extension():
    assert parse_extension(b"PHG5139") is None


def test_only_first_seven_bytes_used():
    assert parse_extension(b"090/010/A=001234") == DirectionSpeed(90, 10)


@pytest.mark.parametrize(
    "digit, degrees",
    [(0, None), (1, 45), (4, 180), (8, 360)],
)
def test_directivity_from_digit(digit, degrees):
    assert Directivity.from_digit(digit) == Directivity(degrees)


def test_directivity_invalid_digit():
    assert Directivity.from_digit(9) is None


def test_directivity_as_digit_wraps():
    assert Directivity(360).as_digit() == 0
    assert Directivity(90).as_digit() == 2
    assert Directivity().as_digit() == 0


def test_require_extension_raises():
    with pytest.raises(UnsupportedPositionFormatError):
        require_extension(b"hello world")


def test_require_extension_returns():
    assert require_extension(b"RNG0100") == Rng(100)
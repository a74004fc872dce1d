import pytest

from dsbus.arith import DivisionMode, HaltMode, divide, halt_mode_from, square_root

MASK64 = 0xFFFFFFFFFFFFFFFF


def signed64(value):
    return value - (1 << 64) if value >> 63 else value


@pytest.mark.parametrize(
    "value, expected",
    [
        (0x00, HaltMode.NONE),
        (0x40, HaltMode.GBA_MODE),
        (0x80, HaltMode.HALT),
        (0xC0, HaltMode.SLEEP),
        (0xBF, HaltMode.HALT),
    ],
)
def test_halt_mode_from_uses_top_two_bits(value, expected):
    assert halt_mode_from(value) is expected


@pytest.mark.parametrize(
    "numerator, denominator",
    [(100, 7), (-100, 7), (100, -7), (-100, -7), (7, 100), (1 << 40, 3)],
)
def test_mode2_division_identity(numerator, denominator):
    result, remainder, by_zero = divide(numerator & MASK64, denominator & MASK64, DivisionMode.MODE2)
    q = signed64(result)
    r = signed64(remainder)
    assert by_zero is False
    assert q * denominator + r == numerator
    assert abs(r) < abs(denominator)
    assert r == 0 or (r < 0) == (numerator < 0)


def test_mode0_ignores_upper_halves():
    plain = divide(1000, 10, DivisionMode.MODE0)
    noisy = divide((0x1234 << 32) | 1000, (0x55 << 32) | 10, DivisionMode.MODE0)
    assert noisy[:2] == plain[:2]
    assert signed64(plain[0]) * 10 + signed64(plain[1]) == 1000


def test_division_by_zero_mode2_positive_numerator():
    result, remainder, by_zero = divide(5, 0, DivisionMode.MODE2)
    assert result == 0xFFFFFFFFFFFFFFFF
    assert remainder == 5
    assert by_zero is True


def test_division_by_zero_mode2_negative_numerator():
    numerator = (-3) & MASK64
    result, remainder, by_zero = divide(numerator, 0, DivisionMode.MODE2)
    assert result == 1
    assert remainder == numerator
    assert by_zero is True


def test_division_by_zero_mode0_flips_upper_half():
    result, remainder, by_zero = divide(0, 0, DivisionMode.MODE0)
    assert result == 0xFFFFFFFFFFFFFFFF ^ 0xFFFFFFFF00000000
    assert remainder == 0
    assert by_zero is True


def test_mode1_zero_low_denominator_without_flag():
    result, remainder, by_zero = divide(5, 1 << 32, DivisionMode.MODE1)
    assert by_zero is False
    assert result == 0xFFFFFFFFFFFFFFFF
    assert remainder == 5


def test_mode2_overflow():
    minimum = 0x8000000000000000
    result, remainder, by_zero = divide(minimum, MASK64, DivisionMode.MODE2)
    assert result == minimum
    assert remainder == 0
    assert by_zero is False


def test_invalid_mode_rejected():
    with pytest.raises(ValueError):
        divide(1, 1, 3)


@pytest.mark.parametrize("param", [0, 1, 2, 15, 16, 17, 0xFFFFFFFF, 123456789])
def test_square_root_32bit_is_floor(param):
    root = square_root(param, False)
    assert root * root <= param < (root + 1) * (root + 1)


def test_square_root_32bit_ignores_upper_half():
    assert square_root((7 << 32) | 81, False) == square_root(81, False)


@pytest.mark.parametrize("param", [1 << 40, MASK64, (1 << 62) + 12345])
def test_square_root_64bit_is_floor(param):
    root = square_root(param, True)
    assert root * root <= param < (root + 1) * (root + 1)
    assert root <= 0xFFFFFFFF
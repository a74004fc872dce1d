"""ARM9 hardware maths (divider and square root) and ARM7 halt control decoding."""

from __future__ import annotations

import math
from enum import IntEnum

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_UPPER32 = 0xFFFFFFFF00000000
_I64_MIN = -(1 << 63)


class HaltMode(IntEnum):
    NONE = 0
    GBA_MODE = 1
    HALT = 2
    SLEEP = 3


class DivisionMode(IntEnum):
    """Operand widths of the hardware divider."""

    MODE0 = 0  # 32 / 32
    MODE1 = 1  # 64 / 32
    MODE2 = 2  # 64 / 64


def halt_mode_from(value: int) -> HaltMode:
    """Decode the halt mode held in bits 6-7 of a HALTCNT write."""
    return HaltMode((value >> 6) & 0x3)


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        return value - (1 << bits)
    return value


def _trunc_divmod(numerator: int, denominator: int) -> tuple[int, int]:
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return quotient, numerator - quotient * denominator


def divide(numerator: int, denominator: int, mode: DivisionMode | int) -> tuple[int, int, bool]:
    """Run the hardware divider on raw 64-bit register values.

    Returns ``(result, remainder, division_by_zero)`` with the result and the
    remainder as unsigned 64-bit register contents.
    """
    mode = DivisionMode(mode)
    numerator &= _MASK64
    denominator &= _MASK64

    division_by_zero = denominator == 0

    if mode is DivisionMode.MODE0:
        num = _signed(numerator, 32)
        den = _signed(denominator, 32)
    elif mode is DivisionMode.MODE1:
        num = _signed(numerator, 64)
        den = _signed(denominator, 32)
    else:
        num = _signed(numerator, 64)
        den = _signed(denominator, 64)

    if den == 0:
        quotient = 1 if num < 0 else -1
        result = quotient & _MASK64
        remainder = num & _MASK64
        if mode is DivisionMode.MODE0:
            # 32-bit division by zero also flips the upper half of the result
            result ^= _UPPER32
    elif num == _I64_MIN and den == -1:
        result = num & _MASK64
        remainder = 0
        if mode is DivisionMode.MODE0:
            result ^= _UPPER32
    else:
        quotient, rem = _trunc_divmod(num, den)
        result = quotient & _MASK64
        remainder = rem & _MASK64

    return result, remainder, division_by_zero


def square_root(param: int, is_64bit: bool) -> int:
    """Floor square root of the low 32 bits, or of all 64 bits, of ``param``."""
    operand = param & (_MASK64 if is_64bit else _MASK32)
    return math.isqrt(operand) & _MASK32
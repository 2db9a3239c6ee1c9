"""Sample formats and conversion of sample streams between them."""

from __future__ import annotations

import math
import operator
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple, Union

Number = Union[int, float]
SizeHint = Tuple[int, Optional[int]]

I16_MIN = -32768
I16_MAX = 32767
U16_MAX = 65535
U16_ZERO = 32768


def _saturate(value: float, low: int, high: int) -> int:
    """Cast a float to an integer range, truncating and clamping; NaN becomes 0."""
    if math.isnan(value):
        return 0
    if value <= low:
        return low
    if value >= high:
        return high
    return int(value)


def _round_away(value: float) -> float:
    """Round half away from zero."""
    if not math.isfinite(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def _wrap_i16(value: int) -> int:
    return ((value + 32768) & 0xFFFF) - 32768


def _wrap_u16(value: int) -> int:
    return value & 0xFFFF


def _size_hint(iterator: Iterator) -> SizeHint:
    """Lower and upper bound of the items an iterator has left."""
    hint = getattr(iterator, "size_hint", None)
    if callable(hint):
        return hint()
    remaining = operator.length_hint(iterator, -1)
    if remaining < 0:
        return (0, None)
    return (remaining, remaining)


class SampleFormat(Enum):
    """The representation of a single sample value.

    - ``I16``: silence is 0, amplitudes span -32768..32767.
    - ``U16``: silence is 32768, amplitudes span 0..65535.
    - ``F32``: silence is 0.0, amplitudes span -1.0..1.0.
    """

    I16 = "i16"
    U16 = "u16"
    F32 = "f32"

    def lerp(self, first: Number, second: Number, numerator: int, denominator: int) -> Number:
        """Linear interpolation from ``first`` toward ``second`` by numerator/denominator."""
        if self is SampleFormat.F32:
            return first + (second - first) * numerator / denominator
        value = first + _div_trunc((second - first) * numerator, denominator)
        if self is SampleFormat.I16:
            return _wrap_i16(value)
        return _wrap_u16(value)

    def amplify(self, value: Number, factor: float) -> Number:
        """Multiply a sample by ``factor``, saturating for integer formats."""
        if self is SampleFormat.F32:
            return value * factor
        if self is SampleFormat.I16:
            return _saturate(value * factor, I16_MIN, I16_MAX)
        return SampleFormat.I16.amplify(value - U16_ZERO, factor) + U16_ZERO

    def saturating_add(self, first: Number, second: Number) -> Number:
        """Add two samples, clamping integer formats to their range."""
        total = first + second
        if self is SampleFormat.I16:
            return max(I16_MIN, min(I16_MAX, total))
        if self is SampleFormat.U16:
            return max(0, min(U16_MAX, total))
        return total

    def zero_value(self) -> Number:
        """The value that stands for silence."""
        if self is SampleFormat.I16:
            return 0
        if self is SampleFormat.U16:
            return U16_ZERO
        return 0.0

    def to_f32(self, value: Number) -> float:
        """Convert a sample of this format to a float in -1.0..1.0."""
        if self is SampleFormat.F32:
            return value
        if self is SampleFormat.U16:
            value = value - U16_ZERO
        if value < 0:
            return value / -I16_MIN
        return value / I16_MAX

    def _to_i16(self, value: Number) -> int:
        if self is SampleFormat.I16:
            return value
        if self is SampleFormat.U16:
            return value - U16_ZERO
        if value >= 0.0:
            return _saturate(value * I16_MAX, I16_MIN, I16_MAX)
        return _saturate(-value * I16_MIN, I16_MIN, I16_MAX)

    def _to_u16(self, value: Number) -> int:
        if self is SampleFormat.U16:
            return value
        if self is SampleFormat.I16:
            return value + U16_ZERO
        return _saturate(_round_away((value + 1.0) * 0.5 * U16_MAX), 0, U16_MAX)

    def convert(self, value: Number, target: "SampleFormat") -> Number:
        """Convert a sample of this format to ``target``."""
        if target is SampleFormat.F32:
            return self.to_f32(value)
        if target is SampleFormat.I16:
            return self._to_i16(value)
        return self._to_u16(value)


class DataConverter:
    """Iterator converting every sample of ``inner`` from ``source`` to ``target`` format."""

    def __init__(self, inner: Iterable[Number], source: SampleFormat, target: SampleFormat):
        self.inner = iter(inner)
        self.source = source
        self.target = target

    def __iter__(self) -> "DataConverter":
        return self

    def __next__(self) -> Number:
        return self.source.convert(next(self.inner), self.target)

    def size_hint(self) -> SizeHint:
        """Bounds on the number of samples left."""
        return _size_hint(self.inner)
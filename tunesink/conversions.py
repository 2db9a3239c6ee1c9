"""Converters between channel counts and sample rates of interleaved sample streams."""

from __future__ import annotations

import math
from collections import deque
from itertools import islice
from typing import Iterable, Optional

from .sample import Number, SampleFormat, SizeHint, _size_hint


class ChannelCountConverter:
    """Iterator that converts interleaved samples from one channel count to another.

    Extra input channels are dropped; missing output channels repeat the last input channel.
    """

    def __init__(self, inner: Iterable[Number], from_channels: int, to_channels: int):
        if from_channels < 1:
            raise ValueError("source channel count must be at least 1")
        if to_channels < 1:
            raise ValueError("target channel count must be at least 1")
        self.inner = iter(inner)
        self.from_channels = from_channels
        self.to_channels = to_channels
        self._repeat: Optional[Number] = None
        self._position = 0

    def __iter__(self) -> "ChannelCountConverter":
        return self

    def __next__(self) -> Number:
        if self._position == self.from_channels - 1:
            result = next(self.inner, None)
            self._repeat = result
        elif self._position < self.from_channels:
            result = next(self.inner, None)
        else:
            result = self._repeat

        self._position += 1
        if self._position == self.to_channels:
            self._position = 0
            for _ in range(self.to_channels, self.from_channels):
                next(self.inner, None)

        if result is None:
            raise StopIteration
        return result

    def size_hint(self) -> SizeHint:
        """Bounds on the number of samples left."""
        low, high = _size_hint(self.inner)

        def scale(count: int) -> int:
            return count // self.from_channels * self.to_channels + self._position

        return scale(low), None if high is None else scale(high)


class SampleRateConverter:
    """Iterator that resamples interleaved samples by linear interpolation."""

    def __init__(
        self,
        inner: Iterable[Number],
        from_rate: int,
        to_rate: int,
        channels: int,
        sample_format: SampleFormat,
    ):
        if from_rate < 1:
            raise ValueError("source sample rate must be at least 1")
        if to_rate < 1:
            raise ValueError("target sample rate must be at least 1")
        if channels < 1:
            raise ValueError("channel count must be at least 1")

        self.inner = iter(inner)
        self.channels = channels
        self.sample_format = sample_format

        if from_rate == to_rate:
            self._current: list = []
            self._next: list = []
        else:
            self._current = list(islice(self.inner, channels))
            self._next = list(islice(self.inner, channels))

        divisor = math.gcd(from_rate, to_rate)
        self._from = from_rate // divisor
        self._to = to_rate // divisor
        self._current_pos = 0
        self._output_pos = 0
        self._output: deque = deque()

    def __iter__(self) -> "SampleRateConverter":
        return self

    def _next_input_frame(self) -> None:
        self._current_pos += 1
        self._current = self._next
        self._next = list(islice(self.inner, self.channels))

    def __next__(self) -> Number:
        if self._from == self._to:
            return next(self.inner)

        if self._output:
            return self._output.popleft()

        if self._output_pos == self._to:
            self._output_pos = 0
            self._next_input_frame()
            while self._current_pos != self._from:
                self._next_input_frame()
            self._current_pos = 0
        else:
            left = (self._from * self._output_pos // self._to) % self._from
            while self._current_pos != left:
                self._next_input_frame()

        numerator = (self._from * self._output_pos) % self._to
        interpolated = [
            self.sample_format.lerp(cur, nxt, numerator, self._to)
            for cur, nxt in zip(self._current, self._next)
        ]
        self._output_pos += 1

        if interpolated:
            self._output.extend(interpolated[1:])
            return interpolated[0]

        if not self._current:
            raise StopIteration
        first, *rest = self._current
        self._output = deque(rest)
        self._current = []
        return first

    def size_hint(self) -> SizeHint:
        """Estimated bounds on the number of samples left."""
        if self._from == self._to:
            return _size_hint(self.inner)

        def apply(samples: int) -> int:
            after_chunk = samples
            if self._current_pos == self._from - 1:
                after_chunk += len(self._next)
            unread = max(0, self._from - (self._current_pos + 2)) * self.channels
            after_chunk = max(0, after_chunk - unread)
            after_chunk = after_chunk * self._to // self._from
            current_chunk = (self._to - self._output_pos) * self.channels
            return current_chunk + after_chunk + len(self._output)

        low, high = _size_hint(self.inner)
        return apply(low), None if high is None else apply(high)
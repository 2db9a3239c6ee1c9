"""A source that plays samples held in memory."""

from __future__ import annotations

import operator
from typing import Iterable, Optional

from .sample import Number, SampleFormat, SizeHint, _round_away
from .source import SeekError, Source

_NANOS_PER_SEC = 1_000_000_000
_U64_MAX = 2**64 - 1


class SamplesBuffer(Source):
    """A list of interleaved samples treated as a source."""

    def __init__(
        self,
        channels: int,
        sample_rate: int,
        data: Iterable[Number],
        sample_format: SampleFormat = SampleFormat.F32,
    ):
        if channels == 0:
            raise ValueError("channel count must not be zero")
        if sample_rate == 0:
            raise ValueError("sample rate must not be zero")
        samples = list(data)
        scaled = _NANOS_PER_SEC * len(samples)
        if scaled > _U64_MAX:
            raise OverflowError("buffer too long to compute its duration")
        duration_ns = scaled // sample_rate // channels
        self._channels = channels
        self._sample_rate = sample_rate
        self._duration = duration_ns / _NANOS_PER_SEC
        self._data = iter(samples)
        self.sample_format = sample_format

    def __next__(self) -> Number:
        return next(self._data)

    def size_hint(self) -> SizeHint:
        remaining = operator.length_hint(self._data)
        return (remaining, remaining)

    def current_frame_len(self) -> Optional[int]:
        return None

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> Optional[float]:
        return self._duration

    def elapsed(self) -> float:
        return 0.0

    def seek(self, time: float) -> float:
        """Skip forward by ``time`` seconds' worth of samples; raise SeekError past the end."""
        millis = round(time * _NANOS_PER_SEC) // 1_000_000
        count = int(_round_away(self._sample_rate / 1000.0 * millis))
        for skipped in range(count):
            if next(self._data, None) is None:
                raise SeekError(f"buffer ended after skipping {skipped} samples")
        return time
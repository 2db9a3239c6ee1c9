"""Fading, periodic access, sample conversion and truncation of sources."""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Optional

from .sample import Number, SampleFormat, SizeHint
from .source import Source, SourceFilter

NANOS_PER_SEC = 1_000_000_000


def _to_nanos(seconds: float) -> int:
    return round(seconds * NANOS_PER_SEC)


class FadeIn(SourceFilter):
    """Raises the volume from silence to full over ``duration`` seconds."""

    def __init__(self, inner: Source, duration: float):
        super().__init__(inner)
        total = float(_to_nanos(duration))
        self._remaining_ns = total
        self._total_ns = total

    def __next__(self) -> Number:
        if self._remaining_ns <= 0.0:
            return next(self.inner)
        factor = 1.0 - self._remaining_ns / self._total_ns
        self._remaining_ns -= NANOS_PER_SEC / (self.inner.sample_rate() * self.channels())
        return self.sample_format.amplify(next(self.inner), factor)


class PeriodicAccess(SourceFilter):
    """Calls ``access`` with the inner source on the first sample and then every ``period``.

    The rate of access is fixed from the sample rate and channel count seen at creation.
    """

    def __init__(self, inner: Source, period: float, access: Callable[[Source], None]):
        super().__init__(inner)
        update_ms = _to_nanos(period) // 1_000_000
        self._update_frequency = (update_ms * inner.sample_rate()) // 1000 * inner.channels()
        self._access = access
        self._samples_until_update = 1

    def __next__(self) -> Number:
        self._samples_until_update = max(0, self._samples_until_update - 1)
        if self._samples_until_update == 0:
            self._access(self.inner)
            self._samples_until_update = self._update_frequency
        return next(self.inner)


class SamplesConverter(SourceFilter):
    """Converts every sample of the inner source to the ``target`` format."""

    def __init__(self, inner: Source, target: SampleFormat):
        super().__init__(inner)
        self.target = target

    @property
    def sample_format(self) -> SampleFormat:  # type: ignore[override]
        return self.target

    def __next__(self) -> Number:
        return self.inner.sample_format.convert(next(self.inner), self.target)

    def elapsed(self) -> float:
        return 0.0


class _DurationFilter(Enum):
    FADE_OUT = "fade_out"


class TakeDuration(SourceFilter):
    """Truncates the inner source to ``duration`` seconds."""

    def __init__(self, inner: Source, duration: float):
        super().__init__(inner)
        self._current_frame_len = inner.current_frame_len()
        self._ns_per_sample = self._duration_per_sample(inner)
        self._requested = duration
        self._requested_ns = _to_nanos(duration)
        self._remaining_ns = self._requested_ns
        self._filter: Optional[_DurationFilter] = None

    @staticmethod
    def _duration_per_sample(source: Source) -> int:
        return NANOS_PER_SEC // source.sample_rate() * source.channels()

    def set_filter_fadeout(self) -> None:
        """Fade the sound out linearly over the taken duration."""
        self._filter = _DurationFilter.FADE_OUT

    def clear_filter(self) -> None:
        """Remove any filter."""
        self._filter = None

    def _apply_filter(self, sample: Number) -> Number:
        remaining_ms = float(self._remaining_ns // 1_000_000)
        total_ms = float(self._requested_ns // 1_000_000)
        if total_ms:
            factor = remaining_ms / total_ms
        else:
            factor = math.nan if remaining_ms == 0 else math.inf
        return self.sample_format.amplify(sample, factor)

    def __next__(self) -> Number:
        if self._current_frame_len is not None:
            if self._current_frame_len > 0:
                self._current_frame_len -= 1
            else:
                self._current_frame_len = self.inner.current_frame_len()
                self._ns_per_sample = self._duration_per_sample(self.inner)

        if self._remaining_ns <= self._ns_per_sample:
            raise StopIteration
        sample = next(self.inner)
        if self._filter is _DurationFilter.FADE_OUT:
            sample = self._apply_filter(sample)
        self._remaining_ns -= self._ns_per_sample
        return sample

    def current_frame_len(self) -> Optional[int]:
        remaining_samples = self._remaining_ns // self._ns_per_sample
        inner_len = self.inner.current_frame_len()
        if inner_len is not None and inner_len < remaining_samples:
            return inner_len
        return remaining_samples

    def total_duration(self) -> Optional[float]:
        duration = self.inner.total_duration()
        if duration is None:
            return None
        return duration if duration < self._requested else self._requested

    def size_hint(self) -> SizeHint:
        return (0, None)
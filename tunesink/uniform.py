"""A source adapter that delivers samples at a fixed channel count, rate and format."""

from __future__ import annotations

from typing import Optional

from .conversions import ChannelCountConverter, SampleRateConverter
from .sample import DataConverter, Number, SampleFormat, SizeHint, _size_hint
from .source import Source

MAX_FRAME_LEN = 32768


class _Take:
    """Yields at most ``n`` items of a source; ``None`` means no limit."""

    def __init__(self, source: Source, n: Optional[int]):
        self.source = source
        self.n = n

    def __iter__(self) -> "_Take":
        return self

    def __next__(self) -> Number:
        if self.n is None:
            return next(self.source)
        if self.n == 0:
            raise StopIteration
        self.n -= 1
        return next(self.source)

    def size_hint(self) -> SizeHint:
        low, high = _size_hint(self.source)
        if self.n is None:
            return low, high
        low = min(low, self.n)
        high = high if high is not None and high < self.n else self.n
        return low, high


class UniformSourceIterator(Source):
    """Converts a source to ``target_channels``, ``target_sample_rate`` and ``target_format``.

    The conversion chain is rebuilt at every frame boundary of the inner source so that
    changes in its channel count or sample rate are followed.
    """

    def __init__(
        self,
        inner: Source,
        target_channels: int,
        target_sample_rate: int,
        target_format: Optional[SampleFormat] = None,
    ):
        self.inner = inner
        self.target_channels = target_channels
        self.target_sample_rate = target_sample_rate
        self.sample_format = inner.sample_format if target_format is None else target_format
        self._total_duration = inner.total_duration()
        self._chain = self._bootstrap()

    def _bootstrap(self) -> DataConverter:
        frame_len = self.inner.current_frame_len()
        if frame_len is not None:
            frame_len = min(frame_len, MAX_FRAME_LEN)
        from_channels = self.inner.channels()
        taken = _Take(self.inner, frame_len)
        resampled = SampleRateConverter(
            taken,
            self.inner.sample_rate(),
            self.target_sample_rate,
            from_channels,
            self.inner.sample_format,
        )
        rechanneled = ChannelCountConverter(resampled, from_channels, self.target_channels)
        return DataConverter(rechanneled, self.inner.sample_format, self.sample_format)

    def __next__(self) -> Number:
        try:
            return next(self._chain)
        except StopIteration:
            pass
        self._chain = self._bootstrap()
        return next(self._chain)

    def size_hint(self) -> SizeHint:
        return (self._chain.size_hint()[0], None)

    def current_frame_len(self) -> Optional[int]:
        return None

    def channels(self) -> int:
        return self.target_channels

    def sample_rate(self) -> int:
        return self.target_sample_rate

    def total_duration(self) -> Optional[float]:
        return self._total_duration

    def elapsed(self) -> float:
        return 0.0

    def seek(self, time: float) -> float:
        try:
            return self.inner.seek(time)
        finally:
            self._chain = self._bootstrap()
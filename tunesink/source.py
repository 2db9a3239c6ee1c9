"""The Source interface for streams of interleaved samples, and the trivial sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from .sample import Number, SampleFormat, SizeHint


class SeekError(Exception):
    """Raised when a source cannot seek to the requested position."""


class Source(ABC):
    """An iterator of interleaved samples with a channel count and a sample rate.

    Durations and times are floats in seconds. ``sample_format`` tells how the
    samples produced by the iterator are represented.
    """

    sample_format: SampleFormat

    def __iter__(self) -> "Source":
        return self

    @abstractmethod
    def __next__(self) -> Number:
        """Return the next sample or raise StopIteration."""

    @abstractmethod
    def current_frame_len(self) -> Optional[int]:
        """Samples left before channels or sample rate may change; None means until the end."""

    @abstractmethod
    def channels(self) -> int:
        """Number of interleaved channels."""

    @abstractmethod
    def sample_rate(self) -> int:
        """Samples per second for each channel."""

    @abstractmethod
    def total_duration(self) -> Optional[float]:
        """Total length in seconds, or None if unknown or infinite."""

    @abstractmethod
    def seek(self, time: float) -> float:
        """Move to ``time`` seconds and return the position reached; raise SeekError on failure."""

    @abstractmethod
    def elapsed(self) -> float:
        """Seconds played so far, as far as the source knows."""

    def size_hint(self) -> SizeHint:
        """Lower and upper bound of the samples left; the upper bound may be None."""
        return (0, None)

    def take_duration(self, duration: float) -> "Source":
        """Play only the first ``duration`` seconds of this source."""
        from .effects import TakeDuration

        return TakeDuration(self, duration)

    def amplify(self, value: float) -> "Source":
        """Multiply every sample by ``value``."""
        from .filters import Amplify

        return Amplify(self, value)

    def fade_in(self, duration: float) -> "Source":
        """Raise the volume from silence over ``duration`` seconds."""
        from .effects import FadeIn

        return FadeIn(self, duration)

    def periodic_access(self, period: float, access: Callable[["Source"], None]) -> "Source":
        """Call ``access`` with this source on the first sample and every ``period`` seconds."""
        from .effects import PeriodicAccess

        return PeriodicAccess(self, period, access)

    def convert_samples(self, target: SampleFormat) -> "Source":
        """Convert the samples of this source to the ``target`` format."""
        from .effects import SamplesConverter

        return SamplesConverter(self, target)

    def pausable(self, initially_paused: bool) -> "Source":
        """Make the source pausable."""
        from .filters import Pausable

        return Pausable(self, initially_paused)

    def stoppable(self) -> "Source":
        """Make the source stoppable."""
        from .filters import Stoppable

        return Stoppable(self)


class SourceFilter(Source):
    """A source wrapping another one; everything is passed through to ``inner`` by default."""

    def __init__(self, inner: Source):
        self.inner = inner

    @property
    def sample_format(self) -> SampleFormat:  # type: ignore[override]
        return self.inner.sample_format

    def __next__(self) -> Number:
        return next(self.inner)

    def current_frame_len(self) -> Optional[int]:
        return self.inner.current_frame_len()

    def channels(self) -> int:
        return self.inner.channels()

    def sample_rate(self) -> int:
        return self.inner.sample_rate()

    def total_duration(self) -> Optional[float]:
        return self.inner.total_duration()

    def seek(self, time: float) -> float:
        return self.inner.seek(time)

    def elapsed(self) -> float:
        return self.inner.elapsed()

    def size_hint(self) -> SizeHint:
        return self.inner.size_hint()


class Empty(Source):
    """A source that produces no samples."""

    def __init__(self, sample_format: SampleFormat = SampleFormat.F32):
        self.sample_format = sample_format

    def __next__(self) -> Number:
        raise StopIteration

    def current_frame_len(self) -> Optional[int]:
        return None

    def channels(self) -> int:
        return 1

    def sample_rate(self) -> int:
        return 48000

    def total_duration(self) -> Optional[float]:
        return 0.0

    def seek(self, time: float) -> float:
        return time

    def elapsed(self) -> float:
        return 0.0


class Zero(Source):
    """An infinite source of silence."""

    def __init__(
        self,
        channels: int,
        sample_rate: int,
        sample_format: SampleFormat = SampleFormat.F32,
    ):
        self._channels = channels
        self._sample_rate = sample_rate
        self.sample_format = sample_format

    def __next__(self) -> Number:
        return self.sample_format.zero_value()

    def current_frame_len(self) -> Optional[int]:
        return None

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> Optional[float]:
        return None

    def seek(self, time: float) -> float:
        return time

    def elapsed(self) -> float:
        return 0.0
"""Filters that amplify, stop, pause or report the end of a source."""

from __future__ import annotations

from typing import Callable, Optional

from .sample import Number
from .source import Source, SourceFilter


class Amplify(SourceFilter):
    """Multiplies every sample by ``factor``, which may be changed while playing."""

    def __init__(self, inner: Source, factor: float):
        super().__init__(inner)
        self.factor = factor

    def __next__(self) -> Number:
        return self.sample_format.amplify(next(self.inner), self.factor)


class Done(SourceFilter):
    """Calls ``on_done`` once, the first time the inner source runs out."""

    def __init__(self, inner: Source, on_done: Callable[[], None]):
        super().__init__(inner)
        self._on_done = on_done
        self._signalled = False

    def __next__(self) -> Number:
        try:
            return next(self.inner)
        except StopIteration:
            if not self._signalled:
                self._signalled = True
                self._on_done()
            raise


class Stoppable(SourceFilter):
    """Ends the stream as soon as ``stop`` has been called."""

    def __init__(self, inner: Source):
        super().__init__(inner)
        self.stopped = False

    def stop(self) -> None:
        """Stop the sound; no more samples are produced."""
        self.stopped = True

    def __next__(self) -> Number:
        if self.stopped:
            raise StopIteration
        return next(self.inner)


class Pausable(SourceFilter):
    """Produces silence instead of the inner samples while paused.

    Silence is produced a whole frame at a time so that channels stay aligned.
    """

    def __init__(self, inner: Source, paused: bool = False):
        super().__init__(inner)
        self._paused_channels: Optional[int] = inner.channels() if paused else None
        self._remaining_silence = 0

    @property
    def paused(self) -> bool:
        """Whether the inner sound is held back."""
        return self._paused_channels is not None

    @paused.setter
    def paused(self, value: bool) -> None:
        if value and self._paused_channels is None:
            self._paused_channels = self.inner.channels()
        elif not value and self._paused_channels is not None:
            self._paused_channels = None

    def __next__(self) -> Number:
        if self._remaining_silence > 0:
            self._remaining_silence -= 1
            return self.sample_format.zero_value()
        if self._paused_channels is not None:
            self._remaining_silence = self._paused_channels - 1
            return self.sample_format.zero_value()
        return next(self.inner)
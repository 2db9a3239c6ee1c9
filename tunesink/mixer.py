"""A mixer that plays several sources at the same time."""

from __future__ import annotations

import threading
from typing import List, Optional, Tuple

from .sample import Number, SampleFormat, SizeHint
from .source import SeekError, Source
from .uniform import UniformSourceIterator


def mixer(
    channels: int,
    sample_rate: int,
    sample_format: SampleFormat = SampleFormat.F32,
) -> Tuple["DynamicMixerController", "DynamicMixer"]:
    """Build a mixer; every source added is converted to these output characteristics."""
    controller = DynamicMixerController(channels, sample_rate, sample_format)
    return controller, DynamicMixer(controller)


class DynamicMixerController:
    """The input of the mixer; sources may be added from any thread."""

    def __init__(self, channels: int, sample_rate: int, sample_format: SampleFormat = SampleFormat.F32):
        self.channels = channels
        self.sample_rate = sample_rate
        self.sample_format = sample_format
        self._lock = threading.Lock()
        self._pending: List[Source] = []
        self._has_pending = False

    def add(self, source: Source) -> None:
        """Add a source to mix with the ones already playing."""
        uniform = UniformSourceIterator(source, self.channels, self.sample_rate, self.sample_format)
        with self._lock:
            self._pending.append(uniform)
            self._has_pending = True


class DynamicMixer(Source):
    """The output of the mixer: the saturating sum of every source playing."""

    def __init__(self, controller: DynamicMixerController):
        self._input = controller
        self._current: List[Source] = []
        self._sample_count = 0

    @property
    def sample_format(self) -> SampleFormat:  # type: ignore[override]
        return self._input.sample_format

    def __next__(self) -> Number:
        if self._input._has_pending:
            self._start_pending_sources()
        self._sample_count += 1
        total = self._sum_current_sources()
        if not self._current:
            raise StopIteration
        return total

    def _start_pending_sources(self) -> None:
        # Sources only start on a frame boundary so that channels stay in place.
        controller = self._input
        with controller._lock:
            still_pending = []
            for source in controller._pending:
                if self._sample_count % source.channels() == 0:
                    self._current.append(source)
                else:
                    still_pending.append(source)
            controller._pending = still_pending
            controller._has_pending = bool(still_pending)

    def _sum_current_sources(self) -> Number:
        sample_format = self.sample_format
        total = sample_format.zero_value()
        still_current = []
        for source in self._current:
            try:
                value = next(source)
            except StopIteration:
                continue
            total = sample_format.saturating_add(total, value)
            still_current.append(source)
        self._current = still_current
        return total

    def current_frame_len(self) -> Optional[int]:
        return None

    def channels(self) -> int:
        return self._input.channels

    def sample_rate(self) -> int:
        return self._input.sample_rate

    def total_duration(self) -> Optional[float]:
        return None

    def elapsed(self) -> float:
        return 0.0

    def seek(self, time: float) -> float:
        """Seek the first playing source."""
        if not self._current:
            raise SeekError("no source is playing")
        return self._current[0].seek(time)

    def size_hint(self) -> SizeHint:
        return (0, None)
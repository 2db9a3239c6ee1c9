"""A queue of sources that are played one after the other."""

from __future__ import annotations

import threading
from collections import deque
from queue import SimpleQueue
from typing import Deque, List, Optional, Tuple

from .sample import Number, SampleFormat, SizeHint
from .source import Empty, Source, Zero

FRAME_THRESHOLD = 512
_SILENCE_CHANNELS = 1
_SILENCE_RATE = 44100
_SILENCE_DURATION = 0.010

_Entry = Tuple[Source, Optional[SimpleQueue]]


def queue(
    keep_alive_if_empty: bool,
    sample_format: SampleFormat = SampleFormat.F32,
) -> Tuple["SourcesQueueInput", "SourcesQueueOutput"]:
    """Build a queue as an input to append sources to and an output that plays them.

    With ``keep_alive_if_empty`` the output plays silence while the queue is empty;
    otherwise it ends as soon as there is nothing left to play.
    """
    queue_input = SourcesQueueInput(keep_alive_if_empty, sample_format)
    return queue_input, SourcesQueueOutput(queue_input)


class SourcesQueueInput:
    """The input side of a queue; safe to use from another thread than the output."""

    def __init__(self, keep_alive_if_empty: bool, sample_format: SampleFormat = SampleFormat.F32):
        self.keep_alive_if_empty = keep_alive_if_empty
        self.sample_format = sample_format
        self._lock = threading.Lock()
        self._next_sounds: List[_Entry] = []

    def append(self, source: Source) -> None:
        """Add a source to the end of the queue."""
        with self._lock:
            self._next_sounds.append((source, None))

    def append_with_signal(self, source: Source) -> SimpleQueue:
        """Add a source to the end of the queue.

        The returned queue receives one ``None`` once the source has finished playing.
        """
        signal: SimpleQueue = SimpleQueue()
        with self._lock:
            self._next_sounds.append((source, signal))
        return signal

    def _take_next(self) -> Optional[_Entry]:
        with self._lock:
            if not self._next_sounds:
                return None
            return self._next_sounds.pop(0)


class SourcesQueueOutput(Source):
    """The output side of a queue: a source playing the queued sources in order.

    Leading pairs of silent samples of every new source are skipped.
    """

    def __init__(self, queue_input: SourcesQueueInput):
        self._input = queue_input
        self.sample_format = queue_input.sample_format
        self._current: Source = Empty(queue_input.sample_format)
        self._signal_after_end: Optional[SimpleQueue] = None
        self._cache: Deque[Optional[Number]] = deque()

    def __next__(self) -> Number:
        while True:
            if self._cache:
                sample = self._cache.popleft()
                if sample is None:
                    raise StopIteration
                return sample
            try:
                return next(self._current)
            except StopIteration:
                pass
            if not self._go_next():
                raise StopIteration

    def _go_next(self) -> bool:
        """Move to the next queued source; return False if playing should stop."""
        if self._signal_after_end is not None:
            self._signal_after_end.put(None)
            self._signal_after_end = None

        entry = self._input._take_next()
        if entry is None:
            if not self._input.keep_alive_if_empty:
                return False
            silence = Zero(_SILENCE_CHANNELS, _SILENCE_RATE, self.sample_format)
            self._current = silence.take_duration(_SILENCE_DURATION)
            return True

        source, signal = entry
        to_f32 = source.sample_format.to_f32
        while True:
            left = next(source, None)
            right = next(source, None)
            if left is not None and right is not None and to_f32(left) == 0 and to_f32(right) == 0:
                continue
            self._cache.extend((left, right))
            break

        self._current = source
        self._signal_after_end = signal
        return True

    def current_frame_len(self) -> Optional[int]:
        frame_len = self._current.current_frame_len()
        if frame_len:
            return frame_len
        lower_bound = self._current.size_hint()[0]
        if lower_bound > 0:
            return lower_bound
        return FRAME_THRESHOLD

    def channels(self) -> int:
        return self._current.channels()

    def sample_rate(self) -> int:
        return self._current.sample_rate()

    def total_duration(self) -> Optional[float]:
        return None

    def seek(self, time: float) -> float:
        return self._current.seek(time)

    def elapsed(self) -> float:
        return 0.0

    def size_hint(self) -> SizeHint:
        return (self._current.size_hint()[0], None)
"""A handle that queues sounds and controls their playback."""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from queue import Empty as _SignalEmpty
from queue import SimpleQueue
from typing import Deque, Optional, Tuple

from .filters import Done, Stoppable
from .queue import SourcesQueueInput, SourcesQueueOutput, queue
from .sample import SampleFormat
from .source import SeekError, Source

_log = logging.getLogger(__name__)

_ACCESS_PERIOD = 0.050


@dataclass
class _Controls:
    pause: bool = False
    volume: float = 1.0
    seek: Optional[float] = None
    stopped: bool = False


class Sink:
    """Queues sounds for playback and controls volume, pausing, seeking and stopping.

    The controls take effect in the playing sound every 50 milliseconds of audio.
    """

    def __init__(self, queue_input: SourcesQueueInput):
        self._queue_tx = queue_input
        self._receivers: Deque[SimpleQueue] = deque()
        self._lock = threading.Lock()
        self._controls = _Controls()
        self._sound_count = 0
        self._detached = False
        self._elapsed = 0.0

    @classmethod
    def new_idle(cls) -> Tuple["Sink", SourcesQueueOutput]:
        """Build a sink together with the output source that plays what it queues."""
        queue_input, queue_output = queue(True, SampleFormat.F32)
        return cls(queue_input), queue_output

    def append(self, source: Source) -> None:
        """Append a sound to the queue of sounds to play."""
        controls = self._controls
        lock = self._lock

        def access(src: Stoppable) -> None:
            with lock:
                stopped = controls.stopped
                seek_time = None
                if not stopped:
                    seek_time, controls.seek = controls.seek, None
                volume = controls.volume
                paused = controls.pause
            if stopped:
                src.stop()
                return
            if seek_time is not None:
                try:
                    src.seek(seek_time)
                except SeekError as err:
                    _log.warning("Error seeking: %s", err)
            self._elapsed = src.elapsed()
            src.inner.factor = volume
            src.inner.inner.paused = paused

        chain = (
            source.pausable(False)
            .amplify(1.0)
            .stoppable()
            .periodic_access(_ACCESS_PERIOD, access)
            .convert_samples(SampleFormat.F32)
        )
        with self._lock:
            self._sound_count += 1
        finished = Done(chain, self._sound_finished)
        self._receivers.append(self._queue_tx.append_with_signal(finished))

    def _sound_finished(self) -> None:
        with self._lock:
            self._sound_count -= 1

    def volume(self) -> float:
        """The volume factor; 1.0 leaves samples unchanged."""
        with self._lock:
            return self._controls.volume

    def set_volume(self, value: float) -> None:
        """Change the volume factor every sample is multiplied by."""
        with self._lock:
            self._controls.volume = value

    def play(self) -> None:
        """Resume playback; no effect if not paused."""
        with self._lock:
            self._controls.pause = False

    def pause(self) -> None:
        """Pause playback; no effect if already paused."""
        with self._lock:
            self._controls.pause = True

    def toggle_playback(self) -> None:
        """Pause if playing, resume if paused."""
        if self.is_paused():
            self.play()
        else:
            self.pause()

    def seek(self, seek_time: float) -> None:
        """Request a seek to ``seek_time`` seconds in the playing sound."""
        with self._lock:
            self._controls.seek = seek_time

    def is_paused(self) -> bool:
        """Whether playback is paused."""
        with self._lock:
            return self._controls.pause

    def detach(self) -> None:
        """Let queued sounds keep playing when the sink is destroyed."""
        self._detached = True

    def sleep_until_end(self) -> bool:
        """Whether the last appended sound has signalled its end; consumes the signal."""
        if not self._receivers:
            return True
        try:
            self._receivers[-1].get_nowait()
        except _SignalEmpty:
            return False
        return True

    def current_receiver(self) -> Optional[SimpleQueue]:
        """Remove and return the end signal of the oldest appended sound, if any."""
        return self._receivers.popleft() if self._receivers else None

    def __len__(self) -> int:
        with self._lock:
            return self._sound_count

    def is_empty(self) -> bool:
        """Whether no sound is left to play."""
        return len(self) == 0

    def elapsed(self) -> float:
        """Seconds played of the current sound, as last reported by it."""
        return self._elapsed

    def destroy(self) -> None:
        """Let the queue end, and stop the playing sound unless the sink is detached."""
        self._queue_tx.keep_alive_if_empty = False
        if not self._detached:
            with self._lock:
                self._controls.stopped = True
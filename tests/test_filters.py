import pytest

from tunesink.filters import Amplify, Done, Pausable, Stoppable
from tunesink.sample import SampleFormat
from tunesink.source import SeekError, Source


class ListSource(Source):
    def __init__(self, samples, channels=1, rate=44100, fmt=SampleFormat.I16):
        self._samples = iter(samples)
        self._left = len(samples)
        self._channels = channels
        self._rate = rate
        self.sample_format = fmt

    def __next__(self):
        value = next(self._samples)
        self._left -= 1
        return value

    def current_frame_len(self):
        return None

    def channels(self):
        return self._channels

    def sample_rate(self):
        return self._rate

    def total_duration(self):
        return None

    def seek(self, time):
        raise SeekError("not seekable")

    def elapsed(self):
        return 0.0

    def size_hint(self):
        return (self._left, self._left)


def test_amplify_uses_sample_format():
    samples = [100, -200, 32767, -32768]
    out = list(Amplify(ListSource(samples), 2.0))
    assert out == [SampleFormat.I16.amplify(s, 2.0) for s in samples]
    assert max(out) <= 32767
    assert min(out) >= -32768


def test_amplify_zero_factor_silences():
    out = list(Amplify(ListSource([0.5, -0.25], fmt=SampleFormat.F32), 0.0))
    assert all(value == 0.0 for value in out)
    assert len(out) == 2


def test_amplify_factor_can_change():
    source = Amplify(ListSource([7, 7]), 1.0)
    assert next(source) == 7
    source.factor = 0.0
    assert next(source) == 0


def test_amplify_passes_size_hint():
    assert Amplify(ListSource([1, 2, 3]), 1.0).size_hint() == (3, 3)


def test_done_calls_once_after_exhaustion():
    calls = []
    source = Done(ListSource([1, 2]), lambda: calls.append(True))
    assert next(source) == 1
    assert next(source) == 2
    assert calls == []
    with pytest.raises(StopIteration):
        next(source)
    with pytest.raises(StopIteration):
        next(source)
    assert calls == [True]


def test_done_on_empty_source():
    counter = {"count": 1}

    def finished():
        counter["count"] -= 1

    assert list(Done(ListSource([]), finished)) == []
    assert counter["count"] == 0


def test_stoppable_stops():
    source = Stoppable(ListSource([1, 2, 3]))
    assert not source.stopped
    assert next(source) == 1
    source.stop()
    assert source.stopped
    with pytest.raises(StopIteration):
        next(source)


def test_stoppable_seek_error_propagates():
    with pytest.raises(SeekError):
        Stoppable(ListSource([1])).seek(1.0)


def test_pausable_not_paused_passes_through():
    source = Pausable(ListSource([3, 4, 5]))
    assert not source.paused
    assert list(source) == [3, 4, 5]


def test_pausable_emits_silence_without_consuming():
    inner = ListSource([9, 8, 7, 6], channels=2)
    source = Pausable(inner, True)
    assert source.paused
    assert [next(source) for _ in range(6)] == [0] * 6
    assert inner.size_hint() == (4, 4)
    source.paused = False
    assert list(source) == [9, 8, 7, 6]


def test_pausable_finishes_frame_of_silence_before_resuming():
    source = Pausable(ListSource([1, 2], channels=2), True)
    assert next(source) == 0
    source.paused = False
    assert next(source) == 0
    assert list(source) == [1, 2]


def test_pausable_u16_silence():
    source = Pausable(ListSource([1], fmt=SampleFormat.U16), True)
    assert next(source) == SampleFormat.U16.zero_value()


def test_pausable_pause_midstream():
    source = Pausable(ListSource([1, 2, 3]))
    assert next(source) == 1
    source.paused = True
    source.paused = True
    assert next(source) == 0
    source.paused = False
    assert list(source) == [2, 3]
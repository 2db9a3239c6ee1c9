import pytest

from tunesink.buffer import SamplesBuffer
from tunesink.effects import FadeIn, PeriodicAccess, SamplesConverter, TakeDuration
from tunesink.filters import Stoppable
from tunesink.sample import SampleFormat


def ones(count, rate=10, channels=1):
    return SamplesBuffer(channels, rate, [1.0] * count)


def test_fade_in_starts_silent_and_rises():
    out = list(FadeIn(ones(20), 0.5))
    assert len(out) == 20
    assert out[0] == 0.0
    assert all(a <= b + 1e-9 for a, b in zip(out, out[1:]))
    assert out[-1] == 1.0


def test_fade_in_integer_format_first_sample_is_zero():
    source = SamplesBuffer(1, 10, [1000] * 10, SampleFormat.I16)
    out = list(FadeIn(source, 0.5))
    assert out[0] == 0
    assert out[-1] == 1000


def test_fade_in_zero_duration_passes_through():
    data = [0.1, -0.2, 0.3]
    assert list(FadeIn(SamplesBuffer(1, 10, data), 0.0)) == data


def test_source_fade_in_method():
    out = list(ones(5).fade_in(0.2))
    assert out[0] == 0.0
    assert out[-1] == 1.0


def test_periodic_access_is_called_regularly():
    rate, period = 4, 1.0
    produced = []
    calls = []
    access = PeriodicAccess(ones(10, rate=rate), period, lambda src: calls.append(len(produced)))
    for sample in access:
        produced.append(sample)
    assert calls[0] == 0
    spacing = int(rate * period)
    assert all(b - a == spacing for a, b in zip(calls, calls[1:]))
    assert len(produced) == 10


def test_periodic_access_can_stop_source():
    source = PeriodicAccess(Stoppable(ones(10)), 0.05, lambda src: src.stop())
    assert list(source) == []


def test_samples_converter_roundtrip():
    data = [0, 32767, -32768, 1234, -4321]
    source = SamplesBuffer(1, 100, data, SampleFormat.I16)
    as_float = SamplesConverter(source, SampleFormat.F32)
    assert as_float.sample_format is SampleFormat.F32
    back = SamplesConverter(as_float, SampleFormat.I16)
    assert list(back) == data


def test_samples_converter_values_and_elapsed():
    data = [0, 16384, -16384]
    conv = SamplesBuffer(2, 100, data, SampleFormat.I16).convert_samples(SampleFormat.F32)
    assert list(conv) == [SampleFormat.I16.to_f32(v) for v in data]
    assert conv.elapsed() == 0.0
    assert conv.channels() == 2


def test_take_duration_truncates():
    source = SamplesBuffer(1, 1000, [0.5] * 100)
    taken = TakeDuration(source, 0.05)
    assert len(list(taken)) == 49


def test_take_duration_longer_than_source_yields_all():
    data = [0.1] * 10
    assert list(SamplesBuffer(1, 1000, data).take_duration(1.0)) == data


def test_take_duration_total_duration_is_minimum():
    assert TakeDuration(ones(100, rate=100), 0.25).total_duration() == 0.25
    assert TakeDuration(ones(10, rate=100), 5.0).total_duration() == pytest.approx(0.1)


def test_take_duration_frame_len_counts_down():
    taken = TakeDuration(ones(100, rate=1000), 0.05)
    before = taken.current_frame_len()
    next(taken)
    assert before - taken.current_frame_len() == 1


def test_take_duration_frame_len_capped_by_inner():
    inner = TakeDuration(ones(100, rate=1000), 0.01)
    outer = TakeDuration(inner, 1.0)
    assert outer.current_frame_len() == inner.current_frame_len()


def test_take_duration_size_hint_unknown():
    assert TakeDuration(ones(10), 0.5).size_hint() == (0, None)


def test_take_duration_fadeout_and_clear():
    taken = TakeDuration(ones(20), 1.0)
    taken.set_filter_fadeout()
    out = list(taken)
    assert out[0] == 1.0
    assert all(a >= b for a, b in zip(out, out[1:]))
    assert out[-1] < 1.0

    plain = TakeDuration(ones(20), 1.0)
    plain.set_filter_fadeout()
    plain.clear_filter()
    assert all(v == 1.0 for v in plain)
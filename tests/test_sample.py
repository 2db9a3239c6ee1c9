import itertools

import pytest

from tunesink.sample import DataConverter, SampleFormat

FORMATS = list(SampleFormat)


def test_zero_values():
    assert SampleFormat.I16.zero_value() == 0
    assert SampleFormat.U16.zero_value() == 32768
    assert SampleFormat.F32.zero_value() == 0.0


@pytest.mark.parametrize("source,target", list(itertools.product(FORMATS, FORMATS)))
def test_silence_converts_to_silence(source, target):
    silence = SampleFormat.zero_value(source)
    assert SampleFormat.convert(source, silence, target) == SampleFormat.zero_value(target)


def test_i16_extremes_map_to_unit_range():
    assert SampleFormat.I16.to_f32(-32768) == -1.0
    assert SampleFormat.I16.to_f32(32767) == 1.0


@pytest.mark.parametrize("value", [-32768, 0, 32767])
def test_i16_float_round_trip_at_extremes(value):
    as_float = SampleFormat.I16.to_f32(value)
    assert SampleFormat.F32.convert(as_float, SampleFormat.I16) == value


@pytest.mark.parametrize("value", [-32768, -1000, -1, 0, 1, 1234, 32767])
def test_i16_u16_round_trip(value):
    unsigned = SampleFormat.I16.convert(value, SampleFormat.U16)
    assert 0 <= unsigned <= 65535
    assert SampleFormat.U16.convert(unsigned, SampleFormat.I16) == value


def test_i16_to_u16_preserves_order():
    values = [-32768, -5, 0, 7, 32767]
    converted = [SampleFormat.I16.convert(v, SampleFormat.U16) for v in values]
    assert converted == sorted(converted)
    assert len(set(converted)) == len(values)


def test_float_to_u16_extremes():
    assert SampleFormat.F32.convert(-1.0, SampleFormat.U16) == 0
    assert SampleFormat.F32.convert(1.0, SampleFormat.U16) == 65535


def test_u16_to_float_matches_i16_path():
    for value in (0, 100, 32768, 65535):
        signed = SampleFormat.U16.convert(value, SampleFormat.I16)
        assert SampleFormat.U16.to_f32(value) == SampleFormat.I16.to_f32(signed)


def test_saturating_add_integers():
    assert SampleFormat.I16.saturating_add(32767, 1) == 32767
    assert SampleFormat.I16.saturating_add(-32768, -1) == -32768
    assert SampleFormat.U16.saturating_add(65535, 10) == 65535
    assert SampleFormat.I16.saturating_add(100, -40) == 60


def test_saturating_add_float_is_not_clamped():
    assert SampleFormat.F32.saturating_add(1.0, 1.0) > 1.0


@pytest.mark.parametrize(
    "fmt,first,second",
    [
        (SampleFormat.I16, -300, 900),
        (SampleFormat.U16, 1000, 50000),
        (SampleFormat.F32, -0.5, 0.25),
    ],
)
def test_lerp_endpoints_and_midpoint(fmt, first, second):
    assert fmt.lerp(first, second, 0, 4) == first
    assert fmt.lerp(first, second, 4, 4) == second
    middle = fmt.lerp(first, second, 2, 4)
    assert min(first, second) <= middle <= max(first, second)


def test_amplify_identity_and_silence():
    assert SampleFormat.I16.amplify(1234, 1.0) == 1234
    assert SampleFormat.I16.amplify(1234, 0.0) == 0
    assert SampleFormat.U16.amplify(40000, 1.0) == 40000
    assert SampleFormat.U16.amplify(32768, 3.0) == 32768


def test_amplify_i16_saturates_and_truncates():
    assert SampleFormat.I16.amplify(20000, 4.0) == 32767
    assert SampleFormat.I16.amplify(-3, 0.5) == -1


def test_data_converter_converts_and_hints():
    converter = DataConverter([-32768, 32767], SampleFormat.I16, SampleFormat.F32)
    assert converter.size_hint() == (2, 2)
    assert list(converter) == [-1.0, 1.0]
    assert converter.size_hint() == (0, 0)


def test_data_converter_unknown_length():
    converter = DataConverter((x for x in [0, 1]), SampleFormat.I16, SampleFormat.U16)
    assert converter.size_hint() == (0, None)
    assert list(converter) == [SampleFormat.I16.convert(0, SampleFormat.U16),
                               SampleFormat.I16.convert(1, SampleFormat.U16)]
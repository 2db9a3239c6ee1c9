# tunesink

A small toolkit for streams of PCM audio samples. It has no dependencies
beyond the standard library. Every sound is a `Source`: an iterator of
interleaved samples that also reports its channel count and sample rate,
and its total duration where that is known. You combine sources with
filters, then queue them, mix them, or control them through a `Sink`.

Times and durations are plain floats in seconds throughout.

## Installation

```
pip install tunesink
```

Requires Python 3.10 or later.

## Modules

- `tunesink.sample`
  - `SampleFormat` is an enum with the members `I16`, `U16` and `F32`. Its
    methods are `lerp`, `amplify`, `saturating_add`, `zero_value`,
    `to_f32` and `convert`.
  - `DataConverter` changes the format of every sample in an iterable.
- `tunesink.conversions`
  - `ChannelCountConverter` changes the channel count of an interleaved
    stream. Extra input channels are dropped. Missing output channels
    repeat the last input channel.
  - `SampleRateConverter` resamples an interleaved stream by linear
    interpolation.
- `tunesink.source`
  - `Source` is the abstract base class. Its builder methods are
    `take_duration`, `amplify`, `fade_in`, `periodic_access`,
    `convert_samples`, `pausable` and `stoppable`.
  - `SourceFilter` passes everything through to an inner source.
  - `Empty` produces no samples. `Zero` produces silence without end.
  - `SeekError` is raised when a seek fails.
- `tunesink.filters`
  - `Amplify` has a changeable `factor`.
  - `Done` calls a function once, when its inner source runs out.
  - `Stoppable` ends the stream after `stop()`.
  - `Pausable` has a settable `paused` property and produces silence one
    whole frame at a time while paused.
- `tunesink.effects`
  - `FadeIn` fades the sound in from silence.
  - `PeriodicAccess` calls a function at a fixed interval.
  - `SamplesConverter` changes the sample format of a source.
  - `TakeDuration` cuts a source off after a duration. It has
    `set_filter_fadeout()` and `clear_filter()`.
- `tunesink.uniform`
  - `UniformSourceIterator` presents any source at a fixed channel count,
    sample rate and sample format.
- `tunesink.buffer`
  - `SamplesBuffer` turns a list of samples into a source.
- `tunesink.queue`
  - `queue(keep_alive_if_empty, sample_format)` returns a
    `SourcesQueueInput` and a `SourcesQueueOutput`. The output plays the
    queued sources one after another and skips leading pairs of silent
    samples in each one.
  - `append_with_signal` returns a `queue.SimpleQueue`. It receives `None`
    when that source has finished.
- `tunesink.mixer`
  - `mixer(channels, sample_rate, sample_format)` returns a
    `DynamicMixerController` and a `DynamicMixer`. The mixer plays the
    saturating sum of every source added to it.
- `tunesink.sink`
  - `Sink.new_idle()` returns a sink and the queue output that plays what
    is appended to it.
  - The sink controls volume (`volume`, `set_volume`), pausing (`play`,
    `pause`, `toggle_playback`, `is_paused`), seeking (`seek`) and
    stopping (`destroy`, `detach`).
  - It reports progress through `elapsed`, `is_empty`, `len(sink)`,
    `sleep_until_end` and `current_receiver`.
  - Control changes reach the playing sound every 50 ms of audio.
- `tunesink.decoder`
  - `Mp4Type` names the MP4-family file extensions.
    `Mp4Type.parse("M4A")` ignores case and raises `ValueError` for
    anything else.
  - The `DecoderError` exception hierarchy has these subclasses:
    `UnrecognizedFormatError`, `DecoderIoError`, `DecodeError`,
    `LimitError`, `ResetRequiredError` and `NoStreamsError`.

## Example

```python
from tunesink.buffer import SamplesBuffer
from tunesink.sample import SampleFormat
from tunesink.sink import Sink

sink, output = Sink.new_idle()
sink.append(SamplesBuffer(2, 44100, [0.0, 0.5, -0.5, 0.25], SampleFormat.F32))
sink.set_volume(0.5)
sink.pause()
sink.toggle_playback()      # playing again
sink.seek(0.0)

samples = [next(output) for _ in range(4)]
print(samples, sink.elapsed(), sink.is_empty())
```

The output side of a sink is a plain iterator. While nothing is queued it
keeps producing short stretches of silence. After `destroy()` it ends
once the queue is empty.

You can also chain sources with the builder methods:

```python
from tunesink.buffer import SamplesBuffer
from tunesink.sample import SampleFormat

source = (
    SamplesBuffer(1, 8000, list(range(1000)), SampleFormat.I16)
    .fade_in(0.02)
    .amplify(0.5)
    .take_duration(0.1)
)
print(list(source)[:10])
```

## What it does not do

- tunesink does not open audio devices or play sound itself. You hand the
  samples it produces to an audio output layer of your own.
- It does not decode audio files. `tunesink.decoder` has only the
  `Mp4Type` extension names and the `DecoderError` exceptions.

## Running the tests

```
pip install -e ".[test]"
pytest
```
"""Audio sample sources, filters, converters, a queue, a mixer and a playback sink."""

__version__ = "0.1.0"
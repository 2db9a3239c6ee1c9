"""Container types recognised by the decoder and the errors decoding can raise."""

from __future__ import annotations

from enum import Enum


class Mp4Type(str, Enum):
    """File extensions of the MP4 container family."""

    MP4 = "mp4"
    M4A = "m4a"
    M4P = "m4p"
    M4B = "m4b"
    M4R = "m4r"
    M4V = "m4v"
    MOV = "mov"

    @classmethod
    def parse(cls, text: str) -> "Mp4Type":
        """Parse an extension, ignoring case; raise ValueError if it is not one of the family."""
        try:
            return cls(text.lower())
        except ValueError:
            raise ValueError(f"{text} is not a valid mp4 extension") from None

    def __str__(self) -> str:
        return self.value


class DecoderError(Exception):
    """Raised when a decoder cannot be created."""


class UnrecognizedFormatError(DecoderError):
    """The format of the data has not been recognised."""

    def __init__(self, message: str = "Unrecognized format"):
        super().__init__(message)


class DecoderIoError(DecoderError):
    """An I/O error occurred while reading, writing or seeking the stream."""


class DecodeError(DecoderError):
    """The stream held malformed data and could not be decoded or demuxed."""


class LimitError(DecoderError):
    """A limit was reached while decoding or demuxing the stream."""


class ResetRequiredError(DecoderError):
    """The demuxer or decoder needs to be reset before continuing."""

    def __init__(self, message: str = "Reset required"):
        super().__init__(message)


class NoStreamsError(DecoderError):
    """No streams were found by the decoder."""

    def __init__(self, message: str = "No streams"):
        super().__init__(message)
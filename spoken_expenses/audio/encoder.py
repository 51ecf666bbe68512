"""Audio encoder — raw audio → base64 payload for inline model input."""
import base64
import binascii
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

from spoken_expenses.constants import DATA_URI_BASE64_MARKER, DATA_URI_PREFIX, DEFAULT_AUDIO_MIME_TYPE
from spoken_expenses.errors import AudioEncodingError


@dataclass(frozen=True)
class AudioClip:
    data: bytes
    mime_type: str = DEFAULT_AUDIO_MIME_TYPE

    @classmethod
    def from_path(cls, path: Union[str, Path], mime_type: str | None = None) -> "AudioClip":
        """Read a clip from disk. MIME type is guessed from the extension when not given."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise AudioEncodingError(f"Could not read audio file {path}: {exc}") from exc
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(data=data, mime_type=mime_type or guessed or DEFAULT_AUDIO_MIME_TYPE)


AudioSource = Union[AudioClip, bytes, bytearray, memoryview, BinaryIO, str]


def _validated_base64(payload: str) -> str:
    try:
        base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise AudioEncodingError(f"Audio payload is not valid base64: {exc}") from exc
    return payload


def strip_data_uri(value: str) -> str:
    """'data:audio/webm;base64,XXXX' → 'XXXX'. Bare base64 strings are returned trimmed.

    Raises AudioEncodingError for data URIs without a ;base64 payload and for
    anything that does not decode as base64.
    """
    match value.strip():
        case text if text.startswith(DATA_URI_PREFIX) and "," in text:
            header, payload = text.split(",", 1)
            if not header.endswith(DATA_URI_BASE64_MARKER):
                raise AudioEncodingError("Data URI is not base64-encoded")
            return _validated_base64(payload)
        case text if text.startswith(DATA_URI_PREFIX):
            raise AudioEncodingError("Malformed data URI: missing payload")
        case text:
            return _validated_base64(text)


def _read(stream: BinaryIO) -> bytes:
    try:
        raw = stream.read()
    except OSError as exc:
        raise AudioEncodingError(f"Audio read failed: {exc}") from exc
    match raw:
        case bytes() | bytearray():
            return bytes(raw)
        case _:
            raise AudioEncodingError("Audio stream must be opened in binary mode")


def encode_audio(source: AudioSource) -> str:
    """Return the base64 encoding of the audio bytes, without any prefix.

    Accepts an AudioClip, raw bytes, a binary file-like object, or a data URI
    string (the prefix is stripped). Raises AudioEncodingError when the
    source cannot be read or a string payload is not base64.
    """
    match source:
        case AudioClip(data=data):
            raw = data
        case bytes() | bytearray() | memoryview():
            raw = bytes(source)
        case str():
            return strip_data_uri(source)
        case _ if callable(getattr(source, "read", None)):
            raw = _read(source)
        case _:
            raise AudioEncodingError(f"Unsupported audio source: {type(source).__name__}")
    return base64.b64encode(raw).decode("ascii")

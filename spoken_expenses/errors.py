"""Exceptions raised along the audio → expense pipeline."""


class AudioEncodingError(Exception):
    """The audio source could not be read or is not a supported type."""


class ModelAPIError(Exception):
    """The model service answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None, response_body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class EmptyResponseError(Exception):
    """The model service returned no text."""


class ResponseParseError(ValueError):
    """The model reply is not valid JSON or not an expense response."""

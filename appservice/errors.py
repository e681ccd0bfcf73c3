"""Errors raised when an expected file cannot be found."""

from __future__ import annotations


class _LocationError(Exception):
    """An error tied to a location, optionally caused by another error."""

    _what = "file"

    def __init__(self, location: str, err: BaseException | None = None) -> None:
        self.location = location
        self.err = err
        super().__init__(self._message())

    def _message(self) -> str:
        message = f"unable to find {self._what} in the specified location {self.location}"
        if self.err is not None:
            message = f"{message} due to {self.err}"
        return message

    def __str__(self) -> str:
        return self._message()


class NoFileFound(_LocationError):
    """No file was found at the location."""

    _what = "file"


class NoDevfileFound(_LocationError):
    """No devfile was found at the location."""

    _what = "devfile"


class NoDockerfileFound(_LocationError):
    """No dockerfile was found at the location."""

    _what = "dockerfile"
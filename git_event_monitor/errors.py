from __future__ import annotations


class TransportError(RuntimeError):
    """A platform REST call failed (network, timeout, status or payload)."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TimestampParseError(ValueError):
    pass


class TabularFileError(RuntimeError):
    pass

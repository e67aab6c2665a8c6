from __future__ import annotations


class StrandsError(Exception):
    """Base class for errors raised by the strands engine."""


class SourceOpenFailure(StrandsError):
    """A corpus source could not be opened for reading."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot open {path}: {reason}")

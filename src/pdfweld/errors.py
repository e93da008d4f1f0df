"""Error taxonomy for loading, merging and encoding."""

from __future__ import annotations

from pathlib import Path


class MergeError(Exception):
    """Base class for every failure that aborts a merge batch."""


class LoadError(MergeError):
    """A source document could not be read or decoded."""

    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(str(path), message)
        self.path = Path(path)
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"


class StructuralError(MergeError):
    """A required structural node is missing or malformed."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message, source)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.message} (source={self.source})"
        return self.message


class EncodeError(MergeError):
    """The merged graph could not be serialized."""

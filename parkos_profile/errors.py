"""Error hierarchy for the profile store.

Every error carries a ``kind`` tag so callers (GUI, CLI, tests) can tell the
failure categories apart without matching on message text.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ProfileStoreError(Exception):
    """Base class for all profile store failures."""

    kind = "store"

    def __init__(self, message: str, *, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class PathResolutionError(ProfileStoreError):
    """The host could not provide an application data directory."""

    kind = "path_resolution"


class ProfileIOError(ProfileStoreError):
    """Read, write, directory creation or permission change failed."""

    kind = "io"


class ProfileParseError(ProfileStoreError):
    """Stored or supplied text is not valid JSON, or does not fit the record."""

    kind = "parse"


class ProfileValidationError(ProfileStoreError):
    """A payload was rejected before it reached the store."""

    kind = "validation"


__all__ = [
    "PathResolutionError",
    "ProfileIOError",
    "ProfileParseError",
    "ProfileStoreError",
    "ProfileValidationError",
]

"""Per-application data directory resolution.

The store never asks the OS directly; it receives a zero-argument provider.
:func:`app_data_dir` is the default provider used by the desktop shell and
the CLI.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Mapping, Optional

from .errors import PathResolutionError

PathProvider = Callable[[], Path]

DEFAULT_IDENTIFIER = "com.parkos.app"


def _home() -> Path:
    try:
        return Path.home()
    except (KeyError, RuntimeError) as exc:
        raise PathResolutionError(f"Failed to resolve home directory: {exc}") from exc


def app_data_dir(
    identifier: str = DEFAULT_IDENTIFIER,
    *,
    platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Return the platform data directory for *identifier*.

    Layout:
      Windows: %APPDATA%/<identifier>
      macOS:   ~/Library/Application Support/<identifier>
      other:   $XDG_DATA_HOME/<identifier> or ~/.local/share/<identifier>

    The directory is not created here; the store creates it on first save.
    """

    if not identifier or identifier.strip() != identifier or "/" in identifier or "\\" in identifier:
        raise PathResolutionError(f"Invalid application identifier: {identifier!r}")

    platform = platform or sys.platform
    env = os.environ if environ is None else environ

    if platform.startswith("win"):
        appdata = env.get("APPDATA")
        if not appdata:
            raise PathResolutionError("Failed to resolve app data directory: APPDATA is not set")
        return Path(appdata) / identifier

    if platform == "darwin":
        return _home() / "Library" / "Application Support" / identifier

    xdg = env.get("XDG_DATA_HOME")
    # Relative XDG_DATA_HOME values are invalid and ignored.
    if xdg and os.path.isabs(xdg):
        return Path(xdg) / identifier
    return _home() / ".local" / "share" / identifier


def fixed_dir(path: os.PathLike | str) -> PathProvider:
    """Provider that always returns *path* (tests, ``--data-dir``)."""

    resolved = Path(path).expanduser()

    def _provider() -> Path:
        return resolved

    return _provider


__all__ = ["DEFAULT_IDENTIFIER", "PathProvider", "app_data_dir", "fixed_dir"]

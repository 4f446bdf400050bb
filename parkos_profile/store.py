"""Single-slot JSON store for the payment profile.

Design goals:
  * Whole-file replace (temp file + ``os.replace``), never a partial write
  * Canonical re-encoding on every save, caller bytes are never written as-is
  * Owner-only permissions (0600) on POSIX; a failed chmod fails the save
  * A missing file is "no profile", a corrupt file is an error
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .codecs import PaymentProfileCodec, RecordCodec
from .errors import PathResolutionError, ProfileIOError, ProfileParseError
from .paths import PathProvider, app_data_dir

log = logging.getLogger(__name__)

PROFILE_FILENAME = "payment_profile.json"
PROFILE_FILE_MODE = 0o600


@dataclass
class ProfileStore:
    """Load/save the one persisted profile record.

    The record type is whatever *codec* produces: a
    :class:`~parkos_profile.codecs.PaymentProfile` with the default codec, any
    JSON value with :class:`~parkos_profile.codecs.JsonValueCodec`.
    """

    path_provider: PathProvider = app_data_dir
    codec: RecordCodec[Any] = field(default_factory=PaymentProfileCodec)
    filename: str = PROFILE_FILENAME

    def path(self) -> Path:
        try:
            base = self.path_provider()
        except PathResolutionError:
            raise
        except (OSError, RuntimeError, KeyError, ValueError) as exc:
            raise PathResolutionError(f"Failed to resolve app data directory: {exc}") from exc
        if base is None or str(base).strip() in ("", "."):
            raise PathResolutionError("Failed to resolve app data directory: provider returned nothing")
        return Path(base) / self.filename

    def load(self) -> Optional[Any]:
        path = self.path()

        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise ProfileParseError(f"Failed to parse payment profile file: {exc}", path=path) from exc
        except OSError as exc:
            raise ProfileIOError(f"Failed to read payment profile file: {exc}", path=path) from exc

        try:
            record = self.codec.decode(raw)
        except (ValueError, TypeError) as exc:
            raise ProfileParseError(f"Failed to parse payment profile file: {exc}", path=path) from exc

        log.info("Loaded payment profile: %s", path)
        return record

    def save(self, record: Any) -> None:
        path = self.path()

        # Encode first: invalid input must not touch what is already on disk.
        try:
            text = self.codec.encode(record)
        except (ValueError, TypeError) as exc:
            raise ProfileParseError(f"Failed to serialize payment profile: {exc}", path=path) from exc

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ProfileIOError(f"Failed to create payment profile directory: {exc}", path=path.parent) from exc

        self._replace(path, text)
        self._restrict_permissions(path)
        log.info("Saved payment profile: %s", path)

    # Internals -----------------------------------------------------------
    @staticmethod
    def _replace(path: Path, text: str) -> None:
        tmp = None
        try:
            # mkstemp creates the file 0600, so the secret is never readable
            # by others even before the final chmod.
            fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=path.name + ".", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, path)
            tmp = None
        except OSError as exc:
            raise ProfileIOError(f"Failed to write payment profile file: {exc}", path=path) from exc
        finally:
            if tmp is not None:
                try:
                    os.unlink(tmp)
                except OSError:
                    log.warning("Could not remove temporary file: %s", tmp)

    @staticmethod
    def _restrict_permissions(path: Path) -> None:
        if os.name != "posix":
            return
        try:
            os.chmod(path, PROFILE_FILE_MODE)
        except OSError as exc:
            raise ProfileIOError(
                f"Failed to restrict payment profile file permissions: {exc}", path=path
            ) from exc


__all__ = ["PROFILE_FILENAME", "PROFILE_FILE_MODE", "ProfileStore"]

"""ParkOS payment profile store.

A single-slot, owner-only JSON record store for the payment details used by the
ParkOS desktop shell.
"""

from __future__ import annotations

__version__ = "0.3.0"

from .errors import (
    PathResolutionError,
    ProfileIOError,
    ProfileParseError,
    ProfileStoreError,
    ProfileValidationError,
)
from .codecs import JsonValueCodec, PaymentProfile, PaymentProfileCodec, RecordCodec
from .store import PROFILE_FILENAME, ProfileStore

__all__ = [
    "__version__",
    "JsonValueCodec",
    "PROFILE_FILENAME",
    "PathResolutionError",
    "PaymentProfile",
    "PaymentProfileCodec",
    "ProfileIOError",
    "ProfileParseError",
    "ProfileStore",
    "ProfileStoreError",
    "ProfileValidationError",
    "RecordCodec",
]

"""Host-facing commands.

The desktop shell (and anything else hosting the store) talks to it through a
:class:`CommandRegistry` instead of calling :class:`ProfileStore` directly.
Two commands are registered by :func:`register_profile_commands`:

``load_payment_profile() -> dict | None``
    ``None`` means nothing has been saved yet.
``save_payment_profile(profile: dict) -> None``
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .codecs import PaymentProfile
from .errors import ProfileStoreError, ProfileValidationError
from .store import ProfileStore

log = logging.getLogger(__name__)

LOAD_PAYMENT_PROFILE = "load_payment_profile"
SAVE_PAYMENT_PROFILE = "save_payment_profile"

_STORED_KEYS = ("cardNumber", "cardExpiration", "zipCode", "license")


class CommandError(Exception):
    """A command failed; ``str(err)`` is the message shown to the user."""

    def __init__(self, command: str, message: str, *, kind: str = "store"):
        super().__init__(message)
        self.command = command
        self.kind = kind


class CommandRegistry:
    """Small name -> callable registry used by the GUI host."""

    def __init__(self) -> None:
        self._handlers: Dict[str, Callable[..., Any]] = {}

    def register(self, name: str, handler: Callable[..., Any]) -> None:
        if name in self._handlers:
            raise ValueError(f"Command already registered: {name}")
        self._handlers[name] = handler

    def names(self) -> List[str]:
        return sorted(self._handlers)

    def invoke(self, name: str, **kwargs: Any) -> Any:
        handler = self._handlers[name]
        try:
            return handler(**kwargs)
        except ProfileStoreError as exc:
            raise CommandError(name, str(exc), kind=exc.kind) from exc


def normalize_stored_payment_profile(value: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    """Trim the four stored fields; ``None`` if any of them ends up blank."""

    if not value or not isinstance(value, Mapping):
        return None

    out: Dict[str, str] = {}
    for key in _STORED_KEYS:
        raw = value.get(key)
        text = raw.strip() if isinstance(raw, str) else ""
        if not text:
            return None
        out[key] = text
    return out


def register_profile_commands(registry: CommandRegistry, store: ProfileStore) -> CommandRegistry:
    def load_payment_profile() -> Optional[Dict[str, str]]:
        record = store.load()
        if record is None:
            return None
        if isinstance(record, PaymentProfile):
            record = record.to_dict()
        profile = normalize_stored_payment_profile(record)
        if profile is None:
            # A present but unusable record is not the same as "never saved".
            path = store.path()
            log.warning("Stored payment profile is incomplete: %s", path)
            raise ProfileValidationError("Stored payment profile is incomplete.", path=path)
        return profile

    def save_payment_profile(profile: Mapping[str, Any]) -> None:
        normalized = normalize_stored_payment_profile(profile)
        if normalized is None:
            raise ProfileValidationError("Invalid payment profile payload.")
        store.save(normalized)

    registry.register(LOAD_PAYMENT_PROFILE, load_payment_profile)
    registry.register(SAVE_PAYMENT_PROFILE, save_payment_profile)
    return registry


__all__ = [
    "CommandError",
    "CommandRegistry",
    "LOAD_PAYMENT_PROFILE",
    "SAVE_PAYMENT_PROFILE",
    "normalize_stored_payment_profile",
    "register_profile_commands",
]

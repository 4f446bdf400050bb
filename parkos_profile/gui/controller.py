"""GUI controller (no Tk widget code).

Holds the non-UI logic behind the profile editor buttons. Keep this free of
tkinter/ttk imports so it can be unit-tested headlessly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..commands import LOAD_PAYMENT_PROFILE, SAVE_PAYMENT_PROFILE, CommandError, CommandRegistry
from ..log_utils import mask_secret
from ..validation import build_payment_details_validation_error, validate_stored_payment_details
from .events import GuiEvents

log = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of a button action, ready for a :class:`StatusBadge`."""

    ok: bool
    level: str
    message: str
    profile: Optional[Dict[str, str]] = None
    error_payload: Optional[Dict[str, Any]] = None


class ProfileController:
    def __init__(self, registry: CommandRegistry, events: Optional[GuiEvents] = None) -> None:
        self.registry = registry
        self.events = events or GuiEvents()

    def load(self) -> ActionResult:
        try:
            profile = self.registry.invoke(LOAD_PAYMENT_PROFILE)
        except CommandError as e:
            log.error("Loading payment profile failed [%s]: %s", e.kind, e)
            return ActionResult(False, "error", f"Could not load profile: {e}")

        self.events.emit_profile_loaded(profile)
        if profile is None:
            return ActionResult(True, "idle", "No saved profile")
        return ActionResult(True, "ok", f"Loaded card {mask_secret(profile['cardNumber'])}", profile=profile)

    def save(self, form: Mapping[str, Any]) -> ActionResult:
        result = validate_stored_payment_details(form)
        payload = build_payment_details_validation_error(result.missing_fields, result.invalid_fields)
        if payload is not None:
            return ActionResult(False, "warn", payload["error"], error_payload=payload)

        try:
            self.registry.invoke(SAVE_PAYMENT_PROFILE, profile=result.normalized)
        except CommandError as e:
            log.error("Saving payment profile failed [%s]: %s", e.kind, e)
            return ActionResult(False, "error", f"Could not save profile: {e}")

        self.events.emit_profile_saved(result.normalized)
        return ActionResult(
            True,
            "ok",
            f"Saved card {mask_secret(result.normalized['cardNumber'])}",
            profile=dict(result.normalized),
        )


__all__ = ["ActionResult", "ProfileController"]

"""Payment profile editor panel."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Dict, Optional

from ..widgets import LabeledEntry, StatusBadge

logger = logging.getLogger(__name__)

# (on-disk key, app attribute, label, secret)
PROFILE_FIELDS = (
    ("cardNumber", "var_card_number", "Card number", True),
    ("cardExpiration", "var_card_expiration", "Expiration (MM/YY)", False),
    ("zipCode", "var_zip_code", "ZIP code", False),
    ("license", "var_license", "License plate", False),
)


def read_form(app) -> Dict[str, str]:
    return {key: getattr(app, attr).get() for key, attr, _label, _secret in PROFILE_FIELDS}


def fill_form(app, profile: Optional[Dict[str, str]]) -> None:
    profile = profile or {}
    for key, attr, _label, _secret in PROFILE_FIELDS:
        getattr(app, attr).set(profile.get(key, ""))


def build_panel(parent, app=None) -> ttk.Frame:
    frame = ttk.Frame(parent, padding=12)
    frame.columnconfigure(0, weight=1)

    form = ttk.LabelFrame(frame, text="Payment details", padding=8)
    form.grid(row=0, column=0, sticky="ew")

    frame.entries = {}
    for row, (key, attr, label, secret) in enumerate(PROFILE_FIELDS):
        var = getattr(app, attr, None)
        if not isinstance(var, tk.StringVar):
            var = tk.StringVar(master=frame, value="")
            if app is not None:
                setattr(app, attr, var)
        entry = LabeledEntry(form, label, textvariable=var, secret=secret)
        entry.grid(row=row, column=0, sticky="w", pady=2)
        frame.entries[key] = entry

    var_reveal = tk.BooleanVar(master=frame, value=False)

    def _toggle_reveal() -> None:
        frame.entries["cardNumber"].set_secret(not var_reveal.get())

    ttk.Checkbutton(form, text="Show card number", variable=var_reveal, command=_toggle_reveal).grid(
        row=len(PROFILE_FIELDS), column=0, sticky="w", pady=(6, 0)
    )

    actions = ttk.Frame(frame)
    actions.grid(row=1, column=0, sticky="ew", pady=(10, 6))
    ttk.Button(actions, text="Load", command=getattr(app, "_on_load", None)).pack(side=tk.LEFT)
    ttk.Button(actions, text="Save", command=getattr(app, "_on_save", None)).pack(side=tk.LEFT, padx=(8, 0))

    frame.status = StatusBadge(frame)
    frame.status.grid(row=2, column=0, sticky="ew")

    path_var = tk.StringVar(master=frame, value="")
    frame.path_var = path_var
    ttk.Label(frame, textvariable=path_var, foreground="#616161").grid(row=3, column=0, sticky="w", pady=(6, 0))

    logger.info("Profile panel initialized")
    return frame


def render_result(frame: ttk.Frame, app, result) -> None:
    """Reflect an :class:`~parkos_profile.gui.controller.ActionResult` in the panel."""

    frame.status.set(text=result.message, level=result.level)
    if result.ok and result.profile is not None:
        fill_form(app, result.profile)

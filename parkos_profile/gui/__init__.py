"""Tk host shell for the payment profile store.

This module intentionally avoids eager imports so the headless pieces
(controller, events) can be imported without a display.
"""

from __future__ import annotations

from typing import Any

__all__ = ["ProfileEditorGUI", "main"]


def __getattr__(name: str) -> Any:
    if name in {"ProfileEditorGUI", "main"}:
        from .app import ProfileEditorGUI, main

        return {"ProfileEditorGUI": ProfileEditorGUI, "main": main}[name]
    raise AttributeError(name)

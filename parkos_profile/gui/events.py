"""Simple GUI event registry for decoupled panel communication."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional


class GuiEvents:
    """Small callback-based event hub used by the Tk GUI."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Callable[..., None]]] = {
            "profile_loaded": [],
            "profile_saved": [],
        }

    def on_profile_loaded(self, callback: Callable[[Optional[Dict[str, Any]]], None]) -> None:
        self._listeners["profile_loaded"].append(callback)

    def on_profile_saved(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        self._listeners["profile_saved"].append(callback)

    def emit_profile_loaded(self, profile: Optional[Dict[str, Any]]) -> None:
        for callback in self._listeners["profile_loaded"]:
            callback(profile)

    def emit_profile_saved(self, profile: Dict[str, Any]) -> None:
        for callback in self._listeners["profile_saved"]:
            callback(profile)


__all__ = ["GuiEvents"]

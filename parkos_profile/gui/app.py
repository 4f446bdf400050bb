"""GUI application entrypoint and notebook shell."""

from __future__ import annotations

import logging
import sys
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Dict, Optional

from .. import __version__
from ..commands import CommandRegistry, register_profile_commands
from ..config import AppConfig
from ..errors import PathResolutionError
from ..log_utils import setup_gui_logging
from ..store import ProfileStore
from .controller import ProfileController
from .events import GuiEvents
from .panels import panel_logs, panel_profile

logger = logging.getLogger(__name__)


class ProfileEditorGUI(tk.Tk):
    """Main window: payment profile editor plus a logs tab.

    All persistence goes through the command registry; the window itself never
    touches the profile file.
    """

    TAB_LABELS = (
        ("profile", "Payment profile"),
        ("logs", "Logs"),
    )

    def __init__(self, app_config: Optional[AppConfig] = None, *, log_path: Optional[str] = None):
        super().__init__()
        self.root = self
        self.app_config = app_config or AppConfig.from_env()
        self.log_path = log_path

        self.title(f"ParkOS (v{__version__})")
        self.geometry("560x380")

        self.store = ProfileStore(path_provider=self.app_config.path_provider(), codec=self.app_config.make_codec())
        self.registry = register_profile_commands(CommandRegistry(), self.store)
        self.events = GuiEvents()
        self.controller = ProfileController(self.registry, events=self.events)

        self.var_card_number = tk.StringVar(master=self, value="")
        self.var_card_expiration = tk.StringVar(master=self, value="")
        self.var_zip_code = tk.StringVar(master=self, value="")
        self.var_license = tk.StringVar(master=self, value="")

        self._init_notebook()
        self.events.on_profile_saved(lambda _profile: self.panel_frames["logs"].refresh())

        self.after(50, self._on_load)

    def _init_notebook(self) -> None:
        self.main_notebook = ttk.Notebook(self)
        self.main_notebook.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        self.panel_frames: Dict[str, ttk.Frame] = {
            "profile": panel_profile.build_panel(self.main_notebook, app=self),
            "logs": panel_logs.build_panel(self.main_notebook, app=self),
        }
        for key, label in self.TAB_LABELS:
            self.main_notebook.add(self.panel_frames[key], text=label)

        try:
            self.panel_frames["profile"].path_var.set(str(self.store.path()))
        except PathResolutionError as e:
            self.panel_frames["profile"].path_var.set(f"Storage unavailable: {e}")

    def _on_load(self) -> None:
        result = self.controller.load()
        panel_profile.render_result(self.panel_frames["profile"], self, result)
        if result.level == "error":
            messagebox.showerror("Load payment profile", result.message)

    def _on_save(self) -> None:
        result = self.controller.save(panel_profile.read_form(self))
        panel_profile.render_result(self.panel_frames["profile"], self, result)
        if result.level == "error":
            messagebox.showerror("Save payment profile", result.message)


def main() -> None:
    """Start the Tk GUI application."""
    try:
        cfg = AppConfig.from_env()
    except ValueError as exc:
        print(f"[CONFIG] {exc}", file=sys.stderr)
        raise SystemExit(2)
    log_path = None
    try:
        log_path = setup_gui_logging(cfg.path_provider()(), level=cfg.log_level)
    except PathResolutionError:
        logging.basicConfig(level=cfg.log_level, format="%(asctime)s [%(levelname)s] %(message)s")
        logger.exception("No app data directory; logging to console only")
    if log_path:
        print(f"[LOG] {log_path}")
    app = ProfileEditorGUI(cfg, log_path=log_path)
    app.mainloop()

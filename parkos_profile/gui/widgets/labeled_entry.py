"""Reusable label + entry composite widget."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk


class LabeledEntry(ttk.Frame):
    def __init__(
        self,
        master: tk.Misc,
        label: str,
        *,
        textvariable: tk.StringVar | None = None,
        width: int = 24,
        secret: bool = False,
    ):
        super().__init__(master)
        self.variable = textvariable or tk.StringVar(master=master)
        self.label = ttk.Label(self, text=label, width=16)
        self.label.grid(row=0, column=0, sticky="w")
        self.entry = ttk.Entry(self, textvariable=self.variable, width=width, show="•" if secret else "")
        self.entry.grid(row=0, column=1, sticky="w", padx=(4, 0))

    def get(self) -> str:
        return self.variable.get()

    def set(self, value: str) -> None:
        self.variable.set(value)

    def set_secret(self, secret: bool) -> None:
        self.entry.configure(show="•" if secret else "")

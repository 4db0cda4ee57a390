"""
TUI (Text User Interface) module for Login Info.

Provides the host shell and the record number plugin, built with Textual.
"""

from __future__ import annotations

__all__ = [
    "LoginInfoApp",
    "build_app",
    "run_tui",
]


def __getattr__(name: str):
    if name in __all__:
        from logininfo.ui.tui.app import LoginInfoApp, build_app, run_tui
        return {"LoginInfoApp": LoginInfoApp, "build_app": build_app, "run_tui": run_tui}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

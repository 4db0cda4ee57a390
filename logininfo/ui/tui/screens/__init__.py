"""
TUI screen modules for Login Info.

Contains the host screens:
- AuthLayout: login layout with the "powered by" footer
- SettingsScreen: tabbed host for registered settings pages
"""

from __future__ import annotations

__all__ = [
    "AuthLayout",
    "SettingsScreen",
]


# Lazy imports to avoid circular dependencies
def __getattr__(name: str):
    if name == "AuthLayout":
        from logininfo.ui.tui.screens.auth import AuthLayout
        return AuthLayout
    elif name == "SettingsScreen":
        from logininfo.ui.tui.screens.settings import SettingsScreen
        return SettingsScreen
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

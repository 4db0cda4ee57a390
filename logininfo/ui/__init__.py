"""Login Info UI module.

- tui: Textual-based terminal UI
"""

from __future__ import annotations

__all__ = ["tui"]

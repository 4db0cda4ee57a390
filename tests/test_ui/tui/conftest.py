"""TUI-specific pytest configuration.

This module provides test speed markers:

    @pytest.mark.tui_fast
    def test_something():
        # Fast unit test, no real app lifecycle
        ...

    @pytest.mark.tui_slow
    def test_startup():
        # Slower test with real app mount via App.run_test()
        ...
"""

from __future__ import annotations


def pytest_configure(config):
    """Register TUI test markers."""
    config.addinivalue_line(
        "markers",
        "tui_fast: Fast unit tests with mocks/fakes, no app lifecycle (<100ms)",
    )
    config.addinivalue_line(
        "markers",
        "tui_slow: Slower tests with real app lifecycle (startup, mount, timers)",
    )

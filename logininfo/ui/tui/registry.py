"""
Component and settings-page registries for the host shell.

Plugins register widget factories under stable names; the host looks them up
when composing its screens. Registering an existing name requires
``override=True``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from logininfo.logging import get_logger

logger = get_logger(__name__)

ComponentFactory = Callable[..., Any]


class ComponentRegistry:
    """Name to widget-factory mapping."""

    def __init__(self, components: Optional[dict[str, ComponentFactory]] = None) -> None:
        self._components: dict[str, ComponentFactory] = dict(components or {})

    def get(self, name: str) -> Optional[ComponentFactory]:
        return self._components.get(name)

    def add(self, name: str, factory: ComponentFactory, *, override: bool = False) -> None:
        key = str(name or "").strip()
        if not key:
            raise ValueError("Component name is required")
        if key in self._components and not override:
            raise ValueError(f"Component '{key}' is already registered")
        self._components[key] = factory
        logger.debug("Registered component %s%s", key, " (override)" if override else "")

    def names(self) -> list[str]:
        return sorted(self._components)

    def __contains__(self, name: object) -> bool:
        return name in self._components


@dataclass(frozen=True)
class SettingsPage:
    """A page shown on the host settings screen."""

    name: str
    title: str
    component: str


class SettingsPageRegistry:
    """Ordered settings pages keyed by name."""

    def __init__(self) -> None:
        self._pages: dict[str, SettingsPage] = {}

    def add(self, name: str, *, title: str, component: str) -> SettingsPage:
        page = SettingsPage(name=name, title=title, component=component)
        self._pages[name] = page
        return page

    def get(self, name: str) -> Optional[SettingsPage]:
        return self._pages.get(name)

    def pages(self) -> list[SettingsPage]:
        return list(self._pages.values())

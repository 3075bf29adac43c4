"""In-memory registry of named digit layouts.

Seeded with the presets from ``layout.PRESETS``.  Can be swapped for a
persistent backend later; the API only depends on the methods below.
"""

from __future__ import annotations

import logging

from layout import PRESETS, DigitLayout

logger = logging.getLogger(__name__)


class LayoutNotFoundError(Exception):
    """Raised when a layout lookup fails."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Layout not found: {name}")


class LayoutExistsError(Exception):
    """Raised when registering a name that is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Layout already registered: {name}")


class LayoutStore:
    """In-memory CRUD store for layouts."""

    def __init__(self, seed: dict[str, DigitLayout] | None = None) -> None:
        self._layouts: dict[str, DigitLayout] = dict(PRESETS if seed is None else seed)

    def create(self, name: str, layout: DigitLayout) -> DigitLayout:
        if name in self._layouts:
            raise LayoutExistsError(name)
        self._layouts[name] = layout
        logger.info("registered layout %s: %s", name, layout.describe())
        return layout

    def get(self, name: str) -> DigitLayout:
        try:
            return self._layouts[name]
        except KeyError:
            raise LayoutNotFoundError(name) from None

    def list(self, *, offset: int = 0, limit: int = 50) -> list[tuple[str, DigitLayout]]:
        items = sorted(self._layouts.items())
        return items[offset : offset + limit]

    def delete(self, name: str) -> DigitLayout:
        layout = self.get(name)
        del self._layouts[name]
        logger.info("removed layout %s", name)
        return layout

    def count(self) -> int:
        return len(self._layouts)

    def clear(self) -> None:
        """Remove all layouts (useful for testing)."""
        self._layouts.clear()

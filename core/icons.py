"""Map weather codes onto the fixed set of icon variants shown by the UI."""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class IconVariant(Enum):
    """Closed set of icons; each value is ``(glyph, colour class)``."""

    SUN = ("☀", "text-yellow-500")
    CLOUD = ("☁", "text-gray-500")
    FOG = ("🌫", "text-gray-400")
    RAIN = ("🌧", "text-blue-500")
    DRIZZLE = ("🌦", "text-blue-500")
    SNOW = ("🌨", "text-blue-500")
    THUNDER = ("⚡", "text-yellow-600")
    DEFAULT_CLOUD = ("☁", "text-blue-500")

    @property
    def glyph(self) -> str:
        return self.value[0]

    @property
    def css_class(self) -> str:
        return self.value[1]

    @property
    def slug(self) -> str:
        return self.name.lower().replace("_", "-")


# Buckets must stay disjoint; codes outside every bucket fall back to DEFAULT_CLOUD.
ICON_BUCKETS: Dict[IconVariant, FrozenSet[int]] = {
    IconVariant.SUN: frozenset({0, 1}),
    IconVariant.CLOUD: frozenset({2, 3}),
    IconVariant.FOG: frozenset({45, 48}),
    IconVariant.RAIN: frozenset({51, 53, 55, 61, 63, 65, 80, 81, 82}),
    IconVariant.DRIZZLE: frozenset({56, 57, 66, 67}),
    IconVariant.SNOW: frozenset({71, 73, 75, 85, 86}),
    IconVariant.THUNDER: frozenset({95, 96, 99}),
}

_ICON_BY_CODE: Dict[int, IconVariant] = {
    code: variant for variant, codes in ICON_BUCKETS.items() for code in codes
}


def icon_for(code: int) -> IconVariant:
    """Return the icon variant for ``code``; total over all integers."""

    return _ICON_BY_CODE.get(code, IconVariant.DEFAULT_CLOUD)


__all__ = ["ICON_BUCKETS", "IconVariant", "icon_for"]

"""Status classifier — maps the free-text analysis result to an icon category.

The backend answers in prose, so the category is picked by substring
containment against the three markers the prompt asks for. Markers are
checked in a fixed order (normal, flashover, cracked) and the first match
wins; a reply mentioning more than one status is therefore resolved in
favour of the earlier marker.
"""
from enum import Enum
from typing import Optional

from antenna_analyzer.constants import (
    ICON_CRACKED,
    ICON_FLASHOVER,
    ICON_NORMAL,
    MARKER_CRACKED,
    MARKER_FLASHOVER,
    MARKER_NORMAL,
)


class StatusCategory(Enum):
    NORMAL = (MARKER_NORMAL, ICON_NORMAL)
    FLASHOVER = (MARKER_FLASHOVER, ICON_FLASHOVER)
    CRACKED = (MARKER_CRACKED, ICON_CRACKED)

    @property
    def marker(self) -> str:
        return self.value[0]

    @property
    def icon(self) -> str:
        return self.value[1]


# Match order is part of the contract.
MATCH_ORDER: tuple[StatusCategory, ...] = (
    StatusCategory.NORMAL,
    StatusCategory.FLASHOVER,
    StatusCategory.CRACKED,
)


def classify_status(result: Optional[str]) -> Optional[StatusCategory]:
    match result:
        case None | "":
            return None
        case text:
            return next((c for c in MATCH_ORDER if c.marker in text), None)

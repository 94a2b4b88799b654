"""Detect superseded gathering point records."""
from __future__ import annotations

from .sheets import GatheringPointRow, StaticSheets

# Quest 74 tags Skybuilders gathering points.
SKYBUILDERS_QUEST_ID = 74
# Current Diadem plus its two older versions.
CURRENT_DIADEM_TERRITORIES = frozenset({939, 929, 901})


def is_deprecated(point: GatheringPointRow, sheets: StaticSheets) -> bool:
    """Return True for Skybuilders points left behind outside the Diadem."""

    if point.sub_category_id is None:
        return False
    sub_category = sheets.gathering_sub_category(point.sub_category_id)
    if sub_category is None or sub_category.quest != SKYBUILDERS_QUEST_ID:
        return False
    return point.territory_type not in CURRENT_DIADEM_TERRITORIES

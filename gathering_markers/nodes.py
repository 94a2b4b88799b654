"""Canonical gathering nodes and the rules that derive them from sheet rows."""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .host import PlayerState
from .sheets import GatheringPointBaseRow, StaticSheets

_LOGGER = logging.getLogger("StaticGatheringMarkers.Nodes")

SPEARFISHING_GATHERING_TYPE = 5


class GatheringJob(enum.Enum):
    MINER = "Miner"
    BOTANIST = "Botanist"
    FISHER = "Fisher"


_JOB_BY_GATHERING_TYPE = {
    0: GatheringJob.MINER,
    1: GatheringJob.MINER,
    2: GatheringJob.BOTANIST,
    3: GatheringJob.BOTANIST,
    4: GatheringJob.FISHER,
    5: GatheringJob.BOTANIST,
    6: GatheringJob.MINER,
    7: GatheringJob.FISHER,
}

_JOB_BY_CLASS_ID = {
    16: GatheringJob.MINER,
    17: GatheringJob.BOTANIST,
    18: GatheringJob.FISHER,
}


def job_for_gathering_type(gathering_type: int) -> Optional[GatheringJob]:
    return _JOB_BY_GATHERING_TYPE.get(gathering_type)


def job_for_class_id(class_id: int) -> Optional[GatheringJob]:
    """Map the player's current class/job id to a gathering job, if it is one."""
    return _JOB_BY_CLASS_ID.get(class_id)


@dataclass(frozen=True)
class Coords:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class GatheringNode:
    key: str
    coordinates: Coords
    icon_id: int
    label: str
    items: Tuple[str, ...]
    show_direction: bool
    job: Optional[GatheringJob]


def _round_half_away(value: float) -> int:
    rounded = int(math.floor(abs(value) + 0.5))
    return -rounded if value < 0 else rounded


def node_key(coords: Coords) -> str:
    """Identity string shared by every base that rounds to the same point."""
    return f"GN_{_round_half_away(coords.x):,}_{_round_half_away(coords.y):,}"


def resolve_item_names(base: GatheringPointBaseRow, sheets: StaticSheets) -> List[str]:
    names: List[str] = []
    for slot in base.items:
        if slot == 0:
            continue
        gathering_item = sheets.gathering_item(slot)
        if gathering_item is None:
            _LOGGER.debug("Gathering item %d missing for base %d", slot, base.row_id)
            continue
        item = sheets.item(gathering_item.item)
        if item is None or not item.name:
            _LOGGER.debug("Item %d missing for base %d", gathering_item.item, base.row_id)
            continue
        names.append(item.name)
    return names


def build_node(
    base: GatheringPointBaseRow,
    coords: Optional[Coords],
    sheets: StaticSheets,
    player: PlayerState,
) -> GatheringNode:
    """Join a base row with its coordinates into a :class:`GatheringNode`.

    Missing coordinates place the node at the origin. The player's diving state
    is read once here, so direction eligibility stays as built until the next
    zone change.
    """

    position = coords if coords is not None else Coords()
    gathering_type = sheets.gathering_type(base.gathering_type)
    hide_direction = base.gathering_type == SPEARFISHING_GATHERING_TYPE and not player.is_diving
    return GatheringNode(
        key=node_key(position),
        coordinates=position,
        icon_id=gathering_type.icon_main if gathering_type is not None else 0,
        label=f"Level {base.gathering_level} Gathering Point",
        items=tuple(resolve_item_names(base, sheets)),
        show_direction=not hide_direction,
        job=job_for_gathering_type(base.gathering_type),
    )

"""Zone-scoped cache of gathering nodes, rebuilt wholesale on zone change."""
from __future__ import annotations

import logging
import threading
from typing import Dict, Iterator, List

from .deprecation import is_deprecated
from .host import PlayerState
from .nodes import Coords, GatheringNode, build_node
from .sheets import GatheringPointBaseRow, StaticSheets

_LOGGER = logging.getLogger("StaticGatheringMarkers.Cache")


class ZoneNodeCache:
    """Owns the nodes for the current zone.

    Entries are keyed by :attr:`GatheringNode.key`; when two bases round to the
    same key the later one replaces the earlier one in place.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._nodes: Dict[str, GatheringNode] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)

    def __iter__(self) -> Iterator[GatheringNode]:
        return iter(self.nodes())

    def nodes(self) -> List[GatheringNode]:
        with self._lock:
            return list(self._nodes.values())

    def clear(self) -> None:
        with self._lock:
            self._nodes.clear()

    def rebuild(
        self,
        territory_id: int,
        sheets: StaticSheets,
        player: PlayerState,
        zone_name: str = "",
    ) -> int:
        """Replace the cache contents with the nodes of ``territory_id``.

        Returns the number of cached nodes. When either bulk sheet cannot be
        read the cache is left empty.
        """

        with self._lock:
            self._nodes.clear()
            points = sheets.gathering_points()
            bases = self._bases_for_territory(points, territory_id, sheets) if points is not None else None
            exported = sheets.exported_gathering_points()
            if bases is None or exported is None:
                _LOGGER.warning(
                    "Failed to load gathering points or coordinates. points - %s | coordinates - %s",
                    "present" if bases is not None else "null",
                    "present" if exported is not None else "null",
                )
                return 0

            coords: Dict[int, Coords] = {
                row.row_id: Coords(row.x, row.y) for row in exported if row.row_id in bases
            }
            _LOGGER.info("Loaded %d gathering points for zone %s - %d", len(bases), zone_name, territory_id)
            _LOGGER.info("Loaded %d coordinates for zone %s - %d", len(coords), zone_name, territory_id)

            for row_id, base in bases.items():
                node = build_node(base, coords.get(row_id), sheets, player)
                if node.key in self._nodes:
                    _LOGGER.debug("Node key %s collides; base %d replaces earlier entry", node.key, row_id)
                self._nodes[node.key] = node
            return len(self._nodes)

    @staticmethod
    def _bases_for_territory(points, territory_id: int, sheets: StaticSheets) -> Dict[int, GatheringPointBaseRow]:
        bases: Dict[int, GatheringPointBaseRow] = {}
        for point in points:
            if point.territory_type != territory_id or is_deprecated(point, sheets):
                continue
            if point.base_id in bases:
                continue
            base = sheets.gathering_point_base(point.base_id)
            if base is None:
                _LOGGER.debug("Gathering point %d references missing base %d", point.row_id, point.base_id)
                continue
            bases[base.row_id] = base
        return bases

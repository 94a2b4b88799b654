"""Turn cached gathering nodes into overlay marker descriptors."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from . import overlay_api
from .host import PlayerState
from .node_cache import ZoneNodeCache
from .nodes import GatheringJob, GatheringNode, job_for_class_id

_LOGGER = logging.getLogger("StaticGatheringMarkers.Projector")


class MarkerSettings(Protocol):
    def get(self, name: str) -> Any: ...


@dataclass(frozen=True)
class MarkerDescriptor:
    map_id: int
    key: str
    position: Tuple[float, float, float]
    icon_id: int
    label: str
    sub_label: Optional[str]
    show_on_compass: bool
    fade_distance: Tuple[int, int]

    def as_payload(self) -> Dict[str, Any]:
        return {
            "map_id": self.map_id,
            "key": self.key,
            "position": list(self.position),
            "icon_id": self.icon_id,
            "label": self.label,
            "sub_label": self.sub_label,
            "show_on_compass": self.show_on_compass,
            "fade_distance": list(self.fade_distance),
        }


def sub_label_for(node: GatheringNode, rotation: int, show_contents: bool) -> Optional[str]:
    if not show_contents or not node.items:
        return None
    return node.items[rotation % len(node.items)]


def project_markers(
    nodes: Iterable[GatheringNode],
    settings: MarkerSettings,
    job: Optional[GatheringJob],
    rotation: int,
    map_id: int,
) -> List[MarkerDescriptor]:
    """Build the marker list for ``nodes`` in their given order.

    Nodes belonging to the player's current gathering job are left out unless
    ``ShowMarkersForCurrentClass`` is set.
    """

    if not settings.get("Enabled"):
        return []

    hide_job = job if job is not None and not settings.get("ShowMarkersForCurrentClass") else None
    show_contents = bool(settings.get("ShowContents"))
    show_on_compass = bool(settings.get("ShowOnCompass"))
    near = int(settings.get("FadeDistance"))
    far = near + int(settings.get("FadeAttenuation"))

    markers: List[MarkerDescriptor] = []
    for node in nodes:
        if hide_job is not None and node.job == hide_job:
            continue
        markers.append(
            MarkerDescriptor(
                map_id=map_id,
                key=node.key,
                position=(node.coordinates.x, 0.0, node.coordinates.y),
                icon_id=node.icon_id,
                label=node.label,
                sub_label=sub_label_for(node, rotation, show_contents),
                show_on_compass=node.show_direction and show_on_compass,
                fade_distance=(near, far),
            )
        )
    return markers


class MarkerProjector:
    """Publishes the complete marker list for the current cache state."""

    def __init__(self, cache: ZoneNodeCache, settings: MarkerSettings, player: PlayerState) -> None:
        self._cache = cache
        self._settings = settings
        self._player = player

    def refresh(self, map_id: int, rotation: int) -> List[MarkerDescriptor]:
        job = job_for_class_id(self._player.job_id)
        markers = project_markers(self._cache.nodes(), self._settings, job, rotation, map_id)
        if not overlay_api.replace_markers(map_id, markers):
            _LOGGER.debug("Marker update for map %s was not delivered", map_id)
        return markers

    def clear(self, map_id: int) -> None:
        overlay_api.replace_markers(map_id, [])

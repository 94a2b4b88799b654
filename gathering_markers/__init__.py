"""Static gathering point markers for players without a gathering class."""

from .node_cache import ZoneNodeCache
from .nodes import GatheringJob, GatheringNode
from .projector import MarkerDescriptor, MarkerProjector, project_markers
from .rotation import RotationCounter, RotationTimer

__all__ = [
    "GatheringJob",
    "GatheringNode",
    "MarkerDescriptor",
    "MarkerProjector",
    "RotationCounter",
    "RotationTimer",
    "ZoneNodeCache",
    "project_markers",
]

"""Outbound marker API towards the host's overlay renderer."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Sequence

_LOGGER = logging.getLogger("StaticGatheringMarkers.Overlay")

REPLACE_MARKERS_EVENT = "ReplaceMarkers"
MARKER_SOURCE = "StaticGatheringNodeMarkers"

_publisher: Optional[Callable[[Mapping[str, Any]], bool]] = None


def register_publisher(publisher: Callable[[Mapping[str, Any]], bool]) -> None:
    """Register a callable that delivers marker payloads to the overlay.

    The host adapter calls this during startup; the callable must drop every
    marker it holds for :data:`MARKER_SOURCE` and add the ones in the payload.
    """

    global _publisher
    _publisher = publisher


def unregister_publisher() -> None:
    """Clear the registered publisher (called when the plugin stops)."""

    global _publisher
    _publisher = None


def replace_markers(map_id: int, markers: Sequence[Any]) -> bool:
    """Replace every marker this plugin owns with ``markers``.

    Parameters
    ----------
    map_id:
        Map the markers belong to.
    markers:
        Ordered marker descriptors; each must offer ``as_payload()``. An empty
        sequence clears the overlay.

    Returns
    -------
    bool
        ``True`` if the payload was handed to the publisher, ``False``
        otherwise.
    """

    publisher = _publisher
    if publisher is None:
        _log_warning("Overlay publisher unavailable (plugin not running?)")
        return False

    payload = {
        "event": REPLACE_MARKERS_EVENT,
        "source": MARKER_SOURCE,
        "map_id": map_id,
        "markers": [marker.as_payload() for marker in markers],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    try:
        json.dumps(payload, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        _log_warning(f"Marker payload is not JSON serialisable: {exc}")
        return False

    try:
        return bool(publisher(payload))
    except Exception as exc:
        _log_warning(f"Overlay publisher raised error: {exc}")
        return False


def _log_warning(message: str) -> None:
    _LOGGER.warning(message)

"""Optional on-disk log of every marker payload sent to the overlay."""
from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping, Optional

from .preferences import MarkerPreferences

PAYLOAD_LOGGER_NAME = "StaticGatheringMarkers.Payloads"
PAYLOAD_LOG_DIRNAME = "logs"
PAYLOAD_LOG_FILENAME = "gathering-markers-payloads.log"
PAYLOAD_LOG_MAX_BYTES = 512 * 1024

_LOGGER = logging.getLogger("StaticGatheringMarkers.PayloadLog")


class MarkerPayloadLog:
    """Writes ``ReplaceMarkers`` payloads to ``<plugin_dir>/logs`` when enabled.

    ``LogPayloads`` switches the log on and ``PayloadLogRetention`` is the total
    number of files kept, the live one included.
    """

    def __init__(self, plugin_dir: Path, preferences: MarkerPreferences) -> None:
        self.log_path = Path(plugin_dir) / PAYLOAD_LOG_DIRNAME / PAYLOAD_LOG_FILENAME
        self._preferences = preferences
        self._logger = logging.getLogger(PAYLOAD_LOGGER_NAME)
        self._handler: Optional[RotatingFileHandler] = None

    @property
    def active(self) -> bool:
        return self._handler is not None

    def configure(self) -> None:
        """Open, reopen or close the log to match the current preferences."""
        self.close()
        if not self._preferences.log_payloads:
            return
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                self.log_path,
                maxBytes=PAYLOAD_LOG_MAX_BYTES,
                backupCount=max(0, self._preferences.payload_log_retention - 1),
                encoding="utf-8",
            )
        except OSError as exc:
            _LOGGER.warning("Failed to open marker payload log %s: %s", self.log_path, exc)
            return
        handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
        handler.setLevel(logging.DEBUG)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        self._logger.addHandler(handler)
        self._handler = handler

    def close(self) -> None:
        handler = self._handler
        if handler is None:
            return
        self._logger.removeHandler(handler)
        handler.close()
        self._handler = None

    def record(self, payload: Mapping[str, Any]) -> None:
        if self._handler is None:
            return
        try:
            serialised = json.dumps(payload, ensure_ascii=False, sort_keys=True)
        except (TypeError, ValueError):
            serialised = repr(payload)
        markers = payload.get("markers") or ()
        self._logger.debug(
            "Marker payload [%s] map=%s markers=%d: %s",
            payload.get("event"),
            payload.get("map_id"),
            len(markers),
            serialised,
        )

"""Primary entry point for the Static Gathering Markers plugin."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional

if __package__:
    from .version import __version__ as PLUGIN_VERSION
    from .gathering_markers import overlay_api
    from .gathering_markers.host import PlayerState, Zone, ZoneManager
    from .gathering_markers.logging_utils import MarkerPayloadLog
    from .gathering_markers.node_cache import ZoneNodeCache
    from .gathering_markers.preferences import MarkerPreferences
    from .gathering_markers.projector import MarkerDescriptor, MarkerProjector
    from .gathering_markers.rotation import AfterCancelFn, AfterFn, RotationCounter, RotationTimer
    from .gathering_markers.sheets import StaticSheets
else:  # pragma: no cover - host loads as top-level module
    from version import __version__ as PLUGIN_VERSION
    from gathering_markers import overlay_api
    from gathering_markers.host import PlayerState, Zone, ZoneManager
    from gathering_markers.logging_utils import MarkerPayloadLog
    from gathering_markers.node_cache import ZoneNodeCache
    from gathering_markers.preferences import MarkerPreferences
    from gathering_markers.projector import MarkerDescriptor, MarkerProjector
    from gathering_markers.rotation import AfterCancelFn, AfterFn, RotationCounter, RotationTimer
    from gathering_markers.sheets import StaticSheets

PLUGIN_NAME = "StaticGatheringMarkers"
PLUGIN_DESCRIPTION = "Shows Gathering Markers even when not a DoL"
LOGGER_NAME = "StaticGatheringMarkers"
LOG_TAG = "Static Gathering Markers"

Publisher = Callable[[Mapping[str, Any]], bool]

_host_logger: Optional[logging.Logger] = None


def set_host_logger(logger: Optional[logging.Logger]) -> None:
    """Route plugin log records through the host's logger."""
    global _host_logger
    _host_logger = logger


class _HostLogHandler(logging.Handler):
    """Logging bridge that forwards plugin records to the host logger."""

    def emit(self, record: logging.LogRecord) -> None:
        message = self.format(record)
        host_logger = _host_logger
        if host_logger is not None:
            try:
                if host_logger.isEnabledFor(record.levelno):
                    host_logger.log(record.levelno, message)
                return
            except Exception:
                pass
        root_logger = logging.getLogger()
        if root_logger.isEnabledFor(record.levelno):
            root_logger.log(record.levelno, message)


def _configure_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    if not any(getattr(handler, "_host_handler", False) for handler in logger.handlers):
        handler = _HostLogHandler()
        handler._host_handler = True  # type: ignore[attr-defined]
        formatter = logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(message)s", "%H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


LOGGER = _configure_logger()


class _PluginRuntime:
    """Single owner of the node cache, rotation counter and marker projector."""

    def __init__(
        self,
        plugin_dir: str,
        preferences: MarkerPreferences,
        sheets: StaticSheets,
        player: PlayerState,
        zones: ZoneManager,
        publisher: Publisher,
    ) -> None:
        self.plugin_dir = Path(plugin_dir)
        self._preferences = preferences
        self._sheets = sheets
        self._player = player
        self._zones = zones
        self._publisher = publisher
        self._lock = threading.Lock()
        self._running = False
        self.cache = ZoneNodeCache()
        self.rotation = RotationCounter()
        self.projector = MarkerProjector(self.cache, preferences, player)
        self.timer: Optional[RotationTimer] = None
        self._zone: Optional[Zone] = None
        self._cached_territory: Optional[int] = None
        self.payload_log = MarkerPayloadLog(self.plugin_dir, preferences)

    # Lifecycle ------------------------------------------------------------

    def start(self) -> str:
        with self._lock:
            if self._running:
                return PLUGIN_NAME
            self._running = True
        overlay_api.register_publisher(self._publish_external)
        self.payload_log.configure()
        LOGGER.info("Initialized. Fetching markers")
        if self._zones.has_current_zone:
            self.handle_zone_changed(self._zones.current_zone)
        return PLUGIN_NAME

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
        LOGGER.info("Plugin stopping")
        self.stop_rotation_timer()
        if self._zone is not None:
            self.projector.clear(self._zone.id)
        self._zone = None
        overlay_api.unregister_publisher()
        self.cache.clear()
        self._cached_territory = None
        self.payload_log.close()

    def start_rotation_timer(self, after: AfterFn, after_cancel: AfterCancelFn) -> None:
        self.stop_rotation_timer()
        self.timer = RotationTimer(after=after, after_cancel=after_cancel, logger=LOGGER.debug)
        self.timer.start(self.handle_tick)

    def stop_rotation_timer(self) -> None:
        if self.timer is not None:
            self.timer.stop()
            self.timer = None

    # Host notifications ---------------------------------------------------

    def handle_zone_changed(self, zone: Zone) -> List[MarkerDescriptor]:
        if not self._running:
            return []
        LOGGER.info("Got zone change. Fetching markers")
        self._zone = zone
        self.projector.clear(zone.id)
        self.cache.clear()
        self._cached_territory = None
        if not self._preferences.enabled:
            return []
        self._rebuild(zone)
        return self._refresh()

    def handle_config_updated(self, name: str) -> List[MarkerDescriptor]:
        if not self._running:
            return []
        LOGGER.debug("Config updated: %s", name)
        if name in ("LogPayloads", "PayloadLogRetention"):
            self.payload_log.configure()
        zone = self._zone
        if name == "Enabled" and self._preferences.enabled and zone is not None:
            if self._cached_territory != zone.territory_id:
                self._rebuild(zone)
        return self._refresh()

    def handle_tick(self) -> List[MarkerDescriptor]:
        self.rotation.advance()
        if not self._running:
            return []
        return self._refresh()

    # Helpers --------------------------------------------------------------

    def _rebuild(self, zone: Zone) -> None:
        self.cache.rebuild(zone.territory_id, self._sheets, self._player, zone.name)
        self._cached_territory = zone.territory_id

    def _refresh(self) -> List[MarkerDescriptor]:
        if self._zone is None:
            return []
        return self.projector.refresh(self._zone.id, self.rotation.value)

    def _publish_external(self, payload: Mapping[str, Any]) -> bool:
        self.payload_log.record(payload)
        return bool(self._publisher(payload))


_plugin: Optional[_PluginRuntime] = None
_preferences: Optional[MarkerPreferences] = None


def plugin_start3(
    plugin_dir: str,
    sheets: StaticSheets,
    player: PlayerState,
    zones: ZoneManager,
    publisher: Publisher,
    host_logger: Optional[logging.Logger] = None,
) -> str:
    if host_logger is not None:
        set_host_logger(host_logger)
    LOGGER.info("Initialising Static Gathering Markers plugin from %s", plugin_dir)
    global _plugin, _preferences
    if _plugin is not None:
        return PLUGIN_NAME
    _preferences = MarkerPreferences(Path(plugin_dir))
    _plugin = _PluginRuntime(plugin_dir, _preferences, sheets, player, zones, publisher)
    return _plugin.start()


def plugin_stop() -> None:
    global _plugin, _preferences
    if _plugin:
        try:
            _plugin.stop()
        finally:
            _plugin = None
    _preferences = None
    set_host_logger(None)


def plugin_app(parent) -> Optional[Any]:
    """Drive rotation from the host's Tk-style ``after`` loop when offered."""
    after = getattr(parent, "after", None)
    after_cancel = getattr(parent, "after_cancel", None)
    if _plugin is None or not callable(after) or not callable(after_cancel):
        return None
    _plugin.start_rotation_timer(after, after_cancel)
    return None


def zone_changed(zone: Zone) -> None:
    if _plugin is None:
        return
    try:
        _plugin.handle_zone_changed(zone)
    except Exception as exc:
        LOGGER.exception("Failed to update markers after zone change: %s", exc)


def prefs_changed(name: str) -> None:
    if _plugin is None:
        return
    try:
        _plugin.handle_config_updated(name)
    except Exception as exc:
        LOGGER.exception("Failed to apply config change %s: %s", name, exc)


def set_config_value(name: str, value: Any) -> Any:
    """Store a preference by its host key and re-project markers."""
    if _preferences is None:
        raise RuntimeError("Plugin is not running")
    stored = _preferences.set(name, value)
    prefs_changed(name)
    return stored


def tick() -> None:
    if _plugin is None:
        return
    try:
        _plugin.handle_tick()
    except Exception as exc:
        LOGGER.exception("Failed to rotate marker contents: %s", exc)


# Metadata expected by some plugin loaders
name = PLUGIN_NAME
version = PLUGIN_VERSION
description = PLUGIN_DESCRIPTION
plugin_name = PLUGIN_NAME

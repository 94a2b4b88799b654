"""Preferences for the Static Gathering Markers plugin."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

PREFERENCES_FILE = "gathering_markers.json"
FADE_DISTANCE_DEFAULT = 50
FADE_ATTENUATION_DEFAULT = 10
FADE_MAX = 5000

# Host config key -> (attribute, type)
CONFIG_KEYS: Dict[str, tuple[str, type]] = {
    "Enabled": ("enabled", bool),
    "ShowContents": ("show_contents", bool),
    "ShowMarkersForCurrentClass": ("show_markers_for_current_class", bool),
    "ShowOnCompass": ("show_on_compass", bool),
    "FadeDistance": ("fade_distance", int),
    "FadeAttenuation": ("fade_attenuation", int),
    "LogPayloads": ("log_payloads", bool),
    "PayloadLogRetention": ("payload_log_retention", int),
}


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off", ""}:
            return False
        return default
    if value is None:
        return default
    return bool(value)


def _coerce_int(value: Any, default: int, *, minimum: int = 0, maximum: int = FADE_MAX) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = default
    return max(minimum, min(number, maximum))


@dataclass
class MarkerPreferences:
    """Simple JSON-backed preferences store."""

    plugin_dir: Path
    enabled: bool = True
    show_contents: bool = True
    show_markers_for_current_class: bool = False
    show_on_compass: bool = True
    fade_distance: int = FADE_DISTANCE_DEFAULT
    fade_attenuation: int = FADE_ATTENUATION_DEFAULT
    log_payloads: bool = False
    payload_log_retention: int = 5

    def __post_init__(self) -> None:
        self.plugin_dir = Path(self.plugin_dir)
        self._path = self.plugin_dir / PREFERENCES_FILE
        self._load()

    # Persistence ---------------------------------------------------------

    def _load(self) -> None:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict):
            return
        self.enabled = _coerce_bool(data.get("enabled"), True)
        self.show_contents = _coerce_bool(data.get("show_contents"), True)
        self.show_markers_for_current_class = _coerce_bool(data.get("show_markers_for_current_class"), False)
        self.show_on_compass = _coerce_bool(data.get("show_on_compass"), True)
        self.fade_distance = _coerce_int(data.get("fade_distance"), FADE_DISTANCE_DEFAULT)
        self.fade_attenuation = _coerce_int(data.get("fade_attenuation"), FADE_ATTENUATION_DEFAULT)
        self.log_payloads = _coerce_bool(data.get("log_payloads"), False)
        self.payload_log_retention = _coerce_int(data.get("payload_log_retention"), 5, minimum=1, maximum=50)

    def save(self) -> None:
        payload: Dict[str, Any] = {
            "enabled": bool(self.enabled),
            "show_contents": bool(self.show_contents),
            "show_markers_for_current_class": bool(self.show_markers_for_current_class),
            "show_on_compass": bool(self.show_on_compass),
            "fade_distance": int(self.fade_distance),
            "fade_attenuation": int(self.fade_attenuation),
            "log_payloads": bool(self.log_payloads),
            "payload_log_retention": int(self.payload_log_retention),
        }
        self.plugin_dir.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    # Host key access -----------------------------------------------------

    def get(self, name: str) -> Any:
        attr, _kind = CONFIG_KEYS[name]
        return getattr(self, attr)

    def set(self, name: str, value: Any) -> Any:
        """Store ``value`` under the host key ``name`` and persist it."""
        attr, kind = CONFIG_KEYS[name]
        if kind is bool:
            coerced: Any = _coerce_bool(value, getattr(self, attr))
        elif name == "PayloadLogRetention":
            coerced = _coerce_int(value, 5, minimum=1, maximum=50)
        else:
            coerced = _coerce_int(value, getattr(self, attr))
        setattr(self, attr, coerced)
        self.save()
        return coerced

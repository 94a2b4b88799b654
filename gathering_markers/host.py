"""Protocols for the host services the plugin reads from."""
from __future__ import annotations

from typing import Protocol


class PlayerState(Protocol):
    job_id: int
    is_diving: bool


class Zone(Protocol):
    id: int
    territory_id: int
    name: str


class ZoneManager(Protocol):
    has_current_zone: bool
    current_zone: Zone

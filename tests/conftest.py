from __future__ import annotations

import pytest

from gathering_markers import overlay_api
from gathering_markers.sheets import (
    ExportedGatheringPointRow,
    GatheringItemRow,
    GatheringPointBaseRow,
    GatheringPointRow,
    GatheringSubCategoryRow,
    GatheringTypeRow,
    InMemorySheets,
    ItemRow,
)

TERRITORY_ID = 100
MAP_ID = 7
_DEFAULT = object()


class DummyPlayer:
    def __init__(self, job_id: int = 0, is_diving: bool = False) -> None:
        self.job_id = job_id
        self.is_diving = is_diving


class DummyZone:
    def __init__(self, zone_id: int = MAP_ID, territory_id: int = TERRITORY_ID, name: str = "Test Zone") -> None:
        self.id = zone_id
        self.territory_id = territory_id
        self.name = name


class DummyZones:
    def __init__(self, zone: DummyZone | None = None) -> None:
        self.current_zone = zone
        self.has_current_zone = zone is not None


def build_sheets(*, points=_DEFAULT, exported=_DEFAULT, **overrides) -> InMemorySheets:
    default_points = [
        GatheringPointRow(row_id=1, territory_type=TERRITORY_ID, base_id=10),
        GatheringPointRow(row_id=2, territory_type=TERRITORY_ID, base_id=10),
        GatheringPointRow(row_id=3, territory_type=TERRITORY_ID, base_id=20, sub_category_id=8),
        GatheringPointRow(row_id=4, territory_type=TERRITORY_ID, base_id=30),
        GatheringPointRow(row_id=5, territory_type=TERRITORY_ID, base_id=40, sub_category_id=9),
        GatheringPointRow(row_id=6, territory_type=200, base_id=50),
    ]
    default_exported = [
        ExportedGatheringPointRow(row_id=10, x=100.4, y=-200.6),
        ExportedGatheringPointRow(row_id=20, x=1234.5, y=10.0),
        ExportedGatheringPointRow(row_id=40, x=1.0, y=1.0),
        ExportedGatheringPointRow(row_id=50, x=5.0, y=5.0),
    ]
    tables = dict(
        points=default_points if points is _DEFAULT else points,
        exported=default_exported if exported is _DEFAULT else exported,
        bases=[
            GatheringPointBaseRow(row_id=10, gathering_type=0, gathering_level=5, items=(1, 2, 0, 0, 0, 0, 0, 0)),
            GatheringPointBaseRow(row_id=20, gathering_type=2, gathering_level=10, items=(0,) * 8),
            GatheringPointBaseRow(row_id=30, gathering_type=5, gathering_level=50, items=(3, 4, 77, 0, 0, 0, 0, 0)),
            GatheringPointBaseRow(row_id=40, gathering_type=0, gathering_level=15, items=(1,)),
            GatheringPointBaseRow(row_id=50, gathering_type=4, gathering_level=20, items=()),
        ],
        sub_categories=[
            GatheringSubCategoryRow(row_id=8, quest=0),
            GatheringSubCategoryRow(row_id=9, quest=74),
        ],
        types=[
            GatheringTypeRow(row_id=0, icon_main=60438),
            GatheringTypeRow(row_id=2, icon_main=60433),
            GatheringTypeRow(row_id=4, icon_main=60445),
        ],
        gathering_items=[
            GatheringItemRow(row_id=1, item=5106),
            GatheringItemRow(row_id=2, item=5107),
            GatheringItemRow(row_id=3, item=5380),
            GatheringItemRow(row_id=4, item=9999),
        ],
        items=[
            ItemRow(row_id=5106, name="Copper Ore"),
            ItemRow(row_id=5107, name="Tin Ore"),
            ItemRow(row_id=5380, name="Maple Log"),
        ],
    )
    tables.update(overrides)
    return InMemorySheets.from_rows(**tables)


@pytest.fixture
def sheets() -> InMemorySheets:
    return build_sheets()


@pytest.fixture
def make_sheets():
    return build_sheets


@pytest.fixture
def player() -> DummyPlayer:
    return DummyPlayer()


@pytest.fixture
def zone() -> DummyZone:
    return DummyZone()


@pytest.fixture
def zones(zone) -> DummyZones:
    return DummyZones(zone)


@pytest.fixture
def settings() -> dict:
    return {
        "Enabled": True,
        "ShowContents": True,
        "ShowMarkersForCurrentClass": False,
        "ShowOnCompass": True,
        "FadeDistance": 50,
        "FadeAttenuation": 10,
    }


@pytest.fixture
def published():
    payloads: list = []

    def _publisher(payload) -> bool:
        payloads.append(payload)
        return True

    overlay_api.register_publisher(_publisher)
    yield payloads
    overlay_api.unregister_publisher()


@pytest.fixture(autouse=True)
def _reset_overlay_publisher():
    yield
    overlay_api.unregister_publisher()

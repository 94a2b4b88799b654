"""Read-only views over the host's static data sheets.

The host owns and versions these tables. The plugin only ever looks rows up by
key, so every cross-sheet reference is modelled as a plain row id plus a lookup
method on :class:`StaticSheets` rather than as an embedded object reference.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Protocol, Tuple


@dataclass(frozen=True)
class GatheringPointRow:
    """One placed gathering location instance."""

    row_id: int
    territory_type: int
    base_id: int
    sub_category_id: Optional[int] = None


@dataclass(frozen=True)
class GatheringSubCategoryRow:
    row_id: int
    quest: int = 0


@dataclass(frozen=True)
class GatheringPointBaseRow:
    """Shared "kind" of a gathering location; many points reference one base."""

    row_id: int
    gathering_type: int
    gathering_level: int
    items: Tuple[int, ...] = ()


@dataclass(frozen=True)
class ExportedGatheringPointRow:
    """Map-space coordinates keyed by the base row id."""

    row_id: int
    x: float
    y: float


@dataclass(frozen=True)
class GatheringTypeRow:
    row_id: int
    icon_main: int = 0


@dataclass(frozen=True)
class GatheringItemRow:
    row_id: int
    item: int


@dataclass(frozen=True)
class ItemRow:
    row_id: int
    name: str


class StaticSheets(Protocol):
    """Row lookups the plugin needs from the host.

    The two bulk readers return ``None`` when the host cannot load the sheet.
    """

    def gathering_points(self) -> Optional[Iterable[GatheringPointRow]]: ...

    def exported_gathering_points(self) -> Optional[Iterable[ExportedGatheringPointRow]]: ...

    def gathering_point_base(self, row_id: int) -> Optional[GatheringPointBaseRow]: ...

    def gathering_sub_category(self, row_id: int) -> Optional[GatheringSubCategoryRow]: ...

    def gathering_type(self, row_id: int) -> Optional[GatheringTypeRow]: ...

    def gathering_item(self, row_id: int) -> Optional[GatheringItemRow]: ...

    def item(self, row_id: int) -> Optional[ItemRow]: ...


def _index(rows: Iterable[object]) -> Dict[int, object]:
    return {row.row_id: row for row in rows}  # type: ignore[attr-defined]


@dataclass
class InMemorySheets:
    """Dictionary-backed :class:`StaticSheets` used by tools and tests.

    Passing ``None`` for ``points`` or ``exported`` simulates a sheet the host
    failed to load.
    """

    points: Optional[Tuple[GatheringPointRow, ...]] = ()
    exported: Optional[Tuple[ExportedGatheringPointRow, ...]] = ()
    bases: Mapping[int, GatheringPointBaseRow] = field(default_factory=dict)
    sub_categories: Mapping[int, GatheringSubCategoryRow] = field(default_factory=dict)
    types: Mapping[int, GatheringTypeRow] = field(default_factory=dict)
    gathering_items: Mapping[int, GatheringItemRow] = field(default_factory=dict)
    items: Mapping[int, ItemRow] = field(default_factory=dict)

    @classmethod
    def from_rows(
        cls,
        *,
        points: Optional[Iterable[GatheringPointRow]] = (),
        exported: Optional[Iterable[ExportedGatheringPointRow]] = (),
        bases: Iterable[GatheringPointBaseRow] = (),
        sub_categories: Iterable[GatheringSubCategoryRow] = (),
        types: Iterable[GatheringTypeRow] = (),
        gathering_items: Iterable[GatheringItemRow] = (),
        items: Iterable[ItemRow] = (),
    ) -> "InMemorySheets":
        return cls(
            points=tuple(points) if points is not None else None,
            exported=tuple(exported) if exported is not None else None,
            bases=_index(bases),  # type: ignore[arg-type]
            sub_categories=_index(sub_categories),  # type: ignore[arg-type]
            types=_index(types),  # type: ignore[arg-type]
            gathering_items=_index(gathering_items),  # type: ignore[arg-type]
            items=_index(items),  # type: ignore[arg-type]
        )

    def gathering_points(self) -> Optional[Iterable[GatheringPointRow]]:
        return self.points

    def exported_gathering_points(self) -> Optional[Iterable[ExportedGatheringPointRow]]:
        return self.exported

    def gathering_point_base(self, row_id: int) -> Optional[GatheringPointBaseRow]:
        return self.bases.get(row_id)

    def gathering_sub_category(self, row_id: int) -> Optional[GatheringSubCategoryRow]:
        return self.sub_categories.get(row_id)

    def gathering_type(self, row_id: int) -> Optional[GatheringTypeRow]:
        return self.types.get(row_id)

    def gathering_item(self, row_id: int) -> Optional[GatheringItemRow]:
        return self.gathering_items.get(row_id)

    def item(self, row_id: int) -> Optional[ItemRow]:
        return self.items.get(row_id)

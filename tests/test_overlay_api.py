from __future__ import annotations

from gathering_markers import overlay_api
from gathering_markers.projector import MarkerDescriptor


def _marker(key: str = "GN_1_2", sub_label=None) -> MarkerDescriptor:
    return MarkerDescriptor(
        map_id=7,
        key=key,
        position=(1.0, 0.0, 2.0),
        icon_id=60438,
        label="Level 5 Gathering Point",
        sub_label=sub_label,
        show_on_compass=True,
        fade_distance=(50, 60),
    )


def test_replace_markers_without_publisher_returns_false():
    assert overlay_api.replace_markers(7, [_marker()]) is False


def test_replace_markers_sends_complete_list(published):
    assert overlay_api.replace_markers(7, [_marker("a", "Copper Ore"), _marker("b")]) is True

    payload = published[0]
    assert payload["event"] == overlay_api.REPLACE_MARKERS_EVENT
    assert payload["source"] == overlay_api.MARKER_SOURCE
    assert "timestamp" in payload
    assert [entry["key"] for entry in payload["markers"]] == ["a", "b"]
    assert payload["markers"][0]["sub_label"] == "Copper Ore"
    assert payload["markers"][1]["fade_distance"] == [50, 60]


def test_empty_list_clears(published):
    assert overlay_api.replace_markers(7, []) is True
    assert published[0]["markers"] == []


def test_publisher_errors_are_contained():
    def _boom(_payload):
        raise RuntimeError("overlay gone")

    overlay_api.register_publisher(_boom)
    assert overlay_api.replace_markers(7, [_marker()]) is False


def test_large_zone_is_published_in_one_payload(published):
    markers = [_marker(f"GN_{index}_{index}", "Copper Ore") for index in range(3000)]

    assert overlay_api.replace_markers(7, markers) is True
    assert len(published) == 1
    assert len(published[0]["markers"]) == 3000
    assert published[0]["markers"][-1]["key"] == "GN_2999_2999"

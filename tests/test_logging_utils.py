from __future__ import annotations

import logging

from gathering_markers.logging_utils import PAYLOAD_LOGGER_NAME, MarkerPayloadLog
from gathering_markers.preferences import MarkerPreferences


def _payload(count: int = 2) -> dict:
    return {
        "event": "ReplaceMarkers",
        "map_id": 7,
        "markers": [{"key": f"GN_{index}_0"} for index in range(count)],
    }


def test_payload_log_stays_closed_when_disabled(tmp_path):
    log = MarkerPayloadLog(tmp_path, MarkerPreferences(tmp_path))
    log.configure()
    log.record(_payload())

    assert log.active is False
    assert not log.log_path.exists()


def test_payload_log_records_map_and_marker_count(tmp_path):
    prefs = MarkerPreferences(tmp_path)
    prefs.set("LogPayloads", True)
    log = MarkerPayloadLog(tmp_path, prefs)
    log.configure()
    try:
        log.record(_payload(3))
    finally:
        log.close()

    assert log.log_path == tmp_path / "logs" / "gathering-markers-payloads.log"
    text = log.log_path.read_text(encoding="utf-8")
    assert "Marker payload [ReplaceMarkers] map=7 markers=3" in text
    assert "GN_2_0" in text


def test_retention_sets_backup_count(tmp_path):
    prefs = MarkerPreferences(tmp_path)
    prefs.set("LogPayloads", True)
    prefs.set("PayloadLogRetention", 4)
    log = MarkerPayloadLog(tmp_path, prefs)
    log.configure()
    try:
        handlers = logging.getLogger(PAYLOAD_LOGGER_NAME).handlers
        assert len(handlers) == 1
        assert handlers[0].backupCount == 3
    finally:
        log.close()

    assert logging.getLogger(PAYLOAD_LOGGER_NAME).handlers == []
    assert log.active is False


def test_reconfigure_closes_log_when_switched_off(tmp_path):
    prefs = MarkerPreferences(tmp_path)
    prefs.set("LogPayloads", True)
    log = MarkerPayloadLog(tmp_path, prefs)
    log.configure()
    assert log.active is True

    prefs.set("LogPayloads", False)
    log.configure()

    assert log.active is False
    assert logging.getLogger(PAYLOAD_LOGGER_NAME).handlers == []

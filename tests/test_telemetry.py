from __future__ import annotations

from pathlib import Path

from memorymatch.services.telemetry import TelemetryService


def test_log_appends_json_lines(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "telemetry.jsonl"
    telemetry = TelemetryService(path)
    telemetry.log("boot", {"ok": True})
    telemetry.log("boot", {"ok": False, "error": "Missing content file"})

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    records = telemetry.read_all()
    assert records[0]["type"] == "boot"
    assert records[1]["payload"] == {"ok": False, "error": "Missing content file"}
    assert str(records[0]["ts"]).endswith("+00:00")


def test_disabled_service_writes_nothing(tmp_path: Path) -> None:
    telemetry = TelemetryService(tmp_path / "telemetry.jsonl", enabled=False)
    telemetry.log("boot", {"ok": True})
    assert telemetry.read_all() == []
    assert not telemetry.path.exists()

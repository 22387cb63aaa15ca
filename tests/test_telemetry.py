from __future__ import annotations
import asyncio
import json
from conftest import StubAnalysisClient
from interaction_checker.checker import InteractionChecker
from interaction_checker.storage import HistoryStore
from interaction_checker.telemetry import TelemetryConfig, Timer, log_analysis, log_event
def test_log_event_writes_jsonl_per_user(tmp_path, monkeypatch):
    monkeypatch.setenv("USER", "tester")
    monkeypatch.delenv("USERNAME", raising=False)
    path = log_event("analysis", app_version="1.0", action="analyze", payload={"medications_count": 2})
    assert path == tmp_path / "telemetry" / "telemetry.tester.jsonl"
    record = json.loads(path.read_text(encoding="utf-8").splitlines()[0])
    assert record["event_type"] == "analysis"
    assert record["payload"] == {"medications_count": 2}
    assert record["success"] is True
    assert "error" not in record
def test_long_errors_are_truncated(tmp_path):
    path = log_event("analysis", app_version="1.0", action="analyze", success=False, error="x" * 5000)
    record = json.loads(path.read_text(encoding="utf-8").splitlines()[-1])
    assert record["success"] is False
    assert record["error"].endswith("...TRUNCATED...")
    assert len(record["error"]) < 2100
def test_falls_back_when_primary_dir_unwritable(tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setenv("TELEMETRY_DIR", str(blocker / "logs"))
    config = TelemetryConfig(fallback_dir=tmp_path / "fallback", split_by_user=False)
    path = log_event("analysis", app_version="1.0", action="analyze", config=config)
    assert path == tmp_path / "fallback" / "telemetry.jsonl"
    assert "telemetry_write_error" in json.loads(path.read_text(encoding="utf-8"))
def test_timer_is_monotonic():
    timer = Timer()
    assert timer.ms() >= 0
def test_log_analysis_records_counts_without_patient_text(tmp_path, sample_result):
    stub = StubAnalysisClient(sample_result)
    checker = InteractionChecker(
        history=HistoryStore(tmp_path / "history.json"),
        credential_store=tmp_path / "credentials.json",
        client_factory=lambda key, model=None: stub,
    )
    checker.set_api_key("k")
    checker.inputs.add_medication("Warfarin")
    checker.inputs.conditions = "Peptic ulcer"
    asyncio.run(checker.analyze())
    path = log_analysis(checker, app_version="1.0", duration_ms=12)
    record = json.loads(path.read_text(encoding="utf-8").splitlines()[-1])
    assert record["model"] == "stub-model"
    assert record["success"] is True
    assert record["payload"]["high_risk_count"] == 3
    assert record["payload"]["records_count"] == 6
    assert record["payload"]["sources_count"] == 1
    assert "Peptic ulcer" not in path.read_text(encoding="utf-8")

from __future__ import annotations
import asyncio
import json
import pytest
from conftest import StubAnalysisClient
from interaction_checker.checker import InteractionChecker
from interaction_checker.errors import (
    CredentialError,
    InvalidCredentialError,
    SafetyBlockedError,
    ServiceUnavailableError,
)
from interaction_checker.models import AnalysisResult
from interaction_checker.storage import HistoryStore
from interaction_checker.translations import load_translations
class _Factory:
    def __init__(self, client: StubAnalysisClient) -> None:
        self.client = client
        self.calls = []
    def __call__(self, api_key, model=None):
        self.calls.append((api_key, model))
        return self.client
def _make_checker(tmp_path, client=None, stored_key="stored-key", language=None):
    creds = tmp_path / "credentials.json"
    if stored_key:
        creds.write_text(json.dumps({"api_key": stored_key, "model": "gemini-test"}), encoding="utf-8")
    factory = _Factory(client or StubAnalysisClient(AnalysisResult(analysis_text="ok")))
    checker = InteractionChecker(
        history=HistoryStore(tmp_path / "history.json"),
        credential_store=creds,
        client_factory=factory,
        language=language,
    )
    return checker, factory
def _fill(checker: InteractionChecker) -> None:
    checker.inputs.add_medication("Warfarin")
    checker.inputs.add_medication("Aspirin")
    checker.inputs.conditions = "Hypertension"
def test_stored_key_connects_client(tmp_path):
    checker, factory = _make_checker(tmp_path)
    assert not checker.needs_api_key
    assert factory.calls == [("stored-key", "gemini-test")]
def test_missing_key_requires_prompt(tmp_path):
    checker, factory = _make_checker(tmp_path, stored_key="")
    assert checker.needs_api_key
    assert checker.client is None
    assert factory.calls == []
def test_environment_key_is_used(tmp_path, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    checker, factory = _make_checker(tmp_path, stored_key="")
    assert not checker.needs_api_key
    assert factory.calls[0][0] == "env-key"
def test_validation_errors_block_the_request(tmp_path):
    stub = StubAnalysisClient(AnalysisResult())
    checker, _ = _make_checker(tmp_path, client=stub)
    assert asyncio.run(checker.analyze()) is None
    assert checker.error == load_translations("en").ui.error_add_medication
    checker.inputs.add_medication("Warfarin")
    asyncio.run(checker.analyze())
    assert checker.error == load_translations("en").ui.error_add_conditions
    checker.inputs.conditions = "AF"
    checker.inputs.date_of_birth = "1950/01/01"
    asyncio.run(checker.analyze())
    assert checker.error == load_translations("en").ui.form_dob_error_format
    assert stub.calls == 0
def test_successful_analysis_updates_state_and_history(tmp_path, sample_result):
    stub = StubAnalysisClient(sample_result)
    checker, _ = _make_checker(tmp_path, client=stub)
    _fill(checker)
    result = asyncio.run(checker.analyze())
    assert result is sample_result
    assert checker.result is sample_result
    assert checker.error is None
    assert not checker.is_loading
    assert len(checker.history.items) == 1
    entry = checker.history.items[0]
    assert entry.inputs.medications == ["Warfarin", "Aspirin"]
    assert entry.result == sample_result
    assert (tmp_path / "history.json").exists()
    assert [item.category for item in checker.high_risk_items()] == ["drug-drug", "drug-condition", "drug-pharmacogenetic"]
def test_result_with_absent_categories_is_normalized(tmp_path):
    checker, _ = _make_checker(tmp_path, client=StubAnalysisClient(AnalysisResult(analysis_text="x", sources=None)))
    _fill(checker)
    result = asyncio.run(checker.analyze())
    assert result.drug_drug_interactions == []
    assert result.sources == []
def test_invalid_key_clears_stored_credentials(tmp_path):
    stub = StubAnalysisClient(error=InvalidCredentialError("bad key"))
    checker, _ = _make_checker(tmp_path, client=stub)
    _fill(checker)
    assert asyncio.run(checker.analyze()) is None
    assert checker.error == "bad key"
    assert checker.needs_api_key
    assert checker.client is None
    assert not (tmp_path / "credentials.json").exists()
    assert checker.history.items == []
def test_no_client_flags_missing_key(tmp_path):
    checker, _ = _make_checker(tmp_path, stored_key="")
    _fill(checker)
    asyncio.run(checker.analyze())
    assert checker.error == load_translations("en").ui.error_api_key_not_set
    assert checker.needs_api_key
@pytest.mark.parametrize("error", [SafetyBlockedError("blocked"), ServiceUnavailableError("down")])
def test_remote_failures_surface_their_message(tmp_path, error):
    checker, _ = _make_checker(tmp_path, client=StubAnalysisClient(error=error))
    _fill(checker)
    asyncio.run(checker.analyze())
    assert checker.error == error.message
    assert checker.result is None
    assert not checker.is_loading
    assert not checker.needs_api_key
def test_unexpected_failure_uses_generic_message(tmp_path):
    checker, _ = _make_checker(tmp_path, client=StubAnalysisClient(error=KeyError("boom")), language="es")
    _fill(checker)
    asyncio.run(checker.analyze())
    assert checker.error == load_translations("es").ui.error_unexpected
def test_previous_result_cleared_on_new_run(tmp_path, sample_result):
    stub = StubAnalysisClient(sample_result)
    checker, _ = _make_checker(tmp_path, client=stub)
    _fill(checker)
    asyncio.run(checker.analyze())
    stub.error = ServiceUnavailableError("down")
    asyncio.run(checker.analyze())
    assert checker.result is None
    assert len(checker.history.items) == 1
def test_set_api_key_saves_and_connects(tmp_path):
    checker, factory = _make_checker(tmp_path, stored_key="")
    checker.error = "old"
    checker.set_api_key("  new-key ")
    assert factory.calls[-1][0] == "new-key"
    assert not checker.needs_api_key
    assert checker.error is None
    saved = json.loads((tmp_path / "credentials.json").read_text(encoding="utf-8"))
    assert saved["api_key"] == "new-key"
def test_set_empty_api_key_raises(tmp_path):
    checker, _ = _make_checker(tmp_path, stored_key="")
    with pytest.raises(CredentialError) as excinfo:
        checker.set_api_key("   ")
    assert excinfo.value.message == load_translations("en").ui.error_api_key_empty
def test_load_history_restores_form_and_result(tmp_path, sample_result):
    checker, _ = _make_checker(tmp_path, client=StubAnalysisClient(sample_result))
    _fill(checker)
    checker.inputs.date_of_birth = "01-01-1950"
    asyncio.run(checker.analyze())
    item_id = checker.history.items[0].id
    checker.clear_form()
    assert checker.inputs.medications == []
    assert checker.result is None
    item = checker.load_history(item_id)
    assert item is not None
    assert checker.inputs.medications == ["Warfarin", "Aspirin"]
    assert checker.inputs.date_of_birth == "01-01-1950"
    assert checker.result == sample_result
    assert checker.load_history("missing") is None
def test_history_survives_restart_and_clear(tmp_path, sample_result):
    checker, _ = _make_checker(tmp_path, client=StubAnalysisClient(sample_result))
    _fill(checker)
    asyncio.run(checker.analyze())
    restarted, _ = _make_checker(tmp_path)
    assert len(restarted.history.items) == 1
    restarted.clear_history()
    assert restarted.history.items == []
    assert not (tmp_path / "history.json").exists()
def test_clear_form_keeps_language(tmp_path):
    checker, _ = _make_checker(tmp_path, language="es")
    _fill(checker)
    checker.clear_form()
    assert checker.inputs.language == "es"
    assert checker.inputs.conditions == ""

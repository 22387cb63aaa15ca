from __future__ import annotations
import json
import pytest
from interaction_checker.credentials import (
    StoredCredentials,
    clear_credentials,
    initialize_client,
    load_credentials,
    resolve_api_key,
    resolve_model,
    save_credentials,
)
from interaction_checker.errors import CredentialError
from interaction_checker.gemini_client import DEFAULT_MODEL, GeminiAnalysisClient
def test_save_load_clear(tmp_path):
    path = tmp_path / "creds" / "credentials.json"
    save_credentials(StoredCredentials(api_key="k", model="m"), path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"api_key": "k", "model": "m"}
    assert load_credentials(path) == StoredCredentials(api_key="k", model="m")
    clear_credentials(path)
    assert not path.exists()
    clear_credentials(path)
def test_missing_or_corrupt_store_gives_defaults(tmp_path):
    path = tmp_path / "credentials.json"
    assert load_credentials(path) == StoredCredentials()
    path.write_text("garbage", encoding="utf-8")
    assert load_credentials(path) == StoredCredentials()
def test_resolve_api_key_falls_back_to_environment(monkeypatch):
    assert resolve_api_key(StoredCredentials()) == ""
    monkeypatch.setenv("GEMINI_API_KEY", " env-key ")
    assert resolve_api_key(StoredCredentials()) == "env-key"
    assert resolve_api_key(StoredCredentials(api_key="stored")) == "stored"
def test_resolve_model(monkeypatch):
    assert resolve_model(StoredCredentials(model="")) == DEFAULT_MODEL
    assert resolve_model(StoredCredentials(model="custom")) == "custom"
    monkeypatch.setenv("INTERACTION_CHECKER_MODEL", "override")
    assert resolve_model(StoredCredentials(model="custom")) == "override"
@pytest.mark.parametrize("key", ["", "   ", None])
def test_initialize_client_rejects_empty_key(key):
    with pytest.raises(CredentialError) as excinfo:
        initialize_client(key, message="empty!")
    assert excinfo.value.message == "empty!"
def test_initialize_client_builds_gemini_client():
    client = initialize_client("  some-key  ", model="gemini-test")
    assert isinstance(client, GeminiAnalysisClient)
    assert client.model == "gemini-test"
    assert client.client is not None

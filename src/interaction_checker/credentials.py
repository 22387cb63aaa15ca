from __future__ import annotations
import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional
from google import genai
from .errors import CredentialError
from .gemini_client import DEFAULT_MODEL, GeminiAnalysisClient
from .storage import APP_HOME
logger = logging.getLogger(__name__)
DEFAULT_STORE = APP_HOME / "credentials.json"
@dataclass
class StoredCredentials:
    api_key: str = ""
    model: str = DEFAULT_MODEL
def load_credentials(store: Path = DEFAULT_STORE) -> StoredCredentials:
    if not store.exists():
        return StoredCredentials()
    try:
        data = json.loads(store.read_text(encoding="utf-8"))
        return StoredCredentials(**data)
    except Exception as exc:
        logger.warning("Ignoring unreadable credentials at %s: %s", store, exc)
        return StoredCredentials()
def save_credentials(creds: StoredCredentials, store: Path = DEFAULT_STORE) -> None:
    store.parent.mkdir(parents=True, exist_ok=True)
    store.write_text(json.dumps(asdict(creds), indent=2), encoding="utf-8")
def clear_credentials(store: Path = DEFAULT_STORE) -> None:
    store.unlink(missing_ok=True)
def resolve_api_key(creds: StoredCredentials) -> str:
    return (creds.api_key or os.environ.get("GEMINI_API_KEY", "")).strip()
def resolve_model(creds: StoredCredentials) -> str:
    return os.environ.get("INTERACTION_CHECKER_MODEL") or creds.model or DEFAULT_MODEL
def initialize_client(api_key: str, model: Optional[str] = None, message: str = "") -> GeminiAnalysisClient:
    key = (api_key or "").strip()
    if not key:
        raise CredentialError(message or "API key cannot be empty.")
    return GeminiAnalysisClient(genai.Client(api_key=key), model=model or DEFAULT_MODEL)

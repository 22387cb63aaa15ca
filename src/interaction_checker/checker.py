from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, List, Optional
from .credentials import (
    DEFAULT_STORE,
    StoredCredentials,
    clear_credentials,
    initialize_client,
    load_credentials,
    resolve_api_key,
    resolve_model,
    save_credentials,
)
from .errors import AnalysisError, CredentialError, InvalidCredentialError
from .gemini_client import GeminiAnalysisClient
from .models import AnalysisInputs, AnalysisResult, HighRiskItem, HistoryItem, validate_date_of_birth
from .normalizer import normalize_result
from .risk import collect_high_risk
from .storage import HistoryStore
from .translations import Translations, load_translations
logger = logging.getLogger(__name__)
ClientFactory = Callable[[str, Optional[str]], GeminiAnalysisClient]
class InteractionChecker:
    """Form state plus the request -> parse -> normalize -> persist workflow."""
    def __init__(
        self,
        history: Optional[HistoryStore] = None,
        credential_store: Path = DEFAULT_STORE,
        client_factory: Optional[ClientFactory] = None,
        language: Optional[str] = None,
    ) -> None:
        self.history = history or HistoryStore()
        self.credential_store = Path(credential_store)
        self.client_factory = client_factory or initialize_client
        self.inputs = AnalysisInputs(language=language or "en")
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self.is_loading = False
        self.needs_api_key = False
        self.client: Optional[GeminiAnalysisClient] = None
        self.history.load()
        self._connect_stored_key()
    @property
    def texts(self) -> Translations:
        return load_translations(self.inputs.language)
    def _connect_stored_key(self) -> None:
        creds = load_credentials(self.credential_store)
        api_key = resolve_api_key(creds)
        if not api_key:
            self.needs_api_key = True
            return
        self.client = self.client_factory(api_key, resolve_model(creds))
        self.needs_api_key = False
    def set_api_key(self, api_key: str) -> None:
        key = (api_key or "").strip()
        if not key:
            self.client = None
            raise CredentialError(self.texts.ui.error_api_key_empty)
        creds = load_credentials(self.credential_store)
        model = resolve_model(creds)
        self.client = self.client_factory(key, model)
        save_credentials(StoredCredentials(api_key=key, model=model), self.credential_store)
        self.needs_api_key = False
        self.error = None
    def forget_api_key(self) -> None:
        self.client = None
        self.needs_api_key = True
        try:
            clear_credentials(self.credential_store)
        except OSError as exc:
            logger.warning("Could not remove stored API key: %s", exc)
    def validate(self) -> Optional[str]:
        ui = self.texts.ui
        if not self.inputs.medications:
            return ui.error_add_medication
        if not self.inputs.conditions.strip():
            return ui.error_add_conditions
        dob_error = validate_date_of_birth(self.inputs.date_of_birth)
        if dob_error:
            return getattr(ui, dob_error)
        return None
    async def analyze(self) -> Optional[AnalysisResult]:
        validation_error = self.validate()
        if validation_error:
            self.error = validation_error
            return None
        self.is_loading = True
        self.error = None
        self.result = None
        try:
            if self.client is None:
                raise CredentialError(self.texts.ui.error_api_key_not_set)
            inputs = self.inputs.copy()
            result = normalize_result(await self.client.analyze(inputs))
            self.result = result
            self.history.append(HistoryItem.create(inputs, result))
            return result
        except InvalidCredentialError as exc:
            self.error = exc.message
            self.forget_api_key()
        except CredentialError as exc:
            self.error = exc.message
            self.needs_api_key = True
        except AnalysisError as exc:
            self.error = exc.message or self.texts.ui.error_unexpected
        except Exception:
            logger.exception("Unexpected failure during analysis")
            self.error = self.texts.ui.error_unexpected
        finally:
            self.is_loading = False
        return None
    def high_risk_items(self) -> List[HighRiskItem]:
        if self.result is None:
            return []
        return collect_high_risk(self.result, self.texts)
    def load_history(self, item_id: str) -> Optional[HistoryItem]:
        item = self.history.find_by_id(item_id)
        if item is None:
            return None
        self.inputs = item.inputs.copy()
        self.result = normalize_result(item.result)
        self.error = None
        self.is_loading = False
        return item
    def clear_history(self) -> None:
        self.history.clear()
    def clear_form(self) -> None:
        self.inputs = AnalysisInputs(language=self.inputs.language)
        self.result = None
        self.error = None
        self.is_loading = False

from __future__ import annotations
import logging
from typing import Any, List, Optional
from google.genai import types
from .errors import (
    CredentialError,
    EmptyResponseError,
    InvalidCredentialError,
    SafetyBlockedError,
    ServiceUnavailableError,
)
from .models import AnalysisInputs, AnalysisResult, Source
from .normalizer import normalize_result
from .prompt_builder import build_prompt, sources_heading
from .response_parser import parse_response
from .translations import load_translations
logger = logging.getLogger(__name__)
DEFAULT_MODEL = "gemini-2.5-flash"
INVALID_KEY_MARKERS = ("api key not valid", "invalid api key", "api_key_invalid")
def is_invalid_key_message(message: str) -> bool:
    lowered = (message or "").lower()
    return any(marker in lowered for marker in INVALID_KEY_MARKERS)
def _enum_name(value: Any) -> str:
    if value is None:
        return ""
    name = getattr(value, "value", None) or getattr(value, "name", None) or value
    return str(name).upper()
def _first_candidate(response: Any) -> Any:
    candidates = getattr(response, "candidates", None) or []
    return candidates[0] if candidates else None
def extract_grounding_sources(response: Any) -> List[Source]:
    candidate = _first_candidate(response)
    metadata = getattr(candidate, "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []
    sources: List[Source] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        title = getattr(web, "title", None)
        if uri and title:
            sources.append(Source(uri=uri, title=title))
    return sources
def is_safety_blocked(response: Any) -> bool:
    candidate = _first_candidate(response)
    if _enum_name(getattr(candidate, "finish_reason", None)) == "SAFETY":
        return True
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = _enum_name(getattr(feedback, "block_reason", None))
    return bool(block_reason) and block_reason != "BLOCKED_REASON_UNSPECIFIED"
class GeminiAnalysisClient:
    """Sends the interaction prompt to Gemini with Google Search grounding.
    ``client`` is a ``google.genai.Client`` or any object exposing
    ``aio.models.generate_content`` with the same signature.
    """
    def __init__(self, client: Any, model: str = DEFAULT_MODEL) -> None:
        self.client = client
        self.model = model
    @staticmethod
    def generation_config() -> types.GenerateContentConfig:
        return types.GenerateContentConfig(tools=[types.Tool(google_search=types.GoogleSearch())])
    async def analyze(self, inputs: AnalysisInputs) -> AnalysisResult:
        texts = load_translations(inputs.language)
        if self.client is None:
            raise CredentialError(texts.ui.error_api_key_not_set)
        prompt = build_prompt(inputs)
        logger.info(
            "Requesting analysis: model=%s medications=%d lang=%s",
            self.model,
            len(inputs.medications),
            inputs.language,
        )
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self.generation_config(),
            )
        except Exception as exc:
            logger.exception("Gemini API call failed")
            if is_invalid_key_message(str(exc)):
                raise InvalidCredentialError(texts.ui.error_api_key) from exc
            raise ServiceUnavailableError(texts.ui.error_service_unavailable) from exc
        full_text: Optional[str] = getattr(response, "text", None)
        if not full_text:
            if is_safety_blocked(response):
                raise SafetyBlockedError(texts.ui.error_safety_block)
            raise EmptyResponseError(texts.ui.error_no_response)
        result = parse_response(
            full_text,
            extract_grounding_sources(response),
            sources_heading=sources_heading(inputs.language),
        )
        return normalize_result(result)

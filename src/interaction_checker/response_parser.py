from __future__ import annotations
import json
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple
from .errors import StructuredParseFailure
from .models import CATEGORIES, AnalysisResult, Source, records_from_json
from .prompt_builder import INTERACTION_DATA_END, INTERACTION_DATA_START
from .prompt_builder import sources_heading as heading_for_language
logger = logging.getLogger(__name__)
DEFAULT_SOURCES_HEADING = heading_for_language("en")
# A field value may span lines but never crosses into another source block.
_VALUE = r"((?:(?!\[SOURCE_(?:START|END)\]).)*?)"
SOURCE_BLOCK_RE = re.compile(
    r"\[SOURCE_START\]\s*"
    r"URI:" + _VALUE + r"\s*"
    r"TITLE:" + _VALUE + r"\s*"
    r"SUMMARY:" + _VALUE + r"\s*"
    r"PREVIEW:" + _VALUE + r"\s*"
    r"\[SOURCE_END\]",
    re.DOTALL,
)
def decode_interaction_data(payload: str) -> Dict[str, list]:
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise StructuredParseFailure(f"interaction data is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise StructuredParseFailure("interaction data must be a JSON object")
    return {attr: records_from_json(record_type, data.get(key)) for key, attr, record_type in CATEGORIES}
def split_interaction_block(raw_text: str) -> Tuple[Optional[str], str]:
    """Return the text between the data markers (or None) and the display text."""
    start = raw_text.find(INTERACTION_DATA_START)
    end = raw_text.find(INTERACTION_DATA_END)
    if start == -1 or end == -1 or start >= end:
        return None, raw_text
    block = raw_text[start + len(INTERACTION_DATA_START):end].strip()
    display_text = raw_text[end + len(INTERACTION_DATA_END):].strip()
    return block, display_text
def extract_sources(sources_text: str) -> List[Source]:
    sources: List[Source] = []
    for match in SOURCE_BLOCK_RE.finditer(sources_text or ""):
        uri, title, summary, preview = (group.strip() for group in match.groups())
        sources.append(Source(uri=uri, title=title, summary=summary, preview=preview))
    return sources
def sources_from_grounding(grounding_sources: Optional[Iterable[Any]]) -> List[Source]:
    sources: List[Source] = []
    for chunk in grounding_sources or []:
        if isinstance(chunk, Source):
            uri, title = chunk.uri, chunk.title
        elif isinstance(chunk, dict):
            uri, title = chunk.get("uri"), chunk.get("title")
        else:
            uri, title = getattr(chunk, "uri", None), getattr(chunk, "title", None)
        if uri and title:
            sources.append(Source(uri=str(uri), title=str(title)))
    return sources
def parse_response(
    raw_text: str,
    grounding_sources: Optional[Iterable[Any]] = None,
    sources_heading: str = DEFAULT_SOURCES_HEADING,
) -> AnalysisResult:
    raw_text = raw_text or ""
    structured: Dict[str, list] = {attr: [] for _, attr, _ in CATEGORIES}
    block, display_text = split_interaction_block(raw_text)
    if block is not None:
        try:
            structured = decode_interaction_data(block)
        except StructuredParseFailure as exc:
            logger.warning("Failed to parse structured interaction data: %s", exc)
    analysis_text, _, sources_text = display_text.partition(sources_heading)
    sources = extract_sources(sources_text) if sources_text.strip() else []
    if not sources:
        sources = sources_from_grounding(grounding_sources)
    return AnalysisResult(analysis_text=analysis_text.strip(), sources=sources, **structured)

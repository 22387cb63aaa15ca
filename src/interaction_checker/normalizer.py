from __future__ import annotations
from dataclasses import replace
from .models import CATEGORIES, AnalysisResult
def normalize_result(result: AnalysisResult) -> AnalysisResult:
    """Fill absent structured fields with empty lists; present lists pass through as-is."""
    updates = {attr: [] for _, attr, _ in CATEGORIES if getattr(result, attr) is None}
    if result.sources is None:
        updates["sources"] = []
    if result.analysis_text is None:
        updates["analysis_text"] = ""
    if not updates:
        return result
    return replace(result, **updates)

from __future__ import annotations
import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
import pytest
from interaction_checker.models import (
    AnalysisResult,
    BeersCriteriaAlert,
    DrugConditionContraindication,
    DrugDrugInteraction,
    DrugPharmacogeneticContraindication,
    DrugSubstanceInteraction,
    Source,
)
INTERACTION_PAYLOAD: Dict[str, List[Dict[str, str]]] = {
    "drugDrugInteractions": [
        {
            "interaction": "Warfarin + Aspirin",
            "riskLevel": "High",
            "potentialEffects": "Increased bleeding risk",
            "recommendations": "Avoid combination or monitor INR closely",
            "references": "ACCP guidelines",
        }
    ],
    "drugSubstanceInteractions": [
        {
            "medication": "Warfarin",
            "substance": "Alcohol",
            "riskLevel": "Moderate",
            "potentialEffects": "Variable INR",
            "recommendations": "Limit alcohol intake",
            "references": "Lexicomp",
        }
    ],
    "drugConditionContraindications": [],
    "drugPharmacogeneticContraindications": [
        {
            "medication": "Warfarin",
            "geneticFactor": "CYP2C9*3",
            "riskLevel": "High",
            "implication": "Reduced clearance",
            "recommendations": "Lower starting dose",
            "references": "CPIC",
        }
    ],
    "beersCriteriaAlerts": [],
}
def build_raw_response(payload: Optional[Dict[str, Any]] = None, sources: str = "") -> str:
    data = json.dumps(INTERACTION_PAYLOAD if payload is None else payload)
    return (
        "Here is the analysis.\n"
        f"[INTERACTION_DATA_START]\n{data}\n[INTERACTION_DATA_END]\n"
        "### Critical Summary\n"
        "* **Warfarin + Aspirin**: high bleeding risk.\n"
        "---\n"
        "### 1. Drug-Drug Interactions\n"
        "Details about the combination.\n"
        f"{sources}"
    )
TWO_SOURCE_BLOCKS = (
    "### Sources Summary\n"
    "[SOURCE_START]\n"
    "URI: https://example.org/warfarin\n"
    "TITLE: Warfarin monograph\n"
    "SUMMARY: Describes bleeding risk.\n"
    "PREVIEW: Warfarin is an anticoagulant...\n"
    "[SOURCE_END]\n"
    "[SOURCE_START]\n"
    "URI: https://example.org/aspirin\n"
    "TITLE: Aspirin and anticoagulants\n"
    "SUMMARY: Antiplatelet effect adds to anticoagulation.\n"
    "PREVIEW: Concomitant use increases...\n"
    "[SOURCE_END]\n"
)
class FakeModels:
    def __init__(self, response: Any = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []
    async def generate_content(self, *, model: str, contents: str, config: Any) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return self.response
class FakeGenaiClient:
    def __init__(self, response: Any = None, error: Optional[Exception] = None) -> None:
        self.models = FakeModels(response, error)
        self.aio = SimpleNamespace(models=self.models)
def make_response(
    text: Optional[str],
    finish_reason: Optional[str] = None,
    chunks: Optional[List[Dict[str, Optional[str]]]] = None,
    block_reason: Optional[str] = None,
) -> SimpleNamespace:
    grounding_chunks = [SimpleNamespace(web=SimpleNamespace(**chunk)) for chunk in (chunks or [])]
    candidate = SimpleNamespace(
        finish_reason=finish_reason,
        grounding_metadata=SimpleNamespace(grounding_chunks=grounding_chunks),
    )
    return SimpleNamespace(
        text=text,
        candidates=[candidate],
        prompt_feedback=SimpleNamespace(block_reason=block_reason) if block_reason else None,
    )
class StubAnalysisClient:
    """Stands in for GeminiAnalysisClient inside the orchestrator."""
    def __init__(self, result: Optional[AnalysisResult] = None, error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.model = "stub-model"
        self.calls = 0
    async def analyze(self, inputs):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result
@pytest.fixture
def sample_result() -> AnalysisResult:
    return AnalysisResult(
        analysis_text="### Critical Summary\n**Bleeding risk** with Warfarin + Aspirin.\n---\n### 1. Drug-Drug Interactions\nMore.",
        sources=[Source(uri="https://example.org/a", title="Source A", summary="Summary A")],
        drug_drug_interactions=[
            DrugDrugInteraction(
                interaction="Warfarin + Aspirin",
                risk_level="High",
                potential_effects="Bleeding, \"major\" events",
                recommendations="Avoid\nor monitor",
                references="ACCP",
            ),
            DrugDrugInteraction(interaction="Warfarin + Paracetamol", risk_level="Low"),
        ],
        drug_substance_interactions=[
            DrugSubstanceInteraction(medication="Warfarin", substance="Alcohol", risk_level="Moderate")
        ],
        drug_condition_contraindications=[
            DrugConditionContraindication(medication="Aspirin", condition="Peptic ulcer", risk_level="Alto")
        ],
        drug_pharmacogenetic_contraindications=[
            DrugPharmacogeneticContraindication(medication="Warfarin", genetic_factor="CYP2C9*3", risk_level="high")
        ],
        beers_criteria_alerts=[
            BeersCriteriaAlert(medication="Aspirin", criteria="Avoid for primary prevention", risk_level="Moderate")
        ],
    )
@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("INTERACTION_CHECKER_MODEL", raising=False)
    monkeypatch.setenv("TELEMETRY_DIR", str(tmp_path / "telemetry"))

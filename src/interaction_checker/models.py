from __future__ import annotations
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type
from .translations import DEFAULT_LANGUAGE, normalize_language
DATE_OF_BIRTH_FORMAT = "%d-%m-%Y"
_DOB_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4}$")
def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
class _Record:
    FIELD_MAP: ClassVar[Tuple[Tuple[str, str], ...]] = ()
    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        return cls(**{attr: _text(data.get(key)) for key, attr in cls.FIELD_MAP})
    def to_dict(self) -> Dict[str, str]:
        return {key: getattr(self, attr) for key, attr in self.FIELD_MAP}
@dataclass
class Source(_Record):
    uri: str
    title: str
    summary: str = ""
    preview: str = ""
    FIELD_MAP: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("uri", "uri"),
        ("title", "title"),
        ("summary", "summary"),
        ("preview", "preview"),
    )
@dataclass
class DrugDrugInteraction(_Record):
    interaction: str = ""
    risk_level: str = ""
    potential_effects: str = ""
    recommendations: str = ""
    references: str = ""
    FIELD_MAP: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("interaction", "interaction"),
        ("riskLevel", "risk_level"),
        ("potentialEffects", "potential_effects"),
        ("recommendations", "recommendations"),
        ("references", "references"),
    )
@dataclass
class DrugSubstanceInteraction(_Record):
    medication: str = ""
    substance: str = ""
    risk_level: str = ""
    potential_effects: str = ""
    recommendations: str = ""
    references: str = ""
    FIELD_MAP: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("medication", "medication"),
        ("substance", "substance"),
        ("riskLevel", "risk_level"),
        ("potentialEffects", "potential_effects"),
        ("recommendations", "recommendations"),
        ("references", "references"),
    )
@dataclass
class DrugConditionContraindication(_Record):
    medication: str = ""
    condition: str = ""
    risk_level: str = ""
    contraindication_details: str = ""
    recommendations: str = ""
    references: str = ""
    FIELD_MAP: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("medication", "medication"),
        ("condition", "condition"),
        ("riskLevel", "risk_level"),
        ("contraindicationDetails", "contraindication_details"),
        ("recommendations", "recommendations"),
        ("references", "references"),
    )
@dataclass
class DrugPharmacogeneticContraindication(_Record):
    medication: str = ""
    genetic_factor: str = ""
    risk_level: str = ""
    implication: str = ""
    recommendations: str = ""
    references: str = ""
    FIELD_MAP: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("medication", "medication"),
        ("geneticFactor", "genetic_factor"),
        ("riskLevel", "risk_level"),
        ("implication", "implication"),
        ("recommendations", "recommendations"),
        ("references", "references"),
    )
@dataclass
class BeersCriteriaAlert(_Record):
    medication: str = ""
    criteria: str = ""
    risk_level: str = ""
    recommendations: str = ""
    references: str = ""
    FIELD_MAP: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("medication", "medication"),
        ("criteria", "criteria"),
        ("riskLevel", "risk_level"),
        ("recommendations", "recommendations"),
        ("references", "references"),
    )
# (json key, attribute name, record type), in display order.
CATEGORIES: Tuple[Tuple[str, str, Type[_Record]], ...] = (
    ("drugDrugInteractions", "drug_drug_interactions", DrugDrugInteraction),
    ("drugSubstanceInteractions", "drug_substance_interactions", DrugSubstanceInteraction),
    ("drugConditionContraindications", "drug_condition_contraindications", DrugConditionContraindication),
    ("drugPharmacogeneticContraindications", "drug_pharmacogenetic_contraindications", DrugPharmacogeneticContraindication),
    ("beersCriteriaAlerts", "beers_criteria_alerts", BeersCriteriaAlert),
)
CATEGORY_KEYS = tuple(key for key, _, _ in CATEGORIES)
def records_from_json(record_type: Type[_Record], raw: Any) -> list:
    if not isinstance(raw, list):
        return []
    return [record_type.from_dict(entry) for entry in raw if isinstance(entry, dict)]
@dataclass
class AnalysisResult:
    analysis_text: Optional[str] = ""
    sources: Optional[List[Source]] = field(default_factory=list)
    drug_drug_interactions: Optional[List[DrugDrugInteraction]] = None
    drug_substance_interactions: Optional[List[DrugSubstanceInteraction]] = None
    drug_condition_contraindications: Optional[List[DrugConditionContraindication]] = None
    drug_pharmacogenetic_contraindications: Optional[List[DrugPharmacogeneticContraindication]] = None
    beers_criteria_alerts: Optional[List[BeersCriteriaAlert]] = None
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        if not isinstance(data, dict):
            raise TypeError("analysis result must be a JSON object")
        kwargs: Dict[str, Any] = {}
        text = data.get("analysisText")
        kwargs["analysis_text"] = None if text is None else _text(text)
        raw_sources = data.get("sources")
        kwargs["sources"] = None if raw_sources is None else records_from_json(Source, raw_sources)
        for key, attr, record_type in CATEGORIES:
            raw = data.get(key)
            kwargs[attr] = None if raw is None else records_from_json(record_type, raw)
        return cls(**kwargs)
    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "analysisText": self.analysis_text,
            "sources": None if self.sources is None else [s.to_dict() for s in self.sources],
        }
        for key, attr, _ in CATEGORIES:
            records = getattr(self, attr)
            payload[key] = None if records is None else [r.to_dict() for r in records]
        return payload
    def categories(self) -> List[Tuple[str, list]]:
        return [(key, getattr(self, attr) or []) for key, attr, _ in CATEGORIES]
@dataclass
class AnalysisInputs:
    medications: List[str] = field(default_factory=list)
    other_substances: str = ""
    pharmacogenetics: str = ""
    conditions: str = ""
    date_of_birth: str = ""
    language: str = DEFAULT_LANGUAGE
    def __post_init__(self) -> None:
        unique: List[str] = []
        for med in self.medications:
            if med not in unique:
                unique.append(med)
        self.medications = unique
        self.language = normalize_language(self.language)
    def add_medication(self, name: str) -> bool:
        med = (name or "").strip()
        if not med or med in self.medications:
            return False
        self.medications.append(med)
        return True
    def remove_medication(self, name: str) -> bool:
        if name not in self.medications:
            return False
        self.medications = [med for med in self.medications if med != name]
        return True
    def copy(self) -> "AnalysisInputs":
        return AnalysisInputs(
            medications=list(self.medications),
            other_substances=self.other_substances,
            pharmacogenetics=self.pharmacogenetics,
            conditions=self.conditions,
            date_of_birth=self.date_of_birth,
            language=self.language,
        )
def validate_date_of_birth(value: str, today: Optional[date] = None) -> Optional[str]:
    """Return the name of the matching ``UiText`` error field, or None when valid."""
    text = (value or "").strip()
    if not text:
        return None
    if not _DOB_PATTERN.match(text):
        return "form_dob_error_format"
    try:
        born = datetime.strptime(text, DATE_OF_BIRTH_FORMAT).date()
    except ValueError:
        return "form_dob_error_invalid"
    if born > (today or date.today()):
        return "form_dob_error_future"
    return None
@dataclass
class HistoryItem:
    id: str
    timestamp: str
    inputs: AnalysisInputs
    result: AnalysisResult
    language: str = DEFAULT_LANGUAGE
    @classmethod
    def create(
        cls,
        inputs: AnalysisInputs,
        result: AnalysisResult,
        now: Optional[datetime] = None,
    ) -> "HistoryItem":
        moment = now or datetime.now()
        return cls(
            id=moment.isoformat(),
            timestamp=moment.strftime("%Y-%m-%d %H:%M:%S"),
            inputs=inputs.copy(),
            result=result,
            language=inputs.language,
        )
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryItem":
        if not isinstance(data, dict):
            raise TypeError("history entry must be a JSON object")
        medications = data.get("medications") or []
        if not isinstance(medications, list):
            raise TypeError("history entry medications must be a list")
        lang = _text(data.get("lang")) or DEFAULT_LANGUAGE
        inputs = AnalysisInputs(
            medications=[_text(m) for m in medications],
            other_substances=_text(data.get("otherSubstances")),
            pharmacogenetics=_text(data.get("pharmacogenetics")),
            conditions=_text(data.get("conditions")),
            date_of_birth=_text(data.get("dateOfBirth")),
            language=lang,
        )
        return cls(
            id=str(data["id"]),
            timestamp=_text(data.get("timestamp")),
            inputs=inputs,
            result=AnalysisResult.from_dict(data["analysisResult"]),
            language=inputs.language,
        )
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "medications": list(self.inputs.medications),
            "otherSubstances": self.inputs.other_substances,
            "pharmacogenetics": self.inputs.pharmacogenetics,
            "conditions": self.inputs.conditions,
            "dateOfBirth": self.inputs.date_of_birth,
            "analysisResult": self.result.to_dict(),
            "lang": self.language,
        }
@dataclass
class HighRiskItem:
    category: str
    label: str
    description: str

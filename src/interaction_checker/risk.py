from __future__ import annotations
from typing import Callable, List, Optional, Tuple
from .models import AnalysisResult, HighRiskItem
from .translations import Translations, load_translations
# Only these two literals escalate; other localized synonyms are not recognized.
HIGH_RISK_LEVELS = frozenset({"high", "alto"})
def is_high_risk(risk_level: Optional[str]) -> bool:
    return (risk_level or "").lower() in HIGH_RISK_LEVELS
def _category_rules(texts: Translations) -> List[Tuple[str, str, str, Callable]]:
    ui = texts.ui
    return [
        ("drug-drug", "drug_drug_interactions", ui.interaction_drug_drug, lambda i: i.interaction),
        (
            "drug-substance",
            "drug_substance_interactions",
            ui.interaction_drug_substance,
            lambda i: f"{i.medication} + {i.substance}",
        ),
        (
            "drug-condition",
            "drug_condition_contraindications",
            ui.contraindication_condition,
            lambda i: f"{i.medication} {ui.results_with} {i.condition}",
        ),
        (
            "drug-pharmacogenetic",
            "drug_pharmacogenetic_contraindications",
            ui.contraindication_pharmacogenetic,
            lambda i: f"{i.medication} ({i.genetic_factor})",
        ),
        (
            "beers-criteria",
            "beers_criteria_alerts",
            ui.alert_beers_criteria,
            lambda i: f"{i.medication} ({i.criteria})",
        ),
    ]
def collect_high_risk(result: AnalysisResult, texts: Optional[Translations] = None) -> List[HighRiskItem]:
    texts = texts or load_translations()
    items: List[HighRiskItem] = []
    for category, attr, label, describe in _category_rules(texts):
        for record in getattr(result, attr) or []:
            if is_high_risk(record.risk_level):
                items.append(HighRiskItem(category=category, label=label, description=describe(record)))
    return items

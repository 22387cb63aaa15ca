from __future__ import annotations
import json
from typing import Dict, List
from .models import AnalysisInputs
from .translations import PromptText, load_translations
INTERACTION_DATA_START = "[INTERACTION_DATA_START]"
INTERACTION_DATA_END = "[INTERACTION_DATA_END]"
SOURCE_START = "[SOURCE_START]"
SOURCE_END = "[SOURCE_END]"
def sources_heading(language: str | None = None) -> str:
    return f"### {load_translations(language).prompt.sources_summary_title}"
def build_json_example(t: PromptText) -> str:
    example: Dict[str, List[Dict[str, str]]] = {
        "drugDrugInteractions": [
            {
                "interaction": t.example_interaction,
                "riskLevel": t.example_risk_level,
                "potentialEffects": t.example_effects,
                "recommendations": t.example_recommendations,
                "references": t.example_references,
            }
        ],
        "drugSubstanceInteractions": [
            {
                "medication": t.example_medication,
                "substance": t.example_substance,
                "riskLevel": t.example_risk_level,
                "potentialEffects": t.example_effects,
                "recommendations": t.example_recommendations,
                "references": t.example_references,
            }
        ],
        "drugConditionContraindications": [
            {
                "medication": t.example_medication,
                "condition": t.example_condition,
                "riskLevel": t.example_risk_level,
                "contraindicationDetails": t.example_details,
                "recommendations": t.example_recommendations,
                "references": t.example_references,
            }
        ],
        "drugPharmacogeneticContraindications": [
            {
                "medication": t.example_medication,
                "geneticFactor": t.example_genetic_factor,
                "riskLevel": t.example_risk_level,
                "implication": t.example_implication,
                "recommendations": t.example_recommendations,
                "references": t.example_references,
            }
        ],
        "beersCriteriaAlerts": [
            {
                "medication": t.example_medication,
                "criteria": t.example_criteria,
                "riskLevel": t.example_risk_level,
                "recommendations": t.example_recommendations,
                "references": t.example_references,
            }
        ],
    }
    return json.dumps(example, indent=2, ensure_ascii=False)
def _optional_clause(value: str, label: str, empty_text: str, note: str = "") -> str:
    if not value.strip():
        return empty_text
    clause = f"{label}: {value.strip()}."
    return f"{clause} {note}" if note else clause
def build_prompt(inputs: AnalysisInputs) -> str:
    t = load_translations(inputs.language).prompt
    med_list = ", ".join(inputs.medications)
    substance_text = _optional_clause(inputs.other_substances, t.other_substances, t.no_other_substances)
    pharmacogenetics_text = _optional_clause(
        inputs.pharmacogenetics, t.pharmacogenetics_info, t.no_pharmacogenetics_info
    )
    conditions_text = _optional_clause(inputs.conditions, t.preexisting_conditions, t.no_preexisting_conditions)
    dob_text = _optional_clause(inputs.date_of_birth, t.dob, t.no_dob, note=t.dob_note)
    prompt_sections = [
        t.role,
        "\n".join([t.master_instruction, t.part1, t.part2]),
        "\n".join([t.json_example_title, INTERACTION_DATA_START, build_json_example(t), INTERACTION_DATA_END]),
        t.readable_analysis_title,
        "\n".join(
            [
                f"### {t.critical_summary_title}",
                t.critical_summary_instruction1,
                t.critical_summary_instruction2,
                t.critical_summary_instruction3,
            ]
        ),
        "\n".join(
            [
                t.detailed_analysis_title,
                t.detailed_analysis_intro,
                f"- {t.medications}: {med_list}",
                f"- {substance_text}",
                f"- {pharmacogenetics_text}",
                f"- {conditions_text}",
                f"- {dob_text}",
            ]
        ),
        t.detailed_analysis_instruction,
    ]
    sections = [
        (t.section1_title, t.section1_description),
        (t.section2_title, t.section2_description),
        (t.section3_title, t.section3_description),
        (t.section4_title, t.section4_description),
        (t.section5_title, t.section5_description),
    ]
    for number, (title, description) in enumerate(sections, start=1):
        prompt_sections.append(f"---\n### {number}. {title}\n*({description})*")
    prompt_sections.append(t.final_disclaimer)
    prompt_sections.append(
        "\n".join(
            [
                f"### {t.sources_summary_title}",
                t.sources_summary_instruction,
                SOURCE_START,
                f"URI: [{t.sources_summary_uri}]",
                f"TITLE: [{t.sources_summary_title_field}]",
                f"SUMMARY: [{t.sources_summary_summary}]",
                f"PREVIEW: [{t.sources_summary_preview}]",
                SOURCE_END,
            ]
        )
    )
    return "\n\n".join(prompt_sections).strip() + "\n"

from __future__ import annotations
import json
from interaction_checker.models import CATEGORY_KEYS, AnalysisInputs
from interaction_checker.prompt_builder import (
    INTERACTION_DATA_END,
    INTERACTION_DATA_START,
    SOURCE_END,
    SOURCE_START,
    build_json_example,
    build_prompt,
    sources_heading,
)
from interaction_checker.translations import load_translations
def _warfarin_inputs(**overrides) -> AnalysisInputs:
    values = dict(
        medications=["Warfarin", "Aspirin"],
        other_substances="",
        pharmacogenetics="",
        conditions="Hypertension",
        date_of_birth="",
        language="en",
    )
    values.update(overrides)
    return AnalysisInputs(**values)
def _embedded_json(prompt: str) -> dict:
    start = prompt.index(INTERACTION_DATA_START) + len(INTERACTION_DATA_START)
    end = prompt.index(INTERACTION_DATA_END)
    return json.loads(prompt[start:end])
def test_prompt_lists_medications_and_placeholders():
    prompt = build_prompt(_warfarin_inputs())
    t = load_translations("en").prompt
    assert "Warfarin, Aspirin" in prompt
    assert "Hypertension" in prompt
    assert t.no_other_substances in prompt
    assert t.no_pharmacogenetics_info in prompt
    assert t.no_dob in prompt
def test_prompt_contains_each_marker_once():
    prompt = build_prompt(_warfarin_inputs())
    for marker in (INTERACTION_DATA_START, INTERACTION_DATA_END, SOURCE_START, SOURCE_END):
        assert prompt.count(marker) == 1
    assert prompt.index(INTERACTION_DATA_START) < prompt.index(INTERACTION_DATA_END)
    assert prompt.index(SOURCE_START) < prompt.index(SOURCE_END)
    assert prompt.endswith("\n")
def test_json_example_keys_match_parser_categories():
    data = _embedded_json(build_prompt(_warfarin_inputs()))
    assert tuple(data.keys()) == CATEGORY_KEYS
    assert data["drugDrugInteractions"][0]["riskLevel"] == load_translations("en").prompt.example_risk_level
def test_build_json_example_is_valid_json():
    data = json.loads(build_json_example(load_translations("es").prompt))
    assert set(data) == set(CATEGORY_KEYS)
    assert "contraindicationDetails" in data["drugConditionContraindications"][0]
    assert "geneticFactor" in data["drugPharmacogeneticContraindications"][0]
def test_optional_inputs_are_embedded_when_present():
    prompt = build_prompt(
        _warfarin_inputs(other_substances="Alcohol", pharmacogenetics="CYP2C9*3", date_of_birth="01-02-1950")
    )
    t = load_translations("en").prompt
    assert f"{t.other_substances}: Alcohol." in prompt
    assert f"{t.pharmacogenetics_info}: CYP2C9*3." in prompt
    assert f"{t.dob}: 01-02-1950. {t.dob_note}" in prompt
    assert t.no_other_substances not in prompt
    assert t.no_dob not in prompt
def test_sections_are_numbered_in_order():
    prompt = build_prompt(_warfarin_inputs())
    t = load_translations("en").prompt
    titles = [t.section1_title, t.section2_title, t.section3_title, t.section4_title, t.section5_title]
    positions = [prompt.index(f"### {n}. {title}") for n, title in enumerate(titles, start=1)]
    assert positions == sorted(positions)
    assert prompt.index(f"### {t.critical_summary_title}") < positions[0]
def test_sources_heading_is_last_section():
    prompt = build_prompt(_warfarin_inputs())
    heading = sources_heading("en")
    assert heading == "### Sources Summary"
    assert prompt.rindex(heading) > prompt.index("### 5.")
    assert "URI: [" in prompt and "PREVIEW: [" in prompt
def test_spanish_prompt_uses_spanish_text():
    prompt = build_prompt(_warfarin_inputs(language="es"))
    t = load_translations("es").prompt
    assert t.role in prompt
    assert sources_heading("es") in prompt
    assert load_translations("en").prompt.role not in prompt
def test_unknown_language_falls_back_to_english():
    assert build_prompt(_warfarin_inputs(language="fr")) == build_prompt(_warfarin_inputs())

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Dict, Type, TypeVar
SUPPORTED_LANGUAGES = ("en", "es")
DEFAULT_LANGUAGE = "en"
@dataclass(frozen=True)
class PromptText:
    role: str
    master_instruction: str
    part1: str
    part2: str
    json_example_title: str
    example_interaction: str
    example_medication: str
    example_substance: str
    example_condition: str
    example_genetic_factor: str
    example_risk_level: str
    example_effects: str
    example_details: str
    example_implication: str
    example_criteria: str
    example_recommendations: str
    example_references: str
    readable_analysis_title: str
    critical_summary_title: str
    critical_summary_instruction1: str
    critical_summary_instruction2: str
    critical_summary_instruction3: str
    detailed_analysis_title: str
    detailed_analysis_intro: str
    medications: str
    other_substances: str
    no_other_substances: str
    pharmacogenetics_info: str
    no_pharmacogenetics_info: str
    preexisting_conditions: str
    no_preexisting_conditions: str
    dob: str
    dob_note: str
    no_dob: str
    detailed_analysis_instruction: str
    section1_title: str
    section1_description: str
    section2_title: str
    section2_description: str
    section3_title: str
    section3_description: str
    section4_title: str
    section4_description: str
    section5_title: str
    section5_description: str
    final_disclaimer: str
    sources_summary_title: str
    sources_summary_instruction: str
    sources_summary_uri: str
    sources_summary_title_field: str
    sources_summary_summary: str
    sources_summary_preview: str
@dataclass(frozen=True)
class UiText:
    app_name: str
    app_description: str
    disclaimer: str
    error_title: str
    error_api_key_not_set: str
    error_api_key_empty: str
    error_api_key: str
    error_safety_block: str
    error_no_response: str
    error_service_unavailable: str
    error_unexpected: str
    error_add_medication: str
    error_add_conditions: str
    form_dob_error_format: str
    form_dob_error_invalid: str
    form_dob_error_future: str
    interaction_drug_drug: str
    interaction_drug_substance: str
    contraindication_condition: str
    contraindication_pharmacogenetic: str
    alert_beers_criteria: str
    section_drug_drug: str
    section_drug_substance: str
    section_drug_condition: str
    section_drug_pharmacogenetic: str
    section_beers_criteria: str
    section_sources: str
    results_title: str
    results_high_risk_alert_title: str
    results_high_risk_alert_intro: str
    results_interaction: str
    results_contraindication: str
    results_medication: str
    results_risk_level: str
    results_potential_effects: str
    results_details: str
    results_implication: str
    results_criteria_reason: str
    results_recommendations: str
    results_references: str
    results_with: str
    csv_type: str
    csv_primary_item: str
    csv_secondary_item: str
    csv_risk_level: str
    csv_details: str
    csv_recommendations: str
    csv_references: str
    csv_na: str
    history_title: str
    history_empty: str
    history_clear_button: str
    footer_disclaimer: str
@dataclass(frozen=True)
class Translations:
    language: str
    prompt: PromptText
    ui: UiText
_EN_PROMPT = {
    "role": "You are an expert clinical pharmacologist assisting a healthcare professional.",
    "master_instruction": "Use Google Search to ground your answer in current, authoritative sources. Your answer MUST have exactly two parts, in this order:",
    "part1": "PART 1: A JSON object wrapped between the two data markers shown below. Use empty arrays for categories without findings. Use only \"High\", \"Moderate\" or \"Low\" as riskLevel.",
    "part2": "PART 2: A human-readable analysis in markdown following the structure below, ending with the sources summary.",
    "json_example_title": "JSON format example:",
    "example_interaction": "Medication A + Medication B",
    "example_medication": "Medication name",
    "example_substance": "Substance name",
    "example_condition": "Condition name",
    "example_genetic_factor": "Gene or variant (e.g. CYP2C19*2)",
    "example_risk_level": "High | Moderate | Low",
    "example_effects": "Clinical consequences of the interaction",
    "example_details": "Why the medication is contraindicated with the condition",
    "example_implication": "How the genetic factor changes the response to the medication",
    "example_criteria": "Beers criteria statement that applies",
    "example_recommendations": "Concrete management recommendations",
    "example_references": "Guidelines or literature supporting the finding",
    "readable_analysis_title": "Human-readable analysis:",
    "critical_summary_title": "Critical Summary",
    "critical_summary_instruction1": "Start with a short list of the most clinically relevant findings.",
    "critical_summary_instruction2": "Highlight every high-risk interaction or contraindication in bold.",
    "critical_summary_instruction3": "If no relevant findings exist, state it explicitly.",
    "detailed_analysis_title": "Detailed analysis",
    "detailed_analysis_intro": "Analyse the following patient information:",
    "medications": "Medications",
    "other_substances": "Other substances",
    "no_other_substances": "No other substances provided.",
    "pharmacogenetics_info": "Pharmacogenetic information",
    "no_pharmacogenetics_info": "No pharmacogenetic information provided.",
    "preexisting_conditions": "Pre-existing conditions",
    "no_preexisting_conditions": "No pre-existing conditions provided.",
    "dob": "Date of birth (DD-MM-YYYY)",
    "dob_note": "Calculate the patient's age and apply the Beers criteria if the patient is 65 or older.",
    "no_dob": "No date of birth provided; do not apply age-specific criteria.",
    "detailed_analysis_instruction": "Write the following five sections, using the exact headings:",
    "section1_title": "Drug-Drug Interactions",
    "section1_description": "Interactions between the listed medications",
    "section2_title": "Drug-Substance Interactions",
    "section2_description": "Interactions with food, alcohol, supplements or other substances",
    "section3_title": "Drug-Condition Contraindications",
    "section3_description": "Medications that are contraindicated or need caution given the conditions",
    "section4_title": "Drug-Pharmacogenetic Contraindications",
    "section4_description": "Effects of the reported genetic markers on the medications",
    "section5_title": "Beers Criteria Alerts",
    "section5_description": "Potentially inappropriate medications for older adults, only when applicable",
    "final_disclaimer": "End the analysis with a reminder that this information does not replace professional clinical judgement.",
    "sources_summary_title": "Sources Summary",
    "sources_summary_instruction": "For every source you consulted, add one block with exactly this format:",
    "sources_summary_uri": "Full URL of the source",
    "sources_summary_title_field": "Title of the source",
    "sources_summary_summary": "One-sentence summary of what the source supports",
    "sources_summary_preview": "Short relevant excerpt from the source",
}
_ES_PROMPT = {
    "role": "Eres un farmacólogo clínico experto que asiste a un profesional de la salud.",
    "master_instruction": "Usa la Búsqueda de Google para fundamentar tu respuesta en fuentes actuales y fiables. Tu respuesta DEBE tener exactamente dos partes, en este orden:",
    "part1": "PARTE 1: Un objeto JSON entre los dos marcadores de datos indicados abajo. Usa arreglos vacíos para las categorías sin hallazgos. Usa solo \"Alto\", \"Moderado\" o \"Bajo\" como riskLevel.",
    "part2": "PARTE 2: Un análisis legible en markdown con la estructura siguiente, terminando con el resumen de fuentes.",
    "json_example_title": "Ejemplo de formato JSON:",
    "example_interaction": "Medicamento A + Medicamento B",
    "example_medication": "Nombre del medicamento",
    "example_substance": "Nombre de la sustancia",
    "example_condition": "Nombre de la condición",
    "example_genetic_factor": "Gen o variante (p. ej. CYP2C19*2)",
    "example_risk_level": "Alto | Moderado | Bajo",
    "example_effects": "Consecuencias clínicas de la interacción",
    "example_details": "Por qué el medicamento está contraindicado con la condición",
    "example_implication": "Cómo el factor genético modifica la respuesta al medicamento",
    "example_criteria": "Criterio de Beers que aplica",
    "example_recommendations": "Recomendaciones concretas de manejo",
    "example_references": "Guías o literatura que respaldan el hallazgo",
    "readable_analysis_title": "Análisis legible:",
    "critical_summary_title": "Resumen Crítico",
    "critical_summary_instruction1": "Empieza con una lista breve de los hallazgos clínicamente más relevantes.",
    "critical_summary_instruction2": "Resalta en negrita cada interacción o contraindicación de riesgo alto.",
    "critical_summary_instruction3": "Si no hay hallazgos relevantes, indícalo explícitamente.",
    "detailed_analysis_title": "Análisis detallado",
    "detailed_analysis_intro": "Analiza la siguiente información del paciente:",
    "medications": "Medicamentos",
    "other_substances": "Otras sustancias",
    "no_other_substances": "No se proporcionaron otras sustancias.",
    "pharmacogenetics_info": "Información farmacogenética",
    "no_pharmacogenetics_info": "No se proporcionó información farmacogenética.",
    "preexisting_conditions": "Condiciones preexistentes",
    "no_preexisting_conditions": "No se proporcionaron condiciones preexistentes.",
    "dob": "Fecha de nacimiento (DD-MM-AAAA)",
    "dob_note": "Calcula la edad del paciente y aplica los criterios de Beers si tiene 65 años o más.",
    "no_dob": "No se proporcionó fecha de nacimiento; no apliques criterios específicos de edad.",
    "detailed_analysis_instruction": "Escribe las siguientes cinco secciones, usando exactamente estos encabezados:",
    "section1_title": "Interacciones Fármaco-Fármaco",
    "section1_description": "Interacciones entre los medicamentos listados",
    "section2_title": "Interacciones Fármaco-Sustancia",
    "section2_description": "Interacciones con alimentos, alcohol, suplementos u otras sustancias",
    "section3_title": "Contraindicaciones Fármaco-Condición",
    "section3_description": "Medicamentos contraindicados o que requieren precaución según las condiciones",
    "section4_title": "Contraindicaciones Fármaco-Farmacogenéticas",
    "section4_description": "Efecto de los marcadores genéticos reportados sobre los medicamentos",
    "section5_title": "Alertas de Criterios de Beers",
    "section5_description": "Medicamentos potencialmente inapropiados en adultos mayores, solo cuando aplique",
    "final_disclaimer": "Termina el análisis recordando que esta información no sustituye el juicio clínico profesional.",
    "sources_summary_title": "Resumen de Fuentes",
    "sources_summary_instruction": "Para cada fuente consultada, añade un bloque con exactamente este formato:",
    "sources_summary_uri": "URL completa de la fuente",
    "sources_summary_title_field": "Título de la fuente",
    "sources_summary_summary": "Resumen en una frase de lo que respalda la fuente",
    "sources_summary_preview": "Extracto breve y relevante de la fuente",
}
_EN_UI = {
    "app_name": "Drug Interaction Checker",
    "app_description": "Analyse interactions between medications, substances, conditions and pharmacogenetic markers.",
    "disclaimer": "This tool is for informational purposes for healthcare professionals. It does not replace clinical judgement.",
    "error_title": "Error",
    "error_api_key_not_set": "The API key has not been configured. Please provide your Gemini API key.",
    "error_api_key_empty": "API key cannot be empty.",
    "error_api_key": "The API key is not valid. Please enter a valid key.",
    "error_safety_block": "The response was blocked by the safety policy. Please review the information entered.",
    "error_no_response": "No response was received from the model. Please try again.",
    "error_service_unavailable": "The analysis service is currently unavailable. Please try again later.",
    "error_unexpected": "An unexpected error occurred.",
    "error_add_medication": "Please add at least one medication.",
    "error_add_conditions": "Please describe the patient's pre-existing conditions.",
    "form_dob_error_format": "Use the format DD-MM-YYYY.",
    "form_dob_error_invalid": "The date of birth is not a valid date.",
    "form_dob_error_future": "The date of birth cannot be in the future.",
    "interaction_drug_drug": "Drug-Drug Interaction",
    "interaction_drug_substance": "Drug-Substance Interaction",
    "contraindication_condition": "Drug-Condition Contraindication",
    "contraindication_pharmacogenetic": "Drug-Pharmacogenetic Contraindication",
    "alert_beers_criteria": "Beers Criteria Alert",
    "section_drug_drug": "Drug-Drug Interactions",
    "section_drug_substance": "Drug-Substance Interactions",
    "section_drug_condition": "Drug-Condition Contraindications",
    "section_drug_pharmacogenetic": "Drug-Pharmacogenetic Contraindications",
    "section_beers_criteria": "Beers Criteria Alerts",
    "section_sources": "Sources",
    "results_title": "Interaction Analysis",
    "results_high_risk_alert_title": "High Risk Alert",
    "results_high_risk_alert_intro": "The following high-risk findings require attention:",
    "results_interaction": "Interaction",
    "results_contraindication": "Contraindication",
    "results_medication": "Medication",
    "results_risk_level": "Risk level",
    "results_potential_effects": "Potential effects",
    "results_details": "Details",
    "results_implication": "Implication",
    "results_criteria_reason": "Criteria",
    "results_recommendations": "Recommendations",
    "results_references": "References",
    "results_with": "with",
    "csv_type": "Type",
    "csv_primary_item": "Primary Item",
    "csv_secondary_item": "Secondary Item",
    "csv_risk_level": "Risk Level",
    "csv_details": "Details",
    "csv_recommendations": "Recommendations",
    "csv_references": "References",
    "csv_na": "N/A",
    "history_title": "Analysis History",
    "history_empty": "No analyses yet.",
    "history_clear_button": "Clear history",
    "footer_disclaimer": "Generated with a language model. Always verify with official sources.",
}
_ES_UI = {
    "app_name": "Verificador de Interacciones",
    "app_description": "Analiza interacciones entre medicamentos, sustancias, condiciones y marcadores farmacogenéticos.",
    "disclaimer": "Esta herramienta es informativa y está dirigida a profesionales de la salud. No sustituye el juicio clínico.",
    "error_title": "Error",
    "error_api_key_not_set": "La clave de API no está configurada. Introduce tu clave de API de Gemini.",
    "error_api_key_empty": "La clave de API no puede estar vacía.",
    "error_api_key": "La clave de API no es válida. Introduce una clave válida.",
    "error_safety_block": "La respuesta fue bloqueada por la política de seguridad. Revisa la información introducida.",
    "error_no_response": "No se recibió respuesta del modelo. Inténtalo de nuevo.",
    "error_service_unavailable": "El servicio de análisis no está disponible. Inténtalo más tarde.",
    "error_unexpected": "Ocurrió un error inesperado.",
    "error_add_medication": "Añade al menos un medicamento.",
    "error_add_conditions": "Describe las condiciones preexistentes del paciente.",
    "form_dob_error_format": "Usa el formato DD-MM-AAAA.",
    "form_dob_error_invalid": "La fecha de nacimiento no es una fecha válida.",
    "form_dob_error_future": "La fecha de nacimiento no puede estar en el futuro.",
    "interaction_drug_drug": "Interacción Fármaco-Fármaco",
    "interaction_drug_substance": "Interacción Fármaco-Sustancia",
    "contraindication_condition": "Contraindicación Fármaco-Condición",
    "contraindication_pharmacogenetic": "Contraindicación Farmacogenética",
    "alert_beers_criteria": "Alerta de Criterios de Beers",
    "section_drug_drug": "Interacciones Fármaco-Fármaco",
    "section_drug_substance": "Interacciones Fármaco-Sustancia",
    "section_drug_condition": "Contraindicaciones Fármaco-Condición",
    "section_drug_pharmacogenetic": "Contraindicaciones Farmacogenéticas",
    "section_beers_criteria": "Alertas de Criterios de Beers",
    "section_sources": "Fuentes",
    "results_title": "Análisis de Interacciones",
    "results_high_risk_alert_title": "Alerta de Riesgo Alto",
    "results_high_risk_alert_intro": "Los siguientes hallazgos de riesgo alto requieren atención:",
    "results_interaction": "Interacción",
    "results_contraindication": "Contraindicación",
    "results_medication": "Medicamento",
    "results_risk_level": "Nivel de riesgo",
    "results_potential_effects": "Efectos potenciales",
    "results_details": "Detalles",
    "results_implication": "Implicación",
    "results_criteria_reason": "Criterio",
    "results_recommendations": "Recomendaciones",
    "results_references": "Referencias",
    "results_with": "con",
    "csv_type": "Tipo",
    "csv_primary_item": "Elemento Principal",
    "csv_secondary_item": "Elemento Secundario",
    "csv_risk_level": "Nivel de Riesgo",
    "csv_details": "Detalles",
    "csv_recommendations": "Recomendaciones",
    "csv_references": "Referencias",
    "csv_na": "N/D",
    "history_title": "Historial de Análisis",
    "history_empty": "Aún no hay análisis.",
    "history_clear_button": "Borrar historial",
    "footer_disclaimer": "Generado con un modelo de lenguaje. Verifica siempre con fuentes oficiales.",
}
RAW_TRANSLATIONS: Dict[str, Dict[str, Dict[str, str]]] = {
    "en": {"prompt": _EN_PROMPT, "ui": _EN_UI},
    "es": {"prompt": _ES_PROMPT, "ui": _ES_UI},
}
T = TypeVar("T")
def _build_section(cls: Type[T], data: Dict[str, str], label: str) -> T:
    expected = [f.name for f in fields(cls)]
    missing = [name for name in expected if name not in data]
    if missing:
        raise ValueError(f"Translation section '{label}' is missing keys: {', '.join(missing)}")
    unknown = sorted(set(data) - set(expected))
    if unknown:
        raise ValueError(f"Translation section '{label}' has unknown keys: {', '.join(unknown)}")
    empty = [name for name in expected if not isinstance(data[name], str) or not data[name].strip()]
    if empty:
        raise ValueError(f"Translation section '{label}' has empty values for: {', '.join(empty)}")
    return cls(**data)
def build_translations(language: str, raw: Dict[str, Dict[str, str]]) -> Translations:
    return Translations(
        language=language,
        prompt=_build_section(PromptText, raw.get("prompt", {}), f"{language}.prompt"),
        ui=_build_section(UiText, raw.get("ui", {}), f"{language}.ui"),
    )
_CACHE: Dict[str, Translations] = {}
def normalize_language(language: str | None) -> str:
    lang = (language or "").strip().lower().split("-")[0].split("_")[0]
    return lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE
def load_translations(language: str | None = None) -> Translations:
    lang = normalize_language(language)
    if lang not in _CACHE:
        _CACHE[lang] = build_translations(lang, RAW_TRANSLATIONS[lang])
    return _CACHE[lang]

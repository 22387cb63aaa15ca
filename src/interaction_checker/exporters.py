from __future__ import annotations
import csv
import re
from datetime import datetime
from typing import List, Optional
import pandas as pd
from fpdf import FPDF
from fpdf.enums import XPos, YPos
from .models import AnalysisResult
from .normalizer import normalize_result
from .risk import collect_high_risk
from .translations import Translations, load_translations
CSV_FILENAME = "drug_interaction_analysis.csv"
PDF_FILENAME = "drug_interaction_analysis.pdf"
_UNICODE_FALLBACKS = {
    "\u2022": "-",
    "\u2013": "-",
    "\u2014": "-",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
    "\u00a0": " ",
    "\u2264": "<=",
    "\u2265": ">=",
    "\u2192": "->",
}
def _clean_field(value: Optional[str]) -> str:
    return (value or "").replace("\r\n", "\n").replace("\r", "\n")
def extract_critical_summary(analysis_text: str, title: str) -> str:
    text = analysis_text or ""
    match = re.search(rf"### {re.escape(title)}([\s\S]*?)(?=### \d\.|\n---|$)", text)
    if match:
        return match.group(1).strip()
    return re.split(r"### \d\.|\n---", text)[0].strip()
def result_rows(result: AnalysisResult, texts: Translations) -> List[List[str]]:
    ui = texts.ui
    result = normalize_result(result)
    rows: List[List[str]] = []
    for item in result.drug_drug_interactions:
        primary, _, secondary = item.interaction.partition(" + ")
        rows.append(
            [ui.interaction_drug_drug, primary, secondary, item.risk_level,
             item.potential_effects, item.recommendations, item.references]
        )
    for item in result.drug_substance_interactions:
        rows.append(
            [ui.interaction_drug_substance, item.medication, item.substance, item.risk_level,
             item.potential_effects, item.recommendations, item.references]
        )
    for item in result.drug_condition_contraindications:
        rows.append(
            [ui.contraindication_condition, item.medication, item.condition, item.risk_level,
             item.contraindication_details, item.recommendations, item.references]
        )
    for item in result.drug_pharmacogenetic_contraindications:
        rows.append(
            [ui.contraindication_pharmacogenetic, item.medication, item.genetic_factor, item.risk_level,
             item.implication, item.recommendations, item.references]
        )
    for item in result.beers_criteria_alerts:
        rows.append(
            [ui.alert_beers_criteria, item.medication, item.criteria, item.risk_level,
             ui.csv_na, item.recommendations, item.references]
        )
    return [[_clean_field(value) for value in row] for row in rows]
def result_to_csv(result: AnalysisResult, texts: Optional[Translations] = None) -> str:
    texts = texts or load_translations()
    ui = texts.ui
    columns = [
        ui.csv_type,
        ui.csv_primary_item,
        ui.csv_secondary_item,
        ui.csv_risk_level,
        ui.csv_details,
        ui.csv_recommendations,
        ui.csv_references,
    ]
    frame = pd.DataFrame(result_rows(result, texts), columns=columns)
    return frame.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
def csv_bytes(result: AnalysisResult, texts: Optional[Translations] = None) -> bytes:
    return result_to_csv(result, texts).encode("utf-8-sig")
def to_latin1(text: Optional[str]) -> str:
    value = text or ""
    for char, replacement in _UNICODE_FALLBACKS.items():
        value = value.replace(char, replacement)
    return value.encode("latin-1", "replace").decode("latin-1")
class InteractionReportPDF(FPDF):
    def __init__(self, texts: Translations):
        super().__init__(orientation="P", unit="mm", format="A4")
        self.texts = texts
        self.set_margins(15, 15, 15)
        self.set_auto_page_break(auto=True, margin=18)
    def header(self):
        self.set_font("Helvetica", "B", 9)
        self.set_text_color(100, 116, 139)
        self.cell(0, 6, to_latin1(self.texts.ui.app_name), align="L")
        self.set_x(self.l_margin)
        self.cell(0, 6, datetime.now().strftime("%Y-%m-%d %H:%M"), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(4)
        self.set_text_color(0, 0, 0)
    def footer(self):
        self.set_y(-12)
        self.set_font("Helvetica", "I", 7)
        self.set_text_color(100, 116, 139)
        self.cell(0, 5, to_latin1(self.texts.ui.footer_disclaimer), align="L")
        self.set_x(self.l_margin)
        self.cell(0, 5, f"{self.page_no()}", align="R")
        self.set_text_color(0, 0, 0)
    def paragraph(self, text: str, size: float = 10, style: str = "", indent: float = 0) -> None:
        self.set_font("Helvetica", style, size)
        self.set_x(self.l_margin + indent)
        self.multi_cell(0, size * 0.5, to_latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(1)
    def section_title(self, title: str) -> None:
        self.ln(2)
        self.set_draw_color(226, 232, 240)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.ln(3)
        self.paragraph(title, size=12, style="B")
    def alert_box(self, title: str, intro: str, lines: List[str]) -> None:
        self.set_fill_color(255, 235, 238)
        self.set_text_color(190, 24, 93)
        self.set_font("Helvetica", "B", 13)
        self.cell(0, 9, to_latin1(title), fill=True, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_text_color(0, 0, 0)
        self.paragraph(intro)
        for line in lines:
            self.paragraph(f"- {line}", indent=5)
        self.ln(3)
def result_to_pdf(result: AnalysisResult, texts: Optional[Translations] = None) -> bytes:
    texts = texts or load_translations()
    ui = texts.ui
    result = normalize_result(result)
    pdf = InteractionReportPDF(texts)
    pdf.add_page()
    pdf.paragraph(ui.results_title, size=18, style="B")
    pdf.ln(2)
    high_risk = collect_high_risk(result, texts)
    if high_risk:
        pdf.alert_box(
            ui.results_high_risk_alert_title,
            ui.results_high_risk_alert_intro,
            [f"{item.label}: {item.description}" for item in high_risk],
        )
    summary_title = texts.prompt.critical_summary_title
    pdf.paragraph(summary_title, size=14, style="B")
    pdf.paragraph(extract_critical_summary(result.analysis_text, summary_title).replace("**", ""))
    sections = [
        (ui.section_drug_drug, result.drug_drug_interactions,
         lambda i: f"{ui.results_interaction}: {i.interaction}"),
        (ui.section_drug_substance, result.drug_substance_interactions,
         lambda i: f"{ui.results_interaction}: {i.medication} + {i.substance}"),
        (ui.section_drug_condition, result.drug_condition_contraindications,
         lambda i: f"{ui.results_contraindication}: {i.medication} {ui.results_with} {i.condition}"),
        (ui.section_drug_pharmacogenetic, result.drug_pharmacogenetic_contraindications,
         lambda i: f"{ui.results_contraindication}: {i.medication} ({i.genetic_factor})"),
        (ui.section_beers_criteria, result.beers_criteria_alerts,
         lambda i: f"{ui.results_medication}: {i.medication}"),
    ]
    for title, records, heading in sections:
        if not records:
            continue
        pdf.section_title(title)
        for record in records:
            pdf.paragraph(heading(record), style="B")
            pdf.paragraph(f"{ui.results_risk_level}: {record.risk_level}")
            for label, attr in (
                (ui.results_potential_effects, "potential_effects"),
                (ui.results_details, "contraindication_details"),
                (ui.results_implication, "implication"),
                (ui.results_criteria_reason, "criteria"),
            ):
                value = getattr(record, attr, "")
                if value:
                    pdf.paragraph(f"{label}: {value}")
            pdf.paragraph(f"{ui.results_recommendations}: {record.recommendations}")
            if record.references:
                pdf.paragraph(f"{ui.results_references}: {record.references}", size=8)
            pdf.ln(2)
    if result.sources:
        pdf.section_title(ui.section_sources)
        for source in result.sources:
            pdf.paragraph(source.summary or source.title)
            pdf.set_text_color(0, 0, 255)
            pdf.paragraph(source.uri, size=8)
            pdf.set_text_color(0, 0, 0)
    return bytes(pdf.output())

from __future__ import annotations
import argparse
import asyncio
import sys
from pathlib import Path
import logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
ROOT = Path(__file__).parent
sys.path.append(str(ROOT / "src"))
from interaction_checker import InteractionChecker, __version__  # type: ignore  # noqa: E402
from interaction_checker.errors import CredentialError  # type: ignore  # noqa: E402
from interaction_checker.exporters import result_to_csv, result_to_pdf  # type: ignore  # noqa: E402
from interaction_checker.models import AnalysisInputs  # type: ignore  # noqa: E402
from interaction_checker.prompt_builder import build_prompt  # type: ignore  # noqa: E402
from interaction_checker.telemetry import Timer, log_analysis  # type: ignore  # noqa: E402
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyse drug interactions with Gemini")
    parser.add_argument("medications", nargs="+", help="Medications to analyse")
    parser.add_argument("--conditions", required=True, help="Pre-existing conditions")
    parser.add_argument("--substances", default="", help="Other substances (alcohol, supplements...)")
    parser.add_argument("--pharmacogenetics", default="", help="Known pharmacogenetic markers")
    parser.add_argument("--dob", default="", help="Date of birth as DD-MM-YYYY")
    parser.add_argument("--lang", default="en", choices=["en", "es"], help="Language of prompt and output")
    parser.add_argument("--api-key", help="Gemini API key; stored for later runs")
    parser.add_argument("--csv-output", type=Path, help="Optional path to write the CSV export")
    parser.add_argument("--pdf-output", type=Path, help="Optional path to write the PDF report")
    parser.add_argument("--prompt-only", action="store_true", help="Print the prompt instead of calling the API")
    return parser.parse_args(argv)
def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    inputs = AnalysisInputs(
        conditions=args.conditions,
        other_substances=args.substances,
        pharmacogenetics=args.pharmacogenetics,
        date_of_birth=args.dob,
        language=args.lang,
    )
    for med in args.medications:
        inputs.add_medication(med)
    if args.prompt_only:
        print(build_prompt(inputs))
        return 0
    checker = InteractionChecker(language=args.lang)
    checker.inputs = inputs
    if args.api_key:
        try:
            checker.set_api_key(args.api_key)
        except CredentialError as exc:
            raise SystemExit(exc.message)
    timer = Timer()
    result = asyncio.run(checker.analyze())
    log_analysis(checker, app_version=__version__, duration_ms=timer.ms(), action="cli-analyze")
    if result is None:
        raise SystemExit(checker.error or checker.texts.ui.error_unexpected)
    ui = checker.texts.ui
    high_risk = checker.high_risk_items()
    if high_risk:
        print(f"== {ui.results_high_risk_alert_title} ==")
        for item in high_risk:
            print(f"- {item.label}: {item.description}")
        print()
    print(result.analysis_text)
    if result.sources:
        print(f"\n== {ui.section_sources} ==")
        for source in result.sources:
            print(f"- {source.title}: {source.uri}")
    if args.csv_output:
        args.csv_output.write_text(result_to_csv(result, checker.texts), encoding="utf-8-sig")
    if args.pdf_output:
        args.pdf_output.write_bytes(result_to_pdf(result, checker.texts))
    return 0
if __name__ == "__main__":
    sys.exit(main())

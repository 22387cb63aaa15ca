from __future__ import annotations
import asyncio
import logging
import os
import re
import sys
from io import BytesIO
from pathlib import Path
from typing import Optional
from flask import Flask, redirect, render_template_string, request, send_file, url_for
from markupsafe import Markup, escape
ROOT = Path(__file__).parent
sys.path.append(str(ROOT / "src"))
from interaction_checker import __version__ as APP_VERSION  # type: ignore  # noqa: E402
from interaction_checker.checker import InteractionChecker  # type: ignore  # noqa: E402
from interaction_checker.errors import CredentialError  # type: ignore  # noqa: E402
from interaction_checker.exporters import (  # type: ignore  # noqa: E402
    CSV_FILENAME,
    PDF_FILENAME,
    csv_bytes,
    extract_critical_summary,
    result_to_pdf,
)
from interaction_checker.telemetry import Timer, log_analysis  # type: ignore  # noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
app = Flask(__name__)
def _checker() -> InteractionChecker:
    checker = app.config.get("CHECKER")
    if checker is None:
        checker = InteractionChecker(language=os.getenv("INTERACTION_CHECKER_LANG", "en"))
        app.config["CHECKER"] = checker
    return checker
def format_analysis_html(text: str) -> Markup:
    html = str(escape(text or ""))
    def _to_list(match: re.Match) -> str:
        items = "".join(
            f"<li>{re.sub(r'^[*-] +', '', line.strip())}</li>"
            for line in match.group(0).strip().split("\n")
        )
        return f"<ul>{items}</ul>"
    html = re.sub(r"(\n[*-] +[^\n]+)+", _to_list, html)
    html = re.sub(r"### (.*?)\n", r"<h3>\1</h3>", html)
    html = re.sub(r"\*\*([^*]+)\*\*", r"<strong>\1</strong>", html)
    html = re.sub(r"\n---\n", "<hr />", html)
    html = html.replace("\n", "<br />")
    html = re.sub(r"<br />(\s*<(?:h3|ul|hr))", r"\1", html)
    html = re.sub(r"(</(?:h3|ul|li)>)\s*<br />", r"\1", html)
    return Markup(html)
def _update_inputs_from_form(checker: InteractionChecker) -> None:
    form = request.form
    checker.inputs.other_substances = form.get("other_substances", checker.inputs.other_substances)
    checker.inputs.pharmacogenetics = form.get("pharmacogenetics", checker.inputs.pharmacogenetics)
    checker.inputs.conditions = form.get("conditions", checker.inputs.conditions)
    checker.inputs.date_of_birth = (form.get("date_of_birth", checker.inputs.date_of_birth) or "").strip()
def _run_analysis(checker: InteractionChecker) -> None:
    timer = Timer()
    asyncio.run(checker.analyze())
    try:
        log_analysis(checker, app_version=APP_VERSION, duration_ms=timer.ms())
    except Exception:
        app.logger.exception("analysis telemetry failed")
def _render(tab: str = "form", api_key_error: Optional[str] = None):
    checker = _checker()
    texts = checker.texts
    result = checker.result
    critical_summary = ""
    if result is not None:
        critical_summary = extract_critical_summary(result.analysis_text, texts.prompt.critical_summary_title)
    return render_template_string(
        TEMPLATE,
        t=texts.ui,
        lang=texts.language,
        app_version=APP_VERSION,
        tab=tab,
        inputs=checker.inputs,
        result=result,
        error=checker.error,
        is_loading=checker.is_loading,
        needs_api_key=checker.needs_api_key,
        api_key_error=api_key_error,
        high_risk=checker.high_risk_items(),
        critical_summary=format_analysis_html(critical_summary),
        analysis_html=format_analysis_html(result.analysis_text if result else ""),
        history=checker.history.items,
    )
@app.route("/", methods=["GET", "POST"])
def index():
    checker = _checker()
    if request.method == "POST":
        action = request.form.get("action", "analyze")
        app.logger.info("index() action=%s", action)
        _update_inputs_from_form(checker)
        if action == "add_medication":
            checker.inputs.add_medication(request.form.get("medication", ""))
        elif action == "remove_medication":
            checker.inputs.remove_medication(request.form.get("medication", ""))
        elif action == "clear":
            checker.clear_form()
        elif action == "analyze":
            _run_analysis(checker)
    return _render("form")
@app.route("/api-key", methods=["POST"])
def save_api_key():
    checker = _checker()
    try:
        checker.set_api_key(request.form.get("api_key", ""))
    except CredentialError as exc:
        return _render("form", api_key_error=exc.message)
    return redirect(url_for("index"))
@app.route("/history", methods=["GET"])
def history():
    return _render("history")
@app.route("/history/<path:item_id>", methods=["POST"])
def load_history_item(item_id: str):
    checker = _checker()
    if checker.load_history(item_id) is None:
        app.logger.warning("History item not found: %s", item_id)
        return _render("history"), 404
    return redirect(url_for("index"))
@app.route("/history-clear", methods=["POST"])
def clear_history():
    _checker().clear_history()
    return redirect(url_for("history"))
@app.route("/export/<fmt>", methods=["GET"])
def export_result(fmt: str):
    checker = _checker()
    if checker.result is None:
        return redirect(url_for("index"))
    if fmt == "csv":
        return send_file(
            BytesIO(csv_bytes(checker.result, checker.texts)),
            mimetype="text/csv",
            as_attachment=True,
            download_name=CSV_FILENAME,
        )
    if fmt == "pdf":
        return send_file(
            BytesIO(result_to_pdf(checker.result, checker.texts)),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=PDF_FILENAME,
        )
    return redirect(url_for("index"))
TEMPLATE = """
<!doctype html>
<html lang=\"{{ lang }}\">
<head>
  <meta charset=\"utf-8\">
  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\">
  <title>{{ t.app_name }}</title>
  <style>
    :root {
      --bg: #f5f7fb;
      --card: #ffffff;
      --muted: #475569;
      --text: #0f172a;
      --accent: #2563eb;
      --danger: #dc2626;
      --border: rgba(15, 23, 42, 0.08);
    }
    * { box-sizing: border-box; }
    body { margin: 0; font-family: 'Inter', system-ui, -apple-system, sans-serif; background: var(--bg); color: var(--text); }
    a { color: var(--accent); }
    .page { max-width: 960px; margin: 0 auto; padding: 32px 24px 48px; }
    .muted { color: var(--muted); }
    .card { background: var(--card); border-radius: 14px; border: 1px solid var(--border); padding: 18px; margin-top: 18px; box-shadow: 0 14px 40px rgba(15, 23, 42, 0.06); }
    .tabs { display: flex; gap: 8px; margin-top: 18px; }
    .tabs a { padding: 8px 14px; border-radius: 999px; text-decoration: none; border: 1px solid var(--border); }
    .tabs a.active { background: var(--accent); color: #fff; }
    .input, textarea { width: 100%; padding: 10px 12px; border-radius: 10px; border: 1px solid var(--border); background: #f8fafc; font-size: 14px; }
    textarea { min-height: 70px; resize: vertical; }
    label { display: block; font-weight: 600; margin: 12px 0 4px; }
    .row { display: flex; gap: 8px; align-items: center; }
    .pill { display: inline-flex; gap: 6px; align-items: center; padding: 4px 10px; border-radius: 999px; background: rgba(37,99,235,0.1); color: var(--accent); margin: 6px 6px 0 0; }
    .pill button { border: none; background: none; color: var(--danger); cursor: pointer; }
    .btn { padding: 10px 16px; border-radius: 10px; border: none; background: var(--accent); color: #fff; font-weight: 600; cursor: pointer; }
    .btn.secondary { background: #e2e8f0; color: var(--text); }
    .btn.danger { background: var(--danger); }
    .error { border-left: 4px solid var(--danger); background: #fee2e2; color: #7f1d1d; }
    .alert { border-left: 4px solid var(--danger); background: #fff1f2; }
    details { border: 1px solid var(--border); border-radius: 10px; padding: 10px 14px; margin-top: 10px; }
    summary { font-weight: 600; cursor: pointer; }
    .count { background: var(--danger); color: #fff; border-radius: 999px; padding: 2px 8px; font-size: 12px; margin-left: 6px; }
    .record { border-top: 1px solid var(--border); padding-top: 8px; margin-top: 8px; }
    .high { color: var(--danger); font-weight: 700; }
  </style>
</head>
<body>
<div class=\"page\">
  <h1>{{ t.app_name }}</h1>
  <p class=\"muted\">{{ t.app_description }}</p>
  <div class=\"card muted\">{{ t.disclaimer }}</div>
  {% if needs_api_key %}
  <div class=\"card\">
    <form method=\"post\" action=\"{{ url_for('save_api_key') }}\">
      <label for=\"api_key\">Gemini API key</label>
      <div class=\"row\">
        <input class=\"input\" id=\"api_key\" name=\"api_key\" type=\"password\" autocomplete=\"off\">
        <button class=\"btn\" type=\"submit\">OK</button>
      </div>
      {% if api_key_error %}<p class=\"high\">{{ api_key_error }}</p>{% endif %}
    </form>
  </div>
  {% endif %}
  <div class=\"tabs\">
    <a href=\"{{ url_for('index') }}\" class=\"{{ 'active' if tab == 'form' else '' }}\">{{ t.results_title }}</a>
    <a href=\"{{ url_for('history') }}\" class=\"{{ 'active' if tab == 'history' else '' }}\">{{ t.history_title }}</a>
  </div>
  {% if tab == 'history' %}
  <div class=\"card\">
    <h2>{{ t.history_title }}</h2>
    {% if history %}
      {% for item in history %}
      <form method=\"post\" action=\"{{ url_for('load_history_item', item_id=item.id) }}\">
        <button class=\"btn secondary\" type=\"submit\" style=\"width:100%;text-align:left;margin-top:8px\">
          {{ item.inputs.medications | join(', ') }}<br><span class=\"muted\">{{ item.timestamp }}</span>
        </button>
      </form>
      {% endfor %}
      <form method=\"post\" action=\"{{ url_for('clear_history') }}\" style=\"margin-top:16px\">
        <button class=\"btn danger\" type=\"submit\">{{ t.history_clear_button }}</button>
      </form>
    {% else %}
      <p class=\"muted\">{{ t.history_empty }}</p>
    {% endif %}
  </div>
  {% else %}
  <form class=\"card\" method=\"post\" action=\"{{ url_for('index') }}\">
    <label for=\"medication\">{{ t.section_drug_drug }}</label>
    <div class=\"row\">
      <input class=\"input\" id=\"medication\" name=\"medication\" autocomplete=\"off\">
      <button class=\"btn\" type=\"submit\" name=\"action\" value=\"add_medication\">+</button>
    </div>
    <div>
      {% for med in inputs.medications %}
      <span class=\"pill\">{{ med }}</span>
      {% endfor %}
    </div>
    <label for=\"other_substances\">{{ t.section_drug_substance }}</label>
    <textarea id=\"other_substances\" name=\"other_substances\">{{ inputs.other_substances }}</textarea>
    <label for=\"pharmacogenetics\">{{ t.section_drug_pharmacogenetic }}</label>
    <textarea id=\"pharmacogenetics\" name=\"pharmacogenetics\">{{ inputs.pharmacogenetics }}</textarea>
    <label for=\"conditions\">{{ t.section_drug_condition }}</label>
    <textarea id=\"conditions\" name=\"conditions\">{{ inputs.conditions }}</textarea>
    <label for=\"date_of_birth\">DD-MM-YYYY</label>
    <input class=\"input\" id=\"date_of_birth\" name=\"date_of_birth\" value=\"{{ inputs.date_of_birth }}\" placeholder=\"DD-MM-YYYY\">
    <div class=\"row\" style=\"margin-top:16px\">
      <button class=\"btn\" type=\"submit\" name=\"action\" value=\"analyze\" {{ 'disabled' if is_loading else '' }}>{{ t.results_title }}</button>
      <button class=\"btn secondary\" type=\"submit\" name=\"action\" value=\"clear\">&times;</button>
    </div>
  </form>
  {% if inputs.medications %}
  <form class=\"card\" method=\"post\" action=\"{{ url_for('index') }}\">
    {% for med in inputs.medications %}
    <span class=\"pill\">{{ med }}<button type=\"submit\" name=\"medication\" value=\"{{ med }}\">&times;</button></span>
    {% endfor %}
    <input type=\"hidden\" name=\"action\" value=\"remove_medication\">
  </form>
  {% endif %}
  {% if error %}
  <div class=\"card error\"><strong>{{ t.error_title }}</strong><p>{{ error }}</p></div>
  {% endif %}
  {% if result %}
  <div class=\"card\">
    <h2>{{ t.results_title }}</h2>
    <p>
      <a href=\"{{ url_for('export_result', fmt='csv') }}\">CSV</a> &middot;
      <a href=\"{{ url_for('export_result', fmt='pdf') }}\">PDF</a>
    </p>
    {% if high_risk %}
    <div class=\"card alert\">
      <h3>{{ t.results_high_risk_alert_title }}</h3>
      <p>{{ t.results_high_risk_alert_intro }}</p>
      <ul>
        {% for item in high_risk %}
        <li><strong>{{ item.label }}:</strong> {{ item.description }}</li>
        {% endfor %}
      </ul>
    </div>
    {% endif %}
    <details open><summary>{{ t.results_title }}</summary>{{ critical_summary }}</details>
    {% set sections = [
      (t.section_drug_drug, result.drug_drug_interactions),
      (t.section_drug_substance, result.drug_substance_interactions),
      (t.section_drug_condition, result.drug_condition_contraindications),
      (t.section_drug_pharmacogenetic, result.drug_pharmacogenetic_contraindications),
      (t.section_beers_criteria, result.beers_criteria_alerts),
    ] %}
    {% for title, records in sections if records %}
    <details open>
      <summary>{{ title }}<span class=\"count\">{{ records | length }}</span></summary>
      {% for r in records %}
      <div class=\"record\">
        <strong>
          {% if r.interaction is defined %}{{ t.results_interaction }}: {{ r.interaction }}
          {% elif r.substance is defined %}{{ t.results_interaction }}: {{ r.medication }} + {{ r.substance }}
          {% elif r.condition is defined %}{{ t.results_contraindication }}: {{ r.medication }} {{ t.results_with }} {{ r.condition }}
          {% elif r.genetic_factor is defined %}{{ t.results_contraindication }}: {{ r.medication }} ({{ r.genetic_factor }})
          {% else %}{{ t.results_medication }}: {{ r.medication }}{% endif %}
        </strong>
        <div class=\"{{ 'high' if r.risk_level | lower in ['high', 'alto'] else '' }}\">{{ t.results_risk_level }}: {{ r.risk_level }}</div>
        {% if r.potential_effects %}<div>{{ t.results_potential_effects }}: {{ r.potential_effects }}</div>{% endif %}
        {% if r.contraindication_details %}<div>{{ t.results_details }}: {{ r.contraindication_details }}</div>{% endif %}
        {% if r.implication %}<div>{{ t.results_implication }}: {{ r.implication }}</div>{% endif %}
        {% if r.criteria %}<div>{{ t.results_criteria_reason }}: {{ r.criteria }}</div>{% endif %}
        <div>{{ t.results_recommendations }}: {{ r.recommendations }}</div>
        {% if r.references %}<div class=\"muted\">{{ t.results_references }}: {{ r.references }}</div>{% endif %}
      </div>
      {% endfor %}
    </details>
    {% endfor %}
    <details><summary>{{ t.results_details }}</summary>{{ analysis_html }}</details>
    {% if result.sources %}
    <details>
      <summary>{{ t.section_sources }}<span class=\"count\">{{ result.sources | length }}</span></summary>
      {% for s in result.sources %}
      <div class=\"record\">
        <a href=\"{{ s.uri }}\" target=\"_blank\" rel=\"noopener noreferrer\">{{ s.title }}</a>
        {% if s.summary %}<div>{{ s.summary }}</div>{% endif %}
        {% if s.preview %}<div class=\"muted\">{{ s.preview }}</div>{% endif %}
      </div>
      {% endfor %}
    </details>
    {% endif %}
  </div>
  {% endif %}
  {% endif %}
  <p class=\"muted\" style=\"text-align:center;margin-top:32px\">{{ t.footer_disclaimer }} &middot; v{{ app_version }}</p>
</div>
</body>
</html>
"""
if __name__ == "__main__":
    import socket
    import threading
    import time
    import webbrowser
    def _find_open_port(host: str, preferred: int) -> int:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            try:
                s.bind((host, preferred))
                return preferred
            except OSError:
                pass
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((host, 0))
            return s.getsockname()[1]
    host = os.getenv("INTERACTION_CHECKER_UI_HOST", "127.0.0.1")
    requested_port = int(os.getenv("INTERACTION_CHECKER_UI_PORT", "8000"))
    port = _find_open_port(host, requested_port)
    def _open_browser() -> None:
        time.sleep(1)
        try:
            webbrowser.open(f"http://{host}:{port}")
        except Exception:
            pass
    threading.Thread(target=_open_browser, daemon=True).start()
    app.run(host=host, port=port, debug=False)

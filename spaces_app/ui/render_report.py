"""
Render a structured report: the cleaned transcript on the left, clinical
sections on the right.

Patient and history cards only appear when the model found them; findings,
diagnosis and plan are always shown. A fallback report looks the same apart
from its placeholder text.
"""
import html

from core.models import StructuredReport
from spaces_app.ui.components import section_card_html


def render_transcript(text: str) -> str:
    if not text:
        return "<p class='ms-muted'>No se reconoció texto en el audio.</p>"
    return f"<div class='ms-transcript'>{html.escape(text)}</div>"


def render_structured_report(report: StructuredReport | None) -> str:
    if report is None:
        return ""

    cards = []
    if report.patient_info:
        cards.append(section_card_html("Paciente", report.patient_info, "&#128100;"))
    if report.clinical_history:
        cards.append(section_card_html("Antecedentes", report.clinical_history, "&#128339;"))
    cards.append(section_card_html("Hallazgos", report.findings, "&#128269;"))
    cards.append(section_card_html("Diagnóstico", report.diagnosis, "&#128300;"))
    cards.append(section_card_html("Plan", report.plan, "&#9989;"))

    return f"""
    <div class="ms-report">
      <div class="ms-report-main">
        <div class="ms-report-label">Transcripción limpia</div>
        {render_transcript(report.original_text)}
      </div>
      <div class="ms-report-side">{''.join(cards)}</div>
    </div>"""

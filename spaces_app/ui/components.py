"""
Reusable HTML components for the MedScribe UI.

Provides the phase progress panel, status alerts and the clinical section
cards. Class names follow the ms-* rules in spaces_app/app.py.
"""
import html

from core.models import ProcessingStatus

PHASE_COPY = {
    ProcessingStatus.UPLOADING: ("Subiendo Audio...", "Preparando el archivo de voz para su envío."),
    ProcessingStatus.TRANSCRIBING: (
        "Transcribiendo Reporte...",
        "Limpiando comandos de puntuación y convirtiendo voz a texto profesional.",
    ),
    ProcessingStatus.REFINING: (
        "Analizando Contenido...",
        "Organizando la información para visualización estructurada.",
    ),
}

_PHASE_ORDER = [ProcessingStatus.UPLOADING, ProcessingStatus.TRANSCRIBING, ProcessingStatus.REFINING]


def alert_html(msg: str, kind: str = "info") -> str:
    return f'<div class="ms-alert ms-alert-{kind}">{html.escape(msg)}</div>'


def progress_html(status: ProcessingStatus) -> str:
    """Spinner, phase title/subtitle and a three-step checklist."""
    if status not in PHASE_COPY:
        return ""
    title, subtitle = PHASE_COPY[status]
    current = _PHASE_ORDER.index(status)
    steps = ""
    for i, phase in enumerate(_PHASE_ORDER):
        if i < current:
            icon, cls = "&#10003;", "ms-step-done"
        elif i == current:
            icon, cls = '<span class="ms-spinner ms-spinner-sm"></span>', "ms-step-active"
        else:
            icon, cls = "&#9679;", "ms-step-pending"
        steps += f'<div class="ms-step {cls}">{icon} {PHASE_COPY[phase][0].rstrip(".")}</div>'
    return f'''
    <div class="ms-progress">
      <div class="ms-spinner"></div>
      <div class="ms-progress-title">{title}</div>
      <div class="ms-progress-subtitle">{subtitle}</div>
      <div class="ms-steps">{steps}</div>
    </div>'''


def section_card_html(title: str, content: str | None, icon: str) -> str:
    """One clinical section; missing content renders as a dash."""
    body = html.escape(content).replace("\n", "<br/>") if content else "&mdash;"
    return f'''
    <div class="ms-section-card">
      <div class="ms-section-title"><span class="ms-section-icon">{icon}</span>{html.escape(title)}</div>
      <div class="ms-section-body">{body}</div>
    </div>'''

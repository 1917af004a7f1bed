"""
MedScribe AI — Gradio application.

Upload a dictated recording; the app transcribes it (interpreting spoken
punctuation and self-corrections), organizes it into clinical sections and
offers the cleaned transcript as a .doc download.

Each browser session owns one ProcessingStateMachine in gr.State. The upload
handler is an async generator that streams every state transition to the
view; the reset buttons invalidate anything still in flight.
"""
import sys
import logging
from pathlib import Path

# Ensure project root is on sys.path when run from spaces_app/ directly
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import gradio as gr

from core import config
from core.export.doc_export import export_transcript, prune_exports, write_export
from core.models import ProcessingState, ProcessingStatus
from core.pipeline.dictation_pipeline import run_submission
from core.pipeline.gateway import get_gateway
from core.state_machine import ProcessingStateMachine
from scripts.init_space_storage import ensure_space_storage
from spaces_app.ui.components import alert_html, progress_html
from spaces_app.ui.pages import dictation, settings
from spaces_app.ui.render_report import render_structured_report

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

APP_TITLE = "MedScribe AI"


# ─────────────────────────── CSS Design System ───────────────────────────────

MS_CSS = """
.gradio-container {
    font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif !important;
    max-width: 1100px !important;
    margin: 0 auto !important;
}

/* Status Alerts */
.ms-alert {
    padding: 12px 16px;
    border-radius: 8px;
    font-size: 0.875rem;
    font-weight: 500;
    margin: 8px 0;
}
.ms-alert-error { background: #fef2f2; color: #b91c1c; border: 1px solid #fecaca; }
.ms-alert-info { background: #eff6ff; color: #1d4ed8; border: 1px solid #bfdbfe; }

/* Progress */
.ms-progress { padding: 40px 24px; text-align: center; }
.ms-progress-title { font-size: 1.2rem; font-weight: 700; color: #1e293b; margin-bottom: 6px; }
.ms-progress-subtitle { font-size: 0.9rem; color: #64748b; margin-bottom: 20px; }
.ms-steps { text-align: left; max-width: 300px; margin: 0 auto; }
.ms-step { display: flex; align-items: center; gap: 10px; padding: 5px 0; font-size: 0.85rem; }
.ms-step-done { color: #15803d; }
.ms-step-active { color: #2563eb; font-weight: 600; }
.ms-step-pending { color: #94a3b8; }
.ms-spinner {
    width: 40px; height: 40px; margin: 0 auto 20px;
    border: 3.5px solid #dbeafe; border-top-color: #3b82f6; border-radius: 50%;
    animation: ms-spin 0.8s linear infinite;
}
.ms-spinner-sm { width: 14px; height: 14px; border-width: 2.5px; margin: 0; display: inline-block; }
@keyframes ms-spin { to { transform: rotate(360deg); } }

/* Report */
.ms-report { display: grid; grid-template-columns: 2fr 1fr; gap: 16px; }
.ms-report-label { font-size: 0.75rem; font-weight: 600; text-transform: uppercase; color: #64748b; margin-bottom: 8px; }
.ms-transcript {
    white-space: pre-wrap; line-height: 1.7; font-size: 1rem; color: #334155;
    padding: 16px; background: white; border: 1px solid #e2e8f0; border-radius: 8px;
}
.ms-section-card { padding: 12px 14px; border: 1px solid #e2e8f0; border-radius: 8px; background: #f8fafc; margin-bottom: 10px; }
.ms-section-title { font-size: 0.8rem; font-weight: 700; color: #1e293b; text-transform: uppercase; margin-bottom: 6px; }
.ms-section-icon { margin-right: 6px; }
.ms-section-body { font-size: 0.9rem; color: #334155; line-height: 1.5; }
.ms-muted { color: #94a3b8; }
"""


light_theme = gr.themes.Base(
    primary_hue=gr.themes.colors.blue,
    neutral_hue=gr.themes.colors.slate,
    font=["Inter", "-apple-system", "BlinkMacSystemFont", "Segoe UI", "Roboto", "sans-serif"],
)


# ─────────────────────────── View helpers ────────────────────────────────

def _export_path(state: ProcessingState) -> str | None:
    if state.report is None:
        return None
    prune_exports(config.EXPORTS_DIR, config.EXPORT_RETENTION_HOURS * 3600)
    doc = export_transcript(state.report.original_text)
    return str(write_export(doc, config.EXPORTS_DIR))


def _render(state: ProcessingState) -> tuple:
    """Map a state snapshot to updates for the dictation page outputs (see _view_outputs)."""
    status = state.status
    return (
        gr.update(visible=status is ProcessingStatus.IDLE),
        gr.update(value=None, interactive=True) if status is ProcessingStatus.IDLE else gr.update(interactive=not status.in_flight),
        gr.update(visible=status.in_flight, value=progress_html(status)),
        gr.update(visible=status is ProcessingStatus.ERROR),
        alert_html(state.error, "error") if state.error else "",
        gr.update(visible=status is ProcessingStatus.COMPLETED),
        gr.update(value=_export_path(state) if status is ProcessingStatus.COMPLETED else None),
        gr.update(value=state.audio_handle if status is ProcessingStatus.COMPLETED else None),
        render_structured_report(state.report),
    )


# ─────────────────────────── Main Blocks app ─────────────────────────────

def main() -> gr.Blocks:
    ensure_space_storage(storage_dir=config.STORAGE_DIR)
    gateway = get_gateway()
    logger.info("Using %s inference gateway", gateway.name)

    with gr.Blocks(title=APP_TITLE, theme=light_theme, css=MS_CSS) as demo:
        machine_state = gr.State(ProcessingStateMachine())

        gr.Markdown(f"# {APP_TITLE}\nTranscripción y estructuración de dictados médicos.")
        page = dictation.build()
        settings.build()

        _view_outputs = [
            page["upload_group"],
            page["audio_input"],
            page["progress_html"],
            page["error_group"],
            page["error_html"],
            page["result_group"],
            page["download_btn"],
            page["playback"],
            page["report_html"],
        ]

        # ═══════════════════════════════════════════════════════════════════
        # EVENT HANDLERS
        # ═══════════════════════════════════════════════════════════════════

        async def process_audio(audio_path: str | None, machine: ProcessingStateMachine):
            if not audio_path:
                yield (machine,) + _render(machine.state)
                return
            async for state in run_submission(machine, gateway, Path(audio_path)):
                yield (machine,) + _render(state)

        def reset(machine: ProcessingStateMachine):
            return (machine,) + _render(machine.reset())

        page["audio_input"].upload(
            process_audio,
            inputs=[page["audio_input"], machine_state],
            outputs=[machine_state] + _view_outputs,
        )
        for btn in (page["retry_btn"], page["new_btn"]):
            btn.click(reset, inputs=[machine_state], outputs=[machine_state] + _view_outputs)

    return demo


if __name__ == "__main__":
    app = main()
    app.launch()

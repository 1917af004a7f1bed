"""Settings panel — current inference configuration."""
import gradio as gr
from core import config


def _model_lines() -> list[str]:
    if config.INFERENCE_MODE == "api":
        return [
            f"**ASR model:** `{config.HF_ASR_MODEL_ID}`",
            f"**Chat model:** `{config.HF_CHAT_MODEL_ID}`",
            f"**HF token:** `{'set' if config.HF_TOKEN else 'missing'}`",
        ]
    if config.INFERENCE_MODE == "mock":
        return ["*Mock mode: canned responses, no network calls.*"]
    return [
        f"**Transcription model:** `{config.TRANSCRIBE_MODEL_ID}`",
        f"**Structuring model:** `{config.STRUCTURE_MODEL_ID}`",
        f"**API key:** `{'set' if config.GEMINI_API_KEY else 'missing'}`",
    ]


def build():
    with gr.Accordion("Configuración", open=False):
        gr.Markdown(f"**Inference mode:** `{config.INFERENCE_MODE}`")
        for line in _model_lines():
            gr.Markdown(line)
        gr.Markdown(f"**Prompt version:** `{config.PROMPT_VERSION}`")
        gr.Markdown("*To change these settings, update environment variables and restart the app.*")

    with gr.Accordion("Acerca de MedScribe", open=False):
        gr.Markdown("""
**MedScribe AI** transcribe dictados médicos, interpreta los comandos de puntuación
hablados y organiza el texto en secciones clínicas.

**Aviso:** demostración de investigación, no apta para uso clínico.
No suba datos reales de pacientes.
""")

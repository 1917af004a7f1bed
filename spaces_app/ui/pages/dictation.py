"""Dictation page — upload a recording, follow progress, review and download the report."""
import gradio as gr

UPLOAD_HINT = (
    'Sube tu archivo de voz. Se interpretarán comandos como "punto aparte" y "punto y coma".'
)


def build():
    """Build the dictation page. Returns dict of key components."""

    gr.Markdown("## Nueva Transcripción")

    with gr.Group(visible=True) as upload_group:
        audio_input = gr.Audio(
            label="Archivo de audio",
            sources=["upload"],
            type="filepath",
        )
        gr.Markdown(UPLOAD_HINT)

    progress_html = gr.HTML(visible=False)

    with gr.Group(visible=False) as error_group:
        error_html = gr.HTML()
        retry_btn = gr.Button("Intentar de nuevo", variant="primary")

    with gr.Group(visible=False) as result_group:
        with gr.Row():
            gr.Markdown("### Reporte Generado")
            download_btn = gr.DownloadButton("Bajar Transcripción (.doc)", size="sm")
            new_btn = gr.Button("Nuevo", size="sm")
        playback = gr.Audio(label="Audio original", interactive=False)
        report_html = gr.HTML()

    return {
        "upload_group": upload_group,
        "audio_input": audio_input,
        "progress_html": progress_html,
        "error_group": error_group,
        "error_html": error_html,
        "retry_btn": retry_btn,
        "result_group": result_group,
        "download_btn": download_btn,
        "new_btn": new_btn,
        "playback": playback,
        "report_html": report_html,
    }

"""Request builders for the two inference calls. Templates are versioned Markdown files."""
import json

from core import config
from core.util.files import read_text
from core.util.validation import load_schema


def _load_prompt(name: str, **kwargs) -> str:
    template = read_text(config.PROMPTS_DIR / f"{name}.md")
    return template.format(**kwargs) if kwargs else template


def report_schema() -> dict:
    return load_schema(config.REPORT_SCHEMA_PATH)


def build_transcription_prompt() -> str:
    """Instructions sent alongside the audio: spoken punctuation, self-corrections, medical precision."""
    return _load_prompt("transcribe")


def build_cleanup_prompt(raw_text: str) -> str:
    """Transcription rules applied to a literal ASR transcript (backends without audio chat)."""
    return _load_prompt("clean_transcript", rules=build_transcription_prompt(), raw_text=raw_text)


def build_structuring_prompt(transcript: str) -> str:
    return _load_prompt(
        "structure",
        schema=json.dumps(report_schema(), indent=2, ensure_ascii=False),
        transcript=transcript,
    )

"""
Dictation orchestrator.

Drives one submission through the state machine:
  1. Upload: read the recording and base64-encode it
  2. Transcription (gateway.transcribe)
  3. Refinement (gateway.structure + validated parsing)

Transcription failures end in ERROR. Structuring failures never do: the
transcript is kept and wrapped in the fallback report.
"""
import asyncio
import base64
import logging
import mimetypes
from pathlib import Path
from typing import AsyncIterator, Optional

from core.models import AudioSubmission, ProcessingState, StructuredReport
from core.pipeline.gateway import InferenceGateway
from core.pipeline.report_builder import build_report, fallback_report
from core.state_machine import ProcessingStateMachine

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "audio/mpeg"


def guess_mime_type(path: Path) -> str:
    mime, _ = mimetypes.guess_type(str(path))
    return mime or DEFAULT_MIME_TYPE


def load_submission(audio_path: Path, mime_type: Optional[str] = None) -> AudioSubmission:
    audio_path = Path(audio_path)
    return AudioSubmission(
        audio=audio_path.read_bytes(),
        mime_type=mime_type or guess_mime_type(audio_path),
        source_path=str(audio_path),
    )


def encode_audio(submission: AudioSubmission) -> str:
    """Transport form sent to the gateway."""
    return base64.b64encode(submission.audio).decode("ascii")


async def _structure(gateway: InferenceGateway, transcript: str, tag: str) -> StructuredReport:
    try:
        raw = await gateway.structure(transcript)
        return build_report(transcript, raw)
    except Exception:
        logger.exception("[%s] Structuring failed, using fallback report", tag)
        return fallback_report(transcript)


async def run_submission(
    machine: ProcessingStateMachine,
    gateway: InferenceGateway,
    audio_path: Path,
    mime_type: Optional[str] = None,
) -> AsyncIterator[ProcessingState]:
    """
    Run the pipeline, yielding the state after every transition.

    Stops early, without yielding further, once the submission has been
    invalidated by a reset.
    """
    token = machine.begin_upload(str(audio_path))
    yield machine.state

    tag = f"{audio_path}#{token}"
    try:
        submission = await asyncio.to_thread(load_submission, audio_path, mime_type)
        tag = submission.submission_id
        logger.info("[%s] Loaded %d bytes (%s)", tag, len(submission.audio), submission.mime_type)
        audio_b64 = await asyncio.to_thread(encode_audio, submission)
        mime = submission.mime_type
        del submission

        if not machine.begin_transcription(token):
            return
        yield machine.state

        transcript = await gateway.transcribe(audio_b64, mime)
        if not transcript:
            logger.warning("[%s] Transcription returned no text", tag)
        if not machine.begin_refinement(token):
            return
        yield machine.state
    except Exception as e:
        logger.exception("[%s] Processing failed", tag)
        if machine.fail(token, str(e)):
            yield machine.state
        return

    report = await _structure(gateway, transcript, tag)
    if machine.complete(token, report):
        logger.info("[%s] Report complete (fallback=%s)", tag, report.is_fallback)
        yield machine.state


async def process_submission(
    machine: ProcessingStateMachine,
    gateway: InferenceGateway,
    audio_path: Path,
    mime_type: Optional[str] = None,
) -> ProcessingState:
    """Run the whole pipeline and return the machine's final state."""
    async for _ in run_submission(machine, gateway, audio_path, mime_type):
        pass
    return machine.state

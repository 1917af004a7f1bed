"""Shared fixtures: a scriptable gateway and a sample recording."""
import asyncio
import json
from pathlib import Path
from typing import Optional

import pytest

from core.pipeline.gateway import InferenceGateway
from core.state_machine import ProcessingStateMachine

RENAL_TRANSCRIPT = "Riñón izquierdo mide 10 centímetros."


class FakeGateway(InferenceGateway):
    """Canned responses; optional events hold a call open until the test releases it."""

    name = "fake"

    def __init__(
        self,
        transcript: str = RENAL_TRANSCRIPT,
        structure_response: Optional[str] = None,
        transcribe_error: Optional[Exception] = None,
        structure_error: Optional[Exception] = None,
    ):
        self.transcript = transcript
        self.structure_response = structure_response if structure_response is not None else json.dumps(
            {"findings": "F", "diagnosis": "D", "plan": "P"}
        )
        self.transcribe_error = transcribe_error
        self.structure_error = structure_error
        self.transcribe_gate: Optional[asyncio.Event] = None
        self.structure_gate: Optional[asyncio.Event] = None
        self.calls: list[tuple] = []

    async def transcribe(self, audio_b64: str, mime_type: str) -> str:
        self.calls.append(("transcribe", audio_b64, mime_type))
        if self.transcribe_gate is not None:
            await self.transcribe_gate.wait()
        if self.transcribe_error is not None:
            raise self.transcribe_error
        return self.transcript

    async def structure(self, text: str) -> str:
        self.calls.append(("structure", text))
        if self.structure_gate is not None:
            await self.structure_gate.wait()
        if self.structure_error is not None:
            raise self.structure_error
        return self.structure_response


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def machine():
    return ProcessingStateMachine()


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    path = tmp_path / "dictado.wav"
    path.write_bytes(b"RIFF\x24\x00\x00\x00WAVEfmt fake-audio")
    return path

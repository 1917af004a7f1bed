"""
Remote inference gateway.

The pipeline only depends on this interface; the backend is chosen with the
INFERENCE_MODE env var:
  - "gemini" : Google Gemini via google-generativeai (default)
  - "api"    : Hugging Face Inference API (requires HF_TOKEN)
  - "mock"   : Canned responses (no network)
"""
from abc import ABC, abstractmethod
from typing import Optional

from core import config


class GatewayError(RuntimeError):
    """A gateway call failed (transport, quota, model error)."""


class MissingApiKeyError(GatewayError):
    """No credential configured for the selected backend."""


class InferenceGateway(ABC):
    """Transcription and structuring, each a single asynchronous request/response exchange."""

    name: str = "gateway"

    @abstractmethod
    async def transcribe(self, audio_b64: str, mime_type: str) -> str:
        """Return the cleaned, punctuated transcript of base64-encoded audio.

        An empty string means nothing was recognised; it is not an error.
        """

    @abstractmethod
    async def structure(self, text: str) -> str:
        """Return the raw model response for the structuring request.

        The response should hold a JSON object with optional keys
        patientInfo, clinicalHistory, findings, diagnosis and plan, but is
        untrusted: callers must validate it.
        """


def get_gateway(mode: Optional[str] = None) -> InferenceGateway:
    mode = (mode or config.INFERENCE_MODE).lower()
    if mode == "gemini":
        from core.pipeline.gemini_client import GeminiGateway
        return GeminiGateway()
    if mode == "api":
        from core.pipeline.hf_client import HuggingFaceGateway
        return HuggingFaceGateway()
    if mode == "mock":
        from core.pipeline.mock_client import MockGateway
        return MockGateway()
    raise ValueError(f"Unknown inference mode: {mode!r}")

"""
Gemini backend (Google GenAI SDK).

Transcription sends the audio inline with the transcription rules to the
fast model; structuring asks the pro model, with a thinking budget, for a
JSON response constrained by the report schema.
"""
import base64
import logging

from google import genai
from google.genai import types

from core import config
from core.pipeline.gateway import GatewayError, InferenceGateway, MissingApiKeyError
from core.pipeline.prompts import build_structuring_prompt, build_transcription_prompt, report_schema

logger = logging.getLogger(__name__)


def _gemini_type(json_type) -> tuple[str, bool]:
    """Map a JSON-schema type (possibly ["string", "null"]) to (GenAI type, nullable)."""
    if isinstance(json_type, list):
        concrete = [t for t in json_type if t != "null"]
        return (concrete[0] if concrete else "string").upper(), "null" in json_type
    return (json_type or "object").upper(), False


def _gemini_schema(schema: dict) -> dict:
    """Reduce a JSON schema to the OpenAPI subset accepted as a response schema."""
    properties = {}
    for name, prop in schema.get("properties", {}).items():
        type_, nullable = _gemini_type(prop.get("type"))
        converted = {"type": type_}
        if nullable:
            converted["nullable"] = True
        if "description" in prop:
            converted["description"] = prop["description"]
        properties[name] = converted
    return {
        "type": _gemini_type(schema.get("type", "object"))[0],
        "properties": properties,
        "required": list(schema.get("required", [])),
    }


class GeminiGateway(InferenceGateway):
    name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        transcribe_model: str | None = None,
        structure_model: str | None = None,
        thinking_budget: int | None = None,
    ):
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        self.transcribe_model = transcribe_model or config.TRANSCRIBE_MODEL_ID
        self.structure_model = structure_model or config.STRUCTURE_MODEL_ID
        self.thinking_budget = (
            thinking_budget if thinking_budget is not None else config.STRUCTURE_THINKING_BUDGET
        )

    def _client(self) -> genai.Client:
        if not self.api_key:
            raise MissingApiKeyError("No Gemini API key configured (set GEMINI_API_KEY or API_KEY).")
        return genai.Client(api_key=self.api_key)

    def structure_config(self) -> types.GenerateContentConfig:
        kwargs = {
            "response_mime_type": "application/json",
            "response_schema": _gemini_schema(report_schema()),
        }
        if self.thinking_budget > 0:
            kwargs["thinking_config"] = types.ThinkingConfig(thinking_budget=self.thinking_budget)
        return types.GenerateContentConfig(**kwargs)

    async def transcribe(self, audio_b64: str, mime_type: str) -> str:
        client = self._client()
        audio_part = types.Part.from_bytes(data=base64.b64decode(audio_b64), mime_type=mime_type)
        logger.info("Transcribing %s audio with %s", mime_type, self.transcribe_model)
        try:
            response = await client.aio.models.generate_content(
                model=self.transcribe_model,
                contents=[audio_part, build_transcription_prompt()],
            )
        except Exception as e:
            raise GatewayError(str(e) or "Gemini transcription request failed") from e
        return (response.text or "").strip()

    async def structure(self, text: str) -> str:
        client = self._client()
        logger.info(
            "Structuring %d chars with %s (thinking budget %d)",
            len(text), self.structure_model, self.thinking_budget,
        )
        try:
            response = await client.aio.models.generate_content(
                model=self.structure_model,
                contents=build_structuring_prompt(text),
                config=self.structure_config(),
            )
        except Exception as e:
            raise GatewayError(str(e) or "Gemini structuring request failed") from e
        return response.text or ""

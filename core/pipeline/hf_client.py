"""
Hugging Face Inference API backend.

The hosted ASR models return a literal transcript, so transcription is two
calls: speech recognition, then a chat-completion pass applying the same
punctuation and self-correction rules as the Gemini prompt.
"""
import base64
import logging

from huggingface_hub import AsyncInferenceClient

from core import config
from core.pipeline.gateway import GatewayError, InferenceGateway, MissingApiKeyError
from core.pipeline.prompts import build_cleanup_prompt, build_structuring_prompt

logger = logging.getLogger(__name__)


class HuggingFaceGateway(InferenceGateway):
    name = "api"

    def __init__(self, token: str | None = None, asr_model: str | None = None, chat_model: str | None = None):
        self.token = token if token is not None else config.HF_TOKEN
        self.asr_model = asr_model or config.HF_ASR_MODEL_ID
        self.chat_model = chat_model or config.HF_CHAT_MODEL_ID

    def _client(self, model: str) -> AsyncInferenceClient:
        if not self.token:
            raise MissingApiKeyError("No Hugging Face token configured (set HF_TOKEN).")
        return AsyncInferenceClient(model=model, token=self.token)

    async def _chat(self, prompt: str) -> str:
        client = self._client(self.chat_model)
        try:
            response = await client.chat_completion(
                messages=[{"role": "user", "content": prompt}],
                max_tokens=config.MAX_OUTPUT_TOKENS,
            )
        except Exception as e:
            raise GatewayError(str(e) or "Chat completion request failed") from e
        return response.choices[0].message.content or ""

    async def transcribe(self, audio_b64: str, mime_type: str) -> str:
        client = self._client(self.asr_model)
        logger.info("Running ASR on %s audio with %s", mime_type, self.asr_model)
        try:
            asr = await client.automatic_speech_recognition(base64.b64decode(audio_b64))
        except Exception as e:
            raise GatewayError(str(e) or "Speech recognition request failed") from e

        raw_text = (asr.text or "").strip()
        if not raw_text:
            return ""
        return (await self._chat(build_cleanup_prompt(raw_text))).strip()

    async def structure(self, text: str) -> str:
        logger.info("Structuring %d chars with %s", len(text), self.chat_model)
        return await self._chat(build_structuring_prompt(text))

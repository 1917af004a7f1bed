"""Mock backend: deterministic canned responses, no network. Used for demos and the smoke test."""
import asyncio
import json
import logging
from typing import Optional

from core.pipeline.gateway import InferenceGateway

logger = logging.getLogger(__name__)

MOCK_TRANSCRIPT = (
    "Paciente femenina de 54 años, remitida por dolor en flanco izquierdo de dos semanas de evolución.\n"
    "Riñón izquierdo mide 10 centímetros, de contornos regulares, sin dilatación del sistema colector. "
    "Se observa imagen hiperecogénica de 6 milímetros en el grupo calicial inferior, con sombra acústica posterior.\n"
    "Riñón derecho de tamaño y ecogenicidad normales."
)

MOCK_SECTIONS = {
    "patientInfo": "Femenina, 54 años.",
    "clinicalHistory": "Dolor en flanco izquierdo de dos semanas de evolución.",
    "findings": (
        "Riñón izquierdo de 10 cm, contornos regulares, sin hidronefrosis. "
        "Imagen hiperecogénica de 6 mm en grupo calicial inferior con sombra acústica posterior. "
        "Riñón derecho sin alteraciones."
    ),
    "diagnosis": "Litiasis renal izquierda no obstructiva.",
    "plan": "Analgesia, hidratación abundante y control ecográfico en 3 meses. Valoración por urología.",
}


class MockGateway(InferenceGateway):
    name = "mock"

    def __init__(
        self,
        transcript: str = MOCK_TRANSCRIPT,
        structure_response: Optional[str] = None,
        delay: float = 0.0,
    ):
        self.transcript = transcript
        self.structure_response = (
            structure_response if structure_response is not None
            else json.dumps(MOCK_SECTIONS, ensure_ascii=False)
        )
        self.delay = delay

    async def transcribe(self, audio_b64: str, mime_type: str) -> str:
        logger.info("Mock transcription of %d base64 chars (%s)", len(audio_b64), mime_type)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.transcript

    async def structure(self, text: str) -> str:
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.structure_response

"""Validated parsing of the structuring response, with a fixed fallback report."""
import logging

from core.models import StructuredReport
from core.pipeline.prompts import report_schema
from core.util.validation import extract_json_from_text, validate

logger = logging.getLogger(__name__)

FALLBACK_FINDINGS = "Error procesando la estructura del reporte."
FALLBACK_DIAGNOSIS = "No se pudo estructurar la información."
FALLBACK_PLAN = "Por favor revise el texto de la transcripción."


def fallback_report(transcript: str) -> StructuredReport:
    """Placeholder sections around the real transcript, so the user always keeps their text."""
    return StructuredReport(
        original_text=transcript,
        findings=FALLBACK_FINDINGS,
        diagnosis=FALLBACK_DIAGNOSIS,
        plan=FALLBACK_PLAN,
        is_fallback=True,
    )


def build_report(transcript: str, raw_response: str | None) -> StructuredReport:
    """
    Parse the model's structuring output into a StructuredReport.

    Never raises for bad model output: unparseable JSON or a schema mismatch
    yields fallback_report(transcript).
    """
    parsed = extract_json_from_text(raw_response or "")
    if parsed is None:
        logger.warning("Structuring response is not JSON. Got: %s", (raw_response or "")[:200])
        return fallback_report(transcript)

    errors = validate(parsed, report_schema())
    if errors:
        logger.warning("Structuring response failed schema validation: %s", errors)
        return fallback_report(transcript)

    return StructuredReport.from_sections(transcript, parsed)

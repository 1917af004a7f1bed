"""Word-compatible (.doc) export of the cleaned transcript as styled HTML."""
import html
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from core.util.files import write_bytes
from core.util.time import epoch_millis, fmt_date, utcnow

logger = logging.getLogger(__name__)

DOC_CONTENT_TYPE = "application/msword"
FILENAME_PREFIX = "Transcripcion_Medica"
# Word needs the BOM to pick up UTF-8 in an HTML .doc
BOM = "\ufeff"


@dataclass(frozen=True)
class ExportDocument:
    filename: str
    content: bytes
    content_type: str = DOC_CONTENT_TYPE


def _document_html(text: str, generated_at: datetime) -> str:
    body = html.escape(text).replace("\n", "<br/>")
    return f"""
<html xmlns:o='urn:schemas-microsoft-com:office:office' xmlns:w='urn:schemas-microsoft-com:office:word' xmlns='http://www.w3.org/TR/REC-html40'>
<head><meta charset='utf-8'><title>Transcripción Médica</title></head>
<body>
  <div style="font-family: 'Arial', sans-serif; max-width: 800px; margin: auto; padding: 20px;">
    <h1 style="text-align:center; color:#1e293b; border-bottom: 2px solid #3b82f6; padding-bottom: 10px;">REPORTE DE TRANSCRIPCIÓN MÉDICA</h1>
    <p style="text-align: right; font-size: 12px; color: #64748b;">Fecha: {fmt_date(generated_at)}</p>
    <div style="margin-top: 30px; line-height: 1.6; color: #334155; font-size: 14pt;">
      {body}
    </div>
    <br/><br/>
    <hr style="border: 0; border-top: 1px solid #e2e8f0;" />
    <p style="font-size: 10px; color: #94a3b8; text-align: center;">Documento generado automáticamente por MedScribe AI</p>
  </div>
</body>
</html>
"""


def export_transcript(text: str, generated_at: Optional[datetime] = None) -> ExportDocument:
    generated_at = generated_at or utcnow()
    content = (BOM + _document_html(text, generated_at)).encode("utf-8")
    return ExportDocument(
        filename=f"{FILENAME_PREFIX}_{epoch_millis(generated_at)}.doc",
        content=content,
    )


def write_export(doc: ExportDocument, directory: Path) -> Path:
    path = write_bytes(directory / doc.filename, doc.content)
    logger.info("Wrote export %s (%d bytes)", path, len(doc.content))
    return path


def prune_exports(directory: Path, max_age_seconds: float, now: Optional[float] = None) -> int:
    """Delete exported .doc files older than max_age_seconds. Returns the number removed."""
    directory = Path(directory)
    if not directory.is_dir():
        return 0
    cutoff = (now if now is not None else time.time()) - max_age_seconds
    removed = 0
    for path in directory.glob(f"{FILENAME_PREFIX}_*.doc"):
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink()
                removed += 1
        except FileNotFoundError:
            continue
    if removed:
        logger.info("Pruned %d old export(s) from %s", removed, directory)
    return removed

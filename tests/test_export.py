import os
import time
from datetime import datetime, timezone

from core.export.doc_export import DOC_CONTENT_TYPE, export_transcript, prune_exports, write_export

GENERATED_AT = datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc)


def test_filename_carries_timestamp():
    doc = export_transcript("texto", GENERATED_AT)
    assert doc.filename == f"Transcripcion_Medica_{int(GENERATED_AT.timestamp() * 1000)}.doc"
    assert doc.content_type == DOC_CONTENT_TYPE == "application/msword"


def test_content_is_bom_prefixed_word_html():
    doc = export_transcript("Riñón izquierdo mide 10 centímetros.", GENERATED_AT)
    text = doc.content.decode("utf-8")
    assert text.startswith("\ufeff")
    assert "urn:schemas-microsoft-com:office:word" in text
    assert "REPORTE DE TRANSCRIPCIÓN MÉDICA" in text
    assert "Fecha: 05/03/2024" in text
    assert "Riñón izquierdo mide 10 centímetros." in text


def test_newlines_become_breaks_and_markup_is_escaped():
    doc = export_transcript("Hallazgos: <ninguno>\nPlan: control", GENERATED_AT)
    text = doc.content.decode("utf-8")
    assert "Hallazgos: &lt;ninguno&gt;<br/>Plan: control" in text
    assert "<ninguno>" not in text


def test_write_export(tmp_path):
    doc = export_transcript("texto", GENERATED_AT)
    path = write_export(doc, tmp_path / "exports")
    assert path.name == doc.filename
    assert path.read_bytes() == doc.content


def test_storage_init_creates_exports_dir(tmp_path):
    from scripts.init_space_storage import ensure_space_storage

    exports = ensure_space_storage(tmp_path / "storage")
    assert exports == tmp_path / "storage" / "exports"
    assert exports.is_dir()


def test_prune_exports_removes_only_expired_docs(tmp_path):
    now = time.time()
    old = write_export(export_transcript("viejo", GENERATED_AT), tmp_path)
    fresh = write_export(export_transcript("nuevo"), tmp_path)
    other = tmp_path / "notas.txt"
    other.write_text("x")
    os.utime(old, (now - 48 * 3600, now - 48 * 3600))
    os.utime(other, (now - 48 * 3600, now - 48 * 3600))

    assert prune_exports(tmp_path, 24 * 3600, now=now) == 1
    assert not old.exists()
    assert fresh.exists()
    assert other.exists()


def test_prune_exports_missing_dir_is_noop(tmp_path):
    assert prune_exports(tmp_path / "missing", 3600) == 0

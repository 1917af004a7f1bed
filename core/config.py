"""Central configuration loaded from environment variables / .env file."""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).resolve().parent.parent

# ── Inference ──────────────────────────────────────────────────────────────
# Missing keys are reported when a gateway call is made, not at startup.
GEMINI_API_KEY: str = (
    os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or os.getenv("GOOGLE_API_KEY") or ""
)
INFERENCE_MODE: str = os.getenv("INFERENCE_MODE", "gemini").lower()
TRANSCRIBE_MODEL_ID: str = os.getenv("TRANSCRIBE_MODEL_ID", "gemini-3-flash-preview")
STRUCTURE_MODEL_ID: str = os.getenv("STRUCTURE_MODEL_ID", "gemini-3-pro-preview")
MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "8192"))
# Thinking tokens for the structuring call; 0 leaves it to the model default.
STRUCTURE_THINKING_BUDGET: int = int(os.getenv("STRUCTURE_THINKING_BUDGET", "32768"))

HF_TOKEN: str = os.getenv("HF_TOKEN", "")
HF_ASR_MODEL_ID: str = os.getenv("HF_ASR_MODEL_ID", "openai/whisper-large-v3")
HF_CHAT_MODEL_ID: str = os.getenv("HF_CHAT_MODEL_ID", "google/medgemma-4b-it")

# ── Prompts ────────────────────────────────────────────────────────────────
PROMPT_VERSION: str = os.getenv("PROMPT_VERSION", "v1")
PROMPTS_DIR: Path = ROOT / "core" / "pipeline" / "prompts" / PROMPT_VERSION
SCHEMAS_DIR: Path = ROOT / "core" / "pipeline" / "schemas"
REPORT_SCHEMA_PATH: Path = SCHEMAS_DIR / "structured_report.schema.json"

# ── Storage ────────────────────────────────────────────────────────────────
_storage_env = os.getenv("MEDSCRIBE_STORAGE_DIR", "")
STORAGE_DIR: Path = Path(_storage_env) if _storage_env else ROOT / "spaces_app" / "storage"
EXPORTS_DIR: Path = STORAGE_DIR / "exports"
# Exported .doc files older than this are deleted before each new export.
EXPORT_RETENTION_HOURS: float = float(os.getenv("EXPORT_RETENTION_HOURS", "24"))

# ── Logging ────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

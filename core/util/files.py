"""File I/O helpers for prompts, schemas, uploads and exports."""
import json
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Create directory (and parents) if it doesn't exist, then return the path."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_json(path: Path) -> dict:
    """Read and parse a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_text(path: Path) -> str:
    """Read a file as UTF-8 text."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_bytes(path: Path, data: bytes) -> Path:
    """Write raw bytes, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
    return path

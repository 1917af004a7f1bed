from pathlib import Path

from core.util.files import ensure_dir


def ensure_space_storage(storage_dir: Path) -> Path:
    """
    Hugging Face Spaces: create a writable storage area for generated downloads.
    Returns the exports directory.
    """
    ensure_dir(storage_dir)
    return ensure_dir(storage_dir / "exports")

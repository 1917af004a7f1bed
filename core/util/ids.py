"""Unique ID generation for submissions."""
import uuid
import time


def new_id(prefix: str = "") -> str:
    """Return a collision-resistant ID with an optional prefix."""
    ts = int(time.time() * 1000)
    uid = uuid.uuid4().hex[:12]
    if prefix:
        return f"{prefix}_{ts}_{uid}"
    return f"{ts}_{uid}"


def new_submission_id() -> str:
    """Generate a submission identifier used to correlate log lines (e.g. sub_1700000000000_abc123)."""
    return new_id("sub")

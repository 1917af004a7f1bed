"""JSON schema validation and extraction helpers for model output."""
import json
import re
import jsonschema
from pathlib import Path

from core.util.files import read_json


def load_schema(schema_path: Path) -> dict:
    return read_json(schema_path)


def validate(data: dict, schema: dict) -> list[str]:
    """Return list of validation error messages, empty if valid."""
    try:
        jsonschema.validate(instance=data, schema=schema)
        return []
    except jsonschema.ValidationError as e:
        return [e.message]
    except jsonschema.SchemaError as e:
        return [f"Schema error: {e.message}"]


def extract_json_from_text(text: str) -> dict | None:
    """Return the first JSON object found in a model response, or None."""
    if not text or not text.strip():
        return None

    try:
        parsed = json.loads(text)
        return parsed if isinstance(parsed, dict) else None
    except (json.JSONDecodeError, RecursionError):
        pass

    # ```json ... ``` fenced block
    match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, re.DOTALL)
    if match:
        try:
            return json.loads(match.group(1))
        except (json.JSONDecodeError, RecursionError):
            pass

    # outermost { ... } span
    match = re.search(r"\{.*\}", text, re.DOTALL)
    if match:
        try:
            parsed = json.loads(match.group(0))
            return parsed if isinstance(parsed, dict) else None
        except (json.JSONDecodeError, RecursionError):
            pass

    return None

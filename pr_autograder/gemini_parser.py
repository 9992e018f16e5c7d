import json
from typing import Any, Dict

from pydantic import ValidationError

from pr_autograder.errors import GradingResponseSchemaError
from pr_autograder.models import GradingResult


def _unwrap_once(text: str) -> str:
    """
    Unwrap one level of encoding around the model reply:
    - a JSON-encoded string → its value
    - an object with a `text` field → that field
    """
    if not text:
        return text

    text = text.strip()

    if not text.startswith('"') and not text.startswith("{"):
        return text

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return text

    if isinstance(parsed, str):
        return parsed
    if isinstance(parsed, dict) and isinstance(parsed.get("text"), str):
        return parsed["text"]
    return text


def extract_json_from_gemini(raw_text: str) -> Dict[str, Any]:
    if not isinstance(raw_text, str):
        raise GradingResponseSchemaError("error unmarshalling Gemini response")

    text = _unwrap_once(raw_text.strip())
    text = _unwrap_once(text)

    # remove code fences
    text = text.replace("```json", "").replace("```", "").strip()

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise GradingResponseSchemaError("error unmarshalling Gemini response") from e

    if not isinstance(parsed, dict):
        raise GradingResponseSchemaError("error unmarshalling Gemini response")
    return parsed


def parse_grading_result(raw_text: str) -> GradingResult:
    """Validate a model reply against the grading schema.

    Grades outside the known set are rejected, not passed through.
    """
    data = extract_json_from_gemini(raw_text)
    try:
        return GradingResult.model_validate(data)
    except ValidationError as e:
        raise GradingResponseSchemaError("error unmarshalling Gemini response") from e

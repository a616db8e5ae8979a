import json
import re
import logging
from typing import Dict, Any, Type, TypeVar
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_json_response(
    json_str: str,
    expected_model: Type[ModelT]
) -> ModelT:
    """
    Validate LLM JSON output against the expected model, cleaning it once if broken
    """

    try:
        data = json.loads(json_str)
        return expected_model.model_validate(normalize_json_fields(data))
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON, attempting repair: {e}")
    except ValidationError as e:
        logger.warning(f"Validation failed on first attempt: {e}")

    cleaned = clean_json_string(json_str)

    try:
        data = json.loads(cleaned)
        validated = expected_model.model_validate(normalize_json_fields(data))
        logger.info("JSON repaired successfully after cleaning")
        return validated
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"All repair attempts failed: {e}")
        raise ValueError(f"Cannot parse or repair JSON: {e}") from e


def clean_json_string(json_str: str) -> str:
    """
    Clean common JSON formatting issues from LLM output
    """
    # Remove markdown code blocks
    cleaned = re.sub(r'```json\s*', '', json_str)
    cleaned = re.sub(r'```\s*', '', cleaned)

    cleaned = cleaned.strip()

    # Fix trailing commas before closing brackets
    cleaned = re.sub(r',(\s*[}\]])', r'\1', cleaned)

    # Remove comments (single line and multi-line)
    cleaned = re.sub(r'^\s*//.*?$', '', cleaned, flags=re.MULTILINE)
    cleaned = re.sub(r'/\*.*?\*/', '', cleaned, flags=re.DOTALL)

    return cleaned


def coerce_score(val: Any) -> Any:
    """Turn '4', '4/5' or 4.0 into an int score clamped to 0-5"""
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        m = re.match(r"^\s*(-?\d+(?:\.\d+)?)", val)
        if not m:
            return val
        val = float(m.group(1))
    if isinstance(val, (int, float)):
        if val < 0:
            logger.warning(f"Score {val} below minimum, setting to 0")
            return 0
        if val > 5:
            logger.warning(f"Score {val} above maximum, setting to 5")
            return 5
        return int(round(val))
    return val


def normalize_json_fields(data: Any) -> Any:
    """
    Normalize common LLM JSON deviations:
    - Coerce criterion scores to integers within 0-5
    - Upper-case criterion types ('strength' -> 'STRENGTH')
    - Trim text fields
    """
    if isinstance(data, list):
        return [normalize_json_fields(item) for item in data]
    if not isinstance(data, dict):
        return data

    normalized: Dict[str, Any] = {}
    for k, v in data.items():
        if k == "score":
            normalized[k] = coerce_score(v)
        elif k == "type" and isinstance(v, str):
            normalized[k] = v.strip().upper()
        elif k == "id" and isinstance(v, (int, float)):
            normalized[k] = str(v)
        elif isinstance(v, str):
            normalized[k] = v.strip()
        else:
            normalized[k] = normalize_json_fields(v)

    return normalized

from typing import Any, Dict, List

REQUIRED_STR_FIELDS = ["title"]
OPTIONAL_STR_FIELDS = ["description"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_utf8(v: str) -> bool:
    try:
        v.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _is_timestamp(v: Any) -> bool:
    # bool is an int subclass; reject it explicitly
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def validate_payload(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages for a post/update payload.
    Empty list means valid.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if f in data and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    for f in REQUIRED_STR_FIELDS + OPTIONAL_STR_FIELDS:
        if isinstance(data.get(f), str) and not _is_utf8(data[f]):
            errors.append(f"Field '{f}' must be valid UTF-8 text")

    if "deadline" not in data:
        errors.append("Missing required field: deadline")
    elif not _is_timestamp(data["deadline"]):
        errors.append("Field 'deadline' must be a non-negative integer timestamp")

    return errors

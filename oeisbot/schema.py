from typing import Any, Dict, List

from .errors import SchemaError
from .models import PROSE_FIELDS, RawRecord

REQUIRED_INT_FIELDS = ["number", "references", "revision"]
REQUIRED_STR_FIELDS = [
    "data",
    "name",
    "keyword",
    "offset",
    "time",
    "created",
]
OPTIONAL_STR_FIELDS = ["id", "author"]


def _is_unsigned_int(v: Any) -> bool:
    # bool is an int subclass
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def _is_str_list(v: Any) -> bool:
    return isinstance(v, list) and all(isinstance(x, str) for x in v)


def validate_record(data: Any) -> List[str]:
    """
    Returns a list of shape errors for one wire record. Empty list means valid.
    Only the fields the decoder reads are checked; unknown fields are ignored.
    """
    if not isinstance(data, dict):
        return [f"Record must be a JSON object, got {type(data).__name__}"]

    errors: List[str] = []

    for f in REQUIRED_INT_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_unsigned_int(data[f]):
            errors.append(f"Field '{f}' must be a non-negative integer")

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string")

    # null is accepted for optional fields and treated as absent
    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    for f in PROSE_FIELDS:
        if data.get(f) is not None and not _is_str_list(data[f]):
            errors.append(f"Field '{f}' must be a list of strings if provided")

    return errors


def parse_raw_record(data: Dict[str, Any]) -> RawRecord:
    """Check the shape of a wire record and fill in defaults.

    Raises:
        SchemaError: listing every shape violation found
    """
    errors = validate_record(data)
    if errors:
        raise SchemaError(errors)

    prose = {f: list(data.get(f) or []) for f in PROSE_FIELDS}
    return RawRecord(
        number=data["number"],
        id=data.get("id"),
        data=data["data"],
        name=data["name"],
        keyword=data["keyword"],
        offset=data["offset"],
        author=data.get("author") or "",
        references=data["references"],
        revision=data["revision"],
        time=data["time"],
        created=data["created"],
        **prose,
    )

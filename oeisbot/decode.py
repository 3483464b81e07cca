"""
Decoding of OEIS wire records into Sequence values.

Two stages: `schema.parse_raw_record` checks the JSON shape, then `decode`
normalizes the string-encoded fields. Both are pure and raise a DecodeError
subclass instead of returning a partial result.
"""

import re
from typing import Any, Dict, List, Tuple

from .errors import InvalidTermError
from .keywords import parse_keywords
from .models import CHUNK_DIGITS, RawRecord, Sequence
from .schema import parse_raw_record

_TERM_RE = re.compile(r"[+-]?[0-9]+")


def parse_term(segment: str) -> int:
    """Convert one validated digit string to int, CHUNK_DIGITS digits at a time."""
    digits = segment.lstrip("+-")
    value = 0
    for start in range(0, len(digits), CHUNK_DIGITS):
        block = digits[start:start + CHUNK_DIGITS]
        value = value * 10 ** len(block) + int(block)
    return -value if segment.startswith("-") else value


def parse_terms(field: str) -> Tuple[int, ...]:
    """Parse the comma-delimited data field into arbitrary-precision ints.

    Empty segments (e.g. from a trailing comma) are skipped.

    Raises:
        InvalidTermError: on the first segment that is not an integer
    """
    terms = []
    for segment in field.split(","):
        if not segment:
            continue
        if not _TERM_RE.fullmatch(segment):
            raise InvalidTermError(segment)
        terms.append(parse_term(segment))
    return tuple(terms)


def join_lines(lines: List[str]) -> str:
    return "\n".join(lines)


def decode(raw: RawRecord) -> Sequence:
    return Sequence(
        number=raw.number,
        id=raw.id,
        data=parse_terms(raw.data),
        name=raw.name,
        comment=join_lines(raw.comment),
        reference=join_lines(raw.reference),
        link=join_lines(raw.link),
        formula=join_lines(raw.formula),
        example=join_lines(raw.example),
        maple=join_lines(raw.maple),
        mathematica=join_lines(raw.mathematica),
        program=join_lines(raw.program),
        xref=join_lines(raw.xref),
        keyword=tuple(parse_keywords(raw.keyword)),
        offset=raw.offset,
        author=raw.author,
        ext=join_lines(raw.ext),
        references=raw.references,
        revision=raw.revision,
        time=raw.time,
        created=raw.created,
    )


def decode_record(data: Dict[str, Any]) -> Sequence:
    """Decode one JSON object from the search response."""
    return decode(parse_raw_record(data))

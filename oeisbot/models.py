from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .keywords import Keyword

OEIS_URL = "https://oeis.org"

# Terms are converted to and from text in blocks of this many digits
CHUNK_DIGITS = 4000
CHUNK_BASE = 10 ** CHUNK_DIGITS

# Multi-line wire fields, each joined into one string on decode
PROSE_FIELDS = (
    "comment",
    "reference",
    "link",
    "formula",
    "example",
    "maple",
    "mathematica",
    "program",
    "xref",
    "ext",
)


def format_label(number: int) -> str:
    return f"A{number:06d}"


@dataclass(frozen=True)
class RawRecord:
    """One entry of the OEIS search response, as the service sends it."""

    number: int
    data: str
    name: str
    keyword: str
    offset: str
    references: int
    revision: int
    time: str
    created: str
    id: Optional[str] = None
    author: str = ""
    comment: List[str] = field(default_factory=list)
    reference: List[str] = field(default_factory=list)
    link: List[str] = field(default_factory=list)
    formula: List[str] = field(default_factory=list)
    example: List[str] = field(default_factory=list)
    maple: List[str] = field(default_factory=list)
    mathematica: List[str] = field(default_factory=list)
    program: List[str] = field(default_factory=list)
    xref: List[str] = field(default_factory=list)
    ext: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Sequence:
    """A decoded OEIS sequence.

    Prose sections hold the wire lines joined with newlines. `keyword` keeps
    the wire order and any duplicates.
    """

    number: int
    id: Optional[str]
    data: Tuple[int, ...]
    name: str
    comment: str
    reference: str
    link: str
    formula: str
    example: str
    maple: str
    mathematica: str
    program: str
    xref: str
    keyword: Tuple[Keyword, ...]
    offset: str
    author: str
    ext: str
    references: int
    revision: int
    time: str
    created: str

    @property
    def label(self) -> str:
        """A-number, e.g. A000045."""
        return format_label(self.number)

    @property
    def url(self) -> str:
        return f"{OEIS_URL}/{self.label}"

    def has_any(self, keywords: Iterable[Keyword]) -> bool:
        return not set(self.keyword).isdisjoint(keywords)


def format_term(n: int) -> str:
    """Decimal text of a term, without the interpreter's int-to-str digit limit."""
    if -CHUNK_BASE < n < CHUNK_BASE:
        return str(n)
    sign = "-" if n < 0 else ""
    n = abs(n)
    chunks = []
    while n:
        n, rest = divmod(n, CHUNK_BASE)
        chunks.append(rest)
    chunks.reverse()
    return sign + str(chunks[0]) + "".join(str(c).zfill(CHUNK_DIGITS) for c in chunks[1:])


def to_dict(seq: Sequence) -> Dict[str, Any]:
    """JSON-safe view of a sequence.

    Keywords become strings. Terms stay ints unless they are too long for
    json to print, in which case they are given as decimal strings.
    """
    out: Dict[str, Any] = {
        "number": seq.number,
        "label": seq.label,
        "id": seq.id,
        "name": seq.name,
        "data": [n if -CHUNK_BASE < n < CHUNK_BASE else format_term(n) for n in seq.data],
        "keyword": [k.value for k in seq.keyword],
        "offset": seq.offset,
        "author": seq.author,
        "references": seq.references,
        "revision": seq.revision,
        "time": seq.time,
        "created": seq.created,
    }
    for name in PROSE_FIELDS:
        out[name] = getattr(seq, name)
    return out


def render_text(seq: Sequence) -> str:
    """Multi-line console summary."""
    lines = [
        f"{seq.label}: {seq.name}",
        f"  Terms: {', '.join(format_term(n) for n in seq.data)}",
        f"  Keywords: {','.join(k.value for k in seq.keyword)}",
        f"  Offset: {seq.offset}",
    ]
    if seq.id:
        lines.append(f"  Legacy ID: {seq.id}")
    if seq.author:
        lines.append(f"  Author: {seq.author}")
    lines.append(f"  Revision: {seq.revision} ({seq.time})")
    lines.append(f"  URL: {seq.url}")
    return "\n".join(lines)

from enum import Enum
from typing import Dict, List

from .errors import UnknownKeywordError


class Keyword(Enum):
    """OEIS keyword tag. The value is the canonical wire string."""

    BASE = "base"            # dependent on the base used
    BREF = "bref"            # too short to do any analysis with
    CHANGED = "changed"      # recently modified (automatic)
    COFR = "cofr"            # continued fraction expansion of a number
    CONS = "cons"            # decimal expansion of a number
    CORE = "core"            # an important sequence
    DEAD = "dead"            # erroneous or duplicated
    DUMB = "dumb"            # an unimportant sequence
    DUPE = "dupe"            # duplicate of another sequence
    EASY = "easy"            # terms are easy to produce
    EIGEN = "eigen"          # fixed point of some transformation
    FINI = "fini"            # a finite sequence
    FRAC = "frac"            # numerators or denominators of rationals
    FULL = "full"            # all terms are given (implies fini)
    HARD = "hard"            # next term not known, may be hard to find
    HEAR = "hear"            # worth listening to
    LESS = "less"            # less interesting
    LOOK = "look"            # interesting graph
    MORE = "more"            # more terms are needed
    MULT = "mult"            # multiplicative
    NEW = "new"              # recently added (automatic)
    NICE = "nice"            # exceptionally nice
    NONN = "nonn"            # all terms nonnegative
    OBSC = "obsc"            # obscure, better description needed
    PROBATION = "probation"  # included on probation
    SIGN = "sign"            # contains negative numbers
    TABF = "tabf"            # irregular triangle read by rows
    TABL = "tabl"            # regular triangle or square array
    UNED = "uned"            # not yet edited
    UNKN = "unkn"            # little is known, an unsolved problem
    WALK = "walk"            # counts walks or self-avoiding paths
    WORD = "word"            # depends on words in some language

    def __str__(self) -> str:
        return self.value


_BY_STRING: Dict[str, Keyword] = {k.value: k for k in Keyword}


def to_string(keyword: Keyword) -> str:
    return keyword.value


def from_string(s: str) -> Keyword:
    """Map a wire string to its Keyword.

    Matching is exact: no case folding and no whitespace trimming.

    Raises:
        UnknownKeywordError: if s is not a known keyword
    """
    try:
        return _BY_STRING[s]
    except KeyError:
        raise UnknownKeywordError(s) from None


def parse_keywords(field: str) -> List[Keyword]:
    """Parse a comma-delimited keyword field, keeping order and duplicates."""
    return [from_string(part) for part in field.split(",") if part]

"""
Exception hierarchy for oeisbot.

Lookup failures derive from FetchError, decode failures from DecodeError.
Only NotFoundError is ever retried, and only by the random sampler.
"""

from typing import List, Optional


class OeisBotError(Exception):
    """Base class for all oeisbot errors."""
    pass


class FetchError(OeisBotError):
    """Raised when a sequence could not be retrieved."""
    pass


class TransportError(FetchError):
    """Connection failure, timeout or non-2xx response from the service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(FetchError):
    """Response body is not valid JSON or does not decode to a sequence."""
    pass


class NotFoundError(FetchError):
    """The service returned an empty result set for an identifier."""

    def __init__(self, number: int):
        super().__init__(f"sequence A{number:06d} not found")
        self.number = number


class DecodeError(OeisBotError, ValueError):
    """Raised when a wire record cannot be turned into a Sequence."""
    pass


class InvalidTermError(DecodeError):
    def __init__(self, segment: str):
        super().__init__(f"invalid integer in OEIS data field: {segment!r}")
        self.segment = segment


class UnknownKeywordError(DecodeError):
    def __init__(self, segment: str):
        super().__init__(f"unknown OEIS keyword: {segment!r}")
        self.segment = segment


class SchemaError(DecodeError):
    """Wire record is missing a required field or has a field of the wrong type."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class SamplingExhaustedError(OeisBotError):
    """Raised when a capped random sampler rejects every draw."""

    def __init__(self, draws: int):
        super().__init__(f"no acceptable sequence found after {draws} draws")
        self.draws = draws


class PublishError(OeisBotError):
    """Raised when posting a status fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(OeisBotError):
    """Raised for missing or malformed configuration."""
    pass

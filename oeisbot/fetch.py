"""
Sequence lookups against the OEIS search endpoint.

`fetch_by_id` does one search round trip. `fetch_random` rejection-samples
identifiers until it finds a sequence that exists and carries none of the
excluded keywords.
"""

import random
from typing import Any, Dict, FrozenSet, Iterable, Optional

import requests

from .decode import decode_record
from .env import DEFAULT_BASE_URL, DEFAULT_MAX_ID, DEFAULT_TIMEOUT
from .errors import (
    DecodeError,
    NotFoundError,
    ParseError,
    SamplingExhaustedError,
    TransportError,
)
from .keywords import Keyword
from .logger import get_logger
from .models import Sequence, format_label
from .retry import RetryError, call_with_backoff

MAX_SEQUENCE_ID = DEFAULT_MAX_ID

DEFAULT_EXCLUDED_KEYWORDS: FrozenSet[Keyword] = frozenset({
    Keyword.DEAD,
    Keyword.DUMB,
    Keyword.DUPE,
    Keyword.LESS,
    Keyword.OBSC,
    Keyword.PROBATION,
    Keyword.UNED,
})

RETRYABLE_EXCEPTIONS = (requests.exceptions.Timeout, requests.exceptions.ConnectionError)


def build_query(number: int) -> Dict[str, str]:
    """Search parameters selecting exactly one A-number, JSON response."""
    return {"q": f"id:{format_label(number)}", "fmt": "json"}


def search_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/search"


def _get(url: str, params: Dict[str, str], timeout: float, retries: int) -> requests.Response:
    """GET with standardized error mapping.

    Raises:
        TransportError: on connection errors, timeouts and non-2xx responses
    """
    logger = get_logger()

    def on_retry(attempt: int, exc: BaseException, delay: float) -> None:
        logger.warning("OEIS request failed, retrying", attempt=attempt, delay=delay, error=str(exc))

    def attempt() -> requests.Response:
        logger.record_api_call()
        return requests.get(url, params=params, timeout=timeout)

    try:
        resp = call_with_backoff(
            attempt,
            max_retries=retries,
            exceptions=RETRYABLE_EXCEPTIONS,
            on_retry=on_retry,
        )
        resp.raise_for_status()
        return resp
    except RetryError as e:
        cause = e.__cause__
        kind = "Timeout" if isinstance(cause, requests.exceptions.Timeout) else "ConnectionError"
        logger.record_lookup_failure(kind)
        logger.error("OEIS request failed", url=url, attempts=e.attempts, error=str(cause))
        raise TransportError(f"OEIS request failed after {e.attempts} attempt(s): {cause}") from cause
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.record_lookup_failure(f"HTTPError_{status}")
        logger.error("OEIS request returned an error status", url=url, status=status)
        raise TransportError(f"OEIS request failed ({status}): {url}", status_code=status) from e
    except requests.exceptions.RequestException as e:
        logger.record_lookup_failure("RequestException")
        logger.error("OEIS request error", url=url, error=str(e))
        raise TransportError(f"OEIS request error: {e}") from e


def fetch_by_id(
    number: int,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = 0,
) -> Sequence:
    """Fetch a sequence by its A-number (e.g. 250000 for A250000).

    The search endpoint returns a list; only the first entry is used.

    Raises:
        NotFoundError: the service returned no entries
        ParseError: the body is not JSON or the first entry does not decode
        TransportError: connection failure, timeout or non-2xx status
        ValueError: number is negative
    """
    if number < 0:
        raise ValueError(f"sequence number must be >= 0, got {number}")
    logger = get_logger()
    logger.record_lookup_attempt()
    label = format_label(number)

    resp = _get(search_url(base_url), build_query(number), timeout, retries)

    try:
        entries: Any = resp.json()
    except ValueError as e:
        logger.record_lookup_failure("InvalidJSON")
        logger.error("OEIS response is not valid JSON", label=label)
        raise ParseError(f"OEIS response for {label} is not valid JSON: {e}") from e

    # The service answers null instead of [] for some empty searches
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        logger.record_lookup_failure("UnexpectedShape")
        raise ParseError(
            f"OEIS response for {label} must be a JSON array, got {type(entries).__name__}"
        )
    if not entries:
        logger.record_lookup_not_found()
        logger.debug("No OEIS entry for identifier", label=label)
        raise NotFoundError(number)

    try:
        seq = decode_record(entries[0])
    except DecodeError as e:
        logger.record_lookup_failure(type(e).__name__)
        logger.error("Could not decode OEIS entry", label=label, error=str(e))
        raise ParseError(f"could not decode {label}: {e}") from e

    logger.record_lookup_success()
    return seq


def fetch_random(
    excluded: Iterable[Keyword] = DEFAULT_EXCLUDED_KEYWORDS,
    max_id: int = MAX_SEQUENCE_ID,
    max_draws: Optional[int] = None,
    rng: Optional[random.Random] = None,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = 0,
) -> Sequence:
    """
    Fetch a random sequence, skipping missing identifiers and excluded keywords.

    Args:
        excluded: Keywords that disqualify a sequence
        max_id: Upper bound (inclusive) for drawn identifiers
        max_draws: Optional cap on draws; None samples until accepted
        rng: Random source, a fresh random.Random by default
        base_url, timeout, retries: Passed through to fetch_by_id

    Raises:
        SamplingExhaustedError: max_draws draws were all rejected
        TransportError, ParseError: propagated from the first failing lookup,
            never retried here
    """
    if max_id < 1:
        raise ValueError("max_id must be >= 1")
    excluded = frozenset(excluded)
    rng = rng or random.Random()
    logger = get_logger()

    draws = 0
    while max_draws is None or draws < max_draws:
        number = rng.randint(1, max_id)
        draws += 1
        logger.record_draw()

        try:
            seq = fetch_by_id(number, base_url=base_url, timeout=timeout, retries=retries)
        except NotFoundError:
            logger.record_rejection("not_found")
            continue

        if seq.has_any(excluded):
            logger.record_rejection("excluded")
            logger.debug(
                "Rejected sequence with excluded keyword",
                label=seq.label,
                keywords=[k.value for k in seq.keyword if k in excluded],
            )
            continue

        logger.info("Accepted sequence", label=seq.label, draws=draws)
        return seq

    logger.warning("Random sampling exhausted", draws=draws)
    raise SamplingExhaustedError(draws)

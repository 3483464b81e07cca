import requests

from .errors import PublishError
from .logger import get_logger
from .models import OEIS_URL, Sequence, format_term

DEFAULT_TIMEOUT = 15


def format_status(seq: Sequence) -> str:
    """Format a sequence as a status message: label, name, terms and link."""
    terms = ", ".join(format_term(n) for n in seq.data)
    return f"OEIS sequence {seq.label}\n{seq.name}\n\n{terms}\n\n{OEIS_URL}/A{seq.number}"


def post_status(instance_url: str, token: str, status: str, timeout: float = DEFAULT_TIMEOUT) -> dict:
    """Post a status to a Mastodon instance.

    Args:
        instance_url: Base URL of the instance, e.g. https://mastodon.social
        token: Bearer access token with write:statuses scope
        status: Status text

    Returns:
        The created status as returned by the API (empty dict if the body is not JSON)

    Raises:
        PublishError: on any HTTP error, timeout or request failure
    """
    logger = get_logger()
    url = f"{instance_url.rstrip('/')}/api/v1/statuses"
    try:
        resp = requests.post(
            url,
            headers={"Authorization": f"Bearer {token}"},
            data={"status": status},
            timeout=timeout,
        )
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        code = e.response.status_code if e.response is not None else None
        logger.error("Mastodon rejected status", url=url, status=code)
        raise PublishError(f"Mastodon request failed ({code}): {url}", status_code=code) from e
    except requests.exceptions.Timeout as e:
        logger.warning("Mastodon request timed out", url=url)
        raise PublishError("Mastodon request timed out. Try again later.") from e
    except requests.exceptions.RequestException as e:
        logger.error("Mastodon request error", url=url, error=str(e))
        raise PublishError(f"Mastodon request error: {e}") from e

    try:
        body = resp.json()
    except ValueError:
        body = {}
    logger.info("Posted status", url=body.get("url") if isinstance(body, dict) else None)
    return body if isinstance(body, dict) else {}

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_BASE_URL = "https://oeis.org"
DEFAULT_MAX_ID = 380_000
DEFAULT_TIMEOUT = 15.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_env(env_path: Optional[Path] = None) -> bool:
    """Load .env from the working directory if present.

    Variables already set in the process environment win over the file.
    Returns True if a file was loaded.
    """
    env_path = env_path or Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(dotenv_path=env_path, override=False)


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    max_id: int = DEFAULT_MAX_ID
    timeout: float = DEFAULT_TIMEOUT
    http_retries: int = 0
    max_draws: Optional[int] = None
    mastodon_instance_url: Optional[str] = None
    mastodon_access_token: Optional[str] = None
    log_level: str = "INFO"

    def require_mastodon(self) -> Tuple[str, str]:
        """Return (instance_url, token) or raise ConfigError naming what is missing."""
        if not self.mastodon_instance_url:
            raise ConfigError("MASTODON_INSTANCE_URL environment variable must be set")
        if not self.mastodon_access_token:
            raise ConfigError("MASTODON_ACCESS_TOKEN environment variable must be set")
        return self.mastodon_instance_url, self.mastodon_access_token


def _get_int(env: Mapping[str, str], name: str, default: Optional[int], minimum: int) -> Optional[int]:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables (os.environ by default)."""
    env = os.environ if environ is None else environ
    log_level = (env.get("LOG_LEVEL", "").strip() or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")
    return Settings(
        base_url=env.get("OEIS_BASE_URL", "").strip() or DEFAULT_BASE_URL,
        max_id=_get_int(env, "OEIS_MAX_ID", DEFAULT_MAX_ID, minimum=1),
        timeout=_get_float(env, "OEIS_TIMEOUT", DEFAULT_TIMEOUT),
        http_retries=_get_int(env, "OEIS_HTTP_RETRIES", 0, minimum=0),
        max_draws=_get_int(env, "OEIS_MAX_DRAWS", None, minimum=1),
        mastodon_instance_url=env.get("MASTODON_INSTANCE_URL") or None,
        mastodon_access_token=env.get("MASTODON_ACCESS_TOKEN") or None,
        log_level=log_level,
    )

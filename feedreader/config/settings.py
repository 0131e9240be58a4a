"""
Configuration settings for the feed reader.
Values are read from the environment (and an optional .env file) once at import time.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Base paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Load environment variables from .env file
load_dotenv(BASE_DIR / '.env')


def _int_from_env(name, default, minimum=None):
    """Read an integer environment variable, falling back to the default.

    Values below `minimum` are treated like invalid integers.
    """
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        print(f"[WARNING] {name}={raw!r} is not a valid integer, using default {default}")
        return default
    if minimum is not None and value < minimum:
        print(f"[WARNING] {name}={value} must be at least {minimum}, using default {default}")
        return default
    return value


# Feed source
RSS_URL = os.environ.get("RSS_URL", "").strip()

# Fetch configuration
DEFAULT_TIMEOUT_MS = 15000
REQUEST_TIMEOUT_MS = _int_from_env("RSS_TIMEOUT_MS", DEFAULT_TIMEOUT_MS, minimum=1)
FETCH_RETRIES = _int_from_env("RSS_RETRIES", 2, minimum=0)
USER_AGENT = 'Mozilla/5.0 (compatible; Feed Reader; +https://haku.sakura.ink)'
ACCEPT_HEADER = 'application/rss+xml, application/xml, text/xml, */*'

# Status codes worth another attempt
RETRYABLE_STATUS_CODES = (408, 409, 425, 429, 500, 502, 503, 504)

# Item normalization
DESCRIPTION_MAX_LENGTH = 200
NO_TITLE = 'No title'
NO_LINK = '#'
NO_DESCRIPTION = 'No description'

# Web server
WEB_HOST = '0.0.0.0'
WEB_PORT = 3000

if not RSS_URL:
    print("Warning: RSS_URL is not set. The feed endpoint will report a configuration error.")


@dataclass(frozen=True)
class FeedConfig:
    """Immutable per-process settings handed to the fetcher and the service."""

    rss_url: str = ''
    timeout_ms: int = REQUEST_TIMEOUT_MS
    retries: int = FETCH_RETRIES

    def __post_init__(self):
        # A request timeout must be positive
        if self.timeout_ms <= 0:
            print(f"[WARNING] timeout_ms={self.timeout_ms} must be positive, using default {REQUEST_TIMEOUT_MS}")
            object.__setattr__(self, 'timeout_ms', REQUEST_TIMEOUT_MS)
        if self.retries < 0:
            object.__setattr__(self, 'retries', 0)

    @property
    def timeout_seconds(self):
        return self.timeout_ms / 1000.0

    @classmethod
    def from_options(cls, rss_url, options=None):
        """Build a config from the recognized option names (timeoutMs, retries)."""
        options = options or {}
        return cls(
            rss_url=(rss_url or '').strip(),
            timeout_ms=int(options.get('timeoutMs', REQUEST_TIMEOUT_MS)),
            retries=int(options.get('retries', FETCH_RETRIES)),
        )


def load_config():
    """Return the process configuration built from the environment settings."""
    return FeedConfig(
        rss_url=RSS_URL,
        timeout_ms=REQUEST_TIMEOUT_MS,
        retries=FETCH_RETRIES,
    )

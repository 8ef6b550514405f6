"""
citemachine/config.py

Configuration, constants, and shared settings.

Module constants are the defaults. Request handlers and engines never read
them directly: they receive an AppConfig built by AppConfig.from_env()
(or constructed explicitly, e.g. in tests).
"""

import os
from dataclasses import dataclass
from typing import Dict, Tuple

# =============================================================================
# SERVER SETTINGS
# =============================================================================

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 3000
DEFAULT_CORS_ORIGIN = '*'

# =============================================================================
# HTTP SETTINGS
# =============================================================================

DEFAULT_TIMEOUT = 8  # seconds
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_MAX_BODY_BYTES = 5 * 1024 * 1024
DEFAULT_MAX_SCAN_CHARS = 500000

DEFAULT_HEADERS: Dict[str, str] = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Accept': 'text/html,application/xhtml+xml',
    'Accept-Language': 'en-US,en;q=0.5',
}

# =============================================================================
# DATE NAMES
# =============================================================================

# Fixed English names; strftime('%B') follows the process locale.
MONTH_NAMES: Tuple[str, ...] = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)


@dataclass(frozen=True)
class AppConfig:
    """Settings handed to create_app() and to the URL engine."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origin: str = DEFAULT_CORS_ORIGIN
    fetch_timeout: float = DEFAULT_TIMEOUT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    max_scan_chars: int = DEFAULT_MAX_SCAN_CHARS

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Build a config from environment variables.

        Variables:
            CITATION_HOST, PORT, CORS_ORIGIN,
            FETCH_TIMEOUT, MAX_REDIRECTS, MAX_BODY_BYTES, MAX_SCAN_CHARS
        """
        env = os.environ
        return cls(
            host=env.get('CITATION_HOST', DEFAULT_HOST),
            port=int(env.get('PORT', DEFAULT_PORT)),
            cors_origin=env.get('CORS_ORIGIN', DEFAULT_CORS_ORIGIN),
            fetch_timeout=float(env.get('FETCH_TIMEOUT', DEFAULT_TIMEOUT)),
            max_redirects=int(env.get('MAX_REDIRECTS', DEFAULT_MAX_REDIRECTS)),
            max_body_bytes=int(env.get('MAX_BODY_BYTES', DEFAULT_MAX_BODY_BYTES)),
            max_scan_chars=int(env.get('MAX_SCAN_CHARS', DEFAULT_MAX_SCAN_CHARS)),
        )

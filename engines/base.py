"""
citemachine/engines/base.py

Base class for engines that pull pages over HTTP.

Handles the session, browser-like headers, timeouts, the redirect cap and
the body-size cap. Every network-layer failure is raised as a FetchError
with a message fit to show the user.
"""

import re
import time
from typing import Optional
from urllib.parse import urlparse

import requests

from config import AppConfig, DEFAULT_HEADERS


class FetchError(Exception):
    """A page could not be retrieved. str(error) is user-facing."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.status_code = status_code


class BaseEngine:
    """
    Shared HTTP plumbing for page engines.

    One engine instance (and its session) serves one request; nothing is
    shared between concurrent requests.
    """

    name = "Base"

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()
        self.timeout = self.config.fetch_timeout
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.session.max_redirects = self.config.max_redirects

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _normalize_url(self, url: str) -> str:
        """Add a missing scheme and reject anything that is not http(s)."""
        url = (url or '').strip()
        if not url:
            raise FetchError("Invalid URL", 400)

        if not re.match(r'^[a-z][a-z0-9+.\-]*://', url, re.IGNORECASE):
            url = 'https://' + url

        try:
            parsed = urlparse(url)
            host = parsed.hostname
        except ValueError:
            raise FetchError("Invalid URL", 400)

        if parsed.scheme.lower() not in ('http', 'https') or not host:
            raise FetchError("Invalid URL", 400)

        return url

    def _make_request(self, url: str) -> requests.Response:
        """
        GET a URL, following redirects up to the configured cap.

        Returns:
            The open (streamed) response; the caller must close it

        Raises:
            FetchError: on timeout, redirect loop, DNS/connection failure,
                malformed URL or a non-2xx status
        """
        try:
            response = self.session.get(url, timeout=self.timeout, stream=True, allow_redirects=True)
        except requests.exceptions.Timeout:
            raise FetchError("Timed out", 504)
        except requests.exceptions.TooManyRedirects:
            raise FetchError("Too many redirects")
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL):
            raise FetchError("Invalid URL", 400)
        except requests.exceptions.ConnectionError:
            raise FetchError("Could not reach host")
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request failed: {e}")

        if not 200 <= response.status_code < 300:
            response.close()
            raise FetchError(f"Upstream returned HTTP {response.status_code}")

        return response

    def _read_text(self, response: requests.Response) -> str:
        """
        Read a streamed response body as text.

        The body is capped at max_body_bytes and the whole read is bounded by
        the fetch timeout. Decoded text is truncated to max_scan_chars.
        """
        deadline = time.monotonic() + self.timeout
        chunks = []
        size = 0

        try:
            for chunk in response.iter_content(chunk_size=64 * 1024):
                if not chunk:
                    continue
                size += len(chunk)
                if size > self.config.max_body_bytes:
                    raise FetchError("Page too large", 413)
                if time.monotonic() > deadline:
                    raise FetchError("Timed out", 504)
                chunks.append(chunk)
        except requests.exceptions.RequestException:
            raise FetchError("Connection dropped while reading the page")
        finally:
            response.close()

        body = b''.join(chunks)
        content_type = response.headers.get('Content-Type', '')
        encoding = response.encoding if 'charset=' in content_type.lower() and response.encoding else 'utf-8'
        try:
            text = body.decode(encoding, errors='replace')
        except LookupError:
            text = body.decode('utf-8', errors='replace')

        return text[:self.config.max_scan_chars]

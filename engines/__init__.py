"""
engines/ - Engines that retrieve pages and turn them into citation metadata.

Modules:
    base.py         - BaseEngine (HTTP session, timeouts, redirect/size caps), FetchError
    generic_url.py  - GenericURLEngine: fetch any web page, scrape its metadata
"""

from engines.base import BaseEngine, FetchError
from engines.generic_url import GenericURLEngine

__all__ = [
    'BaseEngine',
    'FetchError',
    'GenericURLEngine',
]

"""
citemachine/formatters/base.py

Base class for citation formatters.
"""

import re
from abc import ABC, abstractmethod

from models import CitationRequest, CitationResult


class BaseFormatter(ABC):
    """
    A citation style.

    Subclasses produce the reference-list entry (format) and the
    parenthetical in-text form (format_short) from one CitationRequest.
    Formatters hold no state between calls.
    """

    style = ""

    @abstractmethod
    def format(self, request: CitationRequest) -> str:
        """Format the full reference entry."""

    @abstractmethod
    def format_short(self, request: CitationRequest) -> str:
        """Format the in-text citation."""

    def cite(self, request: CitationRequest) -> CitationResult:
        return CitationResult(
            reference=self.format(request),
            in_text=self.format_short(request),
        )

    def _ensure_period(self, text: str) -> str:
        """Terminate a block with a period unless it already ends a sentence."""
        text = text.strip()
        if not text or text.endswith(('.', '?', '!')):
            return text
        return text + "."

    def _collapse(self, text: str) -> str:
        """Collapse whitespace runs to single spaces and trim."""
        return re.sub(r'\s+', ' ', text).strip()

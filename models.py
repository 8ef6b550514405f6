"""
citemachine/models.py

Core data models for the citation system.
All modules communicate through these standardized structures.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum


class SourceType(Enum):
    """Enumeration of supported source types."""
    WEBSITE = "website"
    BOOK = "book"
    JOURNAL = "journal"
    NEWSPAPER = "newspaper"
    YOUTUBE = "youtube"
    GENERIC = "generic"

    @classmethod
    def from_string(cls, s: Optional[str]) -> "SourceType":
        """Parse source type from string; anything unrecognized is GENERIC."""
        if not isinstance(s, str):
            return cls.GENERIC
        try:
            return cls(s.lower().strip())
        except ValueError:
            return cls.GENERIC

    @property
    def is_standalone(self) -> bool:
        """Standalone works get an italic title (and italic in-text title)."""
        return self in (SourceType.BOOK, SourceType.WEBSITE, SourceType.YOUTUBE)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass
class SourceMetadata:
    """
    Best-effort metadata scraped from a web page.

    Every field is a string and "" means "not found". year, month and day
    are either all set (from one parsed date) or all empty.
    """

    title: str = ""
    author: str = ""
    year: str = ""
    month: str = ""
    day: str = ""
    site_name: str = ""
    url: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Convert to the JSON shape returned by /api/fetch-meta."""
        return {
            'title': self.title,
            'author': self.author,
            'year': self.year,
            'month': self.month,
            'day': self.day,
            'siteName': self.site_name,
            'url': self.url,
        }


@dataclass
class CitationRequest:
    """
    User-confirmed fields for one reference.

    All fields are optional; formatters degrade to "Untitled", "(n.d.)"
    and title-first ordering when pieces are missing.
    """

    source_type: SourceType = SourceType.GENERIC
    authors: str = ""
    year: str = ""
    month: str = ""
    day: str = ""
    title: str = ""
    journal: str = ""
    volume: str = ""
    issue: str = ""
    pages: str = ""
    doi: str = ""
    publisher: str = ""
    site_name: str = ""
    website_url: str = ""
    edition: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CitationRequest":
        """Create from a request payload (camelCase or snake_case keys)."""
        def get(*keys: str) -> str:
            for key in keys:
                if d.get(key) is not None:
                    return _text(d[key])
            return ""

        return cls(
            source_type=SourceType.from_string(d.get('sourceType', d.get('source_type'))),
            authors=get('authors'),
            year=get('year'),
            month=get('month'),
            day=get('day'),
            title=get('title'),
            journal=get('journal'),
            volume=get('volume'),
            issue=get('issue'),
            pages=get('pages'),
            doi=get('doi'),
            publisher=get('publisher'),
            site_name=get('siteName', 'site_name'),
            website_url=get('websiteUrl', 'website_url'),
            edition=get('edition'),
        )


@dataclass(frozen=True)
class CitationResult:
    """Formatted reference entry plus its in-text form."""
    reference: str
    in_text: str

    def to_dict(self) -> Dict[str, str]:
        return {'reference': self.reference, 'inText': self.in_text}

"""
citemachine/extractors.py

Page metadata extraction logic.

Pulls title, author, publication date and site name out of raw HTML using
ordered regex fallbacks. No DOM is built: pages are untrusted and frequently
malformed, so every field is scanned independently and a miss on one field
never affects another.

Sources, in priority order per field:
1. Open Graph / article meta tags (either attribute order)
2. Twitter Card and standard meta tags
3. Schema.org JSON-LD fragments ("headline", "author", "datePublished")
4. Fallbacks: <title>, "By First Last" bylines, <time datetime>, rel="author"
5. Site name from the URL host when og:site_name is missing
"""

import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import List, Optional
from urllib.parse import urlparse

from config import MONTH_NAMES
from models import SourceMetadata


def _meta(attr: str, value: str, size: str) -> List[re.Pattern]:
    """
    Both attribute orders for a <meta> tag.

    e.g. <meta property="og:title" content="..."> and
         <meta content="..." property="og:title">

    The content value runs to the quote that opened it, so an apostrophe
    inside a double-quoted value (or a '"' inside a single-quoted one) is
    part of the value.
    """
    content = r'content=(?P<q>["\'])(?P<value>(?:(?!(?P=q))[^<>]){size})(?P=q)'.replace('{size}', size)
    return [
        re.compile(
            r'<meta[^>]+%s=["\']%s["\'][^>]+%s' % (attr, re.escape(value), content),
            re.IGNORECASE,
        ),
        re.compile(
            r'<meta[^>]+%s[^>]+%s=["\']%s["\']' % (content, attr, re.escape(value)),
            re.IGNORECASE,
        ),
    ]


TITLE_RULES: List[re.Pattern] = [
    *_meta('property', 'og:title', '{2,200}'),
    *_meta('name', 'twitter:title', '{2,200}'),
    re.compile(r'"headline"\s*:\s*"(?P<value>[^"]{2,200})"', re.IGNORECASE),
    re.compile(r'<title[^>]*>(?P<value>[^<]{2,200})</title>', re.IGNORECASE),
]

AUTHOR_RULES: List[re.Pattern] = [
    *_meta('name', 'author', '{2,100}'),
    *_meta('property', 'article:author', '{2,100}'),
    # JSON-LD: "author": [{"@type": "Person", "name": "..."}]
    re.compile(r'"author"\s*:\s*\[\s*\{\s*(?:"@type"\s*:\s*"[^"]*"\s*,\s*)?"name"\s*:\s*"(?P<value>[^"]{2,100})"', re.IGNORECASE),
    # JSON-LD: "author": {"@type": "Person", "name": "..."}
    re.compile(r'"author"\s*:\s*\{\s*(?:"@type"\s*:\s*"[^"]*"\s*,\s*)?"name"\s*:\s*"(?P<value>[^"]{2,100})"', re.IGNORECASE),
    re.compile(r'"author"\s*:\s*"(?P<value>[^"]{2,100})"', re.IGNORECASE),
    # Byline: "By Jane Doe", "by Jane Q. Doe" (case-sensitive on purpose)
    re.compile(r"\b[Bb]y\s+(?P<value>[A-Z][a-z\-']+(?:\s+[A-Z]\.?)?\s+[A-Z][a-z\-']+)"),
    re.compile(r'rel=["\']author["\'][^>]*>(?P<value>[A-Z][a-z]+ [A-Z][a-z]+)'),
]

DATE_RULES: List[re.Pattern] = [
    *_meta('property', 'article:published_time', '+'),
    *_meta('name', 'date', '+'),
    re.compile(r'<time[^>]+datetime=(?P<q>["\'])(?P<value>(?:(?!(?P=q))[^<>])+)(?P=q)', re.IGNORECASE),
    re.compile(r'"datePublished"\s*:\s*"(?P<value>[^"]+)"', re.IGNORECASE),
]

SITE_NAME_RULES: List[re.Pattern] = [
    *_meta('property', 'og:site_name', '+'),
]

ENTITIES = {
    '&amp;': '&',
    '&quot;': '"',
    '&#039;': "'",
    '&apos;': "'",
    '&lt;': '<',
    '&gt;': '>',
}
ENTITY_PATTERN = re.compile('|'.join(re.escape(e) for e in ENTITIES))

# Formats tried after ISO-8601 parsing fails
TEXT_DATE_PATTERNS = [
    '%B %d, %Y',  # December 7, 2025
    '%b %d, %Y',  # Dec 7, 2025
    '%d %B %Y',   # 7 December 2025
    '%d %b %Y',   # 7 Dec 2025
    '%m/%d/%Y',   # 12/07/2025
    '%Y/%m/%d',   # 2025/12/07
    '%Y-%m',      # 2025-12 (first of the month)
    '%Y',         # 2025 (January 1)
]

# "+0000" / "-0530" after a time of day
COMPACT_OFFSET = re.compile(r'(\d{2}:\d{2}(?::\d{2})?(?:\.\d+)?)([+-]\d{2})(\d{2})$')


def decode_entities(value: str) -> str:
    """
    Decode the handful of entities that show up in attribute values, then trim.

    Single pass: "&amp;quot;" becomes "&quot;", not '"'.
    """
    return ENTITY_PATTERN.sub(lambda m: ENTITIES[m.group(0)], value).strip()


def first_match(html: str, rules: List[re.Pattern]) -> str:
    """Return the first rule capture that is non-empty after decoding, else ""."""
    for rule in rules:
        match = rule.search(html)
        if match and match.group('value'):
            value = decode_entities(match.group('value'))
            if value:
                return value
    return ""


def parse_date(date_str: str) -> Optional[datetime]:
    """
    Parse a published-date string as a calendar timestamp.

    Accepts ISO 8601 dates and date-times (with "Z", "+HH:MM" or "+HHMM"
    offsets and fractional seconds), RFC 2822 dates as sent in HTTP headers
    ("Fri, 05 Mar 2021 10:00:00 GMT"), "YYYY-MM", "YYYY" and a few common
    English forms. Returns None if unparseable. The calendar date is the one
    written in the string; offsets are not converted to another zone.
    """
    if not date_str:
        return None

    date_str = date_str.strip()
    if not date_str:
        return None

    iso = date_str
    if iso[-1:] in ('Z', 'z'):
        iso = iso[:-1] + '+00:00'
    iso = COMPACT_OFFSET.sub(r'\1\2:\3', iso)
    # fromisoformat() before 3.11 only accepts 3 or 6 fractional digits
    iso = re.sub(r'(\.\d{1,6})\d*', lambda m: m.group(1).ljust(7, '0'), iso, count=1)
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass

    try:
        return parsedate_to_datetime(date_str)
    except (TypeError, ValueError, IndexError, OverflowError):
        pass

    for pattern in TEXT_DATE_PATTERNS:
        try:
            return datetime.strptime(date_str, pattern)
        except ValueError:
            continue

    return None


def site_name_from_url(page_url: str) -> str:
    """Host of page_url without a leading "www.", or "" if the URL is unusable."""
    try:
        host = urlparse(page_url).hostname
    except ValueError:
        return ""
    if not host:
        return ""
    return re.sub(r'^www\.', '', host)


def extract_meta(html: str, page_url: str) -> SourceMetadata:
    """
    Extract citation metadata from raw page HTML.

    Args:
        html: Page text (any size; callers bound it)
        page_url: URL the page came from, used for the site-name fallback

    Returns:
        SourceMetadata with "" for every field that was not found
    """
    html = html or ""

    meta = SourceMetadata(
        title=first_match(html, TITLE_RULES),
        author=first_match(html, AUTHOR_RULES),
        site_name=first_match(html, SITE_NAME_RULES) or site_name_from_url(page_url or ""),
        url=page_url or "",
    )

    published = parse_date(first_match(html, DATE_RULES))
    if published:
        meta.year = str(published.year)
        meta.month = MONTH_NAMES[published.month - 1]
        meta.day = str(published.day)

    return meta

"""
citemachine/formatters/apa.py

APA (7th edition) citation formatter.

Builds a reference entry and an in-text citation from user-confirmed
fields. Supports websites, books, journal articles, newspaper articles and
YouTube videos; anything else gets a generic author/year/title/publisher
entry. Emphasis is emitted as <em> markup for the browser to render.
"""

import re
from typing import List, Union

from models import CitationRequest, CitationResult, SourceType
from formatters.base import BaseFormatter
from utils.authors import split_authors, get_last_name

# "Lastname, F." (optionally more initials after it)
ALREADY_FORMATTED = re.compile(r"^[\w\-']+,\s*[A-Z]\.")

TRAILING_EMPHASIS = re.compile(r'(</em>)+$')

DOI_PREFIXES = [
    'https://doi.org/',
    'http://doi.org/',
    'https://dx.doi.org/',
    'http://dx.doi.org/',
    'doi.org/',
    'dx.doi.org/',
    'doi:',
]


class APAFormatter(BaseFormatter):
    """
    APA 7th Edition formatter.

    Key features:
    - Author names: Last, F. M. format, "&" before the final author,
      19 authors + ". . ." + last author for 21 or more
    - Date in parentheses after author (title first when there is no author)
    - First letter of the title capitalized, the rest kept as typed
    - Standalone works (books, web pages, videos) in italics
    """

    style = "APA 7"

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _to_sentence_case(self, title: str) -> str:
        """
        Capitalize the first character of a title.

        The rest is left as typed: proper nouns and acronyms can't be told
        apart from stray capitals, so lowercasing them would do more harm.
        """
        if not title:
            return ""
        return title[0].upper() + title[1:]

    def _normalize_doi(self, doi: str) -> str:
        """
        Normalize DOI to just the identifier part.

        Examples:
        - "10.1234/abc" → "10.1234/abc"
        - "https://doi.org/10.1234/abc" → "10.1234/abc"
        - "http://dx.doi.org/10.1234/abc" → "10.1234/abc"
        - "doi:10.1234/abc" → "10.1234/abc"
        """
        if not doi:
            return ""

        doi = doi.strip()

        for prefix in DOI_PREFIXES:
            if doi.lower().startswith(prefix):
                doi = doi[len(prefix):]
                break

        return doi.strip()

    def _format_doi_url(self, doi: str) -> str:
        """Format DOI as full URL for APA 7."""
        normalized = self._normalize_doi(doi)
        if normalized:
            return f"https://doi.org/{normalized}"
        return ""

    def _format_edition(self, edition: str) -> str:
        """'2nd', '2nd ed.' and '2nd edition' all become '(2nd ed.)'."""
        edition = re.sub(r'\s*\b(ed\.?|edition)$', '', edition.strip(), flags=re.IGNORECASE)
        return f"({edition} ed.)" if edition else ""

    def _title(self, r: CitationRequest) -> str:
        return self._to_sentence_case(r.title.strip() or "Untitled")

    def _title_block(self, title: str, italic: bool, suffix: str = "") -> str:
        """Title (optionally italic) plus suffix, closed with a period."""
        text = f"<em>{title}</em>" if italic else title
        if suffix:
            return f"{text} {suffix}."
        return text if title.endswith(('.', '?', '!')) else text + "."

    def _year_block(self, r: CitationRequest) -> str:
        year = r.year.strip()
        return f"({year})." if year else "(n.d.)."

    def _date_block(self, r: CitationRequest) -> str:
        """(Year, Month Day) / (Year, Month) / (Year) / (n.d.), with period."""
        year, month, day = r.year.strip(), r.month.strip(), r.day.strip()
        if not year:
            return "(n.d.)."
        if month and day:
            return f"({year}, {month} {day})."
        if month:
            return f"({year}, {month})."
        return f"({year})."

    def _lead(self, r: CitationRequest, date_block: str, title_block: str) -> List[str]:
        """
        Opening blocks: Author. (Date). Title.

        With no author the title moves into the author position:
        Title. (Date).
        """
        authors = self.format_authors(r.authors)
        if authors:
            return [self._ensure_period(authors), date_block, title_block]
        return [title_block, date_block]

    def _append_link(self, ref: str, link: str) -> str:
        """
        Drop one trailing period, then add the link.

        Without a link the entry is closed with a period, unless it already
        ends a sentence (an italic "?" or "!" title counts).
        """
        ref = self._collapse(ref)
        if link:
            if ref.endswith('.'):
                ref = ref[:-1]
            return f"{ref} {link}"
        if TRAILING_EMPHASIS.sub('', ref).endswith(('.', '?', '!')):
            return ref
        return f"{ref}."

    # =========================================================================
    # AUTHORS
    # =========================================================================

    def _format_one_author(self, name: str) -> str:
        """
        Convert one name to 'Last, F. M.'

        Handles:
        - "First Last" → "Last, F."
        - "First Middle Last" → "Last, F. M."
        - "Last, First Middle" → "Last, F. M."
        - "Last, F. M." → "Last, F. M." (already correct)
        - "UNESCO" → "UNESCO" (single word: organization)
        """
        name = name.strip()

        if ALREADY_FORMATTED.match(name):
            return name

        if ',' in name:
            last_name, given = name.split(',', 1)
            initials = " ".join(p[0].upper() + "." for p in given.split())
            return f"{last_name.strip()}, {initials}" if initials else last_name.strip()

        words = name.split()
        if len(words) == 1:
            return words[0]

        last = words[-1]
        initials = " ".join(w[0].upper() + "." for w in words[:-1])
        return f"{last}, {initials}"

    def format_authors(self, raw: str) -> str:
        """
        Format a free-text author field in APA style.

        Rules:
        - 1 author: as is
        - 2 authors: "A, & B"
        - Up to 20 authors: list all, "&" before the last
        - 21+: first 19, ". . .", last author
        """
        names = [self._format_one_author(n) for n in split_authors(raw)]

        if not names:
            return ""
        if len(names) == 1:
            return names[0]
        if len(names) == 2:
            return f"{names[0]}, & {names[1]}"
        if len(names) >= 21:
            return ", ".join(names[:19]) + ", . . . " + names[-1]
        return ", ".join(names[:-1]) + f", & {names[-1]}"

    # =========================================================================
    # IN-TEXT
    # =========================================================================

    def format_short(self, r: CitationRequest) -> str:
        """Format the parenthetical citation: (Author, Year)."""
        year = r.year.strip() or "n.d."
        names = split_authors(r.authors)

        if not names:
            short_title = " ".join((r.title.strip() or "Untitled").split()[:4])
            short_title = self._to_sentence_case(short_title)
            if r.source_type.is_standalone:
                return f"(<em>{short_title}</em>, {year})"
            return f'("{short_title}," {year})'

        last_name = get_last_name(names[0])
        if len(names) == 1:
            return f"({last_name}, {year})"
        if len(names) == 2:
            return f"({last_name} & {get_last_name(names[1])}, {year})"
        return f"({last_name} et al., {year})"

    # =========================================================================
    # REFERENCE
    # =========================================================================

    def format(self, r: CitationRequest) -> str:
        """Format a full APA-style reference entry."""
        if r.source_type == SourceType.WEBSITE:
            return self._format_website(r)
        elif r.source_type == SourceType.BOOK:
            return self._format_book(r)
        elif r.source_type == SourceType.JOURNAL:
            return self._format_journal(r)
        elif r.source_type == SourceType.NEWSPAPER:
            return self._format_newspaper(r)
        elif r.source_type == SourceType.YOUTUBE:
            return self._format_youtube(r)
        else:
            return self._format_generic(r)

    def _format_website(self, r: CitationRequest) -> str:
        """
        APA web page.

        Pattern: Author. (Year, Month Day). Title. Site Name. URL
        URLs are never followed by a period.
        """
        parts = self._lead(r, self._date_block(r), self._title_block(self._title(r), italic=True))

        if r.site_name.strip():
            parts.append(self._ensure_period(r.site_name))

        if r.website_url.strip():
            parts.append(r.website_url.strip())

        return self._collapse(" ".join(parts))

    def _format_book(self, r: CitationRequest) -> str:
        """
        APA book.

        Pattern: Author, A. A. (Year). Title (Edition). Publisher. DOI
        """
        title_block = self._title_block(self._title(r), italic=True, suffix=self._format_edition(r.edition))
        parts = self._lead(r, self._year_block(r), title_block)

        # Publisher (APA 7: no location, just publisher name)
        if r.publisher.strip():
            parts.append(self._ensure_period(r.publisher))

        return self._append_link(" ".join(parts), self._format_doi_url(r.doi))

    def _format_journal(self, r: CitationRequest) -> str:
        """
        APA journal article.

        Pattern: Author, A. A. (Year). Title. Journal, Volume(Issue), Pages. DOI
        """
        parts = self._lead(r, self._year_block(r), self._title_block(self._title(r), italic=False))

        # Journal (italics), Volume (italics)(Issue), Pages
        source = ""
        if r.journal.strip():
            source += f"<em>{r.journal.strip()}</em>"
        if r.volume.strip():
            source += f", <em>{r.volume.strip()}</em>"
        if r.issue.strip():
            source += f"({r.issue.strip()})"
        if r.pages.strip():
            source += f", {r.pages.strip()}"

        source = source.lstrip(", ")
        if source:
            parts.append(source + ".")

        return self._append_link(" ".join(parts), self._format_doi_url(r.doi))

    def _format_newspaper(self, r: CitationRequest) -> str:
        """
        APA newspaper article.

        Pattern: Author, A. A. (Year, Month Day). Title. Publication. URL
        """
        parts = self._lead(r, self._date_block(r), self._title_block(self._title(r), italic=False))

        # Publication (italics); scraped site name stands in for it
        outlet = r.journal.strip() or r.site_name.strip()
        if outlet:
            parts.append(f"<em>{outlet}</em>.")

        return self._append_link(" ".join(parts), r.website_url.strip())

    def _format_youtube(self, r: CitationRequest) -> str:
        """
        APA YouTube video.

        Pattern: Uploader. (Year, Month Day). Title [Video]. YouTube. URL
        """
        title_block = self._title_block(self._title(r), italic=True, suffix="[Video]")
        parts = self._lead(r, self._date_block(r), title_block)
        parts.append("YouTube.")

        if r.website_url.strip():
            parts.append(r.website_url.strip())

        return self._collapse(" ".join(parts))

    def _format_generic(self, r: CitationRequest) -> str:
        """
        Fallback for unrecognized source types.

        Pattern: Author. (Year). Title. Publisher.
        """
        parts = self._lead(r, self._year_block(r), self._title_block(self._title(r), italic=True))

        if r.publisher.strip():
            parts.append(self._ensure_period(r.publisher))

        return self._collapse(" ".join(parts))


# =============================================================================
# MODULE-LEVEL API
# =============================================================================

_formatter = APAFormatter()


def format_authors(raw: str) -> str:
    """Format a free-text author field as an APA author list."""
    return _formatter.format_authors(raw or "")


def build_in_text(authors: str, year: str, title: str, source_type: Union[SourceType, str, None]) -> str:
    """Build the APA in-text citation for the given fields."""
    if not isinstance(source_type, SourceType):
        source_type = SourceType.from_string(source_type)
    request = CitationRequest(
        source_type=source_type,
        authors=authors or "",
        year=year or "",
        title=title or "",
    )
    return _formatter.format_short(request)


def build_citation(data: Union[CitationRequest, dict]) -> CitationResult:
    """
    Build the reference entry and in-text citation.

    Args:
        data: CitationRequest, or a request payload dict (camelCase keys)

    Returns:
        CitationResult(reference, in_text)
    """
    if not isinstance(data, CitationRequest):
        data = CitationRequest.from_dict(data or {})
    return _formatter.cite(data)

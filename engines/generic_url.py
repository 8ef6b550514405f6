"""
citemachine/engines/generic_url.py

Generic URL metadata extraction via HTML scraping.

This engine fetches a URL and runs the regex extractor over the page text
(see extractors.py for the rule order). It is the only place where the
network is touched; the extractor itself never does I/O.
"""

from engines.base import BaseEngine, FetchError
from extractors import extract_meta
from models import SourceMetadata


class GenericURLEngine(BaseEngine):
    """
    Generic URL metadata extractor.

    Fetches any http(s) URL and extracts title, author, date and site name
    from its meta tags, JSON-LD fragments and page content.
    """

    name = "Generic URL"

    def fetch_by_url(self, url: str) -> SourceMetadata:
        """
        Fetch a URL and extract citation metadata.

        Args:
            url: The URL to fetch; "https://" is assumed when no scheme is given

        Returns:
            SourceMetadata with extracted information

        Raises:
            FetchError: if the page could not be retrieved
        """
        url = self._normalize_url(url)

        print(f"[{self.name}] Fetching: {url}")

        response = self._make_request(url)

        # Check content type - only scan HTML
        content_type = response.headers.get('Content-Type', '')
        if content_type and 'html' not in content_type.lower():
            response.close()
            print(f"[{self.name}] Not HTML content: {content_type}")
            raise FetchError("Not an HTML page", 415)

        html = self._read_text(response)
        meta = extract_meta(html, url)

        print(f"[{self.name}] Found title={bool(meta.title)} author={bool(meta.author)} date={bool(meta.year)}")
        return meta

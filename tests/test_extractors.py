"""Tests for regex page-metadata extraction."""

import pytest

from extractors import decode_entities, extract_meta, parse_date, site_name_from_url
from formatters.apa import build_citation
from models import CitationRequest, SourceMetadata, SourceType


# ── Full Page ────────────────────────────────────────────────────────


def test_extract_article_prefers_meta_tags(article_html):
    meta = extract_meta(article_html, "https://www.example.com/news/mars")
    assert meta.title == "Scientists Find Water & Ice on Mars"
    assert meta.author == "Jane Q. Doe"
    assert (meta.year, meta.month, meta.day) == ("2021", "March", "5")
    assert meta.site_name == "Example News"
    assert meta.url == "https://www.example.com/news/mars"


def test_extract_returns_source_metadata(article_html):
    assert isinstance(extract_meta(article_html, "https://example.com"), SourceMetadata)


def test_page_without_metadata_only_has_host():
    meta = extract_meta("<html><body><p>nothing to see</p></body></html>", "https://www.example.org/x")
    assert meta.title == ""
    assert meta.author == ""
    assert (meta.year, meta.month, meta.day) == ("", "", "")
    assert meta.site_name == "example.org"


def test_empty_html():
    meta = extract_meta("", "https://blog.example.net/post")
    assert meta.title == ""
    assert meta.site_name == "blog.example.net"


# ── Title ────────────────────────────────────────────────────────────


def test_title_content_before_property():
    html = "<meta content='Reverse Order Title' property='og:title'>"
    assert extract_meta(html, "https://e.com").title == "Reverse Order Title"


def test_title_og_beats_title_tag():
    html = '<title>Page Title</title><meta property="og:title" content="Card Title">'
    assert extract_meta(html, "https://e.com").title == "Card Title"


def test_title_falls_back_to_twitter():
    html = '<title>Page Title</title><meta name="twitter:title" content="Tweet Title">'
    assert extract_meta(html, "https://e.com").title == "Tweet Title"


def test_title_twitter_content_first():
    html = '<meta content="Tweet Title" name="twitter:title">'
    assert extract_meta(html, "https://e.com").title == "Tweet Title"


def test_title_falls_back_to_json_headline():
    html = '<title>Page Title</title><script>{"headline": "Structured Title"}</script>'
    assert extract_meta(html, "https://e.com").title == "Structured Title"


def test_title_falls_back_to_title_tag():
    html = '<html><head><title lang="en">  Plain Title  </title></head></html>'
    assert extract_meta(html, "https://e.com").title == "Plain Title"


def test_title_too_short_is_ignored():
    assert extract_meta("<title>A</title>", "https://e.com").title == ""


def test_blank_capture_falls_through_to_next_rule():
    html = '<meta property="og:title" content="   "><title>Real Title</title>'
    assert extract_meta(html, "https://e.com").title == "Real Title"


def test_title_entities_decoded():
    html = '<meta property="og:title" content="It&#039;s &quot;fine&quot; &lt;really&gt;">'
    assert extract_meta(html, "https://e.com").title == 'It\'s "fine" <really>'


def test_title_apostrophe_inside_double_quotes():
    html = '<meta property="og:title" content="It\'s a Wonderful Life">'
    assert extract_meta(html, "https://e.com").title == "It's a Wonderful Life"


def test_title_apostrophe_content_first():
    html = '<meta content="Don\'t Panic" property="og:title">'
    assert extract_meta(html, "https://e.com").title == "Don't Panic"


def test_title_double_quote_inside_single_quotes():
    html = '<meta property=\'og:title\' content=\'The "Best" Pizza\'>'
    assert extract_meta(html, "https://e.com").title == 'The "Best" Pizza'


# ── Author ───────────────────────────────────────────────────────────


def test_author_apostrophe_inside_double_quotes():
    html = '<meta name="author" content="Conan O\'Brien">'
    meta = extract_meta(html, "https://e.com")
    assert meta.author == "Conan O'Brien"
    assert build_citation({"sourceType": "website", "authors": meta.author, "title": "t"}).in_text == "(O'Brien, n.d.)"


def test_author_meta_content_first():
    html = '<meta content="Ann Lee" name="author">'
    assert extract_meta(html, "https://e.com").author == "Ann Lee"


def test_author_article_author_tag():
    html = '<meta property="article:author" content="Bo Chen">'
    assert extract_meta(html, "https://e.com").author == "Bo Chen"


def test_author_json_array_of_objects():
    html = '{"author": [{"@type": "Person", "name": "Ada Lovelace"}, {"name": "Charles Babbage"}]}'
    assert extract_meta(html, "https://e.com").author == "Ada Lovelace"


def test_author_json_object():
    html = '{"author": {"@type": "Person", "name": "Grace Hopper"}}'
    assert extract_meta(html, "https://e.com").author == "Grace Hopper"


def test_author_json_object_without_type():
    html = '{"author":{"name":"Alan Turing"}}'
    assert extract_meta(html, "https://e.com").author == "Alan Turing"


def test_author_json_string():
    html = '{"author": "Edsger Dijkstra"}'
    assert extract_meta(html, "https://e.com").author == "Edsger Dijkstra"


def test_author_byline():
    html = "<div class='byline'>By John Smith | Staff Writer</div>"
    assert extract_meta(html, "https://e.com").author == "John Smith"


def test_author_byline_with_middle_initial():
    html = "<p>Story by Jane Q. Public</p>"
    assert extract_meta(html, "https://e.com").author == "Jane Q. Public"


def test_author_byline_needs_capitalized_names():
    html = "<p>written by hand in the garden</p>"
    assert extract_meta(html, "https://e.com").author == ""


def test_author_rel_link():
    html = '<a rel="author" href="/staff/mary">Mary Major</a>'
    assert extract_meta(html, "https://e.com").author == "Mary Major"


def test_author_meta_beats_json():
    html = '<meta name="author" content="Meta Author">{"author": "Json Author"}'
    assert extract_meta(html, "https://e.com").author == "Meta Author"


# ── Date ─────────────────────────────────────────────────────────────


def test_date_published_time_content_first():
    html = '<meta content="2020-07-04T09:00:00+02:00" property="article:published_time">'
    meta = extract_meta(html, "https://e.com")
    assert (meta.year, meta.month, meta.day) == ("2020", "July", "4")


def test_date_generic_meta():
    html = '<meta name="date" content="2019-12-31">'
    meta = extract_meta(html, "https://e.com")
    assert (meta.year, meta.month, meta.day) == ("2019", "December", "31")


def test_date_time_element():
    html = '<time class="pub" datetime="2018-02-09">Feb 9</time>'
    meta = extract_meta(html, "https://e.com")
    assert (meta.year, meta.month, meta.day) == ("2018", "February", "9")


def test_date_json_date_published_with_fraction():
    html = '{"datePublished": "2017-11-23T08:00:00.123-05:00"}'
    meta = extract_meta(html, "https://e.com")
    assert (meta.year, meta.month, meta.day) == ("2017", "November", "23")


def test_date_http_header_style():
    html = '<meta name="date" content="Fri, 05 Mar 2021 10:00:00 GMT">'
    meta = extract_meta(html, "https://e.com")
    assert (meta.year, meta.month, meta.day) == ("2021", "March", "5")


def test_date_compact_offset():
    html = '<meta property="article:published_time" content="2021-03-05T10:00:00+0000">'
    meta = extract_meta(html, "https://e.com")
    assert (meta.year, meta.month, meta.day) == ("2021", "March", "5")


def test_date_year_and_month_only():
    html = '{"datePublished": "2021-03"}'
    meta = extract_meta(html, "https://e.com")
    assert (meta.year, meta.month, meta.day) == ("2021", "March", "1")


def test_unparseable_date_leaves_all_parts_empty():
    html = '<time datetime="sometime last week">'
    meta = extract_meta(html, "https://e.com")
    assert (meta.year, meta.month, meta.day) == ("", "", "")


def test_invalid_calendar_date_leaves_all_parts_empty():
    html = '<meta name="date" content="2020-02-30">'
    meta = extract_meta(html, "https://e.com")
    assert (meta.year, meta.month, meta.day) == ("", "", "")


@pytest.mark.parametrize("value, expected", [
    ("2021-03-05", (2021, 3, 5)),
    ("2021-03-05T23:59:59Z", (2021, 3, 5)),
    ("2021-03-05T10:00:00.5Z", (2021, 3, 5)),
    ("2021-03-05 10:00:00", (2021, 3, 5)),
    ("March 5, 2021", (2021, 3, 5)),
    ("5 March 2021", (2021, 3, 5)),
    ("Mar 5, 2021", (2021, 3, 5)),
    ("2021-03-05T10:00:00+0000", (2021, 3, 5)),
    ("2021-03-05T23:30:00-0500", (2021, 3, 5)),
    ("Fri, 05 Mar 2021 10:00:00 GMT", (2021, 3, 5)),
    ("Fri, 05 Mar 2021 23:30:00 -0500", (2021, 3, 5)),
    ("2021-03", (2021, 3, 1)),
    ("2021", (2021, 1, 1)),
])
def test_parse_date_formats(value, expected):
    parsed = parse_date(value)
    assert (parsed.year, parsed.month, parsed.day) == expected


def test_parse_date_rejects_garbage():
    assert parse_date("") is None
    assert parse_date("yesterday") is None


# ── Site Name ────────────────────────────────────────────────────────


def test_site_name_tag():
    html = '<meta property="og:site_name" content="The Example Times">'
    assert extract_meta(html, "https://www.example.com").site_name == "The Example Times"


def test_site_name_from_host_strips_www():
    assert site_name_from_url("https://WWW.Example.COM/path?q=1") == "example.com"


def test_site_name_keeps_other_subdomains():
    assert site_name_from_url("http://news.example.co.uk/a") == "news.example.co.uk"


def test_bad_url_blanks_site_name_only():
    html = '<meta property="og:title" content="Still Extracted">'
    meta = extract_meta(html, "http://[::1")
    assert meta.site_name == ""
    assert meta.title == "Still Extracted"


def test_url_without_scheme_has_no_host():
    assert site_name_from_url("not a url") == ""


# ── Entity Decoding ──────────────────────────────────────────────────


def test_decode_entities_all_supported():
    assert decode_entities("&amp;&quot;&#039;&apos;&lt;&gt;") == "&\"''<>"


def test_decode_entities_single_pass():
    assert decode_entities("&amp;quot;") == "&quot;"


def test_decode_entities_trims():
    assert decode_entities("  Title \n") == "Title"


def test_unknown_entities_left_alone():
    assert decode_entities("caf&eacute;") == "caf&eacute;"


# ── Extractor → Formatter ────────────────────────────────────────────


@pytest.mark.parametrize("html", [
    "",
    "<title>Only A Title</title>",
    '<meta name="author" content="Jane Doe">',
    '<meta name="date" content="2020-01-02">',
])
def test_extracted_fields_always_format(html):
    meta = extract_meta(html, "https://www.example.com/page")
    request = CitationRequest(
        source_type=SourceType.WEBSITE,
        authors=meta.author,
        year=meta.year,
        month=meta.month,
        day=meta.day,
        title=meta.title,
        site_name=meta.site_name,
        website_url=meta.url,
    )
    result = build_citation(request)
    assert result.reference
    assert result.in_text

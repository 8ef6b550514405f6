"""
citemachine/utils/authors.py

Author-list tokenizer shared by the reference and in-text formatters.

A raw author field is whatever the user typed (or what the page scraper
found), e.g. "Jane Doe; John Smith", "Jane Doe and John Smith" or
"Jane Doe & John Smith".

Known limitation: "and" always splits, so "Johnson and Johnson" becomes two
names; an ampersand splits whenever a capital letter follows it, so "AT&T"
splits while "Procter & gamble" does not.
"""

import re
from typing import List

# ';' | whitespace-delimited "and" (any case) | '&' before a capital letter
AUTHOR_SEPARATOR = re.compile(r"\s*;\s*|\s+(?i:and)\s+|\s*&\s*(?=[A-Z])")


def split_authors(raw: str) -> List[str]:
    """
    Split a free-text author field into individual names.

    Returns names in their original order, trimmed, with empty pieces
    dropped. An empty or blank field gives an empty list.
    """
    if not raw or not raw.strip():
        return []
    return [part.strip() for part in AUTHOR_SEPARATOR.split(raw) if part and part.strip()]


def get_last_name(name: str) -> str:
    """Surname of one name: text before the first comma, else the last word."""
    name = name.strip()
    if ',' in name:
        return name.split(',', 1)[0].strip()
    words = name.split()
    return words[-1] if words else ""

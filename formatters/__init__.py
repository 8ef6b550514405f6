"""
formatters/ - Output formatters for citation styles.

Modules:
    base.py - BaseFormatter ABC
    apa.py  - APAFormatter (APA 7) plus build_citation / format_authors / build_in_text
"""

from formatters.apa import APAFormatter, build_citation, build_in_text, format_authors

__all__ = [
    'APAFormatter',
    'build_citation',
    'build_in_text',
    'format_authors',
]

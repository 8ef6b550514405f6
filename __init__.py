"""
CiteMachine 1.0

APA 7 citation machine: scrapes metadata from a web page to prefill a
citation form, then formats the confirmed fields into a reference entry
and an in-text citation.

Modules:
    extractors.py - Regex metadata extraction from raw HTML
    engines/      - Page retrieval (HTTP) feeding the extractor
    formatters/   - APA 7 reference and in-text formatting
    utils/        - Shared helpers (author-list tokenizer)
    app.py        - Flask API: /api/fetch-meta, /api/generate
"""

__version__ = "1.0.0"

"""
utils/ - Shared helper functions used across the system.

Modules:
    authors.py  - Split free-text author lists, pull surnames
"""

from utils.authors import split_authors, get_last_name

__all__ = [
    'split_authors',
    'get_last_name',
]

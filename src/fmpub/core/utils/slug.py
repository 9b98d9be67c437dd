"""Slug generation for output file names and index entries"""

import re
import unicodedata


_NON_SLUG_RE = re.compile(r'[^a-z0-9]+')


def slugify(text: str) -> str:
    """Fold text to ASCII and join its alphanumeric runs with single hyphens.

    'Pattern Matching in F#' -> 'pattern-matching-in-f'
    'Café_notes' -> 'cafe-notes'
    """
    folded = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    return _NON_SLUG_RE.sub('-', folded.lower()).strip('-')

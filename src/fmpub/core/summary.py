"""Summary, word count, and reading time derived from a post body"""

import math
from dataclasses import dataclass

from markdown_it import MarkdownIt


SUMMARY_DIVIDER = '<!--more-->'
WORDS_PER_MINUTE = 213


@dataclass(frozen=True)
class BodyStats:
    summary:      str
    word_count:   int
    reading_time: int   # minutes, rounded up


def _make_parser() -> MarkdownIt:
    """Fresh parser per call; instances are not shared across build threads."""
    return MarkdownIt('gfm-like', options_update={"linkify": False})


def _is_divider(token) -> bool:
    """Raw HTML holding <!--more-->; code spans and fences are never HTML tokens."""
    return token.type in ('html_block', 'html_inline') and SUMMARY_DIVIDER in token.content


def _inline_text(token, stop_at_divider: bool = False) -> str:
    """Flatten an inline token to plain text (link text kept, markup and images dropped)."""
    parts = []
    for child in token.children or []:
        if stop_at_divider and _is_divider(child):
            break
        if child.type in ('text', 'code_inline'):
            parts.append(child.content)
        elif child.type in ('softbreak', 'hardbreak'):
            parts.append(' ')
    return ''.join(parts)


def _count_words(tokens: list) -> int:
    words = 0
    for tok in tokens:
        if tok.type == 'inline':
            words += len(_inline_text(tok).split())
        elif tok.type in ('fence', 'code_block'):
            words += len(tok.content.split())
    return words


def _summary(tokens: list, length: int) -> str:
    """Paragraph text before the first divider, else the first `length` words."""
    paragraphs = []
    prev = None
    for tok in tokens:
        if _is_divider(tok):
            return ' '.join(' '.join(paragraphs).split())
        if tok.type == 'inline':
            in_paragraph = prev is not None and prev.type == 'paragraph_open'
            if in_paragraph:
                paragraphs.append(_inline_text(tok, stop_at_divider=True))
            if any(_is_divider(child) for child in tok.children or []):
                return ' '.join(' '.join(paragraphs).split())
        prev = tok
    return ' '.join(' '.join(paragraphs).split()[:length])


def summarize(markdown: str, length: int = 70) -> str:
    """Plain-text summary: everything before <!--more-->, else the first `length` words."""
    return _summary(_make_parser().parse(markdown), length)


def body_stats(markdown: str, summary_length: int = 70) -> BodyStats:
    tokens = _make_parser().parse(markdown)
    words = _count_words(tokens)
    return BodyStats(
        summary=_summary(tokens, summary_length),
        word_count=words,
        reading_time=math.ceil(words / WORDS_PER_MINUTE),
    )

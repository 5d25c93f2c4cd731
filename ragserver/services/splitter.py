"""
Content splitting for /embed

Paragraphs are separated by blank lines; sentences end at terminal
punctuation (ASCII followed by whitespace, CJK full-width immediately).
Empty chunks are dropped and order is preserved.
"""

import re
from enum import Enum

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+|(?<=[。！？])")


class SplitCriteria(str, Enum):
    NONE = "none"
    PARAGRAPH = "paragraph"
    SENTENCE = "sentence"


def split_paragraphs(text: str) -> list[str]:
    return [p.strip() for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def split_sentences(text: str) -> list[str]:
    sentences: list[str] = []
    for paragraph in split_paragraphs(text):
        sentences.extend(s.strip() for s in _SENTENCE_END.split(paragraph) if s.strip())
    return sentences


def split_content(text: str, criteria: SplitCriteria | str) -> list[str]:
    """
    Split `text` into chunks to embed one by one

    Args:
        text: Content to split
        criteria: none | paragraph | sentence

    Returns:
        Non-empty chunks in document order; `[text]` for `none`
    """
    criteria = SplitCriteria(criteria)
    if criteria is SplitCriteria.PARAGRAPH:
        return split_paragraphs(text)
    if criteria is SplitCriteria.SENTENCE:
        return split_sentences(text)
    return [text] if text.strip() else []

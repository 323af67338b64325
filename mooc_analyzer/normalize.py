"""
Text normalization helpers shared by the record model and the queries.

The source encoding occasionally leaves a literal quote character at the
start or end of free-text fields, and instructor lists are stored as one
comma separated string.  Both are handled here so every consumer sees
the same clean values.
"""

from __future__ import annotations

from typing import List

from .config import INSTITUTION_SUBJECT_SEPARATOR, INSTRUCTOR_SEPARATOR, QUOTE_CHAR


def strip_quote_artifacts(text: str) -> str:
    """
    Drop one leading and one trailing quote character, if present.

    Only a single layer is removed; quotes inside the text are kept.
    """
    if not text:
        return ""
    if text.startswith(QUOTE_CHAR):
        text = text[1:]
    if text.endswith(QUOTE_CHAR):
        text = text[:-1]
    return text


def split_instructors(raw: str) -> List[str]:
    """
    Split an instructor field into trimmed names.

    Blank entries (an empty field, or ``"A, , B"``) are dropped, so a
    course without instructors yields an empty list.
    """
    if not raw:
        return []
    names = [name.strip() for name in raw.split(INSTRUCTOR_SEPARATOR)]
    return [name for name in names if name]


def institution_subject_key(institution: str, subject: str) -> str:
    return f"{institution}{INSTITUTION_SUBJECT_SEPARATOR}{subject}"

"""
Tag Manager for prompt text

Provides the text normalization rules used when prompt text is turned back
into tag names. Catalog matching is handled in reconciler.py.

Two splitting modes exist:
- normalize_prompt_text: full cleanup, run when editing is committed (blur)
- split_live_text: light split, run on every keystroke while typing
"""

import re
from typing import Iterable, List

SEPARATOR = ", "

FULL_WIDTH_COMMA = "，"

# Comma plus at most one whitespace character
_COMMA_RE = re.compile(r",(\s?)")

# Two or more commas with any whitespace between them
_REPEATED_SEPARATOR_RE = re.compile(r"(,\s*){2,}")


def dedupe_names(names: Iterable[str]) -> List[str]:
    """
    Remove case-insensitive duplicates, keeping the first occurrence.

    Example:
        >>> dedupe_names(["Cat", "dog", "cat"])
        ['Cat', 'dog']
    """
    unique_names = []
    seen_names = set()

    for name in names:
        key = name.lower()
        if key not in seen_names:
            unique_names.append(name)
            seen_names.add(key)

    return unique_names


def normalize_prompt_text(raw_text: str) -> List[str]:
    """
    Parse committed prompt text into a clean list of display names.

    Normalization rules, applied in order:
    - Full-width commas become ", "
    - Every comma (plus one optional whitespace char) becomes ", "
    - Runs of separators collapse into a single ", "
    - Split on ", ", trim fragments, drop empty ones
    - Case-insensitive dedupe, first occurrence wins

    Args:
        raw_text: Prompt text as typed by the user

    Returns:
        Ordered list of display names

    Example:
        >>> normalize_prompt_text("cat,dog ,  , cat")
        ['cat', 'dog']
    """
    if not raw_text:
        return []

    replaced_text = raw_text.replace(FULL_WIDTH_COMMA, SEPARATOR)
    replaced_text = _COMMA_RE.sub(SEPARATOR, replaced_text)
    replaced_text = _REPEATED_SEPARATOR_RE.sub(SEPARATOR, replaced_text)

    names = []
    for fragment in replaced_text.split(SEPARATOR):
        fragment = fragment.strip()
        if fragment:
            names.append(fragment)

    return dedupe_names(names)


def split_live_text(raw_text: str) -> List[str]:
    """
    Split prompt text while the user is still typing.

    Only the literal ", " separator is honoured. Whitespace-only fragments
    are dropped but the rest are kept verbatim and duplicates stay, so a
    tag being retyped does not vanish mid-edit.

    Example:
        >>> split_live_text("cat, Cat, , dog,")
        ['cat', 'Cat', 'dog,']
    """
    if not raw_text:
        return []
    return [fragment for fragment in raw_text.split(SEPARATOR) if fragment.strip()]


def join_names(names: Iterable[str]) -> str:
    """Join display names into prompt text, skipping blank ones."""
    return SEPARATOR.join(name for name in names if name and name.strip())

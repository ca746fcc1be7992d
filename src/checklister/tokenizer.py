"""Splitting pasted or scanned text into candidate item strings."""

import re

_SEPARATORS = re.compile(r"\r?\n|,|;")
_BULLET_PREFIX = re.compile(r"^[-*\d.)\s]+")
_URL = re.compile(r"https?://\S+")


def tokenize(text: str) -> list[str]:
    """Split raw list text into item strings.

    Pieces are split on newlines, commas and semicolons, trimmed, and stripped
    of list markers such as "1) ", "- " or "3. ". Pieces that end up empty are
    dropped. Input order is preserved.
    """
    items = []
    for piece in _SEPARATORS.split(text):
        piece = piece.strip()
        if not piece:
            continue
        piece = _BULLET_PREFIX.sub("", piece)
        if piece:
            items.append(piece)
    return items


def extract_urls(text: str) -> tuple[list[str], str]:
    """Pull http(s) URLs out of text.

    Returns:
        Tuple of (urls, remaining_text)
    """
    urls = _URL.findall(text)
    remaining = _URL.sub("", text).strip()
    return urls, remaining


def normalize_name(name: str) -> str:
    """Identity key for an item name: lowercased, whitespace collapsed."""
    return " ".join(name.lower().split())

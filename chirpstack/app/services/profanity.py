"""
services/profanity.py — chirp profanity filter.

Words are split on single spaces; runs of spaces collapse because empty words
are dropped. A word matches case-insensitively and only as a whole word
("kerfuffle!" is left alone). Matches are replaced by "****".
"""

from __future__ import annotations

PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
REPLACEMENT = "****"


def remove_profanity(body: str) -> tuple[str, bool]:
    """Returns (cleaned_body, changed) where changed means cleaned_body != body."""
    cleaned_words = []
    for word in body.split(" "):
        if not word:
            continue
        cleaned_words.append(REPLACEMENT if word.lower() in PROFANE_WORDS else word)

    cleaned = " ".join(cleaned_words)
    return cleaned, cleaned != body

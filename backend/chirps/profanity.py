# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Profanity filter applied to chirp bodies before they are stored."""

from typing import Iterable

PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def clean_body(body: str, profane_words: Iterable[str] = PROFANE_WORDS) -> str:
    """
    Replace every whitespace-separated word that matches a profane word
    (case-insensitive) with ``****``.  Words with attached punctuation, such
    as ``Sharbert!``, are left alone.
    """
    banned = {w.lower() for w in profane_words}
    return " ".join(MASK if word.lower() in banned else word for word in body.split(" "))

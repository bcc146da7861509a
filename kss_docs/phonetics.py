"""Phonetic keyword comparison used when typo tolerance is enabled.

Keywords such as ``Styleguide``, ``Deprecated`` and ``Experimental`` are
compared by their Metaphone codes so that ``Stylguide`` or ``Deprecatd`` still
resolve to the intended keyword.

Examples
--------
>>> from kss_docs.phonetics import sounds_like
>>> sounds_like("Stylguide", "styleguide")
True
>>> sounds_like("Markup", "styleguide")
False
"""

from __future__ import annotations

import functools
import re

import jellyfish

_NON_LETTERS = re.compile(r"[^a-z]+")


@functools.lru_cache(maxsize=256)
def phonetic_key(word: str) -> str:
    """Return the Metaphone code for ``word`` ignoring case and punctuation."""
    letters = _NON_LETTERS.sub("", word.lower())
    if not letters:
        return ""
    return jellyfish.metaphone(letters)


def sounds_like(word: str, target: str) -> bool:
    """Return whether ``word`` and ``target`` share a Metaphone code."""
    key = phonetic_key(word)
    return bool(key) and key == phonetic_key(target)


__all__ = ["phonetic_key", "sounds_like"]

"""Slug and label derivation.

Slugs follow the kebab-case rules the docs renderer uses for generated
ids: words are split on punctuation, camelCase humps and letter/digit
boundaries, so ``Cari Makanan Murah (B2C)`` becomes
``cari-makanan-murah-b-2-c``.
"""

import re
import unicodedata

# Letters that NFKD does not decompose into an ASCII base.
_TRANSLITERATIONS = str.maketrans({
    "ß": "ss",
    "æ": "ae",
    "Æ": "AE",
    "ø": "o",
    "Ø": "O",
    "đ": "d",
    "Đ": "D",
    "ł": "l",
    "Ł": "L",
    "œ": "oe",
    "Œ": "OE",
    "þ": "th",
    "Þ": "TH",
})

_WORD = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]+|[0-9]|\b|_)|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def transliterate(text: str) -> str:
    """Reduce text to ASCII, dropping accents and unknown characters."""
    text = text.translate(_TRANSLITERATIONS)
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def split_words(text: str) -> list[str]:
    return _WORD.findall(transliterate(text))


def slugify(text: str) -> str:
    """Lowercase, hyphen-joined words of ``text``; empty if nothing survives."""
    return "-".join(word.lower() for word in split_words(text))


def humanize(identifier: str) -> str:
    """Turn an operationId like ``getFoodById`` into ``Get Food By Id``."""
    words = split_words(identifier)
    return " ".join(word if word.isupper() else word.capitalize() for word in words)


class SlugRegistry:
    """Hands out unique slugs, suffixing repeats with -2, -3, ... in call order."""

    def __init__(self):
        self._taken: set[str] = set()
        self._counts: dict[str, int] = {}

    def __contains__(self, slug: str) -> bool:
        return slug in self._taken

    def claim(self, slug: str) -> str:
        candidate = slug
        count = self._counts.get(slug, 1)
        while candidate in self._taken:
            count += 1
            candidate = f"{slug}-{count}"
        self._counts[slug] = count
        self._taken.add(candidate)
        return candidate

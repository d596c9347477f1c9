"""Cyrillic -> Latin transliteration used as a fallback team search key."""
from __future__ import annotations

import re
from typing import Dict

# Russian alphabet, lower case; upper case is derived so the mapping stays case preserving.
CYRILLIC_TO_LATIN: Dict[str, str] = {
    "а": "a",
    "б": "b",
    "в": "v",
    "г": "g",
    "д": "d",
    "е": "e",
    "ё": "e",
    "ж": "zh",
    "з": "z",
    "и": "i",
    "й": "y",
    "к": "k",
    "л": "l",
    "м": "m",
    "н": "n",
    "о": "o",
    "п": "p",
    "р": "r",
    "с": "s",
    "т": "t",
    "у": "u",
    "ф": "f",
    "х": "kh",
    "ц": "ts",
    "ч": "ch",
    "ш": "sh",
    "щ": "shch",
    "ъ": "",
    "ы": "y",
    "ь": "",
    "э": "e",
    "ю": "yu",
    "я": "ya",
}

_CYRILLIC_RE = re.compile(r"[Ѐ-ӿ]")


def contains_cyrillic(text: str) -> bool:
    return bool(text) and _CYRILLIC_RE.search(text) is not None


def transliterate(text: str) -> str:
    """Map every Cyrillic letter to its Latin spelling; other characters pass through.

    An upper-case source letter yields a capitalized replacement ("Ж" -> "Zh").
    """

    out = []
    for char in text or "":
        lower = char.lower()
        latin = CYRILLIC_TO_LATIN.get(lower)
        if latin is None:
            out.append(char)
        elif char != lower:
            out.append(latin.capitalize())
        else:
            out.append(latin)
    return "".join(out)

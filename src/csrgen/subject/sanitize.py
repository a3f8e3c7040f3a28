"""Transliteration of free-text subject fields.

``sanitize`` produces text usable in filenames and domain-like labels
(spaces become hyphens, separators are collapsed). ``sanitize_for_cert_field``
produces text for Distinguished Name values and keeps spaces.

The transliteration table is intentionally case-asymmetric: German umlauts map
to a lowercase digraph for both cases (``Ü`` -> ``ue``) while e.g. ``Æ`` and
``Ø`` have uppercase replacements. Keep it that way; existing certificates
were generated with these values.
"""
from __future__ import annotations

import string
from typing import Dict

_PASSTHROUGH = frozenset(string.ascii_letters + string.digits + "-_.")


def _expand(groups: Dict[str, str]) -> Dict[str, str]:
    table: Dict[str, str] = {}
    for chars, replacement in groups.items():
        for c in chars:
            table[c] = replacement
    return table


TRANSLITERATIONS: Dict[str, str] = _expand({
    # German
    "äÄ": "ae",
    "öÖ": "oe",
    "üÜ": "ue",
    "ß": "ss",
    # French
    "àâáãå": "a",
    "ÀÂÁÃÅ": "A",
    "éèêë": "e",
    "ÉÈÊË": "E",
    "îïíì": "i",
    "ÎÏÍÌ": "I",
    "ôóòõ": "o",
    "ÔÓÒÕ": "O",
    "ûúù": "u",
    "ÛÚÙ": "U",
    "ÿý": "y",
    "ŸÝ": "Y",
    "ç": "c",
    "Ç": "C",
    # Scandinavian
    "æ": "ae",
    "Æ": "AE",
    "ø": "oe",
    "Ø": "OE",
    # Spanish
    "ñ": "n",
    "Ñ": "N",
    # Polish
    "ł": "l",
    "Ł": "L",
    "ą": "a",
    "Ą": "A",
    "ę": "e",
    "Ę": "E",
    "ć": "c",
    "Ć": "C",
    "ń": "n",
    "Ń": "N",
    "ś": "s",
    "Ś": "S",
    "źż": "z",
    "ŹŻ": "Z",
    # Czech and Slovak
    "č": "c",
    "Č": "C",
    "ď": "d",
    "Ď": "D",
    "ě": "e",
    "Ě": "E",
    "ň": "n",
    "Ň": "N",
    "ř": "r",
    "Ř": "R",
    "š": "s",
    "Š": "S",
    "ť": "t",
    "Ť": "T",
    "ů": "u",
    "Ů": "U",
    "ž": "z",
    "Ž": "Z",
    # Symbols
    "&": "and",
    "@": "at",
    "/\\": "-",
})

# Pairs collapsed after transliteration, applied in this order
_COLLAPSE = (("--", "-"), ("__", "_"), ("-.", "."), (".-", "."))


def _transliterate(text: str, preserve_spaces: bool) -> str:
    out = []
    for c in text:
        if c == " ":
            out.append(" " if preserve_spaces else "-")
        elif c in _PASSTHROUGH:
            out.append(c)
        else:
            out.append(TRANSLITERATIONS.get(c, "_"))
    return "".join(out)


def sanitize(text: str) -> str:
    """Sanitize text for filenames: spaces become ``-``, separators collapse."""
    result = _transliterate(text, preserve_spaces=False).strip("-_")
    # replacements can create new collapsible pairs; loop until stable
    while True:
        collapsed = result
        for pair, single in _COLLAPSE:
            collapsed = collapsed.replace(pair, single)
        if collapsed == result:
            return result
        result = collapsed


def sanitize_for_cert_field(text: str) -> str:
    """Sanitize a DN field value; spaces are preserved but never doubled."""
    result = _transliterate(text, preserve_spaces=True).strip()
    while "  " in result:
        result = result.replace("  ", " ")
    return result


__all__ = ["sanitize", "sanitize_for_cert_field", "TRANSLITERATIONS"]

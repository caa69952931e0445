"""Normalisation de texte / Text normalization helpers."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def normalize_plate(plate: str) -> str:
    """Plaque en majuscules, sans separateurs / Uppercase plate, separators removed.

    "abc-1d23" -> "ABC1D23"
    """
    return _NON_ALNUM.sub("", fold(plate).upper())


def fold(text: str) -> str:
    """Supprimer les accents / Strip diacritics ("Óleo" -> "Oleo")."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))

from __future__ import annotations

from collections.abc import Mapping

# Latin-1 letters with a diacritic -> base Latin letter, case preserved.
# Keys and values are single characters, so the mapping never changes length.
# Ligatures (Æ, æ, ß) and Ð, Þ have no single base letter and are left alone.
ACCENT_MAP: dict[str, str] = {
    "à": "a", "á": "a", "â": "a", "ã": "a", "ä": "a", "å": "a",
    "ç": "c",
    "è": "e", "é": "e", "ê": "e", "ë": "e",
    "ì": "i", "í": "i", "î": "i", "ï": "i",
    "ñ": "n",
    "ò": "o", "ó": "o", "ô": "o", "õ": "o", "ö": "o", "ø": "o",
    "ù": "u", "ú": "u", "û": "u", "ü": "u",
    "ý": "y", "ÿ": "y",
    "À": "A", "Á": "A", "Â": "A", "Ã": "A", "Ä": "A", "Å": "A",
    "Ç": "C",
    "È": "E", "É": "E", "Ê": "E", "Ë": "E",
    "Ì": "I", "Í": "I", "Î": "I", "Ï": "I",
    "Ñ": "N",
    "Ò": "O", "Ó": "O", "Ô": "O", "Õ": "O", "Ö": "O", "Ø": "O",
    "Ù": "U", "Ú": "U", "Û": "U", "Ü": "U",
    "Ý": "Y",
}

_TABLE = str.maketrans(ACCENT_MAP)


def remove_accents(text: str) -> str:
    """Replace accented letters with their base letter; everything else passes through."""
    return text.translate(_TABLE)


def clean_fields(data: Mapping[str, object]) -> dict[str, object]:
    """Return a copy of ``data`` with remove_accents applied to every str value."""
    return {k: remove_accents(v) if isinstance(v, str) else v for k, v in data.items()}

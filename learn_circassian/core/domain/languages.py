# learn_circassian\core\domain\languages.py
from typing import Dict, Iterable, List, Optional, Tuple

from learn_circassian.core.domain.models import WordEntry

# Dictionaries covering both Circassian standards carry this combined code.
COMBINED_CIRCASSIAN = "Ady/Kbd"

LANGUAGE_DISPLAY_NAMES: Dict[str, str] = {
    "Ady": "West Circassian",
    "Kbd": "East Circassian",
    COMBINED_CIRCASSIAN: "West & East Circassian",
    "Ru": "Russian",
    "En": "English",
    "Tr": "Turkish",
    "Ar": "Arabic",
    "He": "Hebrew",
}

_SIDES = ("from_lang", "to_lang")


def display_language(code: str) -> str:
    """English display name for a language code; unknown codes are shown as-is."""
    return LANGUAGE_DISPLAY_NAMES.get(code, code)


def _split_code(code: str) -> Tuple[str, ...]:
    if code == COMBINED_CIRCASSIAN:
        return ("Ady", "Kbd")
    return (code,)


def language_matches(code: str, wanted: str) -> bool:
    return wanted in _split_code(code)


def language_options(entries: Iterable[WordEntry], side: str) -> List[str]:
    """
    Distinct language codes found on one side ('from_lang' or 'to_lang') of the
    entries' dictionaries, in order of first appearance. The combined
    Circassian code contributes both of its halves.
    """
    if side not in _SIDES:
        raise ValueError(f"side must be one of {_SIDES}, got {side!r}")

    seen: List[str] = []
    for entry in entries:
        for code in _split_code(getattr(entry.dictionary, side)):
            if code not in seen:
                seen.append(code)
    return seen


def partition_entries(
    entries: Iterable[WordEntry],
    from_lang: Optional[str] = None,
    to_lang: Optional[str] = None,
) -> Tuple[List[WordEntry], List[WordEntry]]:
    """
    Split entries into (matching, filtered-out) by the active language filter.
    With no filter every entry matches.
    """
    active: List[WordEntry] = []
    hidden: List[WordEntry] = []
    for entry in entries:
        ok = True
        if from_lang and not language_matches(entry.dictionary.from_lang, from_lang):
            ok = False
        if to_lang and not language_matches(entry.dictionary.to_lang, to_lang):
            ok = False
        (active if ok else hidden).append(entry)
    return active, hidden

# learn_circassian\core\use_cases\__init__.py
"""
Core Use Cases (Application Logic).

This package contains the "Interactors" of the system. They orchestrate
the flow of data between the Domain Entities and the Infrastructure Ports.
Each use case represents one operation of the UI-facing surface:
1. SearchWords: a page of prefix/substring matches.
2. LookupWord: all dictionary entries of one word.
3. SetupStore: first-run download of the store file.
4. SearchSession: client-side pagination and stale-response discard.
"""

from .lookup_word import LookupWord
from .search_session import SearchSession
from .search_words import SearchWords
from .setup_store import SetupStore

__all__ = [
    "LookupWord",
    "SearchSession",
    "SearchWords",
    "SetupStore",
]

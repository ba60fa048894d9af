# tests\conftest.py
import json
import sqlite3

import pytest
from unittest.mock import AsyncMock, MagicMock

from learn_circassian.core.domain.models import Dictionary, WordRecord
from learn_circassian.core.ports.asset_fetcher import IAssetFetcher
from learn_circassian.core.ports.word_store import IWordStore
from learn_circassian.shared.container import container as app_container

DICTIONARIES = [
    (1, "Adyghe-Russian", "Ady", "Ru"),
    (2, "Kabardian-English", "Kbd", "En"),
    (3, "Circassian-Russian", "Ady/Kbd", "Ru"),
]

WORDS = {
    "адыгэ": [
        {"id": 1, "html": "<b>адыгэ</b> &lt;i&gt;черкес&lt;/i&gt;"},
        {"id": 2, "html": "Circassian"},
    ],
    "адыгабзэ": [{"id": 3, "html": "&lt;font color=&#39;sienna&#39;&gt;язык&lt;/font&gt;"}],
    "1уэ": [{"id": 1, "html": "ты"}],
    "мэз": [{"id": 1, "html": "лес"}, {"id": 1, "html": "дрова"}, {"id": 1, "html": "чаща"}],
    "100%": [{"id": 2, "html": "fully"}],
    "100x": [{"id": 2, "html": "a hundredfold"}],
    "a_b": [{"id": 2, "html": "underscore"}],
    "axb": [{"id": 2, "html": "no underscore"}],
    "broken": [{"id": 99, "html": "orphan"}],
    "garbled": "not json at all",
}


def build_store_file(path, words=None, dictionaries=None):
    """Writes a store file with the production schema."""
    words = WORDS if words is None else words
    dictionaries = DICTIONARIES if dictionaries is None else dictionaries

    conn = sqlite3.connect(str(path))
    try:
        conn.execute("CREATE TABLE dictionaries (id INTEGER PRIMARY KEY, title TEXT, from_lang TEXT, to_lang TEXT)")
        conn.execute("CREATE TABLE words (word TEXT PRIMARY KEY, entries TEXT)")
        conn.executemany("INSERT INTO dictionaries VALUES (?, ?, ?, ?)", dictionaries)
        conn.executemany(
            "INSERT INTO words VALUES (?, ?)",
            [(w, e if isinstance(e, str) else json.dumps(e, ensure_ascii=False)) for w, e in words.items()],
        )
        conn.commit()
    finally:
        conn.close()
    return str(path)


@pytest.fixture(scope="function")
def store_file(tmp_path):
    """A populated store file in a temporary directory."""
    return build_store_file(tmp_path / "dictionary.db")


@pytest.fixture(scope="function")
def sample_dictionaries():
    return [Dictionary(id=i, title=t, from_lang=f, to_lang=to) for i, t, f, to in DICTIONARIES]


@pytest.fixture(scope="function")
def mock_store(tmp_path, sample_dictionaries):
    """Returns a mock Word Store that reports itself as ready."""
    store = MagicMock(spec=IWordStore)
    store.path = str(tmp_path / "dictionary.db")
    store.is_ready = MagicMock(return_value=True)
    store.count_words = AsyncMock(return_value=0)
    store.find_words = AsyncMock(return_value=[])
    store.get_word = AsyncMock(return_value=None)
    store.get_dictionaries = AsyncMock(return_value=sample_dictionaries)
    store.close = AsyncMock()
    store.health_check = AsyncMock(return_value=True)
    return store


@pytest.fixture(scope="function")
def mock_fetcher():
    """Returns a mock Asset Fetcher; tests assign `fetch` a generator."""
    fetcher = MagicMock(spec=IAssetFetcher)
    return fetcher


@pytest.fixture(scope="function")
def container(mock_store, mock_fetcher):
    """
    The application container with its infrastructure providers overridden.

    The API routes are wired to the module-level container, so the overrides
    are applied there and undone after the test.
    """
    app_container.word_store.override(mock_store)
    app_container.asset_fetcher.override(mock_fetcher)
    app_container.setup_store_use_case.reset()

    yield app_container

    app_container.word_store.reset_override()
    app_container.asset_fetcher.reset_override()
    app_container.setup_store_use_case.reset()
    app_container.unwire()


def word_record(word: str) -> WordRecord:
    """The stored record of a sample word, as the store adapter would return it."""
    entries = WORDS[word]
    serialized = entries if isinstance(entries, str) else json.dumps(entries, ensure_ascii=False)
    return WordRecord(word=word, entries=serialized)

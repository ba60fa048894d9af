# tests\core\test_use_cases.py
import pytest
from unittest.mock import MagicMock

from learn_circassian.core.domain.exceptions import (
    DataIntegrityError,
    NetworkError,
    SetupInProgressError,
)
from learn_circassian.core.domain.models import SearchMode, SearchRequest
from learn_circassian.core.use_cases import lookup_word
from learn_circassian.core.use_cases.search_words import build_pattern, total_pages
from tests.conftest import word_record


def test_patterns_escape_user_wildcards():
    assert build_pattern("ab", SearchMode.STARTS_WITH) == "ab%"
    assert build_pattern("100%", SearchMode.CONTAINS) == "%100\\%%"
    assert build_pattern("a_b", SearchMode.STARTS_WITH) == "a\\_b%"


@pytest.mark.parametrize("total, limit, expected", [
    (0, 50, 0),
    (1, 50, 1),
    (50, 50, 1),
    (51, 50, 2),
    (120, 50, 3),
])
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected


@pytest.mark.asyncio
class TestSearchWords:

    async def test_pagination_arithmetic(self, container, mock_store):
        """
        Scenario: 120 matches, page 3 of 50.
        Expected: offset 100 is requested and 3 pages are reported.
        """
        # Arrange
        use_case = container.search_words_use_case()
        mock_store.count_words.return_value = 120
        mock_store.find_words.return_value = ["w%d" % i for i in range(20)]

        # Act
        result = await use_case.execute(SearchRequest(query="ab", page=3, limit=50))

        # Assert
        mock_store.count_words.assert_awaited_once_with("ab%")
        mock_store.find_words.assert_awaited_once_with("ab%", 50, 100)
        assert result.page == 3
        assert result.total_pages == 3
        assert len(result.data) == 20

    async def test_no_matches(self, container, mock_store):
        use_case = container.search_words_use_case()

        result = await use_case.execute(SearchRequest(query="zzz", mode=SearchMode.CONTAINS))

        mock_store.count_words.assert_awaited_once_with("%zzz%")
        assert result.data == []
        assert result.total_pages == 0
        assert result.page == 1


@pytest.mark.asyncio
class TestLookupWord:

    async def test_not_found(self, container, mock_store):
        use_case = container.lookup_word_use_case()

        assert await use_case.execute("nothing") is None
        mock_store.get_dictionaries.assert_not_awaited()

    async def test_metadata_fetched_once_per_dictionary(self, container, mock_store):
        """
        Scenario: Three entries all come from dictionary 1.
        Expected: A single metadata fetch for [1]; entry order preserved.
        """
        # Arrange
        use_case = container.lookup_word_use_case()
        mock_store.get_word.return_value = word_record("мэз")

        # Act
        result = await use_case.execute("мэз")

        # Assert
        mock_store.get_dictionaries.assert_awaited_once_with([1])
        assert [e.html for e in result.entries] == ["лес", "дрова", "чаща"]
        assert all(e.dictionary.title == "Adyghe-Russian" for e in result.entries)

    async def test_entries_are_decoded(self, container, mock_store):
        use_case = container.lookup_word_use_case()
        mock_store.get_word.return_value = word_record("адыгэ")

        result = await use_case.execute("адыгэ")

        assert result.word == "адыгэ"
        assert [e.id for e in result.entries] == [1, 2]
        assert result.entries[0].html == "<b>адыгэ</b> <i>черкес</i>"
        mock_store.get_dictionaries.assert_awaited_once_with([1, 2])

    async def test_unknown_dictionary_is_an_integrity_fault(self, container, mock_store):
        use_case = container.lookup_word_use_case()
        mock_store.get_word.return_value = word_record("broken")

        with pytest.raises(DataIntegrityError) as excinfo:
            await use_case.execute("broken")

        assert "99" in str(excinfo.value)

    async def test_malformed_row_is_logged_as_integrity_fault(self, container, mock_store, monkeypatch):
        """
        Scenario: The store rejects the row shape while reading the word.
        Expected: The fault is logged like any other integrity fault and re-raised.
        """
        # Arrange
        fake_logger = MagicMock()
        monkeypatch.setattr(lookup_word, "logger", fake_logger)
        use_case = container.lookup_word_use_case()
        mock_store.get_word.side_effect = DataIntegrityError("мэз", "unexpected row shape (1 errors)")

        # Act & Assert
        with pytest.raises(DataIntegrityError):
            await use_case.execute("мэз")

        fake_logger.error.assert_called_once_with(
            "word_lookup_integrity_fault", word="мэз", detail="unexpected row shape (1 errors)"
        )

    async def test_unparseable_entries(self, container, mock_store):
        use_case = container.lookup_word_use_case()
        mock_store.get_word.return_value = word_record("garbled")

        with pytest.raises(DataIntegrityError):
            await use_case.execute("garbled")


def _fetch_yielding(*fractions, error=None):
    async def fetch(url, destination):
        for fraction in fractions:
            yield fraction
        if error is not None:
            raise error
    return MagicMock(side_effect=fetch)


@pytest.mark.asyncio
class TestSetupStore:

    async def test_skips_when_present(self, container, mock_store, mock_fetcher):
        use_case = container.setup_store_use_case()
        mock_fetcher.fetch = _fetch_yielding(0.5, 1.0)

        progress = [f async for f in use_case.execute()]

        assert progress == []
        mock_fetcher.fetch.assert_not_called()

    async def test_relays_progress(self, container, mock_store, mock_fetcher):
        use_case = container.setup_store_use_case()
        mock_store.is_ready.return_value = False
        mock_fetcher.fetch = _fetch_yielding(0.25, 0.5, 1.0)

        assert use_case.needs_setup()
        progress = [f async for f in use_case.execute()]

        assert progress == [0.25, 0.5, 1.0]
        mock_fetcher.fetch.assert_called_once_with(use_case.url, mock_store.path)
        assert not use_case.in_progress

    async def test_second_download_is_refused(self, container, mock_store, mock_fetcher):
        use_case = container.setup_store_use_case()
        mock_store.is_ready.return_value = False
        mock_fetcher.fetch = _fetch_yielding(0.1, 0.2)

        first = use_case.execute()
        assert await first.__anext__() == 0.1
        assert use_case.in_progress

        with pytest.raises(SetupInProgressError):
            await use_case.execute().__anext__()

        await first.aclose()
        assert not use_case.in_progress

    async def test_failure_propagates_and_clears_flag(self, container, mock_store, mock_fetcher):
        use_case = container.setup_store_use_case()
        mock_store.is_ready.return_value = False
        mock_fetcher.fetch = _fetch_yielding(0.1, error=NetworkError("http://x", "connection reset"))

        with pytest.raises(NetworkError):
            async for _ in use_case.execute():
                pass

        assert not use_case.in_progress

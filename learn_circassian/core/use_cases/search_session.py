# learn_circassian/core/use_cases/search_session.py
from typing import List, Optional

import structlog

from learn_circassian.core.domain.models import PaginatedResult, SearchMode, SearchRequest
from learn_circassian.core.domain.text import normalize_query
from learn_circassian.core.use_cases.search_words import SearchWords
from learn_circassian.shared.config import settings

logger = structlog.get_logger()


class SearchSession:
    """
    Client-side state of one search box: the current query, the pages loaded
    so far, and the discard policy for out-of-order responses.

    Every submission bumps a sequence number. A response that resolves after a
    newer submission has been made is dropped (`None` is returned and the
    session state is left alone), so a slow query can never overwrite the
    results of a later one.
    """

    def __init__(
        self,
        search: SearchWords,
        page_size: int = settings.SEARCH_PAGE_SIZE,
        min_contains_chars: int = settings.MIN_CONTAINS_CHARS,
    ):
        self._search = search
        self.page_size = page_size
        self.min_contains_chars = min_contains_chars

        self._sequence = 0
        self.query = ""
        self.mode = SearchMode.STARTS_WITH
        self.results: List[str] = []
        self.page = 0
        self.total_pages = 0

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_more else None

    def is_contains_too_short(self, query: str, mode: SearchMode) -> bool:
        return mode == SearchMode.CONTAINS and 0 < len(query) < self.min_contains_chars

    async def submit(self, raw_query: str, mode: SearchMode = SearchMode.STARTS_WITH) -> Optional[PaginatedResult]:
        """
        Starts a new search, replacing whatever the session held.

        Returns the first page, or None when the query is not searchable
        (empty, or too short for a substring search) or was superseded.
        """
        query = normalize_query(raw_query)

        self._sequence += 1
        self.query, self.mode = query, mode
        self.results, self.page, self.total_pages = [], 0, 0

        if not query or self.is_contains_too_short(query, mode):
            return None

        return await self._run(self._sequence, page=1)

    async def load_more(self) -> Optional[PaginatedResult]:
        """Fetches the next page of the current query and appends it."""
        if not self.query or self.next_page is None:
            return None
        return await self._run(self._sequence, page=self.next_page)

    async def _run(self, sequence: int, page: int) -> Optional[PaginatedResult]:
        request = SearchRequest(query=self.query, mode=self.mode, page=page, limit=self.page_size)
        result = await self._search.execute(request)

        if sequence != self._sequence:
            logger.debug("search_result_discarded", sequence=sequence, latest=self._sequence)
            return None

        self.results.extend(result.data)
        self.page = result.page
        self.total_pages = result.total_pages
        return result

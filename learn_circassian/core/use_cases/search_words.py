# learn_circassian/core/use_cases/search_words.py
import math

import structlog

from learn_circassian.core.domain.models import PaginatedResult, SearchMode, SearchRequest
from learn_circassian.core.domain.text import escape_like
from learn_circassian.core.ports.word_store import IWordStore
from learn_circassian.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


def build_pattern(query: str, mode: SearchMode) -> str:
    """LIKE pattern for `query`, with wildcards in the user input escaped."""
    escaped = escape_like(query)
    if mode == SearchMode.CONTAINS:
        return f"%{escaped}%"
    return f"{escaped}%"


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


class SearchWords:
    """
    Use Case: returns one page of words matching a query.

    Stateless; every call runs a full COUNT over the same pattern so the
    page count shown in the UI is exact.
    """

    def __init__(self, store: IWordStore):
        self.store = store

    async def execute(self, request: SearchRequest) -> PaginatedResult:
        with tracer.start_as_current_span("use_case.search_words") as span:
            span.set_attribute("app.search_mode", request.mode.value)
            span.set_attribute("app.page", request.page)

            pattern = build_pattern(request.query, request.mode)

            total = await self.store.count_words(pattern)
            words = await self.store.find_words(pattern, request.limit, request.offset)

            logger.debug(
                "search_completed",
                mode=request.mode.value,
                page=request.page,
                total=total,
                returned=len(words),
            )

            return PaginatedResult(
                data=words,
                page=request.page,
                total_pages=total_pages(total, request.limit),
            )

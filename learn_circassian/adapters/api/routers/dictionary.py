# learn_circassian\adapters\api\routers\dictionary.py
from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, status

from learn_circassian.core.domain.exceptions import DataIntegrityError, StoreUnavailableError
from learn_circassian.core.domain.languages import display_language, language_options, partition_entries
from learn_circassian.core.domain.models import (
    FilteredWord,
    PaginatedResult,
    SearchRequest,
    WordWithEntries,
)
from learn_circassian.core.use_cases.lookup_word import LookupWord
from learn_circassian.core.use_cases.search_words import SearchWords
from learn_circassian.shared.container import Container

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1", tags=["Dictionary"])


def _store_unavailable(e: StoreUnavailableError) -> HTTPException:
    # The UI is expected to check /store/status first and run setup
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def _integrity_fault() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="The dictionary data for this word is malformed.",
    )


@router.post("/search", response_model=PaginatedResult, summary="Search Words")
@inject
async def search_words(
    request: SearchRequest = Body(..., description="Normalised query, mode and page"),
    use_case: SearchWords = Depends(Provide[Container.search_words_use_case]),
):
    """
    Returns one page of words matching the query, in ascending order.

    **Body:**
    * `query`: already case-folded search text.
    * `mode`: `starts_with` (prefix) or `contains` (substring).
    * `page` / `limit`: 1-indexed page and page size.
    """
    try:
        return await use_case.execute(request)
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.get("/words/{word}", response_model=Optional[WordWithEntries], summary="Get Word")
@inject
async def get_word(
    word: str = Path(..., description="Exact stored key"),
    use_case: LookupWord = Depends(Provide[Container.lookup_word_use_case]),
):
    """
    All dictionary entries for one word, or `null` if the word is not stored.
    """
    try:
        return await use_case.execute(word)
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    except DataIntegrityError:
        # Already logged by the use case; the shared connection stays usable
        raise _integrity_fault()


@router.get("/words/{word}/filtered", response_model=Optional[FilteredWord], summary="Get Word (Language Filter)")
@inject
async def get_word_filtered(
    word: str = Path(..., description="Exact stored key"),
    from_lang: Optional[str] = Query(None, description="Source language code, e.g. 'Ady'"),
    to_lang: Optional[str] = Query(None, description="Target language code, e.g. 'Ru'"),
    use_case: LookupWord = Depends(Provide[Container.lookup_word_use_case]),
):
    """
    A word's entries split into those matching the language filter and those
    hidden by it, plus the language chips available for this word.
    """
    try:
        result = await use_case.execute(word)
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    except DataIntegrityError:
        raise _integrity_fault()

    if result is None:
        return None

    active, hidden = partition_entries(result.entries, from_lang, to_lang)
    from_options = language_options(result.entries, "from_lang")
    to_options = language_options(result.entries, "to_lang")
    return FilteredWord(
        word=result.word,
        entries=active,
        filtered=hidden,
        from_options=from_options,
        to_options=to_options,
        language_names={code: display_language(code) for code in from_options + to_options},
        from_lang=from_lang,
        to_lang=to_lang,
    )

# learn_circassian\adapters\api\routers\store.py
import json
import sys
from typing import AsyncIterator

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import StreamingResponse

from learn_circassian.adapters.desktop.file_browser import reveal_in_file_manager
from learn_circassian.core.domain.exceptions import DomainError, FetchError, HttpStatusError
from learn_circassian.core.domain.models import StoreLocation, StoreStatus
from learn_circassian.core.ports.word_store import IWordStore
from learn_circassian.core.use_cases.setup_store import SetupStore
from learn_circassian.shared.container import Container

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1", tags=["Store"])

NDJSON = "application/x-ndjson"


def _event(payload: dict) -> str:
    return json.dumps(payload) + "\n"


async def progress_events(use_case: SetupStore) -> AsyncIterator[str]:
    """
    Renders the setup progress as newline-delimited JSON events.

    The stream always ends with exactly one `done` or `error` event; errors are
    reported in-band because the 200 status has already been sent.
    """
    last = None
    try:
        async for fraction in use_case.execute():
            # Three decimals is finer than any progress bar needs
            rounded = round(fraction, 3)
            if rounded != last:
                last = rounded
                yield _event({"event": "progress", "fraction": rounded})
    except (DomainError, OSError) as e:
        error = {"event": "error", "kind": type(e).__name__, "message": str(e)}
        if isinstance(e, HttpStatusError):
            error["status"] = e.status_code
        error["retryable"] = isinstance(e, (FetchError, OSError))
        yield _event(error)
        return
    except Exception as e:
        # e.g. httpx.InvalidURL from a misconfigured STORE_URL
        logger.error("store_fetch_unexpected_error", error=str(e), exc_info=e)
        yield _event({"event": "error", "kind": type(e).__name__, "message": str(e), "retryable": False})
        return

    yield _event({"event": "done"})


@router.get("/store/status", response_model=StoreStatus, summary="Store Status")
@inject
async def store_status(
    store: IWordStore = Depends(Provide[Container.word_store]),
):
    """Whether the first-run download still has to happen."""
    return StoreStatus(needs_setup=not store.is_ready())


@router.get("/store/path", response_model=StoreLocation, summary="Store Path")
@inject
async def store_path(
    store: IWordStore = Depends(Provide[Container.word_store]),
):
    """Absolute path where the store file is expected (for manual installs)."""
    return StoreLocation(path=store.path)


@router.post("/store/fetch", summary="Download Store")
@inject
async def fetch_store(
    use_case: SetupStore = Depends(Provide[Container.setup_store_use_case]),
):
    """
    Downloads the store file, streaming progress as NDJSON:

        {"event": "progress", "fraction": 0.42}
        ...
        {"event": "done"}    or    {"event": "error", "message": "..."}

    If the file is already present the stream contains only `done`.
    """
    if use_case.in_progress:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A store download is already in progress.",
        )
    return StreamingResponse(progress_events(use_case), media_type=NDJSON)


@router.post("/store/reveal", status_code=status.HTTP_204_NO_CONTENT, summary="Open Store Location")
@inject
async def reveal_store(
    store: IWordStore = Depends(Provide[Container.word_store]),
):
    """Opens the host file manager at the store file, or its folder if absent."""
    try:
        reveal_in_file_manager(store.path)
    except OSError as e:
        logger.error("reveal_store_failed", path=store.path, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Could not open the file manager: {e}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/platform", summary="Host Platform")
async def platform():
    """Host OS identifier, for OS-specific instructions in the UI."""
    return {"platform": sys.platform}

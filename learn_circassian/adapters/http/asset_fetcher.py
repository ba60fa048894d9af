# learn_circassian\adapters\http\asset_fetcher.py
import asyncio
import contextlib
from typing import AsyncIterator, Optional

import aiofiles
import aiofiles.os
import httpx
import structlog

from learn_circassian.core.domain.exceptions import (
    HttpStatusError,
    NetworkError,
    TooManyRedirectsError,
)
from learn_circassian.core.ports.asset_fetcher import IAssetFetcher
from learn_circassian.shared.config import settings
from learn_circassian.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

TEMP_SUFFIX = ".tmp"


async def _discard(path: str) -> None:
    """Removes a partial download if one exists."""
    with contextlib.suppress(FileNotFoundError):
        await aiofiles.os.remove(path)


def _content_length(response: httpx.Response) -> int:
    raw = response.headers.get("content-length", "")
    return int(raw) if raw.isdigit() else 0


class HttpAssetFetcher(IAssetFetcher):
    """
    Driven Adapter: downloads the store file over HTTP(S).

    The body is streamed into `<destination>.tmp` and renamed over the
    destination only once complete, so the destination path is either absent
    or whole. Chunks are pulled from the socket one at a time and each is
    written before the next is requested, which bounds memory when the disk
    is slower than the network.
    """

    def __init__(
        self,
        max_redirects: int = settings.FETCH_MAX_REDIRECTS,
        chunk_size: int = settings.FETCH_CHUNK_SIZE,
        connect_timeout: float = settings.FETCH_CONNECT_TIMEOUT_SEC,
        stall_timeout: float = settings.FETCH_STALL_TIMEOUT_SEC,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.max_redirects = max_redirects
        self.chunk_size = chunk_size
        # The read timeout doubles as a stall detector between body chunks
        self.timeout = httpx.Timeout(stall_timeout, connect=connect_timeout)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # Redirects are followed by hand to enforce the hop limit before any write
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=False,
            transport=self._transport,
        )

    async def fetch(self, url: str, destination: str) -> AsyncIterator[float]:
        temp_path = destination + TEMP_SUFFIX
        log = logger.bind(url=url, destination=destination)

        # Not made current: the generator may be resumed from another context
        span = tracer.start_span("asset_fetcher.fetch")
        span.set_attribute("fetch.url", url)
        log.info("fetch_started")

        try:
            async with self._client() as client:
                response = await self._resolve(client, url)
                try:
                    # The temp file must be closed before it can be discarded
                    async with contextlib.aclosing(self._stream_to(response, temp_path)) as progress:
                        async for fraction in progress:
                            yield fraction
                finally:
                    await response.aclose()

            await aiofiles.os.replace(temp_path, destination)

        except httpx.RequestError as e:
            await _discard(temp_path)
            log.warning("fetch_failed", error_type="network", error=str(e))
            raise NetworkError(url, str(e) or type(e).__name__) from e
        except (GeneratorExit, asyncio.CancelledError):
            await _discard(temp_path)
            log.warning("fetch_aborted")
            raise
        except BaseException as e:
            await _discard(temp_path)
            log.warning("fetch_failed", error_type=type(e).__name__, error=str(e))
            raise
        finally:
            span.end()

        size = await aiofiles.os.path.getsize(destination)
        log.info("fetch_completed", bytes=size)

    async def _resolve(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        """
        Sends the request, following up to `max_redirects` redirects.
        Returns an open streaming response with status 200.
        """
        current = url
        for hop in range(self.max_redirects + 1):
            response = await client.send(client.build_request("GET", current), stream=True)

            if response.is_redirect:
                await response.aclose()
                if hop == self.max_redirects:
                    raise TooManyRedirectsError(url, self.max_redirects)
                # Relative locations resolve against the redirecting URL
                current = str(response.url.join(response.headers["location"]))
                logger.debug("fetch_redirect", hop=hop + 1, location=current)
                continue

            # Only a full 200 body is a store file; 204/206 and friends are rejected
            if response.status_code != 200:
                await response.aclose()
                raise HttpStatusError(current, response.status_code, response.reason_phrase)

            return response

        # Unreachable: the last iteration either returns or raises
        raise TooManyRedirectsError(url, self.max_redirects)

    async def _stream_to(self, response: httpx.Response, path: str) -> AsyncIterator[float]:
        total = _content_length(response)
        written = 0

        async with aiofiles.open(path, "wb") as out:
            async for chunk in response.aiter_bytes(self.chunk_size):
                await out.write(chunk)
                written += len(chunk)
                if total > 0:
                    # The store is served without content encoding, so written bytes
                    # track Content-Length even when the transport buffered the body
                    yield min(written / total, 1.0)

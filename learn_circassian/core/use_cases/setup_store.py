# learn_circassian/core/use_cases/setup_store.py
import os
from typing import AsyncIterator

import structlog

from learn_circassian.core.domain.exceptions import SetupInProgressError
from learn_circassian.core.ports.asset_fetcher import IAssetFetcher
from learn_circassian.core.ports.word_store import IWordStore
from learn_circassian.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class SetupStore:
    """
    Use Case: first-run acquisition of the store file.

    Skips the download when the file is already present, otherwise prepares
    the target directory and relays the fetcher's progress fractions. Only
    one download may run at a time per instance.
    """

    def __init__(self, store: IWordStore, fetcher: IAssetFetcher, url: str):
        self.store = store
        self.fetcher = fetcher
        self.url = url
        self._running = False

    @property
    def in_progress(self) -> bool:
        return self._running

    def needs_setup(self) -> bool:
        return not self.store.is_ready()

    async def execute(self) -> AsyncIterator[float]:
        destination = self.store.path

        if self.store.is_ready():
            logger.info("store_setup_skipped", path=destination, reason="already_present")
            return

        if self._running:
            raise SetupInProgressError(destination)

        self._running = True
        span = tracer.start_span("use_case.setup_store")
        span.set_attribute("app.store_path", destination)
        try:
            os.makedirs(os.path.dirname(destination), exist_ok=True)
            logger.info("store_setup_started", path=destination, url=self.url)

            async for fraction in self.fetcher.fetch(self.url, destination):
                yield fraction
        except Exception as e:
            span.record_exception(e)
            logger.error("store_setup_failed", path=destination, error=str(e))
            raise
        finally:
            span.end()
            self._running = False

        logger.info("store_setup_completed", path=destination)

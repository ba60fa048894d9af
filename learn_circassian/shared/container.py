from dependency_injector import containers, providers

from learn_circassian.shared.config import settings
from learn_circassian.adapters.http.asset_fetcher import HttpAssetFetcher
from learn_circassian.adapters.persistence.sqlite_store import SqliteWordStore
from learn_circassian.adapters.persistence.store_paths import default_store_path

from learn_circassian.core.use_cases.lookup_word import LookupWord
from learn_circassian.core.use_cases.search_session import SearchSession
from learn_circassian.core.use_cases.search_words import SearchWords
from learn_circassian.core.use_cases.setup_store import SetupStore


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    This declarative container defines the assembly instructions for the application.
    """

    # 1. Configuration
    # Loaded from the settings object; wrapping it allows overriding in tests.
    config = providers.Configuration(pydantic_settings=[settings])

    store_path = providers.Callable(default_store_path)

    # 2. Gateways (Infrastructure Adapters)

    # Store (Singleton: exactly one read-only connection per process)
    word_store = providers.Singleton(
        SqliteWordStore,
        path=store_path,
    )

    asset_fetcher = providers.Singleton(
        HttpAssetFetcher,
        max_redirects=config.FETCH_MAX_REDIRECTS,
        chunk_size=config.FETCH_CHUNK_SIZE,
        connect_timeout=config.FETCH_CONNECT_TIMEOUT_SEC,
        stall_timeout=config.FETCH_STALL_TIMEOUT_SEC,
    )

    # 3. Use Cases (Application Logic)

    # Factory: new instance per request (stateless logic) over the Singleton gateways.
    search_words_use_case = providers.Factory(
        SearchWords,
        store=word_store,
    )

    lookup_word_use_case = providers.Factory(
        LookupWord,
        store=word_store,
    )

    # Singleton: guards against two concurrent downloads of the same file
    setup_store_use_case = providers.Singleton(
        SetupStore,
        store=word_store,
        fetcher=asset_fetcher,
        url=config.STORE_URL,
    )

    search_session = providers.Factory(
        SearchSession,
        search=search_words_use_case,
        page_size=config.SEARCH_PAGE_SIZE,
        min_contains_chars=config.MIN_CONTAINS_CHARS,
    )


# Instantiate the container for global access (e.g. by FastAPI)
container = Container()

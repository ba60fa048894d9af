"""
Learn Circassian Dictionary - command line.

Usage:
    python -m learn_circassian serve              # Loopback API for the desktop UI
    python -m learn_circassian download           # Fetch the store file (first run)
    python -m learn_circassian path               # Where the store file lives
    python -m learn_circassian search <query>     # Quick search from the terminal
    python -m learn_circassian lookup <word>      # All entries of one word
"""

import argparse
import asyncio
import json
import os
import sys

from learn_circassian.core.domain.exceptions import DomainError
from learn_circassian.core.domain.models import SearchMode
from learn_circassian.core.domain.text import normalize_query, to_palochka
from learn_circassian.shared.config import settings
from learn_circassian.shared.container import container
from learn_circassian.shared.logging_config import configure_logging

MB = 1_048_576


class Colors:
    GREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'


def log(msg, color=Colors.ENDC, stream=sys.stdout):
    print(f"{color}{msg}{Colors.ENDC}", file=stream)


# --- COMMANDS ---

async def download() -> int:
    store = container.word_store()
    use_case = container.setup_store_use_case()

    if store.is_ready():
        size = os.path.getsize(store.path) / MB
        log(f"✓ {store.path} already exists ({size:.0f} MB). Delete it first to re-download.", Colors.GREEN)
        return 0

    log(f"Downloading dictionary store from {settings.STORE_URL}")
    log(f"  → {store.path}\n")

    last_step = -1
    try:
        async for fraction in use_case.execute():
            pct = int(fraction * 100)
            # Redraw in 5% steps
            if pct // 5 != last_step:
                last_step = pct // 5
                sys.stdout.write(f"\r  {pct}%")
                sys.stdout.flush()
    except (DomainError, OSError) as e:
        sys.stdout.write("\n")
        log(f"✗ Download failed: {e}", Colors.FAIL, stream=sys.stderr)
        return 1
    finally:
        await store.close()

    sys.stdout.write("\n")
    size = os.path.getsize(store.path) / MB
    log(f"✓ Done: {size:.0f} MB written to {store.path}", Colors.GREEN)
    return 0


async def search(query: str, mode: SearchMode, page: int) -> int:
    session = container.search_session()
    try:
        result = await session.submit(query, mode)
        while result is not None and session.page < page and session.has_more:
            result = await session.load_more()
    finally:
        await container.word_store().close()

    if result is None:
        log("No search performed (empty query, or too short for 'contains').", Colors.WARNING)
        return 0

    for word in result.data:
        print(to_palochka(word))
    log(f"\npage {result.page}/{result.total_pages}")
    return 0


async def lookup(word: str) -> int:
    use_case = container.lookup_word_use_case()
    # Terminal input may use the palochka letter; stored keys use the placeholder
    word = normalize_query(word)
    try:
        result = await use_case.execute(word)
    finally:
        await container.word_store().close()

    if result is None:
        log(f"No entries for {word!r}.", Colors.WARNING)
        return 1

    print(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))
    return 0


def serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run(
        "learn_circassian.adapters.api.main:create_app",
        host=host,
        port=port,
        factory=True,
        log_config=None,
    )
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Learn Circassian Dictionary backend")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    serve_parser = subparsers.add_parser("serve", help="Run the loopback API for the desktop UI")
    serve_parser.add_argument("--host", default=settings.HOST)
    serve_parser.add_argument("--port", type=int, default=settings.PORT)

    subparsers.add_parser("download", help="Download the dictionary store if missing")
    subparsers.add_parser("path", help="Print the expected store path")

    search_parser = subparsers.add_parser("search", help="Search words")
    search_parser.add_argument("query")
    search_parser.add_argument("--contains", action="store_true", help="Substring instead of prefix match")
    search_parser.add_argument("--page", type=int, default=1)

    lookup_parser = subparsers.add_parser("lookup", help="Show all entries of a word")
    lookup_parser.add_argument("word")

    args = parser.parse_args(argv)

    # Default to help
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(log_format="console" if args.command != "serve" else None,
                      log_level="WARNING" if args.command != "serve" else None)

    try:
        if args.command == "serve":
            return serve(args.host, args.port)

        if args.command == "download":
            return asyncio.run(download())

        if args.command == "path":
            print(container.word_store().path)
            return 0

        if args.command == "search":
            mode = SearchMode.CONTAINS if args.contains else SearchMode.STARTS_WITH
            return asyncio.run(search(args.query, mode, args.page))

        if args.command == "lookup":
            return asyncio.run(lookup(args.word))

    except DomainError as e:
        log(f"✗ {e}", Colors.FAIL, stream=sys.stderr)
        return 1
    except KeyboardInterrupt:
        log("\n🛑 Aborted by user.", Colors.WARNING)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())

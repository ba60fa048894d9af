# learn_circassian\core\ports\word_store.py
from typing import List, Optional, Protocol, Sequence

from learn_circassian.core.domain.models import Dictionary, WordRecord


class IWordStore(Protocol):
    """
    Port for read-only access to the dictionary store.
    The store owns exactly one connection for the lifetime of the process.
    """

    @property
    def path(self) -> str:
        """Absolute path of the store file."""
        ...

    def is_ready(self) -> bool:
        """True if the store file exists (no integrity or schema check)."""
        ...

    async def count_words(self, pattern: str) -> int:
        """
        Counts words matching an already-escaped LIKE pattern.

        Args:
            pattern: LIKE pattern using '\\' as its escape character.
        """
        ...

    async def find_words(self, pattern: str, limit: int, offset: int) -> List[str]:
        """Returns one page of matching words in ascending order."""
        ...

    async def get_word(self, word: str) -> Optional[WordRecord]:
        """Exact-match lookup of a word record; None if absent."""
        ...

    async def get_dictionaries(self, ids: Sequence[int]) -> List[Dictionary]:
        """Fetches the metadata rows for the given ids in a single query."""
        ...

    async def close(self) -> None:
        """Releases the connection if open. Safe to call repeatedly."""
        ...

    async def health_check(self) -> bool:
        """Returns True if the store can be queried."""
        ...

# learn_circassian/core/use_cases/lookup_word.py
import json
from typing import Dict, List, Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from learn_circassian.core.domain.exceptions import DataIntegrityError
from learn_circassian.core.domain.models import (
    Dictionary,
    RawEntry,
    WordEntry,
    WordWithEntries,
)
from learn_circassian.core.domain.text import decode_entities
from learn_circassian.core.ports.word_store import IWordStore
from learn_circassian.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

_RAW_ENTRIES = TypeAdapter(List[RawEntry])


def parse_entries(word: str, serialized: str) -> List[RawEntry]:
    """Deserializes a word's stored entry list, failing on any shape mismatch."""
    try:
        return _RAW_ENTRIES.validate_python(json.loads(serialized))
    except json.JSONDecodeError as e:
        raise DataIntegrityError(word, f"entries are not valid JSON ({e.msg})") from e
    except ValidationError as e:
        raise DataIntegrityError(word, f"entries have an unexpected shape ({e.error_count()} errors)") from e


def unique_dictionary_ids(entries: List[RawEntry]) -> List[int]:
    """Referenced dictionary ids, de-duplicated, in order of first appearance."""
    return list(dict.fromkeys(entry.id for entry in entries))


class LookupWord:
    """
    Use Case: assembles every dictionary entry stored for one exact word.

    Responsibilities:
    1. Exact-key lookup (no case folding; the caller passes the stored key).
    2. One batched metadata fetch for all referenced dictionaries.
    3. Entity-decoding of each entry's HTML.
    """

    def __init__(self, store: IWordStore):
        self.store = store

    async def execute(self, word: str) -> Optional[WordWithEntries]:
        with tracer.start_as_current_span("use_case.lookup_word") as span:
            try:
                record = await self.store.get_word(word)
                if record is None:
                    logger.info("word_lookup_not_found", word=word)
                    span.set_attribute("app.found", False)
                    return None

                span.set_attribute("app.found", True)
                result = await self._assemble(record.word, record.entries)
            except DataIntegrityError as e:
                logger.error("word_lookup_integrity_fault", word=word, detail=e.detail)
                raise

            span.set_attribute("app.entry_count", len(result.entries))
            return result

    async def _assemble(self, word: str, serialized: str) -> WordWithEntries:
        raw_entries = parse_entries(word, serialized)
        dict_ids = unique_dictionary_ids(raw_entries)

        dictionaries: Dict[int, Dictionary] = {
            d.id: d for d in await self.store.get_dictionaries(dict_ids)
        }

        missing = [i for i in dict_ids if i not in dictionaries]
        if missing:
            raise DataIntegrityError(word, f"unknown dictionary id(s) {missing}")

        return WordWithEntries(
            word=word,
            entries=[
                WordEntry(
                    id=entry.id,
                    html=decode_entities(entry.html),
                    dictionary=dictionaries[entry.id],
                )
                for entry in raw_entries
            ],
        )

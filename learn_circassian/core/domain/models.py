# learn_circassian\core\domain\models.py
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---

class SearchMode(str, Enum):
    """How the query is matched against stored words."""
    STARTS_WITH = "starts_with"  # prefix match
    CONTAINS = "contains"        # substring match anywhere

# --- Entities ---

class Dictionary(BaseModel):
    """
    Metadata of one source lexicon.
    Matches a row of the `dictionaries` table.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Stable numeric identifier")
    title: str
    from_lang: str = Field(..., description="Source language code (e.g., 'Ady', 'Kbd')")
    to_lang: str = Field(..., description="Target language code (e.g., 'Ru', 'En')")

class RawEntry(BaseModel):
    """
    One element of the serialized `words.entries` array, as stored.
    `html` is still entity-encoded.
    """
    id: int = Field(..., description="Owning dictionary id")
    html: str

class WordRecord(BaseModel):
    """A row of the `words` table; `entries` is the raw JSON text."""
    word: str
    entries: str

class WordEntry(BaseModel):
    """One dictionary's explanation of a word, joined to its dictionary."""
    id: int
    html: str
    dictionary: Dictionary

class WordWithEntries(BaseModel):
    word: str
    entries: List[WordEntry] = Field(default_factory=list)

# --- Query Values ---

class SearchRequest(BaseModel):
    """
    A search as issued by the UI. The query is expected to be normalised
    already (case-folded, palochka placeholder applied).
    """
    query: str
    mode: SearchMode = SearchMode.STARTS_WITH
    page: int = Field(1, ge=1, description="1-indexed page number")
    limit: int = Field(50, gt=0, description="Page size")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

class PaginatedResult(BaseModel):
    """One page of matching words plus the total page count."""
    model_config = ConfigDict(populate_by_name=True)

    data: List[str] = Field(default_factory=list)
    page: int
    total_pages: int = Field(..., alias="totalPages")

class StoreStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    needs_setup: bool = Field(..., alias="needsSetup")

class StoreLocation(BaseModel):
    path: str

class FilteredWord(BaseModel):
    """
    A word's entries split by the active language filter: `entries` match it,
    `filtered` are the ones hidden by it.
    """
    model_config = ConfigDict(populate_by_name=True)

    word: str
    entries: List[WordEntry] = Field(default_factory=list)
    filtered: List[WordEntry] = Field(default_factory=list)
    from_options: List[str] = Field(default_factory=list, alias="fromOptions")
    to_options: List[str] = Field(default_factory=list, alias="toOptions")
    language_names: Dict[str, str] = Field(
        default_factory=dict, alias="languageNames", description="English display name of every offered code"
    )
    from_lang: Optional[str] = Field(None, alias="fromLang")
    to_lang: Optional[str] = Field(None, alias="toLang")

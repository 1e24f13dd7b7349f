from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class SearchResult:
    """A single normalized search hit.

    Engine-agnostic, flat representation of one result item. Built only by
    the ResultNormalizer.
    """

    title: str
    url: str = ""
    content_type: str = ""
    score: float = 1.0
    summary: Optional[str] = None  # <= 200 chars, tags stripped
    author: Optional[str] = None


@dataclass(frozen=True)
class ResultSet:
    """Normalized results for one query, in the engine's relevance order."""

    query: str
    results: Tuple[SearchResult, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable, store an immutable tuple
        object.__setattr__(self, "results", tuple(self.results))

    def __len__(self) -> int:
        return len(self.results)

    @property
    def is_empty(self) -> bool:
        return not self.results


class SummarySource(str, Enum):
    GENERATED = "generated"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class SummaryRequest:
    query: str
    results: ResultSet
    system_prompt: str
    top_n: int = 5


@dataclass(frozen=True)
class SummaryResult:
    text: str
    source: SummarySource


@dataclass(frozen=True)
class SearchOutcome:
    """What the presentation layer receives for one query."""

    result_set: ResultSet
    summary: SummaryResult


@dataclass(frozen=True)
class IndexInfo:
    id: str
    label: str
    description: str = ""
    server_id: str = ""
    enabled: bool = True


# --- Raw items, as handed over by a search engine backend ---


@dataclass(frozen=True)
class EntityOwner:
    display_name: str


@dataclass(frozen=True)
class ContentEntity:
    """The content entity a raw search hit points at."""

    label: str
    entity_type: str = "node"
    bundle: Optional[str] = None  # subtype within a typed content family
    url: Optional[str] = None  # canonical link, if the entity has one
    body: Optional[str] = None  # long-text field, may contain HTML
    owner: Optional[EntityOwner] = None


@dataclass(frozen=True)
class RawResultItem:
    score: Optional[float]
    entity: Optional[ContentEntity]  # None when the entity cannot be resolved


# --- Tagged results ---


class ErrorKind(str, Enum):
    INDEX_UNAVAILABLE = "index_unavailable"
    SEARCH_ENGINE_FAILURE = "search_engine_failure"
    ITEM_NORMALIZATION_FAILURE = "item_normalization_failure"
    SUMMARIZATION_UNAVAILABLE = "summarization_unavailable"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str = ""

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


@dataclass(frozen=True)
class SkippedItem:
    position: int
    reason: str


@dataclass(frozen=True)
class NormalizedBatch:
    """Outcome of normalizing one batch of raw items."""

    results: List[SearchResult] = field(default_factory=list)
    skipped: List[SkippedItem] = field(default_factory=list)

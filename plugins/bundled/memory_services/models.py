"""Memory service payload models."""

from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ServiceModel(BaseModel):
    """Base for service payloads; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class Memory(ServiceModel):
    id: str = ""
    title: str = ""
    content: str = ""
    memory_type: Optional[str] = None
    tags: List[str] = []
    similarity: Optional[float] = None
    created_at: Optional[str] = None


class SearchResult(ServiceModel):
    results: List[Memory] = []
    total: Optional[int] = None


class MemoryList(ServiceModel):
    data: List[Memory] = []


class TagSuggestion(ServiceModel):
    tag: str
    confidence: float = 0.0


class TagSuggestions(ServiceModel):
    suggestions: List[TagSuggestion] = []


class RelatedMemory(ServiceModel):
    memory: Memory
    similarity: float = 0.0


class RelatedMemories(ServiceModel):
    related: List[RelatedMemory] = []


class DuplicatePair(ServiceModel):
    memory1: Memory
    memory2: Memory
    similarity: float = 0.0


class DuplicateReport(ServiceModel):
    duplicates: List[DuplicatePair] = []


class BehaviorPattern(ServiceModel):
    trigger: str = ""
    actions: List[Any] = []
    confidence: float = 0.0
    lastUsed: Optional[str] = None


class BehaviorPatterns(ServiceModel):
    patterns: List[BehaviorPattern] = []


class NextActions(ServiceModel):
    suggestions: List[str] = []


class RecordedPattern(ServiceModel):
    pattern_id: Optional[str] = None
    recorded: bool = False


@dataclass
class ApiResult(Generic[T]):
    """Outcome of one memory service call.

    Exactly one of `data` / `error` is meaningful: failures (timeouts,
    transport errors, non-2xx) are reported here instead of raised.
    """

    data: Optional[T] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

"""
Feedback model: content chunks, their embeddings, and user save/skip labels.

Used by the feedback store and the engine. Built from storage dicts via
ContentChunk.model_validate(d) or ensure_chunks().
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

# Historical embedding width (text-embedding-3-small); not enforced by the math.
EMBEDDING_DIMENSIONS = 1536

Embedding = List[float]


class FeedbackLabel(str, Enum):
    """Ground-truth training signal for a (user, chunk) pair."""

    SAVED = "saved"
    SKIPPED = "skipped"
    UNLABELED = "unlabeled"


class ContentChunk(BaseModel):
    """
    One text chunk (podcast transcript or article excerpt) surfaced as a signal.

    embedding is None until the ingestion pipeline has embedded the chunk;
    such chunks are excluded from every model computation.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    content: Optional[str] = ""
    embedding: Optional[Embedding] = None

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None and len(self.embedding) > 0


class FeedbackCounts(BaseModel):
    """Label totals for one user."""

    saved: int = 0
    skipped: int = 0
    saved_without_embedding: int = 0


def ensure_chunks(items: List[Union[Dict[str, Any], "ContentChunk"]]) -> List["ContentChunk"]:
    """Convert list of dicts or ContentChunks to list of ContentChunk models."""
    return [
        ContentChunk.model_validate(c) if isinstance(c, dict) else c
        for c in items
    ]

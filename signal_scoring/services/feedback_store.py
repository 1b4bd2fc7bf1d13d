"""
Feedback Store abstraction.

Supplies chunk embeddings and per-user save/skip labels to the engine.
Storage itself lives outside this package; InMemoryFeedbackStore is the
reference implementation used for local runs, tests, and JSON fixtures.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple, Union

import numpy as np

from ..errors import FeedbackConflictError, MissingEmbeddingError
from ..models.feedback import ContentChunk, Embedding, FeedbackCounts, FeedbackLabel, ensure_chunks

logger = logging.getLogger(__name__)


class FeedbackStore(Protocol):
    """Protocol for the storage collaborator the engine reads from."""

    def fetch_saved_embeddings(self, user_id: str, limit: Optional[int] = None) -> List[Embedding]:
        """Embeddings of chunks the user saved, most recent first; chunks without an embedding are left out."""
        ...

    def fetch_skipped_embeddings(self, user_id: str, limit: Optional[int] = None) -> List[Embedding]:
        """Embeddings of chunks the user skipped; chunks without an embedding are left out."""
        ...

    def fetch_random_embedding_sample(self, limit: int) -> List[Embedding]:
        """Random embeddings from the whole corpus, regardless of user or label."""
        ...

    def fetch_candidate_embedding(self, chunk_id: str) -> Embedding:
        """Embedding of one chunk; raises MissingEmbeddingError when it has none."""
        ...

    def count_saved_for_user(self, user_id: str) -> int:
        """Number of saved chunks that have an embedding (drives the learning phase)."""
        ...

    def feedback_counts(self, user_id: str) -> FeedbackCounts:
        """Saved / skipped totals, including saves whose chunk has no embedding."""
        ...

    def record_feedback(self, user_id: str, chunk_id: str, label: Union[str, FeedbackLabel]) -> None:
        """Persist a save/skip. Raises FeedbackConflictError if the pair is already actioned."""
        ...

    def undo_feedback(self, user_id: str, chunk_id: str) -> bool:
        """Reset a pair to unlabeled. Return True if a label was removed."""
        ...


class InMemoryFeedbackStore:
    """
    Feedback store holding chunks and labels in memory.

    Labels are set once per (user, chunk); undo_feedback resets a pair to
    unlabeled so it can be set again. Label writes hold a lock and reads work
    on a snapshot, so a read racing a write sees the old or the new label set.
    """

    def __init__(
        self,
        chunks: Optional[List[Union[dict, ContentChunk]]] = None,
        seed: Optional[int] = None,
    ):
        self._chunks: Dict[str, ContentChunk] = {}
        self._labels: Dict[Tuple[str, str], FeedbackLabel] = {}
        self._lock = threading.Lock()
        self._rng = np.random.default_rng(seed)
        for chunk in ensure_chunks(chunks or []):
            self.add_chunk(chunk)

    @classmethod
    def from_json(cls, path: Union[str, Path], seed: Optional[int] = None) -> "InMemoryFeedbackStore":
        """
        Load from a JSON file: {"chunks": [...], "feedback": [{"user_id", "chunk_id", "label"}]}.
        """
        with open(path) as f:
            data = json.load(f)
        store = cls(data.get("chunks", []), seed=seed)
        for item in data.get("feedback", []):
            store.record_feedback(item["user_id"], item["chunk_id"], item["label"])
        logger.info(
            "[store] LOADED path=%s chunks=%s feedback=%s",
            path, len(store._chunks), len(store._labels),
        )
        return store

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_chunk(self, chunk: Union[dict, ContentChunk]) -> ContentChunk:
        chunk = ContentChunk.model_validate(chunk) if isinstance(chunk, dict) else chunk
        self._chunks[chunk.id] = chunk
        return chunk

    def record_feedback(
        self,
        user_id: str,
        chunk_id: str,
        label: Union[str, FeedbackLabel],
    ) -> None:
        """Set a save/skip label. Raises FeedbackConflictError if already actioned."""
        label = FeedbackLabel(label)
        if chunk_id not in self._chunks:
            raise KeyError(f"Unknown chunk {chunk_id!r}")
        if label == FeedbackLabel.UNLABELED:
            self.undo_feedback(user_id, chunk_id)
            return
        with self._lock:
            existing = self._labels.get((user_id, chunk_id))
            if existing is not None:
                raise FeedbackConflictError(user_id, chunk_id, existing.value)
            self._labels[(user_id, chunk_id)] = label
        if label == FeedbackLabel.SAVED and not self._chunks[chunk_id].has_embedding:
            logger.warning(
                "[store] SAVED_WITHOUT_EMBEDDING user_id=%s chunk_id=%s", user_id, chunk_id,
            )

    def undo_feedback(self, user_id: str, chunk_id: str) -> bool:
        """Reset a pair to unlabeled. Returns True if a label was removed."""
        with self._lock:
            return self._labels.pop((user_id, chunk_id), None) is not None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_label(self, user_id: str, chunk_id: str) -> FeedbackLabel:
        return self._labels.get((user_id, chunk_id), FeedbackLabel.UNLABELED)

    def _chunks_with_label(self, user_id: str, label: FeedbackLabel) -> List[ContentChunk]:
        """Chunks carrying the label, most recently labeled first."""
        with self._lock:
            items = list(self._labels.items())
        return [
            self._chunks[chunk_id]
            for (uid, chunk_id), lbl in reversed(items)
            if uid == user_id and lbl == label
        ]

    def _embeddings_with_label(
        self, user_id: str, label: FeedbackLabel, limit: Optional[int]
    ) -> List[Embedding]:
        embeddings = [
            list(c.embedding) for c in self._chunks_with_label(user_id, label) if c.has_embedding
        ]
        return embeddings if limit is None else embeddings[:limit]

    def fetch_saved_embeddings(self, user_id: str, limit: Optional[int] = None) -> List[Embedding]:
        return self._embeddings_with_label(user_id, FeedbackLabel.SAVED, limit)

    def fetch_skipped_embeddings(self, user_id: str, limit: Optional[int] = None) -> List[Embedding]:
        return self._embeddings_with_label(user_id, FeedbackLabel.SKIPPED, limit)

    def fetch_random_embedding_sample(self, limit: int) -> List[Embedding]:
        pool = [c for c in self._chunks.values() if c.has_embedding]
        if limit <= 0 or not pool:
            return []
        take = min(limit, len(pool))
        picks = self._rng.choice(len(pool), size=take, replace=False)
        return [list(pool[int(i)].embedding) for i in picks]

    def fetch_candidate_embedding(self, chunk_id: str) -> Embedding:
        chunk = self._chunks.get(chunk_id)
        if chunk is None or not chunk.has_embedding:
            raise MissingEmbeddingError(chunk_id)
        return list(chunk.embedding)

    def count_saved_for_user(self, user_id: str) -> int:
        return sum(1 for c in self._chunks_with_label(user_id, FeedbackLabel.SAVED) if c.has_embedding)

    def feedback_counts(self, user_id: str) -> FeedbackCounts:
        saved = self._chunks_with_label(user_id, FeedbackLabel.SAVED)
        skipped = self._chunks_with_label(user_id, FeedbackLabel.SKIPPED)
        return FeedbackCounts(
            saved=len(saved),
            skipped=len(skipped),
            saved_without_embedding=sum(1 for c in saved if not c.has_embedding),
        )

"""
Scoring model: phases, confidence buckets, and per-candidate score results.

Contains:
- LearningPhase, Confidence, ScoringMethod: enums describing how a score was made
- CandidateScore: one scored chunk
- BatchScoreResult: many scored chunks plus the chunks that could not be scored
- NoveltyResult: redundancy of a candidate against recent saves
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class LearningPhase(str, Enum):
    """Derived from the saved count; never stored."""

    COLD_START = "cold_start"
    LEARNED = "learned"


class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ScoringMethod(str, Enum):
    """Which path produced a score."""

    COLD_START = "cold_start"
    POSITIVE_ONLY = "positive_only"
    CONTRASTIVE = "contrastive"
    CONTRASTIVE_FALLBACK = "contrastive_fallback"


class CandidateScore(BaseModel):
    """Relevance score for one (user, chunk) pair, snapshotted at presentation time."""

    chunk_id: str
    score: float = Field(ge=0.0, le=1.0)
    confidence: Confidence
    phase: LearningPhase
    method: ScoringMethod


class BatchScoreResult(BaseModel):
    """Scores for a batch of candidates; chunks without embeddings are listed, not scored."""

    phase: LearningPhase
    method: ScoringMethod
    scores: List[CandidateScore] = Field(default_factory=list)
    missing_embedding_ids: List[str] = Field(default_factory=list)

    @property
    def missing_embedding_count(self) -> int:
        return len(self.missing_embedding_ids)


class NoveltyResult(BaseModel):
    """How much a candidate repeats what the user already saved."""

    novelty_score: float = Field(ge=0.0, le=2.0)  # 1 - avg similarity; 1.0 = novel
    avg_similarity: float = 0.0
    max_similarity: float = 0.0
    cluster_size: int = 0  # saves compared against
    adjustment: int = 0  # score points to apply, <= 0

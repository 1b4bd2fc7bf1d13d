"""Data models for the scoring engine."""

from .config import DEFAULT_CONFIG, ScoringConfig, resolve_config
from .diagnostics import (
    CentroidContrast,
    CentroidContrastVerdict,
    DistributionBucket,
    LearningStatus,
    RandomSimilarityStats,
    SimilarityStats,
    ValidationReport,
    Verdict,
)
from .feedback import (
    EMBEDDING_DIMENSIONS,
    ContentChunk,
    Embedding,
    FeedbackCounts,
    FeedbackLabel,
    ensure_chunks,
)
from .scoring import (
    BatchScoreResult,
    CandidateScore,
    Confidence,
    LearningPhase,
    NoveltyResult,
    ScoringMethod,
)

__all__ = [
    "NoveltyResult",
    "DEFAULT_CONFIG",
    "EMBEDDING_DIMENSIONS",
    "BatchScoreResult",
    "CandidateScore",
    "CentroidContrast",
    "CentroidContrastVerdict",
    "Confidence",
    "ContentChunk",
    "DistributionBucket",
    "Embedding",
    "FeedbackCounts",
    "FeedbackLabel",
    "LearningPhase",
    "LearningStatus",
    "RandomSimilarityStats",
    "ScoringConfig",
    "ScoringMethod",
    "SimilarityStats",
    "ValidationReport",
    "Verdict",
    "ensure_chunks",
    "resolve_config",
]

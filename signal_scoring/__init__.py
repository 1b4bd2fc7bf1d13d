"""
Signal Scoring: personalization engine for saved/skipped content signals.

Single entry point for the package:
- models/: ScoringConfig, feedback labels, score and report models
- utils/: centroid, cosine similarity, bucketing
- ranking/: preference centroid, relevance scorer (cold start vs learned), selection
- reporting/: validation diagnostics, score distribution
- services/: FeedbackStore protocol and in-memory store
- engine: ScoringEngine, the boundary used by the reporting/UI layer
"""

from .engine import ScoringEngine
from .errors import (
    DimensionMismatchError,
    EmptyInputError,
    FeedbackConflictError,
    InsufficientDataError,
    MissingEmbeddingError,
    ScoringError,
)
from .models import (
    DEFAULT_CONFIG,
    EMBEDDING_DIMENSIONS,
    BatchScoreResult,
    CandidateScore,
    Confidence,
    DistributionBucket,
    FeedbackLabel,
    LearningPhase,
    LearningStatus,
    ScoringConfig,
    ScoringMethod,
    ValidationReport,
    Verdict,
)
from .ranking import RelevanceScorer, build_centroid, classify_confidence, select_signals
from .reporting import build_validation_report, score_distribution
from .services import FeedbackStore, InMemoryFeedbackStore

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "EMBEDDING_DIMENSIONS",
    "BatchScoreResult",
    "CandidateScore",
    "Confidence",
    "DimensionMismatchError",
    "DistributionBucket",
    "EmptyInputError",
    "FeedbackConflictError",
    "FeedbackLabel",
    "FeedbackStore",
    "InMemoryFeedbackStore",
    "InsufficientDataError",
    "LearningPhase",
    "LearningStatus",
    "MissingEmbeddingError",
    "RelevanceScorer",
    "ScoringConfig",
    "ScoringEngine",
    "ScoringError",
    "ScoringMethod",
    "ValidationReport",
    "Verdict",
    "build_centroid",
    "build_validation_report",
    "classify_confidence",
    "score_distribution",
    "select_signals",
]

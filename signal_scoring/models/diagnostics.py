"""
Diagnostics models: validation report, score distribution, learning status.

Read-only reporting views; none of these sit on the scoring write path.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from .scoring import LearningPhase


class SimilarityStats(BaseModel):
    avg: float = 0.0
    min: float = 0.0
    max: float = 0.0


class RandomSimilarityStats(SimilarityStats):
    sample_size: int = 0


class Verdict(str, Enum):
    """Interpretation of positive-vs-random separation."""

    WORKING_WELL = "working_well"
    NEEDS_MORE_DATA = "needs_more_data"
    NOT_WORKING = "not_working"


class CentroidContrastVerdict(str, Enum):
    TOO_SIMILAR = "too_similar"
    SOMEWHAT_SIMILAR = "somewhat_similar"
    WELL_SEPARATED = "well_separated"


class CentroidContrast(BaseModel):
    """Similarity between the saved centroid and the skipped centroid."""

    similarity: float
    verdict: CentroidContrastVerdict
    saved_count: int
    skipped_count: int


class ValidationReport(BaseModel):
    """
    Answer to "is the learned model discriminative?".

    has_saved_chunks=False is the expected new-user state, not an error; all
    other fields are then None.
    """

    has_saved_chunks: bool
    saved_chunk_count: int = 0
    pairwise_similarity: Optional[SimilarityStats] = None
    positive_to_centroid: Optional[SimilarityStats] = None
    random_to_centroid: Optional[RandomSimilarityStats] = None
    centroid_norm: Optional[float] = None
    separation_ratio: Optional[float] = None
    separation_pct: Optional[float] = None
    verdict: Optional[Verdict] = None
    saved_chunks_cluster: Optional[bool] = None
    centroid_well_defined: Optional[bool] = None
    diverse_interests: Optional[bool] = None
    centroid_contrast: Optional[CentroidContrast] = None

    @classmethod
    def not_enough_data(cls) -> "ValidationReport":
        return cls(has_saved_chunks=False)


class DistributionBucket(BaseModel):
    label: str
    count: int


class LearningStatus(BaseModel):
    """Quick overview of a user's learning progress."""

    phase: LearningPhase
    saved_count: int
    skipped_count: int
    saves_until_learned: int
    save_rate: float
    saved_without_embedding: int

"""Read-only reporting views: validation diagnostics and score distribution."""

from .distribution import DECILE_LABELS, score_distribution
from .validation import (
    build_validation_report,
    centroid_contrast,
    pairwise_similarity,
    positive_to_centroid,
    random_to_centroid,
    separation_ratio,
    separation_verdict,
)

__all__ = [
    "DECILE_LABELS",
    "build_validation_report",
    "centroid_contrast",
    "pairwise_similarity",
    "positive_to_centroid",
    "random_to_centroid",
    "score_distribution",
    "separation_ratio",
    "separation_verdict",
]

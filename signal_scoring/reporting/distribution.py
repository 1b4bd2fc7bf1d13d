"""
Score distribution over ten fixed decile buckets, "0-10%" through "90-100%".

All ten buckets are always returned, zero counts included, so callers can
render a table or histogram without special-casing missing ranges.
"""

from typing import List, Sequence

from ..models.diagnostics import DistributionBucket
from ..utils.vector_math import bucketize

DECILE_EDGES = [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9]
DECILE_LABELS = [f"{i * 10}-{(i + 1) * 10}%" for i in range(10)]


def score_distribution(scores: Sequence[float]) -> List[DistributionBucket]:
    """Count scores per decile; below 0 counts as 0-10%, above 1 as 90-100%."""
    counts = bucketize(scores, DECILE_EDGES)
    return [DistributionBucket(label=label, count=count) for label, count in zip(DECILE_LABELS, counts)]

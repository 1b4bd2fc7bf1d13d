"""
Novelty: does a candidate repeat what the user has already saved?

The candidate is compared against the user's most recent saves; the average
of its top-k similarities measures how tightly it clusters with them.
novelty = 1 - avg. High clustering earns a score penalty, and a near-identical
match marks the candidate as a duplicate.
"""

import logging
from typing import Sequence

from ..models.config import DEFAULT_CONFIG, ScoringConfig
from ..models.scoring import NoveltyResult
from ..utils.vector_math import cosine_similarity

logger = logging.getLogger(__name__)


def novelty_adjustment(avg_similarity: float, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    """Penalty tier for an average top-k similarity; 0 in novel territory."""
    if avg_similarity > config.novelty_strong_min:
        return config.novelty_strong_penalty
    if avg_similarity > config.novelty_moderate_min:
        return config.novelty_moderate_penalty
    if avg_similarity > config.novelty_mild_min:
        return config.novelty_mild_penalty
    return 0


def compute_novelty(
    embedding: Sequence[float],
    recent_saved: Sequence[Sequence[float]],
    top_k: int,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> NoveltyResult:
    """
    Novelty of embedding against recent_saved (most recent first, already capped).

    With fewer than top_k saves there is nothing to judge against: the
    candidate counts as novel with no penalty.
    """
    if len(recent_saved) < top_k:
        return NoveltyResult(novelty_score=1.0, cluster_size=len(recent_saved))

    sims = sorted((cosine_similarity(embedding, s) for s in recent_saved), reverse=True)
    top = sims[:top_k]
    avg = sum(top) / top_k
    result = NoveltyResult(
        novelty_score=1.0 - avg,
        avg_similarity=avg,
        max_similarity=top[0],
        cluster_size=len(recent_saved),
        adjustment=novelty_adjustment(avg, config),
    )
    if result.adjustment:
        logger.debug(
            "[novelty] REDUNDANT avg=%.3f max=%.3f adjustment=%s",
            avg, result.max_similarity, result.adjustment,
        )
    return result


def is_duplicate(
    embedding: Sequence[float],
    recent_saved: Sequence[Sequence[float]],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> bool:
    """True when the closest of the last duplicate_lookback saves is at or above duplicate_threshold."""
    result = compute_novelty(
        embedding, list(recent_saved)[: config.duplicate_lookback], config.duplicate_top_k, config
    )
    return result.max_similarity >= config.duplicate_threshold

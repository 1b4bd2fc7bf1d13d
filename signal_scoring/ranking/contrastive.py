"""
Contrastive scoring: similarity to the saved centroid minus similarity to the
skipped centroid.

Only usable when the two centroids are far enough apart; when saved and
skipped content sit in the same region of embedding space the difference is
noise and the scorer falls back to positive-only.
"""

import logging
from typing import Optional, Sequence

from ..models.config import ScoringConfig
from ..utils.vector_math import cosine_similarity
from .preference_model import PreferenceCentroid, build_centroid, similarity_to_centroid

logger = logging.getLogger(__name__)


def build_skipped_centroid(
    saved: PreferenceCentroid,
    skipped_embeddings: Sequence[Sequence[float]],
    config: ScoringConfig,
) -> Optional[PreferenceCentroid]:
    """
    Return the skipped centroid when contrastive scoring applies, else None.

    Requires config.contrastive_min_skipped skipped embeddings and a
    saved/skipped centroid similarity no higher than
    config.contrastive_max_centroid_similarity.
    """
    if len(skipped_embeddings) < config.contrastive_min_skipped:
        return None
    skipped = build_centroid(skipped_embeddings)
    similarity = cosine_similarity(saved.vector, skipped.vector)
    if similarity > config.contrastive_max_centroid_similarity:
        logger.warning(
            "[contrastive] CENTROIDS_TOO_SIMILAR similarity=%.3f max=%.2f saved=%s skipped=%s, using positive-only",
            similarity, config.contrastive_max_centroid_similarity,
            saved.sample_size, skipped.sample_size,
        )
        return None
    return skipped


def contrastive_score(
    embedding: Sequence[float],
    saved: PreferenceCentroid,
    skipped: PreferenceCentroid,
) -> float:
    """Map (sim_saved - sim_skipped) from [-2, 2] into [0, 1]."""
    diff = similarity_to_centroid(embedding, saved) - similarity_to_centroid(embedding, skipped)
    return max(0.0, min(1.0, (diff + 2.0) / 4.0))

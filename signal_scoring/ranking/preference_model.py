"""
Preference centroid (mean of a user's saved embeddings).

The centroid is never stored or updated incrementally: callers rebuild it from
the full saved set on every scoring or reporting call.
"""

import logging
from typing import List, Sequence

from pydantic import BaseModel

from ..errors import EmptyInputError, InsufficientDataError
from ..utils.vector_math import centroid, cosine_similarity, vector_norm

logger = logging.getLogger(__name__)


class PreferenceCentroid(BaseModel):
    """Mean vector of the saved set it was built from."""

    vector: List[float]
    sample_size: int

    @property
    def dimensions(self) -> int:
        return len(self.vector)


def build_centroid(saved_embeddings: Sequence[Sequence[float]]) -> PreferenceCentroid:
    """
    Build the preference centroid from saved embeddings.

    Raises InsufficientDataError when there are none, so callers can branch
    on "no preference signal yet" separately from EmptyInputError.
    """
    try:
        vector = centroid(saved_embeddings)
    except EmptyInputError as e:
        raise InsufficientDataError(saved_count=0) from e
    return PreferenceCentroid(vector=vector, sample_size=len(saved_embeddings))


def centroid_norm(preference: PreferenceCentroid) -> float:
    """
    Euclidean norm of the centroid.

    A value near zero means the saved set cancels itself out (e.g. opposite
    topics averaging away).
    """
    norm = vector_norm(preference.vector)
    if norm < 1e-6:
        logger.warning(
            "[centroid] DEGENERATE_CENTROID norm=%.3g sample_size=%s",
            norm, preference.sample_size,
        )
    return norm


def similarity_to_centroid(embedding: Sequence[float], preference: PreferenceCentroid) -> float:
    """Cosine similarity of an embedding to the centroid."""
    return cosine_similarity(embedding, preference.vector)

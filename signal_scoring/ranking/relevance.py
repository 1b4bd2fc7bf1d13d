"""
Relevance scoring: pick the learning phase, score a candidate, bucket the score.

Cold start (fewer than learned_phase_min_saved saves): scores come from the
cold-start scorer; the centroid is never built. Learned: cosine similarity of
the candidate to the centroid of all saved embeddings, clipped into [0, 1].

Clipping assumes natural-language embeddings rarely yield negative cosine
similarity; a different embedding source must re-validate that.
"""

import logging
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict

from ..errors import MissingEmbeddingError
from ..models.config import DEFAULT_CONFIG, ScoringConfig, resolve_config
from ..models.scoring import CandidateScore, Confidence, LearningPhase, ScoringMethod
from .cold_start import ColdStartScorer, RandomColdStartScorer
from .contrastive import build_skipped_centroid, contrastive_score
from .preference_model import PreferenceCentroid, build_centroid, similarity_to_centroid

logger = logging.getLogger(__name__)


def determine_phase(saved_count: int, config: ScoringConfig = DEFAULT_CONFIG) -> LearningPhase:
    """Cold start below the threshold; learned at or above it."""
    if saved_count >= config.learned_phase_min_saved:
        return LearningPhase.LEARNED
    return LearningPhase.COLD_START


def classify_confidence(score: float, config: ScoringConfig = DEFAULT_CONFIG) -> Confidence:
    """low: score < low_max; medium: low_max <= score < medium_max; high: the rest."""
    if score < config.confidence_low_max:
        return Confidence.LOW
    if score < config.confidence_medium_max:
        return Confidence.MEDIUM
    return Confidence.HIGH


def similarity_to_score(similarity: float) -> float:
    """Clip a cosine similarity into the [0, 1] relevance range."""
    return max(0.0, min(1.0, similarity))


def require_embedding(chunk_id: str, embedding: Optional[Sequence[float]]) -> Sequence[float]:
    """Return the embedding or raise MissingEmbeddingError; never default."""
    if embedding is None or len(embedding) == 0:
        logger.warning("[scoring] MISSING_EMBEDDING chunk_id=%s", chunk_id)
        raise MissingEmbeddingError(chunk_id)
    return embedding


class ScoringModel(BaseModel):
    """Per-user state for one scoring pass, rebuilt on every call."""

    model_config = ConfigDict(frozen=True)

    phase: LearningPhase
    method: ScoringMethod
    saved_count: int
    saved_centroid: Optional[PreferenceCentroid] = None
    skipped_centroid: Optional[PreferenceCentroid] = None


class RelevanceScorer:
    """Scores candidate chunks for one user given their current feedback."""

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        cold_start_scorer: Optional[ColdStartScorer] = None,
    ):
        self.config = resolve_config(config)
        self.cold_start_scorer = cold_start_scorer or RandomColdStartScorer()

    def prepare(
        self,
        saved_embeddings: Sequence[Sequence[float]],
        saved_count: Optional[int] = None,
        skipped_embeddings: Sequence[Sequence[float]] = (),
    ) -> ScoringModel:
        """
        Select the phase and build whatever centroids it needs.

        saved_count defaults to len(saved_embeddings); when the store reports
        more saves than it returned embeddings for, the smaller number wins.
        """
        count = len(saved_embeddings) if saved_count is None else min(saved_count, len(saved_embeddings))
        phase = determine_phase(count, self.config)
        if phase == LearningPhase.COLD_START:
            logger.debug("[scoring] COLD_START saved=%s min=%s", count, self.config.learned_phase_min_saved)
            return ScoringModel(phase=phase, method=ScoringMethod.COLD_START, saved_count=count)

        saved_centroid = build_centroid(saved_embeddings)
        if not self.config.contrastive_enabled:
            return ScoringModel(
                phase=phase,
                method=ScoringMethod.POSITIVE_ONLY,
                saved_count=count,
                saved_centroid=saved_centroid,
            )

        skipped_centroid = build_skipped_centroid(saved_centroid, skipped_embeddings, self.config)
        if skipped_centroid is not None:
            method = ScoringMethod.CONTRASTIVE
        elif len(skipped_embeddings) >= self.config.contrastive_min_skipped:
            method = ScoringMethod.CONTRASTIVE_FALLBACK
        else:
            method = ScoringMethod.POSITIVE_ONLY
        return ScoringModel(
            phase=phase,
            method=method,
            saved_count=count,
            saved_centroid=saved_centroid,
            skipped_centroid=skipped_centroid,
        )

    def score(
        self,
        model: ScoringModel,
        chunk_id: str,
        embedding: Optional[Sequence[float]],
    ) -> CandidateScore:
        """Score one candidate under a prepared model."""
        vector = require_embedding(chunk_id, embedding)
        if model.phase == LearningPhase.COLD_START:
            value = self.cold_start_scorer.score(chunk_id, vector)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Cold-start scorer returned {value} for {chunk_id!r}, expected [0, 1]")
        elif model.skipped_centroid is not None:
            value = contrastive_score(vector, model.saved_centroid, model.skipped_centroid)
        else:
            value = similarity_to_score(similarity_to_centroid(vector, model.saved_centroid))
        return CandidateScore(
            chunk_id=chunk_id,
            score=value,
            confidence=classify_confidence(value, self.config),
            phase=model.phase,
            method=model.method,
        )

    def score_candidate(
        self,
        chunk_id: str,
        embedding: Optional[Sequence[float]],
        saved_embeddings: Sequence[Sequence[float]],
        saved_count: Optional[int] = None,
        skipped_embeddings: Sequence[Sequence[float]] = (),
    ) -> CandidateScore:
        """Prepare and score in one step."""
        # Reject before building centroids so a missing embedding is never masked
        require_embedding(chunk_id, embedding)
        model = self.prepare(saved_embeddings, saved_count, skipped_embeddings)
        return self.score(model, chunk_id, embedding)


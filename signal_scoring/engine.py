"""
Scoring engine: the boundary the reporting/UI layer talks to.

Every call fetches the user's current feedback from the store and rebuilds
what it needs; nothing is cached between calls, so a save or undo is seen by
the next request.
"""

import logging
from typing import List, Optional, Sequence

from .errors import MissingEmbeddingError
from .models.config import ScoringConfig, resolve_config
from .models.diagnostics import DistributionBucket, LearningStatus, ValidationReport
from .models.scoring import BatchScoreResult, CandidateScore, LearningPhase, NoveltyResult, ScoringMethod
from .ranking.cold_start import ColdStartScorer
from .ranking.novelty import compute_novelty, is_duplicate
from .ranking.relevance import RelevanceScorer, ScoringModel, determine_phase
from .reporting.distribution import score_distribution
from .reporting.validation import build_validation_report
from .services.feedback_store import FeedbackStore

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Scores candidates and reports model health for one feedback store."""

    def __init__(
        self,
        store: FeedbackStore,
        config: Optional[ScoringConfig] = None,
        cold_start_scorer: Optional[ColdStartScorer] = None,
    ):
        self.store = store
        self.config = resolve_config(config)
        self.scorer = RelevanceScorer(self.config, cold_start_scorer)

    def _prepare(self, user_id: str) -> ScoringModel:
        saved_count = self.store.count_saved_for_user(user_id)
        if determine_phase(saved_count, self.config) == LearningPhase.COLD_START:
            # Cold start never reads the saved set
            return ScoringModel(
                phase=LearningPhase.COLD_START,
                method=ScoringMethod.COLD_START,
                saved_count=saved_count,
            )
        saved = self.store.fetch_saved_embeddings(user_id)
        skipped = self.store.fetch_skipped_embeddings(user_id) if self.config.contrastive_enabled else []
        return self.scorer.prepare(saved, saved_count=saved_count, skipped_embeddings=skipped)

    def score_candidate(self, user_id: str, chunk_id: str) -> CandidateScore:
        """
        Score one candidate chunk for a user.

        Raises MissingEmbeddingError when the chunk has no embedding;
        DimensionMismatchError propagates from the math. Cold-start scores are
        drawn fresh on each call: persist the first result as the presented score.
        """
        try:
            embedding = self.store.fetch_candidate_embedding(chunk_id)
        except MissingEmbeddingError:
            logger.warning("[engine] MISSING_EMBEDDING user_id=%s chunk_id=%s", user_id, chunk_id)
            raise
        model = self._prepare(user_id)
        result = self.scorer.score(model, chunk_id, embedding)
        logger.debug(
            "[engine] SCORED user_id=%s chunk_id=%s score=%.3f phase=%s method=%s",
            user_id, chunk_id, result.score, result.phase.value, result.method.value,
        )
        return result

    def score_candidates(self, user_id: str, chunk_ids: Sequence[str]) -> BatchScoreResult:
        """
        Score many candidates with one model build.

        Chunks without an embedding are listed in missing_embedding_ids rather
        than given a default score.
        """
        model = self._prepare(user_id)
        result = BatchScoreResult(phase=model.phase, method=model.method)
        for chunk_id in chunk_ids:
            try:
                embedding = self.store.fetch_candidate_embedding(chunk_id)
            except MissingEmbeddingError:
                logger.warning("[engine] MISSING_EMBEDDING user_id=%s chunk_id=%s", user_id, chunk_id)
                result.missing_embedding_ids.append(chunk_id)
                continue
            result.scores.append(self.scorer.score(model, chunk_id, embedding))
        if result.missing_embedding_ids:
            logger.warning(
                "[engine] MISSING_EMBEDDINGS user_id=%s missing=%s of=%s",
                user_id, result.missing_embedding_count, len(chunk_ids),
            )
        return result

    def get_novelty(self, user_id: str, chunk_id: str) -> NoveltyResult:
        """Redundancy of a candidate against the user's most recent saves."""
        embedding = self.store.fetch_candidate_embedding(chunk_id)
        recent = self.store.fetch_saved_embeddings(user_id, limit=self.config.novelty_lookback)
        return compute_novelty(embedding, recent, self.config.novelty_top_k, self.config)

    def is_duplicate(self, user_id: str, chunk_id: str) -> bool:
        """True when the candidate nearly matches one of the user's recent saves."""
        embedding = self.store.fetch_candidate_embedding(chunk_id)
        recent = self.store.fetch_saved_embeddings(user_id, limit=self.config.duplicate_lookback)
        return is_duplicate(embedding, recent, self.config)

    def get_validation_report(self, user_id: str) -> ValidationReport:
        """Validation report, or has_saved_chunks=False for a user with no saved embeddings."""
        saved = self.store.fetch_saved_embeddings(
            user_id, limit=self.config.validation_saved_sample_limit
        )
        if not saved:
            return ValidationReport.not_enough_data()
        random_sample = self.store.fetch_random_embedding_sample(
            self.config.validation_random_sample_limit
        )
        skipped = self.store.fetch_skipped_embeddings(
            user_id, limit=self.config.validation_saved_sample_limit
        )
        return build_validation_report(saved, random_sample, self.config, skipped_embeddings=skipped)

    def get_score_distribution(self, scores: Sequence[float]) -> List[DistributionBucket]:
        """Ten decile buckets, always all present."""
        return score_distribution(scores)

    def get_learning_status(self, user_id: str) -> LearningStatus:
        """Phase, label totals, and how many saves lack an embedding."""
        counts = self.store.feedback_counts(user_id)
        with_embedding = self.store.count_saved_for_user(user_id)
        actioned = counts.saved + counts.skipped
        if counts.saved_without_embedding:
            logger.warning(
                "[engine] SAVED_WITHOUT_EMBEDDING user_id=%s count=%s",
                user_id, counts.saved_without_embedding,
            )
        return LearningStatus(
            phase=determine_phase(with_embedding, self.config),
            saved_count=counts.saved,
            skipped_count=counts.skipped,
            saves_until_learned=max(0, self.config.learned_phase_min_saved - with_embedding),
            save_rate=counts.saved / actioned if actioned else 0.0,
            saved_without_embedding=counts.saved_without_embedding,
        )

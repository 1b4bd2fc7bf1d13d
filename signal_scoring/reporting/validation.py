"""
Validation diagnostics: is the preference centroid actually discriminative?

Compares how close the user's saved embeddings sit to their centroid against
how close a random corpus sample sits to it. If the two are indistinguishable
the model has learned nothing, whatever the raw numbers look like.

positive_to_centroid scores each saved embedding against a centroid that
includes it (no leave-one-out). That inflates separation slightly; the verdict
ratios were tuned against this metric, so it is kept as is.
"""

import logging
from itertools import combinations
from typing import List, Optional, Sequence

from ..models.config import DEFAULT_CONFIG, ScoringConfig
from ..models.diagnostics import (
    CentroidContrast,
    CentroidContrastVerdict,
    RandomSimilarityStats,
    SimilarityStats,
    ValidationReport,
    Verdict,
)
from ..ranking.preference_model import (
    PreferenceCentroid,
    build_centroid,
    centroid_norm,
    similarity_to_centroid,
)
from ..utils.vector_math import cosine_similarity

logger = logging.getLogger(__name__)


def _stats(values: List[float]) -> SimilarityStats:
    if not values:
        return SimilarityStats()
    return SimilarityStats(avg=sum(values) / len(values), min=min(values), max=max(values))


def pairwise_similarity(saved_embeddings: Sequence[Sequence[float]]) -> SimilarityStats:
    """Exact avg/min/max cosine similarity over all unordered pairs (O(n^2), n is capped)."""
    sims = [cosine_similarity(a, b) for a, b in combinations(saved_embeddings, 2)]
    return _stats(sims)


def positive_to_centroid(
    saved_embeddings: Sequence[Sequence[float]],
    centroid: PreferenceCentroid,
) -> SimilarityStats:
    """Similarity of each saved embedding to the centroid built from the same set."""
    return _stats([similarity_to_centroid(e, centroid) for e in saved_embeddings])


def random_to_centroid(
    random_sample: Sequence[Sequence[float]],
    centroid: PreferenceCentroid,
) -> RandomSimilarityStats:
    """Control group: similarity of random corpus embeddings to the centroid."""
    stats = _stats([similarity_to_centroid(e, centroid) for e in random_sample])
    return RandomSimilarityStats(**stats.model_dump(), sample_size=len(random_sample))


def separation_ratio(positive_avg: float, random_avg: float) -> Optional[float]:
    """positive_avg / random_avg, or None when the baseline is not positive."""
    if random_avg <= 0:
        return None
    return positive_avg / random_avg


def separation_verdict(
    positive_avg: float,
    random_avg: float,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> Verdict:
    """Three-tier verdict on the positive-vs-random separation ratio."""
    ratio = separation_ratio(positive_avg, random_avg)
    if ratio is None:
        # Baseline at or below zero: any positive clustering is clear separation
        return Verdict.WORKING_WELL if positive_avg > 0 else Verdict.NOT_WORKING
    if ratio >= config.verdict_working_ratio:
        return Verdict.WORKING_WELL
    if ratio >= config.verdict_weak_ratio:
        return Verdict.NEEDS_MORE_DATA
    return Verdict.NOT_WORKING


def centroid_contrast(
    saved_embeddings: Sequence[Sequence[float]],
    skipped_embeddings: Sequence[Sequence[float]],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> Optional[CentroidContrast]:
    """
    Similarity between the saved and skipped centroids.

    Above 0.85 the two sets occupy the same region of embedding space and
    saved-minus-skipped scoring has nothing to work with. None when either
    set is empty.
    """
    if not saved_embeddings or not skipped_embeddings:
        return None
    saved = build_centroid(saved_embeddings)
    skipped = build_centroid(skipped_embeddings)
    similarity = cosine_similarity(saved.vector, skipped.vector)
    if similarity > config.centroid_contrast_too_similar:
        verdict = CentroidContrastVerdict.TOO_SIMILAR
    elif similarity > config.centroid_contrast_somewhat_similar:
        verdict = CentroidContrastVerdict.SOMEWHAT_SIMILAR
    else:
        verdict = CentroidContrastVerdict.WELL_SEPARATED
    return CentroidContrast(
        similarity=similarity,
        verdict=verdict,
        saved_count=saved.sample_size,
        skipped_count=skipped.sample_size,
    )


def build_validation_report(
    saved_embeddings: Sequence[Sequence[float]],
    random_sample: Sequence[Sequence[float]],
    config: ScoringConfig = DEFAULT_CONFIG,
    skipped_embeddings: Sequence[Sequence[float]] = (),
) -> ValidationReport:
    """
    Full validation report over capped samples.

    No saved embeddings is the normal new-user state and yields
    ValidationReport(has_saved_chunks=False) rather than an error.
    """
    saved = list(saved_embeddings)[: config.validation_saved_sample_limit]
    if not saved:
        return ValidationReport.not_enough_data()
    sample = list(random_sample)[: config.validation_random_sample_limit]

    centroid = build_centroid(saved)
    pairwise = pairwise_similarity(saved)
    positive = positive_to_centroid(saved, centroid)
    baseline = random_to_centroid(sample, centroid)

    ratio = separation_ratio(positive.avg, baseline.avg) if sample else None
    verdict = separation_verdict(positive.avg, baseline.avg, config) if sample else None
    pct = (ratio - 1.0) * 100.0 if ratio is not None else None
    # One saved embedding has no pairs to judge clustering from
    has_pairs = len(saved) >= 2

    report = ValidationReport(
        has_saved_chunks=True,
        saved_chunk_count=len(saved),
        pairwise_similarity=pairwise,
        positive_to_centroid=positive,
        random_to_centroid=baseline,
        centroid_norm=centroid_norm(centroid),
        separation_ratio=ratio,
        separation_pct=pct,
        verdict=verdict,
        saved_chunks_cluster=pairwise.avg > config.cluster_pairwise_min if has_pairs else None,
        centroid_well_defined=positive.avg > config.centroid_well_defined_min,
        diverse_interests=pairwise.avg < config.diverse_pairwise_max if has_pairs else None,
        centroid_contrast=centroid_contrast(
            saved, list(skipped_embeddings)[: config.validation_saved_sample_limit], config
        ),
    )
    logger.info(
        "[validation] REPORT saved=%s random=%s positive_avg=%.3f random_avg=%.3f verdict=%s",
        len(saved), len(sample), positive.avg, baseline.avg,
        verdict.value if verdict else None,
    )
    return report

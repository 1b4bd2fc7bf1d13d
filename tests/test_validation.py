"""
Validation Report Tests

Checks the positive-vs-random separation diagnostics:
- a tight saved cluster against an off-cluster baseline is "working_well"
- verdict tiers at ratio >= 1.2 / >= 1.05 / below
- no saved embeddings is a normal result, not an error
- saved-vs-skipped centroid contrast tiers

Run:
----
    pytest tests/test_validation.py -v
"""

import pytest

from conftest import baseline_embeddings, clustered_embeddings
from signal_scoring.models.config import ScoringConfig
from signal_scoring.models.diagnostics import CentroidContrastVerdict, Verdict
from signal_scoring.reporting.validation import (
    build_validation_report,
    centroid_contrast,
    pairwise_similarity,
    separation_ratio,
    separation_verdict,
)


class TestBuildValidationReport:
    def test_clustered_saves_are_working_well(self):
        report = build_validation_report(clustered_embeddings(50), baseline_embeddings(50))

        assert report.has_saved_chunks
        assert report.saved_chunk_count == 50
        assert report.pairwise_similarity.min >= 100 / 101 - 1e-9
        assert report.positive_to_centroid.avg > 0.99
        assert report.random_to_centroid.avg == pytest.approx(0.2, abs=0.02)
        assert report.random_to_centroid.sample_size == 50
        assert report.separation_ratio > 1.2
        assert report.separation_pct == pytest.approx((report.separation_ratio - 1) * 100)
        assert report.verdict == Verdict.WORKING_WELL
        assert report.saved_chunks_cluster is True
        assert report.centroid_well_defined is True
        assert report.diverse_interests is False
        assert report.centroid_norm > 0

    def test_no_saved_embeddings(self):
        report = build_validation_report([], baseline_embeddings(10))
        assert report.has_saved_chunks is False
        assert report.verdict is None
        assert report.pairwise_similarity is None

    def test_no_random_sample_leaves_verdict_empty(self):
        report = build_validation_report(clustered_embeddings(5), [])
        assert report.has_saved_chunks
        assert report.separation_ratio is None
        assert report.verdict is None
        assert report.random_to_centroid.sample_size == 0

    def test_samples_are_capped(self):
        config = ScoringConfig(validation_saved_sample_limit=8, validation_random_sample_limit=5)
        report = build_validation_report(clustered_embeddings(30), baseline_embeddings(30), config)
        assert report.saved_chunk_count == 8
        assert report.random_to_centroid.sample_size == 5

    def test_skipped_embeddings_add_contrast(self):
        report = build_validation_report(
            clustered_embeddings(10), baseline_embeddings(10),
            skipped_embeddings=baseline_embeddings(10),
        )
        assert report.centroid_contrast is not None
        assert report.centroid_contrast.skipped_count == 10
        assert report.centroid_contrast.verdict == CentroidContrastVerdict.WELL_SEPARATED

    def test_single_saved_embedding_has_no_pairwise_flags(self):
        report = build_validation_report(clustered_embeddings(1), baseline_embeddings(10))
        assert report.has_saved_chunks
        assert report.saved_chunks_cluster is None
        assert report.diverse_interests is None
        assert report.centroid_well_defined is True

    def test_two_saved_embeddings_have_pairwise_flags(self):
        report = build_validation_report(clustered_embeddings(2), baseline_embeddings(10))
        assert report.saved_chunks_cluster is True
        assert report.diverse_interests is False

    def test_no_skips_no_contrast(self):
        report = build_validation_report(clustered_embeddings(10), baseline_embeddings(10))
        assert report.centroid_contrast is None


class TestSeparationVerdict:
    def test_working_boundary(self):
        assert separation_verdict(1.2, 1.0) == Verdict.WORKING_WELL

    def test_needs_more_data(self):
        assert separation_verdict(1.1, 1.0) == Verdict.NEEDS_MORE_DATA

    def test_weak_boundary(self):
        assert separation_verdict(1.05, 1.0) == Verdict.NEEDS_MORE_DATA
        assert separation_verdict(1.0499, 1.0) == Verdict.NOT_WORKING

    def test_not_working(self):
        assert separation_verdict(1.0, 1.0) == Verdict.NOT_WORKING
        assert separation_verdict(0.3, 0.5) == Verdict.NOT_WORKING

    def test_zero_baseline_with_positive_clustering(self):
        assert separation_ratio(0.5, 0.0) is None
        assert separation_verdict(0.5, 0.0) == Verdict.WORKING_WELL

    def test_zero_baseline_without_clustering(self):
        assert separation_verdict(0.0, 0.0) == Verdict.NOT_WORKING

    def test_ratios_from_config(self):
        config = ScoringConfig(verdict_working_ratio=2.0, verdict_weak_ratio=1.5)
        assert separation_verdict(1.8, 1.0, config) == Verdict.NEEDS_MORE_DATA
        assert separation_verdict(1.2, 1.0, config) == Verdict.NOT_WORKING


class TestPairwiseSimilarity:
    def test_single_vector_has_no_pairs(self):
        stats = pairwise_similarity([[1.0, 0.0]])
        assert (stats.avg, stats.min, stats.max) == (0.0, 0.0, 0.0)

    def test_three_vectors(self):
        stats = pairwise_similarity([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
        assert stats.min == pytest.approx(0.0)
        assert stats.max == pytest.approx(0.7071, abs=1e-4)
        assert stats.avg == pytest.approx((0.0 + 2 * 0.70710678) / 3)


class TestCentroidContrast:
    def test_well_separated(self):
        result = centroid_contrast([[1.0, 0.0]], [[0.0, 1.0]])
        assert result.similarity == pytest.approx(0.0)
        assert result.verdict == CentroidContrastVerdict.WELL_SEPARATED

    def test_somewhat_similar(self):
        result = centroid_contrast([[1.0, 0.0]], [[1.0, 1.0]])
        assert result.verdict == CentroidContrastVerdict.SOMEWHAT_SIMILAR

    def test_too_similar(self):
        result = centroid_contrast([[1.0, 0.0]], [[1.0, 0.1]])
        assert result.verdict == CentroidContrastVerdict.TOO_SIMILAR

    def test_empty_side_returns_none(self):
        assert centroid_contrast([[1.0, 0.0]], []) is None
        assert centroid_contrast([], [[1.0, 0.0]]) is None

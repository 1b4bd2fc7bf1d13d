"""
Preference Model Tests

The centroid of saved embeddings, its norm, and similarity to it.
An empty saved set is "no preference signal yet" (InsufficientDataError),
kept distinct from the math-level EmptyInputError.

Run:
----
    pytest tests/test_preference_model.py -v
"""

import pytest

from signal_scoring.errors import EmptyInputError, InsufficientDataError
from signal_scoring.ranking.preference_model import (
    build_centroid,
    centroid_norm,
    similarity_to_centroid,
)


class TestBuildCentroid:
    def test_mean_of_saved(self):
        pc = build_centroid([[1, 0], [0, 1], [1, 1]])
        assert pc.vector == pytest.approx([0.667, 0.667], abs=1e-3)
        assert pc.sample_size == 3
        assert pc.dimensions == 2

    def test_empty_raises_insufficient_data(self):
        with pytest.raises(InsufficientDataError):
            build_centroid([])

    def test_insufficient_data_is_not_empty_input(self):
        with pytest.raises(InsufficientDataError) as exc:
            build_centroid([])
        assert not isinstance(exc.value, EmptyInputError)

    def test_rebuilt_from_scratch_each_time(self):
        saved = [[1.0, 0.0]]
        first = build_centroid(saved)
        saved.append([0.0, 1.0])
        second = build_centroid(saved)
        assert first.vector == pytest.approx([1.0, 0.0])
        assert second.vector == pytest.approx([0.5, 0.5])


class TestCentroidNorm:
    def test_norm(self):
        pc = build_centroid([[1, 0], [0, 1], [1, 1]])
        assert centroid_norm(pc) == pytest.approx(0.943, abs=1e-3)

    def test_opposite_topics_collapse(self, caplog):
        pc = build_centroid([[1.0, 0.0], [-1.0, 0.0]])
        with caplog.at_level("WARNING"):
            assert centroid_norm(pc) == pytest.approx(0.0)
        assert "DEGENERATE_CENTROID" in caplog.text


class TestSimilarityToCentroid:
    def test_aligned(self):
        pc = build_centroid([[2.0, 0.0], [4.0, 0.0]])
        assert similarity_to_centroid([1.0, 0.0], pc) == pytest.approx(1.0)

    def test_orthogonal(self):
        pc = build_centroid([[1.0, 0.0]])
        assert similarity_to_centroid([0.0, 3.0], pc) == pytest.approx(0.0)

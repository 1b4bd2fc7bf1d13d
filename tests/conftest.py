"""Shared fixtures: synthetic embeddings and a populated in-memory store."""

from typing import List

import pytest

from signal_scoring.services.feedback_store import InMemoryFeedbackStore

DIM = 64


def axis(i: int, scale: float = 1.0, dim: int = DIM) -> List[float]:
    """Unit vector along axis i, scaled."""
    v = [0.0] * dim
    v[i] = scale
    return v


def add(*vectors: List[float]) -> List[float]:
    return [sum(values) for values in zip(*vectors)]


def clustered_embeddings(n: int = 50) -> List[List[float]]:
    """Tight cluster around axis 0: 10*e0 + e_k. Pairwise cosine >= 100/101."""
    return [add(axis(0, 10.0), axis((i % (DIM - 1)) + 1)) for i in range(n)]


def baseline_embeddings(n: int = 50) -> List[List[float]]:
    """Mostly off-cluster: 0.2*e0 + e_k. Cosine to the cluster centroid ~0.2."""
    return [add(axis(0, 0.2), axis((i % (DIM - 1)) + 1)) for i in range(n)]


def make_store(user_id: str, saved: int, skipped: int = 0, seed: int = 7) -> InMemoryFeedbackStore:
    """Store with `saved` clustered saves, `skipped` baseline skips, and 50 unlabeled chunks."""
    store = InMemoryFeedbackStore(seed=seed)
    for i, emb in enumerate(clustered_embeddings(saved)):
        store.add_chunk({"id": f"saved-{i}", "embedding": emb})
        store.record_feedback(user_id, f"saved-{i}", "saved")
    for i, emb in enumerate(baseline_embeddings(skipped)):
        store.add_chunk({"id": f"skipped-{i}", "embedding": emb})
        store.record_feedback(user_id, f"skipped-{i}", "skipped")
    for i, emb in enumerate(baseline_embeddings(50)):
        store.add_chunk({"id": f"corpus-{i}", "embedding": emb})
    store.add_chunk({"id": "no-embedding", "content": "not embedded yet"})
    store.add_chunk({"id": "on-topic", "embedding": axis(0, 1.0)})
    return store


@pytest.fixture
def user_id() -> str:
    return "user-1"


@pytest.fixture
def learned_store(user_id) -> InMemoryFeedbackStore:
    return make_store(user_id, saved=12)


@pytest.fixture
def cold_store(user_id) -> InMemoryFeedbackStore:
    return make_store(user_id, saved=3)

"""
Cold-start scoring for users with too few saves to trust a centroid.

The scorer never touches the centroid path. The default draws uniform random
scores so early signals span the whole confidence range and every save/skip
teaches the model something; a heuristic or LLM judge can be plugged in via
the ColdStartScorer protocol.
"""

from typing import Optional, Protocol, Sequence

import numpy as np


class ColdStartScorer(Protocol):
    """Produces a score in [0, 1] for a chunk without consulting the centroid."""

    def score(self, chunk_id: str, embedding: Sequence[float]) -> float:
        ...


class RandomColdStartScorer:
    """Uniform random exploration scores in [0, 1)."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def score(self, chunk_id: str, embedding: Sequence[float]) -> float:
        return float(self._rng.random())


class ConstantColdStartScorer:
    """Same score for every chunk (deterministic runs and tests)."""

    def __init__(self, value: float = 0.5):
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"Cold-start score must be in [0, 1], got {value}")
        self.value = value

    def score(self, chunk_id: str, embedding: Sequence[float]) -> float:
        return self.value

"""
Preference model and relevance scoring.

Public API: build_centroid, RelevanceScorer, classify_confidence, select_signals.
- preference_model: centroid of saved embeddings and similarity to it.
- relevance: phase selection, candidate scoring, confidence buckets.
- cold_start, contrastive, selection: the scorer's pluggable and optional parts.
- novelty: redundancy of a candidate against recent saves.
"""

from .cold_start import ColdStartScorer, ConstantColdStartScorer, RandomColdStartScorer
from .novelty import compute_novelty, is_duplicate, novelty_adjustment
from .preference_model import (
    PreferenceCentroid,
    build_centroid,
    centroid_norm,
    similarity_to_centroid,
)
from .relevance import (
    RelevanceScorer,
    ScoringModel,
    classify_confidence,
    determine_phase,
    require_embedding,
    similarity_to_score,
)
from .selection import select_signals

__all__ = [
    "ColdStartScorer",
    "ConstantColdStartScorer",
    "PreferenceCentroid",
    "RandomColdStartScorer",
    "RelevanceScorer",
    "ScoringModel",
    "build_centroid",
    "centroid_norm",
    "compute_novelty",
    "classify_confidence",
    "determine_phase",
    "is_duplicate",
    "novelty_adjustment",
    "require_embedding",
    "select_signals",
    "similarity_to_centroid",
    "similarity_to_score",
]

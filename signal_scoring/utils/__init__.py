"""Shared numeric utilities: centroid, similarity, norm, and bucketing."""

from .vector_math import bucketize, centroid, cosine_similarity, vector_norm

__all__ = [
    "bucketize",
    "centroid",
    "cosine_similarity",
    "vector_norm",
]

"""
Vector math: centroid, cosine similarity, norm, and histogram bucketing.

Pure numeric primitives shared by the preference model, scorer, and reports.
Embeddings are plain lists of floats at the boundary; numpy is used inside.
"""

from typing import List, Sequence

import numpy as np

from ..errors import DimensionMismatchError, EmptyInputError


def _as_array(vector: Sequence[float]) -> np.ndarray:
    return np.asarray(vector, dtype=np.float64)


def centroid(vectors: Sequence[Sequence[float]]) -> List[float]:
    """
    Elementwise mean of a non-empty list of equal-length vectors.

    Raises EmptyInputError for an empty list (a zero vector would look like a
    real result) and DimensionMismatchError for ragged input.
    """
    if len(vectors) == 0:
        raise EmptyInputError("Cannot compute centroid of an empty vector list")
    dim = len(vectors[0])
    for v in vectors:
        if len(v) != dim:
            raise DimensionMismatchError(dim, len(v))
    return np.mean(np.asarray(vectors, dtype=np.float64), axis=0).tolist()


def vector_norm(vector: Sequence[float]) -> float:
    """Euclidean norm."""
    return float(np.linalg.norm(_as_array(vector)))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity in [-1, 1].

    Returns 0.0 when either vector has zero norm. Raises
    DimensionMismatchError when the lengths differ.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b))
    a_arr = _as_array(a)
    b_arr = _as_array(b)
    norm_product = np.linalg.norm(a_arr) * np.linalg.norm(b_arr)
    if norm_product == 0:
        return 0.0
    sim = float(np.dot(a_arr, b_arr) / norm_product)
    # Rounding can push |sim| a hair past 1.0
    return max(-1.0, min(1.0, sim))


def bucketize(values: Sequence[float], edges: Sequence[float]) -> List[int]:
    """
    Count values into len(edges) + 1 buckets.

    First bucket is v < edges[0]; bucket i is edges[i-1] <= v < edges[i];
    last bucket is v >= edges[-1]. Every value lands in exactly one bucket,
    so the counts always sum to len(values).
    """
    edge_arr = _as_array(edges)
    if edge_arr.ndim != 1:
        raise ValueError("Bucket edges must be a flat list")
    if len(edge_arr) > 1 and not np.all(np.diff(edge_arr) > 0):
        raise ValueError(f"Bucket edges must be strictly ascending, got {list(edges)}")
    counts = [0] * (len(edge_arr) + 1)
    if len(values) == 0:
        return counts
    # side="right": a value equal to an edge falls into the bucket that starts at it
    indices = np.searchsorted(edge_arr, _as_array(values), side="right")
    for idx in indices:
        counts[int(idx)] += 1
    return counts

"""
Error taxonomy for the scoring engine.

Math-level errors (EmptyInputError, DimensionMismatchError) propagate to the
caller. InsufficientDataError is the domain "no preference signal yet" case;
the engine turns it into a result value instead of surfacing it to users.
"""

from typing import Optional


class ScoringError(Exception):
    """Base class for all scoring engine errors."""


class EmptyInputError(ScoringError, ValueError):
    """A vector operation received zero vectors where at least one was required."""


class DimensionMismatchError(ScoringError, ValueError):
    """Two embeddings of different lengths were combined or compared."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Embedding dimensions differ: {left} != {right}")


class InsufficientDataError(ScoringError):
    """Not enough saved examples to build a preference centroid."""

    def __init__(self, message: str = "No saved embeddings to build a centroid from", saved_count: int = 0):
        self.saved_count = saved_count
        super().__init__(message)


class MissingEmbeddingError(ScoringError, LookupError):
    """A candidate chunk has no embedding and cannot be scored."""

    def __init__(self, chunk_id: Optional[str] = None):
        self.chunk_id = chunk_id
        super().__init__(f"Chunk {chunk_id!r} has no embedding")


class FeedbackConflictError(ScoringError):
    """Feedback was set on a (user, chunk) pair that has already been actioned."""

    def __init__(self, user_id: str, chunk_id: str, existing: str):
        self.user_id = user_id
        self.chunk_id = chunk_id
        self.existing = existing
        super().__init__(f"Chunk {chunk_id!r} already actioned by {user_id!r} as {existing!r}")

"""Storage collaborator interface and its in-memory implementation."""

from .feedback_store import FeedbackStore, InMemoryFeedbackStore

__all__ = [
    "FeedbackStore",
    "InMemoryFeedbackStore",
]

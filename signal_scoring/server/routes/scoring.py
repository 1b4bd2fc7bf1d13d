"""Candidate scoring and feedback endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from ...errors import DimensionMismatchError, FeedbackConflictError, MissingEmbeddingError
from ...models.feedback import FeedbackLabel
from ...models.scoring import BatchScoreResult, CandidateScore
from ..schemas import BatchScoreRequest, FeedbackRequest, NoveltyResponse
from ..state import get_state

logger = logging.getLogger(__name__)

router = APIRouter()


def _dimension_error(user_id: str, e: DimensionMismatchError) -> HTTPException:
    logger.error("[api] DIMENSION_MISMATCH user_id=%s left=%s right=%s", user_id, e.left, e.right)
    return HTTPException(status_code=500, detail=str(e))


@router.get("/{user_id}/candidates/{chunk_id}/score", response_model=CandidateScore)
def score_candidate(user_id: str, chunk_id: str):
    """Score one candidate chunk for the user."""
    engine = get_state().engine
    try:
        return engine.score_candidate(user_id, chunk_id)
    except MissingEmbeddingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DimensionMismatchError as e:
        raise _dimension_error(user_id, e)


@router.post("/{user_id}/candidates/score", response_model=BatchScoreResult)
def score_candidates(user_id: str, request: BatchScoreRequest):
    """Score many candidates; chunks without embeddings come back in missing_embedding_ids."""
    engine = get_state().engine
    try:
        return engine.score_candidates(user_id, request.chunk_ids)
    except DimensionMismatchError as e:
        raise _dimension_error(user_id, e)


@router.get("/{user_id}/candidates/{chunk_id}/novelty", response_model=NoveltyResponse)
def get_novelty(user_id: str, chunk_id: str):
    """How much the candidate repeats the user's recent saves, and whether it is a duplicate."""
    engine = get_state().engine
    try:
        novelty = engine.get_novelty(user_id, chunk_id)
        duplicate = engine.is_duplicate(user_id, chunk_id)
    except MissingEmbeddingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DimensionMismatchError as e:
        raise _dimension_error(user_id, e)
    return NoveltyResponse(**novelty.model_dump(), is_duplicate=duplicate)


@router.post("/{user_id}/feedback")
def record_feedback(user_id: str, request: FeedbackRequest):
    """Save or skip a signal."""
    try:
        label = FeedbackLabel(request.label)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown label: {request.label!r}")
    if label == FeedbackLabel.UNLABELED:
        raise HTTPException(status_code=400, detail="Use DELETE to undo feedback")
    store = get_state().store
    try:
        store.record_feedback(user_id, request.chunk_id, label)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Chunk not found: {request.chunk_id}")
    except FeedbackConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"success": True, "chunk_id": request.chunk_id, "label": label.value}


@router.delete("/{user_id}/feedback/{chunk_id}")
def undo_feedback(user_id: str, chunk_id: str):
    """Reset a signal to unlabeled."""
    removed = get_state().store.undo_feedback(user_id, chunk_id)
    if not removed:
        raise HTTPException(status_code=404, detail="No feedback to undo")
    return {"success": True, "chunk_id": chunk_id}

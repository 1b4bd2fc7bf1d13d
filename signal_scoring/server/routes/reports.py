"""Validation, learning status, and score distribution endpoints."""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from ...errors import DimensionMismatchError
from ...models.diagnostics import DistributionBucket, LearningStatus, ValidationReport
from ..schemas import DistributionRequest
from ..state import get_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/users/{user_id}/validation", response_model=ValidationReport)
def get_validation_report(user_id: str):
    """Is the model discriminative for this user? has_saved_chunks=false for new users."""
    try:
        return get_state().engine.get_validation_report(user_id)
    except DimensionMismatchError as e:
        logger.error("[api] DIMENSION_MISMATCH user_id=%s left=%s right=%s", user_id, e.left, e.right)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/users/{user_id}/status", response_model=LearningStatus)
def get_learning_status(user_id: str):
    """Learning phase, label totals, and saves lacking embeddings."""
    return get_state().engine.get_learning_status(user_id)


@router.post("/distribution", response_model=List[DistributionBucket])
def get_score_distribution(request: DistributionRequest):
    """Ten decile buckets for the given scores."""
    return get_state().engine.get_score_distribution(request.scores)

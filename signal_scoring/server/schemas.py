"""Request and response bodies for the HTTP routes."""

from typing import List

from pydantic import BaseModel, Field

from ..models.scoring import NoveltyResult


class BatchScoreRequest(BaseModel):
    chunk_ids: List[str] = Field(default_factory=list)


class DistributionRequest(BaseModel):
    scores: List[float] = Field(default_factory=list)


class FeedbackRequest(BaseModel):
    chunk_id: str
    label: str


class NoveltyResponse(NoveltyResult):
    is_duplicate: bool = False

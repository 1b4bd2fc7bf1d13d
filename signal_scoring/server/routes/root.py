"""Root endpoint."""

from fastapi import APIRouter

from ... import __version__
from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    """Service info and active scoring thresholds."""
    config = get_state().scoring_config
    return {
        "name": "Signal Scoring API",
        "version": __version__,
        "learned_phase_min_saved": config.learned_phase_min_saved,
        "confidence_thresholds": {
            "low_max": config.confidence_low_max,
            "medium_max": config.confidence_medium_max,
        },
        "contrastive_enabled": config.contrastive_enabled,
    }

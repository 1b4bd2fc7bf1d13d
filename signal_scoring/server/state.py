"""Application state: feedback store, scoring config, and engine."""

import logging
from typing import Optional

from ..engine import ScoringEngine
from ..ranking.cold_start import RandomColdStartScorer
from ..services.feedback_store import FeedbackStore, InMemoryFeedbackStore
from .config import ServerConfig, get_config

logger = logging.getLogger(__name__)


class AppState:
    """Global application state."""

    def __init__(self, config: ServerConfig, store: Optional[FeedbackStore] = None):
        self.config = config
        self.scoring_config = config.load_scoring_config()
        self.store = store if store is not None else self._create_store(config)
        self.engine = ScoringEngine(
            self.store,
            self.scoring_config,
            cold_start_scorer=RandomColdStartScorer(config.random_seed),
        )
        logger.info(
            "[startup] Feedback store: %s learned_min_saved=%s contrastive=%s",
            type(self.store).__name__,
            self.scoring_config.learned_phase_min_saved,
            self.scoring_config.contrastive_enabled,
        )

    def _create_store(self, config: ServerConfig) -> FeedbackStore:
        """In-memory store, seeded from FEEDBACK_JSON_PATH when set."""
        if config.feedback_json_path:
            return InMemoryFeedbackStore.from_json(config.feedback_json_path, seed=config.random_seed)
        return InMemoryFeedbackStore(seed=config.random_seed)


_state: Optional[AppState] = None


def get_state() -> AppState:
    """Get the global application state."""
    global _state
    if _state is None:
        _state = AppState(get_config())
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the global state (tests, or a custom store)."""
    global _state
    _state = state

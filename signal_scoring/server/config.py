"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..models.config import DEFAULT_CONFIG, ScoringConfig

_root_env = Path(__file__).resolve().parent.parent.parent / ".env"
if _root_env.exists():
    load_dotenv(_root_env)


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000

    # JSON fixture with chunks and feedback for the in-memory store
    feedback_json_path: Optional[Path] = None
    # JSON scoring config merged over ScoringConfig defaults
    scoring_config_path: Optional[Path] = None
    # Seed for cold-start scores and random validation samples (None = nondeterministic)
    random_seed: Optional[int] = None

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).resolve().parent.parent.parent

        def _path_env(key: str) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return None
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        seed = os.getenv("RANDOM_SEED", "").strip()
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            feedback_json_path=_path_env("FEEDBACK_JSON_PATH"),
            scoring_config_path=_path_env("SCORING_CONFIG_PATH"),
            random_seed=int(seed) if seed else None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []
        if self.feedback_json_path and not self.feedback_json_path.is_file():
            errors.append(f"Feedback JSON not found: {self.feedback_json_path}")
        if self.scoring_config_path and not self.scoring_config_path.is_file():
            errors.append(f"Scoring config not found: {self.scoring_config_path}")
        return len(errors) == 0, errors

    def load_scoring_config(self) -> ScoringConfig:
        """ScoringConfig from scoring_config_path, or defaults."""
        if not self.scoring_config_path:
            return DEFAULT_CONFIG
        with open(self.scoring_config_path) as f:
            return ScoringConfig.from_dict(json.load(f))


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()

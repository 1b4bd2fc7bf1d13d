"""
Scoring configuration: phase threshold, confidence buckets, validation caps.

ScoringConfig defaults are defined here. Callers may pass a dict (e.g. loaded
from a scoring config JSON); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, model_validator


class ScoringConfig(BaseModel):
    """Configuration for the personalization scoring engine."""

    # -------------------------------------------------------------------------
    # Learning Phase
    # -------------------------------------------------------------------------

    # Saved embeddings needed before the centroid is trusted. Below this the
    # user is in cold start and scores come from the cold-start scorer.
    learned_phase_min_saved: int = 10

    # -------------------------------------------------------------------------
    # Confidence Buckets
    # low: score < confidence_low_max; medium: < confidence_medium_max; high: rest
    # -------------------------------------------------------------------------

    confidence_low_max: float = 0.4
    confidence_medium_max: float = 0.65

    # -------------------------------------------------------------------------
    # Validation Diagnostics
    # -------------------------------------------------------------------------

    # Max saved embeddings used for the pairwise / centroid diagnostics.
    validation_saved_sample_limit: int = 50
    # Max random corpus embeddings used as the control group.
    validation_random_sample_limit: int = 50

    # positive_avg / random_avg at or above this ratio = "working well".
    verdict_working_ratio: float = 1.2
    # At or above this ratio (but below working) = "needs more data".
    verdict_weak_ratio: float = 1.05

    # Interpretation flags on the validation report.
    cluster_pairwise_min: float = 0.5
    diverse_pairwise_max: float = 0.4
    centroid_well_defined_min: float = 0.7

    # Saved-vs-skipped centroid similarity tiers.
    centroid_contrast_too_similar: float = 0.85
    centroid_contrast_somewhat_similar: float = 0.7

    # -------------------------------------------------------------------------
    # Contrastive Scoring (learned phase, opt-in)
    # score = clip(((sim_saved - sim_skipped) + 2) / 4, 0, 1)
    # -------------------------------------------------------------------------

    contrastive_enabled: bool = False
    # Skipped embeddings needed before a skipped centroid is built.
    contrastive_min_skipped: int = 5
    # Centroids more similar than this cannot be contrasted; fall back to positive-only.
    contrastive_max_centroid_similarity: float = 0.85

    # -------------------------------------------------------------------------
    # Stratified Selection
    # Fraction of target_count drawn from each score range (must sum to 1.0).
    # -------------------------------------------------------------------------

    selection_weight_very_low: float = 0.10   # < 0.3
    selection_weight_low: float = 0.15        # 0.3 - 0.5
    selection_weight_mid: float = 0.25        # 0.5 - 0.65
    selection_weight_high: float = 0.35       # 0.65 - 0.8
    selection_weight_very_high: float = 0.15  # >= 0.8

    # -------------------------------------------------------------------------
    # Novelty / Redundancy
    # Candidate vs the user's most recent saves: novelty = 1 - avg(top-k similarity)
    # -------------------------------------------------------------------------

    novelty_top_k: int = 10
    novelty_lookback: int = 100
    # avg top-k similarity above each tier applies that tier's penalty (score points)
    novelty_strong_min: float = 0.75
    novelty_strong_penalty: int = -20
    novelty_moderate_min: float = 0.65
    novelty_moderate_penalty: int = -15
    novelty_mild_min: float = 0.55
    novelty_mild_penalty: int = -10

    duplicate_top_k: int = 5
    duplicate_lookback: int = 50
    # max similarity at or above this = already saved
    duplicate_threshold: float = 0.9

    @model_validator(mode="after")
    def thresholds_are_consistent(self):
        if self.learned_phase_min_saved < 1:
            raise ValueError(
                f"learned_phase_min_saved must be >= 1, got {self.learned_phase_min_saved}"
            )
        if not 0.0 <= self.confidence_low_max < self.confidence_medium_max <= 1.0:
            raise ValueError(
                "Confidence thresholds must satisfy 0 <= low_max < medium_max <= 1, "
                f"got {self.confidence_low_max}, {self.confidence_medium_max}"
            )
        if self.verdict_weak_ratio > self.verdict_working_ratio:
            raise ValueError(
                f"verdict_weak_ratio ({self.verdict_weak_ratio}) must not exceed "
                f"verdict_working_ratio ({self.verdict_working_ratio})"
            )
        if self.validation_saved_sample_limit < 1 or self.validation_random_sample_limit < 1:
            raise ValueError("Validation sample limits must be >= 1")
        if not self.novelty_mild_min <= self.novelty_moderate_min <= self.novelty_strong_min:
            raise ValueError(
                "Novelty tiers must satisfy mild_min <= moderate_min <= strong_min, "
                f"got {self.novelty_mild_min}, {self.novelty_moderate_min}, {self.novelty_strong_min}"
            )
        if min(self.novelty_top_k, self.novelty_lookback, self.duplicate_top_k, self.duplicate_lookback) < 1:
            raise ValueError("Novelty and duplicate top_k / lookback must be >= 1")
        total = sum(self.selection_weights.values())
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Selection weights must sum to 1.0, got {total}")
        return self

    @property
    def selection_weights(self) -> Dict[str, float]:
        """Selection weight per score range, in range order."""
        return {
            "very_low": self.selection_weight_very_low,
            "low": self.selection_weight_low,
            "mid": self.selection_weight_mid,
            "high": self.selection_weight_high,
            "very_high": self.selection_weight_very_high,
        }

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "ScoringConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "phases" in config_dict:
            ph = config_dict["phases"]
            if "learned_min_saved" in ph:
                flat["learned_phase_min_saved"] = ph["learned_min_saved"]
        if "confidence" in config_dict:
            conf = config_dict["confidence"]
            if "low_max" in conf:
                flat["confidence_low_max"] = conf["low_max"]
            if "medium_max" in conf:
                flat["confidence_medium_max"] = conf["medium_max"]
        if "validation" in config_dict:
            val = config_dict["validation"]
            if "saved_sample_limit" in val:
                flat["validation_saved_sample_limit"] = val["saved_sample_limit"]
            if "random_sample_limit" in val:
                flat["validation_random_sample_limit"] = val["random_sample_limit"]
            if "working_ratio" in val:
                flat["verdict_working_ratio"] = val["working_ratio"]
            if "weak_ratio" in val:
                flat["verdict_weak_ratio"] = val["weak_ratio"]
        if "contrastive" in config_dict:
            con = config_dict["contrastive"]
            flat["contrastive_enabled"] = con.get("enabled", False)
            if "min_skipped" in con:
                flat["contrastive_min_skipped"] = con["min_skipped"]
            if "max_centroid_similarity" in con:
                flat["contrastive_max_centroid_similarity"] = con["max_centroid_similarity"]
        if "novelty" in config_dict:
            nov = config_dict["novelty"]
            for key in ("top_k", "lookback", "strong_min", "strong_penalty", "moderate_min",
                        "moderate_penalty", "mild_min", "mild_penalty"):
                if key in nov:
                    flat[f"novelty_{key}"] = nov[key]
        if "duplicate" in config_dict:
            dup = config_dict["duplicate"]
            for key in ("top_k", "lookback", "threshold"):
                if key in dup:
                    flat[f"duplicate_{key}"] = dup[key]
        if "selection" in config_dict:
            for key, weight in config_dict["selection"].items():
                flat[f"selection_weight_{key}"] = weight
        # Flat keys win over section keys
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = ScoringConfig()


def resolve_config(config: Optional["ScoringConfig"]) -> "ScoringConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG

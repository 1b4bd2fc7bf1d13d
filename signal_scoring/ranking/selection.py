"""
Stratified selection of scored signals for presentation.

Picks signals across five score ranges instead of only the top of the list,
so the user also sees (and labels) low-confidence signals. Skipping a 23%
signal confirms the model got it right; that is training data too.
"""

import logging
from typing import Dict, List, Sequence

from ..models.config import DEFAULT_CONFIG, ScoringConfig
from ..models.scoring import CandidateScore

logger = logging.getLogger(__name__)

# (name, lower bound inclusive, upper bound exclusive)
SCORE_RANGES = [
    ("very_low", float("-inf"), 0.3),
    ("low", 0.3, 0.5),
    ("mid", 0.5, 0.65),
    ("high", 0.65, 0.8),
    ("very_high", 0.8, float("inf")),
]


def _range_of(score: float) -> str:
    for name, lower, upper in SCORE_RANGES:
        if lower <= score < upper:
            return name
    return SCORE_RANGES[-1][0]


def select_signals(
    scored: Sequence[CandidateScore],
    target_count: int,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> List[CandidateScore]:
    """
    Select up to target_count signals, stratified by score range.

    Each range contributes floor(target_count * weight) of its top-scored
    signals; empty or short ranges leave slots that are filled with the
    highest-scored signals not yet picked. Result is sorted by score, highest first.
    """
    ranked = sorted(scored, key=lambda s: s.score, reverse=True)
    if target_count <= 0:
        return []
    if len(ranked) <= target_count:
        return ranked

    by_range: Dict[str, List[CandidateScore]] = {name: [] for name, _, _ in SCORE_RANGES}
    for s in ranked:
        by_range[_range_of(s.score)].append(s)

    selected: List[CandidateScore] = []
    for name, weight in config.selection_weights.items():
        quota = int(target_count * weight)
        selected.extend(by_range[name][:quota])

    if len(selected) < target_count:
        picked = {s.chunk_id for s in selected}
        remaining = [s for s in ranked if s.chunk_id not in picked]
        selected.extend(remaining[: target_count - len(selected)])

    selected.sort(key=lambda s: s.score, reverse=True)
    counts = {name: 0 for name in by_range}
    for s in selected:
        counts[_range_of(s.score)] += 1
    logger.info(
        "[selection] STRATIFIED selected=%s very_low=%s low=%s mid=%s high=%s very_high=%s",
        len(selected), counts["very_low"], counts["low"], counts["mid"],
        counts["high"], counts["very_high"],
    )
    return selected

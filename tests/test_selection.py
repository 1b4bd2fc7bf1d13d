"""
Stratified Selection Tests

select_signals spreads picks across score ranges (very_low .. very_high)
so low-confidence signals still reach the user.

Run:
----
    pytest tests/test_selection.py -v
"""

from signal_scoring.models.scoring import CandidateScore, Confidence, LearningPhase, ScoringMethod
from signal_scoring.ranking.selection import select_signals


def scored(value: float, chunk_id: str = None) -> CandidateScore:
    return CandidateScore(
        chunk_id=chunk_id or f"c-{value:.2f}",
        score=value,
        confidence=Confidence.LOW,
        phase=LearningPhase.LEARNED,
        method=ScoringMethod.POSITIVE_ONLY,
    )


class TestSelectSignals:
    def setup_method(self):
        self.candidates = [scored(i / 20) for i in range(20)]

    def test_returns_target_count_sorted(self):
        selected = select_signals(self.candidates, 10)
        assert len(selected) == 10
        values = [s.score for s in selected]
        assert values == sorted(values, reverse=True)

    def test_includes_low_scores(self):
        selected = select_signals(self.candidates, 10)
        assert any(s.score < 0.3 for s in selected)
        # Pure top-10 would stop at 0.5
        assert min(s.score for s in selected) < 0.5

    def test_no_duplicates(self):
        selected = select_signals(self.candidates, 10)
        assert len({s.chunk_id for s in selected}) == 10

    def test_fewer_candidates_than_target(self):
        selected = select_signals(self.candidates[:4], 10)
        assert [s.score for s in selected] == [0.15, 0.1, 0.05, 0.0]

    def test_empty_ranges_filled_from_top(self):
        only_high = [scored(0.99 - i / 100) for i in range(15)]
        selected = select_signals(only_high, 5)
        assert [s.score for s in selected] == [s.score for s in only_high[:5]]

    def test_non_positive_target(self):
        assert select_signals(self.candidates, 0) == []

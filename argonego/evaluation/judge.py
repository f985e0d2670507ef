"""
Judge
=====

Evaluates negotiation sessions for quality.

This is a DETERMINISTIC judge (rule-based): the same session always gets
the same judgments.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Sequence

from ..agents.mediator import RoundRecord
from ..argumentation.preferences import Preferences


class JudgmentCriteria(Enum):
    """Criteria for judging negotiations."""
    ROUNDS_COMPLETED = auto()   # Was the whole pool selected?
    SATISFACTION = auto()       # Did a negotiator get items it ranked high?
    PROTOCOL_FOLLOWED = auto()  # Were messages legal and well formed?


@dataclass
class Judgment:
    """A judge's assessment on one criterion."""
    criteria: JudgmentCriteria
    passed: bool
    score: float  # 0.0 to 1.0
    explanation: str


class NegotiationJudge:
    """
    Rule-based judge for evaluating negotiation sessions.

    Use for testing and regression detection.
    """

    def __init__(self, satisfaction_threshold: float = 0.5):
        self.satisfaction_threshold = satisfaction_threshold

    def judge_completion(self, pool_size: int, selected: int, cancelled: bool) -> Judgment:
        """Share of the pool that got selected; a cancellation always fails."""
        score = selected / pool_size if pool_size else 1.0

        if cancelled:
            return Judgment(
                criteria=JudgmentCriteria.ROUNDS_COMPLETED,
                passed=False,
                score=score,
                explanation=f"Cancelled after selecting {selected}/{pool_size} items",
            )

        return Judgment(
            criteria=JudgmentCriteria.ROUNDS_COMPLETED,
            passed=selected == pool_size,
            score=score,
            explanation=f"Selected {selected}/{pool_size} items",
        )

    def judge_satisfaction(
        self,
        name: str,
        preferences: Preferences,
        rounds: Sequence[RoundRecord],
    ) -> Judgment:
        """
        How well each round's selection ranked for this negotiator.

        In every round the selected item is ranked among that round's pool:
        1.0 when nothing in the pool scored higher, 0.0 when it was the worst.
        """
        ranks = []
        for record in rounds:
            if record.selected is None:
                continue
            if len(record.pool) < 2:
                ranks.append(1.0)
                continue
            selected_score = preferences.score(record.selected)
            better = sum(1 for item in record.pool if preferences.score(item) > selected_score)
            ranks.append(1.0 - better / (len(record.pool) - 1))

        if not ranks:
            return Judgment(
                criteria=JudgmentCriteria.SATISFACTION,
                passed=False,
                score=0.0,
                explanation=f"{name}: no item was selected",
            )

        score = sum(ranks) / len(ranks)
        return Judgment(
            criteria=JudgmentCriteria.SATISFACTION,
            passed=score >= self.satisfaction_threshold,
            score=score,
            explanation=f"{name}: mean rank {score:.2f} over {len(ranks)} rounds",
        )

    def judge_protocol(self, messages: int, violations: int, errors: int) -> Judgment:
        """Judge whether protocol was followed."""
        issues = violations + errors
        if issues:
            return Judgment(
                criteria=JudgmentCriteria.PROTOCOL_FOLLOWED,
                passed=False,
                score=max(0.0, 1.0 - issues / max(messages, 1)),
                explanation=f"{violations} dropped messages, {errors} forced cancellations",
            )

        return Judgment(
            criteria=JudgmentCriteria.PROTOCOL_FOLLOWED,
            passed=True,
            score=1.0,
            explanation="All messages followed protocol",
        )

    def evaluate(
        self,
        pool_size: int,
        rounds: Sequence[RoundRecord],
        cancelled: bool,
        preferences: Dict[str, Preferences],
        messages: int,
        violations: int,
        errors: int,
    ) -> List[Judgment]:
        """
        Comprehensive evaluation of a session.

        Returns one completion judgment, one satisfaction judgment per
        negotiator and one protocol judgment.
        """
        selected = sum(1 for r in rounds if r.selected is not None)
        judgments = [self.judge_completion(pool_size, selected, cancelled)]
        for name, prefs in preferences.items():
            judgments.append(self.judge_satisfaction(name, prefs, rounds))
        judgments.append(self.judge_protocol(messages, violations, errors))
        return judgments

    def overall_score(self, judgments: List[Judgment]) -> float:
        """Calculate overall score from judgments."""
        if not judgments:
            return 0.0
        return sum(j.score for j in judgments) / len(judgments)

    def summary(self, judgments: List[Judgment]) -> str:
        """Generate a summary of judgments."""
        lines = ["Evaluation Summary:", "-" * 40]

        for j in judgments:
            status = "✓" if j.passed else "✗"
            lines.append(f"  {status} {j.criteria.name}: {j.score:.2f} - {j.explanation}")

        overall = self.overall_score(judgments)
        lines.append("-" * 40)
        lines.append(f"  Overall Score: {overall:.2f}")

        return "\n".join(lines)

"""
Settlement Judge
================

Evaluates finished negotiations.

This is a DETERMINISTIC judge (rule-based): same result in, same
judgments out. It says nothing about whether the numbers are a good
deal for the song, only about how the exchange went.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, List

from ..protocol.messages import Role

if TYPE_CHECKING:
    from ..orchestration.graph import NegotiationResult


class JudgmentCriteria(Enum):
    """Criteria for judging negotiations."""
    CONVERGED = auto()          # Did the roles actually agree?
    ROUNDS_EFFICIENT = auto()   # How much of the budget was used?
    PROTOCOL_FOLLOWED = auto()  # Did A and B strictly alternate?


@dataclass
class Judgment:
    """A judge's assessment on one criterion."""
    criteria: JudgmentCriteria
    passed: bool
    score: float  # 0.0 to 1.0
    explanation: str


class SettlementJudge:
    """Rule-based judge for negotiation results."""

    def __init__(self, max_rounds: int = 5):
        self.max_rounds = max_rounds

    def judge_convergence(self, result: "NegotiationResult") -> Judgment:
        if result.converged:
            return Judgment(
                criteria=JudgmentCriteria.CONVERGED,
                passed=True,
                score=1.0,
                explanation=f"Converged in round {result.rounds}",
            )
        return Judgment(
            criteria=JudgmentCriteria.CONVERGED,
            passed=False,
            score=0.0,
            explanation=f"Best-effort settlement after {result.rounds} rounds",
        )

    def judge_efficiency(self, result: "NegotiationResult") -> Judgment:
        """Fewer rounds is better; failing to converge scores zero."""
        if not result.converged:
            return Judgment(
                criteria=JudgmentCriteria.ROUNDS_EFFICIENT,
                passed=False,
                score=0.0,
                explanation=f"Used all {result.rounds} rounds without converging",
            )

        # A first-round agreement scores 1.0
        score = max(0.0, 1 - (result.rounds - 1) / self.max_rounds)
        return Judgment(
            criteria=JudgmentCriteria.ROUNDS_EFFICIENT,
            passed=result.rounds <= max(1, self.max_rounds // 2),
            score=score,
            explanation=f"Completed in {result.rounds}/{self.max_rounds} rounds",
        )

    def judge_protocol(self, result: "NegotiationResult") -> Judgment:
        """Transcript must read A1, B1, A2, B2, ..."""
        issues = []

        for i, envelope in enumerate(result.transcript):
            expected_role = Role.A if i % 2 == 0 else Role.B
            expected_round = i // 2 + 1

            if envelope.sender != expected_role:
                issues.append(f"Entry {i}: expected {expected_role.value}, got {envelope.sender.value}")
            if envelope.round != expected_round:
                issues.append(f"Entry {i}: expected round {expected_round}, got {envelope.round}")

        if len(result.transcript) != 2 * result.rounds:
            issues.append(f"{len(result.transcript)} proposals for {result.rounds} rounds")

        if issues:
            return Judgment(
                criteria=JudgmentCriteria.PROTOCOL_FOLLOWED,
                passed=False,
                score=max(0.0, 1.0 - len(issues) / max(len(result.transcript), 1)),
                explanation=f"Protocol violations: {issues[0]}",
            )

        return Judgment(
            criteria=JudgmentCriteria.PROTOCOL_FOLLOWED,
            passed=True,
            score=1.0,
            explanation="Roles alternated A then B every round",
        )

    def evaluate(self, result: "NegotiationResult") -> List[Judgment]:
        return [
            self.judge_convergence(result),
            self.judge_efficiency(result),
            self.judge_protocol(result),
        ]

    def overall_score(self, judgments: List[Judgment]) -> float:
        if not judgments:
            return 0.0
        return sum(j.score for j in judgments) / len(judgments)

    def summary(self, judgments: List[Judgment]) -> str:
        """Generate a summary of judgments."""
        lines = ["Evaluation Summary:", "-" * 40]

        for j in judgments:
            status = "✓" if j.passed else "✗"
            lines.append(f"  {status} {j.criteria.name}: {j.score:.2f} - {j.explanation}")

        lines.append("-" * 40)
        lines.append(f"  Overall Score: {self.overall_score(judgments):.2f}")

        return "\n".join(lines)

"""
Coordination Policy
===================

The business rules that decide when two proposals count as agreement,
and what the agreement is.

This is NOT orchestration (who runs when).
This is NOT the FSM (termination).
This is NOT protocol (proposal validation).

Note on units: the same tolerance is applied to a dollar amount and to
a percentage. That is the established rule and is kept as is.
"""

from dataclasses import dataclass

from ..protocol.messages import Proposal, Settlement, round_half_up


DEFAULT_TOLERANCE = 5


def converged(a: Proposal, b: Proposal, tolerance: int = DEFAULT_TOLERANCE) -> bool:
    """
    True iff both numeric fields are within tolerance of each other.

    Symmetric in a and b. Pure.
    """
    return (
        abs(a.licensing_cost - b.licensing_cost) <= tolerance
        and abs(a.royalties_percent - b.royalties_percent) <= tolerance
    )


def settle(a: Proposal, b: Proposal) -> Settlement:
    """
    Average the final pair, rounding halves up.

    Example:
        settle(Proposal(100, 10), Proposal(103, 11))
        # Settlement(licensing_cost=102, royalties_percent=11)
    """
    return Settlement(
        licensing_cost=round_half_up((a.licensing_cost + b.licensing_cost) / 2),
        royalties_percent=round_half_up((a.royalties_percent + b.royalties_percent) / 2),
    )


@dataclass
class ConvergenceResult:
    """Result of a convergence check, with the gaps that drove it."""
    converged: bool
    cost_gap: int
    royalty_gap: int
    reason: str = ""


class ConvergencePolicy:
    """
    Convergence rule bound to a tolerance.

    Example:
        policy = ConvergencePolicy(tolerance=5)
        policy.check(a, b).converged
    """

    def __init__(self, tolerance: int = DEFAULT_TOLERANCE):
        if tolerance < 0:
            raise ValueError(f"Tolerance must be >= 0, got {tolerance}")
        self.tolerance = tolerance

    def check(self, a: Proposal, b: Proposal) -> ConvergenceResult:
        cost_gap = abs(a.licensing_cost - b.licensing_cost)
        royalty_gap = abs(a.royalties_percent - b.royalties_percent)
        agreed = converged(a, b, self.tolerance)

        return ConvergenceResult(
            converged=agreed,
            cost_gap=cost_gap,
            royalty_gap=royalty_gap,
            reason=(
                f"cost gap ${cost_gap}, royalty gap {royalty_gap}% "
                f"({'within' if agreed else 'outside'} tolerance {self.tolerance})"
            ),
        )

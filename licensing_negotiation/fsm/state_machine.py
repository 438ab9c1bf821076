"""
Negotiation State Machine
=========================

Provides termination guarantees through explicit phases.

Phase Diagram:

    ┌─────────┐
    │  START  │ ─── start() ───► ROUND_A ───► ROUND_B ───► CHECK_CONVERGED
    └─────────┘                     ▲                             │
                                    │                             │
                                    └──── next round ◄────────────┤
                                        (not converged,           │
                                         rounds left)             │
                                                                  ▼
                                                              FINALIZE
                                                                  │
                                                                  ▼
                                                              ┌──────┐
                                                              │ DONE │
                                                              └──────┘

TERMINATION GUARANTEE:
- DONE has NO outgoing transitions
- Entering CHECK_CONVERGED completes a round
- CHECK_CONVERGED goes to FINALIZE once rounds == max_rounds
- Therefore: at most max_rounds rounds, then DONE
"""

from dataclasses import dataclass
from enum import Enum, auto


class NegotiationPhase(Enum):
    """The finite set of phases."""
    START = auto()            # Nothing produced yet
    ROUND_A = auto()          # Waiting on role A
    ROUND_B = auto()          # Waiting on role B
    CHECK_CONVERGED = auto()  # Both proposals in hand
    FINALIZE = auto()         # Computing the settlement
    DONE = auto()             # Terminal


class InvalidTransition(RuntimeError):
    """Raised when the orchestrator attempts an illegal phase change."""


@dataclass
class FSMContext:
    """Context tracked by the FSM."""
    round: int = 0            # Completed A-then-B rounds
    max_rounds: int = 5
    converged: bool = False


class NegotiationFSM:
    """
    Finite State Machine for one negotiation.

    The orchestrator drives it; the FSM refuses anything that would
    skip a role, check before both roles spoke, or run past max_rounds.
    """

    TRANSITIONS = {
        NegotiationPhase.START: {NegotiationPhase.ROUND_A},
        NegotiationPhase.ROUND_A: {NegotiationPhase.ROUND_B},
        NegotiationPhase.ROUND_B: {NegotiationPhase.CHECK_CONVERGED},
        NegotiationPhase.CHECK_CONVERGED: {NegotiationPhase.ROUND_A, NegotiationPhase.FINALIZE},
        NegotiationPhase.FINALIZE: {NegotiationPhase.DONE},
        NegotiationPhase.DONE: set(),   # Terminal - NO outgoing
    }

    def __init__(self, max_rounds: int = 5):
        if max_rounds < 1:
            raise ValueError(f"max_rounds must be >= 1, got {max_rounds}")
        self.phase = NegotiationPhase.START
        self.context = FSMContext(max_rounds=max_rounds)

    def get_phase(self) -> NegotiationPhase:
        return self.phase

    def is_terminal(self) -> bool:
        return self.phase == NegotiationPhase.DONE

    def can_transition(self, to_phase: NegotiationPhase) -> bool:
        return to_phase in self.TRANSITIONS[self.phase]

    def _move(self, to_phase: NegotiationPhase) -> None:
        if not self.can_transition(to_phase):
            raise InvalidTransition(f"{self.phase.name} -> {to_phase.name}")
        self.phase = to_phase

    def start(self) -> None:
        """Begin the first round."""
        self._move(NegotiationPhase.ROUND_A)

    def role_a_done(self) -> None:
        self._move(NegotiationPhase.ROUND_B)

    def role_b_done(self) -> None:
        """Both roles have spoken: the round is complete."""
        self._move(NegotiationPhase.CHECK_CONVERGED)
        self.context.round += 1

    @property
    def rounds_exhausted(self) -> bool:
        return self.context.round >= self.context.max_rounds

    def decide(self, converged: bool) -> NegotiationPhase:
        """
        Leave CHECK_CONVERGED.

        Finalizes on convergence or when the round budget is spent,
        otherwise starts the next round. Returns the new phase.
        """
        if self.phase != NegotiationPhase.CHECK_CONVERGED:
            raise InvalidTransition(f"decide() called in {self.phase.name}")

        self.context.converged = converged
        if converged or self.rounds_exhausted:
            self._move(NegotiationPhase.FINALIZE)
        else:
            self._move(NegotiationPhase.ROUND_A)
        return self.phase

    def finish(self) -> None:
        self._move(NegotiationPhase.DONE)

    def check_invariants(self) -> bool:
        """
        Check that FSM invariants hold.

        These should NEVER be violated.
        """
        assert 0 <= self.context.round <= self.context.max_rounds

        # A settlement needs at least one full round
        if self.phase in {NegotiationPhase.FINALIZE, NegotiationPhase.DONE}:
            assert self.context.round >= 1

        return True

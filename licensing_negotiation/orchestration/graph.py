"""
Orchestration Graph
===================

LangGraph-based orchestration for the licensing negotiation.

The graph structure:

    ┌─────────┐
    │  START  │
    └────┬────┘
         │
         ▼
    ┌─────────┐     ┌─────────┐     ┌─────────┐
    │ role_a  │────►│ role_b  │────►│  check  │
    └─────────┘     └─────────┘     └────┬────┘
         ▲                               │
         │          next_round           │
         └───────────────────────────────┤
                                         │ finalize
                                         ▼
                                    ┌──────────┐
                                    │ finalize │──► END
                                    └──────────┘

Rounds are strictly sequential: role_b reacts to the proposal role_a
produced in the same round, and the next role_a reacts to that role_b.
Each generator call is the only suspension point.

GenerationError and ParseError raised by a generator propagate out of
run() unmodified. No partial settlement is ever returned.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypedDict
from uuid import uuid4

from langgraph.graph import END, StateGraph

from ..agents.generator import ProposalGenerator
from ..coordination.policy import DEFAULT_TOLERANCE, ConvergencePolicy, settle
from ..evaluation.tracer import NegotiationTracer
from ..fsm.state_machine import NegotiationFSM, NegotiationPhase
from ..protocol.envelope import ProposalEnvelope
from ..protocol.errors import NegotiationTimeout
from ..protocol.messages import Proposal, Role, Settlement


DEFAULT_MAX_ROUNDS = 5


# ============================================================================
# Graph State
# ============================================================================

class NegotiationState(TypedDict):
    """State managed by the graph for one negotiation."""
    session_id: str
    context: str

    round: int                    # Completed rounds
    last_a: Optional[Proposal]
    last_b: Optional[Proposal]
    converged: bool

    transcript: List[ProposalEnvelope]
    settlement: Optional[Settlement]


@dataclass
class NegotiationResult:
    """Everything a caller may want to know about a finished negotiation."""
    session_id: str
    settlement: Settlement
    rounds: int
    converged: bool
    transcript: List[ProposalEnvelope] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def best_effort(self) -> bool:
        """True when the round budget ran out before convergence."""
        return not self.converged


# ============================================================================
# Orchestrator
# ============================================================================

class NegotiationOrchestrator:
    """
    Drives role A and role B toward agreement.

    One call to run() is one negotiation. Every run gets its own FSM and
    graph state; nothing is shared between runs.

    Example:
        orchestrator = NegotiationOrchestrator(generator, max_rounds=5)
        result = await orchestrator.run(context)
    """

    def __init__(
        self,
        generator: ProposalGenerator,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        tolerance: int = DEFAULT_TOLERANCE,
        call_timeout_seconds: Optional[float] = None,
        deadline_seconds: Optional[float] = None,
        tracer: Optional[NegotiationTracer] = None,
        on_proposal: Optional[Callable[[ProposalEnvelope], None]] = None,
    ):
        if max_rounds < 1:
            raise ValueError(f"max_rounds must be >= 1, got {max_rounds}")
        self.generator = generator
        self.max_rounds = max_rounds
        self.policy = ConvergencePolicy(tolerance)
        self.call_timeout_seconds = call_timeout_seconds
        self.deadline_seconds = deadline_seconds
        self.tracer = tracer
        self.on_proposal = on_proposal

    async def _propose(self, role: Role, context: str, peer: Optional[Proposal]) -> Proposal:
        call = self.generator.generate(role, context, peer)
        if self.call_timeout_seconds is None:
            return await call

        try:
            return await asyncio.wait_for(call, timeout=self.call_timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise NegotiationTimeout(
                f"Role {role.value} did not answer within {self.call_timeout_seconds}s"
            ) from exc

    def _record(self, envelope: ProposalEnvelope) -> None:
        if self.tracer:
            self.tracer.log_proposal(envelope)
        if self.on_proposal:
            self.on_proposal(envelope)

    def create_negotiation_graph(self, fsm: NegotiationFSM):
        """Build the compiled graph for one negotiation driven by fsm."""

        async def role_a(state: NegotiationState) -> dict:
            proposal = await self._propose(Role.A, state["context"], state["last_b"])
            fsm.role_a_done()

            envelope = ProposalEnvelope(
                sender=Role.A,
                session_id=state["session_id"],
                round=fsm.context.round + 1,
                payload=proposal,
            )
            self._record(envelope)
            return {"last_a": proposal, "transcript": state["transcript"] + [envelope]}

        async def role_b(state: NegotiationState) -> dict:
            proposal = await self._propose(Role.B, state["context"], state["last_a"])
            fsm.role_b_done()

            envelope = ProposalEnvelope(
                sender=Role.B,
                session_id=state["session_id"],
                round=fsm.context.round,
                payload=proposal,
            )
            self._record(envelope)
            return {
                "last_b": proposal,
                "round": fsm.context.round,
                "transcript": state["transcript"] + [envelope],
            }

        def check(state: NegotiationState) -> dict:
            result = self.policy.check(state["last_a"], state["last_b"])
            fsm.decide(result.converged)

            if self.tracer:
                self.tracer.log_convergence_check(
                    state["session_id"], state["round"], result.converged, result.reason
                )
            return {"converged": result.converged}

        def route(state: NegotiationState) -> str:
            if fsm.get_phase() == NegotiationPhase.FINALIZE:
                return "finalize"
            return "next_round"

        def finalize(state: NegotiationState) -> dict:
            settlement = settle(state["last_a"], state["last_b"])
            fsm.finish()
            fsm.check_invariants()
            return {"settlement": settlement}

        graph = StateGraph(NegotiationState)

        graph.add_node("role_a", role_a)
        graph.add_node("role_b", role_b)
        graph.add_node("check", check)
        graph.add_node("finalize", finalize)

        graph.set_entry_point("role_a")
        graph.add_edge("role_a", "role_b")
        graph.add_edge("role_b", "check")
        graph.add_conditional_edges(
            "check",
            route,
            {
                "next_round": "role_a",
                "finalize": "finalize",
            },
        )
        graph.add_edge("finalize", END)

        return graph.compile()

    async def run(self, context: str, session_id: Optional[str] = None) -> NegotiationResult:
        """
        Run one negotiation to a settlement.

        Raises:
            GenerationError: A generation call failed
            ParseError: A generation result could not be parsed
            NegotiationTimeout: A call or the whole run exceeded its deadline
        """
        if not context or not context.strip():
            raise ValueError("Negotiation context must not be empty")

        session_id = session_id or str(uuid4())
        fsm = NegotiationFSM(max_rounds=self.max_rounds)
        graph = self.create_negotiation_graph(fsm)

        initial_state: NegotiationState = {
            "session_id": session_id,
            "context": context,
            "round": 0,
            "last_a": None,
            "last_b": None,
            "converged": False,
            "transcript": [],
            "settlement": None,
        }
        # role_a, role_b and check per round, plus finalize
        run_config = {"recursion_limit": 3 * self.max_rounds + 5}

        if self.tracer:
            self.tracer.start_trace(session_id, max_rounds=self.max_rounds, tolerance=self.policy.tolerance)

        start_time = time.time()
        fsm.start()
        try:
            invocation = graph.ainvoke(initial_state, config=run_config)
            if self.deadline_seconds is None:
                final_state = await invocation
            else:
                try:
                    final_state = await asyncio.wait_for(invocation, timeout=self.deadline_seconds)
                except asyncio.TimeoutError as exc:
                    raise NegotiationTimeout(
                        f"Negotiation exceeded its {self.deadline_seconds}s deadline"
                    ) from exc
        except Exception as exc:
            if self.tracer:
                self.tracer.end_trace(session_id, error=exc)
            raise

        result = NegotiationResult(
            session_id=session_id,
            settlement=final_state["settlement"],
            rounds=final_state["round"],
            converged=final_state["converged"],
            transcript=final_state["transcript"],
            duration_ms=(time.time() - start_time) * 1000,
        )

        if self.tracer:
            self.tracer.log_outcome(session_id, result.settlement, result.converged, result.rounds)
            self.tracer.end_trace(session_id)

        return result


# ============================================================================
# Main Entry Points
# ============================================================================

def _default_generator() -> ProposalGenerator:
    from ..agents.gemini import GeminiTextGenerator
    from ..agents.generator import LLMProposalGenerator

    return LLMProposalGenerator(GeminiTextGenerator())


def _print_proposal(envelope: ProposalEnvelope) -> None:
    p = envelope.payload
    print(
        f"[Round {envelope.round}] Agent {envelope.sender.value}: "
        f"${p.licensing_cost} / {p.royalties_percent}% - {p.rationale}"
    )


async def run_negotiation(
    context: str,
    generator: Optional[ProposalGenerator] = None,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    tolerance: int = DEFAULT_TOLERANCE,
    call_timeout_seconds: Optional[float] = None,
    deadline_seconds: Optional[float] = None,
    tracer: Optional[NegotiationTracer] = None,
    verbose: bool = False,
) -> NegotiationResult:
    """
    Run a negotiation and return the full result.

    This is called by the Runtime layer.
    """
    orchestrator = NegotiationOrchestrator(
        generator=generator or _default_generator(),
        max_rounds=max_rounds,
        tolerance=tolerance,
        call_timeout_seconds=call_timeout_seconds,
        deadline_seconds=deadline_seconds,
        tracer=tracer,
        on_proposal=_print_proposal if verbose else None,
    )
    result = await orchestrator.run(context)

    if verbose:
        print()
        s = result.settlement
        if result.converged:
            print(f"[Result] Converged after {result.rounds} rounds: ${s.licensing_cost} / {s.royalties_percent}%")
        else:
            print(f"[Result] Best effort after {result.rounds} rounds: ${s.licensing_cost} / {s.royalties_percent}%")

    return result


async def negotiate_terms(
    context: str,
    generator: Optional[ProposalGenerator] = None,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    tolerance: int = DEFAULT_TOLERANCE,
) -> Settlement:
    """
    Negotiate a licensing cost and royalty percentage for the item
    described by context.

    Returns a Settlement, possibly best effort if the roles never
    converged within max_rounds.
    """
    result = await run_negotiation(
        context,
        generator=generator,
        max_rounds=max_rounds,
        tolerance=tolerance,
    )
    return result.settlement

"""
Rule-Based Proposal Strategy
============================

Deterministic stand-in for the LLM roles.

This is STRATEGY only - no orchestration, no model calls. It satisfies
the same generate() contract as the LLM generator, so the full loop can
run without an API key.
"""

from typing import Dict, Optional

from ..protocol.messages import Proposal, Role, round_half_up


def concession_strategy(
    anchor: Proposal,
    peer: Optional[Proposal] = None,
    previous: Optional[Proposal] = None,
    concession: float = 0.5,
) -> Proposal:
    """
    One role's next proposal.

    Args:
        anchor: Where this role opens
        peer: The other role's latest proposal (if any)
        previous: This role's own previous proposal (if any)
        concession: Fraction of the gap to the peer given up per move

    Strategy:
        1. Open at the anchor
        2. Without a peer to react to, hold position
        3. Otherwise move `concession` of the way toward the peer
    """
    position = previous or anchor

    if peer is None:
        return Proposal(
            licensing_cost=position.licensing_cost,
            royalties_percent=position.royalties_percent,
            rationale="Opening position" if previous is None else "Holding position",
        )

    cost = position.licensing_cost + concession * (peer.licensing_cost - position.licensing_cost)
    royalty = position.royalties_percent + concession * (peer.royalties_percent - position.royalties_percent)

    return Proposal(
        licensing_cost=round_half_up(cost),
        royalties_percent=round_half_up(royalty),
        rationale=f"Conceding {concession:.0%} of the gap",
    )


DEFAULT_ANCHORS: Dict[Role, Proposal] = {
    Role.A: Proposal(licensing_cost=1000, royalties_percent=15, rationale="Analyst opening"),
    Role.B: Proposal(licensing_cost=400, royalties_percent=5, rationale="Negotiator opening"),
}


class RuleBasedProposalGenerator:
    """
    Stateful wrapper around concession_strategy.

    Remembers each role's last proposal. Use one instance per
    negotiation, or call reset() between negotiations.
    """

    def __init__(
        self,
        anchors: Optional[Dict[Role, Proposal]] = None,
        concession: float = 0.5,
    ):
        if not 0 < concession <= 1:
            raise ValueError(f"Concession must be in (0, 1], got {concession}")
        self.anchors = anchors or DEFAULT_ANCHORS
        self.concession = concession
        self.previous: Dict[Role, Proposal] = {}
        self.calls = 0

    async def generate(
        self,
        role: Role,
        context: str,
        peer: Optional[Proposal] = None,
    ) -> Proposal:
        proposal = concession_strategy(
            anchor=self.anchors[role],
            peer=peer,
            previous=self.previous.get(role),
            concession=self.concession,
        )
        self.previous[role] = proposal
        self.calls += 1
        return proposal

    def reset(self) -> None:
        """Reset state for a new negotiation."""
        self.previous = {}
        self.calls = 0

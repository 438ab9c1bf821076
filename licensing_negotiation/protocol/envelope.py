"""
Proposal Envelope - Metadata wrapper for every proposal

The envelope contains routing and tracking information.
The payload contains the actual proposal.

Envelope = WHO, WHEN, WHICH ROUND
Payload = WHAT
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from .messages import Proposal, Role


@dataclass(frozen=True)
class ProposalEnvelope:
    """
    Wrapper for one proposal in the transcript.

    Attributes:
        id: Unique record identifier
        sender: Role that produced the proposal
        recipient: Role that will react to it
        session_id: Which negotiation this belongs to
        round: 1-based round in which it was produced
        timestamp: When it was recorded
        payload: The proposal itself
    """
    sender: Role
    session_id: str
    round: int
    payload: Proposal
    id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def recipient(self) -> Role:
        return self.sender.peer

    def to_dict(self) -> dict:
        """Serialize envelope to dictionary."""
        return {
            "id": self.id,
            "sender": self.sender.value,
            "recipient": self.recipient.value,
            "session_id": self.session_id,
            "round": self.round,
            "timestamp": self.timestamp.isoformat(),
            "payload": self.payload.to_dict(),
        }

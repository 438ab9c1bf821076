"""
Role Personas
=============

The two roles share one output contract and differ only in who they
are told they are. Adding a role means adding a persona here, never a
new code path.
"""

from dataclasses import dataclass
from typing import Dict

from ..protocol.messages import Role


@dataclass(frozen=True)
class Persona:
    """How one role is introduced to the model."""
    role: Role
    name: str
    system_persona: str
    introduction: str


ANALYST = Persona(
    role=Role.A,
    name="Agent A",
    system_persona="You are Agent A, a music analysis expert.",
    introduction=(
        "You are Agent A, widely considered the best analyzer of "
        "artists' profiles and songs."
    ),
)

NEGOTIATOR = Persona(
    role=Role.B,
    name="Agent B",
    system_persona="You are Agent B, a royalties negotiation expert.",
    introduction="You are Agent B, widely considered the best royalties negotiator.",
)

DEFAULT_PERSONAS: Dict[Role, Persona] = {
    Role.A: ANALYST,
    Role.B: NEGOTIATOR,
}

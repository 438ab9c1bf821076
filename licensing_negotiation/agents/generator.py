"""
Proposal Generator
==================

One interface, parameterized by role:

    generate(role, context, peer=None) -> Proposal

The LLM-backed implementation builds a role-specific prompt, makes
exactly ONE call to a text-generation backend, and runs the raw text
through the ResponseParser.

No retries here. A failed call surfaces GenerationError; an unparseable
answer surfaces ParseError. Whether to try again is the caller's call.
"""

import json
from typing import Dict, Optional, Protocol

from langsmith import traceable

from ..protocol.errors import GenerationError
from ..protocol.messages import Proposal, Role
from ..protocol.parser import ResponseParser
from .personas import DEFAULT_PERSONAS, Persona


class TextGenerator(Protocol):
    """Anything that can turn a persona and a prompt into raw text."""

    async def complete(self, system_persona: str, user_prompt: str) -> str:
        ...


class ProposalGenerator(Protocol):
    """Anything the orchestrator can ask for a proposal."""

    async def generate(
        self,
        role: Role,
        context: str,
        peer: Optional[Proposal] = None,
    ) -> Proposal:
        ...


OUTPUT_CONTRACT = """Generate a JSON object with:
  - "licensingCost": licensing cost in dollars (integer, 0 or more),
  - "royaltiesPercent": royalty percentage (integer between 0 and 100),
  - "rationale": a brief explanation of your reasoning.
Respond using markdown code fences containing valid JSON."""


def build_prompt(
    persona: Persona,
    context: str,
    peer: Optional[Proposal] = None,
    peer_name: Optional[str] = None,
) -> str:
    """
    Build the user prompt for one role.

    The peer's latest proposal is serialized as JSON so the role can
    react to it. peer_name defaults to the default persona of the other role.
    """
    lines = [
        persona.introduction,
        f"Based on the following information: {context}",
    ]

    if peer is not None:
        peer_name = peer_name or DEFAULT_PERSONAS[persona.role.peer].name
        lines.append(
            f"Consider the most recent proposal from {peer_name}: "
            f"{json.dumps(peer.to_dict())}."
        )

    lines.append(OUTPUT_CONTRACT)
    return "\n".join(lines)


class LLMProposalGenerator:
    """
    Proposal generator backed by a text-generation service.

    Example:
        generator = LLMProposalGenerator(GeminiTextGenerator())
        proposal = await generator.generate(Role.A, context)
    """

    def __init__(
        self,
        backend: TextGenerator,
        personas: Optional[Dict[Role, Persona]] = None,
        parser: Optional[ResponseParser] = None,
    ):
        self.backend = backend
        self.personas = personas or DEFAULT_PERSONAS
        self.parser = parser or ResponseParser()

    @traceable(name="generate_proposal", run_type="chain")
    async def generate(
        self,
        role: Role,
        context: str,
        peer: Optional[Proposal] = None,
    ) -> Proposal:
        persona = self.personas[role]
        peer_persona = self.personas.get(role.peer)
        prompt = build_prompt(
            persona,
            context,
            peer,
            peer_name=peer_persona.name if peer_persona else None,
        )

        try:
            raw_text = await self.backend.complete(persona.system_persona, prompt)
        except GenerationError as exc:
            if exc.role is None:
                exc.role = role.value
            raise

        return self.parser.parse(raw_text or "")

"""
Tests for the Agents Layer
==========================
"""

import asyncio
import json
from types import SimpleNamespace

import pytest

from licensing_negotiation.agents import (
    ANALYST,
    NEGOTIATOR,
    GeminiTextGenerator,
    LLMProposalGenerator,
    Persona,
    RuleBasedProposalGenerator,
    build_prompt,
    concession_strategy,
)
from licensing_negotiation.protocol import GenerationError, ParseError, Role

from stubs import FakeTextGenerator, proposal


CONTEXT = 'Song description: "Upbeat synth-pop". The song has 100000 monthly listeners.'
FENCED_A = '```json\n{"licensingCost": 800, "royaltiesPercent": 12, "rationale": "value"}\n```'
FENCED_B = 'Sure.\n```json\n{"licensingCost": 600, "royaltiesPercent": 9, "rationale": "market"}\n```'


class TestPrompt:
    """Role-specific prompt building."""

    def test_contains_persona_and_context(self):
        prompt = build_prompt(ANALYST, CONTEXT)

        assert ANALYST.introduction in prompt
        assert CONTEXT in prompt
        assert '"licensingCost"' in prompt
        assert "markdown code fences" in prompt

    def test_no_peer_section_without_peer(self):
        assert "most recent proposal" not in build_prompt(ANALYST, CONTEXT)

    def test_peer_is_serialized_as_json(self):
        peer = proposal(600, 9, "market")
        prompt = build_prompt(ANALYST, CONTEXT, peer)

        assert "Agent B" in prompt
        assert json.dumps(peer.to_dict()) in prompt

    def test_roles_share_contract_but_not_persona(self):
        prompt_a = build_prompt(ANALYST, CONTEXT)
        prompt_b = build_prompt(NEGOTIATOR, CONTEXT)

        assert prompt_a != prompt_b
        assert prompt_a.split("\n")[-4:] == prompt_b.split("\n")[-4:]

    def test_explicit_peer_name(self):
        prompt = build_prompt(NEGOTIATOR, CONTEXT, proposal(800, 12), peer_name="Label")

        assert "most recent proposal from Label" in prompt
        assert "Agent A" not in prompt


class TestLLMProposalGenerator:
    """One call, parsed, no retries."""

    def test_parses_backend_output_per_role(self):
        backend = FakeTextGenerator({"Agent A": [FENCED_A], "Agent B": [FENCED_B]})
        generator = LLMProposalGenerator(backend)

        a = asyncio.run(generator.generate(Role.A, CONTEXT))
        b = asyncio.run(generator.generate(Role.B, CONTEXT, peer=a))

        assert (a.licensing_cost, a.royalties_percent) == (800, 12)
        assert (b.licensing_cost, b.royalties_percent) == (600, 9)
        assert backend.calls[0][0] == ANALYST.system_persona
        assert backend.calls[1][0] == NEGOTIATOR.system_persona
        assert json.dumps(a.to_dict()) in backend.calls[1][1]

    def test_generation_error_propagates_with_role(self):
        backend = FakeTextGenerator(error=GenerationError("rate limited"))
        generator = LLMProposalGenerator(backend)

        with pytest.raises(GenerationError) as exc_info:
            asyncio.run(generator.generate(Role.B, CONTEXT))

        assert exc_info.value.role == "B"
        assert len(backend.calls) == 1

    def test_parse_error_is_not_retried(self):
        backend = FakeTextGenerator({"Agent A": ["I would rather not say."]})
        generator = LLMProposalGenerator(backend)

        with pytest.raises(ParseError):
            asyncio.run(generator.generate(Role.A, CONTEXT))

    def test_custom_personas_name_the_peer(self):
        """The peer is named from the configured personas, not the defaults."""
        personas = {
            Role.A: Persona(Role.A, "Label", "You are Label, a catalog analyst.", "You are Label."),
            Role.B: Persona(Role.B, "Artist", "You are Artist, a negotiator.", "You are Artist."),
        }
        backend = FakeTextGenerator({"Label": [FENCED_A], "Artist": [FENCED_B]})
        generator = LLMProposalGenerator(backend, personas=personas)

        a = asyncio.run(generator.generate(Role.A, CONTEXT))
        asyncio.run(generator.generate(Role.B, CONTEXT, peer=a))

        prompt_b = backend.calls[1][1]
        assert "most recent proposal from Label" in prompt_b
        assert "Agent A" not in prompt_b

        assert len(backend.calls) == 1


def fake_client(text=None, error=None):
    calls = []

    async def generate_content(model, contents, config):
        calls.append({"model": model, "contents": contents, "config": config})
        if error is not None:
            raise error
        return SimpleNamespace(text=text)

    client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))
    return client, calls


class TestGeminiTextGenerator:
    """Backend wiring, with the client replaced."""

    def test_returns_response_text(self):
        client, calls = fake_client(text=FENCED_A)
        backend = GeminiTextGenerator(model="gemini-test", temperature=0.2, client=client)

        text = asyncio.run(backend.complete(ANALYST.system_persona, "prompt"))

        assert text == FENCED_A
        assert calls[0]["model"] == "gemini-test"
        assert calls[0]["contents"] == "prompt"
        assert calls[0]["config"].temperature == 0.2
        assert "Agent A" in str(calls[0]["config"].system_instruction)

    def test_empty_response_becomes_empty_string(self):
        client, _ = fake_client(text=None)
        backend = GeminiTextGenerator(client=client)

        assert asyncio.run(backend.complete("persona", "prompt")) == ""

    def test_client_failure_becomes_generation_error(self):
        client, _ = fake_client(error=ConnectionError("network down"))
        backend = GeminiTextGenerator(client=client)

        with pytest.raises(GenerationError) as exc_info:
            asyncio.run(backend.complete("persona", "prompt"))

        assert isinstance(exc_info.value.__cause__, ConnectionError)


class TestConcessionStrategy:
    """Deterministic anchor-and-concede rule."""

    def test_opens_at_anchor(self):
        anchor = proposal(1000, 15)
        result = concession_strategy(anchor)

        assert (result.licensing_cost, result.royalties_percent) == (1000, 15)

    def test_moves_toward_peer(self):
        result = concession_strategy(proposal(400, 5), peer=proposal(1000, 15), concession=0.5)

        assert (result.licensing_cost, result.royalties_percent) == (700, 10)

    def test_moves_from_previous_not_anchor(self):
        result = concession_strategy(
            proposal(1000, 15), peer=proposal(700, 10), previous=proposal(850, 13), concession=0.5
        )

        assert result.licensing_cost == 775

    def test_full_concession_matches_peer(self):
        result = concession_strategy(proposal(1000, 15), peer=proposal(400, 5), concession=1.0)

        assert (result.licensing_cost, result.royalties_percent) == (400, 5)


class TestRuleBasedProposalGenerator:
    """Stateful wrapper."""

    def test_remembers_previous_positions(self):
        generator = RuleBasedProposalGenerator()

        first = asyncio.run(generator.generate(Role.A, CONTEXT))
        second = asyncio.run(generator.generate(Role.A, CONTEXT, peer=proposal(700, 10)))

        assert first.licensing_cost == 1000
        assert second.licensing_cost == 850
        assert generator.calls == 2

    def test_reset(self):
        generator = RuleBasedProposalGenerator()
        asyncio.run(generator.generate(Role.A, CONTEXT))
        generator.reset()

        assert generator.previous == {}
        assert generator.calls == 0

    def test_invalid_concession(self):
        with pytest.raises(ValueError):
            RuleBasedProposalGenerator(concession=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

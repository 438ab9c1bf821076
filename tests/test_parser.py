"""
Tests for the Response Parser
=============================
"""

import pytest

from licensing_negotiation.protocol import (
    ParseError,
    Proposal,
    ResponseParser,
    extract_fenced_block,
    first_object,
    passthrough,
    strip_leading_fence,
)


CLEAN = '{"licensingCost":500,"royaltiesPercent":12,"rationale":"x"}'
EXPECTED = {"licensingCost": 500, "royaltiesPercent": 12, "rationale": "x"}


@pytest.fixture
def parser():
    return ResponseParser()


class TestWellFormedInput:
    """Input that should always parse."""

    def test_clean_json_is_idempotent(self, parser):
        """Pure JSON yields exactly that object."""
        result = parser.parse(CLEAN)

        assert isinstance(result, Proposal)
        assert result.to_dict() == EXPECTED

    def test_fenced_json_with_prose(self, parser):
        """Prose around a ```json fence is ignored."""
        text = f"Here is my proposal:\n```json\n{CLEAN}\n```\nLet me know what you think."

        assert parser.parse(text).to_dict() == EXPECTED

    def test_untagged_fence(self, parser):
        """A fence without a language tag works too."""
        text = f"```\n{CLEAN}\n```"

        assert parser.parse(text).to_dict() == EXPECTED

    def test_uppercase_tag(self, parser):
        """The json tag is matched case-insensitively."""
        text = f"```JSON\n{CLEAN}\n```"

        assert parser.parse(text).to_dict() == EXPECTED

    def test_unclosed_fence(self, parser):
        """An opening fence without a closing one still parses."""
        text = f"```json\n{CLEAN}"

        assert parser.parse(text).to_dict() == EXPECTED

    def test_bare_object_in_prose(self, parser):
        """No fence at all: the first object in the prose is used."""
        text = f"My offer is {CLEAN} and that is final."

        assert parser.parse(text).to_dict() == EXPECTED

    def test_pretty_printed_json(self, parser):
        """Multi-line objects are fine."""
        text = """```json
{
  "licensingCost": 750,
  "royaltiesPercent": 8,
  "rationale": "Strong streaming numbers"
}
```"""
        result = parser.parse(text)

        assert result.licensing_cost == 750
        assert result.royalties_percent == 8
        assert result.rationale == "Strong streaming numbers"


class TestFirstMatchPolicy:
    """Only the first object found counts."""

    def test_first_of_two_fenced_blocks(self, parser):
        """Two fenced objects: the first one wins."""
        text = (
            "Option one:\n```json\n"
            '{"licensingCost": 500, "royaltiesPercent": 12, "rationale": "first"}\n'
            "```\nOption two:\n```json\n"
            '{"licensingCost": 900, "royaltiesPercent": 20, "rationale": "second"}\n'
            "```"
        )
        result = parser.parse(text)

        assert result.licensing_cost == 500
        assert result.royalties_percent == 12
        assert result.rationale == "first"

    def test_fenced_block_beats_earlier_bare_object(self, parser):
        """A fenced object is preferred over a bare one earlier in the text."""
        text = (
            'Previously {"licensingCost": 1, "royaltiesPercent": 1} was said.\n'
            '```json\n{"licensingCost": 500, "royaltiesPercent": 12}\n```'
        )

        assert parser.parse(text).licensing_cost == 500


class TestStrategies:
    """Each extraction strategy on its own."""

    def test_fenced_block_returns_interior(self):
        assert extract_fenced_block(f"```json\n{CLEAN}\n```") == CLEAN

    def test_fenced_block_needs_object(self):
        """A fence that does not open with an object is not a match."""
        assert extract_fenced_block("```json\nnot json\n```") is None

    def test_leading_fence_strips_both_markers(self):
        assert strip_leading_fence("```json\nhello\n```") == "hello"

    def test_leading_fence_only_applies_at_start(self):
        assert strip_leading_fence("hello ```json") is None

    def test_passthrough_always_matches(self):
        assert passthrough("anything") == "anything"

    def test_first_object_is_non_greedy(self):
        assert first_object('a {"x": 1} b {"y": 2}') == '{"x": 1}'

    def test_first_object_without_braces(self):
        assert first_object("no braces here") is None

    def test_custom_strategy_order(self):
        """Strategies are tried in the order given."""
        parser = ResponseParser(strategies=[lambda text: text.split("|")[1]])
        text = f'{{"licensingCost": 1, "royaltiesPercent": 1}}|{CLEAN}'

        assert parser.parse(text).licensing_cost == 500


class TestFieldHandling:
    """Field coercion and aliases."""

    def test_description_alias(self, parser):
        """'description' is accepted in place of 'rationale'."""
        result = parser.parse('{"licensingCost": 5, "royaltiesPercent": 1, "description": "why"}')

        assert result.rationale == "why"

    def test_rationale_wins_over_description(self, parser):
        result = parser.parse(
            '{"licensingCost": 5, "royaltiesPercent": 1, "rationale": "r", "description": "d"}'
        )

        assert result.rationale == "r"

    def test_missing_rationale_defaults_to_empty(self, parser):
        assert parser.parse('{"licensingCost": 5, "royaltiesPercent": 1}').rationale == ""

    def test_fractional_values_round_half_up(self, parser):
        result = parser.parse('{"licensingCost": 500.5, "royaltiesPercent": 12.5}')

        assert result.licensing_cost == 501
        assert result.royalties_percent == 13

    def test_integral_float(self, parser):
        assert parser.parse('{"licensingCost": 500.0, "royaltiesPercent": 12}').licensing_cost == 500


class TestParseFailures:
    """Everything that must raise ParseError."""

    def test_no_braces(self, parser):
        with pytest.raises(ParseError) as exc_info:
            parser.parse("I think 500 dollars and 12 percent is fair.")

        assert "500 dollars" in exc_info.value.cleaned

    def test_invalid_json_carries_cleaned_text(self, parser):
        with pytest.raises(ParseError) as exc_info:
            parser.parse("```json\n{licensingCost: 500}\n```")

        assert exc_info.value.cleaned == "{licensingCost: 500}"

    def test_missing_field(self, parser):
        with pytest.raises(ParseError, match="royaltiesPercent"):
            parser.parse('{"licensingCost": 500}')

    def test_string_value_is_not_numeric(self, parser):
        with pytest.raises(ParseError, match="not numeric"):
            parser.parse('{"licensingCost": "500", "royaltiesPercent": 12}')

    def test_boolean_is_not_numeric(self, parser):
        with pytest.raises(ParseError, match="not numeric"):
            parser.parse('{"licensingCost": true, "royaltiesPercent": 12}')

    def test_null_is_not_numeric(self, parser):
        with pytest.raises(ParseError):
            parser.parse('{"licensingCost": null, "royaltiesPercent": 12}')

    def test_negative_cost(self, parser):
        with pytest.raises(ParseError):
            parser.parse('{"licensingCost": -1, "royaltiesPercent": 12}')

    def test_royalty_above_hundred(self, parser):
        with pytest.raises(ParseError):
            parser.parse('{"licensingCost": 500, "royaltiesPercent": 150}')

    def test_nested_object_is_cut_short(self, parser):
        """The non-greedy match stops at the first closing brace."""
        with pytest.raises(ParseError):
            parser.parse('{"licensingCost": 5, "meta": {"a": 1}, "royaltiesPercent": 1}')

    def test_empty_text(self, parser):
        with pytest.raises(ParseError):
            parser.parse("")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

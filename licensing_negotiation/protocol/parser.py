"""
Response Parser
===============

Turns the raw text of a generation call into a Proposal.

Generated text is not guaranteed to be pure JSON. It may carry prose,
several fenced blocks, or a fence that was opened and never closed.
Extraction is an ordered list of strategies; the first one that returns
a region wins, and the first brace-delimited object inside that region
is the candidate that gets decoded.

    1. fenced block      ```json { ... } ```      -> interior object
    2. leading fence     ```json { ... }          -> fences stripped
    3. passthrough       prose { ... } prose      -> whole text

Then: first non-greedy {...} in the region, json.loads, field checks.
"""

import json
import re
from typing import Any, Callable, List, Optional, Sequence

from .errors import ParseError
from .messages import Proposal, round_half_up


FENCED_OBJECT = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})", re.IGNORECASE)
LEADING_FENCE = re.compile(r"^```(?:json)?", re.IGNORECASE)
FIRST_OBJECT = re.compile(r"(\{[\s\S]*?\})")

Strategy = Callable[[str], Optional[str]]


# ============================================================
# EXTRACTION STRATEGIES - each returns a region or None
# ============================================================

def extract_fenced_block(text: str) -> Optional[str]:
    """Interior of the first fenced block that opens with an object."""
    match = FENCED_OBJECT.search(text)
    if match:
        return match.group(1).strip()
    return None


def strip_leading_fence(text: str) -> Optional[str]:
    """Drop an opening fence marker and, if present, a closing one."""
    if not text.startswith("```"):
        return None

    stripped = LEADING_FENCE.sub("", text, count=1).strip()
    if stripped.endswith("```"):
        stripped = stripped[:-3].strip()
    return stripped


def passthrough(text: str) -> Optional[str]:
    return text


DEFAULT_STRATEGIES: List[Strategy] = [
    extract_fenced_block,
    strip_leading_fence,
    passthrough,
]


def first_object(region: str) -> Optional[str]:
    """First brace-delimited substring, non-greedy."""
    match = FIRST_OBJECT.search(region)
    return match.group(1).strip() if match else None


# ============================================================
# PARSER
# ============================================================

class ResponseParser:
    """
    Extracts a Proposal from noisy generated text.

    Example:
        parser = ResponseParser()
        proposal = parser.parse('Sure! ```json\\n{"licensingCost": 500, ...}\\n```')
    """

    def __init__(self, strategies: Optional[Sequence[Strategy]] = None):
        self.strategies = list(strategies) if strategies is not None else list(DEFAULT_STRATEGIES)

    def clean(self, text: str) -> str:
        """
        Reduce text to the candidate JSON payload.

        Raises:
            ParseError: If no brace-delimited object exists anywhere
        """
        cleaned = text.strip()

        for strategy in self.strategies:
            region = strategy(cleaned)
            if region is not None:
                cleaned = region
                break

        candidate = first_object(cleaned)
        if candidate is None:
            raise ParseError("No JSON object found in response", cleaned=cleaned)
        return candidate

    def parse(self, text: str) -> Proposal:
        """
        Parse generated text into a Proposal.

        Raises:
            ParseError: If decoding fails or required fields are missing,
                non-numeric or out of range
        """
        cleaned = self.clean(text)

        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid JSON: {exc.msg}", cleaned=cleaned) from exc

        if not isinstance(data, dict):
            raise ParseError("Payload is not a JSON object", cleaned=cleaned)

        return proposal_from_dict(data, cleaned=cleaned)


def _numeric_field(data: dict, key: str, cleaned: str) -> int:
    if key not in data:
        raise ParseError(f"Missing required field: {key}", cleaned=cleaned)

    value: Any = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"Field {key} is not numeric: {value!r}", cleaned=cleaned)

    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise ParseError(f"Field {key} is not finite", cleaned=cleaned)
        return round_half_up(value)
    return value


def proposal_from_dict(data: dict, cleaned: str = "") -> Proposal:
    """
    Build a Proposal from decoded wire data.

    Accepts "description" as an alias for "rationale".

    Raises:
        ParseError: If fields are missing, non-numeric or out of range
    """
    licensing_cost = _numeric_field(data, "licensingCost", cleaned)
    royalties_percent = _numeric_field(data, "royaltiesPercent", cleaned)

    rationale = data.get("rationale", data.get("description", ""))
    if rationale is None:
        rationale = ""

    try:
        return Proposal(
            licensing_cost=licensing_cost,
            royalties_percent=royalties_percent,
            rationale=str(rationale),
        )
    except ValueError as exc:
        raise ParseError(str(exc), cleaned=cleaned) from exc

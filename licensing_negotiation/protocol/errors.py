"""
Error Taxonomy
==============

Every failure the negotiation core can surface.

GenerationError  - the text-generation call itself failed
ParseError       - the call succeeded but no valid proposal came out of it
NegotiationTimeout - a call or the whole negotiation ran out of time

Exhausting the round budget is NOT an error: the orchestrator settles
on the last pair instead.
"""

from typing import Optional


class NegotiationError(Exception):
    """Base class for all negotiation failures."""


class GenerationError(NegotiationError):
    """
    The external text-generation call failed.

    Network, auth, rate limit or a malformed request all end up here.
    """

    def __init__(self, message: str, role: Optional[str] = None):
        super().__init__(message)
        self.role = role


class ParseError(NegotiationError):
    """
    Generated text could not be reduced to a valid Proposal.

    Attributes:
        cleaned: The candidate string after extraction, for diagnostics
    """

    def __init__(self, message: str, cleaned: str = ""):
        super().__init__(message)
        self.cleaned = cleaned


class NegotiationTimeout(NegotiationError):
    """A generation call or the whole negotiation exceeded its deadline."""

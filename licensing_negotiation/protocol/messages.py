"""
Proposal Schemas for the Licensing Protocol

This module defines the structured types exchanged during a negotiation.
Both roles emit the same Proposal shape; only the orchestrator turns the
final pair into a Settlement.

Wire keys are camelCase: licensingCost, royaltiesPercent, rationale.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class Role(Enum):
    """The two negotiating roles. Symmetric in protocol, distinct in persona."""
    A = "A"
    B = "B"

    @property
    def peer(self) -> "Role":
        return Role.B if self is Role.A else Role.A


@dataclass(frozen=True)
class Proposal:
    """
    One role's offer for one round.

    Example:
        proposal = Proposal(licensing_cost=500, royalties_percent=12, rationale="x")
    """
    licensing_cost: int
    royalties_percent: int
    rationale: str = ""

    def __post_init__(self):
        for name in ("licensing_cost", "royalties_percent"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.licensing_cost < 0:
            raise ValueError(f"Licensing cost must be >= 0, got {self.licensing_cost}")
        if not 0 <= self.royalties_percent <= 100:
            raise ValueError(f"Royalties must be in [0, 100], got {self.royalties_percent}")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the wire representation.

        Example:
            Proposal(500, 12, "x").to_dict()
            # {"licensingCost": 500, "royaltiesPercent": 12, "rationale": "x"}
        """
        return {
            "licensingCost": self.licensing_cost,
            "royaltiesPercent": self.royalties_percent,
            "rationale": self.rationale,
        }


@dataclass(frozen=True)
class Settlement:
    """The externally visible outcome of a negotiation."""
    licensing_cost: int
    royalties_percent: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "licensingCost": self.licensing_cost,
            "royaltiesPercent": self.royalties_percent,
        }

    def to_license_terms(self) -> Dict[str, int]:
        """
        Map onto the commercial licence-terms vocabulary used at registration.

        The minting fee is the flat licensing cost; the revenue share is
        the royalty percentage. Nothing is submitted from here.
        """
        return {
            "defaultMintingFee": self.licensing_cost,
            "commercialRevShare": self.royalties_percent,
        }


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up.

    round_half_up(101.5) == 102 and round_half_up(100.5) == 101, where
    Python's built-in round() would give 102 and 100.
    """
    return math.floor(value + 0.5)

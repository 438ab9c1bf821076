"""
PROTOCOL - Structured Communication
===================================

Question this layer answers:
"What does a valid proposal look like?"

Both roles emit the same shape:

```json
{"licensingCost": 500, "royaltiesPercent": 12, "rationale": "..."}
```

The ResponseParser is the only place free-form generated text is turned
into that shape. Everything downstream works with typed Proposals.
"""

from .errors import GenerationError, NegotiationError, NegotiationTimeout, ParseError
from .messages import Proposal, Role, Settlement, round_half_up
from .envelope import ProposalEnvelope
from .parser import (
    DEFAULT_STRATEGIES,
    ResponseParser,
    extract_fenced_block,
    first_object,
    passthrough,
    proposal_from_dict,
    strip_leading_fence,
)

__all__ = [
    "NegotiationError",
    "GenerationError",
    "ParseError",
    "NegotiationTimeout",
    "Proposal",
    "Role",
    "Settlement",
    "round_half_up",
    "ProposalEnvelope",
    "ResponseParser",
    "DEFAULT_STRATEGIES",
    "extract_fenced_block",
    "strip_leading_fence",
    "passthrough",
    "first_object",
    "proposal_from_dict",
]

"""
Licensing Negotiation
=====================

Two roles exchange structured proposals for a flat licensing cost and a
royalty percentage until they converge or the round budget runs out,
then the last pair is averaged into a Settlement.

Layers:
    protocol       - proposals, settlements, errors, response parsing
    fsm            - round bounds and phase ordering
    agents         - role personas and proposal generators
    coordination   - convergence and settlement rules
    context        - the song under negotiation
    orchestration  - the LangGraph loop
    evaluation     - tracing and judging
    runtime        - config and CLI

```python
settlement = await negotiate_terms(context)
```
"""

from .protocol import (
    GenerationError,
    NegotiationError,
    NegotiationTimeout,
    ParseError,
    Proposal,
    ResponseParser,
    Role,
    Settlement,
)
from .coordination import converged, settle
from .context import SongProfile, build_negotiation_context
from .orchestration import NegotiationOrchestrator, NegotiationResult, negotiate_terms, run_negotiation


__version__ = "0.1.0"
__all__ = [
    "negotiate_terms",
    "run_negotiation",
    "NegotiationOrchestrator",
    "NegotiationResult",
    "Proposal",
    "Settlement",
    "Role",
    "ResponseParser",
    "converged",
    "settle",
    "SongProfile",
    "build_negotiation_context",
    "NegotiationError",
    "GenerationError",
    "ParseError",
    "NegotiationTimeout",
]

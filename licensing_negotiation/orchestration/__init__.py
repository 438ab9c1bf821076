"""
ORCHESTRATION - Workflow Layer (via LangGraph)
==============================================

Question this layer answers:
"What runs next?"

LangGraph controls:
- Role A → Role B → check
- Looping to the next round
- Finalizing into a Settlement
- State propagation

```
role_a → role_b → check → (role_a or finalize → END)
```

LangGraph does NOT:
- Start the program (that's runtime)
- Decide what counts as agreement (that's coordination)
- Bound the rounds (that's the FSM)
- Load config (that's runtime)
"""

from .graph import (
    DEFAULT_MAX_ROUNDS,
    NegotiationOrchestrator,
    NegotiationResult,
    NegotiationState,
    negotiate_terms,
    run_negotiation,
)

__all__ = [
    "DEFAULT_MAX_ROUNDS",
    "NegotiationOrchestrator",
    "NegotiationResult",
    "NegotiationState",
    "negotiate_terms",
    "run_negotiation",
]

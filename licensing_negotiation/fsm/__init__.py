"""
FSM - State Machine Safety Layer
================================

Question this layer answers:
"Are we allowed to continue?"

FSM enforces:
- A-then-B ordering inside a round
- At least one full round before any convergence check
- Max rounds

```python
if fsm.decide(converged) is NegotiationPhase.FINALIZE:
    settle()
```

This is what GUARANTEES the negotiation stops.
"""

from .state_machine import FSMContext, InvalidTransition, NegotiationFSM, NegotiationPhase

__all__ = ["NegotiationFSM", "NegotiationPhase", "FSMContext", "InvalidTransition"]

"""
COORDINATION - Agreement Policy Layer
=====================================

Question this layer answers:
"Have the roles agreed, and on what?"

```python
if converged(last_a, last_b, tolerance=5):
    settlement = settle(last_a, last_b)
```

This layer does NOT:
- Decide execution order (that's orchestration)
- Bound the number of rounds (that's the FSM)
- Talk to any model (that's agents)
"""

from .policy import DEFAULT_TOLERANCE, ConvergencePolicy, ConvergenceResult, converged, settle

__all__ = ["converged", "settle", "ConvergencePolicy", "ConvergenceResult", "DEFAULT_TOLERANCE"]

"""
CONTEXT - Grounded Facts Layer
==============================

Question this layer answers:
"What is objectively true about the item?"

```python
context = build_negotiation_context(SongProfile(description, monthly_listeners))
```

Context:
- Is fixed for the whole negotiation
- Is the same for both roles

Context does NOT:
- Control flow
- Call any model
"""

from .song import SongProfile, build_negotiation_context

__all__ = ["SongProfile", "build_negotiation_context"]

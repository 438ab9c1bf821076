"""
AGENTS - Proposal Layer
=======================

Question this layer answers:
"What does this role propose?"

Two kinds of generators, one contract:

1. LLM-POWERED (generator.py + gemini.py):
   - One persona per role, same output contract
   - One Gemini call per proposal, parsed by the ResponseParser
   - Requires GOOGLE_API_KEY

2. DETERMINISTIC (strategies.py):
   - Anchor-and-concede rule
   - Testable, no API needed

```python
generator = LLMProposalGenerator(GeminiTextGenerator())
proposal = await generator.generate(Role.A, context, peer=last_b)
```

Agents do NOT:
- Manage loops (that's orchestration)
- Decide convergence (that's coordination)
- Retry failed calls
"""

from .personas import ANALYST, DEFAULT_PERSONAS, NEGOTIATOR, Persona
from .generator import (
    OUTPUT_CONTRACT,
    LLMProposalGenerator,
    ProposalGenerator,
    TextGenerator,
    build_prompt,
)
from .gemini import GeminiTextGenerator
from .strategies import DEFAULT_ANCHORS, RuleBasedProposalGenerator, concession_strategy

__all__ = [
    "Persona",
    "ANALYST",
    "NEGOTIATOR",
    "DEFAULT_PERSONAS",
    "ProposalGenerator",
    "TextGenerator",
    "LLMProposalGenerator",
    "OUTPUT_CONTRACT",
    "build_prompt",
    "GeminiTextGenerator",
    "RuleBasedProposalGenerator",
    "concession_strategy",
    "DEFAULT_ANCHORS",
]

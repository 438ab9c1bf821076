"""
EVALUATION - Observability and Quality Layer
============================================

Question this layer answers:
"What happened, and how good was it?"

1. Tracer (evaluation/tracer.py):
   - In-memory record of every proposal, check and outcome
   - Model calls additionally go to LangSmith when tracing is enabled

2. Rule-based Judge (evaluation/judge.py):
   - Deterministic: same result -> same score
   - Convergence, round efficiency, A/B alternation
"""

from .tracer import NegotiationTrace, NegotiationTracer, TraceRecord
from .judge import Judgment, JudgmentCriteria, SettlementJudge

__all__ = [
    "NegotiationTrace",
    "NegotiationTracer",
    "TraceRecord",
    "SettlementJudge",
    "Judgment",
    "JudgmentCriteria",
]

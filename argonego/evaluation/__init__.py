"""
evaluation - Quality Assessment Layer
=====================================

Question this layer answers:
"How did the session go?"

1. Tracer (tracer.py):
   - Records every message sent on the channel
   - Exports a session as a plain dict

2. Rule-based Judge (judge.py):
   - Deterministic: same session → same score
   - Fast, good for unit tests

   ```python
   judge = NegotiationJudge()
   judgments = judge.evaluate(pool_size=3, rounds=mediator.history, ...)
   print(judge.summary(judgments))
   ```
"""

from .judge import Judgment, JudgmentCriteria, NegotiationJudge
from .tracer import (
    NegotiationTrace,
    NegotiationTracer,
    TraceRecord,
    get_tracer,
    trace_negotiation,
)

__all__ = [
    "Judgment",
    "JudgmentCriteria",
    "NegotiationJudge",
    "NegotiationTrace",
    "NegotiationTracer",
    "TraceRecord",
    "get_tracer",
    "trace_negotiation",
]

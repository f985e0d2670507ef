"""
fsm - Protocol State Machine
============================

Question this layer answers:
"Which moves are legal right now?"

The FSM maps (state, received message kind) to an ordered tuple of
candidate next states:

```python
candidates = fsm.outcomes(MessageKind.START_QUERY)
# (PROPOSE, CANCEL)
```

An empty tuple means the message is a protocol violation.

The FSM does NOT:
- Pick among the candidates (that's coordination)
- Send anything (that's the negotiator)
"""

from .state_machine import (
    NegotiationFSM,
    NegotiationState,
    STATE_INFO,
    StateInfo,
    TRANSITIONS,
    outcomes,
)

__all__ = [
    "NegotiationFSM",
    "NegotiationState",
    "STATE_INFO",
    "StateInfo",
    "TRANSITIONS",
    "outcomes",
]

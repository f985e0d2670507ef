"""
agents - Reaction Layer
=======================

Question this layer answers:
"Who reacts to what?"

Two kinds of agents:

1. Negotiator (negotiator.py):
   - Owns private preferences and an argumentation graph
   - Proposes, asks why, argues, accepts, commits or cancels

2. Mediator (mediator.py):
   - Owns the item pool
   - Announces each round and records the selected item

```python
reply = negotiator.react(envelope)
outgoing = mediator.react(envelope)
```

Agents do NOT:
- Decide which moves are legal (that's the FSM)
- Manage threads or sessions (that's runtime)
"""

from .negotiator import Negotiator
from .mediator import Mediator, RoundRecord

__all__ = ["Negotiator", "Mediator", "RoundRecord"]

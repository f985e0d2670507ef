"""
coordination - Move Selection Layer
===================================

Question this layer answers:
"Which legal move do we make?"

Every state has a generator scoring the move into it. The highest value
wins; ties go to the candidate listed first by the FSM.

```python
state, action = choose_action(negotiator, fsm.outcomes(kind))
action.apply(negotiator)
```

This layer:
- Sits between the FSM and the argumentation graph
- Simulates moves on cloned graphs before committing them

This layer does NOT:
- Decide which moves are legal (that's the FSM)
- Deliver messages (that's transport)
"""

from .policy import (
    ACTION_GENERATORS,
    CANCEL_VALUE,
    UNACCEPTABLE,
    Action,
    choose_action,
    generate_argue_action,
)

__all__ = [
    "ACTION_GENERATORS",
    "CANCEL_VALUE",
    "UNACCEPTABLE",
    "Action",
    "choose_action",
    "generate_argue_action",
]

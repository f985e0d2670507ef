"""
argumentation - Belief Layer
============================

Question this layer answers:
"What do we believe, and how do arguments relate?"

- catalog:     Criterion, Rating, Item, CriterionRating
- preferences: criterion ranking, item scores, acceptability
- argument:    support / attack arguments and their wire format
- graph:       proposals and their chains of attacking arguments

```python
if graph.can_add(argument):
    graph.add(argument)
```

This layer does NOT:
- Know which message was received (that's the FSM)
- Choose between moves (that's coordination)
"""

from .catalog import (
    Criterion,
    CriterionRating,
    Item,
    NEGATIVE_RATINGS,
    POSITIVE_RATINGS,
    Rating,
)
from .preferences import Preferences
from .argument import Argument, ComparativePremise, EvaluativePremise, parse_argument
from .graph import ArgumentNode, NegotiationGraph, ProposalNode

__all__ = [
    "Criterion",
    "CriterionRating",
    "Item",
    "NEGATIVE_RATINGS",
    "POSITIVE_RATINGS",
    "Rating",
    "Preferences",
    "Argument",
    "ComparativePremise",
    "EvaluativePremise",
    "parse_argument",
    "ArgumentNode",
    "NegotiationGraph",
    "ProposalNode",
]

"""
Coordination Policy
===================

Decides which legal move a negotiator makes.

The FSM hands over an ordered tuple of candidate states. Every state owns
a generator that looks at the negotiator's local state (preferences, graph,
round items, focus item) and produces an Action:

    value    how good the move is for this negotiator
    payload  content of the message sent on entering the state
    effect   what to change locally once the move is chosen

Arbitration keeps the first candidate and only replaces it with a later
candidate of STRICTLY greater value.

Two sentinels rank moves that are not really wanted:

    UNACCEPTABLE = -100   the state is not viable
    CANCEL_VALUE = -99    deliberate abandonment, always beats UNACCEPTABLE
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence, Tuple

from ..argumentation.argument import Argument
from ..argumentation.catalog import Item
from ..argumentation.graph import NegotiationGraph
from ..fsm.state_machine import NegotiationState

if TYPE_CHECKING:
    from ..agents.negotiator import Negotiator


UNACCEPTABLE = -100
CANCEL_VALUE = -99


@dataclass
class Action:
    """
    A scored candidate move.

    Example:
        action = Action(value=5, payload="A", effect=lambda n: ...)
        action.apply(negotiator)
    """
    value: float
    payload: str = ""
    effect: Optional[Callable[["Negotiator"], None]] = None

    @property
    def viable(self) -> bool:
        return self.value > UNACCEPTABLE

    def apply(self, negotiator: "Negotiator") -> None:
        if self.effect is not None:
            self.effect(negotiator)


def _pin_focus(item: Item) -> Callable[["Negotiator"], None]:
    def effect(negotiator: "Negotiator") -> None:
        negotiator.focus_item = item
    return effect


def _focus_name(negotiator: "Negotiator") -> str:
    return negotiator.focus_item.name if negotiator.focus_item else ""


# ============================================================
# ARGUE
# ============================================================

def generate_argue_action(
    negotiator: "Negotiator",
    graph: NegotiationGraph,
    forced_item: Optional[Item] = None,
) -> Action:
    """
    Best argument over the proposed items of `graph`.

    Each candidate argument is scored by the best score among the items
    that would be winning once it is inserted, not by the argued item's own
    score. An argument after which nothing wins is not viable.

    Args:
        negotiator: Whose preferences and round items to use
        graph: Graph to argue on (the real one, or a clone for lookahead)
        forced_item: Only argue about this item
    """
    preferences = negotiator.preferences
    proposed = graph.proposed_items()

    best_argument: Optional[Argument] = None
    best_value = UNACCEPTABLE

    for item in proposed:
        if forced_item is not None and item != forced_item:
            continue

        argument = graph.generate_best_argument(item, preferences, negotiator.items)
        if argument is None:
            continue

        simulated = graph.clone()
        simulated.add(argument)

        value = UNACCEPTABLE
        for candidate in proposed:
            if simulated.is_winning(candidate):
                value = max(value, preferences.score(candidate))

        if value > best_value:
            best_value = value
            best_argument = argument

    if best_argument is None:
        return Action(UNACCEPTABLE)

    def commit_argument(n: "Negotiator") -> None:
        n.graph.add(best_argument)

    return Action(best_value, best_argument.to_payload(), commit_argument)


def generate_argue(negotiator: "Negotiator") -> Action:
    return generate_argue_action(negotiator, negotiator.graph)


def generate_argue_proposal(negotiator: "Negotiator") -> Action:
    """Argue about the focus item only (answer to REQUEST_WHY)."""
    if negotiator.focus_item is None:
        return Action(UNACCEPTABLE)
    return generate_argue_action(negotiator, negotiator.graph, negotiator.focus_item)


# ============================================================
# PROPOSE / ACCEPT
# ============================================================

def generate_propose(negotiator: "Negotiator") -> Action:
    """
    Propose the best acceptable item not yet proposed this round.

    Items are tried from best to worst; an item is only proposed if the
    negotiator could defend it when asked why (one-step lookahead on a
    clone of the graph).
    """
    preferences = negotiator.preferences
    proposed = negotiator.graph.proposed_items()
    remaining = [item for item in negotiator.items if item not in proposed]

    best = preferences.best(remaining)
    while best is not None and preferences.is_acceptable(best, negotiator.items):
        simulated = negotiator.graph.clone()
        simulated.initiate_proposal(best)

        if generate_argue_action(negotiator, simulated, best).viable:
            item = best

            def register_proposal(n: "Negotiator") -> None:
                n.graph.initiate_proposal(item)
                n.focus_item = item

            return Action(preferences.score(item), item.name, register_proposal)

        remaining.remove(best)
        best = preferences.best(remaining)

    return Action(UNACCEPTABLE)


def generate_ask_why(negotiator: "Negotiator") -> Action:
    if negotiator.focus_item is None:
        return Action(UNACCEPTABLE)
    return Action(CANCEL_VALUE, negotiator.focus_item.name)


def generate_accept(negotiator: "Negotiator") -> Action:
    """Accept the focus item right away if it is acceptable."""
    item = negotiator.focus_item
    if item is None or not negotiator.preferences.is_acceptable(item, negotiator.items):
        return Action(UNACCEPTABLE)
    return Action(negotiator.preferences.score(item), item.name, _pin_focus(item))


def generate_accept_any(negotiator: "Negotiator") -> Action:
    """Accept the best peer proposal that is winning or acceptable."""
    preferences = negotiator.preferences
    best_item = None
    best_value = UNACCEPTABLE

    for item in negotiator.graph.items_proposed_by_peer():
        if negotiator.graph.is_winning(item) or preferences.is_acceptable(item, negotiator.items):
            value = preferences.score(item)
            if value > best_value:
                best_value = value
                best_item = item

    if best_item is None:
        return Action(UNACCEPTABLE)
    return Action(best_value, best_item.name, _pin_focus(best_item))


# ============================================================
# SIMPLE GENERATORS
# ============================================================

def generate_wait(negotiator: "Negotiator") -> Action:
    return Action(0)


def generate_commit(negotiator: "Negotiator") -> Action:
    item = negotiator.focus_item
    return Action(0, _focus_name(negotiator), _pin_focus(item) if item else None)


def generate_cancel(negotiator: "Negotiator") -> Action:
    return Action(CANCEL_VALUE)


ACTION_GENERATORS: Dict[NegotiationState, Callable[["Negotiator"], Action]] = {
    NegotiationState.WAIT: generate_wait,
    NegotiationState.WAIT_COMMIT: generate_wait,
    NegotiationState.PROPOSE: generate_propose,
    NegotiationState.ASK_WHY: generate_ask_why,
    NegotiationState.ACCEPT: generate_accept,
    NegotiationState.ACCEPT_ANY: generate_accept_any,
    NegotiationState.ARGUE_PROP: generate_argue_proposal,
    NegotiationState.ARGUE: generate_argue,
    NegotiationState.COMMIT: generate_commit,
    NegotiationState.COMMIT_TAKE: generate_commit,
    NegotiationState.TAKE: generate_commit,
    NegotiationState.CANCEL: generate_cancel,
}


def choose_action(
    negotiator: "Negotiator",
    candidates: Sequence[NegotiationState],
) -> Tuple[NegotiationState, Action]:
    """
    Arbitrate between candidate states.

    Ties favour the earlier candidate; if every candidate is UNACCEPTABLE the
    first one is still chosen.

    Raises:
        ValueError: If there are no candidates
    """
    if not candidates:
        raise ValueError("No candidate state to choose from")

    best_state = candidates[0]
    best_action = ACTION_GENERATORS[best_state](negotiator)
    for state in candidates[1:]:
        action = ACTION_GENERATORS[state](negotiator)
        if action.value > best_action.value:
            best_state = state
            best_action = action
    return best_state, best_action

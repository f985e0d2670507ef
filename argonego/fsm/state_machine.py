"""
Negotiation State Machine
=========================

Enumerates which moves are legal in each phase of a round.

Round cycle (simplified):

    ┌────────┐  START_QUERY   ┌─────────┐  REQUEST_WHY  ┌────────────┐
    │  WAIT  │ ─────────────► │ PROPOSE │ ────────────► │ ARGUE_PROP │
    └────────┘                └─────────┘               └────────────┘
      ▲   │ PROPOSE                │ ACCEPT                   │ ARGUMENT
      │   ▼                        ▼                          ▼
      │ ┌─────────┐          ┌─────────────┐  CONFIRM  ┌──────────────────────┐
      │ │ ASK_WHY │          │ WAIT_COMMIT │ ────────► │ COMMIT               │
      │ └─────────┘          └─────────────┘           └──────────────────────┘
      │                                                          │ ITEMS_ANNOUNCE
      └──────────────────────────────────────────────────────────┘

A trigger is either a received MessageKind or None, meaning "fires
immediately, before any message is consulted". Every trigger maps to an
ordered tuple of candidate states; the policy layer picks among them.

There is no terminal state: CANCEL and TAKE both lead back to WAIT, and
rounds go on until the mediator's pool is empty.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet, Optional, Tuple

from ..protocol.messages import MessageKind, Recipient


class NegotiationState(Enum):
    """The finite set of negotiator states."""
    WAIT = auto()
    WAIT_COMMIT = auto()
    PROPOSE = auto()
    ASK_WHY = auto()
    ACCEPT = auto()
    ACCEPT_ANY = auto()
    ARGUE_PROP = auto()
    ARGUE = auto()
    COMMIT = auto()
    COMMIT_TAKE = auto()
    TAKE = auto()
    CANCEL = auto()


@dataclass(frozen=True)
class StateInfo:
    """What a state shows and sends on entry."""
    label: str
    emits: Optional[MessageKind] = None
    recipients: FrozenSet[Recipient] = field(default_factory=frozenset)


_PEER = frozenset({Recipient.PEER})
_BOTH = frozenset({Recipient.PEER, Recipient.MEDIATOR})

STATE_INFO: Dict[NegotiationState, StateInfo] = {
    NegotiationState.WAIT: StateInfo("WAIT"),
    NegotiationState.WAIT_COMMIT: StateInfo("WAIT"),
    NegotiationState.PROPOSE: StateInfo("PROPOSE", MessageKind.PROPOSE, _PEER),
    NegotiationState.ASK_WHY: StateInfo("ASK_WHY", MessageKind.REQUEST_WHY, _PEER),
    NegotiationState.ACCEPT: StateInfo("ACCEPT", MessageKind.ACCEPT, _PEER),
    NegotiationState.ACCEPT_ANY: StateInfo("ACCEPT", MessageKind.ACCEPT, _PEER),
    NegotiationState.ARGUE_PROP: StateInfo("ARGUE", MessageKind.ARGUMENT, _PEER),
    NegotiationState.ARGUE: StateInfo("ARGUE", MessageKind.ARGUMENT, _PEER),
    NegotiationState.COMMIT: StateInfo("COMMIT", MessageKind.CONFIRM, _PEER),
    NegotiationState.COMMIT_TAKE: StateInfo("COMMIT", MessageKind.CONFIRM, _PEER),
    NegotiationState.TAKE: StateInfo("TAKE", MessageKind.ITEMS_ANNOUNCE, _BOTH),
    NegotiationState.CANCEL: StateInfo("CANCEL", MessageKind.CANCEL, _BOTH),
}


S = NegotiationState
K = MessageKind

_AFTER_ARGUMENT = (S.ARGUE, S.PROPOSE, S.ACCEPT_ANY, S.CANCEL)

# (state, trigger) -> candidate next states, in arbitration order
TRANSITIONS: Dict[Tuple[NegotiationState, Optional[MessageKind]], Tuple[NegotiationState, ...]] = {
    (S.WAIT, K.ITEMS_ANNOUNCE): (S.WAIT,),
    (S.WAIT, K.START_QUERY): (S.PROPOSE, S.CANCEL),
    (S.WAIT, K.PROPOSE): (S.ASK_WHY, S.ACCEPT),
    (S.WAIT, K.CANCEL): (S.WAIT,),

    (S.PROPOSE, K.ACCEPT): (S.WAIT_COMMIT,),
    (S.PROPOSE, K.REQUEST_WHY): (S.ARGUE_PROP, S.CANCEL),

    (S.ARGUE, K.ACCEPT): (S.WAIT_COMMIT,),
    (S.ARGUE, K.ARGUMENT): _AFTER_ARGUMENT,
    (S.ARGUE, K.PROPOSE): (S.ASK_WHY, S.ACCEPT),
    (S.ARGUE, K.CANCEL): (S.WAIT,),
    (S.ARGUE_PROP, K.ACCEPT): (S.WAIT_COMMIT,),
    (S.ARGUE_PROP, K.ARGUMENT): _AFTER_ARGUMENT,
    (S.ARGUE_PROP, K.PROPOSE): (S.ASK_WHY, S.ACCEPT),
    (S.ARGUE_PROP, K.CANCEL): (S.WAIT,),

    (S.ASK_WHY, K.ARGUMENT): _AFTER_ARGUMENT,
    (S.ASK_WHY, K.CANCEL): (S.WAIT,),

    (S.ACCEPT, None): (S.COMMIT_TAKE,),
    (S.ACCEPT_ANY, None): (S.COMMIT_TAKE,),

    (S.WAIT_COMMIT, K.CONFIRM): (S.COMMIT,),
    (S.WAIT_COMMIT, K.CANCEL): (S.WAIT,),

    (S.COMMIT_TAKE, K.CONFIRM): (S.TAKE,),
    (S.COMMIT_TAKE, K.CANCEL): (S.WAIT,),

    (S.COMMIT, K.ITEMS_ANNOUNCE): (S.WAIT,),

    (S.TAKE, None): (S.WAIT,),
    (S.CANCEL, None): (S.WAIT,),
}


# States whose generator may find no viable move
_FALLIBLE = frozenset({S.PROPOSE, S.ARGUE, S.ARGUE_PROP})


def outcomes(state: NegotiationState, trigger: Optional[MessageKind]) -> Tuple[NegotiationState, ...]:
    """Candidate next states for `trigger` in `state` (empty when illegal)."""
    return TRANSITIONS.get((state, trigger), ())


class NegotiationFSM:
    """
    Protocol state of one negotiator.

    The FSM only knows what is legal. Choosing among the candidates is the
    policy layer's job; the negotiator then commits the choice here.
    """

    def __init__(self, initial: NegotiationState = NegotiationState.WAIT):
        self.state = initial
        self.transitions = 0

    def get_state(self) -> NegotiationState:
        """Get current state."""
        return self.state

    @property
    def info(self) -> StateInfo:
        return STATE_INFO[self.state]

    def outcomes(self, kind: MessageKind) -> Tuple[NegotiationState, ...]:
        return outcomes(self.state, kind)

    def direct_outcomes(self) -> Tuple[NegotiationState, ...]:
        """Candidates of the immediate transition, if the state has one."""
        return outcomes(self.state, None)

    def transition_to(self, state: NegotiationState) -> None:
        self.state = state
        self.transitions += 1

    def reset(self) -> None:
        self.state = NegotiationState.WAIT
        self.transitions = 0

    def check_invariants(self) -> bool:
        """
        Check that the transition table is well formed.

        These should NEVER be violated.
        """
        for candidates in TRANSITIONS.values():
            # Every candidate list is non-empty and only names known states
            assert candidates
            assert all(c in STATE_INFO for c in candidates)
            # Wherever PROPOSE or ARGUE could fail, CANCEL is a fallback
            if _FALLIBLE & set(candidates) and len(candidates) > 1:
                assert NegotiationState.CANCEL in candidates
        return True

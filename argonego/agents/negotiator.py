"""
Negotiator Agent
================

Drives one negotiator through the protocol, one atomic reaction at a time:

    inbound message
        → FSM: which states are legal now?
        → policy: which of them is best?
        → commit: set state, apply the move's effect
        → outbound message (if the new state emits one)

Errors in an inbound payload never escape a reaction: an unknown name, a
malformed payload or a rejected argument forces the negotiator to CANCEL.
A message with no transition from the current state is dropped.

The negotiator owns its preferences and its graph; nothing else mutates
them.
"""

from typing import List, Optional, Sequence

from ..argumentation.argument import parse_argument
from ..argumentation.catalog import Item
from ..argumentation.graph import NegotiationGraph
from ..argumentation.preferences import Preferences
from ..coordination.policy import choose_action
from ..errors import (
    ArgumentRejectedError,
    MalformedPayloadError,
    ProtocolViolationError,
    UnknownNameError,
)
from ..fsm.state_machine import STATE_INFO, NegotiationFSM, NegotiationState
from ..protocol.envelope import MessageEnvelope
from ..protocol.messages import Message, MessageKind, Recipient, parse_items, resolve_item
from ..transport.channel import LocalChannel


_SILENT_STATES = {NegotiationState.WAIT, NegotiationState.WAIT_COMMIT}


class Negotiator:
    """
    One of the two negotiating agents.

    Example:
        negotiator = Negotiator("engineer1", prefs, items, peer="engineer2", mediator="mediator")
        reply = negotiator.react(envelope)
    """

    def __init__(
        self,
        name: str,
        preferences: Preferences,
        items: Sequence[Item],
        peer: str,
        mediator: str,
        channel: Optional[LocalChannel] = None,
        verbose: bool = False,
        strict: bool = False,
        session_id: str = "",
    ):
        self.name = name
        self.preferences = preferences
        self.items: List[Item] = list(items)
        self.peer = peer
        self.mediator = mediator
        self.channel = channel
        self.verbose = verbose
        self.strict = strict
        self.session_id = session_id

        self.fsm = NegotiationFSM()
        self.graph = NegotiationGraph()
        self.focus_item: Optional[Item] = None

        # Dropped messages and forced cancellations
        self.violations = 0
        self.errors = 0

    @property
    def state(self) -> NegotiationState:
        return self.fsm.get_state()

    def _log(self, text: str) -> None:
        if self.verbose:
            print(f"[{self.name}] {text}")

    # ============================================================
    # REACTION CYCLE
    # ============================================================

    def react(self, envelope: Optional[MessageEnvelope] = None) -> Optional[MessageEnvelope]:
        """
        Perform one reaction.

        Args:
            envelope: Received message, or None to fire the current state's
                immediate transition (no-op if it has none)

        Returns:
            The envelope to send, if the new state emits a message

        Raises:
            ProtocolViolationError: Only in strict mode, for a message that
                has no transition from the current state
        """
        if envelope is None:
            candidates = self.fsm.direct_outcomes()
            if not candidates:
                return None
        else:
            message = envelope.message
            candidates = self.fsm.outcomes(message.kind)
            if not candidates:
                violation = ProtocolViolationError(
                    f"{message.kind.value} from {envelope.sender} not allowed in {self.state.name}"
                )
                self.violations += 1
                if self.strict:
                    raise violation
                self._log(f"dropped: {violation}")
                return None

            try:
                self._handle(message)
            except (UnknownNameError, MalformedPayloadError, ArgumentRejectedError) as e:
                self.errors += 1
                self._log(f"error: {e}")
                candidates = (NegotiationState.CANCEL,)

        state, action = choose_action(self, candidates)
        self.fsm.transition_to(state)
        action.apply(self)

        if state not in _SILENT_STATES:
            label = STATE_INFO[state].label
            self._log(f"{label}: {action.payload}" if action.payload else label)

        return self._outbound(state, action.payload)

    def _handle(self, message: Message) -> None:
        """Apply what an inbound message tells us to the local state."""
        kind = message.kind

        if kind == MessageKind.ITEMS_ANNOUNCE and self.state == NegotiationState.WAIT:
            self.items = parse_items(message.payload)
            self.graph = NegotiationGraph()
            self.focus_item = None

        elif kind == MessageKind.PROPOSE:
            item = resolve_item(message.payload, self.items)
            self.graph.receive_proposal(item)
            self.focus_item = item

        elif kind == MessageKind.ACCEPT:
            self.focus_item = resolve_item(message.payload, self.items)

        elif kind == MessageKind.ARGUMENT:
            argument = parse_argument(message.payload, self.items)
            if not self.graph.can_add(argument):
                raise ArgumentRejectedError(f"Cannot add argument: {message.payload!r}")
            self.graph.add(argument)

    def _outbound(self, state: NegotiationState, payload: str) -> Optional[MessageEnvelope]:
        info = STATE_INFO[state]
        if info.emits is None:
            return None

        recipients = []
        if Recipient.PEER in info.recipients:
            recipients.append(self.peer)
        if Recipient.MEDIATOR in info.recipients:
            recipients.append(self.mediator)

        return MessageEnvelope(
            sender=self.name,
            recipients=tuple(recipients),
            message=Message(info.emits, payload),
            session_id=self.session_id,
        )

    # ============================================================
    # CHANNEL DRIVER
    # ============================================================

    def step(self, block: bool = False) -> bool:
        """
        React once through the channel.

        Fires the immediate transition if the state has one, otherwise
        consumes one message from the inbox. Any reply is sent.

        Returns:
            False if there was nothing to do
        """
        if self.channel is None:
            raise RuntimeError(f"Negotiator {self.name} is not connected to a channel")

        if self.fsm.direct_outcomes():
            reply = self.react(None)
        else:
            envelope = self.channel.receive(self.name, block=block)
            if envelope is None:
                return False
            reply = self.react(envelope)

        if reply is not None:
            self.channel.send(reply)
        return True

    def run(self) -> None:
        """Step (blocking) until the channel is closed and drained."""
        while self.step(block=True):
            pass

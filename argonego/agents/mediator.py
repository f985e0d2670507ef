"""
Mediator Agent
==============

Owns the pool of items still to be selected and paces the rounds:

1. Pool empty → the session is finished, nothing is sent
2. Otherwise announce the pool to both negotiators (ITEMS_ANNOUNCE)
   and ask one of them, drawn at random, to start (START_QUERY)
3. Wait for the outcome:
   - ITEMS_ANNOUNCE "A" (a negotiator took A) → select A, next round
   - CANCEL → the session is cancelled and stops

The mediator never argues and never looks at preferences.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..argumentation.catalog import Item
from ..protocol.envelope import MessageEnvelope
from ..protocol.messages import Message, MessageKind, encode_items
from ..transport.channel import LocalChannel


@dataclass
class RoundRecord:
    """One round: the pool it was played on and what came out of it."""
    number: int
    pool: Tuple[Item, ...]
    starter: str
    selected: Optional[Item] = None
    cancelled: bool = False


class Mediator:
    """
    Round coordinator.

    Example:
        mediator = Mediator("mediator", items, ["engineer1", "engineer2"], channel)
        while mediator.step():
            ...
    """

    def __init__(
        self,
        name: str,
        items: Sequence[Item],
        negotiators: Sequence[str],
        channel: Optional[LocalChannel] = None,
        rng: Optional[random.Random] = None,
        verbose: bool = False,
        session_id: str = "",
    ):
        if not negotiators:
            raise ValueError("A mediator needs at least one negotiator")

        self.name = name
        self.pool: List[Item] = list(items)
        self.negotiators = list(negotiators)
        self.channel = channel
        self.rng = rng or random.Random()
        self.verbose = verbose
        self.session_id = session_id

        self.selected: List[Item] = []
        self.history: List[RoundRecord] = []
        self.finished = False
        self.cancelled = False
        self.ignored = 0

    @property
    def rounds(self) -> int:
        """Number of announced rounds."""
        return len(self.history)

    def _log(self, text: str) -> None:
        if self.verbose:
            print(f"[Mediator] {text}")

    def _envelope(self, recipients: Sequence[str], kind: MessageKind, payload: str = "") -> MessageEnvelope:
        return MessageEnvelope(
            sender=self.name,
            recipients=tuple(recipients),
            message=Message(kind, payload),
            session_id=self.session_id,
        )

    # ============================================================
    # ROUNDS
    # ============================================================

    def start_round(self) -> List[MessageEnvelope]:
        """
        Open the next round.

        Returns:
            Envelopes to send (empty once the pool is exhausted)
        """
        if not self.pool:
            self.finished = True
            self._log("All items were selected")
            return []

        starter = self.rng.choice(self.negotiators)
        self.history.append(
            RoundRecord(number=len(self.history) + 1, pool=tuple(self.pool), starter=starter)
        )

        self._log(f"Round {self.rounds}: announcing {len(self.pool)} items, query to {starter}")
        return [
            self._envelope(self.negotiators, MessageKind.ITEMS_ANNOUNCE, encode_items(self.pool)),
            self._envelope([starter], MessageKind.START_QUERY),
        ]

    def react(self, envelope: MessageEnvelope) -> List[MessageEnvelope]:
        """Handle a round outcome; returns the envelopes to send next."""
        message = envelope.message

        if message.kind == MessageKind.ITEMS_ANNOUNCE:
            item = next((it for it in self.pool if it.name == message.payload), None)
            if item is None:
                self._log(f"Unknown item selected by {envelope.sender}: {message.payload!r}")
            else:
                self.pool.remove(item)
                self.selected.append(item)
                if self.history:
                    self.history[-1].selected = item
                self._log(f"Round {self.rounds}: {envelope.sender} selected {item.name}")
            return self.start_round()

        if message.kind == MessageKind.CANCEL:
            self.cancelled = True
            self.finished = True
            if self.history:
                self.history[-1].cancelled = True
            self._log(f"Negotiation was cancelled by {envelope.sender}")
            return []

        self.ignored += 1
        self._log(f"Ignoring {message.kind.value} from {envelope.sender}")
        return []

    # ============================================================
    # CHANNEL DRIVER
    # ============================================================

    def step(self, block: bool = False) -> bool:
        """
        Act once through the channel.

        Returns:
            False once the session is finished, or when idle
        """
        if self.channel is None:
            raise RuntimeError("Mediator is not connected to a channel")
        if self.finished:
            return False

        if not self.history:
            outgoing = self.start_round()
        else:
            envelope = self.channel.receive(self.name, block=block)
            if envelope is None:
                return False
            outgoing = self.react(envelope)

        for envelope in outgoing:
            self.channel.send(envelope)
        return True

    def run(self) -> None:
        """Step (blocking) until the session is finished or the channel closes."""
        while self.step(block=True):
            pass

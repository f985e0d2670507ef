"""
Local Communication Channel
===========================

In-memory channel connecting the mediator and the two negotiators:
- Agent Cards: who is reachable at which address, in which role
- Discovery: finding agents by role
- Delivery: one FIFO inbox per address

Delivery is reliable and ordered per inbox. The channel does not know
about negotiation state, turns or payload grammar.

Thread-safe: in threaded runs every agent blocks on its own inbox until
a message arrives or the channel is closed.
"""

from collections import deque
from dataclasses import dataclass
from threading import Condition
from typing import Callable, Deque, Dict, List, Optional

from ..protocol.envelope import MessageEnvelope


# =============================================================================
# Agent Cards - Who is on the channel
# =============================================================================

@dataclass
class AgentCard:
    """
    Describes an agent reachable on the channel.

    Example:
        card = AgentCard(agent_id="engineer1", role="negotiator")
    """
    agent_id: str
    role: str
    description: str = ""


class AgentRegistry:
    """Agent registry for discovery by role."""

    def __init__(self):
        self._agents: Dict[str, AgentCard] = {}

    def register(self, card: AgentCard) -> None:
        self._agents[card.agent_id] = card

    def discover(self, role: str) -> List[AgentCard]:
        """Find agents with a specific role, in registration order."""
        return [card for card in self._agents.values() if card.role == role]


# =============================================================================
# LocalChannel
# =============================================================================

class LocalChannel:
    """
    In-memory message channel.

    Example:
        channel = LocalChannel()
        channel.register("engineer1")
        channel.send(envelope)
        envelope = channel.receive("engineer1")
    """

    def __init__(self):
        self.registry = AgentRegistry()
        self._inboxes: Dict[str, Deque[MessageEnvelope]] = {}
        self._history: List[MessageEnvelope] = []
        self._subscribers: List[Callable[[MessageEnvelope], None]] = []
        self._condition = Condition()
        self._closed = False

    def register(self, address: str, role: str = "negotiator", description: str = "") -> AgentCard:
        """Register an agent and open its inbox."""
        card = AgentCard(agent_id=address, role=role, description=description)
        with self._condition:
            self.registry.register(card)
            self._inboxes.setdefault(address, deque())
        return card

    def discover(self, role: str) -> List[str]:
        """Addresses of the agents registered with `role`."""
        with self._condition:
            return [card.agent_id for card in self.registry.discover(role)]

    def send(self, envelope: MessageEnvelope) -> None:
        """
        Deliver an envelope to every recipient's inbox.

        Raises:
            ValueError: If a recipient is not registered (nothing is delivered)
        """
        with self._condition:
            for recipient in envelope.recipients:
                if recipient not in self._inboxes:
                    raise ValueError(f"Unknown agent: {recipient}")

            for recipient in envelope.recipients:
                self._inboxes[recipient].append(envelope)
            self._history.append(envelope)
            subscribers = list(self._subscribers)
            self._condition.notify_all()

        # Notify outside the lock so callbacks may use the channel
        for callback in subscribers:
            callback(envelope)

    def receive(self, address: str, block: bool = False) -> Optional[MessageEnvelope]:
        """
        Next envelope for `address`, or None.

        With block=True, waits until a message arrives or the channel is
        closed. Queued messages are still handed out after close().
        """
        with self._condition:
            if address not in self._inboxes:
                raise ValueError(f"Unknown agent: {address}")
            inbox = self._inboxes[address]
            while block and not inbox and not self._closed:
                self._condition.wait()
            return inbox.popleft() if inbox else None

    def pending(self, address: Optional[str] = None) -> int:
        """Number of queued envelopes for `address` (or for everyone)."""
        with self._condition:
            if address is not None:
                return len(self._inboxes.get(address, ()))
            return sum(len(inbox) for inbox in self._inboxes.values())

    def subscribe(self, callback: Callable[[MessageEnvelope], None]) -> None:
        """Call `callback` with every envelope sent from now on."""
        with self._condition:
            self._subscribers.append(callback)

    def history(self) -> List[MessageEnvelope]:
        """Every envelope sent so far, in send order."""
        with self._condition:
            return list(self._history)

    def close(self) -> None:
        """Wake every blocked receiver; later receives return None once drained."""
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed

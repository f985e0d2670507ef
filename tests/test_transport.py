"""
Tests for Transport Layer
=========================
"""

import threading

import pytest

from argonego.protocol import Message, MessageEnvelope, MessageKind, create_envelope
from argonego.transport import AgentCard, AgentRegistry, LocalChannel


K = MessageKind


@pytest.fixture
def channel():
    channel = LocalChannel()
    channel.register("mediator", role="mediator", description="Round coordinator")
    channel.register("engineer1")
    channel.register("engineer2")
    return channel


def envelope(kind, payload="", sender="engineer1", recipients=("engineer2",)):
    return create_envelope(sender, recipients, Message(kind, payload))


class TestRegistry:
    """Test agent cards and discovery."""

    def test_discover_by_role(self, channel):
        """Negotiators are found in registration order."""
        assert channel.discover("negotiator") == ["engineer1", "engineer2"]
        assert channel.discover("mediator") == ["mediator"]
        assert channel.discover("auditor") == []

    def test_agent_cards(self):
        """Discovery returns the registered cards."""
        registry = AgentRegistry()
        registry.register(AgentCard("mediator", "mediator", "Round coordinator"))
        (card,) = registry.discover("mediator")
        assert card.description == "Round coordinator"
        assert registry.discover("negotiator") == []


class TestDelivery:
    """Test send and receive."""

    def test_fifo_per_inbox(self, channel):
        """Messages arrive in send order."""
        channel.send(envelope(K.PROPOSE, "A"))
        channel.send(envelope(K.ARGUMENT, "A <= Power=GOOD"))

        assert channel.receive("engineer2").message.kind == K.PROPOSE
        assert channel.receive("engineer2").message.kind == K.ARGUMENT
        assert channel.receive("engineer2") is None

    def test_multiple_recipients(self, channel):
        """Every recipient gets the same envelope."""
        sent = envelope(K.CANCEL, recipients=("engineer2", "mediator"))
        channel.send(sent)

        assert channel.receive("engineer2") is sent
        assert channel.receive("mediator") is sent
        assert channel.pending() == 0
        assert channel.history() == [sent]

    def test_unknown_recipient(self, channel):
        """Nothing is delivered if any recipient is unknown."""
        with pytest.raises(ValueError):
            channel.send(envelope(K.CANCEL, recipients=("engineer2", "auditor")))
        assert channel.pending("engineer2") == 0
        assert channel.history() == []

    def test_unknown_address(self, channel):
        with pytest.raises(ValueError):
            channel.receive("auditor")

    def test_subscribers_see_every_message(self, channel):
        seen = []
        channel.subscribe(lambda e: seen.append(e.message.kind))
        channel.send(envelope(K.PROPOSE, "A"))
        channel.send(envelope(K.ACCEPT, "A", sender="engineer2", recipients=("engineer1",)))
        assert seen == [K.PROPOSE, K.ACCEPT]


class TestClose:
    """Test close and blocking receive."""

    def test_queued_messages_survive_close(self, channel):
        """Receivers drain their inbox after close."""
        channel.send(envelope(K.PROPOSE, "A"))
        channel.close()

        assert channel.closed
        assert channel.receive("engineer2", block=True).message.payload == "A"
        assert channel.receive("engineer2", block=True) is None

    def test_close_wakes_blocked_receiver(self, channel):
        results = []
        receiver = threading.Thread(target=lambda: results.append(channel.receive("engineer1", block=True)))
        receiver.start()

        channel.close()
        receiver.join(timeout=5)
        assert not receiver.is_alive()
        assert results == [None]

    def test_send_wakes_blocked_receiver(self, channel):
        results = []
        receiver = threading.Thread(target=lambda: results.append(channel.receive("engineer2", block=True)))
        receiver.start()

        channel.send(envelope(K.PROPOSE, "B"))
        receiver.join(timeout=5)
        assert not receiver.is_alive()
        assert results[0].message.payload == "B"


class TestEnvelope:
    """Test envelope metadata."""

    def test_needs_recipient(self):
        with pytest.raises(ValueError):
            MessageEnvelope(sender="engineer1", recipients=(), message=Message(K.CANCEL))

    def test_dict_round_trip(self):
        """Serialization keeps id, timestamp and message."""
        original = create_envelope("engineer1", ["engineer2", "mediator"], Message(K.CANCEL), "s-1")
        restored = MessageEnvelope.from_dict(original.to_dict())

        assert restored.id == original.id
        assert restored.timestamp == original.timestamp
        assert restored.recipients == ("engineer2", "mediator")
        assert restored.message == original.message
        assert restored.session_id == "s-1"

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            Message.from_dict({"kind": "HAGGLE", "payload": ""})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

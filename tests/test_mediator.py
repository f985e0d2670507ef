"""
Tests for the Mediator Agent
============================
"""

import random

import pytest

from argonego.agents import Mediator
from argonego.protocol import MessageKind, encode_items
from argonego.transport import LocalChannel


K = MessageKind
NEGOTIATORS = ["engineer1", "engineer2"]


@pytest.fixture
def mediator(items):
    return Mediator("mediator", items, NEGOTIATORS, rng=random.Random(0))


class TestRounds:
    """Test round pacing."""

    def test_needs_negotiators(self, items):
        with pytest.raises(ValueError):
            Mediator("mediator", items, [])

    def test_start_round(self, mediator, items):
        """Announce the pool to everyone, query one negotiator."""
        announce, query = mediator.start_round()

        assert announce.message.kind == K.ITEMS_ANNOUNCE
        assert announce.message.payload == encode_items(items)
        assert announce.recipients == tuple(NEGOTIATORS)

        assert query.message.kind == K.START_QUERY
        assert query.message.payload == ""
        assert len(query.recipients) == 1
        assert query.recipients[0] in NEGOTIATORS

        assert mediator.rounds == 1
        assert mediator.history[0].starter == query.recipients[0]
        assert mediator.history[0].pool == tuple(items)

    def test_starter_follows_rng(self, items):
        """The same seed draws the same starters."""
        starters = []
        for _ in range(2):
            m = Mediator("mediator", items, NEGOTIATORS, rng=random.Random(5))
            _, query = m.start_round()
            starters.append(query.recipients)
        assert starters[0] == starters[1]

    def test_empty_pool_finishes(self):
        """Nothing to select: nothing is sent."""
        mediator = Mediator("mediator", [], NEGOTIATORS)
        assert mediator.start_round() == []
        assert mediator.finished
        assert not mediator.cancelled
        assert mediator.rounds == 0

    def test_selection_opens_next_round(self, mediator, make_envelope, item_a, item_b):
        mediator.start_round()
        outgoing = mediator.react(make_envelope(K.ITEMS_ANNOUNCE, "A", recipients=("engineer1", "mediator")))

        assert mediator.selected == [item_a]
        assert mediator.pool == [item_b]
        assert mediator.history[0].selected == item_a
        assert outgoing[0].message.payload == encode_items([item_b])
        assert mediator.rounds == 2

    def test_last_selection_finishes(self, mediator, make_envelope, item_a, item_b):
        mediator.start_round()
        mediator.react(make_envelope(K.ITEMS_ANNOUNCE, "B", recipients=("mediator",)))
        outgoing = mediator.react(make_envelope(K.ITEMS_ANNOUNCE, "A", recipients=("mediator",)))

        assert outgoing == []
        assert mediator.finished
        assert mediator.selected == [item_b, item_a]
        assert mediator.pool == []
        assert mediator.rounds == 2

    def test_unknown_selection_starts_next_round(self, mediator, make_envelope, items):
        """An unknown item is not selected, but the session goes on."""
        mediator.start_round()
        outgoing = mediator.react(make_envelope(K.ITEMS_ANNOUNCE, "Z", recipients=("mediator",)))

        assert mediator.selected == []
        assert mediator.pool == items
        assert len(outgoing) == 2
        assert mediator.rounds == 2

    def test_cancel_stops_session(self, mediator, make_envelope):
        mediator.start_round()
        assert mediator.react(make_envelope(K.CANCEL, recipients=("engineer1", "mediator"))) == []
        assert mediator.cancelled
        assert mediator.finished
        assert mediator.history[-1].cancelled

    def test_other_kinds_ignored(self, mediator, make_envelope):
        """The mediator only cares about selections and cancellations."""
        mediator.start_round()
        assert mediator.react(make_envelope(K.PROPOSE, "A", recipients=("mediator",))) == []
        assert mediator.ignored == 1
        assert not mediator.finished


class TestChannelDriver:
    """Test step() through a channel."""

    @pytest.fixture
    def channel(self):
        channel = LocalChannel()
        channel.register("mediator", role="mediator")
        for name in NEGOTIATORS:
            channel.register(name)
        return channel

    def test_step_needs_channel(self, mediator):
        with pytest.raises(RuntimeError):
            mediator.step()

    def test_first_step_announces(self, channel, items):
        mediator = Mediator("mediator", items, NEGOTIATORS, channel=channel, rng=random.Random(0))
        assert mediator.step()

        starter = mediator.history[0].starter
        assert channel.pending("engineer1") + channel.pending("engineer2") == 3
        assert channel.pending(starter) == 2

        # Waiting for the round outcome
        assert mediator.step() is False

    def test_step_handles_selection(self, channel, items, make_envelope):
        mediator = Mediator("mediator", items, NEGOTIATORS, channel=channel, rng=random.Random(0))
        mediator.step()
        channel.send(make_envelope(K.ITEMS_ANNOUNCE, "A", recipients=("engineer1", "mediator")))

        assert mediator.step()
        assert [item.name for item in mediator.selected] == ["A"]
        assert mediator.rounds == 2

    def test_finished_mediator_does_nothing(self, channel):
        mediator = Mediator("mediator", [], NEGOTIATORS, channel=channel)
        assert mediator.step()
        assert mediator.finished
        assert mediator.step() is False
        assert channel.history() == []

    def test_logging(self, channel, items, capsys):
        mediator = Mediator("mediator", items, NEGOTIATORS, channel=channel, verbose=True)
        mediator.step()
        assert "[Mediator] Round 1: announcing 2 items" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

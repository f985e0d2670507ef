"""Shared pytest fixtures for negotiation tests."""

import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from argonego.agents import Negotiator
from argonego.argumentation import Criterion, CriterionRating, Item, Preferences, Rating
from argonego.protocol import Message, MessageEnvelope, MessageKind


@pytest.fixture
def item_a():
    return Item("A", "first item")


@pytest.fixture
def item_b():
    return Item("B", "second item")


@pytest.fixture
def items(item_a, item_b):
    return [item_a, item_b]


def _ratings(item_a, item_b):
    # A: strong on Power, weak on Cost. B: the opposite.
    return [
        CriterionRating(item_a, Criterion.POWER, Rating.GOOD),
        CriterionRating(item_a, Criterion.COST, Rating.BAD),
        CriterionRating(item_b, Criterion.POWER, Rating.BAD),
        CriterionRating(item_b, Criterion.COST, Rating.GOOD),
    ]


@pytest.fixture
def power_first(item_a, item_b):
    """Power > Cost: A scores 5, B scores 4."""
    return Preferences([Criterion.POWER, Criterion.COST], _ratings(item_a, item_b))


@pytest.fixture
def cost_first(item_a, item_b):
    """Cost > Power: A scores 4, B scores 5."""
    return Preferences([Criterion.COST, Criterion.POWER], _ratings(item_a, item_b))


@pytest.fixture
def make_envelope():
    """Build an envelope addressed to engineer1 by default."""
    def build(kind, payload="", sender="engineer2", recipients=("engineer1",)):
        return MessageEnvelope(
            sender=sender,
            recipients=recipients,
            message=Message(kind, payload),
        )
    return build


@pytest.fixture
def engineer1(power_first, items):
    """Negotiator preferring A, peer engineer2."""
    return Negotiator("engineer1", power_first, items, peer="engineer2", mediator="mediator")


@pytest.fixture
def engineer2(cost_first, items):
    """Negotiator preferring B, peer engineer1."""
    return Negotiator("engineer2", cost_first, items, peer="engineer1", mediator="mediator")


@pytest.fixture
def announced(make_envelope, items):
    """ITEMS_ANNOUNCE envelope carrying the two-item pool."""
    from argonego.protocol import encode_items
    return make_envelope(MessageKind.ITEMS_ANNOUNCE, encode_items(items), sender="mediator")

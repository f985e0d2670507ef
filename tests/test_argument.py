"""
Tests for Arguments
===================
"""

import pytest

from argonego.argumentation import (
    Argument,
    ComparativePremise,
    Criterion,
    EvaluativePremise,
    Rating,
    parse_argument,
)
from argonego.errors import MalformedPayloadError, UnknownNameError


POWER, COST, NOISE = Criterion.POWER, Criterion.COST, Criterion.NOISE


def arg(item, criterion, rating, polarity=True, superior=None, inferior=None):
    comparative = ComparativePremise(superior, inferior) if superior else None
    return Argument(item, polarity, EvaluativePremise(criterion, rating), comparative)


class TestEncoding:
    """Test the ARGUMENT payload format."""

    def test_support_without_comparative(self, item_a):
        """Plain support: item, arrow, evaluative premise."""
        assert arg(item_a, POWER, Rating.GOOD).to_payload() == "A <= Power=GOOD"

    def test_attack_with_comparative(self, item_a):
        """Attacks are negated and carry the comparative premise."""
        argument = arg(item_a, COST, Rating.BAD, polarity=False, superior=COST, inferior=POWER)
        assert argument.to_payload() == "not A <= Cost=BAD, Cost > Power"

    def test_parse_is_lossless(self, items, item_a, item_b):
        """Parsing the payload gives the same argument back."""
        for argument in [
            arg(item_a, POWER, Rating.GOOD),
            arg(item_b, NOISE, Rating.VERY_BAD, polarity=False, superior=NOISE, inferior=COST),
        ]:
            assert parse_argument(argument.to_payload(), items) == argument

    def test_parse_resolves_item(self, items, item_a):
        """The parsed item is the known one, description included."""
        parsed = parse_argument("A <= Power=GOOD", items)
        assert parsed.item.description == item_a.description
        assert parsed.polarity is True
        assert parsed.comparative is None


class TestParseErrors:
    """Test rejected payloads."""

    @pytest.mark.parametrize("payload", [
        "A Power=GOOD",
        "A <= Power",
        "A <= Power=GOOD=BAD",
        "A <= Power=GOOD, Cost",
        "A <= Power=GOOD, Power > Cost, Cost > Noise",
        "A <= Power=GOOD <= Cost=BAD",
    ])
    def test_malformed(self, items, payload):
        """Wrong shape raises MalformedPayloadError."""
        with pytest.raises(MalformedPayloadError):
            parse_argument(payload, items)

    @pytest.mark.parametrize("payload", [
        "Z <= Power=GOOD",
        "A <= Speed=GOOD",
        "A <= Power=GREAT",
        "A <= Power=GOOD, Speed > Power",
        "no A <= Power=GOOD",
    ])
    def test_unknown_names(self, items, payload):
        """Unknown item, criterion or rating raises UnknownNameError."""
        with pytest.raises(UnknownNameError):
            parse_argument(payload, items)


class TestStrength:
    """Test stronger_than."""

    def test_no_comparative_is_never_stronger(self, item_a):
        """Without a comparative premise an argument is never stronger."""
        plain = arg(item_a, POWER, Rating.GOOD)
        assert not plain.stronger_than(arg(item_a, COST, Rating.BAD))

    def test_comparative_beats_plain(self, item_a):
        """Any comparative beats an argument without one."""
        strong = arg(item_a, COST, Rating.BAD, False, COST, POWER)
        assert strong.stronger_than(arg(item_a, POWER, Rating.GOOD))

    def test_cannot_reclaim_defeated_criterion(self, item_a):
        """A criterion already placed below cannot be claimed superior."""
        first = arg(item_a, COST, Rating.BAD, False, COST, POWER)
        flipped = arg(item_a, POWER, Rating.GOOD, True, POWER, COST)
        assert not flipped.stronger_than(first)

    def test_new_criterion_is_stronger(self, item_a):
        """A fresh superior criterion makes a stronger argument."""
        first = arg(item_a, COST, Rating.BAD, False, COST, POWER)
        second = arg(item_a, NOISE, Rating.GOOD, True, NOISE, COST)
        assert second.stronger_than(first)


class TestAttacks:
    """Test attacks."""

    def test_attack(self, item_a):
        """Superior is own criterion, inferior is the target's."""
        target = arg(item_a, POWER, Rating.GOOD)
        attacker = arg(item_a, COST, Rating.BAD, False, COST, POWER)
        assert attacker.attacks(target)

    def test_no_comparative_no_attack(self, item_a):
        """An argument without comparative attacks nothing."""
        target = arg(item_a, POWER, Rating.GOOD)
        assert not arg(item_a, COST, Rating.BAD, False).attacks(target)

    def test_superior_must_be_own_criterion(self, item_a):
        """The claimed superior must be the evaluated criterion."""
        target = arg(item_a, POWER, Rating.GOOD)
        attacker = arg(item_a, COST, Rating.BAD, False, NOISE, POWER)
        assert not attacker.attacks(target)

    def test_same_criterion_no_attack(self, item_a):
        """Arguments on the same criterion never attack each other."""
        target = arg(item_a, POWER, Rating.GOOD)
        attacker = arg(item_a, POWER, Rating.BAD, False, POWER, POWER)
        assert not attacker.attacks(target)

    def test_inferior_must_be_target_criterion(self, item_a):
        """The claimed inferior must be the target's criterion."""
        target = arg(item_a, POWER, Rating.GOOD)
        attacker = arg(item_a, COST, Rating.BAD, False, COST, NOISE)
        assert not attacker.attacks(target)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Catalogs
========

Fixed vocabularies shared by both negotiators:

- Criterion: what an item is evaluated on
- Rating:    how well an item does on a criterion (0 = worst .. 3 = best)
- Item:      something that can be negotiated, identified by its name
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..errors import UnknownNameError


class Criterion(Enum):
    """A criterion on which items are evaluated."""
    POWER = "Power"
    COST = "Cost"
    CONSUMPTION = "Consumption"
    DURABILITY = "Durability"
    ENVIRONMENT = "Environment"
    NOISE = "Noise"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def find(cls, label: str) -> Optional["Criterion"]:
        """Criterion with this label, or None."""
        for criterion in cls:
            if criterion.value == label:
                return criterion
        return None

    @classmethod
    def from_label(cls, label: str) -> "Criterion":
        criterion = cls.find(label)
        if criterion is None:
            raise UnknownNameError("criterion", label)
        return criterion


class Rating(Enum):
    """An ordinal rating of an item on a criterion."""
    VERY_BAD = 0
    BAD = 1
    GOOD = 2
    VERY_GOOD = 3

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def find(cls, label: str) -> Optional["Rating"]:
        """Rating with this label, or None."""
        return cls.__members__.get(label)

    @classmethod
    def from_label(cls, label: str) -> "Rating":
        rating = cls.find(label)
        if rating is None:
            raise UnknownNameError("rating", label)
        return rating

    @classmethod
    def from_value(cls, value: int) -> "Rating":
        return cls(value)


POSITIVE_RATINGS = frozenset({Rating.GOOD, Rating.VERY_GOOD})
NEGATIVE_RATINGS = frozenset({Rating.BAD, Rating.VERY_BAD})


@dataclass(frozen=True)
class Item:
    """
    A negotiable item.

    Two items are the same item when they have the same name,
    whatever their descriptions.
    """
    name: str
    description: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CriterionRating:
    """Fact: `item` is rated `rating` on `criterion`."""
    item: Item
    criterion: Criterion
    rating: Rating

"""
Arguments
=========

An argument supports (polarity True) or opposes (polarity False) an item:

    A <= Power=GOOD                         "take A, its Power is GOOD"
    not A <= Cost=BAD, Cost > Power         "don't take A, its Cost is BAD,
                                             and Cost matters more than Power"

The evaluative premise (criterion, rating) is always present.
The comparative premise (superior > inferior) is what lets an argument
attack another one.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .catalog import Criterion, Item, Rating
from ..errors import MalformedPayloadError, UnknownNameError


PREMISES_SEPARATOR = " <= "
NEGATION_PREFIX = "not "


@dataclass(frozen=True)
class EvaluativePremise:
    """The item is rated `rating` on `criterion`."""
    criterion: Criterion
    rating: Rating

    def __str__(self) -> str:
        return f"{self.criterion.label}={self.rating.label}"


@dataclass(frozen=True)
class ComparativePremise:
    """`superior` matters more than `inferior`."""
    superior: Criterion
    inferior: Criterion

    def __str__(self) -> str:
        return f"{self.superior.label} > {self.inferior.label}"


@dataclass(frozen=True)
class Argument:
    item: Item
    polarity: bool
    evaluative: EvaluativePremise
    comparative: Optional[ComparativePremise] = None

    def stronger_than(self, other: "Argument") -> bool:
        """Can this argument sit deeper in a chain than `other`?"""
        if self.comparative is None:
            return False
        if other.comparative is None:
            return True
        # A criterion already defeated in the chain cannot be claimed superior again
        return other.comparative.inferior != self.comparative.superior

    def attacks(self, other: "Argument") -> bool:
        """Does this argument directly attack `other`?"""
        if self.comparative is None:
            return False
        if self.comparative.superior != self.evaluative.criterion:
            return False
        if other.evaluative.criterion == self.evaluative.criterion:
            return False
        return other.evaluative.criterion == self.comparative.inferior

    def to_payload(self) -> str:
        premises = str(self.evaluative)
        if self.comparative is not None:
            premises += f", {self.comparative}"
        prefix = "" if self.polarity else NEGATION_PREFIX
        return f"{prefix}{self.item.name}{PREMISES_SEPARATOR}{premises}"

    def __str__(self) -> str:
        return self.to_payload()


# ============================================================
# PARSING
# ============================================================

def parse_argument(content: str, items: Iterable[Item]) -> Argument:
    """
    Parse an ARGUMENT payload.

    Args:
        content: Payload such as "not A <= Cost=BAD, Cost > Power"
        items: Items the argument may refer to

    Returns:
        The parsed Argument

    Raises:
        MalformedPayloadError: If the payload does not have the expected shape
        UnknownNameError: If the item, a criterion or the rating is unknown
    """
    parts = content.split(PREMISES_SEPARATOR)
    if len(parts) != 2:
        raise MalformedPayloadError(f"Missing {PREMISES_SEPARATOR.strip()!r} in argument: {content!r}")
    claim, premises_text = parts

    polarity = True
    if claim.startswith(NEGATION_PREFIX):
        polarity = False
        claim = claim[len(NEGATION_PREFIX):]

    item = next((it for it in items if it.name == claim), None)
    if item is None:
        raise UnknownNameError("item", claim)

    premises = premises_text.split(", ")
    if len(premises) > 2:
        raise MalformedPayloadError(f"Too many premises in argument: {content!r}")

    evaluative_parts = premises[0].split("=")
    if len(evaluative_parts) != 2:
        raise MalformedPayloadError(f"Bad evaluative premise: {premises[0]!r}")
    evaluative = EvaluativePremise(
        criterion=Criterion.from_label(evaluative_parts[0]),
        rating=Rating.from_label(evaluative_parts[1]),
    )

    comparative = None
    if len(premises) == 2:
        comparative_parts = premises[1].split(" > ")
        if len(comparative_parts) != 2:
            raise MalformedPayloadError(f"Bad comparative premise: {premises[1]!r}")
        comparative = ComparativePremise(
            superior=Criterion.from_label(comparative_parts[0]),
            inferior=Criterion.from_label(comparative_parts[1]),
        )

    return Argument(item=item, polarity=polarity, evaluative=evaluative, comparative=comparative)

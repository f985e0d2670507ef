"""
Message Schemas for the Negotiation Protocol

Every message is a kind plus a text payload. The payload grammar depends
on the kind:

    ITEMS_ANNOUNCE   "A;first item|B;second item"   (mediator -> negotiators)
                     "A"                            (negotiator -> mediator, selection)
    START_QUERY      ""
    PROPOSE          "A"
    REQUEST_WHY      "A"
    ACCEPT           "A"
    ARGUMENT         "not A <= Cost=BAD, Cost > Power"
    CONFIRM          "A"
    CANCEL           ""

Arguments are encoded in argumentation.argument; item lists and item
references are encoded here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from ..argumentation.catalog import Item
from ..errors import MalformedPayloadError, UnknownNameError


# ============================================================
# MESSAGE KINDS AND ROUTING
# ============================================================

class MessageKind(Enum):
    """Performative of a message."""
    ITEMS_ANNOUNCE = "ITEMS_ANNOUNCE"
    START_QUERY = "START_QUERY"
    PROPOSE = "PROPOSE"
    REQUEST_WHY = "REQUEST_WHY"
    ACCEPT = "ACCEPT"
    ARGUMENT = "ARGUMENT"
    CONFIRM = "CONFIRM"
    CANCEL = "CANCEL"


class Recipient(Enum):
    """Role a negotiator addresses; resolved to a concrete address when sending."""
    PEER = "peer"
    MEDIATOR = "mediator"


@dataclass(frozen=True)
class Message:
    """
    A protocol message.

    Example:
        msg = Message(MessageKind.PROPOSE, "A")
    """
    kind: MessageKind
    payload: str = ""

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        """
        Raises:
            ValueError: If the kind is unknown
        """
        try:
            kind = MessageKind(data["kind"])
        except ValueError:
            raise ValueError(f"Unknown message kind: {data.get('kind')}")
        return cls(kind=kind, payload=data.get("payload", ""))


# ============================================================
# PAYLOAD CODECS
# ============================================================

ITEM_SEPARATOR = "|"
FIELD_SEPARATOR = ";"


def encode_items(items: Iterable[Item]) -> str:
    """Encode an item list as "Name;Description" records joined by "|"."""
    return ITEM_SEPARATOR.join(
        f"{item.name}{FIELD_SEPARATOR}{item.description}" for item in items
    )


def parse_items(payload: str) -> List[Item]:
    """
    Decode an item list.

    An empty payload is an empty list.

    Raises:
        MalformedPayloadError: If a record does not have exactly two fields
    """
    if not payload:
        return []

    items = []
    for record in payload.split(ITEM_SEPARATOR):
        fields = record.split(FIELD_SEPARATOR)
        if len(fields) != 2:
            raise MalformedPayloadError(f"Bad item record: {record!r}")
        items.append(Item(name=fields[0], description=fields[1]))
    return items


def resolve_item(name: str, items: Iterable[Item]) -> Item:
    """
    Find the item a payload refers to by name.

    Raises:
        UnknownNameError: If no item has that name
    """
    for item in items:
        if item.name == name:
            return item
    raise UnknownNameError("item", name)

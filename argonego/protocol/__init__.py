"""
protocol - Structured Communication
===================================

Question this layer answers:
"What do messages look like on the wire?"

A message is a kind and a text payload; an envelope adds the sender,
the concrete recipients, an id and a timestamp.

This layer does NOT:
- Decide whether a message is legal now (that's the FSM)
- Deliver messages (that's transport)
"""

from .messages import (
    Message,
    MessageKind,
    Recipient,
    encode_items,
    parse_items,
    resolve_item,
)
from .envelope import MessageEnvelope, create_envelope

__all__ = [
    "Message",
    "MessageKind",
    "Recipient",
    "encode_items",
    "parse_items",
    "resolve_item",
    "MessageEnvelope",
    "create_envelope",
]

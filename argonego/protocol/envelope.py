"""
Message Envelope - Metadata wrapper for all messages

The envelope contains routing and tracking information.
The message contains the actual content.

Envelope = WHO, WHEN, WHERE
Message = WHAT
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Sequence, Tuple
from uuid import uuid4

from .messages import Message


@dataclass
class MessageEnvelope:
    """
    Wrapper for all messages with routing metadata.

    Attributes:
        sender: Address of the sending agent
        recipients: Addresses the message is delivered to
        message: The actual message
        session_id: Which negotiation session this belongs to
        id: Unique message identifier
        timestamp: When the message was created

    Example:
        envelope = MessageEnvelope(
            sender="engineer1",
            recipients=("engineer2",),
            message=Message(MessageKind.PROPOSE, "A"),
        )
    """
    sender: str
    recipients: Tuple[str, ...]
    message: Message
    session_id: str = ""
    id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        self.recipients = tuple(self.recipients)
        if not self.recipients:
            raise ValueError("An envelope needs at least one recipient")

    def to_dict(self) -> dict:
        """Serialize envelope to dictionary."""
        return {
            "id": self.id,
            "sender": self.sender,
            "recipients": list(self.recipients),
            "session_id": self.session_id,
            "timestamp": self.timestamp.isoformat(),
            "message": self.message.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MessageEnvelope":
        """Deserialize envelope from dictionary."""
        return cls(
            id=data["id"],
            sender=data["sender"],
            recipients=tuple(data["recipients"]),
            session_id=data.get("session_id", ""),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            message=Message.from_dict(data["message"]),
        )


def create_envelope(
    sender: str,
    recipients: Sequence[str],
    message: Message,
    session_id: str = "",
) -> MessageEnvelope:
    """
    Factory function to create an envelope.

    Example:
        envelope = create_envelope("mediator", ["engineer1"], Message(MessageKind.START_QUERY))
    """
    return MessageEnvelope(
        sender=sender,
        recipients=tuple(recipients),
        message=message,
        session_id=session_id,
    )

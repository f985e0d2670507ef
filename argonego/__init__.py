"""
Argumentation-Based Negotiation
===============================

Two negotiators pick items one round at a time from a pool announced by a
mediator, justifying their proposals and refusals with arguments derived
from their private preferences.

Layers:

    argumentation   what do we believe, and how do arguments relate?
    protocol        what do messages look like on the wire?
    fsm             which moves are legal right now?
    coordination    which legal move do we make?
    agents          who reacts to what?
    transport       how do messages move?
    runtime         how is a session configured and run?
    evaluation      how did the session go?
"""

from .errors import (
    ArgumentRejectedError,
    MalformedPayloadError,
    NegotiationError,
    PreferenceFileError,
    ProtocolViolationError,
    UnknownNameError,
)

__version__ = "0.1.0"
__all__ = [
    "ArgumentRejectedError",
    "MalformedPayloadError",
    "NegotiationError",
    "PreferenceFileError",
    "ProtocolViolationError",
    "UnknownNameError",
]

"""
Error Taxonomy
==============

Every failure a negotiator can meet while reacting to a message falls in
one of these buckets:

    UnknownNameError         (a) item / criterion / rating not recognized
    MalformedPayloadError    (b) payload does not have the expected shape
    ArgumentRejectedError    (c) argument fails strength / attack validation
    ProtocolViolationError   (d) no transition for the received message kind

(a)-(c) are collapsed into a forced CANCEL by the negotiator.
(d) is logged and the message is dropped.

PreferenceFileError is raised while loading a preference file, before any
negotiation starts.
"""


class NegotiationError(Exception):
    """Base class for all negotiation errors."""


class UnknownNameError(NegotiationError):
    """A name in a payload does not match any known item, criterion or rating."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"Unknown {kind}: {name!r}")
        self.kind = kind
        self.name = name


class MalformedPayloadError(NegotiationError):
    """A payload could not be split into its expected parts."""


class ArgumentRejectedError(NegotiationError):
    """An argument (or proposal) cannot be placed in the negotiation graph."""


class ProtocolViolationError(NegotiationError):
    """A message kind has no transition from the current state."""


class PreferenceFileError(NegotiationError):
    """
    A preference (or item) file could not be loaded.

    Attributes:
        path: File that was being read
        line: 1-based line number of the offending line (0 if the file itself is missing)
        reason: Human readable description
    """

    def __init__(self, path: str, line: int, reason: str):
        if line > 0:
            message = f"{reason} (line {line} of {path})"
        else:
            message = f"{reason} ({path})"
        super().__init__(message)
        self.path = path
        self.line = line
        self.reason = reason

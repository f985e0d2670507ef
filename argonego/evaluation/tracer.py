"""
Observability Tracer
====================

Traces a negotiation session for debugging and analysis.

Subscribe a tracer to the channel and every sent envelope becomes a
"message" event:

    tracer = NegotiationTracer()
    trace = tracer.start_trace(session_id)
    channel.subscribe(tracer.message_logger(session_id))
    ...
    tracer.log_outcome(session_id, selected=[...], cancelled=False, rounds=3)
    tracer.end_trace(session_id)
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..protocol.envelope import MessageEnvelope


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TraceRecord:
    """A single trace record."""
    timestamp: datetime
    event_type: str
    data: Dict[str, Any]


@dataclass
class NegotiationTrace:
    """Complete trace of a negotiation session."""
    session_id: str
    started_at: datetime = field(default_factory=_now)
    ended_at: Optional[datetime] = None
    records: List[TraceRecord] = field(default_factory=list)

    def add_event(self, event_type: str, **data) -> None:
        """Add an event to the trace."""
        self.records.append(TraceRecord(
            timestamp=_now(),
            event_type=event_type,
            data=data,
        ))

    def events(self, event_type: str) -> List[TraceRecord]:
        return [r for r in self.records if r.event_type == event_type]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for export."""
        return {
            "session_id": self.session_id,
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "records": [
                {
                    "timestamp": r.timestamp.isoformat(),
                    "event_type": r.event_type,
                    "data": r.data,
                }
                for r in self.records
            ],
        }


class NegotiationTracer:
    """Collects one trace per session."""

    def __init__(self):
        self.traces: Dict[str, NegotiationTrace] = {}

    def start_trace(self, session_id: str) -> NegotiationTrace:
        """Start a new trace."""
        trace = NegotiationTrace(session_id=session_id)
        trace.add_event("session_start")
        self.traces[session_id] = trace
        return trace

    def end_trace(self, session_id: str) -> Optional[NegotiationTrace]:
        """End a trace."""
        trace = self.traces.get(session_id)
        if trace:
            trace.ended_at = _now()
            trace.add_event("session_end")
        return trace

    def log_message(self, session_id: str, envelope: MessageEnvelope) -> None:
        """Log a sent envelope."""
        trace = self.traces.get(session_id)
        if trace:
            trace.add_event(
                "message",
                sender=envelope.sender,
                recipients=list(envelope.recipients),
                kind=envelope.message.kind.value,
                payload=envelope.message.payload,
            )

    def message_logger(self, session_id: str) -> Callable[[MessageEnvelope], None]:
        """Channel subscriber logging into `session_id`'s trace."""
        def callback(envelope: MessageEnvelope) -> None:
            self.log_message(session_id, envelope)
        return callback

    def log_outcome(
        self,
        session_id: str,
        selected: Sequence[str],
        cancelled: bool,
        rounds: int,
        reason: Optional[str] = None,
    ) -> None:
        """Log the final outcome."""
        trace = self.traces.get(session_id)
        if trace:
            trace.add_event(
                "outcome",
                selected=list(selected),
                cancelled=cancelled,
                rounds=rounds,
                reason=reason,
            )

    def get_trace(self, session_id: str) -> Optional[NegotiationTrace]:
        """Get a trace by session ID."""
        return self.traces.get(session_id)


# Global tracer instance
_global_tracer: Optional[NegotiationTracer] = None


def get_tracer() -> NegotiationTracer:
    """Get the global tracer instance."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = NegotiationTracer()
    return _global_tracer


@contextmanager
def trace_negotiation(session_id: str, tracer: Optional[NegotiationTracer] = None):
    """
    Context manager for tracing a negotiation.

    Usage:
        with trace_negotiation("session-123") as trace:
            run_negotiation()
    """
    tracer = tracer or get_tracer()
    trace = tracer.start_trace(session_id)

    try:
        yield trace
    finally:
        tracer.end_trace(session_id)

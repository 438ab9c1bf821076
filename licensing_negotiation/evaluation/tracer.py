"""
Observability Tracer
====================

Records what happened during a negotiation for debugging and analysis.

Model calls are exported to LangSmith through @traceable when tracing is
enabled in the environment. This tracer keeps the negotiation-level view
(proposals per round, outcome) in memory, independent of LangSmith.

The tracer is passed in explicitly; there is no global instance.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..protocol.envelope import ProposalEnvelope
from ..protocol.messages import Settlement


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
    """Complete trace of a negotiation."""
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
    """Collects one NegotiationTrace per session."""

    def __init__(self):
        self.traces: Dict[str, NegotiationTrace] = {}

    def start_trace(self, session_id: str, **data) -> NegotiationTrace:
        trace = NegotiationTrace(session_id=session_id)
        trace.add_event("session_start", **data)
        self.traces[session_id] = trace
        return trace

    def end_trace(self, session_id: str, error: Optional[BaseException] = None) -> Optional[NegotiationTrace]:
        trace = self.traces.get(session_id)
        if trace:
            if error is not None:
                trace.add_event("error", error_type=type(error).__name__, message=str(error))
            trace.ended_at = _now()
            trace.add_event("session_end")
        return trace

    def log_proposal(self, envelope: ProposalEnvelope) -> None:
        trace = self.traces.get(envelope.session_id)
        if trace:
            trace.add_event(
                "proposal",
                round=envelope.round,
                role=envelope.sender.value,
                licensing_cost=envelope.payload.licensing_cost,
                royalties_percent=envelope.payload.royalties_percent,
            )

    def log_convergence_check(self, session_id: str, round: int, converged: bool, reason: str) -> None:
        trace = self.traces.get(session_id)
        if trace:
            trace.add_event("convergence_check", round=round, converged=converged, reason=reason)

    def log_outcome(
        self,
        session_id: str,
        settlement: Settlement,
        converged: bool,
        rounds: int,
    ) -> None:
        trace = self.traces.get(session_id)
        if trace:
            trace.add_event(
                "outcome",
                converged=converged,
                rounds=rounds,
                licensing_cost=settlement.licensing_cost,
                royalties_percent=settlement.royalties_percent,
            )

    def get_trace(self, session_id: str) -> Optional[NegotiationTrace]:
        return self.traces.get(session_id)

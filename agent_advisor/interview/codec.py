"""
Session record codec.

The one place where interview sessions are turned into JSON-ready dicts and
back. Every datetime field goes through encode_datetime/parse_datetime so
records always carry ISO-8601 text and live objects always carry datetimes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from ..schemas.questions import InterviewStage
from ..schemas.requirements import AgentRequirements

if TYPE_CHECKING:
    from .state_manager import ConversationMetadata, InterviewSession, Response


def encode_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse ISO-8601 text; naive values are taken as UTC."""
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected ISO-8601 text, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# =============================================================================
# ENCODE
# =============================================================================

def encode_response(response: "Response") -> dict[str, Any]:
    value = response.value
    return {
        "question_id": response.question_id,
        "value": list(value) if isinstance(value, list) else value,
        "answered_at": encode_datetime(response.answered_at),
    }


def encode_metadata(metadata: Optional["ConversationMetadata"]) -> Optional[dict[str, Any]]:
    if metadata is None:
        return None
    return {
        "advisor_session_id": metadata.advisor_session_id,
        "message_count": metadata.message_count,
        "last_activity": encode_datetime(metadata.last_activity),
        "conversation_started": encode_datetime(metadata.conversation_started),
    }


def encode_session(session: "InterviewSession") -> dict[str, Any]:
    return {
        "session_id": session.session_id,
        "current_stage": InterviewStage(session.current_stage).value,
        "current_question_index": session.current_question_index,
        "responses": [encode_response(r) for r in session.responses],
        "requirements": session.requirements.to_dict(),
        "is_complete": session.is_complete,
        "started_at": encode_datetime(session.started_at),
        "last_updated_at": encode_datetime(session.last_updated_at),
        "conversation_metadata": encode_metadata(session.conversation_metadata),
    }


def encode_record(session: "InterviewSession", captured_at: datetime) -> dict[str, Any]:
    """Full persisted snapshot: the session plus capture time and a requirements copy."""
    interview_state = encode_session(session)
    return {
        "session_id": session.session_id,
        "captured_at": encode_datetime(captured_at),
        "interview_state": interview_state,
        "partial_requirements": interview_state["requirements"],
        "conversation_metadata": interview_state["conversation_metadata"],
    }


# =============================================================================
# DECODE
# =============================================================================

def decode_response(data: dict[str, Any]) -> "Response":
    from .state_manager import Response

    return Response(
        question_id=data["question_id"],
        value=data["value"],
        answered_at=parse_datetime(data["answered_at"]),
    )


def decode_metadata(data: Optional[dict[str, Any]]) -> Optional["ConversationMetadata"]:
    from .state_manager import ConversationMetadata

    if data is None:
        return None
    return ConversationMetadata(
        advisor_session_id=data.get("advisor_session_id"),
        message_count=data.get("message_count", 0),
        last_activity=parse_datetime(data["last_activity"]),
        conversation_started=parse_datetime(data["conversation_started"]),
    )


def decode_session(data: dict[str, Any]) -> "InterviewSession":
    from .state_manager import InterviewSession

    return InterviewSession(
        session_id=data["session_id"],
        current_stage=InterviewStage(data["current_stage"]),
        current_question_index=int(data["current_question_index"]),
        responses=[decode_response(r) for r in data["responses"]],
        requirements=AgentRequirements.from_dict(data.get("requirements")),
        is_complete=bool(data.get("is_complete", False)),
        started_at=parse_datetime(data.get("started_at")),
        last_updated_at=parse_datetime(data.get("last_updated_at")),
        conversation_metadata=decode_metadata(data.get("conversation_metadata")),
    )


def decode_record(data: dict[str, Any]) -> tuple["InterviewSession", datetime]:
    """Inverse of encode_record: (session, captured_at)."""
    return decode_session(data["interview_state"]), parse_datetime(data["captured_at"])

"""
Interview engine: state machine, requirements accumulation, persistence.
"""

from .accumulator import AnswerValue, FieldMapping, REQUIREMENT_FIELD_MAP, apply_answer
from .state_manager import (
    ConversationMetadata,
    InterviewSession,
    InterviewStateManager,
    Response,
    new_session_id,
)
from .persistence import SessionStore, SessionSummary
from .validator import (
    validate_response,
    validate_response_against_question,
    validate_stage_completion,
    validate_all_responses,
)
from .tool_handler import InterviewToolHandler

__all__ = [
    "AnswerValue",
    "FieldMapping",
    "REQUIREMENT_FIELD_MAP",
    "apply_answer",
    "ConversationMetadata",
    "InterviewSession",
    "InterviewStateManager",
    "Response",
    "new_session_id",
    "SessionStore",
    "SessionSummary",
    "validate_response",
    "validate_response_against_question",
    "validate_stage_completion",
    "validate_all_responses",
    "InterviewToolHandler",
]

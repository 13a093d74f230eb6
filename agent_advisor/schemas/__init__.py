"""
Schema definitions for the Agent Advisor.
"""

from .questions import (
    InterviewStage,
    AnswerType,
    Question,
    QUESTION_CATALOG,
    STAGE_ORDER,
    RESUMABLE_STAGES,
    INTERACTION_STYLES,
    MEMORY_LEVELS,
    RUNTIMES,
    get_question_by_id,
    get_questions_for_stage,
    get_total_questions,
)
from .requirements import AgentRequirements, AgentCapabilities, AgentEnvironment
from .validation import (
    AgentRequirementsModel,
    ValidationResult,
    validate_agent_requirements,
)

__all__ = [
    "InterviewStage",
    "AnswerType",
    "Question",
    "QUESTION_CATALOG",
    "STAGE_ORDER",
    "RESUMABLE_STAGES",
    "INTERACTION_STYLES",
    "MEMORY_LEVELS",
    "RUNTIMES",
    "get_question_by_id",
    "get_questions_for_stage",
    "get_total_questions",
    "AgentRequirements",
    "AgentCapabilities",
    "AgentEnvironment",
    "AgentRequirementsModel",
    "ValidationResult",
    "validate_agent_requirements",
]

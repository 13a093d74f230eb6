"""
Error types shared by the interview, persistence and classification layers.

Exceptions are raised for conditions the caller cannot recover from
(registry inconsistencies, corrupt session records). The tool handlers
report everything else as a ToolError payload keyed by ErrorCode.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    # Interview actions
    INVALID_ACTION = "INVALID_ACTION"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_SESSION_STATE = "INVALID_SESSION_STATE"
    MISSING_RESPONSE = "MISSING_RESPONSE"
    SKIP_REQUIRED_QUESTION = "SKIP_REQUIRED_QUESTION"

    # Classification
    INVALID_REQUIREMENTS = "INVALID_REQUIREMENTS"
    MISSING_REQUIREMENTS = "MISSING_REQUIREMENTS"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"

    # General
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AdvisorError(Exception):
    """Base class for agent advisor errors."""


class TemplateNotFoundError(AdvisorError):
    """A template id resolved during classification is missing from the registry."""

    def __init__(self, template_id: str):
        super().__init__(f"Template {template_id} not found")
        self.template_id = template_id


class TemplateRegistryError(AdvisorError):
    """The template knowledge file could not be loaded."""


class SessionCorruptError(AdvisorError):
    """A stored session record exists but cannot be parsed."""

    def __init__(self, session_id: str, path: str, reason: str):
        super().__init__(f"Session {session_id} at {path} is unreadable: {reason}")
        self.session_id = session_id
        self.path = path


@dataclass
class ToolError:
    """Structured error payload returned by the tool handlers."""
    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": "error",
            "code": self.code.value,
            "error": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload

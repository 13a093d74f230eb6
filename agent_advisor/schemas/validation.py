"""
Validation schema for complete agent requirements.

The accumulator never validates; callers that need a finished requirements
object (batch pipeline, classification handler) run it through here first.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, Field, ValidationError

from .requirements import AgentRequirements


T = TypeVar("T")


class AgentCapabilitiesModel(BaseModel):
    memory: Literal["none", "short-term", "long-term"]
    file_access: bool
    web_access: bool
    code_execution: bool
    data_analysis: bool
    tool_integrations: list[str] = Field(default_factory=list)


class AgentEnvironmentModel(BaseModel):
    runtime: Literal["cloud", "local", "hybrid"]
    compliance_requirements: Optional[list[str]] = None


class AgentRequirementsModel(BaseModel):
    """A complete AgentRequirements."""
    name: str = Field(min_length=1, description="Agent name")
    description: str = Field(min_length=1, description="Short description of the agent")
    primary_outcome: str = Field(min_length=1, description="Primary outcome, drives template choice")
    target_audience: list[str] = Field(min_length=1)
    interaction_style: Literal["conversational", "task-focused", "collaborative"]
    delivery_channels: list[str] = Field(min_length=1)
    success_metrics: list[str] = Field(min_length=1)
    constraints: Optional[list[str]] = None
    capabilities: AgentCapabilitiesModel
    environment: Optional[AgentEnvironmentModel] = None
    additional_notes: Optional[str] = None


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of a validation call: either data or a list of error strings."""
    success: bool
    data: Optional[T] = None
    errors: list[str] = field(default_factory=list)


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Render pydantic errors as 'dotted.path: message' strings."""
    errors = []
    for issue in exc.errors():
        path = ".".join(str(part) for part in issue.get("loc", ())) or "requirements"
        errors.append(f"{path}: {issue.get('msg', 'invalid value')}")
    return errors


def validate_agent_requirements(data: Any) -> ValidationResult[AgentRequirements]:
    """Validate a requirements mapping (or AgentRequirements) as complete."""
    if isinstance(data, AgentRequirements):
        data = data.to_dict()

    try:
        model = AgentRequirementsModel.model_validate(data)
    except ValidationError as exc:
        return ValidationResult(success=False, errors=format_validation_errors(exc))

    return ValidationResult(success=True, data=AgentRequirements.from_dict(model.model_dump()))

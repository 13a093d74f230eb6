"""
Agent Requirements Schema

The structure accumulated over an interview and consumed by the
classification engine. Every field is optional while the interview is in
progress; completeness is checked separately (see schemas.validation).
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Optional


@dataclass
class AgentCapabilities:
    """Runtime abilities the agent needs."""
    memory: str = "none"  # none, short-term, long-term
    file_access: bool = False
    web_access: bool = False
    code_execution: bool = False
    data_analysis: bool = False
    tool_integrations: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "AgentCapabilities":
        return cls(
            memory=data.get("memory", "none"),
            file_access=data.get("file_access", False),
            web_access=data.get("web_access", False),
            code_execution=data.get("code_execution", False),
            data_analysis=data.get("data_analysis", False),
            tool_integrations=list(data.get("tool_integrations") or []),
        )


@dataclass
class AgentEnvironment:
    """Deployment environment preferences."""
    runtime: Optional[str] = None  # cloud, local, hybrid
    compliance_requirements: Optional[list[str]] = None

    @classmethod
    def from_dict(cls, data: dict) -> "AgentEnvironment":
        compliance = data.get("compliance_requirements")
        return cls(
            runtime=data.get("runtime"),
            compliance_requirements=list(compliance) if compliance is not None else None,
        )


def _nested(data: dict, key: str, kind: type) -> Any:
    """Rebuild an optional nested object; anything but an object or null is rejected."""
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise TypeError(f"{key} must be an object, got {type(value).__name__}")
    return kind.from_dict(value)


@dataclass
class AgentRequirements:
    """
    Requirements for the agent being designed.

    Partial until the interview completes. `capabilities` and `environment`
    stay None until the first answer that touches them.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    primary_outcome: Optional[str] = None
    target_audience: Optional[list[str]] = None
    interaction_style: Optional[str] = None  # conversational, task-focused, collaborative
    delivery_channels: Optional[list[str]] = None
    success_metrics: Optional[list[str]] = None
    constraints: Optional[list[str]] = None
    capabilities: Optional[AgentCapabilities] = None
    environment: Optional[AgentEnvironment] = None
    additional_notes: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AgentRequirements":
        """Create from dictionary (e.g., loaded from JSON), rebuilding nested objects."""
        data = data or {}
        if not isinstance(data, dict):
            raise TypeError(f"requirements must be an object, got {type(data).__name__}")
        return cls(
            name=data.get("name"),
            description=data.get("description"),
            primary_outcome=data.get("primary_outcome"),
            target_audience=data.get("target_audience"),
            interaction_style=data.get("interaction_style"),
            delivery_channels=data.get("delivery_channels"),
            success_metrics=data.get("success_metrics"),
            constraints=data.get("constraints"),
            capabilities=_nested(data, "capabilities", AgentCapabilities),
            environment=_nested(data, "environment", AgentEnvironment),
            additional_notes=data.get("additional_notes"),
        )

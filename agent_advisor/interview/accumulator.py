"""
Requirements Accumulator

Maps a (question_id, answer) pair onto a partial AgentRequirements using a
declarative table. Adding a question is a table entry, not new code.

No validation happens here: whatever value arrives is coerced (if a coercion
applies) and written as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..schemas.requirements import AgentCapabilities, AgentEnvironment, AgentRequirements


AnswerValue = str | bool | list[str]


# =============================================================================
# COERCIONS
# =============================================================================

def as_is(value: Any) -> Any:
    return value


def as_list(value: Any) -> Any:
    """Copy list answers so the requirements never alias the response history."""
    return list(value) if isinstance(value, list) else value


def split_csv(value: Any) -> list[str]:
    """Split comma-separated free text, trimming entries and dropping empty ones."""
    if not isinstance(value, str):
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


# =============================================================================
# FIELD MAP
# =============================================================================

@dataclass(frozen=True)
class FieldMapping:
    """Where an answer lands in AgentRequirements and how it is converted."""
    path: tuple[str, ...]
    coerce: Callable[[Any], Any] = as_is
    skip_blank: bool = False  # ignore answers that are not non-blank text


# Nested containers materialized on first write
CONTAINER_DEFAULTS: dict[str, Callable[[], Any]] = {
    "capabilities": AgentCapabilities,
    "environment": AgentEnvironment,
}

REQUIREMENT_FIELD_MAP: dict[str, FieldMapping] = {
    "q1_agent_name": FieldMapping(("name",)),
    "q2_primary_outcome": FieldMapping(("primary_outcome",)),
    "q3_target_audience": FieldMapping(("target_audience",), as_list),
    "q4_interaction_style": FieldMapping(("interaction_style",)),
    "q5_delivery_channels": FieldMapping(("delivery_channels",), as_list),
    "q6_success_metrics": FieldMapping(("success_metrics",), as_list),
    "q7_memory_needs": FieldMapping(("capabilities", "memory")),
    "q8_file_access": FieldMapping(("capabilities", "file_access")),
    "q9_web_access": FieldMapping(("capabilities", "web_access")),
    "q10_code_execution": FieldMapping(("capabilities", "code_execution")),
    "q11_data_analysis": FieldMapping(("capabilities", "data_analysis")),
    "q12_tool_integrations": FieldMapping(("capabilities", "tool_integrations"), split_csv),
    "q13_runtime_preference": FieldMapping(("environment", "runtime")),
    "q14_constraints": FieldMapping(("constraints",), split_csv, skip_blank=True),
    "q15_additional_notes": FieldMapping(("additional_notes",), skip_blank=True),
}


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _resolve_container(requirements: AgentRequirements, path: tuple[str, ...]) -> Any:
    """Walk to the object owning the last path segment, creating containers on the way."""
    target: Any = requirements
    for segment in path[:-1]:
        child = getattr(target, segment)
        if child is None:
            child = CONTAINER_DEFAULTS[segment]()
            setattr(target, segment, child)
        target = child
    return target


def apply_answer(
    requirements: AgentRequirements,
    question_id: str,
    value: AnswerValue,
    field_map: Optional[dict[str, FieldMapping]] = None,
) -> AgentRequirements:
    """
    Apply one answer to requirements in place and return it.

    Unknown question ids leave the requirements untouched (apart from the
    derived description).
    """
    mapping = (field_map if field_map is not None else REQUIREMENT_FIELD_MAP).get(question_id)

    if mapping is not None and not (mapping.skip_blank and _is_blank(value)):
        owner = _resolve_container(requirements, mapping.path)
        setattr(owner, mapping.path[-1], mapping.coerce(value))

    # Derived once; an explicit or earlier description always wins
    if not requirements.description and requirements.name:
        requirements.description = f"{requirements.name} agent"

    return requirements

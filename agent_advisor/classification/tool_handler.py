"""
Classify Agent Type Handler

Validates a complete requirements mapping and returns the recommendation as
a plain dict, ready to hand back from an agent tool call.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..errors import AdvisorError, ErrorCode, TemplateNotFoundError, ToolError
from ..schemas.validation import validate_agent_requirements
from .classifier import AgentClassifier


logger = logging.getLogger(__name__)

NEXT_STEPS = [
    "Review the recommended template and tools",
    "Generate starter code from the selected template",
    "Customize the system prompt for your deployment",
    "Create project configuration files",
]


class ClassifyAgentTypeHandler:
    def __init__(self, classifier: Optional[AgentClassifier] = None):
        self.classifier = classifier or AgentClassifier()

    def handle(self, requirements: Any, include_alternatives: bool = True) -> dict[str, Any]:
        if requirements is None:
            return ToolError(ErrorCode.MISSING_REQUIREMENTS, "Requirements are required").to_dict()

        validation = validate_agent_requirements(requirements)
        if not validation.success:
            return ToolError(
                ErrorCode.INVALID_REQUIREMENTS,
                "Invalid agent requirements",
                {"errors": validation.errors},
            ).to_dict()

        try:
            recommendation = self.classifier.classify(validation.data)
            scores = self.classifier.score_all_templates(validation.data)
        except AdvisorError as e:
            logger.error("Classification failed: %s", e)
            code = ErrorCode.TEMPLATE_NOT_FOUND if isinstance(e, TemplateNotFoundError) else ErrorCode.INTERNAL_ERROR
            return ToolError(code, "Classification failed", {"message": str(e)}).to_dict()

        primary = scores[0]
        alternatives = scores[1:4] if include_alternatives else []

        return {
            "status": "success",
            "classification": {
                "selected_template": recommendation.agent_type,
                "confidence": primary.score,
                "reasoning": primary.reasoning,
            },
            "recommendation": recommendation.to_dict(),
            "alternatives": [
                {
                    "template_id": alt.template_id,
                    "confidence": alt.score,
                    "matched_capabilities": alt.matched_capabilities,
                    "reasoning": alt.reasoning,
                }
                for alt in alternatives
            ],
            "next_steps": list(NEXT_STEPS),
            "notes": recommendation.notes,
        }

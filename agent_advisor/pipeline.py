"""
Agent Advisor Pipeline

Batch driver for when all answers are known up front:

1. Initialize an interview session
2. Record every (question_id, value) in the order given
3. Validate the collected requirements as complete
4. Classify them against the template registry

Per-answer problems become warnings; incomplete requirements or a failed
classification end the run with success=False.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from .classification.classifier import AgentClassifier, Recommendation
from .errors import AdvisorError
from .interview.accumulator import AnswerValue
from .interview.state_manager import InterviewSession, InterviewStateManager
from .interview.validator import validate_response, validate_response_against_question
from .schemas.questions import Question, QUESTION_CATALOG, get_question_by_id
from .schemas.requirements import AgentRequirements
from .schemas.validation import validate_agent_requirements
from .templates.registry import TemplateRegistry


logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    success: bool
    requirements: Optional[AgentRequirements] = None
    recommendation: Optional[Recommendation] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    session: Optional[InterviewSession] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "requirements": self.requirements.to_dict() if self.requirements else None,
            "recommendation": self.recommendation.to_dict() if self.recommendation else None,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


class AgentAdvisorPipeline:
    """Runs answers through the interview and classifier in one call."""

    def __init__(
        self,
        questions: Optional[Sequence[Question]] = None,
        registry: Optional[TemplateRegistry] = None,
    ):
        self.questions = questions
        self.catalog = tuple(questions) if questions is not None else QUESTION_CATALOG
        self.classifier = AgentClassifier(registry)

    def _check_answer(self, question_id: str, value: Any) -> list[str]:
        """Validation problems for one answer; empty when it looks fine."""
        basic = validate_response({"question_id": question_id, "value": value})
        if not basic.success:
            return basic.errors

        question = get_question_by_id(question_id, self.catalog)
        if question is None:
            return [f"Response references unknown question ID: {question_id}"]

        checked = validate_response_against_question(basic.data, question)
        return [] if checked.success else checked.errors

    def run(self, responses: Mapping[str, AnswerValue]) -> PipelineResult:
        errors: list[str] = []
        warnings: list[str] = []

        manager = InterviewStateManager(questions=self.questions)
        manager.initialize_session()
        logger.debug("Pipeline processing %d responses", len(responses))

        for question_id, value in responses.items():
            problems = self._check_answer(question_id, value)
            if problems:
                warnings.extend(f"{question_id}: {p}" for p in problems)
            try:
                manager.record_response(question_id, value)
            except (TypeError, ValueError, AttributeError) as e:
                warnings.append(f"Failed to process response for {question_id}: {e}")

        session = manager.get_state()
        collected = manager.get_collected_requirements()

        validation = validate_agent_requirements(collected)
        if not validation.success:
            errors.append("Failed to extract valid requirements from responses")
            errors.extend(validation.errors)
            return PipelineResult(
                success=False, requirements=collected, errors=errors, warnings=warnings, session=session,
            )

        try:
            recommendation = self.classifier.classify(validation.data)
        except AdvisorError as e:
            logger.error("Pipeline classification failed: %s", e)
            errors.append(f"Classification failed: {e}")
            return PipelineResult(
                success=False, requirements=validation.data, errors=errors, warnings=warnings, session=session,
            )

        return PipelineResult(
            success=True,
            requirements=validation.data,
            recommendation=recommendation,
            errors=errors,
            warnings=warnings,
            session=session,
        )

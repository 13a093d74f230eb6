"""
Answer validation.

Runs in front of the state machine: the tool handler and the batch pipeline
check answers here before recording them. The accumulator itself never
validates.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field, StrictStr, ValidationError, field_validator

from ..schemas.questions import (
    AnswerType,
    InterviewStage,
    Question,
    QUESTION_CATALOG,
    get_question_by_id,
    get_questions_for_stage,
)
from ..schemas.validation import ValidationResult, format_validation_errors
from .state_manager import Response


class ResponseModel(BaseModel):
    """Shape every answer must have regardless of the question it answers."""
    question_id: StrictStr = Field(min_length=1)
    value: Any

    @field_validator("value")
    @classmethod
    def check_value(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            if not value:
                raise ValueError("Text responses cannot be empty")
            return value
        if isinstance(value, list):
            if not value:
                raise ValueError("Must select at least one option")
            if not all(isinstance(v, str) and v for v in value):
                raise ValueError("Selections must be non-empty text")
            return value
        raise ValueError("Must be text, a boolean or a list of text")


def _as_mapping(response: Any) -> Any:
    if isinstance(response, Response):
        return {"question_id": response.question_id, "value": response.value}
    return response


def _type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "text"
    if isinstance(value, list):
        return "list"
    return type(value).__name__


def validate_response(response: Any) -> ValidationResult[Response]:
    """Basic shape check for a Response (or a {question_id, value} mapping)."""
    try:
        model = ResponseModel.model_validate(_as_mapping(response))
    except ValidationError as exc:
        return ValidationResult(success=False, errors=format_validation_errors(exc))

    if isinstance(response, Response):
        return ValidationResult(success=True, data=response)
    return ValidationResult(success=True, data=Response(question_id=model.question_id, value=model.value))


def validate_response_against_question(response: Response, question: Question) -> ValidationResult[Response]:
    """Check an answer against the type, options and required flag of its question."""
    errors = []
    value = response.value
    qid = question.id

    if response.question_id != qid:
        errors.append(f'Response question ID "{response.question_id}" does not match question ID "{qid}"')

    if question.answer_type == AnswerType.TEXT:
        if not isinstance(value, str):
            errors.append(f'Question "{qid}" expects a text response, got {_type_name(value)}')
        elif question.required and not value.strip():
            errors.append(f'Question "{qid}" is required and cannot be empty')

    elif question.answer_type == AnswerType.BOOLEAN:
        if not isinstance(value, bool):
            errors.append(f'Question "{qid}" expects a boolean response, got {_type_name(value)}')

    elif question.answer_type == AnswerType.CHOICE:
        if not isinstance(value, str):
            errors.append(f'Question "{qid}" expects a single choice, got {_type_name(value)}')
        elif question.options and value not in question.options:
            errors.append(
                f'Question "{qid}" received invalid choice "{value}". '
                f'Valid options: {", ".join(question.options)}'
            )

    elif question.answer_type == AnswerType.MULTISELECT:
        if not isinstance(value, list):
            errors.append(f'Question "{qid}" expects multiple selections, got {_type_name(value)}')
        else:
            if question.required and not value:
                errors.append(f'Question "{qid}" is required and must have at least one selection')
            if question.options:
                invalid = [v for v in value if v not in question.options]
                if invalid:
                    errors.append(
                        f'Question "{qid}" received invalid choices: {", ".join(map(str, invalid))}. '
                        f'Valid options: {", ".join(question.options)}'
                    )

    else:
        errors.append(f'Unknown question type for question "{qid}"')

    if errors:
        return ValidationResult(success=False, errors=errors)
    return ValidationResult(success=True, data=response)


def validate_stage_completion(
    stage: InterviewStage,
    responses: Sequence[Response],
    questions: Sequence[Question] = QUESTION_CATALOG,
) -> ValidationResult[bool]:
    """Every required question of the stage has a valid answer."""
    errors = []
    by_id = {r.question_id: r for r in responses}

    for question in get_questions_for_stage(stage, questions):
        if not question.required:
            continue

        response = by_id.get(question.id)
        if response is None:
            errors.append(f'Required question "{question.id}" ({question.text}) has no response')
            continue

        result = validate_response_against_question(response, question)
        if not result.success:
            errors.extend(result.errors)

    if errors:
        return ValidationResult(success=False, errors=errors)
    return ValidationResult(success=True, data=True)


def validate_all_responses(
    responses: Sequence[Any],
    questions: Sequence[Question] = QUESTION_CATALOG,
) -> ValidationResult[list[Response]]:
    """Basic and per-question checks over a batch of answers."""
    errors = []
    validated: list[Response] = []

    for response in responses:
        basic = validate_response(response)
        if not basic.success:
            errors.extend(basic.errors)
            continue

        question: Optional[Question] = get_question_by_id(basic.data.question_id, questions)
        if question is None:
            errors.append(f"Response references unknown question ID: {basic.data.question_id}")
            continue

        checked = validate_response_against_question(basic.data, question)
        if not checked.success:
            errors.extend(checked.errors)
            continue

        validated.append(basic.data)

    if errors:
        return ValidationResult(success=False, errors=errors)
    return ValidationResult(success=True, data=validated)

"""
Interview Question Catalog

Defines the fixed, ordered set of questions used to capture agent
requirements. Each question belongs to one interview stage:

1. DISCOVERY: what the agent is and who it serves
2. REQUIREMENTS: how it interacts and how success is measured
3. ARCHITECTURE: runtime capabilities (memory, file/web access, tools)
4. OUTPUT: deployment preferences, constraints, and free-form notes

Stages are walked in that order; COMPLETE is the terminal stage and owns no
questions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence


class InterviewStage(str, Enum):
    DISCOVERY = "discovery"
    REQUIREMENTS = "requirements"
    ARCHITECTURE = "architecture"
    OUTPUT = "output"
    COMPLETE = "complete"


STAGE_ORDER: tuple[InterviewStage, ...] = (
    InterviewStage.DISCOVERY,
    InterviewStage.REQUIREMENTS,
    InterviewStage.ARCHITECTURE,
    InterviewStage.OUTPUT,
    InterviewStage.COMPLETE,
)

# Stages a persisted session can be resumed from
RESUMABLE_STAGES: tuple[InterviewStage, ...] = STAGE_ORDER[:-1]


class AnswerType(str, Enum):
    TEXT = "text"
    BOOLEAN = "boolean"
    CHOICE = "choice"
    MULTISELECT = "multiselect"


INTERACTION_STYLES = ("conversational", "task-focused", "collaborative")
MEMORY_LEVELS = ("none", "short-term", "long-term")
RUNTIMES = ("cloud", "local", "hybrid")


@dataclass(frozen=True)
class Question:
    """A single interview question."""
    id: str
    stage: InterviewStage
    answer_type: AnswerType
    text: str
    required: bool = True
    options: Optional[tuple[str, ...]] = None
    hint: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "stage": self.stage.value,
            "type": self.answer_type.value,
            "text": self.text,
            "required": self.required,
            "options": list(self.options) if self.options else None,
            "hint": self.hint or None,
        }


# =============================================================================
# QUESTION CATALOG
# =============================================================================

QUESTION_CATALOG: tuple[Question, ...] = (
    # --- Discovery ---------------------------------------------------------
    Question(
        id="q1_agent_name",
        stage=InterviewStage.DISCOVERY,
        answer_type=AnswerType.TEXT,
        text="What would you like to name your agent?",
        hint="A short, descriptive name such as 'Sales Data Analyzer'",
    ),
    Question(
        id="q2_primary_outcome",
        stage=InterviewStage.DISCOVERY,
        answer_type=AnswerType.TEXT,
        text="What is the primary outcome this agent should deliver?",
        hint="Describe the main job, e.g. 'Generate weekly sales reports with statistical analysis'",
    ),
    Question(
        id="q3_target_audience",
        stage=InterviewStage.DISCOVERY,
        answer_type=AnswerType.MULTISELECT,
        text="Who will use this agent?",
        hint="List one or more audience segments (developers, analysts, support staff...)",
    ),

    # --- Requirements ------------------------------------------------------
    Question(
        id="q4_interaction_style",
        stage=InterviewStage.REQUIREMENTS,
        answer_type=AnswerType.CHOICE,
        text="How should the agent interact with its users?",
        options=INTERACTION_STYLES,
        hint="Conversational for open dialogue, task-focused for direct execution, collaborative for working alongside the user",
    ),
    Question(
        id="q5_delivery_channels",
        stage=InterviewStage.REQUIREMENTS,
        answer_type=AnswerType.MULTISELECT,
        text="Where will users reach the agent?",
        hint="For example CLI, API, Web Application, IDE Extension, Slack",
    ),
    Question(
        id="q6_success_metrics",
        stage=InterviewStage.REQUIREMENTS,
        answer_type=AnswerType.MULTISELECT,
        text="How will you measure whether the agent is successful?",
        hint="For example report accuracy, response time, user satisfaction",
    ),

    # --- Architecture ------------------------------------------------------
    Question(
        id="q7_memory_needs",
        stage=InterviewStage.ARCHITECTURE,
        answer_type=AnswerType.CHOICE,
        text="Does the agent need to remember context between interactions?",
        options=MEMORY_LEVELS,
        hint="Short-term keeps context within a session, long-term persists it across sessions",
    ),
    Question(
        id="q8_file_access",
        stage=InterviewStage.ARCHITECTURE,
        answer_type=AnswerType.BOOLEAN,
        text="Does the agent need to read or write local files?",
    ),
    Question(
        id="q9_web_access",
        stage=InterviewStage.ARCHITECTURE,
        answer_type=AnswerType.BOOLEAN,
        text="Does the agent need to search or fetch content from the web?",
    ),
    Question(
        id="q10_code_execution",
        stage=InterviewStage.ARCHITECTURE,
        answer_type=AnswerType.BOOLEAN,
        text="Does the agent need to run or evaluate code?",
    ),
    Question(
        id="q11_data_analysis",
        stage=InterviewStage.ARCHITECTURE,
        answer_type=AnswerType.BOOLEAN,
        text="Will the agent perform data processing or statistical analysis?",
    ),
    Question(
        id="q12_tool_integrations",
        stage=InterviewStage.ARCHITECTURE,
        answer_type=AnswerType.TEXT,
        text="Which external tools or services should the agent integrate with?",
        required=False,
        hint="Comma-separated, e.g. 'PostgreSQL, Slack, GitHub'",
    ),

    # --- Output ------------------------------------------------------------
    Question(
        id="q13_runtime_preference",
        stage=InterviewStage.OUTPUT,
        answer_type=AnswerType.CHOICE,
        text="Where should the agent run?",
        options=RUNTIMES,
    ),
    Question(
        id="q14_constraints",
        stage=InterviewStage.OUTPUT,
        answer_type=AnswerType.TEXT,
        text="Are there any constraints the agent must respect?",
        required=False,
        hint="Comma-separated, e.g. 'Budget under $1000/month, No PII storage'",
    ),
    Question(
        id="q15_additional_notes",
        stage=InterviewStage.OUTPUT,
        answer_type=AnswerType.TEXT,
        text="Anything else we should know?",
        required=False,
    ),
)


def get_question_by_id(question_id: str, questions: Sequence[Question] = QUESTION_CATALOG) -> Optional[Question]:
    """Look up a question by id."""
    for question in questions:
        if question.id == question_id:
            return question
    return None


def get_questions_for_stage(stage: InterviewStage | str, questions: Sequence[Question] = QUESTION_CATALOG) -> list[Question]:
    """Questions owned by a stage, in catalog order."""
    return [q for q in questions if q.stage == stage]


def get_total_questions(questions: Sequence[Question] = QUESTION_CATALOG) -> int:
    return len(questions)

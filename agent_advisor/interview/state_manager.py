"""
Interview State Machine

Owns a single interview session: which stage we are in, which question of
that stage is next, the answers recorded so far, and the requirements they
produce.

Interview Flow:
    discovery -> requirements -> architecture -> output -> complete

Each stage walks its own slice of the question catalog. Recording an answer
always moves the index forward; running off the end of a stage advances to
the next one. Callers are expected to answer in catalog order.

Usage:
    manager = InterviewStateManager()
    question = manager.get_current_question()
    manager.record_response(question.id, "Sales Data Analyzer")
"""

from __future__ import annotations

import copy
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Sequence

from ..schemas.questions import (
    InterviewStage,
    Question,
    QUESTION_CATALOG,
    RESUMABLE_STAGES,
    STAGE_ORDER,
)
from ..schemas.requirements import AgentRequirements
from .accumulator import AnswerValue, apply_answer
from .codec import parse_datetime


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Response:
    """A recorded answer."""
    question_id: str
    value: AnswerValue
    answered_at: datetime = field(default_factory=utcnow)


@dataclass
class ConversationMetadata:
    """Bookkeeping for an advisor conversation wrapped around the interview."""
    advisor_session_id: Optional[str] = None
    message_count: int = 0
    last_activity: datetime = field(default_factory=utcnow)
    conversation_started: datetime = field(default_factory=utcnow)


@dataclass
class InterviewSession:
    """Complete interview session state."""
    session_id: str
    current_stage: InterviewStage = InterviewStage.DISCOVERY
    current_question_index: int = 0
    responses: list[Response] = field(default_factory=list)
    requirements: AgentRequirements = field(default_factory=AgentRequirements)
    is_complete: bool = False
    started_at: Optional[datetime] = None
    last_updated_at: Optional[datetime] = None
    conversation_metadata: Optional[ConversationMetadata] = None


def new_session_id() -> str:
    return str(uuid.uuid4())


class InterviewStateManager:
    """
    Drives one interview session through the stage sequence.

    The session is private to the manager; get_state() hands out copies.
    """

    def __init__(self, session_id: Optional[str] = None, questions: Optional[Sequence[Question]] = None):
        self.questions: tuple[Question, ...] = tuple(questions) if questions is not None else QUESTION_CATALOG
        self.state = self._fresh_session(session_id)

    @staticmethod
    def _fresh_session(session_id: Optional[str]) -> InterviewSession:
        now = utcnow()
        return InterviewSession(
            session_id=session_id or new_session_id(),
            started_at=now,
            last_updated_at=now,
        )

    def initialize_session(self, session_id: Optional[str] = None) -> InterviewSession:
        """Start over with a fresh session at the first discovery question."""
        self.state = self._fresh_session(session_id)
        logger.info("Initialized interview session %s", self.state.session_id)
        return self.get_state()

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_questions_for_stage(self, stage: InterviewStage | str) -> list[Question]:
        return [q for q in self.questions if q.stage == stage]

    def get_current_question(self) -> Optional[Question]:
        """The next question of the current stage, or None once the stage is exhausted."""
        stage_questions = self.get_questions_for_stage(self.state.current_stage)
        if self.state.current_question_index >= len(stage_questions):
            return None
        return stage_questions[self.state.current_question_index]

    def record_response(self, question_id: str, value: AnswerValue) -> None:
        """
        Record an answer, fold it into the requirements and move forward.

        A repeated question id replaces the earlier response in place. The
        index advances either way, so re-answering out of order can step
        past a question that was never answered.
        """
        response = Response(question_id=question_id, value=value)

        for i, existing in enumerate(self.state.responses):
            if existing.question_id == question_id:
                self.state.responses[i] = response
                break
        else:
            self.state.responses.append(response)

        apply_answer(self.state.requirements, question_id, value)

        self.state.current_question_index += 1
        self.state.last_updated_at = response.answered_at

        stage_questions = self.get_questions_for_stage(self.state.current_stage)
        if self.state.current_question_index >= len(stage_questions):
            self.advance_stage()

    def advance_stage(self) -> bool:
        """
        Move to the next stage and reset the question index.

        Returns False once the interview is complete.
        """
        try:
            current = STAGE_ORDER.index(self.state.current_stage)
        except ValueError:
            current = -1

        if current == -1 or current >= len(STAGE_ORDER) - 1:
            self.state.current_stage = InterviewStage.COMPLETE
            self.state.is_complete = True
            return False

        previous = self.state.current_stage
        self.state.current_stage = STAGE_ORDER[current + 1]
        self.state.current_question_index = 0
        logger.debug(
            "Session %s advanced %s -> %s",
            self.state.session_id, InterviewStage(previous).value, self.state.current_stage.value,
        )

        if self.state.current_stage == InterviewStage.COMPLETE:
            self.state.is_complete = True
            logger.info("Session %s complete with %d responses", self.state.session_id, len(self.state.responses))
            return False

        return True

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    def get_state(self) -> InterviewSession:
        return copy.deepcopy(self.state)

    def is_complete(self) -> bool:
        return self.state.is_complete

    def get_collected_requirements(self) -> AgentRequirements:
        return copy.deepcopy(self.state.requirements)

    def get_progress(self) -> dict:
        """Get progress info for UI."""
        answered = len(self.state.responses)
        total = len(self.questions)
        stage = InterviewStage(self.state.current_stage)
        return {
            "stage": stage.value,
            "stage_progress": self.state.current_question_index,
            "stage_total": len(self.get_questions_for_stage(stage)),
            "total_responses": answered,
            "total_questions": total,
            "overall_percent": 100 if self.state.is_complete else int((answered / max(total, 1)) * 100),
        }

    # -------------------------------------------------------------------------
    # Resume
    # -------------------------------------------------------------------------

    @staticmethod
    def can_resume(snapshot: InterviewSession) -> bool:
        """A snapshot is resumable when it is identified, unfinished and well formed."""
        if not snapshot.session_id or snapshot.is_complete:
            return False
        if snapshot.current_stage not in RESUMABLE_STAGES:
            return False
        if not isinstance(snapshot.responses, list):
            return False
        return all(isinstance(r, Response) for r in snapshot.responses)

    def load_state(self, snapshot: InterviewSession) -> None:
        """Replace the live session with a copy of snapshot, normalizing response dates."""
        state = copy.deepcopy(snapshot)
        state.current_stage = InterviewStage(state.current_stage)
        for response in state.responses:
            if not isinstance(response.answered_at, datetime):
                response.answered_at = parse_datetime(response.answered_at)
        self.state = state

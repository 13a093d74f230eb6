"""
Interview Tool Handler

Action-driven surface over the interview state machine, shaped for an agent
tool call or a thin UI:

1. start   - open a new session and return the first question
2. answer  - validate and record an answer to the current question
3. skip    - skip the current question when it is optional
4. resume  - list stored sessions, or reload one and continue it
5. status  - summarize stored sessions, or report on one

Every call returns a plain dict. Failures come back as ToolError payloads
rather than exceptions.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..errors import ErrorCode, ToolError
from ..schemas.questions import Question
from .accumulator import AnswerValue
from .persistence import SessionStore
from .state_manager import InterviewStateManager, Response
from .validator import validate_response, validate_response_against_question


logger = logging.getLogger(__name__)

ACTIONS = ("start", "answer", "skip", "resume", "status")
STATUS_SESSION_LIMIT = 10


def question_payload(question: Optional[Question]) -> Optional[dict]:
    return question.to_dict() if question else None


class InterviewToolHandler:
    """
    Keeps live state managers in memory, keyed by session id, and writes
    every change through to the session store. Completed sessions are
    dropped from memory; the store keeps their final snapshot.
    """

    def __init__(self, store: SessionStore, questions: Optional[Sequence[Question]] = None):
        self.store = store
        self.questions = questions
        self.sessions: dict[str, InterviewStateManager] = {}

    def _new_manager(self) -> InterviewStateManager:
        return InterviewStateManager(questions=self.questions)

    async def _get_manager(self, session_id: str) -> Optional[InterviewStateManager]:
        """Cached manager for session_id, loading it from the store if needed."""
        manager = self.sessions.get(session_id)
        if manager is not None:
            return manager

        snapshot = await self.store.load(session_id)
        if snapshot is None:
            return None

        manager = self._new_manager()
        manager.load_state(snapshot)
        if not manager.is_complete():
            self.sessions[session_id] = manager
        return manager

    @staticmethod
    def _not_found(session_id: str) -> dict:
        return ToolError(
            ErrorCode.SESSION_NOT_FOUND,
            f"Session {session_id} not found. Use action=start to begin a new session.",
        ).to_dict()

    def _complete_payload(self, session_id: str, manager: InterviewStateManager, message: str) -> dict:
        self.sessions.pop(session_id, None)
        return {
            "status": "complete",
            "session_id": session_id,
            "requirements": manager.get_collected_requirements().to_dict(),
            "message": message,
        }

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    async def handle_start(self) -> dict:
        manager = self._new_manager()
        state = manager.initialize_session()
        self.sessions[state.session_id] = manager

        await self.store.save(state)

        return {
            "status": "started",
            "session_id": state.session_id,
            "current_stage": state.current_stage.value,
            "question": question_payload(manager.get_current_question()),
            "message": "Interview session started. Answer the questions to define your agent requirements.",
        }

    async def handle_answer(self, session_id: Optional[str], value: Optional[AnswerValue]) -> dict:
        if not session_id:
            return ToolError(ErrorCode.MISSING_RESPONSE, "Session ID is required for answer action").to_dict()
        if value is None:
            return ToolError(ErrorCode.MISSING_RESPONSE, "Response value is required for answer action").to_dict()

        manager = await self._get_manager(session_id)
        if manager is None:
            return self._not_found(session_id)

        question = manager.get_current_question()
        if question is None:
            return self._complete_payload(
                session_id, manager, "Interview is already complete. All questions have been answered."
            )

        response = Response(question_id=question.id, value=value)

        basic = validate_response(response)
        if not basic.success:
            return ToolError(
                ErrorCode.VALIDATION_ERROR,
                "Invalid response format",
                {"errors": basic.errors},
            ).to_dict()

        checked = validate_response_against_question(response, question)
        if not checked.success:
            return ToolError(
                ErrorCode.VALIDATION_ERROR,
                "Response does not match question requirements",
                {"errors": checked.errors, "question": question_payload(question)},
            ).to_dict()

        manager.record_response(question.id, value)
        state = manager.get_state()
        await self.store.save(state)

        if manager.is_complete():
            return self._complete_payload(
                session_id, manager, "Interview complete! All requirements have been collected."
            )

        return {
            "status": "answered",
            "session_id": session_id,
            "current_stage": state.current_stage.value,
            "previous_question": question.id,
            "question": question_payload(manager.get_current_question()),
            "progress": manager.get_progress(),
        }

    async def handle_skip(self, session_id: Optional[str]) -> dict:
        if not session_id:
            return ToolError(ErrorCode.MISSING_RESPONSE, "Session ID is required for skip action").to_dict()

        manager = await self._get_manager(session_id)
        if manager is None:
            return self._not_found(session_id)

        question = manager.get_current_question()
        if question is None:
            return self._complete_payload(session_id, manager, "Interview is already complete.")

        if question.required:
            return ToolError(
                ErrorCode.SKIP_REQUIRED_QUESTION,
                "Cannot skip required question",
                {"question": question_payload(question)},
            ).to_dict()

        manager.record_response(question.id, "")
        state = manager.get_state()
        await self.store.save(state)

        if manager.is_complete():
            return self._complete_payload(
                session_id, manager, "Interview complete! All requirements have been collected."
            )

        return {
            "status": "skipped",
            "session_id": session_id,
            "skipped_question": question.id,
            "current_stage": state.current_stage.value,
            "question": question_payload(manager.get_current_question()),
        }

    async def handle_resume(self, session_id: Optional[str]) -> dict:
        if not session_id:
            sessions = await self.store.list()
            return {
                "status": "sessions_list",
                "sessions": [
                    {"session_id": s.session_id, "captured_at": s.captured_at.isoformat()}
                    for s in sessions
                ],
                "message": "Provide a session_id to resume a specific session",
            }

        snapshot = await self.store.load(session_id)
        if snapshot is None:
            return self._not_found(session_id)

        if not InterviewStateManager.can_resume(snapshot):
            return ToolError(
                ErrorCode.INVALID_SESSION_STATE,
                "Session cannot be resumed (already complete or invalid)",
                {"is_complete": snapshot.is_complete, "current_stage": snapshot.current_stage.value},
            ).to_dict()

        manager = self._new_manager()
        manager.load_state(snapshot)
        self.sessions[session_id] = manager
        logger.info("Resumed interview session %s", session_id)

        return {
            "status": "resumed",
            "session_id": session_id,
            "current_stage": manager.state.current_stage.value,
            "question": question_payload(manager.get_current_question()),
            "progress": manager.get_progress(),
        }

    async def handle_status(self, session_id: Optional[str]) -> dict:
        if not session_id:
            sessions = await self.store.list()
            return {
                "status": "sessions_summary",
                "total_sessions": len(sessions),
                "sessions": [
                    {"session_id": s.session_id, "captured_at": s.captured_at.isoformat()}
                    for s in sessions[:STATUS_SESSION_LIMIT]
                ],
            }

        manager = await self._get_manager(session_id)
        if manager is None:
            return self._not_found(session_id)

        state = manager.get_state()
        return {
            "status": "session_status",
            "session_id": session_id,
            "current_stage": state.current_stage.value,
            "is_complete": state.is_complete,
            "total_responses": len(state.responses),
            "current_question": question_payload(manager.get_current_question()),
            "collected_requirements": state.requirements.to_dict(),
        }

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    async def handle(
        self,
        action: str,
        session_id: Optional[str] = None,
        response: Optional[AnswerValue] = None,
    ) -> dict[str, Any]:
        """Run one interview action and return its result payload."""
        try:
            if action == "start":
                return await self.handle_start()
            if action == "answer":
                return await self.handle_answer(session_id, response)
            if action == "skip":
                return await self.handle_skip(session_id)
            if action == "resume":
                return await self.handle_resume(session_id)
            if action == "status":
                return await self.handle_status(session_id)
            return ToolError(
                ErrorCode.INVALID_ACTION,
                f"Unknown action: {action}",
                {"valid_actions": list(ACTIONS)},
            ).to_dict()
        except Exception as e:
            logger.exception("Interview action %s failed", action)
            return ToolError(
                ErrorCode.INTERNAL_ERROR,
                "Internal error processing interview action",
                {"message": str(e)},
            ).to_dict()

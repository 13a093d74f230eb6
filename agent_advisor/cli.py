"""
CLI Interface for the Agent Advisor

Runs the requirements interview in the terminal, classifies batches of
answers, and manages stored interview sessions.
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import timedelta
from pathlib import Path
from typing import Optional

from .classification.classifier import AgentClassifier, Recommendation
from .config import AdvisorConfig, get_config
from .errors import SessionCorruptError
from .interview.accumulator import AnswerValue
from .interview.persistence import SessionStore
from .interview.state_manager import InterviewStateManager, Response
from .interview.validator import validate_response_against_question
from .pipeline import AgentAdvisorPipeline
from .schemas.questions import AnswerType, Question
from .schemas.validation import validate_agent_requirements
from .templates.registry import load_default_registry
from .utils.logger import setup_logger


logger = logging.getLogger(__name__)

TRUE_WORDS = {"y", "yes", "true", "1"}
FALSE_WORDS = {"n", "no", "false", "0"}


def print_header():
    """Print CLI header."""
    print("""
╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║     AGENT ADVISOR - Requirements Interview                    ║
║                                                               ║
║     Describe your agent, get a template recommendation        ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝
    """)


def format_question(question: Question, number: int, total: int) -> str:
    lines = [f"\n[{number}/{total}] {question.text}"]
    if question.options:
        for i, option in enumerate(question.options, 1):
            lines.append(f"  {i}. {option}")
    if question.answer_type == AnswerType.BOOLEAN:
        lines.append("  (yes/no)")
    elif question.answer_type == AnswerType.MULTISELECT:
        lines.append("  (comma-separated)")
    if question.hint:
        lines.append(f"  Hint: {question.hint}")
    if not question.required:
        lines.append("  Optional - type 'skip' to leave blank")
    return "\n".join(lines)


def parse_answer(question: Question, raw: str) -> AnswerValue:
    """
    Turn terminal input into the value type the question expects.

    Unrecognized input is returned as text so validation can report it.
    """
    text = raw.strip()

    if question.answer_type == AnswerType.BOOLEAN:
        lowered = text.lower()
        if lowered in TRUE_WORDS:
            return True
        if lowered in FALSE_WORDS:
            return False
        return text

    if question.answer_type == AnswerType.CHOICE and question.options and text.isdigit():
        index = int(text) - 1
        if 0 <= index < len(question.options):
            return question.options[index]
        return text

    if question.answer_type == AnswerType.MULTISELECT:
        return [part.strip() for part in text.split(",") if part.strip()]

    return text


def print_recommendation(recommendation: Recommendation):
    print(f"""
╔═══════════════════════════════════════════════════════════════╗
║                    RECOMMENDATION                             ║
╚═══════════════════════════════════════════════════════════════╝

Template:    {recommendation.template_name} ({recommendation.agent_type})
Score:       {recommendation.score.score:.0f}
Complexity:  {recommendation.estimated_complexity.value}
""")
    if recommendation.services:
        print("Suggested services:")
        for service in recommendation.services:
            print(f"  - {service.name}: {service.description}")
    print("\nImplementation steps:")
    for i, step in enumerate(recommendation.implementation_steps, 1):
        print(f"  {i}. {step}")
    print(f"\n{recommendation.notes}\n")


# =============================================================================
# INTERVIEW
# =============================================================================

async def run_interactive_interview(manager: InterviewStateManager, store: SessionStore, config: AdvisorConfig) -> int:
    """Run an interview session in the terminal, saving after every answer."""
    total = len(manager.questions)
    await store.save(manager.get_state())
    print(f"Session: {manager.state.session_id}")

    while not manager.is_complete():
        question = manager.get_current_question()
        if question is None:
            manager.advance_stage()
            continue

        print(format_question(question, len(manager.state.responses) + 1, total))
        raw = input("\nYour response: ").strip()

        if raw.lower() == "pause":
            path = await store.save(manager.get_state())
            print(f"\nSession saved to: {path}")
            print(f"You can resume later with: agent-advisor interview --resume {manager.state.session_id}")
            return 0

        if raw.lower() == "status":
            progress = manager.get_progress()
            print(f"Stage: {progress['stage']}  ({progress['overall_percent']}% complete)")
            continue

        if raw.lower() == "skip":
            if question.required:
                print("This question is required and cannot be skipped.")
                continue
            manager.record_response(question.id, "")
            await store.save(manager.get_state())
            continue

        value = parse_answer(question, raw)
        result = validate_response_against_question(Response(question_id=question.id, value=value), question)
        if not result.success:
            for error in result.errors:
                print(f"  ! {error}")
            continue

        manager.record_response(question.id, value)
        await store.save(manager.get_state())

    print("\nInterview complete! All requirements have been collected.")

    validation = validate_agent_requirements(manager.get_collected_requirements())
    if not validation.success:
        print("The collected requirements are incomplete:")
        for error in validation.errors:
            print(f"  - {error}")
        return 1

    classifier = AgentClassifier(load_default_registry(config.templates_path))
    print_recommendation(classifier.classify(validation.data))
    return 0


async def cmd_interview(args, config: AdvisorConfig) -> int:
    store = SessionStore.from_config(config)
    manager = InterviewStateManager()

    if args.resume:
        try:
            snapshot = await store.load(args.resume)
        except SessionCorruptError as e:
            print(f"Error: {e}")
            return 1
        if snapshot is None:
            print(f"Error: Session '{args.resume}' not found in {store.directory}")
            return 1
        if not InterviewStateManager.can_resume(snapshot):
            print(f"Error: Session '{args.resume}' cannot be resumed (already complete or invalid)")
            return 1
        manager.load_state(snapshot)
        print(f"Resuming session: {args.resume}")
    else:
        manager.initialize_session()

    return await run_interactive_interview(manager, store, config)


# =============================================================================
# CLASSIFY
# =============================================================================

def cmd_classify(args, config: AdvisorConfig) -> int:
    path = Path(args.answers)
    try:
        responses = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Error: cannot read answers from {path}: {e}", file=sys.stderr)
        return 1

    if not isinstance(responses, dict):
        print("Error: answers file must hold a JSON object of question_id -> answer", file=sys.stderr)
        return 1

    registry = load_default_registry(config.templates_path)
    pipeline = AgentAdvisorPipeline(registry=registry)
    result = pipeline.run(responses)

    output = result.to_dict()
    if args.scores and result.requirements is not None and result.success:
        output["scores"] = [s.to_dict() for s in pipeline.classifier.score_all_templates(result.requirements)]

    print(json.dumps(output, indent=2))
    return 0 if result.success else 1


# =============================================================================
# SESSIONS
# =============================================================================

async def cmd_sessions(args, config: AdvisorConfig) -> int:
    store = SessionStore.from_config(config)

    if args.sessions_command == "list":
        sessions = await store.list()
        if not sessions:
            print(f"No sessions in {store.directory}")
            return 0
        for summary in sessions:
            print(f"{summary.session_id}  {summary.captured_at.isoformat()}")
        return 0

    if args.sessions_command == "delete":
        if await store.delete(args.session_id):
            print(f"Deleted session {args.session_id}")
            return 0
        print(f"Session {args.session_id} not found")
        return 1

    if args.sessions_command == "cleanup":
        days = args.max_age_days if args.max_age_days is not None else config.max_session_age_days
        deleted = await store.cleanup(timedelta(days=days))
        print(f"Deleted {deleted} session(s) older than {days} day(s)")
        return 0

    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agent-advisor",
        description="Interview-driven agent requirements and template recommendation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start a new interactive interview
  agent-advisor interview

  # Resume a previous session
  agent-advisor interview --resume 3f2b8c1e-...

  # Classify a file of answers and show every template score
  agent-advisor classify answers.json --scores

  # Remove sessions older than two weeks
  agent-advisor sessions cleanup --max-age-days 14
        """
    )

    parser.add_argument(
        "--sessions-dir",
        help="Directory holding session records (default: $AGENT_ADVISOR_SESSIONS_DIR or ./sessions)"
    )

    parser.add_argument(
        "--log-level",
        help="Logging level (default: $AGENT_ADVISOR_LOG_LEVEL or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    interview = subparsers.add_parser("interview", help="Run the requirements interview")
    interview.add_argument("--resume", "-r", help="Resume a previous session by session ID")

    classify = subparsers.add_parser("classify", help="Classify a JSON file of answers")
    classify.add_argument("answers", help="JSON object mapping question ids to answers")
    classify.add_argument("--scores", action="store_true", help="Include the score of every template")

    sessions = subparsers.add_parser("sessions", help="Manage stored interview sessions")
    sessions_sub = sessions.add_subparsers(dest="sessions_command", required=True)
    sessions_sub.add_parser("list", help="List stored sessions, newest first")
    delete = sessions_sub.add_parser("delete", help="Delete one session")
    delete.add_argument("session_id")
    cleanup = sessions_sub.add_parser("cleanup", help="Delete sessions older than a maximum age")
    cleanup.add_argument("--max-age-days", type=int, help="Maximum age in days (default: 7)")

    return parser


def main(argv: Optional[list[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config(sessions_dir=args.sessions_dir, log_level=args.log_level)
    except ValueError as e:
        parser.error(str(e))

    setup_logger(level=config.log_level)
    logger.debug("Sessions directory: %s", config.sessions_dir)

    if args.command == "interview":
        print_header()
        code = asyncio.run(cmd_interview(args, config))
    elif args.command == "classify":
        code = cmd_classify(args, config)
    else:
        code = asyncio.run(cmd_sessions(args, config))

    sys.exit(code)


if __name__ == "__main__":
    main()

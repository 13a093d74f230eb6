"""
Session Store - durable snapshots of interview sessions.

One JSON record per session id, named <session_id>.json, inside a directory
chosen by whoever constructs the store. The directory is created on first
use.

There is no locking: concurrent saves of the same session race and the last
writer wins. File I/O runs in a worker thread so callers can await it.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from ..config import AdvisorConfig, DEFAULT_MAX_SESSION_AGE_DAYS, SESSION_EXTENSION
from ..errors import SessionCorruptError
from .codec import decode_record, encode_record, parse_datetime
from .state_manager import InterviewSession


logger = logging.getLogger(__name__)

MAX_SESSION_AGE = timedelta(days=DEFAULT_MAX_SESSION_AGE_DAYS)


@dataclass
class SessionSummary:
    """Listing entry: just enough of a record to sort and expire it."""
    session_id: str
    captured_at: datetime


class SessionStore:
    """Persists, lists and expires interview session snapshots."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory).expanduser()

    @classmethod
    def from_config(cls, config: AdvisorConfig) -> "SessionStore":
        return cls(config.sessions_dir)

    def _ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, session_id: str) -> Path:
        return self.directory / f"{session_id}{SESSION_EXTENSION}"

    # -------------------------------------------------------------------------
    # Blocking implementations (run via asyncio.to_thread)
    # -------------------------------------------------------------------------

    def _write(self, session: InterviewSession, captured_at: datetime) -> Path:
        self._ensure_directory()
        path = self.path_for(session.session_id)
        record = encode_record(session, captured_at)
        path.write_text(json.dumps(record, indent=2), encoding="utf-8")
        return path

    def _read(self, session_id: str) -> Optional[InterviewSession]:
        path = self.path_for(session_id)
        try:
            content = path.read_bytes()
        except FileNotFoundError:
            return None

        try:
            session, _ = decode_record(json.loads(content.decode("utf-8")))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise SessionCorruptError(session_id, str(path), str(exc)) from exc
        return session

    def _scan(self) -> list[SessionSummary]:
        self._ensure_directory()
        summaries = []
        for path in self.directory.glob(f"*{SESSION_EXTENSION}"):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                captured_at = parse_datetime(data["captured_at"])
                if captured_at is None:
                    raise ValueError("captured_at is missing")
            except (OSError, ValueError, KeyError, TypeError) as exc:
                logger.warning("Skipping unreadable session record %s: %s", path.name, exc)
                continue
            summaries.append(SessionSummary(session_id=path.stem, captured_at=captured_at))

        summaries.sort(key=lambda s: s.captured_at, reverse=True)
        return summaries

    def _unlink(self, session_id: str) -> bool:
        try:
            self.path_for(session_id).unlink()
        except FileNotFoundError:
            return False
        return True

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def save(self, session: InterviewSession, captured_at: Optional[datetime] = None) -> Path:
        """Write a snapshot of session, replacing any earlier one."""
        captured_at = captured_at or datetime.now(timezone.utc)
        path = await asyncio.to_thread(self._write, session, captured_at)
        logger.debug("Saved session %s to %s", session.session_id, path)
        return path

    async def load(self, session_id: str) -> Optional[InterviewSession]:
        """
        Load a session, or None when no record exists.

        Raises SessionCorruptError when the record exists but cannot be parsed.
        """
        return await asyncio.to_thread(self._read, session_id)

    async def list(self) -> list[SessionSummary]:
        """All readable records, most recently captured first. Unreadable ones are skipped."""
        return await asyncio.to_thread(self._scan)

    async def delete(self, session_id: str) -> bool:
        """Remove a record. Returns whether one existed."""
        deleted = await asyncio.to_thread(self._unlink, session_id)
        if deleted:
            logger.debug("Deleted session %s", session_id)
        return deleted

    async def cleanup(self, max_age: timedelta = MAX_SESSION_AGE, now: Optional[datetime] = None) -> int:
        """Delete every record captured more than max_age before now. Returns the count deleted."""
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        deleted_count = 0

        for summary in await self.list():
            if now - summary.captured_at > max_age:
                if await self.delete(summary.session_id):
                    deleted_count += 1

        if deleted_count:
            logger.info("Cleaned up %d session(s) older than %s", deleted_count, max_age)
        return deleted_count

"""
Agent Advisor configuration.

Settings are read once from the environment by get_config(); nothing here is
mutated at runtime. Components that touch storage receive their location
explicitly (see SessionStore.from_config).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# Environment variable names
ENV_SESSIONS_DIR = "AGENT_ADVISOR_SESSIONS_DIR"
ENV_MAX_SESSION_AGE_DAYS = "AGENT_ADVISOR_MAX_SESSION_AGE_DAYS"
ENV_LOG_LEVEL = "AGENT_ADVISOR_LOG_LEVEL"
ENV_TEMPLATES = "AGENT_ADVISOR_TEMPLATES"

# Defaults
DEFAULT_SESSIONS_DIR = "./sessions"
DEFAULT_MAX_SESSION_AGE_DAYS = 7
DEFAULT_LOG_LEVEL = "INFO"
SESSION_EXTENSION = ".json"


@dataclass
class AdvisorConfig:
    """Runtime configuration for the advisor."""
    sessions_dir: Path = Path(DEFAULT_SESSIONS_DIR)
    max_session_age_days: int = DEFAULT_MAX_SESSION_AGE_DAYS
    log_level: str = DEFAULT_LOG_LEVEL
    templates_path: Optional[Path] = None


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def get_config(sessions_dir: Optional[str] = None, log_level: Optional[str] = None) -> AdvisorConfig:
    """Load configuration from the environment, with explicit overrides winning."""
    resolved_dir = sessions_dir or os.environ.get(ENV_SESSIONS_DIR) or DEFAULT_SESSIONS_DIR
    templates = os.environ.get(ENV_TEMPLATES)

    return AdvisorConfig(
        sessions_dir=Path(resolved_dir).expanduser(),
        max_session_age_days=_int_from_env(ENV_MAX_SESSION_AGE_DAYS, DEFAULT_MAX_SESSION_AGE_DAYS),
        log_level=(log_level or os.environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
        templates_path=Path(templates).expanduser() if templates else None,
    )

"""
Centralized configuration for the SpikeTime club core.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Sessions
DEFAULT_SESSION_CAPACITY = _parse_int("DEFAULT_SESSION_CAPACITY", 12)
# Sessions drop out of listings this long after they end
SESSION_VISIBILITY_GRACE_MINUTES = _parse_int("SESSION_VISIBILITY_GRACE_MINUTES", 60)
# Booked players may cancel only while more than this many hours remain.
# Fixed club rule; not read from the environment.
CANCELLATION_WINDOW_HOURS = 12

# Team balancing
TEAM_ROSTER_SIZE = _parse_int("TEAM_ROSTER_SIZE", 12)  # Advisor contract: two teams of 6

# AI/LLM Configuration (via LiteLLM)
AI_API_KEY = os.getenv("AI_API_KEY")
AI_MODEL = os.getenv("AI_MODEL", "gemini/gemini-2.0-flash")
AI_TIMEOUT_SECONDS = _parse_float("AI_TIMEOUT_SECONDS", 15.0)
AI_MAX_TOKENS = _parse_int("AI_MAX_TOKENS", 500)
AI_FEATURES_ENABLED = _parse_bool("AI_FEATURES_ENABLED", False)

"""Configuration and runtime constants."""

import os
from typing import Callable, List, TypeVar

from dotenv import load_dotenv

load_dotenv()

T = TypeVar("T")

# Problems with numeric settings; reported by each lookup instead of at import.
CONFIG_ERRORS: List[str] = []


def env_number(name: str, default: T, cast: Callable[[str], T], errors: List[str]) -> T:
    """Read a numeric setting, falling back to ``default`` and noting bad values."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        errors.append(f"{name} must be a number, got {raw!r}")
        return default


# API Keys
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")  # checked per lookup, not at import
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL")  # any OpenAI-compatible endpoint

# Model Configuration (fastest/cheapest first)
CANDIDATE_MODELS = tuple(
    name.strip()
    for name in os.getenv("CANDIDATE_MODELS", "gpt-4o-mini,gpt-4.1-mini,gpt-4o").split(",")
    if name.strip()
)

# Request Configuration
REQUEST_TIMEOUT = env_number("REQUEST_TIMEOUT", 15.0, float, CONFIG_ERRORS)  # seconds per attempt
MAX_ATTEMPTS_PER_MODEL = env_number("MAX_ATTEMPTS_PER_MODEL", 2, int, CONFIG_ERRORS)
RETRY_DELAY = env_number("RETRY_DELAY", 1.0, float, CONFIG_ERRORS)  # fixed, not exponential

# Dictionary Configuration
TARGET_LANGUAGE = os.getenv("TARGET_LANGUAGE", "Japanese")

# Testing Configuration
LIVE_TESTING = os.getenv("ETYMO_DICT_LIVE", "0") == "1"

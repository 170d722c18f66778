"""Configuration constants for the voice journal server.

Values come from the environment (optionally via a ``.env`` file) and are
read once at import time.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).parent


def _float(name: str, default: float) -> float:
    raw_val = os.getenv(name)
    if not raw_val:
        return default
    try:
        return float(raw_val)
    except ValueError:
        logger.warning("Invalid %s value '%s'; falling back to %s.", name, raw_val, default)
        return default


def _int(name: str, default: int) -> int:
    raw_val = os.getenv(name)
    if not raw_val:
        return default
    try:
        parsed = int(raw_val)
    except ValueError:
        logger.warning("Invalid %s value '%s'; falling back to %s.", name, raw_val, default)
        return default
    if parsed <= 0:
        logger.warning("Ignoring %s=%s (must be positive int)", name, raw_val)
        return default
    return parsed


def _path(name: str, default: Path) -> Path:
    raw_val = os.getenv(name)
    return Path(raw_val) if raw_val else default


LOG_LEVEL: str = os.getenv("VOICE_JOURNAL_LOG_LEVEL", "INFO")

# HTTP bind address for ``python -m voice_journal.main``
HOST: str = os.getenv("VOICE_JOURNAL_HOST", "0.0.0.0")
PORT: int = _int("VOICE_JOURNAL_PORT", 7860)

# Hosted inference endpoints
INFERENCE_BASE_URL: str = os.getenv(
    "VOICE_JOURNAL_INFERENCE_BASE_URL",
    "https://router.huggingface.co/hf-inference/models",
)
CHAT_BASE_URL: str = os.getenv(
    "VOICE_JOURNAL_CHAT_BASE_URL", "https://router.huggingface.co/v1"
)

EMOTION_MODEL: str = os.getenv(
    "VOICE_JOURNAL_EMOTION_MODEL", "SamLowe/roberta-base-go_emotions"
)
SENTIMENT_MODEL: str = os.getenv(
    "VOICE_JOURNAL_SENTIMENT_MODEL", "cardiffnlp/twitter-xlm-roberta-base-sentiment"
)
FEEDBACK_MODEL: str = os.getenv(
    "VOICE_JOURNAL_FEEDBACK_MODEL", "mistralai/Mistral-7B-Instruct-v0.3"
)
TRANSCRIPTION_MODEL: str = os.getenv(
    "VOICE_JOURNAL_TRANSCRIPTION_MODEL", "openai/whisper-medium"
)

# Remote call timeouts (seconds)
HTTP_CONNECT_TIMEOUT: float = _float("VOICE_JOURNAL_HTTP_CONNECT_TIMEOUT", 5.0)
HTTP_READ_TIMEOUT: float = _float("VOICE_JOURNAL_HTTP_READ_TIMEOUT", 60.0)

# Output cap for the generated feedback
FEEDBACK_MAX_TOKENS: int = _int("VOICE_JOURNAL_FEEDBACK_MAX_TOKENS", 500)

# Emotions scoring at or above this threshold are "significant"
SIGNIFICANT_EMOTION_THRESHOLD: float = _float(
    "VOICE_JOURNAL_SIGNIFICANT_EMOTION_THRESHOLD", 0.15
)

# Static resources loaded once at startup
PROMPT_PATH: Path = _path(
    "VOICE_JOURNAL_PROMPT_PATH", _PACKAGE_DIR / "prompts" / "feedback.md"
)
INSIGHTS_PATH: Path = _path(
    "VOICE_JOURNAL_INSIGHTS_PATH", _PACKAGE_DIR / "data" / "insights.json"
)
TEXTS_PATH: Path = _path("VOICE_JOURNAL_TEXTS_PATH", _PACKAGE_DIR / "data" / "texts.json")

# Built browser client; served only when the directory exists
STATIC_DIR: Path = _path("VOICE_JOURNAL_STATIC_DIR", Path("client") / "dist")

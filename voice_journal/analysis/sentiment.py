"""Sentiment classification via a hosted text-classification model.

This module provides a single public helper ``classify_sentiment`` which
calls the sentiment model through :mod:`voice_journal.inference` and returns
the top-scoring label as a structured result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from voice_journal import config
from voice_journal.exceptions import UpstreamServiceError
from voice_journal.inference import text_classification

_logger = logging.getLogger(__name__)


class SentimentLabel(str, Enum):
    """Labels produced by the default sentiment model."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class SentimentResult:
    """Structured sentiment analysis output."""

    label: str
    score: Optional[float]  # range 0.0 .. 1.0 when known

    def to_dict(self) -> Dict[str, Any]:
        return {"sentiment": self.label, "score": self.score}

    @classmethod
    def from_formatted(cls, formatted: str) -> "SentimentResult":
        """Parse the client's ``"positive 0.95"`` summary string."""

        parts = formatted.split()
        if not parts:
            raise ValueError("Empty sentiment string")
        try:
            score = float(parts[1]) if len(parts) > 1 else None
        except ValueError:
            score = None
        return cls(label=parts[0], score=score)


def _process_sentiment(raw: Any) -> SentimentResult:
    """Return the highest-scoring entry of the model's raw output."""

    if isinstance(raw, list) and raw and isinstance(raw[0], list):
        raw = raw[0]
    if not isinstance(raw, list) or not raw:
        raise UpstreamServiceError("Invalid or empty sentiment response.")

    try:
        candidates = [
            SentimentResult(label=item["label"], score=float(item["score"]))
            for item in raw
        ]
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamServiceError("Malformed sentiment entry in response.") from exc
    if not all(isinstance(c.label, str) and c.label for c in candidates):
        raise UpstreamServiceError("Malformed sentiment label in response.")

    # max() keeps the first of equal scores
    return max(candidates, key=lambda r: r.score)


def classify_sentiment(
    text: str, credential: Optional[str], *, model: str = config.SENTIMENT_MODEL
) -> SentimentResult:
    """Classify *text* as positive/neutral/negative.

    Parameters
    ----------
    text
        The text to classify.
    credential
        API key for the hosted model.
    model
        Model id (default: ``VOICE_JOURNAL_SENTIMENT_MODEL``).
    """

    raw = text_classification(text, credential, model=model)
    result = _process_sentiment(raw)
    _logger.debug("Sentiment %s (%.3f)", result.label, result.score)
    return result

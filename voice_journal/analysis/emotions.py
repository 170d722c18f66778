"""Emotion classification via a hosted go_emotions model.

The model returns one ``{label, score}`` pair per emotion, sometimes wrapped
in an extra list per input. :func:`classify_emotions` flattens that, rounds
scores to three decimals, sorts by descending score and keeps the
*significant* subset alongside the raw payload.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from voice_journal import config
from voice_journal.exceptions import UpstreamServiceError
from voice_journal.inference import text_classification

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmotionScore:
    """A single emotion label with its score.

    ``score`` is ``None`` only for emotions received from a client that
    could not supply one; classifier output always carries a score.
    """

    emotion: str
    score: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return {"emotion": self.emotion, "score": self.score}


@dataclass(frozen=True)
class EmotionAnalysis:
    """Classifier output: significant emotions plus the untouched payload."""

    significant: List[EmotionScore]
    raw: Any = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "significantEmotions": [e.to_dict() for e in self.significant],
            "rawEmotions": self.raw,
        }


def _flatten(raw: Sequence[Any]) -> List[Any]:
    items: List[Any] = []
    for entry in raw:
        if isinstance(entry, list):
            items.extend(entry)
        else:
            items.append(entry)
    return items


def _process_emotions(raw: Any) -> List[EmotionScore]:
    """Normalise the model's raw output into a sorted ``EmotionScore`` list."""

    if not isinstance(raw, list) or not raw:
        raise UpstreamServiceError("Invalid or empty emotion data in response.")

    emotions: List[EmotionScore] = []
    for item in _flatten(raw):
        try:
            label = item["label"]
            score = float(item["score"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamServiceError(f"Malformed emotion entry: {item!r}") from exc
        if not isinstance(label, str) or not label:
            raise UpstreamServiceError(f"Malformed emotion label: {item!r}")
        emotions.append(EmotionScore(emotion=label, score=round(score, 3)))

    if not emotions:
        raise UpstreamServiceError("No valid emotions found in processed data.")

    # sorted() is stable, so equal scores keep the model's order
    return sorted(emotions, key=lambda e: e.score, reverse=True)


def significant_emotions(
    emotions: Sequence[EmotionScore],
    *,
    threshold: float = config.SIGNIFICANT_EMOTION_THRESHOLD,
) -> List[EmotionScore]:
    """Return the emotions scoring at or above *threshold*, order preserved."""
    return [e for e in emotions if e.score is not None and e.score >= threshold]


def classify_emotions(
    text: str, credential: Optional[str], *, model: str = config.EMOTION_MODEL
) -> EmotionAnalysis:
    """Classify the emotions expressed in *text*.

    Raises
    ------
    MissingCredentialError
        If *credential* is empty; no request is sent.
    UpstreamServiceError
        If the call fails or the response is empty or malformed.
    """

    raw = text_classification(text, credential, model=model)
    emotions = _process_emotions(raw)
    significant = significant_emotions(emotions)
    _logger.debug(
        "Classified %d emotions (%d significant)", len(emotions), len(significant)
    )
    return EmotionAnalysis(significant=significant, raw=raw)


def parse_emotion_list(formatted: str) -> List[EmotionScore]:
    """Parse the client's ``"joy 0.90, sadness 0.20"`` summary string.

    Entries whose score is missing or not numeric keep ``score=None``.
    """

    emotions: List[EmotionScore] = []
    for pair in formatted.split(","):
        parts = pair.split()
        if not parts:
            continue
        score: Optional[float]
        try:
            score = float(parts[1]) if len(parts) > 1 else None
        except ValueError:
            score = None
        emotions.append(EmotionScore(emotion=parts[0], score=score))
    return emotions

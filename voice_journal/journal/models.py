"""Data structures for journal entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from voice_journal.analysis.emotions import EmotionScore
from voice_journal.analysis.sentiment import SentimentResult


def _parse_date(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        parsed = raw
    else:
        # JavaScript's toISOString() ends with "Z"
        parsed = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_sentiment(raw: Any) -> Optional[SentimentResult]:
    if not raw:
        return None
    if isinstance(raw, str):
        return SentimentResult.from_formatted(raw)
    score = raw.get("score")
    return SentimentResult(
        label=raw.get("sentiment") or raw.get("label") or "",
        score=float(score) if isinstance(score, (int, float)) else None,
    )


@dataclass(slots=True)
class JournalEntry:
    """One analysed recording, in the shape the browser keeps in local storage."""

    transcription: str
    date: datetime
    emotions: List[EmotionScore] = field(default_factory=list)
    sentiment: Optional[SentimentResult] = None
    feedback: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transcription": self.transcription,
            "emotions": [e.to_dict() for e in self.emotions],
            "sentiment": self.sentiment.to_dict() if self.sentiment else None,
            "feedback": self.feedback,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JournalEntry":
        """Build an entry from a stored client record.

        Raises ValueError when the date is missing or unparseable.
        """

        if not data.get("date"):
            raise ValueError("Journal entry is missing its date")

        emotions = []
        for item in data.get("emotions") or []:
            score = item.get("score")
            emotions.append(
                EmotionScore(
                    emotion=item.get("emotion", ""),
                    score=float(score) if isinstance(score, (int, float)) else None,
                )
            )

        return cls(
            transcription=data.get("transcription") or "",
            date=_parse_date(data["date"]),
            emotions=emotions,
            sentiment=_parse_sentiment(data.get("sentiment")),
            feedback=data.get("feedback") or "",
        )

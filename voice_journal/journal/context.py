"""Context dataclasses for rendering the journal history.

`JournalContext` holds every value the template at
`voice_journal/journal/templates/journal.html.j2` expects. Building the
context is kept apart from rendering so display rules (emoji, colours,
score formatting) can be unit-tested without touching template strings.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from voice_journal.analysis.emotions import EmotionScore
from voice_journal.analysis.sentiment import SentimentLabel, SentimentResult
from voice_journal.journal.aggregator import group_entries_by_date
from voice_journal.journal.models import JournalEntry

__all__ = [
    "EMOTION_EMOJI",
    "EmotionView",
    "EntryView",
    "DayGroup",
    "JournalContext",
    "build_journal_context",
]

# Labels of the go_emotions model
EMOTION_EMOJI: Dict[str, str] = {
    "admiration": "😊",
    "amusement": "😆",
    "anger": "😠",
    "annoyance": "😒",
    "approval": "👍",
    "caring": "❤️",
    "confusion": "😕",
    "curiosity": "🤔",
    "desire": "😍",
    "disappointment": "😞",
    "disapproval": "👎",
    "disgust": "🤢",
    "embarrassment": "😳",
    "excitement": "🎉",
    "fear": "😨",
    "gratitude": "🙏",
    "grief": "😢",
    "joy": "😀",
    "love": "🥰",
    "nervousness": "😬",
    "optimism": "😌",
    "pride": "🦁",
    "realization": "💡",
    "relief": "😌",
    "remorse": "😔",
    "sadness": "😢",
    "surprise": "😮",
    "neutral": "🫥",
}
UNKNOWN_EMOJI = "❓"

_BORDER_COLOURS = {
    SentimentLabel.POSITIVE.value: "green",
    SentimentLabel.NEGATIVE.value: "red",
}
_DEFAULT_BORDER = "gray"


@dataclass(slots=True)
class EmotionView:
    emoji: str
    emotion: str
    score: str


@dataclass(slots=True)
class EntryView:
    time: str  # HH:MM
    transcription: str
    sentiment: str
    border_color: str
    emotions: List[EmotionView] = field(default_factory=list)
    feedback: str = ""


@dataclass(slots=True)
class DayGroup:
    date: str  # ISO-8601 date string
    entries: List[EntryView] = field(default_factory=list)


@dataclass(slots=True)
class JournalContext:
    """Container with all fields used by the journal template."""

    days: List[DayGroup] = field(default_factory=list)
    total_entries: int = 0

    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a *plain* ``dict`` (recursively) for Jinja rendering."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Local helper functions
# ---------------------------------------------------------------------------
def _emotion_view(emotion: EmotionScore) -> EmotionView:
    score = "N/A" if emotion.score is None else f"{emotion.score:.2f}"
    return EmotionView(
        emoji=EMOTION_EMOJI.get(emotion.emotion, UNKNOWN_EMOJI),
        emotion=emotion.emotion,
        score=score,
    )


def _sentiment_text(sentiment: Optional[SentimentResult]) -> str:
    if sentiment is None or not sentiment.label:
        return "N/A"
    return sentiment.label


def _entry_view(entry: JournalEntry) -> EntryView:
    sentiment = _sentiment_text(entry.sentiment)
    return EntryView(
        time=entry.date.strftime("%H:%M"),
        transcription=entry.transcription,
        sentiment=sentiment,
        border_color=_BORDER_COLOURS.get(sentiment, _DEFAULT_BORDER),
        emotions=[_emotion_view(e) for e in entry.emotions],
        feedback=entry.feedback,
    )


# ---------------------------------------------------------------------------
# Conversion helper
# ---------------------------------------------------------------------------
def build_journal_context(entries: Iterable[JournalEntry]) -> JournalContext:
    """Convert journal entries into a :class:`JournalContext`.

    The function is *pure*; it does not mutate *entries*.
    """

    grouped = group_entries_by_date(entries)
    days = [
        DayGroup(date=day.isoformat(), entries=[_entry_view(e) for e in day_entries])
        for day, day_entries in grouped.items()
    ]
    return JournalContext(
        days=days,
        total_entries=sum(len(d.entries) for d in days),
    )

"""Static insight dataset: a topic and redirection ideas per emotion."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Tuple

from voice_journal.analysis.emotions import EmotionScore
from voice_journal.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsightEntry:
    """Curated guidance attached to one emotion label."""

    topic: str
    redirection: Tuple[str, ...] = ()


class InsightStore:
    """Read-only mapping of emotion label to :class:`InsightEntry`.

    Built once at startup and shared by all requests; nothing mutates it
    afterwards.
    """

    def __init__(self, entries: Mapping[str, InsightEntry]) -> None:
        self._entries: Dict[str, InsightEntry] = dict(entries)

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "InsightStore":
        """Build a store from ``{emotion, topic, redirection}`` records.

        When a label appears more than once the first record wins. Raises
        ValueError when a topic is not a string or redirection is not a list
        of strings.
        """

        entries: Dict[str, InsightEntry] = {}
        for record in records:
            emotion = record["emotion"]
            if emotion in entries:
                continue
            topic = record.get("topic") or ""
            redirection = record.get("redirection") or []
            if not isinstance(topic, str):
                raise ValueError(f"topic for {emotion!r} must be a string")
            if not isinstance(redirection, list) or not all(
                isinstance(r, str) for r in redirection
            ):
                raise ValueError(f"redirection for {emotion!r} must be a list of strings")
            entries[emotion] = InsightEntry(topic=topic, redirection=tuple(redirection))
        return cls(entries)

    @classmethod
    def load(cls, path: Path) -> "InsightStore":
        """Load the dataset at *path*.

        Raises
        ------
        ConfigurationError
            If the file is missing, unreadable or not a list of records.
        """

        try:
            records = json.loads(Path(path).read_text(encoding="utf-8"))
            if not isinstance(records, list):
                raise ValueError("expected a JSON array of records")
            store = cls.from_records(records)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            raise ConfigurationError(f"Failed to load insights from {path}: {exc}") from exc

        logger.info("Loaded %d insight entries from %s", len(store), path)
        return store

    def lookup(self, emotions: Iterable[EmotionScore]) -> Dict[str, InsightEntry]:
        """Return the insights for *emotions*; labels without one are omitted."""

        matched: Dict[str, InsightEntry] = {}
        for emotion in emotions:
            entry = self._entries.get(emotion.emotion)
            if entry is None:
                logger.debug("No insight found for %s", emotion.emotion)
                continue
            matched[emotion.emotion] = entry
        return matched

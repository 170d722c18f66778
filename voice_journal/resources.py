"""Static resources loaded once at startup and shared read-only by requests."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from voice_journal import config
from voice_journal.analysis.feedback import load_default_prompt
from voice_journal.analysis.insights import InsightStore
from voice_journal.analysis.samples import load_sample_texts
from voice_journal.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resources:
    """Prompt, insight dataset and sample texts.

    A resource that failed to load is ``None`` and its error is kept in
    ``errors``; the ``require_*`` accessors raise :class:`ConfigurationError`
    for it so dependent endpoints refuse to serve.
    """

    default_prompt: Optional[str] = None
    insights: Optional[InsightStore] = None
    sample_texts: Optional[Tuple[str, ...]] = None
    errors: Dict[str, str] = field(default_factory=dict)

    def _unavailable(self, name: str) -> ConfigurationError:
        reason = self.errors.get(name, "not loaded")
        return ConfigurationError(f"{name} unavailable: {reason}")

    def require_prompt(self) -> str:
        if self.default_prompt is None:
            raise self._unavailable("default_prompt")
        return self.default_prompt

    def require_insights(self) -> InsightStore:
        if self.insights is None:
            raise self._unavailable("insights")
        return self.insights

    def require_sample_texts(self) -> Tuple[str, ...]:
        if self.sample_texts is None:
            raise self._unavailable("sample_texts")
        return self.sample_texts


def load_resources(
    prompt_path: Path = config.PROMPT_PATH,
    insights_path: Path = config.INSIGHTS_PATH,
    texts_path: Path = config.TEXTS_PATH,
) -> Resources:
    """Load every static resource, recording (not raising) individual failures."""

    errors: Dict[str, str] = {}

    default_prompt: Optional[str] = None
    try:
        default_prompt = load_default_prompt(prompt_path)
    except ConfigurationError as exc:
        logger.error("Default prompt unavailable: %s", exc)
        errors["default_prompt"] = str(exc)

    insights: Optional[InsightStore] = None
    try:
        insights = InsightStore.load(insights_path)
    except ConfigurationError as exc:
        logger.error("Insight dataset unavailable: %s", exc)
        errors["insights"] = str(exc)

    sample_texts: Optional[Tuple[str, ...]] = None
    try:
        sample_texts = tuple(load_sample_texts(texts_path))
    except ConfigurationError as exc:
        logger.error("Sample texts unavailable: %s", exc)
        errors["sample_texts"] = str(exc)

    return Resources(
        default_prompt=default_prompt,
        insights=insights,
        sample_texts=sample_texts,
        errors=errors,
    )

"""Generate reflective feedback on a journal entry.

The system message is built by merging the detected sentiment, the
significant emotions and their curated insights into a fixed template, then
sent together with the raw transcript to the generative model.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from voice_journal import config
from voice_journal.analysis.emotions import EmotionScore
from voice_journal.analysis.insights import InsightEntry
from voice_journal.analysis.sentiment import SentimentResult
from voice_journal.analysis.template import PromptTemplate
from voice_journal.exceptions import ConfigurationError, UpstreamServiceError
from voice_journal.openai_client import chat_completion

_logger = logging.getLogger(__name__)

NO_SCORE = "N/A"
NO_TOPIC = "Unknown"

FEEDBACK_TEMPLATE = PromptTemplate(
    """
$prompt

User's input detected sentiment: $sentimentLabel.

(Background insights for reference, use only if relevant)
{foreach emotion}
- $emotion ($score) [Topic: $topic]
  Possible redirections:
{foreach redirection}
  → $redirection
{/foreach redirection}
{/foreach emotion}
"""
)


def load_default_prompt(path: Path = config.PROMPT_PATH) -> str:
    """Read the default system prompt.

    Raises
    ------
    ConfigurationError
        If the file cannot be read or is empty.
    """

    try:
        content = Path(path).read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigurationError(f"Failed to load default prompt from {path}") from exc
    if not content:
        raise ConfigurationError(f"Default prompt at {path} is empty")
    return content


@dataclass(frozen=True)
class EmotionItem:
    """One emotion block of the feedback template."""

    emotion: str
    score: Optional[float]
    topic: str = NO_TOPIC
    redirection: Tuple[str, ...] = ()

    def to_scope(self) -> Dict[str, Any]:
        return {
            "emotion": self.emotion,
            "score": NO_SCORE if self.score is None else self.score,
            "topic": self.topic,
            "redirection": list(self.redirection),
        }


@dataclass(frozen=True)
class PromptContext:
    """Everything the feedback template needs for one request."""

    prompt: str
    sentiment_label: str
    emotion_items: List[EmotionItem] = field(default_factory=list)

    def to_scope(self) -> Dict[str, Any]:
        return {
            "prompt": self.prompt,
            "sentimentLabel": self.sentiment_label,
            "emotion": [item.to_scope() for item in self.emotion_items],
        }


def build_prompt_context(
    prompt: str,
    sentiment: Optional[SentimentResult],
    emotions: Sequence[EmotionScore],
    insights: Mapping[str, InsightEntry],
) -> PromptContext:
    """Merge classifier output and insights into a :class:`PromptContext`.

    Emotions keep their given order; repeated labels keep the first entry.
    An emotion without an insight gets topic ``Unknown`` and no
    redirections; a missing score renders as ``N/A``.
    """

    items: List[EmotionItem] = []
    seen = set()
    for emo in emotions:
        if emo.emotion in seen:
            continue
        seen.add(emo.emotion)

        insight = insights.get(emo.emotion)
        items.append(
            EmotionItem(
                emotion=emo.emotion,
                score=emo.score,
                topic=(insight.topic if insight else "") or NO_TOPIC,
                redirection=insight.redirection if insight else (),
            )
        )

    return PromptContext(
        prompt=prompt,
        sentiment_label=sentiment.label if sentiment else NO_SCORE,
        emotion_items=items,
    )


def build_messages(system_content: str, transcript: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": system_content},
        {"role": "user", "content": transcript},
    ]


def generate_feedback(
    transcript: str,
    sentiment: Optional[SentimentResult],
    emotions: Sequence[EmotionScore],
    insights: Mapping[str, InsightEntry],
    custom_prompt: Optional[str],
    credential: Optional[str],
    *,
    default_prompt: str,
    model: str = config.FEEDBACK_MODEL,
    max_tokens: int = config.FEEDBACK_MAX_TOKENS,
) -> str:
    """Generate feedback text for *transcript*.

    *custom_prompt* replaces *default_prompt* when non-empty. Deciding
    whether a client's prompt is really an override (e.g. it equals the
    default) is the caller's job.

    Raises ValueError for an empty *transcript*; callers must check first.
    Any failure while generating propagates; partial text is never returned.
    """

    if not transcript or not transcript.strip():
        raise ValueError("generate_feedback requires a non-empty transcript")

    system_prompt = custom_prompt if custom_prompt and custom_prompt.strip() else default_prompt

    context = build_prompt_context(system_prompt, sentiment, emotions, insights)
    filled = FEEDBACK_TEMPLATE.expand(context.to_scope()).strip()
    messages = build_messages(filled, transcript)
    _logger.debug("Feedback system prompt:\n%s", filled)

    resp = chat_completion(
        messages, credential=credential, model=model, max_tokens=max_tokens
    )
    try:
        content = resp["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise UpstreamServiceError("Model response missing expected fields") from exc
    if not isinstance(content, str):
        raise UpstreamServiceError("Model response content was empty")

    feedback = content.strip()
    _logger.info(
        "Generated feedback (%d chars, %d emotions)", len(feedback), len(context.emotion_items)
    )
    return feedback

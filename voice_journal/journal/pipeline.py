"""Run the whole analysis chain for one transcript.

Emotions, sentiment, insights and feedback are produced strictly in that
order because each step consumes the output of the ones before it. The
first failure propagates; no entry is built from partial results.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from voice_journal.analysis.emotions import classify_emotions
from voice_journal.analysis.feedback import generate_feedback
from voice_journal.analysis.sentiment import classify_sentiment
from voice_journal.exceptions import InvalidRequestError
from voice_journal.journal.models import JournalEntry
from voice_journal.openai_client import ensure_credential_present
from voice_journal.resources import Resources

logger = logging.getLogger(__name__)


def analyze_entry(
    transcript: str,
    credential: Optional[str],
    resources: Resources,
    *,
    custom_prompt: Optional[str] = None,
    now: Optional[datetime] = None,
) -> JournalEntry:
    """Analyse *transcript* and return the journal entry to store."""

    if not transcript or not transcript.strip():
        raise InvalidRequestError("No transcription text provided.")
    ensure_credential_present(credential)

    # Resolve configuration up front so a missing resource fails before any call
    default_prompt = resources.require_prompt()
    insight_store = resources.require_insights()

    emotions = classify_emotions(transcript, credential)
    sentiment = classify_sentiment(transcript, credential)
    insights = insight_store.lookup(emotions.significant)
    feedback = generate_feedback(
        transcript,
        sentiment,
        emotions.significant,
        insights,
        custom_prompt,
        credential,
        default_prompt=default_prompt,
    )

    logger.info(
        "Journal entry analysed: emotions=%d sentiment=%s insights=%d",
        len(emotions.significant),
        sentiment.label,
        len(insights),
    )
    return JournalEntry(
        transcription=transcript,
        date=now or datetime.now(tz=timezone.utc),
        emotions=list(emotions.significant),
        sentiment=sentiment,
        feedback=feedback,
    )

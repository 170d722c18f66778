"""Request and response bodies for the HTTP API."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from voice_journal.analysis.emotions import EmotionScore, parse_emotion_list
from voice_journal.analysis.sentiment import SentimentResult


# -------------------------
# Shared pieces
# -------------------------
class EmotionPayload(BaseModel):
    emotion: str
    score: Optional[float] = None


class SentimentPayload(BaseModel):
    sentiment: str
    score: Optional[float] = None


# -------------------------
# Analysis steps
# -------------------------
class TranscriptionRequest(BaseModel):
    # Optional so a missing value is answered with our own 400 message
    transcription: Optional[str] = None


class TranscribeResponse(BaseModel):
    transcription: str
    fileSize: str
    fileType: str


class AnalyzeResponse(BaseModel):
    emotions: Dict[str, Any]


class SentimentResponse(BaseModel):
    sentiment: SentimentPayload


class FeedbackRequest(BaseModel):
    """Body of ``POST /api/feedback``.

    ``sentiment`` and ``emotions`` accept either structured values or the
    browser client's summary strings (``"positive 0.95"``,
    ``"joy 0.90, sadness 0.20"``).
    """

    model_config = ConfigDict(populate_by_name=True)

    transcription: Optional[str] = None
    sentiment: Union[SentimentPayload, str, None] = None
    emotions: Union[List[EmotionPayload], str, None] = None
    custom_prompt: Optional[str] = Field(default=None, alias="customPrompt")

    def sentiment_result(self) -> Optional[SentimentResult]:
        if isinstance(self.sentiment, str):
            if not self.sentiment.strip():
                return None
            return SentimentResult.from_formatted(self.sentiment)
        if self.sentiment is None:
            return None
        return SentimentResult(label=self.sentiment.sentiment, score=self.sentiment.score)

    def emotion_scores(self) -> List[EmotionScore]:
        if not self.emotions:
            return []
        if isinstance(self.emotions, str):
            return parse_emotion_list(self.emotions)
        return [EmotionScore(emotion=e.emotion, score=e.score) for e in self.emotions]


class FeedbackResponse(BaseModel):
    feedback: str


class PromptResponse(BaseModel):
    prompt: str


class TextResponse(BaseModel):
    text: str


# -------------------------
# Journal
# -------------------------
class JournalEntryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transcription: Optional[str] = None
    custom_prompt: Optional[str] = Field(default=None, alias="customPrompt")


class JournalEntryResponse(BaseModel):
    entry: Dict[str, Any]


class JournalRenderRequest(BaseModel):
    entries: List[Dict[str, Any]] = Field(default_factory=list)


class JournalRenderResponse(BaseModel):
    html: str

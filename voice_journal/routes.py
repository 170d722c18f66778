"""HTTP routes.

Every route validates its input and the ``huggingfacekey`` header before any
remote call. Errors are raised as :mod:`voice_journal.exceptions` types and
turned into responses by the handlers registered in :mod:`voice_journal.app`.

Route functions are plain ``def`` so FastAPI runs them on its thread pool;
the blocking model calls never stall the event loop.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Header, Request, UploadFile

from voice_journal.analysis.emotions import classify_emotions
from voice_journal.analysis.feedback import generate_feedback
from voice_journal.analysis.samples import pick_sample
from voice_journal.analysis.sentiment import classify_sentiment
from voice_journal.analysis.transcription import transcribe_audio
from voice_journal.exceptions import InvalidRequestError, MissingCredentialError
from voice_journal.journal.models import JournalEntry
from voice_journal.journal.pipeline import analyze_entry
from voice_journal.journal.render import render_journal
from voice_journal.resources import Resources
from voice_journal.schemas import (
    AnalyzeResponse,
    FeedbackRequest,
    FeedbackResponse,
    JournalEntryRequest,
    JournalEntryResponse,
    JournalRenderRequest,
    JournalRenderResponse,
    PromptResponse,
    SentimentResponse,
    TextResponse,
    TranscribeResponse,
    TranscriptionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["voice-journal"])


def get_resources(request: Request) -> Resources:
    return request.app.state.resources


def _require_transcription(transcription: Optional[str]) -> str:
    if not transcription or not transcription.strip():
        raise InvalidRequestError("No transcription text provided.")
    return transcription


def _require_credential(credential: Optional[str]) -> str:
    if not credential or not credential.strip():
        raise MissingCredentialError()
    return credential


@router.get("/health")
def health() -> dict:
    return {"status": "OK"}


@router.get("/prompt", response_model=PromptResponse)
def get_prompt(resources: Resources = Depends(get_resources)) -> PromptResponse:
    """Return the default feedback prompt so the client can offer it for editing."""
    return PromptResponse(prompt=resources.require_prompt())


@router.get("/random-text", response_model=TextResponse)
def random_text(resources: Resources = Depends(get_resources)) -> TextResponse:
    text = pick_sample(resources.require_sample_texts())
    logger.debug("Serving sample text: %s", text)
    return TextResponse(text=text)


@router.post("/transcribe", response_model=TranscribeResponse)
def transcribe(
    file: Optional[UploadFile] = File(default=None),
    huggingfacekey: Optional[str] = Header(default=None),
) -> TranscribeResponse:
    if file is None or not file.filename:
        raise InvalidRequestError("No file uploaded.")
    credential = _require_credential(huggingfacekey)

    audio = file.file.read()
    result = transcribe_audio(audio, file.content_type, credential)
    return TranscribeResponse(**result.to_dict())


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(
    req: TranscriptionRequest,
    huggingfacekey: Optional[str] = Header(default=None),
) -> AnalyzeResponse:
    transcription = _require_transcription(req.transcription)
    credential = _require_credential(huggingfacekey)

    analysis = classify_emotions(transcription, credential)
    return AnalyzeResponse(emotions=analysis.to_dict())


@router.post("/sentiment", response_model=SentimentResponse)
def sentiment(
    req: TranscriptionRequest,
    huggingfacekey: Optional[str] = Header(default=None),
) -> SentimentResponse:
    transcription = _require_transcription(req.transcription)
    credential = _require_credential(huggingfacekey)

    result = classify_sentiment(transcription, credential)
    return SentimentResponse(sentiment=result.to_dict())


@router.post("/feedback", response_model=FeedbackResponse)
def feedback(
    req: FeedbackRequest,
    huggingfacekey: Optional[str] = Header(default=None),
    resources: Resources = Depends(get_resources),
) -> FeedbackResponse:
    transcription = _require_transcription(req.transcription)
    credential = _require_credential(huggingfacekey)

    default_prompt = resources.require_prompt()
    emotions = req.emotion_scores()
    insights = resources.require_insights().lookup(emotions)
    logger.info(
        "Feedback requested: emotions=%d insights=%d custom_prompt=%s",
        len(emotions),
        len(insights),
        bool(req.custom_prompt),
    )

    text = generate_feedback(
        transcription,
        req.sentiment_result(),
        emotions,
        insights,
        req.custom_prompt,
        credential,
        default_prompt=default_prompt,
    )
    return FeedbackResponse(feedback=text)


@router.post("/journal/entry", response_model=JournalEntryResponse)
def journal_entry(
    req: JournalEntryRequest,
    huggingfacekey: Optional[str] = Header(default=None),
    resources: Resources = Depends(get_resources),
) -> JournalEntryResponse:
    """Run the full analysis chain and return the record the client stores."""

    transcription = _require_transcription(req.transcription)
    credential = _require_credential(huggingfacekey)

    entry = analyze_entry(
        transcription, credential, resources, custom_prompt=req.custom_prompt
    )
    return JournalEntryResponse(entry=entry.to_dict())


@router.post("/journal/render", response_model=JournalRenderResponse)
def journal_render(req: JournalRenderRequest) -> JournalRenderResponse:
    try:
        entries = [JournalEntry.from_dict(raw) for raw in req.entries]
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidRequestError(f"Invalid journal entry: {exc}") from exc
    return JournalRenderResponse(html=render_journal(entries))

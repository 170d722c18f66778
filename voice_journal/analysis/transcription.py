"""Speech-to-text via a hosted Whisper model."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from voice_journal import config
from voice_journal.exceptions import InvalidRequestError, UpstreamServiceError
from voice_journal.inference import automatic_speech_recognition

logger = logging.getLogger(__name__)


def _format_kb(size_bytes: int) -> str:
    """Kilobytes without a trailing ``.0`` for whole numbers (``2``, ``0.5``)."""
    kb = size_bytes / 1024
    return str(int(kb)) if kb.is_integer() else repr(kb)


@dataclass(frozen=True)
class Transcription:
    text: str
    size_bytes: int
    content_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transcription": self.text,
            "fileSize": f"{_format_kb(self.size_bytes)} KB",
            "fileType": self.content_type,
        }


def transcribe_audio(
    audio: bytes,
    content_type: Optional[str],
    credential: Optional[str],
    *,
    model: str = config.TRANSCRIPTION_MODEL,
) -> Transcription:
    """Transcribe an uploaded recording held in memory."""

    if not audio:
        raise InvalidRequestError("No file uploaded.")

    content_type = content_type or "application/octet-stream"
    payload = automatic_speech_recognition(
        audio, credential, model=model, content_type=content_type
    )
    text = payload.get("text")
    if not isinstance(text, str):
        raise UpstreamServiceError("Transcription response lacked text")

    logger.info("Transcribed %d bytes of %s", len(audio), content_type)
    return Transcription(text=text.strip(), size_bytes=len(audio), content_type=content_type)

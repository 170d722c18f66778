"""Unit tests for audio transcription."""
from __future__ import annotations

import pytest

from voice_journal.analysis import transcription as tr
from voice_journal.exceptions import (
    InvalidRequestError,
    MissingCredentialError,
    UpstreamServiceError,
)


def test_transcribe_returns_text_and_metadata(monkeypatch):
    calls = []

    def _fake(audio, credential, *, model, content_type):
        calls.append((audio, credential, model, content_type))
        return {"text": "  Today was a good day. "}

    monkeypatch.setattr(tr, "automatic_speech_recognition", _fake)

    result = tr.transcribe_audio(b"x" * 2048, "audio/webm", "hf-key")

    assert result.text == "Today was a good day."
    assert result.to_dict() == {
        "transcription": "Today was a good day.",
        "fileSize": "2 KB",
        "fileType": "audio/webm",
    }
    assert calls == [(b"x" * 2048, "hf-key", tr.config.TRANSCRIPTION_MODEL, "audio/webm")]


def test_missing_content_type_defaults(monkeypatch):
    monkeypatch.setattr(tr, "automatic_speech_recognition", lambda *a, **k: {"text": "hi"})

    assert tr.transcribe_audio(b"abc", None, "k").content_type == "application/octet-stream"


def test_empty_upload_is_rejected(monkeypatch):
    monkeypatch.setattr(
        tr, "automatic_speech_recognition", lambda *a, **k: pytest.fail("no call expected")
    )

    with pytest.raises(InvalidRequestError, match="No file uploaded."):
        tr.transcribe_audio(b"", "audio/webm", "k")


def test_response_without_text(monkeypatch):
    monkeypatch.setattr(tr, "automatic_speech_recognition", lambda *a, **k: {"error": "busy"})

    with pytest.raises(UpstreamServiceError):
        tr.transcribe_audio(b"abc", "audio/wav", "k")


def test_missing_credential_sends_nothing(monkeypatch):
    monkeypatch.setattr(
        "voice_journal.inference._http_client", lambda: pytest.fail("no request expected")
    )

    with pytest.raises(MissingCredentialError):
        tr.transcribe_audio(b"abc", "audio/wav", None)


@pytest.mark.parametrize(
    "size, expected", [(1024, "1 KB"), (1536, "1.5 KB"), (512, "0.5 KB"), (100, "0.09765625 KB")]
)
def test_file_size_formatting(size, expected):
    result = tr.Transcription(text="t", size_bytes=size, content_type="audio/wav")
    assert result.to_dict()["fileSize"] == expected

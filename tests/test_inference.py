"""Tests for the hosted inference HTTP helpers."""
from __future__ import annotations

import json

import httpx
import pytest

from voice_journal import inference
from voice_journal.exceptions import (
    MissingCredentialError,
    UpstreamServiceError,
    UpstreamTimeoutError,
)


class _Recorder:
    """MockTransport handler that records requests and replays a response."""

    def __init__(self, response=None, exc=None):
        self.requests: list[httpx.Request] = []
        self._response = response
        self._exc = exc

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._exc is not None:
            raise self._exc
        return self._response


@pytest.fixture()
def transport(monkeypatch):
    def _install(handler):
        monkeypatch.setattr(
            inference,
            "_http_client",
            lambda: httpx.Client(transport=httpx.MockTransport(handler)),
        )
        return handler

    return _install


def test_text_classification_request_shape(transport):
    handler = transport(
        _Recorder(httpx.Response(200, json=[[{"label": "joy", "score": 0.9}]]))
    )

    result = inference.text_classification("I am thrilled", "hf-key", model="org/model")

    assert result == [[{"label": "joy", "score": 0.9}]]
    request = handler.requests[0]
    assert request.method == "POST"
    assert str(request.url).endswith("/org/model")
    assert request.headers["Authorization"] == "Bearer hf-key"
    assert json.loads(request.content) == {"inputs": "I am thrilled"}


def test_missing_credential_sends_nothing(transport):
    handler = transport(_Recorder(httpx.Response(200, json=[])))

    with pytest.raises(MissingCredentialError):
        inference.text_classification("hello", None, model="org/model")
    assert handler.requests == []


def test_timeout_is_translated(transport):
    transport(_Recorder(exc=httpx.ReadTimeout("too slow")))

    with pytest.raises(UpstreamTimeoutError):
        inference.text_classification("hello", "k", model="org/model")


def test_http_error_status(transport):
    transport(_Recorder(httpx.Response(503, json={"error": "loading"})))

    with pytest.raises(UpstreamServiceError, match="HTTP 503"):
        inference.text_classification("hello", "k", model="org/model")


def test_non_json_body(transport):
    transport(_Recorder(httpx.Response(200, text="<html>oops</html>")))

    with pytest.raises(UpstreamServiceError):
        inference.text_classification("hello", "k", model="org/model")


def test_speech_recognition_sends_raw_audio(transport):
    handler = transport(_Recorder(httpx.Response(200, json={"text": "hi there"})))

    result = inference.automatic_speech_recognition(
        b"RIFF....", "k", model="openai/whisper-medium", content_type="audio/webm"
    )

    assert result == {"text": "hi there"}
    request = handler.requests[0]
    assert request.content == b"RIFF...."
    assert request.headers["Content-Type"] == "audio/webm"


def test_speech_recognition_rejects_non_object(transport):
    transport(_Recorder(httpx.Response(200, json=["unexpected"])))

    with pytest.raises(UpstreamServiceError):
        inference.automatic_speech_recognition(b"x", "k", model="m")

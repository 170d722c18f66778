"""HTTP helpers for the hosted task endpoints (text classification, speech).

Every call authenticates with the caller's API key and carries an explicit
timeout. Failures are translated into :mod:`voice_journal.exceptions` types so
route handlers only need to know about those.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from voice_journal import config
from voice_journal.exceptions import UpstreamServiceError, UpstreamTimeoutError
from voice_journal.openai_client import ensure_credential_present

logger = logging.getLogger(__name__)


def _timeout() -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.HTTP_CONNECT_TIMEOUT,
        read=config.HTTP_READ_TIMEOUT,
        write=config.HTTP_READ_TIMEOUT,
        pool=config.HTTP_CONNECT_TIMEOUT,
    )


def _http_client() -> httpx.Client:
    """Return a fresh ``httpx.Client``; tests swap this for a mock transport."""
    return httpx.Client(timeout=_timeout())


def _model_url(model: str) -> str:
    return f"{config.INFERENCE_BASE_URL.rstrip('/')}/{model}"


def _post(
    model: str,
    credential: Optional[str],
    *,
    headers: Optional[Dict[str, str]] = None,
    **request_kwargs: Any,
) -> Any:
    """POST to *model*'s endpoint and return the decoded JSON body."""

    api_key = ensure_credential_present(credential)
    all_headers = {"Authorization": f"Bearer {api_key}"}
    all_headers.update(headers or {})

    url = _model_url(model)
    logger.debug("Calling hosted model %s", model)
    try:
        with _http_client() as client:
            response = client.post(url, headers=all_headers, **request_kwargs)
            response.raise_for_status()
    except httpx.TimeoutException as exc:
        raise UpstreamTimeoutError(f"Request to {model} timed out") from exc
    except httpx.HTTPStatusError as exc:
        raise UpstreamServiceError(
            f"{model} returned HTTP {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise UpstreamServiceError(f"Request to {model} failed: {exc}") from exc

    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamServiceError(f"{model} returned a non-JSON response") from exc


def text_classification(text: str, credential: Optional[str], *, model: str) -> Any:
    """Run a text-classification model and return its raw JSON output."""
    return _post(model, credential, json={"inputs": text})


def automatic_speech_recognition(
    audio: bytes,
    credential: Optional[str],
    *,
    model: str,
    content_type: str = "application/octet-stream",
) -> Dict[str, Any]:
    """Send raw *audio* bytes to a speech-recognition model."""

    payload = _post(
        model,
        credential,
        headers={"Content-Type": content_type},
        content=audio,
    )
    if not isinstance(payload, dict):
        raise UpstreamServiceError(f"{model} returned an unexpected payload")
    return payload

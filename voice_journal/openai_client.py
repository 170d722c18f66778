"""Lightweight OpenAI client helper.

The generative feedback model is served through an OpenAI-compatible chat
completions endpoint, so the rest of the codebase can simply do:

    from voice_journal.openai_client import chat_completion

and pass the caller's API key along with the messages.
"""
from __future__ import annotations

import types
from typing import Any, Dict, List, Optional

import httpx

from voice_journal import config
from voice_journal.exceptions import (
    MissingCredentialError,
    UpstreamServiceError,
    UpstreamTimeoutError,
)

_DEFAULT_MODEL = config.FEEDBACK_MODEL


def _load_openai() -> types.ModuleType:
    """Import ``openai`` lazily.

    Loading is deferred so that unit tests can inject a stub into
    ``sys.modules`` before this function runs.
    """

    import importlib

    return importlib.import_module("openai")


def ensure_credential_present(credential: Optional[str]) -> str:
    """Return *credential* or raise.

    Raises
    ------
    MissingCredentialError
        If the key is missing or blank.
    """

    if not credential or not credential.strip():
        raise MissingCredentialError()
    return credential


def get_openai_client(credential: Optional[str]) -> Any:
    """Return an ``openai.OpenAI`` client bound to *credential*.

    A new client is built per call because every request carries its own
    key. Retries are disabled; retry policy belongs to the caller.
    """

    api_key = ensure_credential_present(credential)
    openai = _load_openai()
    return openai.OpenAI(
        api_key=api_key,
        base_url=config.CHAT_BASE_URL,
        timeout=httpx.Timeout(
            config.HTTP_READ_TIMEOUT, connect=config.HTTP_CONNECT_TIMEOUT
        ),
        max_retries=0,
    )


def chat_completion(
    messages: List[Dict[str, str]],
    *,
    credential: Optional[str],
    model: str = _DEFAULT_MODEL,
    **kwargs: Any,
) -> Dict[str, Any]:
    """Wrapper around ``client.chat.completions.create``.

    Parameters
    ----------
    messages
        Chat messages in OpenAI format.
    credential
        API key forwarded as the bearer token.
    model
        Model id to use (default: ``VOICE_JOURNAL_FEEDBACK_MODEL``).
    kwargs
        Additional parameters forwarded to ``chat.completions.create``.

    Returns a plain ``dict`` with at least
    ``{"choices": [{"message": {"content": ...}}]}`` so downstream code
    (including tests) does not depend on the SDK's response classes.
    """

    client = get_openai_client(credential)
    openai = _load_openai()

    try:
        completion = client.chat.completions.create(
            model=model, messages=messages, **kwargs
        )
    except openai.APITimeoutError as exc:
        raise UpstreamTimeoutError(f"Chat completion timed out ({model})") from exc
    except openai.OpenAIError as exc:
        raise UpstreamServiceError(f"Chat completion failed ({model}): {exc}") from exc

    choices = [
        {"message": {"content": choice.message.content}}
        for choice in completion.choices
    ]
    return {"choices": choices, "model": completion.model}

"""Unit tests for classify_emotions and its helpers."""
from __future__ import annotations

import pytest

from voice_journal.analysis import emotions as em
from voice_journal.analysis.emotions import EmotionScore
from voice_journal.exceptions import MissingCredentialError, UpstreamServiceError

_RAW = [
    [
        {"label": "neutral", "score": 0.1012},
        {"label": "joy", "score": 0.61234},
        {"label": "excitement", "score": 0.2},
        {"label": "admiration", "score": 0.15},
        {"label": "pride", "score": 0.1449},
    ]
]


@pytest.fixture()
def fake_model(monkeypatch):
    calls = []

    def _fake(text, credential, *, model):
        calls.append({"text": text, "credential": credential, "model": model})
        return _RAW

    monkeypatch.setattr(em, "text_classification", _fake)
    return calls


def test_classify_sorts_rounds_and_filters(fake_model):
    result = em.classify_emotions("I am thrilled", "hf-key")

    assert result.significant == [
        EmotionScore("joy", 0.612),
        EmotionScore("excitement", 0.2),
        EmotionScore("admiration", 0.15),
    ]
    assert result.raw is _RAW
    assert fake_model[0]["model"] == em.config.EMOTION_MODEL


def test_to_dict_shape(fake_model):
    payload = em.classify_emotions("I am thrilled", "hf-key").to_dict()

    assert set(payload) == {"significantEmotions", "rawEmotions"}
    assert payload["significantEmotions"][0] == {"emotion": "joy", "score": 0.612}


def test_flat_response_is_accepted(monkeypatch):
    monkeypatch.setattr(
        em,
        "text_classification",
        lambda *a, **k: [{"label": "fear", "score": 0.4}, {"label": "anger", "score": 0.5}],
    )

    result = em.classify_emotions("hmm", "k")
    assert [e.emotion for e in result.significant] == ["anger", "fear"]


def test_equal_scores_keep_model_order(monkeypatch):
    monkeypatch.setattr(
        em,
        "text_classification",
        lambda *a, **k: [[{"label": "a", "score": 0.3}, {"label": "b", "score": 0.3}]],
    )

    assert [e.emotion for e in em.classify_emotions("x", "k").significant] == ["a", "b"]


@pytest.mark.parametrize("raw", [[], None, {"error": "loading"}, [[]]])
def test_empty_or_invalid_response_raises(monkeypatch, raw):
    monkeypatch.setattr(em, "text_classification", lambda *a, **k: raw)

    with pytest.raises(UpstreamServiceError):
        em.classify_emotions("x", "k")


def test_malformed_entry_raises(monkeypatch):
    monkeypatch.setattr(em, "text_classification", lambda *a, **k: [{"name": "joy"}])

    with pytest.raises(UpstreamServiceError):
        em.classify_emotions("x", "k")


def test_no_scoring_emotion_is_significant(monkeypatch):
    monkeypatch.setattr(
        em, "text_classification", lambda *a, **k: [{"label": "neutral", "score": 0.05}]
    )

    assert em.classify_emotions("x", "k").significant == []


def test_missing_credential_fails_before_network(monkeypatch):
    def _no_network():  # pragma: no cover – must not be reached
        raise AssertionError("network should not be touched")

    monkeypatch.setattr("voice_journal.inference._http_client", _no_network)

    with pytest.raises(MissingCredentialError):
        em.classify_emotions("hello", "")


def test_significant_subset_preserves_order():
    emotions = [
        EmotionScore("joy", 0.9),
        EmotionScore("neutral", 0.1),
        EmotionScore("pride", 0.15),
        EmotionScore("grief", None),
    ]

    assert em.significant_emotions(emotions) == [emotions[0], emotions[2]]


def test_parse_emotion_list():
    parsed = em.parse_emotion_list("joy 0.90, sadness 0.20, pride abc, love")

    assert parsed == [
        EmotionScore("joy", 0.9),
        EmotionScore("sadness", 0.2),
        EmotionScore("pride", None),
        EmotionScore("love", None),
    ]
    assert em.parse_emotion_list("") == []


@pytest.mark.parametrize("label", [None, 3, ""])
def test_non_string_label_raises(monkeypatch, label):
    monkeypatch.setattr(
        em, "text_classification", lambda *a, **k: [{"label": label, "score": 0.9}]
    )

    with pytest.raises(UpstreamServiceError):
        em.classify_emotions("x", "k")

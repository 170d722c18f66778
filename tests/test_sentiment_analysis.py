"""Unit tests for classify_sentiment utility."""
from typing import Dict, List

import pytest

from voice_journal.analysis import sentiment as sa
from voice_journal.exceptions import UpstreamServiceError


class _StubModel:
    """Simple stub mimicking the hosted sentiment model."""

    def __init__(self):
        self.calls: List[Dict] = []

    def __call__(self, text, credential, *, model):
        self.calls.append({"text": text, "credential": credential, "model": model})
        if "great" in text:
            scores = {"positive": 0.93, "neutral": 0.05, "negative": 0.02}
        elif "meh" in text:
            scores = {"positive": 0.2, "neutral": 0.7, "negative": 0.1}
        else:
            scores = {"positive": 0.01, "neutral": 0.09, "negative": 0.9}
        return [[{"label": k, "score": v} for k, v in scores.items()]]


@pytest.fixture(autouse=True)
def stub_model(monkeypatch):
    stub = _StubModel()
    monkeypatch.setattr(sa, "text_classification", stub)
    yield stub


def test_positive(stub_model):
    res = sa.classify_sentiment("This day was great!", "hf-key")
    assert res.label == sa.SentimentLabel.POSITIVE
    assert res.score == pytest.approx(0.93)
    assert stub_model.calls[0]["model"] == sa.config.SENTIMENT_MODEL


def test_neutral():
    res = sa.classify_sentiment("It was meh.", "hf-key")
    assert res.label == sa.SentimentLabel.NEUTRAL


def test_negative():
    res = sa.classify_sentiment("Terrible experience", "hf-key")
    assert res.label == sa.SentimentLabel.NEGATIVE
    assert res.to_dict() == {"sentiment": "negative", "score": 0.9}


def test_max_score_with_tie_resolves_to_first(monkeypatch):
    monkeypatch.setattr(
        sa,
        "text_classification",
        lambda *a, **k: [
            {"label": "neutral", "score": 0.1},
            {"label": "negative", "score": 0.45},
            {"label": "positive", "score": 0.45},
        ],
    )

    res = sa.classify_sentiment("torn", "k")
    assert res.label == "negative"
    assert res.score == 0.45


def test_unknown_labels_pass_through(monkeypatch):
    monkeypatch.setattr(
        sa, "text_classification", lambda *a, **k: [{"label": "LABEL_2", "score": 0.8}]
    )

    assert sa.classify_sentiment("x", "k").label == "LABEL_2"


@pytest.mark.parametrize("raw", [[], None, "nope", [[]]])
def test_empty_response(monkeypatch, raw):
    monkeypatch.setattr(sa, "text_classification", lambda *a, **k: raw)

    with pytest.raises(UpstreamServiceError):
        sa.classify_sentiment("oops", "k")


def test_malformed_entry(monkeypatch):
    monkeypatch.setattr(sa, "text_classification", lambda *a, **k: [{"label": "positive"}])

    with pytest.raises(UpstreamServiceError):
        sa.classify_sentiment("oops", "k")


def test_from_formatted():
    assert sa.SentimentResult.from_formatted("positive 0.95") == sa.SentimentResult(
        "positive", 0.95
    )
    assert sa.SentimentResult.from_formatted("neutral").score is None
    assert sa.SentimentResult.from_formatted("negative NaNish").score is None
    with pytest.raises(ValueError):
        sa.SentimentResult.from_formatted("   ")


@pytest.mark.parametrize("label", [None, 1, ""])
def test_non_string_label(monkeypatch, label):
    monkeypatch.setattr(
        sa, "text_classification", lambda *a, **k: [{"label": label, "score": 0.9}]
    )

    with pytest.raises(UpstreamServiceError):
        sa.classify_sentiment("oops", "k")

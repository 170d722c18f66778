"""Bundled sample transcripts for trying the pipeline without a microphone."""
from __future__ import annotations

import json
import random
from pathlib import Path
from typing import List, Optional, Sequence

from voice_journal.exceptions import ConfigurationError


def load_sample_texts(path: Path) -> List[str]:
    """Load the JSON array of sample strings at *path*."""

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Failed to load sample texts from {path}") from exc

    if not isinstance(data, list) or not data or not all(isinstance(x, str) for x in data):
        raise ConfigurationError(f"Sample texts at {path} must be a non-empty string array")
    return data


def pick_sample(texts: Sequence[str], rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(texts)

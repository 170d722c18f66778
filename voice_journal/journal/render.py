"""Render journal history using Jinja2 templates."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader

from voice_journal.journal.context import build_journal_context
from voice_journal.journal.models import JournalEntry

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Transcripts and feedback are user/model text, so HTML-escape everything.
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_journal(entries: Iterable[JournalEntry]) -> str:
    """Render journal *entries* as an HTML fragment grouped by day."""

    context = build_journal_context(entries)
    template = _env.get_template("journal.html.j2")
    html = template.render(**context.to_dict())
    logger.debug(
        "Rendered journal: entries=%d days=%d len=%d",
        context.total_entries,
        len(context.days),
        len(html),
    )
    return html

"""Order and group journal entries for display."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List

from voice_journal.journal.models import JournalEntry

logger = logging.getLogger(__name__)


def sort_entries_by_date(entries: Iterable[JournalEntry]) -> List[JournalEntry]:
    """Return *entries* newest first. Input is not mutated."""
    return sorted(entries, key=lambda e: e.date, reverse=True)


def group_entries_by_date(entries: Iterable[JournalEntry]) -> Dict[date, List[JournalEntry]]:
    """Group *entries* by calendar day, newest day first, newest entry first.

    Days are taken in each entry's own timezone.
    """

    grouped: Dict[date, List[JournalEntry]] = {}
    for entry in sort_entries_by_date(entries):
        grouped.setdefault(entry.date.date(), []).append(entry)

    logger.debug("Grouped entries into %d day(s)", len(grouped))
    return grouped

"""Utility helpers for the restaurant list."""

from __future__ import annotations

from typing import Optional

from models import Metric


def format_metric(value: Metric) -> str:
    """Render a sort value the way it is shown in a row subtitle."""
    if isinstance(value, bool):
        return str(int(value))
    return str(value)


def normalize_search_text(text: Optional[str]) -> str:
    """Lower-cased search term, or an empty string when there is nothing to match."""
    if not text or not text.strip():
        return ""
    return text.lower()


def name_matches(name: str, term: str) -> bool:
    if not term:
        return True
    return term in name.lower()

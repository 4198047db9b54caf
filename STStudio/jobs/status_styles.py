"""Shared styling helpers for job status badges/pills."""

from __future__ import annotations

from .models import STATUS_SUGGESTIONS

STATUS_BADGE_CLASS_MAP = dict(zip(STATUS_SUGGESTIONS, [
    'bg-gray-200 text-gray-700',
    'bg-purple-200 text-purple-800',
    'bg-amber-200 text-amber-800',
    'bg-blue-200 text-blue-800',
    'bg-green-200 text-green-800',
]))

DEFAULT_STATUS_BADGE_CLASSES = 'bg-gray-200 text-gray-800'


def get_status_badge_classes(status_label: str | None) -> str:
    """Return Tailwind classes for a status label; free-text labels get the default."""

    if not status_label:
        return DEFAULT_STATUS_BADGE_CLASSES
    return STATUS_BADGE_CLASS_MAP.get(status_label, DEFAULT_STATUS_BADGE_CLASSES)

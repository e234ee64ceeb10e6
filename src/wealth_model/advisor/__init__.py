"""Optional narrative commentary layered over the computed metrics."""

from .config import AdvisorConfig
from .narrator import (
    GeminiNarrator,
    Narrative,
    STATUS_MISSING_CREDENTIALS,
    STATUS_OK,
    STATUS_UNAVAILABLE,
    parse_json_object,
)

__all__ = [
    'AdvisorConfig',
    'GeminiNarrator',
    'Narrative',
    'STATUS_MISSING_CREDENTIALS',
    'STATUS_OK',
    'STATUS_UNAVAILABLE',
    'parse_json_object',
]

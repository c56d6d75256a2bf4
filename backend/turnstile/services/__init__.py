"""Services package for the turnstile system."""

from .controller import TurnstileController
from .statistics import TurnstileStatistics
from .views import (
    TurnstileView,
    ConsoleTurnstileView,
    RecordingTurnstileView,
    format_denial_reason
)

__all__ = [
    'TurnstileController',
    'TurnstileStatistics',
    'TurnstileView',
    'ConsoleTurnstileView',
    'RecordingTurnstileView',
    'format_denial_reason'
]

"""Presentation collaborators for the turnstile controller."""

import sys
from collections import deque
from typing import Deque, List, NamedTuple, Optional, Protocol, runtime_checkable

from turnstile.models import DenialKind, DenialReason


@runtime_checkable
class TurnstileView(Protocol):
    """
    Interface for rendering turnstile notifications.

    The controller depends only on this protocol, so any renderer (console,
    HTTP response collector, display panel) can be plugged in. All methods
    are one-way notifications.
    """

    def show_pass_granted(self, card_id: str) -> None:
        ...

    def show_pass_denied(self, card_id: str, reason: DenialReason) -> None:
        ...

    def show_statistics(self, stats: str) -> None:
        ...

    def show_error(self, message: str) -> None:
        ...

    def show_info(self, message: str) -> None:
        ...


def format_denial_reason(reason: DenialReason) -> str:
    """Render a structured denial reason as text."""
    if reason.kind == DenialKind.CARD_NOT_FOUND:
        return "Card not found in registry"
    if reason.kind == DenialKind.EXPIRED:
        return f"Card expired ({reason.expiry_date.isoformat()})"
    if reason.kind == DenialKind.TRIPS_EXHAUSTED:
        return f"No trips left (remaining: {reason.remaining_trips})"
    if reason.kind == DenialKind.INSUFFICIENT_BALANCE:
        return f"Insufficient balance (balance: {reason.balance:.2f})"
    if reason.kind == DenialKind.DEDUCTION_FAILED:
        return "Could not deduct trip"
    return "Invalid card"


class ConsoleTurnstileView:
    """Prints notifications to stdout, errors to stderr."""

    def __init__(self, out=None, err=None):
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def show_pass_granted(self, card_id: str) -> None:
        print(f"Pass GRANTED for card: {card_id}", file=self.out)

    def show_pass_denied(self, card_id: str, reason: DenialReason) -> None:
        print(f"Pass DENIED for card {card_id}: {format_denial_reason(reason)}", file=self.out)

    def show_statistics(self, stats: str) -> None:
        print("\n" + stats, file=self.out)

    def show_error(self, message: str) -> None:
        print(f"ERROR: {message}", file=self.err)

    def show_info(self, message: str) -> None:
        print(f"INFO: {message}", file=self.out)


class Notification(NamedTuple):
    """A single notification captured by ``RecordingTurnstileView``."""
    kind: str
    card_id: Optional[str] = None
    message: Optional[str] = None
    reason: Optional[DenialReason] = None


class RecordingTurnstileView:
    """
    Keeps notifications in memory, newest last.

    With ``maxlen`` set, only the most recent notifications are kept.
    """

    def __init__(self, maxlen: Optional[int] = None):
        self.notifications: Deque[Notification] = deque(maxlen=maxlen)

    def show_pass_granted(self, card_id: str) -> None:
        self.notifications.append(Notification("granted", card_id=card_id))

    def show_pass_denied(self, card_id: str, reason: DenialReason) -> None:
        self.notifications.append(
            Notification("denied", card_id=card_id, message=format_denial_reason(reason), reason=reason)
        )

    def show_statistics(self, stats: str) -> None:
        self.notifications.append(Notification("statistics", message=stats))

    def show_error(self, message: str) -> None:
        self.notifications.append(Notification("error", message=message))

    def show_info(self, message: str) -> None:
        self.notifications.append(Notification("info", message=message))

    @property
    def last(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def of_kind(self, kind: str) -> List[Notification]:
        return [n for n in self.notifications if n.kind == kind]

    def clear(self) -> None:
        self.notifications.clear()

"""Turnstile controller: card presentation handling and card issuance."""

import logging
import threading
from datetime import date
from typing import Callable, Optional, Tuple

from turnstile.config import settings
from turnstile.models import (
    AccumulativeCard,
    CardCategory,
    DenialKind,
    DenialReason,
    PeriodCard,
    PeriodKind,
    StatisticsSnapshot,
    TravelCard,
    TripCountCard,
    TurnstileOutcome,
)
from turnstile.registry import CardRegistry
from turnstile.services.statistics import TurnstileStatistics
from turnstile.services.views import TurnstileView

logger = logging.getLogger(__name__)


class TurnstileController:
    """
    Orchestrates one presentation event: lookup, validate, consume, record.

    Registry, statistics and view are passed in explicitly. ``today`` is
    called once per event to obtain the current date.

    Every event results in exactly one view notification and exactly one
    statistics recording. A single lock serialises events, issuance and
    top-ups so the check-then-consume sequence on a card is atomic.
    """

    def __init__(
        self,
        registry: CardRegistry,
        statistics: TurnstileStatistics,
        view: TurnstileView,
        today: Callable[[], date] = date.today
    ):
        self.registry = registry
        self.statistics = statistics
        self.view = view
        self.today = today
        self._lock = threading.Lock()

    def process_card(self, card_id: str) -> TurnstileOutcome:
        """
        Handle a single card presentation.

        Args:
            card_id: Identifier read from the card

        Returns:
            TurnstileOutcome describing the decision
        """
        with self._lock:
            current_date = self.today()
            card = self.registry.lookup(card_id)

            if card is None:
                # No category is known; unknown cards count as Regular
                reason = DenialReason(kind=DenialKind.CARD_NOT_FOUND, card_id=card_id)
                return self._deny(card_id, CardCategory.REGULAR, reason)

            reason = card.denial_reason(current_date)
            if reason is not None:
                return self._deny(card_id, card.category, reason)

            if not card.use_trip(current_date):
                logger.warning(
                    "Card %s reported valid on %s but trip could not be deducted",
                    card_id, current_date
                )
                reason = DenialReason(kind=DenialKind.DEDUCTION_FAILED, card_id=card_id)
                return self._deny(card_id, card.category, reason)

            self.statistics.record_pass(card.category)
            self.view.show_pass_granted(card_id)
            logger.info("Pass granted for card %s", card_id)
            return TurnstileOutcome(card_id=card_id, granted=True, category=card.category)

    def _deny(self, card_id: str, category: CardCategory, reason: DenialReason) -> TurnstileOutcome:
        self.statistics.record_denial(category)
        self.view.show_pass_denied(card_id, reason)
        logger.info("Pass denied for card %s: %s", card_id, reason.kind.value)
        return TurnstileOutcome(card_id=card_id, granted=False, category=category, reason=reason)

    def issue_period_card(
        self,
        card_id: str,
        category: CardCategory,
        period_kind: PeriodKind
    ) -> Optional[PeriodCard]:
        """
        Issue a period card starting today.

        Returns None without registering anything when the category and
        period combination is not allowed.
        """
        if not settings.is_period_allowed(category, period_kind):
            message = settings.period_rejection_message(category, period_kind)
            logger.warning("Rejected period card %s: %s", card_id, message)
            self.view.show_error(message)
            return None

        card = PeriodCard(
            card_id=card_id,
            category=category,
            issue_date=self.today(),
            period_kind=period_kind
        )
        self._register(card, "Issued card")
        return card

    def issue_trip_card(self, card_id: str, category: CardCategory, trip_count: int) -> TripCountCard:
        card = TripCountCard(card_id=card_id, category=category, remaining_trips=trip_count)
        self._register(card, "Issued card")
        return card

    def issue_accumulative_card(self, card_id: str, initial_balance: float) -> AccumulativeCard:
        card = AccumulativeCard(card_id=card_id, balance=initial_balance)
        self._register(card, "Issued accumulative card")
        return card

    def _register(self, card: TravelCard, label: str) -> None:
        with self._lock:
            self.registry.issue(card)
        logger.info("%s: %s", label, card.describe())
        self.view.show_info(f"{label}: {card.describe()}")

    def top_up_card(self, card_id: str, amount: float) -> bool:
        """
        Add funds to an accumulative card.

        Returns False and reports an error for unknown ids and for cards
        that do not carry a balance.
        """
        with self._lock:
            card = self.registry.lookup(card_id)
            if card is None:
                self.view.show_error(f"Card {card_id} not found")
                return False
            if not isinstance(card, AccumulativeCard):
                self.view.show_error(f"Card {card_id} does not hold a balance")
                return False
            card.top_up(amount)

        logger.info("Topped up card %s by %.2f", card_id, amount)
        self.view.show_info(f"Topped up card: {card.describe()}")
        return True

    def get_statistics_summary(self) -> str:
        with self._lock:
            return self.statistics.summary_text()

    def statistics_report(self) -> Tuple[StatisticsSnapshot, str]:
        """
        Counters and rendered summary taken together under the event lock,
        so both describe the same moment.
        """
        with self._lock:
            return self.statistics.snapshot(), self.statistics.summary_text()

    def show_statistics(self) -> None:
        self.view.show_statistics(self.get_statistics_summary())

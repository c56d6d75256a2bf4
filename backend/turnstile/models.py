"""Models for the transit turnstile system."""

import calendar
from abc import ABC, abstractmethod
from datetime import date, timedelta
from enum import Enum
from typing import ClassVar, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class CardCategory(str, Enum):
    """Fare class of a card. Declaration order is the reporting order."""
    STUDENT = "Student"
    PUPIL = "Pupil"
    REGULAR = "Regular"


class PeriodKind(str, Enum):
    """Length of a period card's validity window."""
    MONTH = "Month"
    TEN_DAYS = "TenDays"


class DenialKind(str, Enum):
    """Why the turnstile refused passage."""
    CARD_NOT_FOUND = "card_not_found"
    EXPIRED = "expired"
    TRIPS_EXHAUSTED = "trips_exhausted"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    DEDUCTION_FAILED = "deduction_failed"


class DenialReason(BaseModel):
    """Structured denial reason; rendered to text by the presentation layer."""
    kind: DenialKind
    card_id: str
    expiry_date: Optional[date] = None
    remaining_trips: Optional[int] = None
    balance: Optional[float] = None


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of a shorter month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class TravelCard(BaseModel, ABC):
    """
    Base fare card.

    Every variant answers two questions for a given date: is the card
    usable, and can one trip be taken from it. Identity fields are frozen.
    """
    card_id: str = Field(..., min_length=1, frozen=True, description="Unique card identifier")
    category: CardCategory = Field(..., frozen=True, description="Fare class")

    @abstractmethod
    def is_valid(self, current_date: date) -> bool:
        """Return True if the card may be used on ``current_date``."""

    @abstractmethod
    def use_trip(self, current_date: date) -> bool:
        """
        Consume one trip.

        Returns False and leaves the card untouched when it cannot be used.
        """

    @abstractmethod
    def denial_reason(self, current_date: date) -> Optional[DenialReason]:
        """Explain why the card is unusable, or None when it is valid."""

    @abstractmethod
    def describe(self) -> str:
        """One-line summary for notifications."""

    def __str__(self) -> str:
        return self.describe()


class PeriodCard(TravelCard):
    """Unlimited rides until the expiry date."""
    card_type: Literal["period"] = "period"
    issue_date: date = Field(..., frozen=True)
    period_kind: PeriodKind = Field(..., frozen=True)

    @property
    def expiry_date(self) -> date:
        if self.period_kind == PeriodKind.MONTH:
            return add_months(self.issue_date, 1) - timedelta(days=1)
        return self.issue_date + timedelta(days=10)

    def is_valid(self, current_date: date) -> bool:
        return current_date <= self.expiry_date

    def use_trip(self, current_date: date) -> bool:
        # Nothing to deduct
        return self.is_valid(current_date)

    def denial_reason(self, current_date: date) -> Optional[DenialReason]:
        if self.is_valid(current_date):
            return None
        return DenialReason(
            kind=DenialKind.EXPIRED,
            card_id=self.card_id,
            expiry_date=self.expiry_date
        )

    def describe(self) -> str:
        return (
            f"PeriodCard(id='{self.card_id}', category={self.category.value}, "
            f"expiry={self.expiry_date.isoformat()})"
        )


class TripCountCard(TravelCard):
    """A fixed number of rides, one spent per passage."""
    card_type: Literal["trip"] = "trip"
    remaining_trips: int = Field(..., ge=0, description="Rides left on the card")

    def is_valid(self, current_date: date) -> bool:
        return self.remaining_trips > 0

    def use_trip(self, current_date: date) -> bool:
        if self.remaining_trips <= 0:
            return False
        self.remaining_trips -= 1
        return True

    def denial_reason(self, current_date: date) -> Optional[DenialReason]:
        if self.is_valid(current_date):
            return None
        return DenialReason(
            kind=DenialKind.TRIPS_EXHAUSTED,
            card_id=self.card_id,
            remaining_trips=self.remaining_trips
        )

    def describe(self) -> str:
        return (
            f"TripCountCard(id='{self.card_id}', category={self.category.value}, "
            f"trips_left={self.remaining_trips})"
        )


class AccumulativeCard(TravelCard):
    """Stored-value card charged a flat fare per passage. Always Regular."""
    FARE: ClassVar[float] = 25.0

    card_type: Literal["accumulative"] = "accumulative"
    category: CardCategory = Field(CardCategory.REGULAR, frozen=True)
    balance: float = Field(..., ge=0, description="Stored value")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v):
        if v != CardCategory.REGULAR:
            raise ValueError(f"Accumulative cards are always Regular, got {v.value}")
        return v

    def is_valid(self, current_date: date) -> bool:
        return self.balance >= self.FARE

    def use_trip(self, current_date: date) -> bool:
        if self.balance < self.FARE:
            return False
        self.balance -= self.FARE
        return True

    def top_up(self, amount: float) -> None:
        """Add ``amount`` to the balance."""
        if amount <= 0:
            raise ValueError(f"Top-up amount must be positive, got {amount}")
        self.balance += amount

    def denial_reason(self, current_date: date) -> Optional[DenialReason]:
        if self.is_valid(current_date):
            return None
        return DenialReason(
            kind=DenialKind.INSUFFICIENT_BALANCE,
            card_id=self.card_id,
            balance=self.balance
        )

    def describe(self) -> str:
        return f"AccumulativeCard(id='{self.card_id}', balance={self.balance:.2f})"


class TurnstileOutcome(BaseModel):
    """Result of a single card presentation."""
    card_id: str
    granted: bool
    category: CardCategory = Field(..., description="Category the event was recorded under")
    reason: Optional[DenialReason] = None


class StatisticsSnapshot(BaseModel):
    """Point-in-time copy of the turnstile counters."""
    total_passes: int = 0
    total_denials: int = 0
    passes_by_category: Dict[CardCategory, int] = Field(default_factory=dict)
    denials_by_category: Dict[CardCategory, int] = Field(default_factory=dict)


# API request/response models

class PeriodCardRequest(BaseModel):
    """Request model for issuing a period card."""
    card_id: str = Field(..., min_length=1)
    category: CardCategory
    period_kind: PeriodKind


class TripCardRequest(BaseModel):
    """Request model for issuing a trip-count card."""
    card_id: str = Field(..., min_length=1)
    category: CardCategory
    trip_count: int = Field(..., ge=0, description="Number of rides on the card")


class AccumulativeCardRequest(BaseModel):
    """Request model for issuing an accumulative card."""
    card_id: str = Field(..., min_length=1)
    initial_balance: float = Field(..., ge=0)


class TopUpRequest(BaseModel):
    """Request model for topping up an accumulative card."""
    amount: float = Field(..., gt=0)


class CardResponse(BaseModel):
    """Card as reported by the API."""
    card_id: str
    card_type: str
    category: CardCategory
    issue_date: Optional[date] = None
    period_kind: Optional[PeriodKind] = None
    expiry_date: Optional[date] = None
    remaining_trips: Optional[int] = None
    balance: Optional[float] = None

    @classmethod
    def from_card(cls, card: TravelCard) -> "CardResponse":
        data = card.model_dump()
        if isinstance(card, PeriodCard):
            data["expiry_date"] = card.expiry_date
        return cls(**data)


class ProcessCardResponse(BaseModel):
    """Response model for a presentation event."""
    card_id: str
    granted: bool
    category: CardCategory
    reason: Optional[DenialKind] = None
    message: str


class StatisticsResponse(StatisticsSnapshot):
    """Statistics snapshot with the rendered report."""
    summary: str


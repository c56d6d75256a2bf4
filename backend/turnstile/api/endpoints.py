"""API endpoints for card issuance and turnstile passage."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from turnstile.config import settings
from turnstile.models import (
    AccumulativeCard,
    AccumulativeCardRequest,
    CardResponse,
    PeriodCardRequest,
    ProcessCardResponse,
    StatisticsResponse,
    TopUpRequest,
    TripCardRequest,
)
from turnstile.registry import CardRegistry
from turnstile.services import (
    RecordingTurnstileView,
    TurnstileController,
    TurnstileStatistics,
    format_denial_reason
)

router = APIRouter(prefix="/api", tags=["Turnstile"])

# One controller per process, created on first use
_default_controller: Optional[TurnstileController] = None


def get_controller() -> TurnstileController:
    """
    Dependency injection for the turnstile controller.
    Tests override this dependency to get an isolated controller.
    """
    global _default_controller
    if _default_controller is None:
        _default_controller = TurnstileController(
            registry=CardRegistry(),
            statistics=TurnstileStatistics(),
            view=RecordingTurnstileView(maxlen=1000)
        )
    return _default_controller


@router.post("/cards/period", response_model=CardResponse, status_code=201)
def issue_period_card(
    request: PeriodCardRequest,
    controller: TurnstileController = Depends(get_controller)
) -> CardResponse:
    """
    Issue a period card valid from today.

    Raises:
        HTTPException: 400 if the category may not hold this period kind
    """
    card = controller.issue_period_card(request.card_id, request.category, request.period_kind)
    if card is None:
        raise HTTPException(
            status_code=400,
            detail=settings.period_rejection_message(request.category, request.period_kind)
        )
    return CardResponse.from_card(card)


@router.post("/cards/trip", response_model=CardResponse, status_code=201)
def issue_trip_card(
    request: TripCardRequest,
    controller: TurnstileController = Depends(get_controller)
) -> CardResponse:
    """Issue a card with a fixed number of trips."""
    card = controller.issue_trip_card(request.card_id, request.category, request.trip_count)
    return CardResponse.from_card(card)


@router.post("/cards/accumulative", response_model=CardResponse, status_code=201)
def issue_accumulative_card(
    request: AccumulativeCardRequest,
    controller: TurnstileController = Depends(get_controller)
) -> CardResponse:
    """Issue a stored-value card. Accumulative cards are always Regular."""
    card = controller.issue_accumulative_card(request.card_id, request.initial_balance)
    return CardResponse.from_card(card)


@router.get("/cards", response_model=List[CardResponse])
def list_cards(controller: TurnstileController = Depends(get_controller)):
    """List all issued cards."""
    return [CardResponse.from_card(card) for card in controller.registry.all_cards()]


@router.get("/cards/{card_id}", response_model=CardResponse)
def get_card(card_id: str, controller: TurnstileController = Depends(get_controller)):
    """Get a single card by id."""
    card = controller.registry.lookup(card_id)
    if card is None:
        raise HTTPException(status_code=404, detail=f"Card {card_id} not found")
    return CardResponse.from_card(card)


@router.post("/cards/{card_id}/top-up", response_model=CardResponse)
def top_up_card(
    card_id: str,
    request: TopUpRequest,
    controller: TurnstileController = Depends(get_controller)
):
    """
    Add funds to an accumulative card.

    Raises:
        HTTPException: 404 for unknown cards, 400 for cards without a balance
    """
    card = controller.registry.lookup(card_id)
    if card is None:
        raise HTTPException(status_code=404, detail=f"Card {card_id} not found")
    if not isinstance(card, AccumulativeCard):
        raise HTTPException(status_code=400, detail=f"Card {card_id} does not hold a balance")

    if not controller.top_up_card(card_id, request.amount):
        raise HTTPException(status_code=400, detail=f"Card {card_id} could not be topped up")

    card = controller.registry.lookup(card_id)
    if card is None:
        raise HTTPException(status_code=404, detail=f"Card {card_id} not found")
    return CardResponse.from_card(card)


@router.post("/turnstile/{card_id}", response_model=ProcessCardResponse)
def present_card(card_id: str, controller: TurnstileController = Depends(get_controller)):
    """
    Present a card at the turnstile.

    A denial is a normal outcome and is returned with status 200.
    """
    outcome = controller.process_card(card_id)
    if outcome.granted:
        message = "Pass granted"
    else:
        message = format_denial_reason(outcome.reason)

    return ProcessCardResponse(
        card_id=outcome.card_id,
        granted=outcome.granted,
        category=outcome.category,
        reason=outcome.reason.kind if outcome.reason else None,
        message=message
    )


@router.get("/statistics", response_model=StatisticsResponse)
def get_statistics(controller: TurnstileController = Depends(get_controller)):
    """Get pass/denial counters and the rendered report."""
    snapshot, summary = controller.statistics_report()
    return StatisticsResponse(**snapshot.model_dump(), summary=summary)


@router.get("/health")
def health_check(controller: TurnstileController = Depends(get_controller)):
    """Health check endpoint including registry size."""
    return {
        "status": "healthy",
        "service": "Transit Turnstile",
        "cards_issued": len(controller.registry)
    }

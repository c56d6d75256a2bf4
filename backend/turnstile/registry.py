"""In-memory card registry."""

import logging
from typing import Dict, List, Optional

from turnstile.models import TravelCard

logger = logging.getLogger(__name__)


class CardRegistry:
    """
    Keyed store of issued cards.

    Cards live for the lifetime of the process. Issuing a card whose id is
    already present replaces the earlier card.
    """

    def __init__(self):
        self._cards: Dict[str, TravelCard] = {}

    def issue(self, card: TravelCard) -> None:
        """Insert or overwrite a card by its id."""
        if card.card_id in self._cards:
            logger.info("Replacing existing card %s", card.card_id)
        self._cards[card.card_id] = card

    def lookup(self, card_id: str) -> Optional[TravelCard]:
        """Return the card, or None for an unknown id."""
        return self._cards.get(card_id)

    def all_cards(self) -> List[TravelCard]:
        return list(self._cards.values())

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

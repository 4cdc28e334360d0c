"""
Free-card usability and processing.

Using a free card is modelled as an in-place transition of the owning
branch's game state: the card is played, then its draw and mill effects
resolve against the top of that branch's deck. Nothing outside the branch is
touched, so sibling and parent branches never observe the change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .cards import FreeCard
from .game_state import GameState

if TYPE_CHECKING:
    from .simulation.branch import SimulationBranch

logger = logging.getLogger(__name__)


def free_card_is_usable(state: GameState, card: FreeCard) -> bool:
    """Return whether ``card`` can be used from ``state`` right now."""
    if not state.has_in_hand(card):
        return False

    if card.once_per_turn and any(played.name == card.name for played in state.free_cards_played_this_turn):
        return False

    return len(state.deck.deck_list) >= card.free.deck_cost


def process_free_card(branch: "SimulationBranch", card: FreeCard) -> None:
    """Use ``card`` against the branch's own game state."""
    state = branch.game_state
    state.play_card(card)
    if card.free.draw:
        drawn = state.draw(card.free.draw)
        logger.debug("%s drew %s", card.name, [c.name for c in drawn])
    if card.free.mill:
        milled = state.mill(card.free.mill)
        logger.debug("%s milled %s", card.name, [c.name for c in milled])


__all__ = ["free_card_is_usable", "process_free_card"]

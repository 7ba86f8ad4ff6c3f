"""
Trick-taking: legal moves, winner, previews.
Thunee rules: follow the lead suit if you can; void in it, play anything.
These are the only functions that may reject a card play.
"""
from __future__ import annotations

from typing import NamedTuple, Optional

from .deck import Card, Suit
from .ranking import winning_card_index
from .seats import Seat
from .state import Player, Trick


class PlayCheck(NamedTuple):
    ok: bool
    reason: Optional[str] = None


def validate_card_play(card: Card, player: Player, trick: Trick) -> PlayCheck:
    """Check one card against the follow-suit rule (does not check turn order)."""
    if not player.has_card(card):
        return PlayCheck(False, f"{card} is not in your hand")
    if trick.is_empty:
        return PlayCheck(True)
    lead = trick.lead_suit
    assert lead is not None
    following = player.cards_of_suit(lead)
    if following and card.suit != lead:
        return PlayCheck(
            False,
            f"Must follow suit ({lead.display_name.lower()}). "
            f"You have {len(following)} card{'s' if len(following) != 1 else ''} of that suit.",
        )
    return PlayCheck(True)


def legal_cards(hand, trick: Trick) -> list[Card]:
    """Lead-suit subset when following and holding the suit, else the whole hand."""
    if trick.is_empty:
        return list(hand)
    lead = trick.lead_suit
    following = [c for c in hand if c.suit == lead]
    if following:
        return following
    return list(hand)


def _seat_of_index(trick: Trick, index: int) -> Seat:
    return trick.lead_seat.walk(index)


def determine_winner(trick: Trick, trump_suit: Suit | None, royals: bool = False) -> Seat:
    """Winning seat of a complete trick."""
    if not trick.is_complete:
        raise ValueError("Cannot determine winner of incomplete trick")
    idx = winning_card_index(trick.cards, trump_suit, trick.lead_suit, royals)
    return _seat_of_index(trick, idx)


def current_winning_seat(trick: Trick, trump_suit: Suit | None, royals: bool = False) -> Optional[Seat]:
    """Seat holding the trick right now (None while empty)."""
    if trick.is_empty:
        return None
    idx = winning_card_index(trick.cards, trump_suit, trick.lead_suit, royals)
    return _seat_of_index(trick, idx)


def current_winning_card(trick: Trick, trump_suit: Suit | None, royals: bool = False) -> Optional[Card]:
    if trick.is_empty:
        return None
    cards = trick.cards
    return cards[winning_card_index(cards, trump_suit, trick.lead_suit, royals)]


def will_card_win(card: Card, trick: Trick, trump_suit: Suit | None, royals: bool = False) -> bool:
    """True if ``card``, played next, would currently hold the trick."""
    if trick.is_empty:
        return True
    cards = trick.cards + [card]
    lead = trick.lead_suit
    return winning_card_index(cards, trump_suit, lead, royals) == len(cards) - 1

"""
Card ranking: who beats whom inside one trick.
Trump beats everything; otherwise only lead-suit cards can win. Strength comes
from the standard order (J 9 A 10 K Q) or, in a Royals round, the reversed one.
All functions are pure.
"""
from __future__ import annotations

from typing import Sequence

from .deck import Card, Suit


def compare_cards(
    card: Card,
    other: Card,
    trump_suit: Suit | None,
    lead_suit: Suit,
    royals: bool = False,
) -> int:
    """Positive if ``card`` beats ``other``, negative if it loses, 0 if neither can win."""
    card_trump = trump_suit is not None and card.suit == trump_suit
    other_trump = trump_suit is not None and other.suit == trump_suit
    if card_trump and other_trump:
        return card.strength(royals) - other.strength(royals)
    if card_trump:
        return 1
    if other_trump:
        return -1
    card_lead = card.suit == lead_suit
    other_lead = other.suit == lead_suit
    if card_lead and other_lead:
        return card.strength(royals) - other.strength(royals)
    if card_lead:
        return 1
    if other_lead:
        return -1
    return 0


def beats(
    card: Card,
    other: Card,
    trump_suit: Suit | None,
    lead_suit: Suit,
    royals: bool = False,
) -> bool:
    return compare_cards(card, other, trump_suit, lead_suit, royals) > 0


def winning_card_index(
    cards: Sequence[Card],
    trump_suit: Suit | None,
    lead_suit: Suit | None = None,
    royals: bool = False,
) -> int:
    """
    Index of the winning card among ``cards`` (play order, 1..4 cards).
    ``lead_suit`` defaults to the suit of the first card. A ``None`` trump
    means trump is not known yet: only the lead suit competes.
    """
    if not cards:
        raise ValueError("Cannot rank an empty trick")
    if len(cards) > 4:
        raise ValueError(f"A trick holds at most 4 cards, got {len(cards)}")
    if lead_suit is None:
        lead_suit = cards[0].suit
    best = 0
    for i in range(1, len(cards)):
        if compare_cards(cards[i], cards[best], trump_suit, lead_suit, royals) > 0:
            best = i
    return best

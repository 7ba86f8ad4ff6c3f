"""
Distribution (deal) for 4 seats in two tranches.
Initial deal: 4 cards each, one at a time starting right of the dealer (dealer.next).
Reserve: the last 8 cards, 2 per seat, handed over once trump is known.
"""
from __future__ import annotations

import random
from typing import NamedTuple

from .deck import Card, INITIAL_DEAL_CARDS, NUM_SEATS, RESERVE_DEAL_CARDS, make_deck_24
from .seats import Seat


class DealSplit(NamedTuple):
    """Result of a split deal. Both tuples are indexed by Seat value."""
    initial: tuple[tuple[Card, ...], ...]   # 4 cards per seat
    remaining: tuple[tuple[Card, ...], ...]  # 2 cards per seat
    dealer: Seat


def shuffle_deck(deck: list[Card], rng: random.Random) -> list[Card]:
    """Uniform shuffled copy of ``deck`` (Fisher-Yates via ``rng``)."""
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled


def deal_split(
    dealer: Seat = Seat.NORTH,
    rng: random.Random | None = None,
    num_seats: int = NUM_SEATS,
) -> DealSplit:
    """
    Shuffle a fresh 24-card deck and split it into 4×4 initial hands and 4×2 reserves.
    Every card lands exactly once across initial + remaining.
    """
    if num_seats != NUM_SEATS:
        raise ValueError(f"Thunee is dealt to exactly {NUM_SEATS} seats, got {num_seats}")
    if rng is None:
        rng = random.Random()
    deck = shuffle_deck(make_deck_24(), rng)

    order = [first_to_bid(dealer).walk(i) for i in range(NUM_SEATS)]
    initial: list[list[Card]] = [[] for _ in range(NUM_SEATS)]
    remaining: list[list[Card]] = [[] for _ in range(NUM_SEATS)]

    first_tranche = NUM_SEATS * INITIAL_DEAL_CARDS
    for i, card in enumerate(deck):
        seat = order[i % NUM_SEATS]
        if i < first_tranche:
            initial[seat].append(card)
        else:
            remaining[seat].append(card)

    assert all(len(h) == INITIAL_DEAL_CARDS for h in initial)
    assert all(len(r) == RESERVE_DEAL_CARDS for r in remaining)
    return DealSplit(
        initial=tuple(tuple(h) for h in initial),
        remaining=tuple(tuple(r) for r in remaining),
        dealer=dealer,
    )


def next_dealer(dealer: Seat) -> Seat:
    """Dealer rotates in play direction."""
    return dealer.next


def first_to_bid(dealer: Seat) -> Seat:
    """Player to the right of the dealer speaks first."""
    return dealer.next

"""Shared builders for engine tests: stacked decks and hand-made round states."""
from __future__ import annotations

import random

from thunee.deck import card_from_token
from thunee.seats import Seat
from thunee.state import Player, RoundPhase, RoundState, Trick, new_teams


class StackedDeck(random.Random):
    """A Random whose shuffle lays the deck out in a fixed order."""

    def __init__(self, tokens):
        super().__init__(0)
        self.tokens = list(tokens)

    def shuffle(self, x):
        x[:] = [card_from_token(t) for t in self.tokens]


def stacked_rng(dealer: Seat, initial: dict, reserve: dict) -> StackedDeck:
    """Deck order that deals ``initial`` (4 per seat) then ``reserve`` (2 per seat)."""
    order = [dealer.next.walk(i) for i in range(4)]
    tokens = []
    for k in range(4):
        tokens.extend(initial[seat][k] for seat in order)
    for k in range(2):
        tokens.extend(reserve[seat][k] for seat in order)
    return StackedDeck(tokens)


# Every card once; trump tests rely on these exact holdings.
MIXED_INITIAL = {
    Seat.NORTH: ["J♥", "9♠", "A♦", "10♣"],
    Seat.EAST: ["9♥", "J♠", "A♣", "10♦"],
    Seat.SOUTH: ["A♥", "10♠", "J♦", "9♣"],
    Seat.WEST: ["10♥", "A♠", "9♦", "J♣"],
}
MIXED_RESERVE = {
    Seat.NORTH: ["K♥", "Q♠"],
    Seat.EAST: ["K♦", "Q♣"],
    Seat.SOUTH: ["K♠", "Q♥"],
    Seat.WEST: ["K♣", "Q♦"],
}

SPADES_SOUTH_INITIAL = {
    Seat.NORTH: ["J♥", "9♥", "A♥", "10♥"],
    Seat.EAST: ["J♦", "9♦", "A♦", "10♦"],
    Seat.SOUTH: ["Q♠", "J♣", "9♣", "A♣"],
    Seat.WEST: ["J♠", "9♠", "A♠", "10♠"],
}
SPADES_SOUTH_RESERVE = {
    Seat.NORTH: ["K♥", "Q♥"],
    Seat.EAST: ["K♦", "Q♦"],
    Seat.SOUTH: ["10♣", "K♣"],
    Seat.WEST: ["K♠", "Q♣"],
}


def cards(*tokens):
    return tuple(card_from_token(t) for t in tokens)


def make_round(phase=RoundPhase.PLAYING, hands=None, dealer=Seat.NORTH, **changes) -> RoundState:
    """Round with the given hands (seat -> tokens); other fields from ``changes``."""
    hands = hands or {}
    players = tuple(
        Player(seat=s, name=s.name.title(), hand=cards(*hands.get(s, ())), player_id=f"p{int(s)}")
        for s in Seat
    )
    changes.setdefault("current_turn", dealer.next)
    return RoundState(phase=phase, players=players, teams=new_teams(), dealer=dealer, **changes)


def won_trick(lead: Seat, tokens, winner: Seat) -> Trick:
    """A finished trick: ``tokens`` played in order from ``lead``, won by ``winner``."""
    trick = Trick(lead_seat=lead)
    for i, token in enumerate(tokens):
        trick = trick.with_card(lead.walk(i), card_from_token(token))
    return trick.with_winner(winner)

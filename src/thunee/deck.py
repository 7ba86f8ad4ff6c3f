"""
Thunee deck: 24 cards (4 suits × 6 ranks: J, 9, A, 10, K, Q).
Card values for counting: J=30, 9=20, A=11, 10=10, K=3, Q=2 (76 per suit, 304 per deck).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Suit(IntEnum):
    """Hearts, Diamonds, Clubs, Spades. Order is the deck-building order only."""
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def symbol(self) -> str:
        return "♥♦♣♠"[self]

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class Rank(IntEnum):
    JACK = 0
    NINE = 1
    ACE = 2
    TEN = 3
    KING = 4
    QUEEN = 5

    @property
    def symbol(self) -> str:
        return _RANK_SYMBOLS[self]

    @property
    def points(self) -> int:
        return _RANK_POINTS[self]

    @property
    def standard_ranking(self) -> int:
        """J=6 > 9=5 > A=4 > 10=3 > K=2 > Q=1."""
        return 6 - int(self)

    @property
    def royals_ranking(self) -> int:
        """Royals reverses the order: Q=6 > K=5 > 10=4 > A=3 > 9=2 > J=1."""
        return int(self) + 1


_RANK_SYMBOLS = {
    Rank.JACK: "J",
    Rank.NINE: "9",
    Rank.ACE: "A",
    Rank.TEN: "10",
    Rank.KING: "K",
    Rank.QUEEN: "Q",
}

_RANK_POINTS = {
    Rank.JACK: 30,
    Rank.NINE: 20,
    Rank.ACE: 11,
    Rank.TEN: 10,
    Rank.KING: 3,
    Rank.QUEEN: 2,
}

# Deck / deal
NUM_SEATS = 4
CARDS_PER_SUIT = 6
TOTAL_CARDS = 24
INITIAL_DEAL_CARDS = 4   # dealt before bidding
RESERVE_DEAL_CARDS = 2   # held back until trump is known
CARDS_PER_PLAYER = INITIAL_DEAL_CARDS + RESERVE_DEAL_CARDS
TRICKS_PER_ROUND = 6

# Points
POINTS_PER_SUIT = 76
TOTAL_CARD_POINTS = 304
LAST_TRICK_BONUS = 10
TOTAL_POINTS_PER_ROUND = TOTAL_CARD_POINTS + LAST_TRICK_BONUS  # 314
WINNING_THRESHOLD = 105  # points the trump-making team needs

# Bidding
BID_INCREMENT = 10
MAX_OFFERED_BID = 150


@dataclass(frozen=True)
class Card:
    """A single Thunee card. Immutable and value-equal."""

    suit: Suit
    rank: Rank

    @property
    def points(self) -> int:
        return self.rank.points

    @property
    def standard_ranking(self) -> int:
        return self.rank.standard_ranking

    @property
    def royals_ranking(self) -> int:
        return self.rank.royals_ranking

    def strength(self, royals: bool = False) -> int:
        """Strength under the active ranking mode (higher wins)."""
        return self.royals_ranking if royals else self.standard_ranking

    @property
    def token(self) -> str:
        """Short token, e.g. "J♥" or "10♠"."""
        return f"{self.rank.symbol}{self.suit.symbol}"

    @property
    def display_name(self) -> str:
        rank_name = {Rank.JACK: "Jack", Rank.ACE: "Ace", Rank.KING: "King", Rank.QUEEN: "Queen"}
        return f"{rank_name.get(self.rank, self.rank.symbol)} of {self.suit.display_name}"

    def __str__(self) -> str:
        return self.token

    def __repr__(self) -> str:
        return str(self)


_SUIT_BY_SYMBOL = {s.symbol: s for s in Suit}
_RANK_BY_SYMBOL = {r.symbol: r for r in Rank}


def card_from_token(token: str) -> Card:
    """
    Parse a short card token ("J♥", "10♠").
    Raises ValueError on wrong length or unknown rank/suit symbol.
    """
    if not isinstance(token, str) or not 2 <= len(token) <= 3:
        raise ValueError(f"Invalid card token: {token!r}")
    rank_symbol, suit_symbol = token[:-1], token[-1]
    suit = _SUIT_BY_SYMBOL.get(suit_symbol)
    if suit is None:
        raise ValueError(f"Invalid suit symbol {suit_symbol!r} in card token {token!r}")
    rank = _RANK_BY_SYMBOL.get(rank_symbol)
    if rank is None:
        raise ValueError(f"Invalid rank symbol {rank_symbol!r} in card token {token!r}")
    return Card(suit=suit, rank=rank)


def make_deck_24() -> list[Card]:
    """Build the full 24-card deck, suit-major (unshuffled)."""
    return [Card(suit=s, rank=r) for s in Suit for r in Rank]


def cards_point_total(cards) -> int:
    """Total trick points in a set of cards (304 for the full deck)."""
    return sum(c.points for c in cards)


def cards_of_suit(cards, suit: Suit) -> list[Card]:
    return [c for c in cards if c.suit == suit]

"""
Round and match state.

Every type here is a frozen dataclass. Transitions build new values with
``dataclasses.replace`` (wrapped as ``evolve``) instead of editing in place, so
any snapshot handed out by the engine stays valid forever.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Sequence

from .calls import BidCall, Call, CallCategory, PassCall, SpecialCall
from .config import GameConfig
from .deck import Card, NUM_SEATS, Suit, TRICKS_PER_ROUND, cards_point_total
from .seats import Seat


class RoundPhase(Enum):
    BIDDING = "bidding"
    CHOOSING_TRUMP = "choosingTrump"
    PLAYING = "playing"
    SCORING = "scoring"


class TrumpSource(Enum):
    """How the trump suit got fixed. ``None`` on the round means not known yet."""
    SELECTED = "selected"      # bid winner tapped a card
    FIRST_CARD = "firstCard"   # suit of the first card led (Thunee/Royals)


@dataclass(frozen=True)
class Player:
    seat: Seat
    name: str
    hand: tuple[Card, ...] = ()
    is_bot: bool = False
    player_id: str = ""

    @property
    def team_number(self) -> int:
        return self.seat.team_number

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def cards_of_suit(self, suit: Suit) -> list[Card]:
        return [c for c in self.hand if c.suit == suit]

    def with_hand(self, hand: Iterable[Card]) -> "Player":
        return replace(self, hand=tuple(hand))

    def without_card(self, card: Card) -> "Player":
        if card not in self.hand:
            raise ValueError(f"Card {card} not in hand of {self.seat.name}")
        hand = list(self.hand)
        hand.remove(card)
        return replace(self, hand=tuple(hand))

    def __str__(self) -> str:
        return f"Player({self.name}, {self.seat.name}, {len(self.hand)} cards)"


@dataclass(frozen=True)
class Trick:
    """Up to 4 (seat, card) plays in play order."""

    lead_seat: Seat
    plays: tuple[tuple[Seat, Card], ...] = ()
    winner: Optional[Seat] = None

    @property
    def is_empty(self) -> bool:
        return not self.plays

    @property
    def is_complete(self) -> bool:
        return len(self.plays) == NUM_SEATS

    @property
    def lead_suit(self) -> Optional[Suit]:
        return self.plays[0][1].suit if self.plays else None

    @property
    def cards(self) -> list[Card]:
        return [c for _, c in self.plays]

    @property
    def points(self) -> int:
        return cards_point_total(self.cards)

    @property
    def next_to_play(self) -> Optional[Seat]:
        if self.is_complete:
            return None
        return self.lead_seat.walk(len(self.plays))

    def card_of(self, seat: Seat) -> Optional[Card]:
        for s, c in self.plays:
            if s == seat:
                return c
        return None

    def with_card(self, seat: Seat, card: Card) -> "Trick":
        if self.is_complete:
            raise ValueError("Trick is already complete")
        if seat != self.next_to_play:
            raise ValueError(f"{seat.name} cannot play now; {self.next_to_play.name} is next")
        return replace(self, plays=self.plays + ((seat, card),))

    def with_winner(self, winner: Seat) -> "Trick":
        return replace(self, winner=winner)

    def __str__(self) -> str:
        if self.is_empty:
            return f"Trick(empty, lead: {self.lead_seat.name})"
        cards = " ".join(f"{s.name[0]}:{c}" for s, c in self.plays)
        won = f", winner: {self.winner.name}" if self.winner is not None else ""
        return f"Trick({cards}{won})"


@dataclass(frozen=True)
class Team:
    team_number: int
    name: str
    tricks_won: int = 0
    trick_points: int = 0
    balls: int = 0  # match-level, never reset between rounds

    def add_trick(self, points: int) -> "Team":
        return replace(self, tricks_won=self.tricks_won + 1, trick_points=self.trick_points + points)

    def add_balls(self, balls: int) -> "Team":
        return replace(self, balls=self.balls + balls)

    def reset_round(self) -> "Team":
        return replace(self, tricks_won=0, trick_points=0)


def new_teams() -> tuple[Team, Team]:
    return (Team(team_number=0, name="North/South"), Team(team_number=1, name="East/West"))


def new_players(names: Sequence[str], bots: Sequence[bool] | None = None) -> tuple[Player, ...]:
    """Seat-indexed players (names[0] sits North). Exactly 4 names required."""
    if len(names) != NUM_SEATS:
        raise ValueError(f"Must have exactly {NUM_SEATS} players, got {len(names)}")
    if bots is None:
        bots = [False] * NUM_SEATS
    if len(bots) != NUM_SEATS:
        raise ValueError(f"Must give a bot flag for each of the {NUM_SEATS} players")
    return tuple(
        Player(seat=Seat(i), name=name, is_bot=bool(bot), player_id=f"p{i}")
        for i, (name, bot) in enumerate(zip(names, bots))
    )


@dataclass(frozen=True)
class RoundState:
    """Complete state of one round. ``players`` and ``teams`` are indexed by seat / team number."""

    phase: RoundPhase
    players: tuple[Player, ...]
    teams: tuple[Team, Team]
    dealer: Seat
    current_turn: Seat
    # 2 held-back cards per seat; None once handed out
    remaining_cards: Optional[tuple[tuple[Card, ...], ...]] = None
    current_trick: Optional[Trick] = None
    completed_tricks: tuple[Trick, ...] = ()
    call_history: tuple[Call, ...] = ()
    highest_bid: Optional[BidCall] = None
    pass_count: int = 0
    trump_suit: Optional[Suit] = None
    trump_source: Optional[TrumpSource] = None
    trump_card: Optional[Card] = None
    trump_making_team: Optional[int] = None
    trump_chooser: Optional[Seat] = None

    def evolve(self, **changes) -> "RoundState":
        return replace(self, **changes)

    # ---- lookups ----

    def player_at(self, seat: Seat) -> Player:
        return self.players[seat]

    @property
    def current_player(self) -> Player:
        return self.players[self.current_turn]

    def team_for(self, seat: Seat) -> Team:
        return self.teams[seat.team_number]

    @property
    def passed_seats(self) -> frozenset[Seat]:
        return frozenset(c.caller for c in self.call_history if isinstance(c, PassCall))

    @property
    def special_calls(self) -> list[SpecialCall]:
        return [c for c in self.call_history if isinstance(c, SpecialCall)]

    @property
    def active_thunee_call(self) -> Optional[SpecialCall]:
        """The Thunee/Royals declaration of this round (open or blind), if any."""
        for call in reversed(self.special_calls):
            if call.is_thunee_like:
                return call
        return None

    @property
    def is_royals_mode(self) -> bool:
        call = self.active_thunee_call
        return call is not None and call.category == CallCategory.ROYALS

    @property
    def tricks_completed(self) -> int:
        return len(self.completed_tricks)

    @property
    def all_tricks_complete(self) -> bool:
        return len(self.completed_tricks) == TRICKS_PER_ROUND

    @property
    def last_completed_trick(self) -> Optional[Trick]:
        return self.completed_tricks[-1] if self.completed_tricks else None

    @property
    def any_card_played(self) -> bool:
        if self.completed_tricks:
            return True
        return self.current_trick is not None and not self.current_trick.is_empty

    @property
    def is_default_trump_maker(self) -> bool:
        """True when everyone passed and the seat after the dealer took trump at 0."""
        return self.pass_count == NUM_SEATS and self.active_thunee_call is None

    # ---- builders ----

    def with_player(self, player: Player) -> "RoundState":
        players = tuple(player if p.seat == player.seat else p for p in self.players)
        return replace(self, players=players)

    def with_team(self, team: Team) -> "RoundState":
        teams = tuple(team if t.team_number == team.team_number else t for t in self.teams)
        return replace(self, teams=teams)

    def with_call(self, call: Call) -> "RoundState":
        return replace(self, call_history=self.call_history + (call,))

    def distribute_remaining_cards(self) -> "RoundState":
        """Hand the held-back cards to every seat and clear ``remaining_cards``."""
        if self.remaining_cards is None:
            return self
        players = tuple(
            p.with_hand(p.hand + self.remaining_cards[p.seat]) for p in self.players
        )
        return replace(self, players=players, remaining_cards=None)

    def __str__(self) -> str:
        trump = self.trump_suit.name if self.trump_suit is not None else "unset"
        return (
            f"RoundState(phase: {self.phase.value}, turn: {self.current_turn.name}, "
            f"tricks: {self.tricks_completed}/{TRICKS_PER_ROUND}, trump: {trump})"
        )


@dataclass(frozen=True)
class MatchState:
    """A match played to ``match_target`` balls over any number of rounds."""

    config: GameConfig
    players: tuple[Player, ...]
    teams: tuple[Team, Team]
    match_target: int
    current_round: Optional[RoundState] = None
    completed_rounds: tuple[RoundState, ...] = ()
    is_complete: bool = False
    winning_team: Optional[int] = None

    def evolve(self, **changes) -> "MatchState":
        return replace(self, **changes)

    @property
    def rounds_played(self) -> int:
        return len(self.completed_rounds) + (1 if self.current_round is not None else 0)

    def balls(self, team_number: int) -> int:
        return self.teams[team_number].balls

    def add_balls(self, team_number: int, balls: int) -> "MatchState":
        teams = tuple(
            t.add_balls(balls) if t.team_number == team_number else t for t in self.teams
        )
        return replace(self, teams=teams)

    def with_round(self, round_state: RoundState) -> "MatchState":
        return replace(self, current_round=round_state)

    def leader(self) -> Optional[int]:
        """Team that has reached the target with strictly more balls, else None."""
        reached = [t for t in self.teams if t.balls >= self.match_target]
        if not reached:
            return None
        a, b = self.teams
        if a.balls == b.balls:
            return None
        return a.team_number if a.balls > b.balls else b.team_number

    def complete_current_round(self) -> "MatchState":
        """Archive the current round and settle whether the match is over."""
        if self.current_round is None:
            raise ValueError("No current round to complete")
        winner = self.leader()
        return replace(
            self,
            current_round=None,
            completed_rounds=self.completed_rounds + (self.current_round,),
            is_complete=winner is not None,
            winning_team=winner,
        )

    def __str__(self) -> str:
        return (
            f"MatchState(rounds: {self.rounds_played}, "
            f"{self.teams[0].name}: {self.teams[0].balls} balls, "
            f"{self.teams[1].name}: {self.teams[1].balls} balls, "
            f"target: {self.match_target}, complete: {self.is_complete})"
        )

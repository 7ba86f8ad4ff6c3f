"""
Call validation: bids, passes and special declarations.

Bidding is first-come-first-served: any seat may bid or pass while the round is
in bidding, as long as the bid beats the standing one and the seat has not
passed already. Special declarations are checked against the round phase,
their timing window, the house-rule toggles in ``GameConfig`` and exclusivity
(one Thunee/Royals per round, one Double, one Kunuck).
"""
from __future__ import annotations

from typing import NamedTuple, Optional

from .calls import BidCall, Call, CallCategory, PassCall, SpecialCall, unknown_call
from .config import GameConfig
from .deck import (
    BID_INCREMENT,
    CARDS_PER_PLAYER,
    Card,
    INITIAL_DEAL_CARDS,
    Rank,
    Suit,
    TRICKS_PER_ROUND,
)
from .state import Player, RoundPhase, RoundState

# Jodi point values
JODI_KING_QUEEN = 20
JODI_KING_QUEEN_TRUMP = 40
JODI_JACK_QUEEN_KING = 30
JODI_JACK_QUEEN_KING_TRUMP = 50

_JODI_WINDOWS = (1, 3)  # completed tricks when first/third-only Jodi is on


class CallCheck(NamedTuple):
    ok: bool
    reason: Optional[str] = None


_VALID = CallCheck(True)


def _invalid(reason: str) -> CallCheck:
    return CallCheck(False, reason)


def jodi_points(cards, trump_suit: Suit | None) -> int:
    """Points of a Jodi combination (0 if the cards are not a valid combination)."""
    suit = jodi_suit(cards)
    if suit is None:
        return 0
    is_trump = trump_suit is not None and suit == trump_suit
    if len(cards) == 2:
        return JODI_KING_QUEEN_TRUMP if is_trump else JODI_KING_QUEEN
    return JODI_JACK_QUEEN_KING_TRUMP if is_trump else JODI_JACK_QUEEN_KING


def jodi_suit(cards) -> Optional[Suit]:
    """Suit of a valid K+Q or J+Q+K combination, else None."""
    cards = list(cards)
    if len(cards) not in (2, 3):
        return None
    suits = {c.suit for c in cards}
    if len(suits) != 1:
        return None
    ranks = sorted(c.rank for c in cards)
    wanted = [Rank.KING, Rank.QUEEN] if len(cards) == 2 else [Rank.JACK, Rank.KING, Rank.QUEEN]
    if ranks != sorted(wanted):
        return None
    return suits.pop()


def find_jodi_combos(hand) -> list[tuple[Card, ...]]:
    """Best Jodi per suit held: J+Q+K when available, else K+Q."""
    combos: list[tuple[Card, ...]] = []
    for suit in Suit:
        held = {c.rank: c for c in hand if c.suit == suit}
        if Rank.KING in held and Rank.QUEEN in held:
            if Rank.JACK in held:
                combos.append((held[Rank.JACK], held[Rank.QUEEN], held[Rank.KING]))
            else:
                combos.append((held[Rank.KING], held[Rank.QUEEN]))
    return combos


class CallValidator:
    """Validates every call against a round and the match configuration."""

    def __init__(self, config: GameConfig):
        self.config = config

    # ---- bidding ----

    def validate_bid(self, bid: BidCall, state: RoundState) -> CallCheck:
        if state.phase != RoundPhase.BIDDING:
            return _invalid("Can only bid during bidding phase")
        if bid.amount <= 0 or bid.amount % BID_INCREMENT != 0:
            return _invalid(f"Bid must be a positive multiple of {BID_INCREMENT}")
        if bid.caller in state.passed_seats:
            return _invalid(f"{bid.caller.name} has already passed this round")
        high = state.highest_bid
        if high is not None:
            if bid.amount <= high.amount:
                return _invalid(f"Bid must beat current bid of {high.amount}")
            if (
                not self.config.enable_call_over_teammates
                and high.caller.team_number == bid.caller.team_number
            ):
                return _invalid("Cannot bid over your own team (calling over teammates is off)")
        return _VALID

    def validate_pass(self, call: PassCall, state: RoundState) -> CallCheck:
        if state.phase != RoundPhase.BIDDING:
            return _invalid("Can only pass during bidding phase")
        if call.caller in state.passed_seats:
            return _invalid(f"{call.caller.name} has already passed this round")
        if state.highest_bid is not None and state.highest_bid.caller == call.caller:
            return _invalid("You hold the highest bid")
        return _VALID

    # ---- special declarations ----

    def validate_thunee(self, call: SpecialCall, state: RoundState, player: Player) -> CallCheck:
        name = call.label
        if call.is_royals and not self.config.enable_royals:
            return _invalid("Royals is disabled in game config")
        if state.active_thunee_call is not None:
            return _invalid(f"{state.active_thunee_call.label} has already been called this round")
        if call.blind:
            if call.is_royals and not self.config.enable_blind_royals:
                return _invalid("Blind Royals is disabled in game config")
            if not call.is_royals and not self.config.enable_blind_thunee:
                return _invalid("Blind Thunee is disabled in game config")
            if state.phase not in (RoundPhase.BIDDING, RoundPhase.CHOOSING_TRUMP) or state.remaining_cards is None:
                return _invalid(f"{name} must be called after the first {INITIAL_DEAL_CARDS} cards, before the rest are dealt")
            if player.hand_size != INITIAL_DEAL_CARDS:
                return _invalid(f"Must have exactly {INITIAL_DEAL_CARDS} cards to call {name}")
            return _VALID
        if state.phase != RoundPhase.PLAYING:
            return _invalid(f"{name} can only be called during play")
        if state.any_card_played:
            return _invalid(f"{name} must be called before the first card is played")
        if player.hand_size != CARDS_PER_PLAYER:
            return _invalid(f"Must have all {CARDS_PER_PLAYER} cards to call {name}")
        return _VALID

    def validate_jodi(self, call: SpecialCall, state: RoundState, player: Player) -> CallCheck:
        if not self.config.enable_jodi:
            return _invalid("Jodi is disabled in game config")
        if state.phase != RoundPhase.PLAYING:
            return _invalid("Jodi can only be called during play")
        if state.active_thunee_call is not None:
            return _invalid(f"Jodi cannot be called during {state.active_thunee_call.label}")
        done = state.tricks_completed
        if done == 0:
            return _invalid("Jodi can only be called after a trick has been won")
        if self.config.enable_first_third_only_jodi_calls and done not in _JODI_WINDOWS:
            return _invalid("Jodi can only be called after the first or third trick")
        last = state.last_completed_trick
        if last is None or last.winner is None or last.winner.team_number != player.team_number:
            return _invalid("Only the team that won the last trick can call Jodi")
        for card in call.cards:
            if not player.has_card(card):
                return _invalid(f"You do not hold {card}")
        if len(call.cards) not in (2, 3):
            return _invalid("Jodi must be 2 or 3 cards")
        suit = jodi_suit(call.cards)
        if suit is None:
            if len(call.cards) == 2:
                return _invalid("2-card Jodi must be King + Queen of the same suit")
            return _invalid("3-card Jodi must be Jack + Queen + King of the same suit")
        for earlier in state.special_calls:
            if (
                earlier.category == CallCategory.JODI
                and earlier.caller.team_number == player.team_number
                and jodi_suit(earlier.cards) == suit
            ):
                return _invalid(f"Jodi in {suit.display_name.lower()} has already been called by your team")
        return _VALID

    def _validate_last_trick_call(self, call: SpecialCall, state: RoundState, enabled: bool) -> CallCheck:
        name = call.label
        if not enabled:
            return _invalid(f"{name} is disabled in game config")
        if state.phase != RoundPhase.PLAYING:
            return _invalid(f"{name} can only be called during play")
        if state.active_thunee_call is not None:
            return _invalid(f"{name} cannot be called during {state.active_thunee_call.label}")
        if state.tricks_completed != TRICKS_PER_ROUND - 1:
            return _invalid(f"{name} can only be called on the last trick")
        if any(c.category == call.category for c in state.special_calls):
            return _invalid(f"{name} has already been called this round")
        return _VALID

    def validate_special(self, call: SpecialCall, state: RoundState, player: Player) -> CallCheck:
        category = call.category
        if category in (CallCategory.THUNEE, CallCategory.ROYALS):
            return self.validate_thunee(call, state, player)
        if category == CallCategory.JODI:
            return self.validate_jodi(call, state, player)
        if category == CallCategory.DOUBLE:
            return self._validate_last_trick_call(call, state, self.config.enable_double)
        if category == CallCategory.KUNUCK:
            return self._validate_last_trick_call(call, state, self.config.enable_kunuck)
        raise ValueError(f"Unknown special call category {category}")

    def validate_call(self, call: Call, state: RoundState) -> CallCheck:
        """Dispatch on the call type."""
        if isinstance(call, BidCall):
            return self.validate_bid(call, state)
        if isinstance(call, PassCall):
            return self.validate_pass(call, state)
        if isinstance(call, SpecialCall):
            return self.validate_special(call, state, state.player_at(call.caller))
        unknown_call(call)

"""
Round and match state machine: bidding → choosingTrump → playing → scoring.

``GameEngine`` is the single entry point for actions. Every action takes the
current immutable state and returns an ``ActionResult``: either the next state
or a human-readable reason the action was refused. Rule violations never
raise; only malformed input (wrong number of players) does.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from .calls import BidCall, PassCall, SpecialCall
from .config import DEFAULT_CONFIG, GameConfig
from .deal import deal_split, first_to_bid, next_dealer
from .deck import Card
from .play import current_winning_seat, determine_winner, legal_cards, validate_card_play
from .play import will_card_win as _will_card_win
from .scoring import ScoringBreakdown, match_target_after
from .scoring import score_round as _score_round
from .seats import Seat
from .state import MatchState, RoundPhase, RoundState, Trick, TrumpSource, new_players, new_teams
from .turns import bidding_outcome, first_trick_leader, next_bidder, thunee_leader
from .validation import CallValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    """Success carries the new state(s); failure carries ``error``."""

    ok: bool
    error: Optional[str] = None
    round_state: Optional[RoundState] = None
    match_state: Optional[MatchState] = None
    breakdown: Optional[ScoringBreakdown] = None

    @classmethod
    def success(
        cls,
        round_state: RoundState | None = None,
        match_state: MatchState | None = None,
        breakdown: ScoringBreakdown | None = None,
    ) -> "ActionResult":
        return cls(ok=True, round_state=round_state, match_state=match_state, breakdown=breakdown)

    @classmethod
    def failure(cls, error: str) -> "ActionResult":
        return cls(ok=False, error=error)

    def __bool__(self) -> bool:
        return self.ok


def _reject(action: str, reason: str) -> ActionResult:
    logger.debug("Rejected %s: %s", action, reason)
    return ActionResult.failure(reason)


class GameEngine:
    """Applies actions to round and match states under one ``GameConfig``."""

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
        seed: int | None = None,
    ):
        self.config = config
        self.rng = rng if rng is not None else random.Random(seed)
        self.validator = CallValidator(config)

    # ---- match lifecycle ----

    def create_match(self, names: Sequence[str], bots: Sequence[bool] | None = None) -> MatchState:
        """New match with no round dealt yet. Raises ValueError unless 4 names are given."""
        players = new_players(names, bots)
        return MatchState(
            config=self.config,
            players=players,
            teams=new_teams(),
            match_target=self.config.match_target,
        )

    def start_new_round(self, match: MatchState, dealer: Seat | None = None) -> ActionResult:
        """Deal 4 cards each, hold back the reserve and open bidding."""
        if match.is_complete:
            return _reject("start round", "Match is already complete")
        if match.current_round is not None:
            return _reject("start round", "A round is already in progress")
        if dealer is None:
            if match.completed_rounds:
                dealer = next_dealer(match.completed_rounds[-1].dealer)
            else:
                dealer = Seat.NORTH
        split = deal_split(dealer, self.rng)
        players = tuple(p.with_hand(split.initial[p.seat]) for p in match.players)
        teams = tuple(t.reset_round() for t in match.teams)
        round_state = RoundState(
            phase=RoundPhase.BIDDING,
            players=players,
            teams=teams,
            dealer=dealer,
            current_turn=first_to_bid(dealer),
            remaining_cards=split.remaining,
        )
        logger.debug("Round %d dealt by %s", match.rounds_played + 1, dealer.name)
        return ActionResult.success(round_state=round_state, match_state=match.with_round(round_state))

    # ---- bidding ----

    def make_bid(self, state: RoundState, seat: Seat, amount: int) -> ActionResult:
        bid = BidCall(caller=seat, amount=amount)
        check = self.validator.validate_bid(bid, state)
        if not check.ok:
            return _reject(str(bid), check.reason)
        new = state.with_call(bid).evolve(highest_bid=bid)
        logger.debug("%s bids %d", seat.name, amount)
        return ActionResult.success(round_state=self._after_bidding_call(new, seat))

    def pass_bid(self, state: RoundState, seat: Seat) -> ActionResult:
        call = PassCall(caller=seat)
        check = self.validator.validate_pass(call, state)
        if not check.ok:
            return _reject(str(call), check.reason)
        new = state.with_call(call).evolve(pass_count=state.pass_count + 1)
        logger.debug("%s passes", seat.name)
        return ActionResult.success(round_state=self._after_bidding_call(new, seat))

    def _after_bidding_call(self, state: RoundState, caller: Seat) -> RoundState:
        outcome = bidding_outcome(state)
        if outcome is None:
            upcoming = next_bidder(state, caller)
            return state.evolve(current_turn=upcoming if upcoming is not None else caller)
        logger.debug(
            "Bidding closed: %s chooses trump at %d%s",
            outcome.chooser.name,
            outcome.amount,
            " (all passed)" if outcome.all_passed else "",
        )
        return state.evolve(
            phase=RoundPhase.CHOOSING_TRUMP,
            trump_chooser=outcome.chooser,
            trump_making_team=outcome.chooser.team_number,
            current_turn=outcome.chooser,
        )

    # ---- trump ----

    def select_trump(self, state: RoundState, card: Card) -> ActionResult:
        """The chooser taps one of their cards; its suit is trump and it stays in hand."""
        if state.phase != RoundPhase.CHOOSING_TRUMP:
            return _reject("select trump", "Can only select trump during trump selection")
        chooser = state.trump_chooser
        if chooser is None:
            return _reject("select trump", "No trump chooser for this round")
        if not state.player_at(chooser).has_card(card):
            return _reject("select trump", f"{card} is not in {chooser.name}'s hand")
        leader = first_trick_leader(chooser)
        new = state.evolve(
            trump_suit=card.suit,
            trump_source=TrumpSource.SELECTED,
            trump_card=card,
        ).distribute_remaining_cards().evolve(
            phase=RoundPhase.PLAYING,
            current_turn=leader,
            current_trick=Trick(lead_seat=leader),
        )
        logger.debug("Trump is %s (%s); %s leads", card.suit.display_name, card, leader.name)
        return ActionResult.success(round_state=new)

    # ---- play ----

    def play_card(self, state: RoundState, card: Card, seat: Seat | None = None) -> ActionResult:
        if state.phase != RoundPhase.PLAYING or state.current_trick is None:
            return _reject("play card", "Can only play cards during play")
        if seat is None:
            seat = state.current_turn
        if seat != state.current_turn:
            return _reject("play card", f"Not {seat.name}'s turn; waiting for {state.current_turn.name}")
        player = state.player_at(seat)
        trick = state.current_trick
        check = validate_card_play(card, player, trick)
        if not check.ok:
            return _reject(f"play {card}", check.reason)

        trick = trick.with_card(seat, card)
        new = state.with_player(player.without_card(card))
        if new.trump_suit is None:
            new = new.evolve(trump_suit=card.suit, trump_source=TrumpSource.FIRST_CARD, trump_card=card)
            logger.debug("Trump set from first card: %s", card.suit.display_name)

        if not trick.is_complete:
            return ActionResult.success(round_state=new.evolve(current_trick=trick, current_turn=trick.next_to_play))
        return ActionResult.success(round_state=self._complete_trick(new, trick))

    def _complete_trick(self, state: RoundState, trick: Trick) -> RoundState:
        winner = determine_winner(trick, state.trump_suit, state.is_royals_mode)
        trick = trick.with_winner(winner)
        new = state.with_team(state.team_for(winner).add_trick(trick.points)).evolve(
            completed_tricks=state.completed_tricks + (trick,),
            current_turn=winner,
        )
        logger.debug("Trick %d won by %s (%d points)", new.tricks_completed, winner.name, trick.points)
        thunee_call = new.active_thunee_call
        if thunee_call is not None and winner != thunee_call.caller:
            logger.debug("%s lost a trick; round over", thunee_call.label)
            return new.evolve(phase=RoundPhase.SCORING, current_trick=None)
        if new.all_tricks_complete:
            logger.debug("All tricks played; scoring")
            return new.evolve(phase=RoundPhase.SCORING, current_trick=None)
        return new.evolve(current_trick=Trick(lead_seat=winner))

    # ---- special calls ----

    def make_special_call(self, state: RoundState, call: SpecialCall) -> ActionResult:
        check = self.validator.validate_special(call, state, state.player_at(call.caller))
        if not check.ok:
            return _reject(str(call), check.reason)
        caller = call.caller
        if call.is_thunee_like:
            if call.blind:
                assert state.remaining_cards is not None
                call = replace(call, cards=tuple(state.remaining_cards[caller]))
                new = state.with_call(call).distribute_remaining_cards()
            else:
                new = state.with_call(call)
            leader = thunee_leader(new)
            # Trump is unknown until the caller leads.
            new = new.evolve(
                phase=RoundPhase.PLAYING,
                trump_suit=None,
                trump_source=None,
                trump_card=None,
                trump_chooser=caller,
                trump_making_team=caller.team_number,
                current_turn=leader,
                current_trick=Trick(lead_seat=leader),
            )
        else:
            new = state.with_call(call)
        logger.debug("%s declared", call)
        return ActionResult.success(round_state=new)

    # ---- scoring ----

    def score_round(self, match: MatchState, round_state: RoundState | None = None) -> ActionResult:
        """
        Score the match's current round, add the balls and archive the round.

        ``round_state`` is optional; when given it must be the match's own
        current round, so a round is never scored twice or swapped in.
        """
        current = match.current_round
        if current is None:
            return _reject("score round", "No round to score")
        if round_state is not None and round_state != current:
            return _reject("score round", "Round does not belong to this match")
        round_state = current
        if round_state.phase != RoundPhase.SCORING:
            return _reject("score round", "Round is not ready for scoring")
        breakdown = _score_round(round_state, self.config)
        new = match
        for team_number, balls in enumerate(breakdown.balls_awarded):
            if balls:
                new = new.add_balls(team_number, balls)
        new = new.evolve(match_target=match_target_after(breakdown, new.match_target))
        new = new.complete_current_round()
        if new.is_complete:
            logger.debug("Match won by team %d", new.winning_team)
        return ActionResult.success(round_state=round_state, match_state=new, breakdown=breakdown)

    # ---- read-only queries ----

    def get_legal_cards(self, state: RoundState, seat: Seat | None = None) -> list[Card]:
        """Cards ``seat`` may play now (empty when it is not their turn to play)."""
        if state.phase != RoundPhase.PLAYING or state.current_trick is None:
            return []
        if seat is None:
            seat = state.current_turn
        if seat != state.current_turn:
            return []
        return legal_cards(state.player_at(seat).hand, state.current_trick)

    def is_card_legal(self, state: RoundState, card: Card, seat: Seat | None = None) -> bool:
        return card in self.get_legal_cards(state, seat)

    def will_card_win(self, state: RoundState, card: Card) -> bool:
        if state.current_trick is None:
            return False
        return _will_card_win(card, state.current_trick, state.trump_suit, state.is_royals_mode)

    def current_winner(self, state: RoundState) -> Optional[Seat]:
        if state.current_trick is None:
            return None
        return current_winning_seat(state.current_trick, state.trump_suit, state.is_royals_mode)

"""
Round scoring: trick points, the 105 threshold and ball awards.

Precedence:
  1. An active Thunee/Royals (open or blind) decides the round on its own: the
     caller must win every trick. Success pays the caller's team, any trick
     lost (partner or opponent) pays the opponents the partner-catch award.
  2. Otherwise each team's Jodi points are added to its trick points, and the
     trump-making team scores 1 ball + 1 per full 10 points above 105 if it
     reached the threshold. If not, the opponents get 1 ball, or 2 under
     call-and-loss (real bid, no special call made).
  3. Double and Kunuck, made on the last trick, pay out on top of (2).
Scoring a Kunuck also lifts the match target to 13.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Optional

from .calls import CallCategory, SpecialCall
from .config import GameConfig, KUNUCK_MATCH_TARGET
from .deck import LAST_TRICK_BONUS, TRICKS_PER_ROUND, WINNING_THRESHOLD
from .seats import other_team
from .state import RoundState
from .validation import jodi_points

logger = logging.getLogger(__name__)

THUNEE_SUCCESS_BALLS = 4
ROYALS_SUCCESS_BALLS = 4
PARTNER_CATCH_BALLS = 8
BLIND_FAIL_BALLS = 8
CALL_AND_LOSS_BALLS = 2
DOUBLE_SUCCESS_BALLS = 2
DOUBLE_FAIL_BALLS = 4
KUNUCK_SUCCESS_BALLS = 3
KUNUCK_FAIL_BALLS = 4


class ScoringBreakdown(NamedTuple):
    """Per-team points and balls (indexed by team number) plus a readable account."""
    team_points: tuple[int, int]
    balls_awarded: tuple[int, int]
    description: str
    details: tuple[str, ...] = ()
    kunuck_called: bool = False

    def __str__(self) -> str:
        return self.description


def team_trick_points(state: RoundState, team_number: int) -> int:
    """Card points won by the team, plus 10 if it took the sixth trick."""
    points = 0
    for i, trick in enumerate(state.completed_tricks):
        if trick.winner is None or trick.winner.team_number != team_number:
            continue
        points += trick.points
        if i == TRICKS_PER_ROUND - 1:
            points += LAST_TRICK_BONUS
    return points


def team_jodi_points(state: RoundState, team_number: int) -> int:
    return sum(
        jodi_points(call.cards, state.trump_suit)
        for call in state.special_calls
        if call.category == CallCategory.JODI and call.caller.team_number == team_number
    )


def balls_from_points(points: int) -> int:
    """1 base ball + 1 per full 10 points above the threshold; 0 below it."""
    if points < WINNING_THRESHOLD:
        return 0
    return 1 + (points - WINNING_THRESHOLD) // 10


def thunee_success_balls(call: SpecialCall, config: GameConfig) -> int:
    if call.blind:
        return config.blind_royals_success_balls if call.is_royals else config.blind_thunee_success_balls
    return ROYALS_SUCCESS_BALLS if call.is_royals else THUNEE_SUCCESS_BALLS


def thunee_failure_balls(call: SpecialCall) -> int:
    return BLIND_FAIL_BALLS if call.blind else PARTNER_CATCH_BALLS


def call_and_loss_applies(state: RoundState, config: GameConfig) -> bool:
    return (
        config.enable_call_and_loss
        and state.highest_bid is not None
        and not state.special_calls
    )


def _find_call(state: RoundState, category: CallCategory) -> Optional[SpecialCall]:
    for call in state.special_calls:
        if call.category == category:
            return call
    return None


def _score_thunee(state: RoundState, call: SpecialCall, config: GameConfig) -> ScoringBreakdown:
    caller = call.caller
    team = caller.team_number
    opp = other_team(team)
    tricks = state.completed_tricks
    caller_tricks = sum(1 for t in tricks if t.winner == caller)
    partner_tricks = sum(1 for t in tricks if t.winner == caller.partner)
    opponent_tricks = sum(1 for t in tricks if t.winner is not None and t.winner.team_number == opp)
    details = [
        f"{call.label} called by {caller.name} (team {team})",
        f"Caller won {caller_tricks} trick(s), partner {partner_tricks}, opponents {opponent_tricks}",
    ]
    balls = [0, 0]
    if caller_tricks == TRICKS_PER_ROUND:
        won = thunee_success_balls(call, config)
        balls[team] = won
        details.append(f"Success: team {team} +{won} balls")
    else:
        lost = thunee_failure_balls(call)
        balls[opp] = lost
        if partner_tricks:
            details.append(f"Partner catch: team {opp} +{lost} balls")
        else:
            details.append(f"Failure: team {opp} +{lost} balls")
    points = (team_trick_points(state, 0), team_trick_points(state, 1))
    return ScoringBreakdown(
        team_points=points,
        balls_awarded=(balls[0], balls[1]),
        description=f"{call.label}: team 0 +{balls[0]} balls, team 1 +{balls[1]} balls",
        details=tuple(details),
    )


def _score_normal(state: RoundState, config: GameConfig) -> ScoringBreakdown:
    counting = state.trump_making_team
    if counting is None:
        raise ValueError("Cannot score a round without a trump-making team")
    opp = other_team(counting)
    card_points = [team_trick_points(state, 0), team_trick_points(state, 1)]
    jodi = [team_jodi_points(state, 0), team_jodi_points(state, 1)]
    totals = [card_points[t] + jodi[t] for t in (0, 1)]
    details = []
    for t in (0, 1):
        extra = f" + {jodi[t]} Jodi" if jodi[t] else ""
        details.append(f"Team {t}: {card_points[t]} card points{extra} = {totals[t]}")
    details.append(f"Counting team: team {counting} (made trump), {totals[counting]} points")

    balls = [0, 0]
    if totals[counting] >= WINNING_THRESHOLD:
        won = balls_from_points(totals[counting])
        balls[counting] = won
        details.append(f"Reached {WINNING_THRESHOLD}: team {counting} +{won} balls")
    elif call_and_loss_applies(state, config):
        balls[opp] = CALL_AND_LOSS_BALLS
        details.append(f"Call and loss: team {opp} +{CALL_AND_LOSS_BALLS} balls")
    else:
        balls[opp] = 1
        details.append(f"Missed {WINNING_THRESHOLD}: team {opp} +1 ball")

    last = state.last_completed_trick
    last_winner = last.winner if last is not None and state.all_tricks_complete else None

    double_call = _find_call(state, CallCategory.DOUBLE)
    if double_call is not None:
        team = double_call.caller.team_number
        if last_winner is not None and last_winner.team_number == team:
            balls[team] += DOUBLE_SUCCESS_BALLS
            details.append(f"Double made: team {team} +{DOUBLE_SUCCESS_BALLS} balls")
        else:
            balls[other_team(team)] += DOUBLE_FAIL_BALLS
            details.append(f"Double failed: team {other_team(team)} +{DOUBLE_FAIL_BALLS} balls")

    kunuck_call = _find_call(state, CallCategory.KUNUCK)
    if kunuck_call is not None:
        team = kunuck_call.caller.team_number
        if last_winner == kunuck_call.caller:
            balls[team] += KUNUCK_SUCCESS_BALLS
            details.append(f"Kunuck made: team {team} +{KUNUCK_SUCCESS_BALLS} balls")
        else:
            balls[other_team(team)] += KUNUCK_FAIL_BALLS
            details.append(f"Kunuck failed: team {other_team(team)} +{KUNUCK_FAIL_BALLS} balls")

    return ScoringBreakdown(
        team_points=(totals[0], totals[1]),
        balls_awarded=(balls[0], balls[1]),
        description=f"Normal round: team 0 +{balls[0]} balls, team 1 +{balls[1]} balls",
        details=tuple(details),
        kunuck_called=kunuck_call is not None,
    )


def score_round(state: RoundState, config: GameConfig) -> ScoringBreakdown:
    """
    Score a finished round. A Thunee/Royals round may end before six tricks;
    any other round must have all six tricks complete.
    """
    thunee_call = state.active_thunee_call
    if thunee_call is not None:
        breakdown = _score_thunee(state, thunee_call, config)
    else:
        if not state.all_tricks_complete:
            raise ValueError("Cannot score incomplete round")
        breakdown = _score_normal(state, config)
    logger.debug("Scored round: %s", breakdown.description)
    return breakdown


def match_target_after(breakdown: ScoringBreakdown, current_target: int) -> int:
    """Kunuck lifts the match target to 13; the target never goes down."""
    if breakdown.kunuck_called:
        return max(current_target, KUNUCK_MATCH_TARGET)
    return current_target

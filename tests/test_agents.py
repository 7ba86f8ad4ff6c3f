"""Relay actions, the random agent and random self-play."""
import pytest

from thunee.actions import ActionType, GameAction, apply_action, legal_actions
from thunee.agents import RandomAgent
from thunee.config import basic_config
from thunee.game import GameEngine
from thunee.play_random import run_random_match
from thunee.scoring import team_trick_points
from thunee.seats import Seat
from thunee.state import RoundPhase

from helpers import MIXED_INITIAL, MIXED_RESERVE, stacked_rng

NAMES = ["Nia", "Eli", "Sam", "Wes"]


def _started():
    engine = GameEngine(rng=stacked_rng(Seat.NORTH, MIXED_INITIAL, MIXED_RESERVE))
    match = engine.start_new_round(engine.create_match(NAMES), Seat.NORTH).match_state
    return engine, match


def test_random_agent_picks_legal_action():
    agent = RandomAgent(seed=0)
    legal = [GameAction(ActionType.PASS, Seat.EAST), GameAction(ActionType.BID, Seat.EAST, {"amount": 10})]
    for _ in range(10):
        assert agent.act(None, legal) in legal


def test_random_agent_no_legal_actions():
    with pytest.raises(ValueError):
        RandomAgent(seed=0).act(None, [])


def test_random_agent_is_seeded():
    legal = [GameAction(ActionType.BID, Seat.EAST, {"amount": a}) for a in range(10, 160, 10)]
    a = [RandomAgent(seed=3).act(None, legal) for _ in range(5)]
    b = [RandomAgent(seed=3).act(None, legal) for _ in range(5)]
    assert a == b


def test_action_dict_round_trip():
    action = GameAction(ActionType.PLAY_CARD, Seat.WEST, {"card": "10♠"}, player_id="p3", timestamp=17)
    d = action.to_dict()
    assert d["type"] == "playCard"
    assert d["seat"] == "WEST"
    assert GameAction.from_dict(d) == action


def test_legal_actions_while_bidding():
    engine, match = _started()
    actions = legal_actions(engine, match.current_round, Seat.EAST)
    types = [a.type for a in actions]
    assert ActionType.PASS in types
    bids = [a.data["amount"] for a in actions if a.type == ActionType.BID]
    assert bids == list(range(10, 160, 10))
    blind = [a for a in actions if a.data.get("blind")]
    assert {a.type for a in blind} == {ActionType.CALL_THUNEE, ActionType.CALL_ROYALS}


def test_legal_actions_without_special_calls():
    engine = GameEngine(basic_config(), rng=stacked_rng(Seat.NORTH, MIXED_INITIAL, MIXED_RESERVE))
    match = engine.start_new_round(engine.create_match(NAMES), Seat.NORTH).match_state
    actions = legal_actions(engine, match.current_round, Seat.EAST)
    assert {a.type for a in actions} == {ActionType.PASS, ActionType.BID}


def test_apply_action_updates_match():
    engine, match = _started()
    result = apply_action(engine, match, GameAction(ActionType.BID, Seat.EAST, {"amount": 40}))
    assert result.ok
    assert result.match_state.current_round.highest_bid.amount == 40
    refused = apply_action(engine, result.match_state, GameAction(ActionType.BID, Seat.SOUTH, {"amount": 40}))
    assert not refused.ok


def test_apply_action_malformed_payload():
    engine, match = _started()
    assert not apply_action(engine, match, GameAction(ActionType.BID, Seat.EAST)).ok
    bad_card = GameAction(ActionType.PLAY_CARD, Seat.EAST, {"card": "Z♥"})
    assert not apply_action(engine, match, bad_card).ok


def test_select_trump_only_by_chooser():
    engine, match = _started()
    for seat in (Seat.EAST, Seat.SOUTH, Seat.WEST, Seat.NORTH):
        match = apply_action(engine, match, GameAction(ActionType.PASS, seat)).match_state
    wrong = apply_action(engine, match, GameAction(ActionType.SELECT_TRUMP, Seat.NORTH, {"card": "J♥"}))
    assert not wrong.ok
    chooser = legal_actions(engine, match.current_round, Seat.EAST)
    assert {a.data["card"] for a in chooser if a.type == ActionType.SELECT_TRUMP} == {"9♥", "J♠", "A♣", "10♦"}


def test_random_match_runs_to_completion():
    rounds = []
    summary = run_random_match(seed=5, max_rounds=60, on_round=lambda n, b, m: rounds.append((n, b)))
    match = summary.match
    assert len(summary.breakdowns) == len(rounds) == len(match.completed_rounds)
    assert match.is_complete or len(summary.breakdowns) == 60
    for finished in match.completed_rounds:
        assert finished.phase == RoundPhase.SCORING
        if finished.all_tricks_complete:
            assert team_trick_points(finished, 0) + team_trick_points(finished, 1) == 314
    awarded = [sum(b.balls_awarded[t] for b in summary.breakdowns) for t in (0, 1)]
    assert awarded == [match.balls(0), match.balls(1)]


def test_random_match_is_reproducible():
    a = run_random_match(seed=8, max_rounds=5)
    b = run_random_match(seed=8, max_rounds=5)
    assert a.breakdowns == b.breakdowns
    assert a.match == b.match

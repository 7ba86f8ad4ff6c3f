"""
Relay-level actions.

A ``GameAction`` is what a client submits (bid, pass, tap a trump card, play a
card, declare a call). ``legal_actions`` lists everything a seat may submit in
a given round state, and ``apply_action`` routes an action to the engine and
folds the new round back into the match.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .calls import BidCall, CallCategory, PassCall, SpecialCall
from .deck import BID_INCREMENT, MAX_OFFERED_BID, card_from_token
from .game import ActionResult, GameEngine
from .seats import Seat
from .state import MatchState, RoundPhase, RoundState
from .validation import find_jodi_combos


class ActionType(Enum):
    BID = "bid"
    PASS = "pass"
    SELECT_TRUMP = "selectTrump"
    PLAY_CARD = "playCard"
    CALL_THUNEE = "callThunee"
    CALL_ROYALS = "callRoyals"
    CALL_JODI = "callJodi"
    CALL_DOUBLE = "callDouble"
    CALL_KUNUCK = "callKunuck"


_CALL_CATEGORIES = {
    ActionType.CALL_THUNEE: CallCategory.THUNEE,
    ActionType.CALL_ROYALS: CallCategory.ROYALS,
    ActionType.CALL_JODI: CallCategory.JODI,
    ActionType.CALL_DOUBLE: CallCategory.DOUBLE,
    ActionType.CALL_KUNUCK: CallCategory.KUNUCK,
}
_CALL_ACTIONS = {v: k for k, v in _CALL_CATEGORIES.items()}


@dataclass(frozen=True)
class GameAction:
    """
    One submitted action. ``data`` carries the payload:
    ``amount`` for bids, ``card`` (token) for trump/play, ``blind`` and
    ``cards`` (tokens) for declarations.
    """

    type: ActionType
    seat: Seat
    data: Dict[str, Any] = field(default_factory=dict)
    player_id: str = ""
    timestamp: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "seat": self.seat.name,
            "data": dict(self.data),
            "playerId": self.player_id,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameAction":
        return cls(
            type=ActionType(d["type"]),
            seat=Seat[d["seat"]],
            data=dict(d.get("data") or {}),
            player_id=d.get("playerId", ""),
            timestamp=int(d.get("timestamp", 0)),
        )

    def __str__(self) -> str:
        payload = " ".join(f"{k}={v}" for k, v in self.data.items())
        return f"{self.type.value}({self.seat.name}{' ' + payload if payload else ''})"


def action_for_call(call: SpecialCall) -> GameAction:
    data: Dict[str, Any] = {}
    if call.blind:
        data["blind"] = True
    if call.category == CallCategory.JODI:
        data["cards"] = [c.token for c in call.cards]
    return GameAction(type=_CALL_ACTIONS[call.category], seat=call.caller, data=data)


def call_for_action(action: GameAction) -> SpecialCall:
    category = _CALL_CATEGORIES[action.type]
    cards = tuple(card_from_token(t) for t in action.data.get("cards", []))
    return SpecialCall(
        caller=action.seat,
        category=category,
        blind=bool(action.data.get("blind", False)),
        cards=cards,
    )


def _valid(engine: GameEngine, state: RoundState, call: SpecialCall) -> bool:
    return engine.validator.validate_special(call, state, state.player_at(call.caller)).ok


def _declarations(engine: GameEngine, state: RoundState, seat: Seat) -> List[GameAction]:
    candidates: List[SpecialCall] = []
    for category in (CallCategory.THUNEE, CallCategory.ROYALS):
        candidates.append(SpecialCall(caller=seat, category=category))
        candidates.append(SpecialCall(caller=seat, category=category, blind=True))
    for combo in find_jodi_combos(state.player_at(seat).hand):
        candidates.append(SpecialCall(caller=seat, category=CallCategory.JODI, cards=combo))
    candidates.append(SpecialCall(caller=seat, category=CallCategory.DOUBLE))
    candidates.append(SpecialCall(caller=seat, category=CallCategory.KUNUCK))
    return [action_for_call(c) for c in candidates if _valid(engine, state, c)]


def legal_actions(engine: GameEngine, state: RoundState, seat: Seat) -> List[GameAction]:
    """Every action ``seat`` may submit now. Bids are offered up to 150."""
    actions: List[GameAction] = []
    validator = engine.validator
    if state.phase == RoundPhase.BIDDING:
        if validator.validate_pass(PassCall(seat), state).ok:
            actions.append(GameAction(ActionType.PASS, seat))
        for amount in range(BID_INCREMENT, MAX_OFFERED_BID + 1, BID_INCREMENT):
            if validator.validate_bid(BidCall(seat, amount), state).ok:
                actions.append(GameAction(ActionType.BID, seat, {"amount": amount}))
    elif state.phase == RoundPhase.CHOOSING_TRUMP:
        if seat == state.trump_chooser:
            for card in state.player_at(seat).hand:
                actions.append(GameAction(ActionType.SELECT_TRUMP, seat, {"card": card.token}))
    elif state.phase == RoundPhase.PLAYING:
        for card in engine.get_legal_cards(state, seat):
            actions.append(GameAction(ActionType.PLAY_CARD, seat, {"card": card.token}))
    if state.phase != RoundPhase.SCORING:
        actions.extend(_declarations(engine, state, seat))
    return actions


def apply_to_round(engine: GameEngine, state: RoundState, action: GameAction) -> ActionResult:
    """Route one action to the engine. A malformed payload is refused, not raised."""
    t = action.type
    try:
        if t == ActionType.BID:
            amount = int(action.data["amount"])
        elif t in (ActionType.SELECT_TRUMP, ActionType.PLAY_CARD):
            card = card_from_token(action.data["card"])
        elif t != ActionType.PASS:
            call = call_for_action(action)
    except (KeyError, TypeError, ValueError) as exc:
        return ActionResult.failure(f"Malformed {t.value} action: {exc}")

    if t == ActionType.BID:
        return engine.make_bid(state, action.seat, amount)
    if t == ActionType.PASS:
        return engine.pass_bid(state, action.seat)
    if t == ActionType.SELECT_TRUMP:
        if action.seat != state.trump_chooser:
            return ActionResult.failure(f"{action.seat.name} is not choosing trump")
        return engine.select_trump(state, card)
    if t == ActionType.PLAY_CARD:
        return engine.play_card(state, card, action.seat)
    return engine.make_special_call(state, call)


def apply_action(engine: GameEngine, match: MatchState, action: GameAction) -> ActionResult:
    """Apply to the match's current round; on success the match carries the new round."""
    if match.current_round is None:
        return ActionResult.failure("No round in progress")
    result = apply_to_round(engine, match.current_round, action)
    if not result.ok:
        return result
    return ActionResult.success(round_state=result.round_state, match_state=match.with_round(result.round_state))

"""
Match and round state to/from JSON-compatible dicts.

Keys are camelCase, the shape a network relay or settings store persists.
Seats and suits are stored by member name, phases and call categories by
value, cards as short tokens ("J♥", "10♠").

For multiplayer relays the public snapshot is redacted: every hand becomes an
empty list with its size kept under ``handSize``, and the held-back reserve is
dropped. Each seat receives its own hand separately (``hands_to_dict``) and
puts it back into the public snapshot with ``restore_hand``.
"""
from __future__ import annotations

import copy
import json
from typing import Any, Dict, List, Optional

from .calls import BidCall, Call, CallCategory, PassCall, SpecialCall, unknown_call
from .config import config_from_dict, config_to_dict
from .deck import Card, Suit, card_from_token
from .seats import Seat
from .state import MatchState, Player, RoundPhase, RoundState, Team, Trick, TrumpSource

SCHEMA_VERSION = 1


def _cards(cards) -> List[str]:
    return [c.token for c in cards]


def _parse_cards(tokens) -> tuple[Card, ...]:
    return tuple(card_from_token(t) for t in tokens)


def _opt_seat(seat: Optional[Seat]) -> Optional[str]:
    return seat.name if seat is not None else None


def _parse_opt_seat(name: Optional[str]) -> Optional[Seat]:
    return Seat[name] if name is not None else None


# ---- pieces ----

def player_to_dict(player: Player) -> Dict[str, Any]:
    return {
        "seat": player.seat.name,
        "name": player.name,
        "id": player.player_id,
        "isBot": player.is_bot,
        "hand": _cards(player.hand),
    }


def player_from_dict(d: Dict[str, Any]) -> Player:
    return Player(
        seat=Seat[d["seat"]],
        name=d["name"],
        hand=_parse_cards(d.get("hand", [])),
        is_bot=bool(d.get("isBot", False)),
        player_id=d.get("id", ""),
    )


def team_to_dict(team: Team) -> Dict[str, Any]:
    return {
        "teamNumber": team.team_number,
        "name": team.name,
        "tricksWon": team.tricks_won,
        "trickPoints": team.trick_points,
        "balls": team.balls,
    }


def team_from_dict(d: Dict[str, Any]) -> Team:
    return Team(
        team_number=int(d["teamNumber"]),
        name=d["name"],
        tricks_won=int(d.get("tricksWon", 0)),
        trick_points=int(d.get("trickPoints", 0)),
        balls=int(d.get("balls", 0)),
    )


def trick_to_dict(trick: Trick) -> Dict[str, Any]:
    return {
        "leadSeat": trick.lead_seat.name,
        "plays": [{"seat": s.name, "card": c.token} for s, c in trick.plays],
        "winner": _opt_seat(trick.winner),
    }


def trick_from_dict(d: Dict[str, Any]) -> Trick:
    return Trick(
        lead_seat=Seat[d["leadSeat"]],
        plays=tuple((Seat[p["seat"]], card_from_token(p["card"])) for p in d.get("plays", [])),
        winner=_parse_opt_seat(d.get("winner")),
    )


def call_to_dict(call: Call) -> Dict[str, Any]:
    if isinstance(call, BidCall):
        return {"category": CallCategory.BID.value, "caller": call.caller.name, "amount": call.amount}
    if isinstance(call, PassCall):
        return {"category": CallCategory.PASS.value, "caller": call.caller.name}
    if isinstance(call, SpecialCall):
        return {
            "category": call.category.value,
            "caller": call.caller.name,
            "blind": call.blind,
            "cards": _cards(call.cards),
        }
    unknown_call(call)


def call_from_dict(d: Dict[str, Any]) -> Call:
    category = CallCategory(d["category"])
    caller = Seat[d["caller"]]
    if category == CallCategory.BID:
        return BidCall(caller=caller, amount=int(d["amount"]))
    if category == CallCategory.PASS:
        return PassCall(caller=caller)
    return SpecialCall(
        caller=caller,
        category=category,
        blind=bool(d.get("blind", False)),
        cards=_parse_cards(d.get("cards", [])),
    )


# ---- round / match ----

def round_to_dict(state: RoundState) -> Dict[str, Any]:
    remaining = None
    if state.remaining_cards is not None:
        remaining = {Seat(i).name: _cards(cards) for i, cards in enumerate(state.remaining_cards)}
    return {
        "phase": state.phase.value,
        "players": [player_to_dict(p) for p in state.players],
        "teams": [team_to_dict(t) for t in state.teams],
        "dealer": state.dealer.name,
        "currentTurn": state.current_turn.name,
        "remainingCards": remaining,
        "currentTrick": trick_to_dict(state.current_trick) if state.current_trick is not None else None,
        "completedTricks": [trick_to_dict(t) for t in state.completed_tricks],
        "callHistory": [call_to_dict(c) for c in state.call_history],
        "highestBid": call_to_dict(state.highest_bid) if state.highest_bid is not None else None,
        "passCount": state.pass_count,
        "trumpSuit": state.trump_suit.name if state.trump_suit is not None else None,
        "trumpSource": state.trump_source.value if state.trump_source is not None else None,
        "trumpCard": state.trump_card.token if state.trump_card is not None else None,
        "trumpMakingTeam": state.trump_making_team,
        "trumpChooser": _opt_seat(state.trump_chooser),
    }


def round_from_dict(d: Dict[str, Any]) -> RoundState:
    """Inverse of ``round_to_dict``; also accepts redacted snapshots (empty hands)."""
    remaining = d.get("remainingCards")
    if remaining is not None:
        remaining = tuple(_parse_cards(remaining.get(s.name, [])) for s in Seat)
    highest = d.get("highestBid")
    trick = d.get("currentTrick")
    trump_suit = d.get("trumpSuit")
    trump_source = d.get("trumpSource")
    trump_card = d.get("trumpCard")
    teams = tuple(team_from_dict(t) for t in d["teams"])
    if len(teams) != 2:
        raise ValueError(f"Expected 2 teams, got {len(teams)}")
    return RoundState(
        phase=RoundPhase(d["phase"]),
        players=tuple(player_from_dict(p) for p in d["players"]),
        teams=teams,
        dealer=Seat[d["dealer"]],
        current_turn=Seat[d["currentTurn"]],
        remaining_cards=remaining,
        current_trick=trick_from_dict(trick) if trick is not None else None,
        completed_tricks=tuple(trick_from_dict(t) for t in d.get("completedTricks", [])),
        call_history=tuple(call_from_dict(c) for c in d.get("callHistory", [])),
        highest_bid=call_from_dict(highest) if highest is not None else None,
        pass_count=int(d.get("passCount", 0)),
        trump_suit=Suit[trump_suit] if trump_suit is not None else None,
        trump_source=TrumpSource(trump_source) if trump_source is not None else None,
        trump_card=card_from_token(trump_card) if trump_card is not None else None,
        trump_making_team=d.get("trumpMakingTeam"),
        trump_chooser=_parse_opt_seat(d.get("trumpChooser")),
    )


def match_to_dict(match: MatchState) -> Dict[str, Any]:
    return {
        "schemaVersion": SCHEMA_VERSION,
        "config": config_to_dict(match.config),
        "players": [player_to_dict(p) for p in match.players],
        "teams": [team_to_dict(t) for t in match.teams],
        "matchTarget": match.match_target,
        "currentRound": round_to_dict(match.current_round) if match.current_round is not None else None,
        "completedRounds": [round_to_dict(r) for r in match.completed_rounds],
        "isComplete": match.is_complete,
        "winningTeam": match.winning_team,
    }


def match_from_dict(d: Dict[str, Any]) -> MatchState:
    current = d.get("currentRound")
    return MatchState(
        config=config_from_dict(d.get("config", {})),
        players=tuple(player_from_dict(p) for p in d["players"]),
        teams=tuple(team_from_dict(t) for t in d["teams"]),
        match_target=int(d["matchTarget"]),
        current_round=round_from_dict(current) if current is not None else None,
        completed_rounds=tuple(round_from_dict(r) for r in d.get("completedRounds", [])),
        is_complete=bool(d.get("isComplete", False)),
        winning_team=d.get("winningTeam"),
    )


# ---- redaction ----

def _redact_players(players: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    redacted = []
    for p in players:
        p = dict(p)
        p["handSize"] = len(p.get("hand", []))
        p["hand"] = []
        redacted.append(p)
    return redacted


def _redact_round(r: Dict[str, Any]) -> Dict[str, Any]:
    r = dict(r)
    r["players"] = _redact_players(r["players"])
    r["remainingCards"] = None
    return r


def redact_match_dict(match: MatchState) -> Dict[str, Any]:
    """Public snapshot: no hand contents anywhere, reserve dropped."""
    d = match_to_dict(match)
    d["players"] = _redact_players(d["players"])
    if d["currentRound"] is not None:
        d["currentRound"] = _redact_round(d["currentRound"])
    d["completedRounds"] = [_redact_round(r) for r in d["completedRounds"]]
    return d


def hands_to_dict(match: MatchState) -> Dict[str, List[str]]:
    """Seat name -> card tokens of the round in progress (empty without one)."""
    if match.current_round is None:
        return {}
    return {p.seat.name: _cards(p.hand) for p in match.current_round.players}


def restore_hand(redacted: Dict[str, Any], seat: Seat, tokens: List[str]) -> Dict[str, Any]:
    """Copy of a redacted snapshot with ``seat``'s hand put back into the current round."""
    restored = copy.deepcopy(redacted)
    current = restored.get("currentRound")
    if current is None:
        return restored
    for p in current["players"]:
        if p["seat"] == seat.name:
            p["hand"] = list(tokens)
            p["handSize"] = len(tokens)
    return restored


# ---- JSON strings ----

def match_to_json(match: MatchState, indent: int | None = None) -> str:
    return json.dumps(match_to_dict(match), ensure_ascii=False, indent=indent)


def match_from_json(text: str) -> MatchState:
    return match_from_dict(json.loads(text))


def redacted_match_json(match: MatchState) -> str:
    return json.dumps(redact_match_dict(match), ensure_ascii=False)

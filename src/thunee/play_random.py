"""
Self-play with random agents: drives the engine through a whole match.

Usage (from project root, after installing in editable mode):
    python -m thunee.play_random --seed 7
"""
from __future__ import annotations

import argparse
import logging
from typing import Callable, List, NamedTuple, Optional, Sequence

from .actions import apply_action, legal_actions
from .agents import Policy, RandomAgent
from .config import DEFAULT_CONFIG, GameConfig
from .game import GameEngine
from .scoring import ScoringBreakdown
from .seats import Seat
from .state import MatchState, RoundPhase

logger = logging.getLogger(__name__)

MAX_STEPS_PER_ROUND = 1_000
DEFAULT_NAMES = ("North", "East", "South", "West")


class MatchSummary(NamedTuple):
    match: MatchState
    breakdowns: List[ScoringBreakdown]


def play_round(engine: GameEngine, match: MatchState, agents: Sequence[Policy]) -> MatchState:
    """Play the current round until it is ready for scoring."""
    steps = 0
    while match.current_round is not None and match.current_round.phase != RoundPhase.SCORING:
        state = match.current_round
        seat = state.current_turn
        legal = legal_actions(engine, state, seat)
        action = agents[seat].act(state, legal)
        result = apply_action(engine, match, action)
        if not result.ok:
            raise RuntimeError(f"Engine refused listed action {action}: {result.error}")
        match = result.match_state
        steps += 1
        if steps > MAX_STEPS_PER_ROUND:
            raise RuntimeError("Round did not finish")
    return match


def run_random_match(
    seed: int = 42,
    max_rounds: int = 100,
    dealer: Seat = Seat.NORTH,
    config: GameConfig = DEFAULT_CONFIG,
    agents: Optional[Sequence[Policy]] = None,
    on_round: Optional[Callable[[int, ScoringBreakdown, MatchState], None]] = None,
) -> MatchSummary:
    """
    Play until a team wins or ``max_rounds`` rounds have been scored.
    Same seed and config give the same match.
    """
    engine = GameEngine(config, seed=seed)
    if agents is None:
        agents = [RandomAgent(seed=seed * 4 + i) for i in range(4)]
    if len(agents) != 4:
        raise ValueError(f"Need one agent per seat, got {len(agents)}")
    match = engine.create_match(DEFAULT_NAMES, bots=[True] * 4)
    breakdowns: List[ScoringBreakdown] = []

    for round_number in range(1, max_rounds + 1):
        started = engine.start_new_round(match, dealer if round_number == 1 else None)
        if not started.ok:
            raise RuntimeError(started.error)
        match = play_round(engine, started.match_state, agents)
        scored = engine.score_round(match)
        if not scored.ok:
            raise RuntimeError(scored.error)
        match = scored.match_state
        breakdowns.append(scored.breakdown)
        logger.info("Round %d: %s", round_number, scored.breakdown.description)
        if on_round is not None:
            on_round(round_number, scored.breakdown, match)
        if match.is_complete:
            break
    return MatchSummary(match=match, breakdowns=breakdowns)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a random Thunee match.")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility.")
    parser.add_argument("--max-rounds", type=int, default=100, help="Stop after this many rounds.")
    args = parser.parse_args()

    summary = run_random_match(seed=args.seed, max_rounds=args.max_rounds)
    match = summary.match
    print(
        f"rounds={len(summary.breakdowns)}, balls={match.balls(0)}-{match.balls(1)}, "
        f"winner={match.winning_team}"
    )


if __name__ == "__main__":
    main()

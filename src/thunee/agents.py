"""
Baseline agents and the policy interface used by simulations.

A ``Policy`` looks at the round and the list produced by
``actions.legal_actions`` and returns one of those actions. ``RandomAgent``
picks uniformly, which is enough to drive the engine through whole matches.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol, Sequence

from .actions import GameAction
from .state import RoundState


class Policy(Protocol):
    def act(self, state: RoundState, legal: Sequence[GameAction]) -> GameAction:
        """Return one element of ``legal``."""


@dataclass
class RandomAgent:
    """
    Samples uniformly among legal actions.

    Usage:
        agent = RandomAgent(seed=42)
        action = agent.act(state, legal_actions(engine, state, seat))
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def act(self, state: RoundState, legal: Sequence[GameAction]) -> GameAction:
        if not legal:
            raise ValueError("No legal actions available for RandomAgent")
        return self._rng.choice(list(legal))


__all__ = ["Policy", "RandomAgent"]

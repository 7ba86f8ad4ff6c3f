"""
Table seats. Play goes North -> East -> South -> West -> North.
Partners sit opposite: team 0 = North + South, team 1 = East + West.
"""
from __future__ import annotations

from enum import IntEnum


class Seat(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def next(self) -> "Seat":
        return Seat((self + 1) % 4)

    @property
    def previous(self) -> "Seat":
        return Seat((self - 1) % 4)

    @property
    def partner(self) -> "Seat":
        return Seat((self + 2) % 4)

    @property
    def team_number(self) -> int:
        return int(self) % 2

    def walk(self, steps: int) -> "Seat":
        """Seat reached after ``steps`` moves in play order."""
        return Seat((self + steps) % 4)


def seats_from(start: Seat) -> list[Seat]:
    """All four seats in play order, starting at ``start``."""
    return [start.walk(i) for i in range(4)]


def other_team(team_number: int) -> int:
    return 1 - team_number

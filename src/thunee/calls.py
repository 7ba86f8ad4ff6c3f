"""
Calls made during a round: numeric bids, passes and special declarations.

``Call`` is a closed union of three frozen dataclasses. Consumers dispatch on
the concrete type and end with ``unknown_call`` so a new kind of call fails
loudly everywhere it is not handled yet.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NoReturn, Union

from .deck import Card
from .seats import Seat


class CallCategory(Enum):
    BID = "bid"
    PASS = "pass"
    THUNEE = "thunee"
    ROYALS = "royals"
    JODI = "jodi"
    DOUBLE = "double"
    KUNUCK = "kunuck"


THUNEE_CATEGORIES = (CallCategory.THUNEE, CallCategory.ROYALS)
SPECIAL_CATEGORIES = (
    CallCategory.THUNEE,
    CallCategory.ROYALS,
    CallCategory.JODI,
    CallCategory.DOUBLE,
    CallCategory.KUNUCK,
)


@dataclass(frozen=True)
class BidCall:
    caller: Seat
    amount: int

    @property
    def category(self) -> CallCategory:
        return CallCategory.BID

    def __str__(self) -> str:
        return f"Bid({self.amount} by {self.caller.name})"


@dataclass(frozen=True)
class PassCall:
    caller: Seat

    @property
    def category(self) -> CallCategory:
        return CallCategory.PASS

    def __str__(self) -> str:
        return f"Pass({self.caller.name})"


@dataclass(frozen=True)
class SpecialCall:
    """
    Thunee, Royals, Jodi, Double or Kunuck.

    - ``blind``: only meaningful for Thunee/Royals (declared before the reserve is seen).
    - ``cards``: the Jodi combination, or for blind calls the caller's hidden reserve.
    """

    caller: Seat
    category: CallCategory
    blind: bool = False
    cards: tuple[Card, ...] = ()

    def __post_init__(self) -> None:
        if self.category not in SPECIAL_CATEGORIES:
            raise ValueError(f"{self.category} is not a special call category")
        if self.blind and self.category not in THUNEE_CATEGORIES:
            raise ValueError("Only Thunee and Royals have a blind variant")

    @property
    def is_thunee_like(self) -> bool:
        return self.category in THUNEE_CATEGORIES

    @property
    def is_royals(self) -> bool:
        return self.category == CallCategory.ROYALS

    @property
    def label(self) -> str:
        name = self.category.value.capitalize()
        return f"Blind {name}" if self.blind else name

    def __str__(self) -> str:
        if self.cards and self.category == CallCategory.JODI:
            combo = " ".join(c.token for c in self.cards)
            return f"{self.label}({combo} by {self.caller.name})"
        return f"{self.label}(by {self.caller.name})"


Call = Union[BidCall, PassCall, SpecialCall]


def unknown_call(call: object) -> NoReturn:
    raise TypeError(f"Unhandled call type: {type(call).__name__}")


def thunee(caller: Seat, blind: bool = False, cards: tuple[Card, ...] = ()) -> SpecialCall:
    return SpecialCall(caller=caller, category=CallCategory.THUNEE, blind=blind, cards=cards)


def royals(caller: Seat, blind: bool = False, cards: tuple[Card, ...] = ()) -> SpecialCall:
    return SpecialCall(caller=caller, category=CallCategory.ROYALS, blind=blind, cards=cards)


def jodi(caller: Seat, cards) -> SpecialCall:
    return SpecialCall(caller=caller, category=CallCategory.JODI, cards=tuple(cards))


def double(caller: Seat) -> SpecialCall:
    return SpecialCall(caller=caller, category=CallCategory.DOUBLE)


def kunuck(caller: Seat) -> SpecialCall:
    return SpecialCall(caller=caller, category=CallCategory.KUNUCK)


__all__ = [
    "BidCall",
    "Call",
    "CallCategory",
    "PassCall",
    "SpecialCall",
    "SPECIAL_CATEGORIES",
    "THUNEE_CATEGORIES",
    "double",
    "jodi",
    "kunuck",
    "royals",
    "thunee",
    "unknown_call",
]

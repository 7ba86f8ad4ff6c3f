"""
Turn order: who acts next while bidding, when bidding is over, who chooses
trump and who leads the first trick.
"""
from __future__ import annotations

from typing import NamedTuple, Optional

from .deck import NUM_SEATS
from .seats import Seat
from .state import RoundState


class BiddingOutcome(NamedTuple):
    """Result of a finished auction. ``amount`` is 0 when everyone passed."""
    chooser: Seat
    amount: int
    all_passed: bool


def next_bidder(state: RoundState, after: Seat) -> Optional[Seat]:
    """
    First seat after ``after`` (cyclic) that still has something to say: it
    has not passed and does not hold the standing bid. None if there is none.
    """
    passed = state.passed_seats
    holder = state.highest_bid.caller if state.highest_bid is not None else None
    seat = after
    for _ in range(NUM_SEATS):
        seat = seat.next
        if seat not in passed and seat != holder:
            return seat
    return None


def bidding_outcome(state: RoundState) -> Optional[BiddingOutcome]:
    """
    None while bidding is still open. Bidding closes when a bid stands and the
    other three seats have passed, or when all four seats pass (the seat after
    the dealer then chooses trump at 0).
    """
    passed = state.passed_seats
    high = state.highest_bid
    if high is not None:
        others = {s for s in Seat if s != high.caller}
        if others <= passed:
            return BiddingOutcome(chooser=high.caller, amount=high.amount, all_passed=False)
        return None
    if len(passed) == NUM_SEATS:
        return BiddingOutcome(chooser=state.dealer.next, amount=0, all_passed=True)
    return None


def first_trick_leader(trump_chooser: Seat) -> Seat:
    """The seat after the trump chooser leads the first trick."""
    return trump_chooser.next


def thunee_leader(state: RoundState) -> Optional[Seat]:
    """A Thunee/Royals caller leads the first trick themselves."""
    call = state.active_thunee_call
    return call.caller if call is not None else None

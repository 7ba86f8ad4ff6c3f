"""Bidding turn order and the end of bidding."""
from thunee.calls import BidCall, PassCall, thunee
from thunee.seats import Seat
from thunee.state import RoundPhase
from thunee.turns import bidding_outcome, first_trick_leader, next_bidder, thunee_leader

from helpers import make_round


def _bidding(*calls):
    high = None
    for call in calls:
        if isinstance(call, BidCall):
            high = call
    return make_round(RoundPhase.BIDDING, call_history=tuple(calls), highest_bid=high)


def test_next_bidder_skips_passed_and_holder():
    state = _bidding(PassCall(Seat.EAST), BidCall(Seat.SOUTH, 20))
    assert next_bidder(state, Seat.SOUTH) == Seat.WEST
    assert next_bidder(state, Seat.NORTH) == Seat.WEST
    state = _bidding(PassCall(Seat.EAST), BidCall(Seat.SOUTH, 20), PassCall(Seat.WEST))
    assert next_bidder(state, Seat.WEST) == Seat.NORTH


def test_bidding_open_until_three_pass():
    state = _bidding(BidCall(Seat.EAST, 30), PassCall(Seat.SOUTH), PassCall(Seat.WEST))
    assert bidding_outcome(state) is None
    state = _bidding(BidCall(Seat.EAST, 30), PassCall(Seat.SOUTH), PassCall(Seat.WEST), PassCall(Seat.NORTH))
    outcome = bidding_outcome(state)
    assert outcome.chooser == Seat.EAST
    assert outcome.amount == 30
    assert not outcome.all_passed


def test_all_pass_goes_to_seat_after_dealer():
    state = _bidding(*(PassCall(s) for s in (Seat.EAST, Seat.SOUTH, Seat.WEST, Seat.NORTH)))
    outcome = bidding_outcome(state)
    assert outcome.chooser == Seat.EAST
    assert outcome.amount == 0
    assert outcome.all_passed


def test_three_passes_without_bid_stay_open():
    state = _bidding(PassCall(Seat.EAST), PassCall(Seat.SOUTH), PassCall(Seat.WEST))
    assert bidding_outcome(state) is None
    assert next_bidder(state, Seat.WEST) == Seat.NORTH


def test_first_leader():
    assert first_trick_leader(Seat.SOUTH) == Seat.WEST
    assert first_trick_leader(Seat.WEST) == Seat.NORTH
    assert thunee_leader(make_round(call_history=(thunee(Seat.EAST),))) == Seat.EAST
    assert thunee_leader(make_round()) is None

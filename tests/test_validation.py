"""Bid, pass and special-call validation."""
from thunee.calls import BidCall, PassCall, double, jodi, kunuck, royals, thunee
from thunee.config import DEFAULT_CONFIG, GameConfig
from thunee.deck import Suit
from thunee.seats import Seat
from thunee.state import RoundPhase, Trick
from thunee.validation import CallValidator, find_jodi_combos, jodi_points, jodi_suit

from helpers import cards, make_round, won_trick

V = CallValidator(DEFAULT_CONFIG)

_TRICKS = [
    ["J♣", "9♣", "A♣", "10♣"],
    ["J♦", "9♦", "A♦", "10♦"],
    ["A♠", "10♠", "K♦", "Q♦"],
    ["K♣", "Q♣", "A♥", "10♥"],
    ["J♠", "9♠", "9♥", "J♥"],
]


def _tricks(winners):
    return tuple(won_trick(Seat.NORTH, _TRICKS[i], w) for i, w in enumerate(winners))


def _bidding(**changes):
    return make_round(RoundPhase.BIDDING, remaining_cards=((),) * 4, **changes)


# ---- bids and passes ----

def test_bid_amounts():
    state = _bidding()
    assert V.validate_bid(BidCall(Seat.EAST, 20), state).ok
    assert not V.validate_bid(BidCall(Seat.EAST, 15), state).ok
    assert not V.validate_bid(BidCall(Seat.EAST, 0), state).ok
    assert not V.validate_bid(BidCall(Seat.EAST, -10), state).ok


def test_bid_must_beat_standing_bid():
    state = _bidding(highest_bid=BidCall(Seat.EAST, 30), call_history=(BidCall(Seat.EAST, 30),))
    assert not V.validate_bid(BidCall(Seat.NORTH, 30), state).ok
    assert V.validate_bid(BidCall(Seat.NORTH, 40), state).ok


def test_bid_over_teammate_needs_house_rule():
    state = _bidding(highest_bid=BidCall(Seat.EAST, 30), call_history=(BidCall(Seat.EAST, 30),))
    check = V.validate_bid(BidCall(Seat.WEST, 40), state)
    assert not check.ok
    assert "own team" in check.reason
    lenient = CallValidator(GameConfig(enable_call_over_teammates=True))
    assert lenient.validate_bid(BidCall(Seat.WEST, 40), state).ok


def test_passed_seat_cannot_reenter():
    state = _bidding(call_history=(PassCall(Seat.EAST),))
    assert not V.validate_bid(BidCall(Seat.EAST, 10), state).ok
    assert not V.validate_pass(PassCall(Seat.EAST), state).ok
    assert V.validate_pass(PassCall(Seat.SOUTH), state).ok


def test_high_bidder_cannot_pass():
    state = _bidding(highest_bid=BidCall(Seat.EAST, 30), call_history=(BidCall(Seat.EAST, 30),))
    assert not V.validate_pass(PassCall(Seat.EAST), state).ok


def test_bidding_only_in_bidding_phase():
    state = make_round(RoundPhase.PLAYING)
    assert not V.validate_bid(BidCall(Seat.EAST, 10), state).ok
    assert not V.validate_pass(PassCall(Seat.EAST), state).ok


# ---- Thunee / Royals ----

_SIX = {Seat.EAST: ["J♥", "9♥", "A♥", "10♥", "K♥", "Q♥"]}


def test_open_thunee_window():
    state = make_round(RoundPhase.PLAYING, hands=_SIX, current_trick=Trick(lead_seat=Seat.SOUTH))
    assert V.validate_call(thunee(Seat.EAST), state).ok
    assert V.validate_call(royals(Seat.EAST), state).ok
    # South holds nothing here
    assert not V.validate_call(thunee(Seat.SOUTH), state).ok


def test_open_thunee_closed_once_a_card_is_played():
    trick = Trick(lead_seat=Seat.SOUTH).with_card(Seat.SOUTH, cards("J♣")[0])
    state = make_round(RoundPhase.PLAYING, hands=_SIX, current_trick=trick)
    assert not V.validate_call(thunee(Seat.EAST), state).ok


def test_royals_toggle():
    state = make_round(RoundPhase.PLAYING, hands=_SIX, current_trick=Trick(lead_seat=Seat.SOUTH))
    check = CallValidator(GameConfig(enable_royals=False)).validate_call(royals(Seat.EAST), state)
    assert not check.ok
    assert "Royals" in check.reason


def test_only_one_thunee_per_round():
    state = make_round(
        RoundPhase.PLAYING,
        hands=_SIX,
        current_trick=Trick(lead_seat=Seat.SOUTH),
        call_history=(thunee(Seat.SOUTH),),
    )
    assert not V.validate_call(royals(Seat.EAST), state).ok


def test_blind_thunee_window():
    four = {Seat.EAST: ["J♥", "9♥", "A♥", "10♥"]}
    state = _bidding(hands=four)
    assert V.validate_call(thunee(Seat.EAST, blind=True), state).ok
    assert V.validate_call(royals(Seat.EAST, blind=True), state).ok
    off = CallValidator(GameConfig(enable_blind_thunee=False))
    assert not off.validate_call(thunee(Seat.EAST, blind=True), state).ok
    playing = make_round(RoundPhase.PLAYING, hands=_SIX, current_trick=Trick(lead_seat=Seat.SOUTH))
    assert not V.validate_call(thunee(Seat.EAST, blind=True), playing).ok


# ---- Jodi ----

_JODI_HAND = {
    Seat.NORTH: ["K♥", "Q♥", "J♦"],
    Seat.SOUTH: ["J♠", "Q♠", "K♠"],
    Seat.EAST: ["K♦", "Q♦"],
}


def _after(winners, **changes):
    return make_round(
        RoundPhase.PLAYING,
        hands=_JODI_HAND,
        completed_tricks=_tricks(winners),
        current_trick=Trick(lead_seat=winners[-1]),
        trump_suit=Suit.HEARTS,
        **changes,
    )


def test_jodi_by_last_trick_winners():
    state = _after([Seat.NORTH])
    assert V.validate_call(jodi(Seat.NORTH, cards("K♥", "Q♥")), state).ok
    assert V.validate_call(jodi(Seat.SOUTH, cards("J♠", "Q♠", "K♠")), state).ok
    check = V.validate_call(jodi(Seat.EAST, cards("K♦", "Q♦")), state)
    assert not check.ok
    assert "last trick" in check.reason


def test_jodi_needs_a_completed_trick():
    state = make_round(RoundPhase.PLAYING, hands=_JODI_HAND, current_trick=Trick(lead_seat=Seat.EAST))
    assert not V.validate_call(jodi(Seat.NORTH, cards("K♥", "Q♥")), state).ok


def test_jodi_first_or_third_trick_only():
    state = _after([Seat.EAST, Seat.NORTH])
    assert not V.validate_call(jodi(Seat.NORTH, cards("K♥", "Q♥")), state).ok
    anytime = CallValidator(GameConfig(enable_first_third_only_jodi_calls=False))
    assert anytime.validate_call(jodi(Seat.NORTH, cards("K♥", "Q♥")), state).ok
    third = _after([Seat.EAST, Seat.EAST, Seat.SOUTH])
    assert V.validate_call(jodi(Seat.NORTH, cards("K♥", "Q♥")), third).ok


def test_jodi_cards_must_be_held_and_matching():
    state = _after([Seat.NORTH])
    assert not V.validate_call(jodi(Seat.NORTH, cards("K♣", "Q♣")), state).ok
    assert not V.validate_call(jodi(Seat.NORTH, cards("K♥", "J♦")), state).ok
    assert not V.validate_call(jodi(Seat.NORTH, cards("Q♥")), state).ok


def test_jodi_once_per_suit_per_team():
    state = _after([Seat.NORTH], call_history=(jodi(Seat.SOUTH, cards("K♥", "Q♥")),))
    check = V.validate_call(jodi(Seat.NORTH, cards("K♥", "Q♥")), state)
    assert not check.ok
    assert "hearts" in check.reason
    assert V.validate_call(jodi(Seat.SOUTH, cards("J♠", "Q♠", "K♠")), state).ok


def test_no_jodi_during_thunee():
    state = _after([Seat.NORTH], call_history=(thunee(Seat.NORTH),))
    assert not V.validate_call(jodi(Seat.NORTH, cards("K♥", "Q♥")), state).ok


def test_jodi_points():
    assert jodi_points(cards("K♥", "Q♥"), Suit.HEARTS) == 40
    assert jodi_points(cards("K♥", "Q♥"), Suit.CLUBS) == 20
    assert jodi_points(cards("J♠", "Q♠", "K♠"), Suit.SPADES) == 50
    assert jodi_points(cards("Q♠", "J♠", "K♠"), None) == 30
    assert jodi_points(cards("K♥", "Q♦"), Suit.HEARTS) == 0
    assert jodi_suit(cards("Q♦", "K♦")) == Suit.DIAMONDS


def test_find_jodi_combos_prefers_three_cards():
    hand = cards("J♠", "Q♠", "K♠", "K♥", "Q♥", "9♦")
    combos = find_jodi_combos(hand)
    assert len(combos) == 2
    assert set(combos[0]) == set(cards("K♥", "Q♥"))
    assert set(combos[1]) == set(cards("J♠", "Q♠", "K♠"))


# ---- Double / Kunuck ----

def test_double_and_kunuck_on_last_trick():
    winners = [Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST, Seat.NORTH]
    state = _after(winners)
    assert V.validate_call(double(Seat.NORTH), state).ok
    assert V.validate_call(kunuck(Seat.EAST), state).ok
    early = _after(winners[:4])
    assert not V.validate_call(double(Seat.NORTH), early).ok
    assert not V.validate_call(kunuck(Seat.NORTH), early).ok


def test_double_once_and_toggle():
    winners = [Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST, Seat.NORTH]
    state = _after(winners, call_history=(double(Seat.SOUTH),))
    assert not V.validate_call(double(Seat.NORTH), state).ok
    off = CallValidator(GameConfig(enable_kunuck=False))
    assert not off.validate_call(kunuck(Seat.NORTH), _after(winners)).ok

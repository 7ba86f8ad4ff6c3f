"""Thunee rules engine: bidding, trump, tricks, special calls and scoring."""

__version__ = "0.1.0"

from .deck import Card, Rank, Suit, card_from_token, make_deck_24
from .seats import Seat
from .config import GameConfig, DEFAULT_CONFIG, basic_config, strict_config, load_config, save_config
from .deal import deal_split, DealSplit
from .calls import BidCall, PassCall, SpecialCall, CallCategory
from .state import MatchState, Player, RoundPhase, RoundState, Team, Trick, TrumpSource
from .play import legal_cards, determine_winner, validate_card_play
from .validation import CallValidator, find_jodi_combos, jodi_points
from .scoring import ScoringBreakdown, score_round
from .game import ActionResult, GameEngine
from .serialization import (
    hands_to_dict,
    match_from_dict,
    match_to_dict,
    redact_match_dict,
    restore_hand,
    round_from_dict,
    round_to_dict,
)
from .actions import ActionType, GameAction, apply_action, legal_actions

"""Trix card game engine: rules, match state machine, computer opponents."""

__version__ = "0.1.0"

from .deck import Card, Suit, make_deck_52, card_key, parse_card_key, KING_OF_HEARTS
from .seats import Seat, Team, Mode, SEATS, HUMAN_SEAT, next_seat, team_of, partner_of
from .contracts import (
    CONTRACTS,
    CONTRACT_IDS,
    TRIX_LAYOUT_SCORES,
    Contract,
    ContractId,
    ContractKind,
    Difficulty,
    RuleProfile,
)
from .play import (
    SuitLayout,
    TrickCard,
    apply_layout_card,
    legal_layout_plays,
    legal_trick_plays,
    rank_value,
    sort_hand,
    trick_winner,
)
from .deal import deal_hands, shuffled_deck, seven_of_hearts_owner
from .state import (
    MatchConfig,
    MatchState,
    Phase,
    initial_state,
    start_match,
    deal_new_hands,
    seat_view,
)
from .view import SeatView, CompletedTrick
from .actions import (
    Action,
    StartMatch,
    ResetMatch,
    PickContract,
    SetDoubles,
    PlayCard,
    LayoutPlay,
    LayoutPass,
)
from .game import apply_action
from .ai import choose_move, choose_contract, infer_voids
from .agents import Policy, HeuristicAgent, RandomAgent
from .runner import MatchResult, run_match

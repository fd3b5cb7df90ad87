"""
Match state: the single value threaded through every transition.

A match is four kingdoms. Each kingdom owner plays each of its five contracts
once (one deal per contract) before ownership passes to the next seat.
Phases: SETUP -> KINGDOM_PICK_CONTRACT -> [DOUBLING_DECISION ->]
TRICK_PLAY | TRIX_LAYOUT_PLAY -> KINGDOM_PICK_CONTRACT -> ... -> GAME_END.
"""
from __future__ import annotations

import copy
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .contracts import CONTRACT_IDS, Contract, ContractId, Difficulty, RuleProfile
from .deal import deal_hands, seven_of_hearts_owner
from .deck import Card, RANK_TWO, Suit
from .play import SuitLayout, TrickCard, led_suit as trick_led_suit
from .seats import SEATS, Mode, Seat, TEAMS, Team, partner_of
from .view import CompletedTrick, Phase, SeatView

NUM_KINGDOMS = 4


@dataclass(frozen=True)
class MatchConfig:
    """Match options chosen on the setup screen."""

    mode: Mode = Mode.SINGLE
    difficulty: Difficulty = Difficulty.MODERATE
    rule_profile: RuleProfile = RuleProfile.CLASSIC

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "MatchConfig":
        """Build from a JSON-compatible mapping; missing keys use the defaults."""
        return cls(
            mode=Mode(d.get("mode", Mode.SINGLE.value)),
            difficulty=Difficulty(d.get("difficulty", Difficulty.MODERATE.value)),
            rule_profile=RuleProfile(d.get("rule_profile", d.get("ruleProfile", RuleProfile.CLASSIC.value))),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "mode": self.mode.value,
            "difficulty": self.difficulty.value,
            "rule_profile": self.rule_profile.value,
        }


@dataclass(frozen=True)
class DoubleEntry:
    """A doubled penalty card: who held it when it was doubled."""
    holder: Seat
    closed: bool = False


@dataclass
class DoublingState:
    """Pre-play doubling sub-phase for King (and, in Jawaker 2025, Queens)."""

    pending: bool = False
    contract_id: Optional[ContractId] = None
    holder: Optional[Seat] = None  # seat being prompted (the human)
    closed: bool = False
    options: List[Card] = field(default_factory=list)  # prompted seat's eligible cards
    doubled_keys: List[str] = field(default_factory=list)
    map: Dict[str, DoubleEntry] = field(default_factory=dict)  # card key -> entry


@dataclass(frozen=True)
class DealRecord:
    """One line of the match's deal log."""
    deal_number: int
    kingdom_number: int
    kingdom_owner: Seat
    contract_id: ContractId
    deltas: Mapping[Seat, int]
    totals: Mapping[Seat, int]
    team_totals: Optional[Mapping[Team, int]] = None


def _per_seat(value: Any) -> Dict[Seat, Any]:
    return {seat: copy.copy(value) for seat in SEATS}


@dataclass
class MatchState:
    """
    Whole-match state. Never mutated outside the transition function, which
    works on a deep copy (see ``copy``) and returns the copy.
    """

    config: MatchConfig = field(default_factory=MatchConfig)
    phase: Phase = Phase.SETUP
    kingdom_number: int = 0
    kingdom_owner: Optional[Seat] = None
    contracts_remaining: Dict[Seat, List[ContractId]] = field(default_factory=dict)
    current_contract: Optional[Contract] = None
    deal_number: int = 0
    deal_log: List[DealRecord] = field(default_factory=list)
    doubling: DoublingState = field(default_factory=DoublingState)
    resume_turn: Optional[Seat] = None
    scores: Dict[Seat, int] = field(default_factory=lambda: _per_seat(0))
    deal_deltas: Dict[Seat, int] = field(default_factory=lambda: _per_seat(0))
    hands: Dict[Seat, List[Card]] = field(default_factory=lambda: _per_seat([]))
    turn: Optional[Seat] = None
    leader: Optional[Seat] = None
    trick: List[TrickCard] = field(default_factory=list)
    taken: Dict[Seat, List[Card]] = field(default_factory=lambda: _per_seat([]))
    tricks_taken: Dict[Seat, int] = field(default_factory=lambda: _per_seat(0))
    layout: Dict[Suit, SuitLayout] = field(default_factory=dict)
    out_order: List[Seat] = field(default_factory=list)
    played_cards: List[TrickCard] = field(default_factory=list)
    completed_tricks: List[CompletedTrick] = field(default_factory=list)
    revealed_twos: Dict[Seat, List[Card]] = field(default_factory=dict)
    twos_revealed: bool = False
    layout_turn_count: int = 0
    message: str = ""

    @property
    def mode(self) -> Mode:
        return self.config.mode

    @property
    def difficulty(self) -> Difficulty:
        return self.config.difficulty

    @property
    def rule_profile(self) -> RuleProfile:
        return self.config.rule_profile

    @property
    def team_scores(self) -> Dict[Team, int]:
        """Always derived from the seat scores."""
        return {team: sum(self.scores[s] for s in members) for team, members in TEAMS.items()}

    @property
    def led_suit(self) -> Optional[Suit]:
        return trick_led_suit(self.trick)

    def cards_in_hands(self) -> int:
        return sum(len(h) for h in self.hands.values())

    def copy(self) -> "MatchState":
        return copy.deepcopy(self)


def initial_state(config: MatchConfig | None = None) -> MatchState:
    """A match on the setup screen: no hands, empty pools."""
    return MatchState(config=config or MatchConfig())


def deal_new_hands(state: MatchState, rng: random.Random | None = None) -> MatchState:
    """Shuffle and deal a fresh deal into ``state``, clearing all per-deal tracking."""
    state.hands = deal_hands(rng=rng).hands
    state.trick = []
    state.taken = _per_seat([])
    state.tricks_taken = _per_seat(0)
    state.deal_deltas = _per_seat(0)
    state.layout = {}
    state.out_order = []
    state.played_cards = []
    state.completed_tricks = []
    state.revealed_twos = {}
    state.twos_revealed = False
    state.layout_turn_count = 0
    return state


def start_match(config: MatchConfig | None = None, rng: random.Random | None = None) -> MatchState:
    """Fresh match with the first deal dealt and kingdom 1 awaiting a contract."""
    state = initial_state(config)
    deal_new_hands(state, rng)
    owner = seven_of_hearts_owner(state.hands)
    state.kingdom_number = 1
    state.kingdom_owner = owner
    state.turn = owner
    state.leader = owner
    state.contracts_remaining = {seat: list(CONTRACT_IDS) for seat in SEATS}
    state.current_contract = None
    state.deal_number = 0
    state.phase = Phase.KINGDOM_PICK_CONTRACT
    state.message = f"Kingdom 1/{NUM_KINGDOMS}"
    return state


def twos_in_hand(hand: List[Card]) -> List[Card]:
    return [c for c in hand if c.rank == RANK_TWO]


def seat_view(state: MatchState, seat: Seat) -> SeatView:
    """Snapshot of what ``seat`` can see. Other seats' hands are left out."""
    return SeatView(
        seat=seat,
        phase=state.phase,
        hand=tuple(state.hands.get(seat, ())),
        contract_id=state.current_contract.id if state.current_contract else None,
        led_suit=state.led_suit,
        current_trick=tuple(state.trick),
        layout=dict(state.layout),
        played_cards=tuple(state.played_cards),
        completed_tricks=tuple(state.completed_tricks),
        mode=state.mode,
        partner=partner_of(seat) if state.mode == Mode.PARTNERS else None,
        difficulty=state.difficulty,
        rule_profile=state.rule_profile,
        revealed_twos={s: tuple(cards) for s, cards in state.revealed_twos.items()},
    )

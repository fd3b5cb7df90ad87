"""
The read-only snapshot handed to computer players.

A SeatView contains only what the viewing seat may legitimately know:
its own hand, the public trick and layout history, the contract, the mode
and its partner. Other seats' hands are never included.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from .contracts import ContractId, Difficulty, RuleProfile
from .deck import Card, Suit
from .play import SuitLayout, TrickCard
from .seats import Mode, Seat


class Phase(str, Enum):
    SETUP = "SETUP"
    KINGDOM_PICK_CONTRACT = "KINGDOM_PICK_CONTRACT"
    DOUBLING_DECISION = "DOUBLING_DECISION"
    TRICK_PLAY = "TRICK_PLAY"
    TRIX_LAYOUT_PLAY = "TRIX_LAYOUT_PLAY"
    GAME_END = "GAME_END"


@dataclass(frozen=True)
class CompletedTrick:
    led_suit: Suit
    winner: Seat
    cards: tuple[TrickCard, ...]


@dataclass(frozen=True)
class SeatView:
    seat: Seat
    phase: Phase
    hand: tuple[Card, ...]
    contract_id: Optional[ContractId] = None
    led_suit: Optional[Suit] = None
    current_trick: tuple[TrickCard, ...] = ()
    layout: Mapping[Suit, SuitLayout] = field(default_factory=dict)
    played_cards: tuple[TrickCard, ...] = ()
    completed_tricks: tuple[CompletedTrick, ...] = ()
    mode: Mode = Mode.SINGLE
    partner: Optional[Seat] = None
    difficulty: Difficulty = Difficulty.MODERATE
    rule_profile: RuleProfile = RuleProfile.CLASSIC
    revealed_twos: Mapping[Seat, tuple[Card, ...]] = field(default_factory=dict)

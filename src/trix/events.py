"""
Events returned by ``trix.game.apply_action``.

Events are informational (for animation, sounds, logs); the engine never
reads them back. Each class carries its wire-style tag in ``type``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Mapping, Optional, Union

from .contracts import ContractId, Difficulty, RuleProfile
from .deck import Card
from .play import TrickCard
from .seats import Mode, Seat


@dataclass(frozen=True)
class MatchStarted:
    type: ClassVar[str] = "match:start"
    mode: Mode
    difficulty: Difficulty
    rule_profile: RuleProfile


@dataclass(frozen=True)
class MatchReset:
    type: ClassVar[str] = "match:reset"


@dataclass(frozen=True)
class DealStarted:
    type: ClassVar[str] = "deal:start"
    contract_id: ContractId
    deal_number: int


@dataclass(frozen=True)
class DealEnded:
    type: ClassVar[str] = "deal:end"
    deal_number: int
    deltas: Mapping[Seat, int]


@dataclass(frozen=True)
class CardPlayed:
    type: ClassVar[str] = "card:played"
    seat: Seat
    card: Card


@dataclass(frozen=True)
class LayoutPlayed:
    type: ClassVar[str] = "layout:played"
    seat: Seat
    card: Card


@dataclass(frozen=True)
class LayoutPassed:
    type: ClassVar[str] = "layout:pass"
    seat: Seat


@dataclass(frozen=True)
class LayoutOut:
    type: ClassVar[str] = "layout:out"
    seat: Seat
    place: int


@dataclass(frozen=True)
class TrickWon:
    """``deltas`` holds the score changes this trick caused (may be empty)."""
    type: ClassVar[str] = "trick:won"
    winner: Seat
    trick: tuple[TrickCard, ...]
    deltas: Mapping[Seat, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DoublingPrompt:
    type: ClassVar[str] = "doubling:prompt"
    contract_id: ContractId
    options: int
    closed: bool


@dataclass(frozen=True)
class DoublingSet:
    type: ClassVar[str] = "doubling:set"
    contract_id: Optional[ContractId]
    count: int
    closed: bool


@dataclass(frozen=True)
class EngineError:
    type: ClassVar[str] = "error"
    message: str


Event = Union[
    MatchStarted,
    MatchReset,
    DealStarted,
    DealEnded,
    CardPlayed,
    LayoutPlayed,
    LayoutPassed,
    LayoutOut,
    TrickWon,
    DoublingPrompt,
    DoublingSet,
    EngineError,
]

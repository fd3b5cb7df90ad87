"""Actions submitted to ``trix.game.apply_action``."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from .contracts import ContractId
from .deck import Card
from .seats import Seat
from .state import MatchConfig


@dataclass(frozen=True)
class StartMatch:
    """Start a new match. ``config`` None keeps the current state's options."""
    config: Optional[MatchConfig] = None


@dataclass(frozen=True)
class ResetMatch:
    pass


@dataclass(frozen=True)
class PickContract:
    seat: Seat
    contract_id: ContractId


@dataclass(frozen=True)
class SetDoubles:
    """The human's doubling decision: a subset of their eligible card keys."""
    doubled_keys: tuple[str, ...] = field(default_factory=tuple)
    double_all: bool = False


@dataclass(frozen=True)
class PlayCard:
    seat: Seat
    card: Card


@dataclass(frozen=True)
class LayoutPlay:
    seat: Seat
    card: Card


@dataclass(frozen=True)
class LayoutPass:
    seat: Seat


Action = Union[StartMatch, ResetMatch, PickContract, SetDoubles, PlayCard, LayoutPlay, LayoutPass]

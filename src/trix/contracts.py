"""
Contracts: the five game variants a kingdom owner chooses from.
Catalog order: King of Hearts, Queens, Diamonds, Ltoosh (trick-avoidance), Trix (layout).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ContractId(str, Enum):
    KING = "king"
    QUEENS = "queens"
    DIAMONDS = "diamonds"
    LTOOSH = "ltoosh"
    TRIX = "trix"


class ContractKind(str, Enum):
    TRICK = "trick"
    LAYOUT = "layout"


class RuleProfile(str, Enum):
    """
    CLASSIC: only the King of Hearts can be doubled.
    JAWAKER_2025: Queens can be doubled too, and doubling is closed (hidden from other players).
    """
    CLASSIC = "classic"
    JAWAKER_2025 = "jawaker2025"


class Difficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"


@dataclass(frozen=True)
class Contract:
    id: ContractId
    name: str
    kind: ContractKind

    @property
    def is_layout(self) -> bool:
        return self.kind == ContractKind.LAYOUT


CONTRACTS: tuple[Contract, ...] = (
    Contract(ContractId.KING, "King of Hearts", ContractKind.TRICK),
    Contract(ContractId.QUEENS, "Queens", ContractKind.TRICK),
    Contract(ContractId.DIAMONDS, "Diamonds", ContractKind.TRICK),
    Contract(ContractId.LTOOSH, "Ltoosh", ContractKind.TRICK),
    Contract(ContractId.TRIX, "Trix", ContractKind.LAYOUT),
)

CONTRACT_IDS: tuple[ContractId, ...] = tuple(c.id for c in CONTRACTS)

# Trix layout placement awards: 1st, 2nd, 3rd, 4th out.
TRIX_LAYOUT_SCORES: tuple[int, int, int, int] = (200, 150, 100, 50)

# Per-trick penalties
DIAMOND_PENALTY = -10
QUEEN_PENALTY = -25
LTOOSH_TRICK_PENALTY = -15
KING_PENALTY = -75


def contract_by_id(contract_id: ContractId | str) -> Contract:
    cid = ContractId(contract_id)
    for c in CONTRACTS:
        if c.id == cid:
            return c
    raise ValueError(f"Unknown contract: {contract_id!r}")


def supports_doubling(contract_id: ContractId, profile: RuleProfile) -> bool:
    """King is always doublable; Queens only under the Jawaker 2025 profile."""
    if contract_id == ContractId.KING:
        return True
    return contract_id == ContractId.QUEENS and profile == RuleProfile.JAWAKER_2025


def doubling_is_closed(profile: RuleProfile) -> bool:
    return profile == RuleProfile.JAWAKER_2025

"""
Seat controllers and the generic policy interface.

A ``Policy`` answers the three questions the orchestrator may ask a seat:
which card to play (``act``), which contract to pick when it owns the kingdom
(``pick_contract``), and which eligible cards to double (``choose_doubles``).

- ``HeuristicAgent`` wraps the rule-based bots in ``trix.ai``.
- ``RandomAgent`` chooses uniformly among legal actions from the env mask.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Protocol, Sequence

import numpy as np

from .ai import Move, choose_contract, choose_move
from .contracts import ContractId, Difficulty
from .deck import Card
from .env import action_from_index, legal_action_mask
from .scoring import bot_double_keys
from .view import SeatView


class Policy(Protocol):
    """Decision policy for one seat. Only ever sees that seat's ``SeatView``."""

    def act(self, view: SeatView) -> Move:
        """Return a legal PlayCard / LayoutPlay / LayoutPass for ``view.seat``."""

    def pick_contract(self, view: SeatView, remaining: Sequence[ContractId]) -> ContractId:
        """Return one of ``remaining``."""

    def choose_doubles(self, view: SeatView, contract_id: ContractId, options: Sequence[Card]) -> List[str]:
        """Return the card keys (subset of ``options``) to double."""


@dataclass
class HeuristicAgent:
    """
    Rule-based bot. ``difficulty`` None follows the match setting in the view.

    Usage:
        agent = HeuristicAgent(Difficulty.HARD, seed=7)
        action = agent.act(seat_view(state, Seat.EAST))
    """

    difficulty: Difficulty | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def _difficulty(self, view: SeatView) -> Difficulty:
        return self.difficulty or view.difficulty

    def act(self, view: SeatView) -> Move:
        move = choose_move(view, self._difficulty(view), self._rng)
        if move is None:
            raise ValueError(f"No move to make in phase {view.phase}")
        return move

    def pick_contract(self, view: SeatView, remaining: Sequence[ContractId]) -> ContractId:
        cid = choose_contract(view.hand, remaining, self._difficulty(view), view.rule_profile, self._rng)
        if cid is None:
            raise ValueError("No contract left to pick")
        return cid

    def choose_doubles(self, view: SeatView, contract_id: ContractId, options: Sequence[Card]) -> List[str]:
        return bot_double_keys(view.hand, contract_id, options, self._difficulty(view))


@dataclass
class RandomAgent:
    """Baseline that samples uniformly among legal actions; never doubles."""

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def act(self, view: SeatView) -> Move:
        legal_indices = np.flatnonzero(legal_action_mask(view))
        if legal_indices.size == 0:
            raise ValueError("No legal actions available for RandomAgent")
        return action_from_index(view, int(self._rng.choice(list(legal_indices))))

    def pick_contract(self, view: SeatView, remaining: Sequence[ContractId]) -> ContractId:
        if not remaining:
            raise ValueError("No contract left to pick")
        return self._rng.choice(list(remaining))

    def choose_doubles(self, view: SeatView, contract_id: ContractId, options: Sequence[Card]) -> List[str]:
        return []


__all__ = ["Policy", "HeuristicAgent", "RandomAgent"]

"""Builders for hand-crafted positions used across the engine tests."""
from __future__ import annotations

import random
from typing import Iterable, List, Mapping, Sequence, Tuple

from trix.actions import Action
from trix.contracts import ContractId, contract_by_id
from trix.deck import Card, Suit
from trix.events import Event
from trix.game import apply_action
from trix.play import sort_hand
from trix.seats import SEATS, Seat
from trix.state import MatchConfig, MatchState, Phase, start_match

_SUITS = {"S": Suit.SPADES, "H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS}
_RANKS = {"A": 1, "J": 11, "Q": 12, "K": 13}


def card(text: str) -> Card:
    """``"KH"`` -> King of hearts, ``"10D"`` -> ten of diamonds."""
    rank, suit = text[:-1], text[-1]
    return Card(_SUITS[suit], _RANKS.get(rank) or int(rank))


def cards(*texts: str) -> List[Card]:
    return [card(t) for t in texts]


def position(
    hands: Mapping[Seat, Iterable[str]],
    contract_id: ContractId | None,
    owner: Seat = Seat.SOUTH,
    config: MatchConfig | None = None,
) -> MatchState:
    """
    A match with the given hands. With a contract the deal is already in play
    (owner to move); with None the owner is about to pick.
    """
    state = start_match(config, rng=random.Random(0))
    state.hands = {seat: sort_hand(cards(*hands.get(seat, ()))) for seat in SEATS}
    state.kingdom_owner = owner
    state.turn = owner
    state.leader = owner
    state.message = ""
    if contract_id is None:
        return state
    contract = contract_by_id(contract_id)
    state.current_contract = contract
    state.deal_number = 1
    state.phase = Phase.TRIX_LAYOUT_PLAY if contract.is_layout else Phase.TRICK_PLAY
    return state


def play(
    state: MatchState,
    actions: Sequence[Action],
    rng: random.Random | None = None,
) -> Tuple[MatchState, List[Event]]:
    """Apply ``actions`` in order; every one of them must be accepted."""
    events: List[Event] = []
    for action in actions:
        new_state, new_events = apply_action(state, action, rng or random.Random(1))
        assert new_state is not state, f"{action!r} was ignored"
        state = new_state
        events.extend(new_events)
    return state, events

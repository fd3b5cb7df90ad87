"""
Flat numeric encoding of a SeatView, for learning agents and analysis.

Observations only use what the seat can see (its own hand, public history,
contract, layout, seat/partner identity). The action space is the 52 cards
plus a single PASS action (only legal in layout play when no card fits).
"""
from __future__ import annotations

from typing import Iterable, Union

import numpy as np

from .actions import LayoutPass, LayoutPlay, PlayCard
from .contracts import CONTRACT_IDS
from .deck import Card, Suit, make_deck_52
from .play import legal_layout_plays, legal_trick_plays, rank_value, suit_layout
from .seats import SEATS, Mode, Seat
from .view import Phase, SeatView

NUM_CARDS: int = 52
PASS_ACTION: int = NUM_CARDS
NUM_ACTIONS: int = NUM_CARDS + 1

# hand, played, current trick, revealed 2s (4 × 52) + led suit (4) + contract (5)
# + layout (4 suits × started/low/high) + seat (4) + partner (4) + partnership flag (1)
OBS_SIZE: int = 4 * NUM_CARDS + 4 + len(CONTRACT_IDS) + 12 + 4 + 4 + 1

_DECK = make_deck_52()


def card_index(card: Card) -> int:
    """Stable index 0..51, suit-major then rank 1..13 (matches make_deck_52())."""
    return int(card.suit) * 13 + (card.rank - 1)


def card_from_index(index: int) -> Card:
    if not 0 <= index < NUM_CARDS:
        raise ValueError(f"Card index out of range: {index}")
    return _DECK[index]


def encode_card_set(cards: Iterable[Card]) -> np.ndarray:
    """Binary 52-dim vector: 1.0 where the card is present."""
    vec = np.zeros(NUM_CARDS, dtype=np.float32)
    for c in cards:
        vec[card_index(c)] = 1.0
    return vec


def _one_hot(index: int | None, size: int) -> np.ndarray:
    vec = np.zeros(size, dtype=np.float32)
    if index is not None and 0 <= index < size:
        vec[index] = 1.0
    return vec


def _encode_layout(view: SeatView) -> np.ndarray:
    out = np.zeros(12, dtype=np.float32)
    for s in Suit:
        st = suit_layout(view.layout, s)
        if st.started:
            out[3 * int(s)] = 1.0
            out[3 * int(s) + 1] = st.low / 13.0
            out[3 * int(s) + 2] = rank_value(st.high) / 14.0
    return out


def encode_view(view: SeatView) -> np.ndarray:
    """Observation vector of length OBS_SIZE (float32)."""
    contract = CONTRACT_IDS.index(view.contract_id) if view.contract_id is not None else None
    led = int(view.led_suit) if view.led_suit is not None else None
    partner = view.partner.position if view.partner is not None else None
    revealed = [c for cards in view.revealed_twos.values() for c in cards]

    obs = np.concatenate(
        [
            encode_card_set(view.hand),
            encode_card_set(t.card for t in view.played_cards),
            encode_card_set(t.card for t in view.current_trick),
            encode_card_set(revealed),
            _one_hot(led, 4),
            _one_hot(contract, len(CONTRACT_IDS)),
            _encode_layout(view),
            _one_hot(view.seat.position, len(SEATS)),
            _one_hot(partner, len(SEATS)),
            np.array([1.0 if view.mode == Mode.PARTNERS else 0.0], dtype=np.float32),
        ]
    )
    assert obs.shape == (OBS_SIZE,)
    return obs


def legal_action_mask(view: SeatView) -> np.ndarray:
    """Boolean mask over NUM_ACTIONS; all False outside play phases."""
    mask = np.zeros(NUM_ACTIONS, dtype=bool)
    if view.phase == Phase.TRICK_PLAY:
        for c in legal_trick_plays(view.hand, view.led_suit):
            mask[card_index(c)] = True
    elif view.phase == Phase.TRIX_LAYOUT_PLAY:
        legal = legal_layout_plays(view.hand, view.layout)
        for c in legal:
            mask[card_index(c)] = True
        if not legal:
            mask[PASS_ACTION] = True
    return mask


def action_from_index(view: SeatView, index: int) -> Union[PlayCard, LayoutPlay, LayoutPass]:
    """Turn an action index back into an engine action for ``view.seat``."""
    if not 0 <= index < NUM_ACTIONS or not legal_action_mask(view)[index]:
        raise ValueError(f"Action {index} is not legal for {view.seat.label} in {view.phase}")
    seat: Seat = view.seat
    if index == PASS_ACTION:
        return LayoutPass(seat)
    card = card_from_index(index)
    if view.phase == Phase.TRICK_PLAY:
        return PlayCard(seat, card)
    return LayoutPlay(seat, card)

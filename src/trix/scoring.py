"""
Scoring: per-trick contract penalties, Trix placement awards, doubling decisions.

Penalties go to the seat that captures the trick:
  Diamonds -10 per diamond, Queens -25 per queen, Ltoosh -15 per trick, King of Hearts -75.
A doubled penalty card costs its capturer twice; if the capturer is not the
seat that doubled it, that seat is credited the base penalty.
"""
from __future__ import annotations

from typing import Mapping, Sequence

from .contracts import (
    DIAMOND_PENALTY,
    KING_PENALTY,
    LTOOSH_TRICK_PENALTY,
    QUEEN_PENALTY,
    TRIX_LAYOUT_SCORES,
    ContractId,
    Difficulty,
)
from .deck import Card, KING_OF_HEARTS, Suit
from .play import TrickCard
from .seats import SEATS, Seat


def _add(deltas: dict[Seat, int], seat: Seat, amount: int) -> None:
    deltas[seat] = deltas.get(seat, 0) + amount


def _doubled_penalty(
    deltas: dict[Seat, int],
    winner: Seat,
    base: int,
    holder: Seat | None,
) -> None:
    _add(deltas, winner, base)
    if holder is not None:
        _add(deltas, winner, base)
        if holder != winner:
            _add(deltas, holder, -base)


def trick_deltas(
    contract_id: ContractId,
    winner: Seat,
    trick: Sequence[TrickCard],
    doubled: Mapping[str, Seat] | None = None,
) -> dict[Seat, int]:
    """
    Score changes caused by one completed trick.

    ``doubled`` maps a doubled card's key to the seat that doubled it.
    Returns only non-zero entries. The layout contract never scores per trick.
    """
    doubled = doubled or {}
    deltas: dict[Seat, int] = {}
    cards = [t.card for t in trick]

    if contract_id == ContractId.DIAMONDS:
        n = sum(1 for c in cards if c.suit == Suit.DIAMONDS)
        if n:
            _add(deltas, winner, DIAMOND_PENALTY * n)
    elif contract_id == ContractId.QUEENS:
        for q in (c for c in cards if c.is_queen()):
            _doubled_penalty(deltas, winner, QUEEN_PENALTY, doubled.get(q.key))
    elif contract_id == ContractId.LTOOSH:
        _add(deltas, winner, LTOOSH_TRICK_PENALTY)
    elif contract_id == ContractId.KING:
        if KING_OF_HEARTS in cards:
            _doubled_penalty(deltas, winner, KING_PENALTY, doubled.get(KING_OF_HEARTS.key))

    return {seat: d for seat, d in deltas.items() if d != 0}


def layout_deltas(out_order: Sequence[Seat]) -> dict[Seat, int]:
    """Placement awards by finishing order; 500 points in total for a full deal."""
    deltas = {seat: 0 for seat in SEATS}
    for place, seat in enumerate(out_order[: len(TRIX_LAYOUT_SCORES)]):
        deltas[seat] += TRIX_LAYOUT_SCORES[place]
    return deltas


def double_candidates(
    hands: Mapping[Seat, Sequence[Card]],
    contract_id: ContractId,
) -> dict[Seat, list[Card]]:
    """Doublable cards per holder: the King of Hearts, or every Queen."""
    by_holder: dict[Seat, list[Card]] = {}
    for seat in SEATS:
        hand = hands.get(seat, ())
        if contract_id == ContractId.KING:
            cards = [c for c in hand if c.is_king_of_hearts()]
        elif contract_id == ContractId.QUEENS:
            cards = [c for c in hand if c.is_queen()]
        else:
            cards = []
        if cards:
            by_holder[seat] = cards
    return by_holder


def bot_double_keys(
    hand: Sequence[Card],
    contract_id: ContractId,
    cards: Sequence[Card],
    difficulty: Difficulty,
) -> list[str]:
    """
    Which of ``cards`` a bot holder doubles.

    Easy bots never double. The King of Hearts is doubled when hearts are short
    (<= 4, hard <= 5); a Queen when its suit is short (<= 3, hard <= 4) or it is
    the bot's only Queen.
    """
    if difficulty == Difficulty.EASY:
        return []
    hard = difficulty == Difficulty.HARD

    if contract_id == ContractId.KING:
        hearts = sum(1 for c in hand if c.suit == Suit.HEARTS)
        return [c.key for c in cards] if hearts <= (5 if hard else 4) else []

    if contract_id == ContractId.QUEENS:
        limit = 4 if hard else 3
        out = []
        for q in cards:
            suit_count = sum(1 for c in hand if c.suit == q.suit)
            if suit_count <= limit or len(cards) <= 1:
                out.append(q.key)
        return out

    return []

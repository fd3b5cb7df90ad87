"""
Card play rules: follow-suit legality, trick winner, Trix layout progression.
No trump suit: the highest card of the led suit wins; off-suit cards never win.
Layout: each suit opens with its Jack, then grows down to 2 and up through K to A.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

from .deck import Card, RANK_ACE, RANK_JACK, RANK_KING, RANK_TWO, Suit
from .seats import Seat


@dataclass(frozen=True)
class TrickCard:
    """One card played into a trick."""
    seat: Seat
    card: Card


@dataclass(frozen=True)
class SuitLayout:
    """Layout progress for one suit: unstarted until its Jack is played."""
    started: bool = False
    low: int = RANK_JACK
    high: int = RANK_JACK

    def needed_low(self) -> Optional[int]:
        if not self.started or self.low <= RANK_TWO:
            return None
        return self.low - 1

    def needed_high(self) -> Optional[int]:
        if not self.started:
            return None
        return next_high(self.high)

    def accepts(self, rank: int) -> bool:
        if not self.started:
            return rank == RANK_JACK
        return rank in (self.needed_low(), self.needed_high())

    @property
    def complete(self) -> bool:
        return self.started and self.low == RANK_TWO and self.high == RANK_ACE


UNSTARTED = SuitLayout()

Layout = Mapping[Suit, SuitLayout]


def rank_value(rank: int) -> int:
    """Comparison rank for tricks: Ace is high (14)."""
    return 14 if rank == RANK_ACE else rank


def next_high(high: int) -> Optional[int]:
    """Upward successor on the layout: K is followed by A, A closes the side."""
    if high == RANK_KING:
        return RANK_ACE
    if high == RANK_ACE:
        return None
    return high + 1


def led_suit(trick: Sequence[TrickCard]) -> Optional[Suit]:
    return trick[0].card.suit if trick else None


def has_suit(hand: Iterable[Card], suit: Suit) -> bool:
    return any(c.suit == suit for c in hand)


def legal_trick_plays(hand: Sequence[Card], led: Optional[Suit]) -> list[Card]:
    """
    Cards that may be played given the led suit (None when leading).
    Must follow suit if possible; otherwise any card.
    """
    if led is None or not has_suit(hand, led):
        return list(hand)
    return [c for c in hand if c.suit == led]


def trick_winner(trick: Sequence[TrickCard]) -> Seat:
    """Seat that captures the trick: highest card of the led suit."""
    if not trick:
        raise ValueError("Empty trick has no winner")
    led = trick[0].card.suit
    best = trick[0]
    for t in trick[1:]:
        if t.card.suit != led:
            continue
        if rank_value(t.card.rank) > rank_value(best.card.rank):
            best = t
    return best.seat


def current_trick_leader(trick: Sequence[TrickCard]) -> Optional[TrickCard]:
    """Card currently winning an incomplete trick (None if empty)."""
    if not trick:
        return None
    led = trick[0].card.suit
    best = trick[0]
    for t in trick[1:]:
        if t.card.suit == led and rank_value(t.card.rank) > rank_value(best.card.rank):
            best = t
    return best


def suit_layout(layout: Layout, suit: Suit) -> SuitLayout:
    return layout.get(suit, UNSTARTED)


def is_legal_layout_card(layout: Layout, card: Card) -> bool:
    return suit_layout(layout, card.suit).accepts(card.rank)


def legal_layout_plays(hand: Sequence[Card], layout: Layout) -> list[Card]:
    """Cards from hand that extend the layout (Jacks open unstarted suits)."""
    return [c for c in hand if is_legal_layout_card(layout, c)]


def apply_layout_card(layout: Layout, card: Card) -> dict[Suit, SuitLayout]:
    """
    Return a new layout with ``card`` placed. The input mapping is not modified.
    Raises ValueError if the card does not extend the layout.
    """
    st = suit_layout(layout, card.suit)
    if not st.accepts(card.rank):
        raise ValueError(f"{card} cannot be placed on the layout")
    out = dict(layout)
    if not st.started:
        out[card.suit] = SuitLayout(started=True, low=RANK_JACK, high=RANK_JACK)
    elif card.rank == st.needed_low():
        out[card.suit] = SuitLayout(started=True, low=card.rank, high=st.high)
    else:
        out[card.suit] = SuitLayout(started=True, low=st.low, high=card.rank)
    return out


def layout_complete(layout: Layout) -> bool:
    return all(suit_layout(layout, s).complete for s in Suit)


def sort_key(card: Card) -> tuple[int, int]:
    return (int(card.suit), rank_value(card.rank))


def sort_hand(hand: Iterable[Card]) -> list[Card]:
    """Display order: spades, hearts, diamonds, clubs; low to high (Ace last)."""
    return sorted(hand, key=sort_key)


def lowest(cards: Sequence[Card]) -> Card:
    return min(cards, key=lambda c: rank_value(c.rank))


def highest(cards: Sequence[Card]) -> Card:
    return max(cards, key=lambda c: rank_value(c.rank))

"""
Standard 52-card deck used by Trix (4 suits × 13 ranks, no jokers).
Ranks: 1=Ace, 2..10, 11=Jack, 12=Queen, 13=King. Ace compares highest in tricks.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Suit(IntEnum):
    """Spades, Hearts, Diamonds, Clubs. Order is also the hand-sort order."""
    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "Suit":
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"Unknown suit: {label!r}") from None


RANK_ACE = 1
RANK_TWO = 2
RANK_SEVEN = 7
RANK_JACK = 11
RANK_QUEEN = 12
RANK_KING = 13

_RANK_SYMBOLS = {RANK_ACE: "A", RANK_JACK: "J", RANK_QUEEN: "Q", RANK_KING: "K"}


@dataclass(frozen=True)
class Card:
    """A single playing card. Equality and hashing by (suit, rank)."""

    suit: Suit
    rank: int  # 1..13

    def __post_init__(self) -> None:
        if not 1 <= self.rank <= 13:
            raise ValueError(f"Rank out of range: {self.rank}")

    @property
    def key(self) -> str:
        return card_key(self)

    def is_king_of_hearts(self) -> bool:
        return self.suit == Suit.HEARTS and self.rank == RANK_KING

    def is_queen(self) -> bool:
        return self.rank == RANK_QUEEN

    def is_jack(self) -> bool:
        return self.rank == RANK_JACK

    def __str__(self) -> str:
        rank_str = _RANK_SYMBOLS.get(self.rank) or str(self.rank)
        suit_char = "♠♥♦♣"[self.suit]
        return f"{rank_str}{suit_char}"

    def __repr__(self) -> str:
        return str(self)


KING_OF_HEARTS = Card(Suit.HEARTS, RANK_KING)
SEVEN_OF_HEARTS = Card(Suit.HEARTS, RANK_SEVEN)


def card_key(card: Card) -> str:
    """Stable string key, e.g. ``"hearts:13"``. Used by the doubling map."""
    return f"{card.suit.label}:{card.rank}"


def parse_card_key(key: str) -> Card:
    suit, _, rank = key.partition(":")
    if not rank:
        raise ValueError(f"Malformed card key: {key!r}")
    return Card(Suit.from_label(suit), int(rank))


def make_deck_52() -> list[Card]:
    """Build a full 52-card deck, suit-major then rank 1..13."""
    deck: list[Card] = []
    for s in Suit:
        for rank in range(1, 14):
            deck.append(Card(s, rank))
    return deck

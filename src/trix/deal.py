"""
Shuffling and distribution: 13 cards to each of the 4 seats, one at a time in rotation order.
The first kingdom goes to whoever holds the 7 of hearts after the very first shuffle.
"""
from __future__ import annotations

import logging
import os
import random
from typing import NamedTuple

from .deck import Card, SEVEN_OF_HEARTS, make_deck_52
from .play import sort_hand
from .seats import SEATS, Seat

LOGGER = logging.getLogger(__name__)

HAND_SIZE = 13


def default_rng() -> random.Random:
    """
    OS entropy (SystemRandom) when the platform provides it, else a plain Mersenne Twister.
    ``randrange``/``shuffle`` draw by rejection sampling, so neither has modulo bias.
    """
    try:
        os.urandom(1)
    except NotImplementedError:
        LOGGER.warning("No OS entropy source available; falling back to random.Random")
        return random.Random()
    return random.SystemRandom()


def shuffled_deck(rng: random.Random | None = None) -> list[Card]:
    """A fresh 52-card deck in random order (Fisher-Yates via ``rng.shuffle``)."""
    if rng is None:
        rng = default_rng()
    deck = make_deck_52()
    rng.shuffle(deck)
    return deck


class Deal(NamedTuple):
    """Result of one distribution. Hands are sorted for display."""
    hands: dict[Seat, list[Card]]


def deal_hands(deck: list[Card] | None = None, rng: random.Random | None = None) -> Deal:
    """
    Deal 13 cards to each seat, one card per seat per round, South first.
    If ``deck`` is given it is dealt in the given order (no shuffle).
    """
    if deck is None:
        deck = shuffled_deck(rng)
    if len(deck) != HAND_SIZE * len(SEATS):
        raise ValueError(f"Expected a 52-card deck, got {len(deck)} cards")
    hands: dict[Seat, list[Card]] = {seat: [] for seat in SEATS}
    for i, card in enumerate(deck):
        hands[SEATS[i % 4]].append(card)
    return Deal(hands={seat: sort_hand(h) for seat, h in hands.items()})


def seven_of_hearts_owner(hands: dict[Seat, list[Card]]) -> Seat:
    """Seat holding the 7 of hearts; South if (impossibly) nobody does."""
    for seat in SEATS:
        if SEVEN_OF_HEARTS in hands.get(seat, ()):
            return seat
    return Seat.SOUTH

"""Trick penalties, doubling settlement, layout awards and bot doubling choices."""
from trix.contracts import ContractId, Difficulty
from trix.deck import KING_OF_HEARTS
from trix.play import TrickCard
from trix.scoring import bot_double_keys, double_candidates, layout_deltas, trick_deltas
from trix.seats import SEATS, Seat

from helpers import card, cards


def _trick(*texts):
    return [TrickCard(seat, card(t)) for seat, t in zip(SEATS, texts)]


def test_diamonds_cost_ten_each():
    trick = _trick("5D", "9D", "KD", "2C")
    assert trick_deltas(ContractId.DIAMONDS, Seat.NORTH, trick) == {Seat.NORTH: -30}


def test_no_penalty_means_no_entries():
    trick = _trick("5S", "9S", "KS", "2C")
    assert trick_deltas(ContractId.DIAMONDS, Seat.NORTH, trick) == {}
    assert trick_deltas(ContractId.KING, Seat.NORTH, trick) == {}
    assert trick_deltas(ContractId.TRIX, Seat.NORTH, trick) == {}


def test_ltoosh_costs_fifteen_per_trick():
    trick = _trick("5S", "9S", "KS", "2C")
    assert trick_deltas(ContractId.LTOOSH, Seat.NORTH, trick) == {Seat.NORTH: -15}


def test_queens_plain_and_doubled():
    trick = _trick("QS", "QH", "2S", "3S")
    assert trick_deltas(ContractId.QUEENS, Seat.SOUTH, trick) == {Seat.SOUTH: -50}
    # East doubled the queen of hearts and lost it to South
    deltas = trick_deltas(ContractId.QUEENS, Seat.SOUTH, trick, {"hearts:12": Seat.EAST})
    assert deltas == {Seat.SOUTH: -75, Seat.EAST: 25}


def test_king_doubled_by_its_own_capturer():
    trick = _trick("AH", "KH", "2H", "3H")
    assert trick_deltas(ContractId.KING, Seat.SOUTH, trick) == {Seat.SOUTH: -75}
    deltas = trick_deltas(ContractId.KING, Seat.SOUTH, trick, {KING_OF_HEARTS.key: Seat.SOUTH})
    assert deltas == {Seat.SOUTH: -150}
    deltas = trick_deltas(ContractId.KING, Seat.SOUTH, trick, {KING_OF_HEARTS.key: Seat.EAST})
    assert deltas == {Seat.SOUTH: -150, Seat.EAST: 75}


def test_layout_awards_total_500():
    order = [Seat.EAST, Seat.WEST, Seat.SOUTH, Seat.NORTH]
    deltas = layout_deltas(order)
    assert deltas == {Seat.EAST: 200, Seat.WEST: 150, Seat.SOUTH: 100, Seat.NORTH: 50}
    assert sum(deltas.values()) == 500


def test_double_candidates():
    hands = {
        Seat.SOUTH: cards("QS", "2C"),
        Seat.EAST: cards("KH", "QD"),
        Seat.NORTH: cards("3C"),
        Seat.WEST: cards("QH", "QC"),
    }
    assert double_candidates(hands, ContractId.KING) == {Seat.EAST: cards("KH")}
    assert double_candidates(hands, ContractId.QUEENS) == {
        Seat.SOUTH: cards("QS"),
        Seat.EAST: cards("QD"),
        Seat.WEST: cards("QH", "QC"),
    }
    assert double_candidates(hands, ContractId.DIAMONDS) == {}


def test_bot_doubles_king_with_short_hearts():
    short = cards("KH", "2H", "3S", "4S", "5S", "6S", "7C", "8C", "9C", "10C", "JD", "QD", "KD")
    long_ = cards("KH", "2H", "3H", "4H", "5H", "6H", "7C", "8C", "9C", "10C", "JD", "QD", "KD")
    kh = cards("KH")
    assert bot_double_keys(short, ContractId.KING, kh, Difficulty.MODERATE) == ["hearts:13"]
    assert bot_double_keys(short, ContractId.KING, kh, Difficulty.EASY) == []
    assert bot_double_keys(long_, ContractId.KING, kh, Difficulty.MODERATE) == []


def test_bot_doubles_short_or_lone_queens():
    hand = cards("QS", "2S", "QH", "2H", "3H", "4H", "5H", "6H")
    keys = bot_double_keys(hand, ContractId.QUEENS, cards("QS", "QH"), Difficulty.MODERATE)
    assert keys == ["spades:12"]
    lone = cards("QH", "2H", "3H", "4H", "5H", "6H")
    assert bot_double_keys(lone, ContractId.QUEENS, cards("QH"), Difficulty.MODERATE) == ["hearts:12"]

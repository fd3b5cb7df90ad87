"""Bot move and contract policies."""
import random

from trix.actions import LayoutPass, LayoutPlay, PlayCard
from trix.ai import choose_contract, choose_move, contract_risk, infer_voids, is_penalty, unlocked_after
from trix.contracts import CONTRACT_IDS, ContractId, Difficulty, RuleProfile
from trix.deck import Suit
from trix.game import apply_action
from trix.play import SuitLayout, TrickCard
from trix.runner import default_agents, next_action
from trix.seats import Mode, Seat
from trix.state import MatchConfig, Phase, seat_view, start_match
from trix.view import CompletedTrick, SeatView

from helpers import card, cards


def _trick_view(hand, contract_id, trick=(), difficulty=Difficulty.MODERATE, **kwargs):
    current = tuple(TrickCard(seat, card(t)) for seat, t in trick)
    return SeatView(
        seat=Seat.SOUTH,
        phase=Phase.TRICK_PLAY,
        hand=tuple(cards(*hand)),
        contract_id=contract_id,
        led_suit=current[0].card.suit if current else None,
        current_trick=current,
        difficulty=difficulty,
        **kwargs,
    )


def test_choose_move_outside_play_is_none():
    state = start_match(rng=random.Random(1))
    assert choose_move(seat_view(state, Seat.SOUTH)) is None


def test_moderate_lead_avoids_penalty_suit():
    view = _trick_view(["5D", "9S", "3C", "2D"], ContractId.DIAMONDS)
    assert choose_move(view) == PlayCard(Seat.SOUTH, card("3C"))
    view = _trick_view(["2H", "9S", "8C"], ContractId.KING)
    assert choose_move(view) == PlayCard(Seat.SOUTH, card("8C"))


def test_penalty_cards_per_contract():
    assert is_penalty(card("4D"), ContractId.DIAMONDS)
    assert is_penalty(card("QC"), ContractId.QUEENS)
    assert is_penalty(card("KH"), ContractId.KING)
    assert not is_penalty(card("QH"), ContractId.KING)
    assert not is_penalty(card("KH"), ContractId.LTOOSH)
    assert not is_penalty(card("4D"), None)


def test_moderate_discards_highest_diamond_when_void():
    view = _trick_view(["4D", "JD", "AC"], ContractId.DIAMONDS, trick=[(Seat.EAST, "5S")])
    assert choose_move(view) == PlayCard(Seat.SOUTH, card("JD"))


def test_moderate_dumps_king_when_void():
    view = _trick_view(["KH", "4D"], ContractId.KING, trick=[(Seat.EAST, "5S")])
    assert choose_move(view) == PlayCard(Seat.SOUTH, card("KH"))


def test_moderate_ltoosh_sheds_highest_losing_card():
    view = _trick_view(["2S", "8S", "QS"], ContractId.LTOOSH, trick=[(Seat.EAST, "10S")])
    assert choose_move(view) == PlayCard(Seat.SOUTH, card("8S"))
    view = _trick_view(["2S", "8S", "QS"], ContractId.QUEENS, trick=[(Seat.EAST, "10S")])
    assert choose_move(view) == PlayCard(Seat.SOUTH, card("2S"))


def test_hard_partner_lets_partner_win_queens():
    view = _trick_view(
        ["3S", "9S"],
        ContractId.QUEENS,
        trick=[(Seat.WEST, "5S"), (Seat.NORTH, "KS")],
        difficulty=Difficulty.HARD,
        mode=Mode.PARTNERS,
        partner=Seat.NORTH,
    )
    assert choose_move(view) == PlayCard(Seat.SOUTH, card("9S"))


def test_hard_discards_hearts_in_king_contract():
    view = _trick_view(["4H", "10H", "AD"], ContractId.KING, trick=[(Seat.EAST, "5S")], difficulty=Difficulty.HARD)
    assert choose_move(view) == PlayCard(Seat.SOUTH, card("10H"))


def test_infer_voids_from_history():
    done = CompletedTrick(
        led_suit=Suit.SPADES,
        winner=Seat.SOUTH,
        cards=(
            TrickCard(Seat.SOUTH, card("AS")),
            TrickCard(Seat.EAST, card("2H")),
            TrickCard(Seat.NORTH, card("3S")),
            TrickCard(Seat.WEST, card("4S")),
        ),
    )
    current = [TrickCard(Seat.NORTH, card("5D")), TrickCard(Seat.WEST, card("6C"))]
    voids = infer_voids([done], current, Suit.DIAMONDS)
    assert voids[Seat.EAST] == {Suit.SPADES}
    assert voids[Seat.WEST] == {Suit.DIAMONDS}
    assert voids[Seat.NORTH] == set()


def test_layout_moves_pass_only_when_stuck():
    layout = {Suit.HEARTS: SuitLayout(started=True, low=11, high=11)}
    for difficulty in Difficulty:
        stuck = SeatView(
            seat=Seat.EAST,
            phase=Phase.TRIX_LAYOUT_PLAY,
            hand=tuple(cards("2C", "3C")),
            layout=layout,
            contract_id=ContractId.TRIX,
        )
        assert choose_move(stuck, difficulty, random.Random(0)) == LayoutPass(Seat.EAST)


def test_hard_layout_prefers_unlocking_runs():
    layout = {
        Suit.HEARTS: SuitLayout(started=True, low=11, high=11),
        Suit.SPADES: SuitLayout(started=True, low=11, high=11),
    }
    hand = cards("10H", "9H", "8H", "QS")
    # 10H opens 9H and leaves QS playable; QS only leaves 10H playable
    assert unlocked_after(card("10H"), hand, layout) == 2
    assert unlocked_after(card("QS"), hand, layout) == 1
    view = SeatView(
        seat=Seat.SOUTH,
        phase=Phase.TRIX_LAYOUT_PLAY,
        hand=tuple(hand),
        layout=layout,
        contract_id=ContractId.TRIX,
        difficulty=Difficulty.HARD,
    )
    assert choose_move(view) == LayoutPlay(Seat.SOUTH, card("10H"))


def test_every_tier_always_proposes_a_legal_move():
    rng = random.Random(21)
    state = start_match(MatchConfig(mode=Mode.PARTNERS), rng=rng)
    agents = default_agents(seed=21)
    while state.phase != Phase.GAME_END and len(state.deal_log) < 5:
        if state.phase in (Phase.TRICK_PLAY, Phase.TRIX_LAYOUT_PLAY):
            view = seat_view(state, state.turn)
            for difficulty in Difficulty:
                move = choose_move(view, difficulty, rng)
                accepted, _ = apply_action(state, move, rng)
                assert accepted is not state, f"{difficulty.value} proposed {move!r}"
        state, _ = apply_action(state, next_action(state, agents), rng)


def test_contract_risk_weights():
    assert contract_risk(ContractId.KING, cards("KH"), RuleProfile.CLASSIC) == 100
    assert contract_risk(ContractId.KING, cards("QH"), RuleProfile.CLASSIC) == 20
    assert contract_risk(ContractId.QUEENS, cards("QH", "QS"), RuleProfile.CLASSIC) == 60
    assert contract_risk(ContractId.QUEENS, cards("QH", "QS"), RuleProfile.JAWAKER_2025) == 80
    assert contract_risk(ContractId.TRIX, cards("JH", "JS"), RuleProfile.CLASSIC) == 20


def test_choose_contract_lowest_risk_with_catalog_tie_break():
    assert choose_contract([], CONTRACT_IDS) == ContractId.QUEENS
    assert choose_contract([], [ContractId.TRIX, ContractId.DIAMONDS]) == ContractId.DIAMONDS
    assert choose_contract(cards("KH", "QS", "QH"), CONTRACT_IDS) == ContractId.DIAMONDS
    assert choose_contract(cards("KH"), [ContractId.KING]) == ContractId.KING
    assert choose_contract(cards("KH"), []) is None


def test_easy_contract_pick_stays_in_pool():
    rng = random.Random(2)
    pool = [ContractId.LTOOSH, ContractId.TRIX]
    for _ in range(20):
        assert choose_contract([], pool, Difficulty.EASY, rng=rng) in pool

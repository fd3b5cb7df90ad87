"""
The Trix state machine: ``apply_action(state, action) -> (new_state, events)``.

Every call works on a deep copy of ``state``; the input value is never modified.
Actions that are not legal in the current position (wrong phase, wrong seat,
card not held or not playable) are ignored: the input state is returned as-is
with no events. An unexpected failure inside a transition discards the working
copy and reports a single ``error`` event.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .actions import (
    Action,
    LayoutPass,
    LayoutPlay,
    PickContract,
    PlayCard,
    ResetMatch,
    SetDoubles,
    StartMatch,
)
from .contracts import (
    ContractId,
    contract_by_id,
    doubling_is_closed,
    supports_doubling,
)
from .deck import Card
from .events import (
    CardPlayed,
    DealEnded,
    DealStarted,
    DoublingPrompt,
    DoublingSet,
    EngineError,
    Event,
    LayoutOut,
    LayoutPassed,
    LayoutPlayed,
    MatchReset,
    MatchStarted,
    TrickWon,
)
from .play import (
    TrickCard,
    apply_layout_card,
    is_legal_layout_card,
    legal_layout_plays,
    legal_trick_plays,
    trick_winner,
)
from .scoring import bot_double_keys, double_candidates, layout_deltas, trick_deltas
from .seats import HUMAN_SEAT, SEATS, Mode, Seat, next_seat
from .state import (
    NUM_KINGDOMS,
    DealRecord,
    DoubleEntry,
    DoublingState,
    MatchState,
    Phase,
    deal_new_hands,
    start_match,
    twos_in_hand,
)
from .view import CompletedTrick

LOGGER = logging.getLogger(__name__)

Transition = Tuple[MatchState, List[Event]]

# Combined layout turns after which partnership Trix reveals every held 2.
REVEAL_TWOS_AFTER_TURNS = 4


def apply_action(
    state: MatchState,
    action: Action,
    rng: random.Random | None = None,
) -> Transition:
    """
    Apply one action and return ``(new_state, events)``.

    ``rng`` is the shuffle source for any deal this transition triggers
    (defaults to OS entropy, see ``trix.deal.default_rng``).
    """
    if not isinstance(action, _ACTION_TYPES):
        raise TypeError(f"Not a Trix action: {action!r}")

    work = state.copy()
    events: List[Event] = []
    try:
        result = _dispatch(work, action, events, rng)
    except Exception as exc:  # noqa: BLE001 - reported as an error event
        LOGGER.exception("Transition failed for %s", type(action).__name__)
        failed = state.copy()
        failed.message = f"Error: {exc}"
        return failed, [EngineError(message=str(exc))]

    if result is None:
        LOGGER.debug("Ignored %s in phase %s", action, state.phase.value)
        return state, []
    return result, events


def _dispatch(
    s: MatchState,
    action: Action,
    events: List[Event],
    rng: random.Random | None,
) -> Optional[MatchState]:
    if isinstance(action, StartMatch):
        return _start(s, action, events, rng)
    if isinstance(action, ResetMatch):
        return _reset(s, events, rng)
    if isinstance(action, PickContract):
        return _pick_contract(s, action, events)
    if isinstance(action, SetDoubles):
        return _set_doubles(s, action, events)
    if isinstance(action, PlayCard):
        return _play_card(s, action, events, rng)
    if isinstance(action, LayoutPlay):
        return _layout_play(s, action, events, rng)
    if isinstance(action, LayoutPass):
        return _layout_pass(s, action, events)
    raise TypeError(f"Unhandled action type: {type(action).__name__}")


_ACTION_TYPES = (StartMatch, ResetMatch, PickContract, SetDoubles, PlayCard, LayoutPlay, LayoutPass)


def _seat_of(action: Action) -> Optional[Seat]:
    """The acting seat, accepting plain seat names; None if it names no seat."""
    try:
        return Seat(action.seat)
    except ValueError:
        return None


# ---- Match lifecycle ----


def _start(
    s: MatchState,
    action: StartMatch,
    events: List[Event],
    rng: random.Random | None,
) -> MatchState:
    cfg = action.config or s.config
    new = start_match(cfg, rng)
    LOGGER.info(
        "Match started (mode=%s, difficulty=%s, profile=%s); kingdom 1 owner: %s",
        cfg.mode.value, cfg.difficulty.value, cfg.rule_profile.value, new.kingdom_owner.label,
    )
    events.append(MatchStarted(mode=cfg.mode, difficulty=cfg.difficulty, rule_profile=cfg.rule_profile))
    return new


def _reset(s: MatchState, events: List[Event], rng: random.Random | None) -> MatchState:
    new = start_match(s.config, rng)
    LOGGER.info("Match reset; kingdom 1 owner: %s", new.kingdom_owner.label)
    events.append(MatchReset())
    return new


# ---- Contract selection and doubling ----


def _pick_contract(s: MatchState, action: PickContract, events: List[Event]) -> Optional[MatchState]:
    if s.phase != Phase.KINGDOM_PICK_CONTRACT:
        return None
    owner = s.kingdom_owner
    if owner is None or _seat_of(action) != owner:
        return None
    try:
        cid = ContractId(action.contract_id)
    except ValueError:
        return None
    if cid not in s.contracts_remaining.get(owner, []):
        return None

    s.current_contract = contract_by_id(cid)
    s.deal_number += 1
    s.doubling = DoublingState()
    s.resume_turn = None

    if supports_doubling(cid, s.rule_profile):
        closed = doubling_is_closed(s.rule_profile)
        doubled: dict[str, DoubleEntry] = {}
        human_options: list[Card] = []
        for seat, cards in double_candidates(s.hands, cid).items():
            if seat == HUMAN_SEAT:
                human_options = list(cards)
                continue
            for key in bot_double_keys(s.hands[seat], cid, cards, s.difficulty):
                doubled[key] = DoubleEntry(holder=seat, closed=closed)

        if human_options:
            s.doubling = DoublingState(
                pending=True,
                contract_id=cid,
                holder=HUMAN_SEAT,
                closed=closed,
                options=human_options,
                doubled_keys=list(doubled),
                map=doubled,
            )
            s.resume_turn = owner
            s.phase = Phase.DOUBLING_DECISION
            s.turn = HUMAN_SEAT
            s.leader = owner
            s.message = "Double?"
            events.append(DealStarted(contract_id=cid, deal_number=s.deal_number))
            events.append(DoublingPrompt(contract_id=cid, options=len(human_options), closed=closed))
            return s

        if doubled:
            s.doubling = DoublingState(
                contract_id=cid,
                closed=closed,
                doubled_keys=list(doubled),
                map=doubled,
            )

    _begin_play(s, owner)
    LOGGER.debug("Deal %d: %s picks %s", s.deal_number, owner.label, cid.value)
    events.append(DealStarted(contract_id=cid, deal_number=s.deal_number))
    return s


def _set_doubles(s: MatchState, action: SetDoubles, events: List[Event]) -> Optional[MatchState]:
    if s.phase != Phase.DOUBLING_DECISION or not s.doubling.pending:
        return None
    holder = s.doubling.holder if s.doubling.holder is not None else HUMAN_SEAT
    wanted = set(action.doubled_keys)
    picked = [c.key for c in s.doubling.options if action.double_all or c.key in wanted]
    for key in picked:
        s.doubling.map[key] = DoubleEntry(holder=holder, closed=s.doubling.closed)
    s.doubling.pending = False
    s.doubling.doubled_keys = list(s.doubling.map)

    _begin_play(s, s.resume_turn if s.resume_turn is not None else s.kingdom_owner)
    s.resume_turn = None
    events.append(
        DoublingSet(
            contract_id=s.current_contract.id if s.current_contract else None,
            count=len(picked),
            closed=s.doubling.closed,
        )
    )
    return s


def _begin_play(s: MatchState, first: Seat) -> None:
    s.turn = first
    s.leader = first
    s.phase = Phase.TRIX_LAYOUT_PLAY if s.current_contract.is_layout else Phase.TRICK_PLAY
    s.message = ""


# ---- Trick contracts ----


def _play_card(
    s: MatchState,
    action: PlayCard,
    events: List[Event],
    rng: random.Random | None,
) -> Optional[MatchState]:
    seat = _seat_of(action)
    if s.phase != Phase.TRICK_PLAY or seat is None or seat != s.turn:
        return None
    hand = s.hands[seat]
    card = action.card
    if card not in legal_trick_plays(hand, s.led_suit):
        return None

    hand.remove(card)
    played = TrickCard(seat=seat, card=card)
    s.trick.append(played)
    s.played_cards.append(played)
    events.append(CardPlayed(seat=seat, card=card))

    if len(s.trick) < len(SEATS):
        s.turn = next_seat(seat)
        return s

    trick = tuple(s.trick)
    winner = trick_winner(trick)
    holders = {key: entry.holder for key, entry in s.doubling.map.items()}
    deltas = trick_deltas(s.current_contract.id, winner, trick, holders)
    _apply_deltas(s, deltas)

    s.completed_tricks.append(CompletedTrick(led_suit=trick[0].card.suit, winner=winner, cards=trick))
    s.taken[winner].extend(t.card for t in trick)
    s.tricks_taken[winner] += 1
    events.append(TrickWon(winner=winner, trick=trick, deltas=deltas))

    s.trick = []
    s.turn = winner
    s.leader = winner

    if s.cards_in_hands() == 0:
        _finish_deal(s, dict(s.deal_deltas), events, rng)
    return s


# ---- Trix layout ----


def _layout_play(
    s: MatchState,
    action: LayoutPlay,
    events: List[Event],
    rng: random.Random | None,
) -> Optional[MatchState]:
    seat = _seat_of(action)
    if s.phase != Phase.TRIX_LAYOUT_PLAY or seat is None or seat != s.turn:
        return None
    hand = s.hands[seat]
    card = action.card
    if card not in hand or not is_legal_layout_card(s.layout, card):
        return None

    hand.remove(card)
    s.layout = apply_layout_card(s.layout, card)
    s.played_cards.append(TrickCard(seat=seat, card=card))
    s.layout_turn_count += 1
    events.append(LayoutPlayed(seat=seat, card=card))

    if not hand and seat not in s.out_order:
        s.out_order.append(seat)
        events.append(LayoutOut(seat=seat, place=len(s.out_order)))

    s.turn = next_seat(seat)
    _maybe_reveal_twos(s)

    if s.cards_in_hands() == 0:
        deltas = layout_deltas(s.out_order)
        _apply_deltas(s, deltas)
        _finish_deal(s, deltas, events, rng)
    return s


def _layout_pass(s: MatchState, action: LayoutPass, events: List[Event]) -> Optional[MatchState]:
    seat = _seat_of(action)
    if s.phase != Phase.TRIX_LAYOUT_PLAY or seat is None or seat != s.turn:
        return None
    if legal_layout_plays(s.hands[seat], s.layout):
        return None
    s.layout_turn_count += 1
    events.append(LayoutPassed(seat=seat))
    s.turn = next_seat(seat)
    _maybe_reveal_twos(s)
    return s


def _maybe_reveal_twos(s: MatchState) -> None:
    """Partnership Trix: once every seat has had a turn, all 2s are shown to everyone."""
    if s.mode != Mode.PARTNERS or s.twos_revealed:
        return
    if s.current_contract is None or s.current_contract.id != ContractId.TRIX:
        return
    if s.layout_turn_count < REVEAL_TWOS_AFTER_TURNS:
        return
    s.revealed_twos = {seat: twos_in_hand(s.hands[seat]) for seat in SEATS if twos_in_hand(s.hands[seat])}
    s.twos_revealed = True


# ---- Scoring and advancement ----


def _apply_deltas(s: MatchState, deltas: dict[Seat, int]) -> None:
    for seat, d in deltas.items():
        s.scores[seat] += d
        s.deal_deltas[seat] += d


def _finish_deal(
    s: MatchState,
    deltas: dict[Seat, int],
    events: List[Event],
    rng: random.Random | None,
) -> None:
    record = DealRecord(
        deal_number=s.deal_number,
        kingdom_number=s.kingdom_number,
        kingdom_owner=s.kingdom_owner,
        contract_id=s.current_contract.id,
        deltas=dict(deltas),
        totals=dict(s.scores),
        team_totals=s.team_scores if s.mode == Mode.PARTNERS else None,
    )
    s.deal_log.append(record)
    LOGGER.debug("Deal %d (%s) ended: %s", record.deal_number, record.contract_id.value, record.deltas)
    events.append(DealEnded(deal_number=s.deal_number, deltas=dict(deltas)))
    _advance_after_deal(s, rng)


def _advance_after_deal(s: MatchState, rng: random.Random | None) -> None:
    owner = s.kingdom_owner
    s.contracts_remaining[owner] = [c for c in s.contracts_remaining[owner] if c != s.current_contract.id]
    s.current_contract = None
    s.doubling = DoublingState()
    s.resume_turn = None
    s.trick = []

    if s.contracts_remaining[owner]:
        deal_new_hands(s, rng)
        s.phase = Phase.KINGDOM_PICK_CONTRACT
        s.turn = owner
        s.leader = owner
        s.message = "Pick a contract"
        return

    if s.kingdom_number >= NUM_KINGDOMS:
        s.phase = Phase.GAME_END
        s.turn = None
        s.message = "Game over"
        LOGGER.info("Match over: %s", {seat.label: score for seat, score in s.scores.items()})
        return

    new_owner = next_seat(owner)
    s.kingdom_owner = new_owner
    s.kingdom_number += 1
    deal_new_hands(s, rng)
    s.phase = Phase.KINGDOM_PICK_CONTRACT
    s.turn = new_owner
    s.leader = new_owner
    s.message = f"Kingdom {s.kingdom_number}/{NUM_KINGDOMS}"
    LOGGER.info("Kingdom %d begins; owner: %s", s.kingdom_number, new_owner.label)

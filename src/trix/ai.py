"""
Computer opponents.

Two policies, both pure functions of public information plus the bot's own hand:

- ``choose_move``: a card (or pass) for trick and layout play, at three tiers.
    easy     - random legal card, slightly favouring low cards when following suit.
    moderate - contract-aware: safe leads, ducking under the current winner,
               dumping penalty cards when void in the led suit.
    hard     - moderate plus void inference from trick history, and a layout
               planner that counts how many of its own cards each move unlocks.
- ``choose_contract``: which remaining contract a bot kingdom owner picks.

Neither function touches a MatchState; they only see a ``SeatView``.
"""
from __future__ import annotations

import random
from typing import Dict, Iterable, Optional, Sequence, Set, Union

from .actions import LayoutPass, LayoutPlay, PlayCard
from .contracts import CONTRACT_IDS, ContractId, Difficulty, RuleProfile
from .deck import Card, RANK_JACK, Suit
from .play import (
    TrickCard,
    apply_layout_card,
    current_trick_leader,
    highest,
    is_legal_layout_card,
    legal_layout_plays,
    legal_trick_plays,
    lowest,
    rank_value,
)
from .seats import SEATS, Mode, Seat, opponents_of
from .view import CompletedTrick, Phase, SeatView

Move = Union[PlayCard, LayoutPlay, LayoutPass]

# Chance that an easy bot plays its lowest card when following suit.
EASY_LOW_BIAS = 0.35


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def is_penalty(card: Card, contract_id: ContractId | None) -> bool:
    """True if capturing ``card`` costs points under the contract (Ltoosh: every trick, no card)."""
    if contract_id == ContractId.DIAMONDS:
        return card.suit == Suit.DIAMONDS
    if contract_id == ContractId.QUEENS:
        return card.is_queen()
    if contract_id == ContractId.KING:
        return card.is_king_of_hearts()
    return False


def infer_voids(
    completed_tricks: Iterable[CompletedTrick],
    current_trick: Sequence[TrickCard] = (),
    led: Optional[Suit] = None,
) -> Dict[Seat, Set[Suit]]:
    """A seat that did not follow a led suit is known to be void in it."""
    voids: Dict[Seat, Set[Suit]] = {seat: set() for seat in SEATS}
    for trick in completed_tricks:
        for t in trick.cards:
            if t.card.suit != trick.led_suit:
                voids[t.seat].add(trick.led_suit)
    if led is not None:
        for t in current_trick:
            if t.card.suit != led:
                voids[t.seat].add(led)
    return voids


def _suit_lengths(cards: Iterable[Card]) -> Dict[Suit, int]:
    out: Dict[Suit, int] = {}
    for c in cards:
        out[c.suit] = out.get(c.suit, 0) + 1
    return out


def _winning_rank(trick: Sequence[TrickCard]) -> int:
    """Comparison rank of the card currently winning the trick (0 if empty)."""
    best = current_trick_leader(trick)
    return rank_value(best.card.rank) if best is not None else 0


def _under(cards: Sequence[Card], rank: int) -> list[Card]:
    return [c for c in cards if rank_value(c.rank) < rank]


# ---- Easy ----


def _easy_trick(view: SeatView, rng: random.Random) -> PlayCard:
    legal = legal_trick_plays(view.hand, view.led_suit)
    following = view.led_suit is not None and legal[0].suit == view.led_suit
    if following and rng.random() < EASY_LOW_BIAS:
        return PlayCard(view.seat, lowest(legal))
    return PlayCard(view.seat, rng.choice(legal))


def _easy_layout(view: SeatView, rng: random.Random) -> Move:
    legal = legal_layout_plays(view.hand, view.layout)
    if not legal:
        return LayoutPass(view.seat)
    return LayoutPlay(view.seat, rng.choice(legal))


# ---- Moderate ----


def _moderate_lead(legal: list[Card], cid: ContractId | None) -> Card:
    if cid == ContractId.DIAMONDS:
        safe = [c for c in legal if c.suit != Suit.DIAMONDS]
    elif cid == ContractId.QUEENS:
        safe = [c for c in legal if not c.is_queen()]
    elif cid == ContractId.KING:
        safe = [c for c in legal if c.suit != Suit.HEARTS]
    else:
        safe = legal
    return lowest(safe or legal)


def _discard(legal: list[Card], cid: ContractId | None) -> Card:
    """Void in the led suit: get rid of the most dangerous card."""
    dangerous = [c for c in legal if is_penalty(c, cid)]
    return highest(dangerous or legal)


def _moderate_trick(view: SeatView) -> PlayCard:
    legal = legal_trick_plays(view.hand, view.led_suit)
    if len(legal) == 1:
        return PlayCard(view.seat, legal[0])
    cid = view.contract_id

    if view.led_suit is None:
        return PlayCard(view.seat, _moderate_lead(legal, cid))

    following = [c for c in legal if c.suit == view.led_suit]
    if following:
        safe = _under(following, _winning_rank(view.current_trick))
        if cid == ContractId.LTOOSH and safe:
            # keep low cards for later; shed the highest card that still loses
            return PlayCard(view.seat, highest(safe))
        return PlayCard(view.seat, lowest(following))

    return PlayCard(view.seat, _discard(legal, cid))


def _moderate_layout(view: SeatView) -> Move:
    legal = legal_layout_plays(view.hand, view.layout)
    if not legal:
        return LayoutPass(view.seat)
    if len(legal) == 1:
        return LayoutPlay(view.seat, legal[0])

    best = legal[0]
    best_score = -1
    for c in legal:
        score = 0
        if c.rank == RANK_JACK:
            score += 3
        if any(h.suit == c.suit and h.rank == c.rank - 1 for h in view.hand):
            score += 2
        if any(h.suit == c.suit and h.rank == c.rank + 1 for h in view.hand):
            score += 2
        if any(h.suit == c.suit and h.rank == c.rank - 2 for h in view.hand):
            score += 1
        if score > best_score:
            best, best_score = c, score
    return LayoutPlay(view.seat, best)


# ---- Hard ----


def _hard_lead(view: SeatView, legal: list[Card], voids: Dict[Seat, Set[Suit]], king_out: bool) -> Card:
    cid = view.contract_id
    partners = view.mode == Mode.PARTNERS and view.partner is not None
    opponents = opponents_of(view.seat) if partners else [s for s in SEATS if s != view.seat]
    lengths = _suit_lengths(legal)

    def void_bias(suit: Suit) -> tuple[int, int]:
        partner_void = 1 if partners and suit in voids[view.partner] else 0
        opp_void = sum(1 for s in opponents if suit in voids[s])
        return (-partner_void, -opp_void)

    if cid == ContractId.KING and not king_out:
        non_hearts = [c for c in legal if c.suit != Suit.HEARTS]
        if non_hearts:
            return min(non_hearts, key=lambda c: (*void_bias(c.suit), lengths[c.suit], rank_value(c.rank)))
        return lowest(legal)

    if cid == ContractId.DIAMONDS:
        non_dia = [c for c in legal if c.suit != Suit.DIAMONDS]
        if non_dia:
            return min(non_dia, key=lambda c: (*void_bias(c.suit), rank_value(c.rank)))
        return lowest(legal)

    if cid == ContractId.QUEENS:
        no_q = [c for c in legal if not c.is_queen()]
        if no_q:
            return min(no_q, key=lambda c: (*void_bias(c.suit), rank_value(c.rank)))
        return lowest(legal)

    if cid == ContractId.LTOOSH:
        # low card from the shortest suit, to get void early
        shortest = min(lengths, key=lambda s: (lengths[s], int(s)))
        return lowest([c for c in legal if c.suit == shortest])

    return lowest(legal)


def _hard_follow(view: SeatView, following: list[Card]) -> Card:
    cid = view.contract_id
    trick = view.current_trick
    safe = _under(following, _winning_rank(trick))

    if cid in (ContractId.LTOOSH, ContractId.KING, ContractId.DIAMONDS):
        if safe:
            return highest(safe)
        return lowest(following)

    if cid == ContractId.QUEENS:
        queen_in_trick = any(t.card.is_queen() for t in trick)
        if queen_in_trick and safe:
            return highest(safe)
        if view.mode == Mode.PARTNERS and view.partner is not None and not queen_in_trick:
            leader = current_trick_leader(trick)
            if leader is not None and leader.seat == view.partner:
                return highest(following)
        return lowest(following)

    return lowest(following)


def _hard_discard(legal: list[Card], cid: ContractId | None) -> Card:
    if cid == ContractId.KING:
        for c in legal:
            if c.is_king_of_hearts():
                return c
        hearts = [c for c in legal if c.suit == Suit.HEARTS]
        if hearts:
            return highest(hearts)
        return highest(legal)
    return _discard(legal, cid)


def _hard_trick(view: SeatView) -> PlayCard:
    legal = legal_trick_plays(view.hand, view.led_suit)
    if len(legal) == 1:
        return PlayCard(view.seat, legal[0])

    voids = infer_voids(view.completed_tricks, view.current_trick, view.led_suit)
    king_out = any(t.card.is_king_of_hearts() for t in view.played_cards)

    if view.led_suit is None:
        return PlayCard(view.seat, _hard_lead(view, legal, voids, king_out))

    following = [c for c in legal if c.suit == view.led_suit]
    if following:
        return PlayCard(view.seat, _hard_follow(view, following))
    return PlayCard(view.seat, _hard_discard(legal, view.contract_id))


def unlocked_after(card: Card, hand: Sequence[Card], layout) -> int:
    """How many of the other cards in ``hand`` would be playable once ``card`` is placed."""
    after = apply_layout_card(layout, card)
    return sum(1 for h in hand if h != card and is_legal_layout_card(after, h))


def _run_length(card: Card, hand: Sequence[Card]) -> int:
    run = 0
    r = card.rank
    for h in sorted((h for h in hand if h.suit == card.suit and h != card), key=lambda h: h.rank):
        if h.rank in (r - 1, r + 1):
            run += 1
            r = h.rank
    return run


def _hard_layout(view: SeatView) -> Move:
    legal = legal_layout_plays(view.hand, view.layout)
    if not legal:
        return LayoutPass(view.seat)
    if len(legal) == 1:
        return LayoutPlay(view.seat, legal[0])

    best = legal[0]
    best_score = None
    for c in legal:
        score = 3 * unlocked_after(c, view.hand, view.layout)
        score += 2 * _run_length(c, view.hand)
        if c.rank == RANK_JACK:
            score += 4
        if best_score is None or score > best_score:
            best, best_score = c, score
    return LayoutPlay(view.seat, best)


# ---- Public entry points ----


def choose_move(
    view: SeatView,
    difficulty: Difficulty | None = None,
    rng: random.Random | None = None,
) -> Optional[Move]:
    """
    Propose a legal move for ``view.seat``. Returns None outside play phases.
    ``difficulty`` defaults to the one recorded in the view.
    """
    diff = difficulty or view.difficulty
    if view.phase == Phase.TRICK_PLAY:
        if not view.hand:
            return None
        if diff == Difficulty.EASY:
            return _easy_trick(view, _rng(rng))
        if diff == Difficulty.HARD:
            return _hard_trick(view)
        return _moderate_trick(view)
    if view.phase == Phase.TRIX_LAYOUT_PLAY:
        if diff == Difficulty.EASY:
            return _easy_layout(view, _rng(rng))
        if diff == Difficulty.HARD:
            return _hard_layout(view)
        return _moderate_layout(view)
    return None


def contract_risk(contract_id: ContractId, hand: Sequence[Card], rule_profile: RuleProfile) -> int:
    """
    How bad ``hand`` looks for a contract; lower is better.
    Holding the King of Hearts makes King very risky; each Queen, Diamond or
    high card adds risk to its contract; each Jack adds risk to Trix.
    """
    if contract_id == ContractId.KING:
        return 100 if any(c.is_king_of_hearts() for c in hand) else 20
    if contract_id == ContractId.QUEENS:
        weight = 35 if rule_profile == RuleProfile.JAWAKER_2025 else 25
        return 10 + weight * sum(1 for c in hand if c.is_queen())
    if contract_id == ContractId.DIAMONDS:
        return 10 + 2 * sum(1 for c in hand if c.suit == Suit.DIAMONDS)
    if contract_id == ContractId.LTOOSH:
        return 15 + sum(1 for c in hand if rank_value(c.rank) >= RANK_JACK)
    if contract_id == ContractId.TRIX:
        return 10 + 5 * sum(1 for c in hand if c.is_jack())
    raise ValueError(f"Unknown contract: {contract_id!r}")


def choose_contract(
    hand: Sequence[Card],
    remaining: Iterable[ContractId],
    difficulty: Difficulty = Difficulty.MODERATE,
    rule_profile: RuleProfile = RuleProfile.CLASSIC,
    rng: random.Random | None = None,
) -> Optional[ContractId]:
    """
    Pick a contract for a bot kingdom owner; None if the pool is empty.
    Easy picks at random; otherwise the lowest ``contract_risk`` wins, ties by catalog order.
    """
    pool = {ContractId(c) for c in remaining}
    ordered = [cid for cid in CONTRACT_IDS if cid in pool]
    if not ordered:
        return None
    if difficulty == Difficulty.EASY:
        return _rng(rng).choice(ordered)

    best = None
    best_risk = None
    for cid in ordered:
        risk = contract_risk(cid, hand, rule_profile)
        if best_risk is None or risk < best_risk:
            best, best_risk = cid, risk
    return best

"""
Headless orchestrator: plays a whole match by asking each seat's policy for
its decision and submitting it to the engine, one action at a time.

This is what a UI does between human clicks; here every seat (South
included) is driven by a ``Policy``.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .actions import Action, PickContract, SetDoubles, StartMatch
from .agents import HeuristicAgent, Policy
from .events import DealEnded, EngineError, Event
from .game import apply_action
from .seats import HUMAN_SEAT, SEATS, Seat, Team
from .state import DealRecord, MatchConfig, MatchState, Phase, initial_state, seat_view

LOGGER = logging.getLogger(__name__)

# 20 deals × at most 52 card plays plus passes; generous ceiling against stalls.
DEFAULT_MAX_STEPS = 20_000


class EngineStalled(RuntimeError):
    """The engine refused an action a policy proposed, or the step limit was hit."""


@dataclass
class MatchResult:
    """Outcome of one simulated match."""

    final_state: MatchState
    events: List[Event] = field(default_factory=list)
    steps: int = 0

    @property
    def scores(self) -> Dict[Seat, int]:
        return dict(self.final_state.scores)

    @property
    def team_scores(self) -> Dict[Team, int]:
        return self.final_state.team_scores

    @property
    def deal_log(self) -> List[DealRecord]:
        return list(self.final_state.deal_log)

    def winners(self) -> List[Seat]:
        best = max(self.scores.values())
        return [seat for seat in SEATS if self.scores[seat] == best]


def default_agents(seed: int | None = None) -> Dict[Seat, Policy]:
    return {seat: HeuristicAgent(seed=None if seed is None else seed + i) for i, seat in enumerate(SEATS)}


def next_action(state: MatchState, agents: Mapping[Seat, Policy]) -> Optional[Action]:
    """The action the seat to move would submit, or None when the match is over."""
    phase = state.phase
    if phase == Phase.KINGDOM_PICK_CONTRACT:
        owner = state.kingdom_owner
        view = seat_view(state, owner)
        return PickContract(owner, agents[owner].pick_contract(view, state.contracts_remaining[owner]))
    if phase == Phase.DOUBLING_DECISION:
        holder = state.doubling.holder if state.doubling.holder is not None else HUMAN_SEAT
        view = seat_view(state, holder)
        keys = agents[holder].choose_doubles(view, state.doubling.contract_id, state.doubling.options)
        return SetDoubles(doubled_keys=tuple(keys))
    if phase in (Phase.TRICK_PLAY, Phase.TRIX_LAYOUT_PLAY):
        return agents[state.turn].act(seat_view(state, state.turn))
    return None


def run_match(
    config: MatchConfig | None = None,
    agents: Mapping[Seat, Policy] | None = None,
    rng: random.Random | None = None,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> MatchResult:
    """
    Play one match to GAME_END.

    ``rng`` drives every shuffle; pass ``random.Random(seed)`` for a reproducible match.
    Raises EngineStalled if a proposed action is ignored or rejected.
    """
    config = config or MatchConfig()
    agents = agents or default_agents()
    state, events = apply_action(initial_state(config), StartMatch(config), rng)
    history: List[Event] = list(events)
    steps = 0

    while state.phase != Phase.GAME_END:
        if steps >= max_steps:
            raise EngineStalled(f"No result after {max_steps} steps (phase {state.phase.value})")
        action = next_action(state, agents)
        new_state, events = apply_action(state, action, rng)
        if new_state is state:
            raise EngineStalled(f"Engine ignored {action!r} in phase {state.phase.value}")
        errors = [e for e in events if isinstance(e, EngineError)]
        if errors:
            raise EngineStalled(f"Engine error on {action!r}: {errors[0].message}")
        for e in events:
            if isinstance(e, DealEnded):
                LOGGER.info("Deal %d finished: %s", e.deal_number, {s.label: d for s, d in e.deltas.items()})
        history.extend(events)
        state = new_state
        steps += 1

    return MatchResult(final_state=state, events=history, steps=steps)

"""
Seating and partnership topology.

Four fixed seats in play rotation: South -> East -> North -> West -> South.
South is the human seat; the other three are bots. In partnership mode
opposite seats play together: A = South + North, B = East + West.
"""
from __future__ import annotations

from enum import Enum


class Seat(str, Enum):
    SOUTH = "south"
    EAST = "east"
    NORTH = "north"
    WEST = "west"

    @property
    def label(self) -> str:
        return self.value

    @property
    def position(self) -> int:
        """Position in play rotation (South = 0)."""
        return SEATS.index(self)

    def next(self) -> "Seat":
        return SEATS[(self.position + 1) % 4]


class Team(str, Enum):
    A = "A"
    B = "B"


class Mode(str, Enum):
    SINGLE = "single"
    PARTNERS = "partners"


SEATS: tuple[Seat, ...] = (Seat.SOUTH, Seat.EAST, Seat.NORTH, Seat.WEST)
HUMAN_SEAT = Seat.SOUTH

TEAMS: dict[Team, tuple[Seat, Seat]] = {
    Team.A: (Seat.SOUTH, Seat.NORTH),
    Team.B: (Seat.EAST, Seat.WEST),
}


def next_seat(seat: Seat) -> Seat:
    """Seat to play after ``seat`` in rotation order."""
    return seat.next()


def seats_from(start: Seat) -> list[Seat]:
    """All four seats in rotation order, beginning with ``start``."""
    return [SEATS[(start.position + i) % 4] for i in range(4)]


def team_of(seat: Seat) -> Team:
    return Team.A if seat in TEAMS[Team.A] else Team.B


def partner_of(seat: Seat) -> Seat:
    a, b = TEAMS[team_of(seat)]
    return b if seat == a else a


def opponents_of(seat: Seat) -> tuple[Seat, Seat]:
    other = Team.B if team_of(seat) == Team.A else Team.A
    return TEAMS[other]

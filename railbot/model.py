"""Game data shared by the bot: cards, routes, objectives, moves and bot state."""

from __future__ import annotations

import enum
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Protocol

log = logging.getLogger(__name__)

FREE = -1
BOT = 0
OPPONENT = 1

INITIAL_WAGONS = 45
INITIAL_CARDS = 4

_TRACK_FIELDS = 5
_POINTS = {1: 1, 2: 2, 3: 4, 4: 7, 5: 10, 6: 15}


class CardColor(enum.IntEnum):
    """Wagon card colours; NONE marks the missing second colour of a route."""

    NONE = 0
    PURPLE = 1
    WHITE = 2
    BLUE = 3
    YELLOW = 4
    ORANGE = 5
    BLACK = 6
    RED = 7
    GREEN = 8
    LOCOMOTIVE = 9


class Action(enum.Enum):
    """Kinds of move a player can make."""

    DRAW_BLIND_CARD = enum.auto()
    DRAW_CARD = enum.auto()
    DRAW_OBJECTIVES = enum.auto()
    CHOOSE_OBJECTIVES = enum.auto()
    CLAIM_ROUTE = enum.auto()


@dataclass
class Route:
    """A track between two cities and who holds it."""

    city1: int
    city2: int
    length: int
    color1: CardColor = CardColor.NONE
    color2: CardColor = CardColor.NONE
    owner: int = FREE


@dataclass
class Objective:
    """A destination ticket, with what the bot has worked out about it."""

    city1: int
    city2: int
    score: int
    done: bool = False
    index: int = 0
    length: int = 0


@dataclass
class Move:
    """A move sent to, or received from, the game server."""

    action: Action
    route_from: int = 0
    route_to: int = 0
    color: CardColor = CardColor.NONE
    nb_locomotives: int = 0
    draw_card: CardColor = CardColor.NONE
    chosen: list[bool] = field(default_factory=lambda: [False, False, False])


@dataclass
class MoveResult:
    """What the server answers to a move."""

    objectives: list[Objective] = field(default_factory=list)
    card: CardColor = CardColor.NONE
    replay: bool = False
    winning: bool = False
    losing: bool = False

    @property
    def game_over(self) -> bool:
        return self.winning or self.losing


@dataclass
class GameData:
    """Settings of a game as given by the server when it starts."""

    nb_cities: int
    nb_tracks: int
    track_data: list[int]
    cards: list[CardColor]
    starter: int = 0
    game_name: str = ""


class GameClient(Protocol):
    """Connection to a game server."""

    def send_move(self, move: Move) -> MoveResult:
        """Send one of our moves and return the server's answer."""

    def get_move(self) -> tuple[Move, MoveResult]:
        """Wait for the opponent's move and return it with its result."""

    def board_cards(self) -> list[CardColor]:
        """Return the five face-up cards."""

    def quit(self) -> None:
        """Leave the game."""


def route_points(length: int) -> int:
    """Points earned for claiming a route of the given length."""
    return _POINTS.get(length, 0)


def routes_from_track_data(game: GameData) -> list[Route]:
    """Build the free routes described by the server's flat track data."""
    needed = game.nb_tracks * _TRACK_FIELDS
    if len(game.track_data) < needed:
        raise ValueError(
            f"track data holds {len(game.track_data)} values, {needed} needed"
        )
    data = game.track_data[:needed]
    return [
        Route(
            city1=city1,
            city2=city2,
            length=length,
            color1=CardColor(color1),
            color2=CardColor(color2),
        )
        for city1, city2, length, color1, color2 in zip(*[iter(data)] * _TRACK_FIELDS)
    ]


@dataclass
class BotState:
    """Everything the bot knows about its own game and its opponent's."""

    player: int = 0
    cards: Counter = field(default_factory=Counter)
    objectives: list[Objective] = field(default_factory=list)
    opponent_objectives: list[Objective] = field(default_factory=list)
    wagons: int = INITIAL_WAGONS
    wagons_opp: int = INITIAL_WAGONS
    nb_tracks_total: int = 0
    nb_tracks_me: int = 0
    nb_tracks_opp: int = 0
    score: int = 0
    score_opp: int = 0
    nb_cards: int = INITIAL_CARDS
    needs_fallback: bool = False

    @classmethod
    def from_game(cls, game: GameData) -> BotState:
        """State at the start of a game, counting the cards first dealt."""
        return cls(
            cards=Counter(CardColor(card) for card in game.cards[:INITIAL_CARDS]),
            nb_tracks_total=game.nb_tracks,
        )


def _same_cities(a: Route, b: Route) -> bool:
    return {a.city1, a.city2} == {b.city1, b.city2}


def update_available_routes(
    state: BotState, claimed: list[Route], routes: list[Route]
) -> None:
    """Mark routes taken since the last update, using the recorded claims.

    Routes found among the opponent's claims become the opponent's, and its
    wagons and score are updated; the first ``nb_tracks_me`` claims are then
    checked for routes that belong to the bot.
    """
    for route in routes[: state.nb_tracks_total]:
        if route.owner != FREE:
            continue
        if any(_same_cities(c, route) for c in claimed[: state.nb_tracks_opp]):
            route.owner = OPPONENT
            state.wagons_opp -= route.length
            state.score_opp += route_points(route.length)
            log.debug("score opp : %d", state.score_opp)
        if any(_same_cities(c, route) for c in claimed[: state.nb_tracks_me]):
            route.owner = BOT
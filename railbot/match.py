"""Playing whole games against a server and keeping count of the results."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from railbot.bot import choose_objectives, claim_longest, play_turn
from railbot.display import format_board_cards
from railbot.model import (
    OPPONENT,
    Action,
    BotState,
    GameClient,
    GameData,
    Move,
    MoveResult,
    Objective,
    Route,
    routes_from_track_data,
    update_available_routes,
)

log = logging.getLogger(__name__)


@dataclass
class Tally:
    """Games played and games won."""

    wins: int = 0
    games: int = 0

    @property
    def losses(self) -> int:
        return self.games - self.wins

    def record(self, won: bool) -> None:
        """Count one finished game."""
        self.games += 1
        if won:
            self.wins += 1

    def summary(self) -> str:
        """Final score and winning percentage."""
        percent = self.wins / self.games * 100 if self.games else float("nan")
        return (
            f"Final score [W,L] : [{self.wins}, {self.losses}]\n"
            f"Winning percentage : {percent:.2f}%"
        )


def record_opponent_move(
    state: BotState, move: Move, result: MoveResult, claimed: list[Route]
) -> None:
    """Note a claimed route or the kept objectives from the opponent's move."""
    if move.action == Action.CLAIM_ROUTE:
        claimed.append(
            Route(
                city1=move.route_from,
                city2=move.route_to,
                length=0,
                color1=move.color,
                owner=OPPONENT,
            )
        )
        state.nb_tracks_opp += 1
    elif move.action == Action.CHOOSE_OBJECTIVES:
        for keep, objective in zip(move.chosen, result.objectives):
            if keep:
                state.opponent_objectives.append(
                    Objective(
                        city1=objective.city1,
                        city2=objective.city2,
                        score=objective.score,
                    )
                )


def _opponent_turn(client: GameClient) -> tuple[Move, MoveResult]:
    move, result = client.get_move()
    if result.replay:
        move, result = client.get_move()
    return move, result


def _show_board(client: GameClient) -> None:
    log.info(format_board_cards(client.board_cards()))


def run_game(client: GameClient, game: GameData, tally: Tally) -> BotState:
    """Play one game to its end, count it in ``tally`` and leave the server.

    Returns what the bot knew about the game when it ended.
    """
    log.info("Game name : %s", game.game_name)
    state = BotState.from_game(game)
    routes = routes_from_track_data(game)
    claimed: list[Route] = []

    if game.starter == 1:
        _opponent_turn(client)

    _show_board(client)
    result = choose_objectives(client, state, routes, game.nb_cities)

    if game.starter == 0:
        _, result = _opponent_turn(client)
    else:
        move, result = _opponent_turn(client)
        if move.action == Action.CLAIM_ROUTE:
            record_opponent_move(state, move, result, claimed)

    counted = False
    while not result.game_over:
        update_available_routes(state, claimed, routes)
        _show_board(client)

        played = play_turn(client, state, routes, game.nb_cities)
        if state.needs_fallback:
            played = claim_longest(client, state, routes)
        if played is not None:
            result = played

        if result.game_over and not counted:
            tally.record(result.winning)
            counted = True

        if result.game_over:
            break

        move, result = _opponent_turn(client)
        if result.game_over and not counted:
            # The result is the opponent's: their win is our loss.
            tally.record(result.losing)
            counted = True
        record_opponent_move(state, move, result, claimed)

    client.quit()
    log.info("Number of winning game : %d", tally.wins)
    log.info("Number of losing game : %d", tally.losses)
    return state
"""Turns played by a human at the terminal."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TextIO

from railbot.display import format_board_cards, format_objectives
from railbot.model import Action, CardColor, GameClient, Move, MoveResult

Ask = Callable[[str], str]

_BOARD_SLOTS = 5
_BLIND_CHOICE = 5
_DRAWS_PER_TURN = 2


def _ask_int(ask: Ask, prompt: str) -> int:
    return int(ask(prompt).strip())


def _keep_objectives(
    client: GameClient, drawn: MoveResult, ask: Ask, out: TextIO
) -> MoveResult:
    out.write(format_objectives(drawn.objectives))
    out.write("Choose your objectives :\n")
    chosen = [
        _ask_int(ask, f"Objective {n} (type 1 to keep, 0 otherwise): ") != 0
        for n in (1, 2, 3)
    ]
    return client.send_move(Move(action=Action.CHOOSE_OBJECTIVES, chosen=chosen))


def choose_objectives_manually(
    client: GameClient, ask: Ask = input, out: TextIO | None = None
) -> MoveResult:
    """Draw three objectives and let the player say which to keep."""
    out = out or sys.stdout
    drawn = client.send_move(Move(action=Action.DRAW_OBJECTIVES))
    return _keep_objectives(client, drawn, ask, out)


def _draw_cards(client: GameClient, ask: Ask, out: TextIO) -> MoveResult:
    board = client.board_cards()
    out.write(format_board_cards(board) + "\n")
    draws = 0
    result = MoveResult()
    while draws < _DRAWS_PER_TURN:
        choice = _ask_int(ask, "Choose a card on the board (0-4) or hidden (5) : ")
        if 0 <= choice < _BOARD_SLOTS:
            card = board[choice]
            draws += _DRAWS_PER_TURN if card == CardColor.LOCOMOTIVE else 1
            result = client.send_move(Move(action=Action.DRAW_CARD, draw_card=card))
        elif choice == _BLIND_CHOICE:
            draws += 1
            result = client.send_move(Move(action=Action.DRAW_BLIND_CARD))
        else:
            out.write("Error : choose a number between 0 and 5\n")
    return result


def _claim_route(client: GameClient, ask: Ask) -> MoveResult:
    city1 = _ask_int(ask, "City 1 : ")
    city2 = _ask_int(ask, "City 2 : ")
    locomotives = _ask_int(ask, "Number of locomotives : ")
    color = CardColor(_ask_int(ask, "Color : "))
    return client.send_move(
        Move(
            action=Action.CLAIM_ROUTE,
            route_from=city1,
            route_to=city2,
            color=color,
            nb_locomotives=locomotives,
        )
    )


def play_manual_turn(
    client: GameClient, ask: Ask = input, out: TextIO | None = None
) -> MoveResult | None:
    """Ask the player for a move and send it.

    Returns the result of the last move sent, or None if the choice was not
    one of the three actions and nothing was sent.
    """
    out = out or sys.stdout
    out.write("\nYour turn :\n1. Draw a card\n2. Claim a route\n3. Draw objectives\n")
    choice = _ask_int(ask, "Your choice : ")
    if choice == 1:
        result = _draw_cards(client, ask, out)
    elif choice == 2:
        result = _claim_route(client, ask)
    elif choice == 3:
        result = choose_objectives_manually(client, ask, out)
    else:
        out.write("Unrecognized action! Choose a number between 1 and 3!\n")
        return None
    out.write("Successfully delivered!\n")
    return result
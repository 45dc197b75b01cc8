"""Text shown to the player about the board and drawn objectives."""

from __future__ import annotations

from collections.abc import Iterable

from railbot.model import CardColor, Objective


def format_board_cards(cards: Iterable[CardColor]) -> str:
    """One line listing the face-up cards by colour number."""
    return "Cards on the board are : " + "".join(f"{int(card)} " for card in cards)


def format_objectives(objectives: Iterable[Objective]) -> str:
    """The drawn objectives, one per line, followed by a blank line."""
    lines = [
        f"Objective {i} : City 1 : {o.city1}, City 2 : {o.city2}, Score : {o.score}\n"
        for i, o in enumerate(objectives)
    ]
    return "".join(lines) + "\n"
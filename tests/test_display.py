from railbot.display import format_board_cards, format_objectives
from railbot.model import CardColor, Objective


def test_format_board_cards():
    cards = [
        CardColor.PURPLE,
        CardColor.LOCOMOTIVE,
        CardColor.RED,
        CardColor.RED,
        CardColor.GREEN,
    ]
    assert format_board_cards(cards) == "Cards on the board are : 1 9 7 7 8 "


def test_format_board_cards_lists_every_card():
    cards = [CardColor.BLUE] * 5
    text = format_board_cards(cards)
    assert text.split(":")[1].split() == [str(int(CardColor.BLUE))] * 5


def test_format_objectives_lines():
    objectives = [Objective(3, 12, 8), Objective(0, 7, 21), Objective(5, 4, 5)]
    text = format_objectives(objectives)
    lines = text.split("\n")
    assert lines[0] == "Objective 0 : City 1 : 3, City 2 : 12, Score : 8"
    assert lines[2] == "Objective 2 : City 1 : 5, City 2 : 4, Score : 5"
    assert text.endswith("\n\n")
    assert text.count("Objective") == 3


def test_format_objectives_empty():
    assert format_objectives([]) == "\n"
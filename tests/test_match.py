from railbot.match import Tally, record_opponent_move, run_game
from railbot.model import (
    INITIAL_WAGONS,
    OPPONENT,
    Action,
    BotState,
    CardColor,
    GameData,
    Move,
    MoveResult,
    Objective,
)


class FakeClient:
    def __init__(self, results, opponent):
        self.results = list(results)
        self.opponent = list(opponent)
        self.sent: list[Move] = []
        self.quitted = False

    def send_move(self, move):
        self.sent.append(move)
        return self.results.pop(0) if self.results else MoveResult()

    def get_move(self):
        return self.opponent.pop(0)

    def board_cards(self):
        return [CardColor.RED] * 5

    def quit(self):
        self.quitted = True


BLUE_LENGTH = 2


def make_game(starter=0):
    return GameData(
        nb_cities=3,
        nb_tracks=2,
        track_data=[
            0, 1, 1, int(CardColor.RED), int(CardColor.NONE),
            1, 2, BLUE_LENGTH, int(CardColor.BLUE), int(CardColor.NONE),
        ],
        cards=[CardColor.RED, CardColor.RED, CardColor.BLUE, CardColor.BLUE],
        starter=starter,
    )


OFFER = MoveResult(objectives=[Objective(0, 1, 5), Objective(1, 2, 3), Objective(0, 2, 8)])


def test_tally_counts_and_summary():
    tally = Tally()
    tally.record(True)
    tally.record(False)
    assert (tally.wins, tally.games, tally.losses) == (1, 2, 1)
    assert tally.summary() == "Final score [W,L] : [1, 1]\nWinning percentage : 50.00%"


def test_record_opponent_claim():
    state = BotState()
    claimed = []
    move = Move(action=Action.CLAIM_ROUTE, route_from=4, route_to=7, color=CardColor.GREEN)
    record_opponent_move(state, move, MoveResult(), claimed)
    assert state.nb_tracks_opp == 1
    assert (claimed[0].city1, claimed[0].city2) == (4, 7)
    assert claimed[0].owner == OPPONENT
    assert claimed[0].color1 == CardColor.GREEN


def test_record_opponent_objectives():
    state = BotState()
    move = Move(action=Action.CHOOSE_OBJECTIVES, chosen=[True, False, True])
    record_opponent_move(state, move, OFFER, [])
    assert [(o.city1, o.city2, o.score) for o in state.opponent_objectives] == [
        (0, 1, 5),
        (0, 2, 8),
    ]


def test_record_other_move_changes_nothing():
    state = BotState()
    claimed = []
    record_opponent_move(state, Move(action=Action.DRAW_BLIND_CARD), MoveResult(), claimed)
    assert claimed == []
    assert state.nb_tracks_opp == 0
    assert state.opponent_objectives == []


def test_run_game_bot_wins():
    client = FakeClient(
        results=[OFFER, MoveResult(), MoveResult(winning=True)],
        opponent=[(Move(action=Action.DRAW_BLIND_CARD), MoveResult())],
    )
    tally = Tally()
    state = run_game(client, make_game(), tally)
    assert (tally.wins, tally.games) == (1, 1)
    assert client.quitted
    last = client.sent[-1]
    assert last.action == Action.CLAIM_ROUTE
    assert (last.route_from, last.route_to) == (0, 1)
    assert [(o.city1, o.city2) for o in state.objectives] == [(0, 1), (0, 2)]


def test_run_game_opponent_wins():
    client = FakeClient(
        results=[OFFER, MoveResult(), MoveResult()],
        opponent=[
            (Move(action=Action.DRAW_BLIND_CARD), MoveResult()),
            (
                Move(action=Action.CLAIM_ROUTE, route_from=1, route_to=2, color=CardColor.BLUE),
                MoveResult(winning=True),
            ),
        ],
    )
    tally = Tally()
    state = run_game(client, make_game(), tally)
    assert (tally.wins, tally.games) == (0, 1)
    assert state.nb_tracks_opp == 1
    assert client.opponent == []


def test_run_game_opponent_starts_and_replays():
    client = FakeClient(
        results=[OFFER, MoveResult(), MoveResult(losing=True)],
        opponent=[
            (Move(action=Action.DRAW_BLIND_CARD), MoveResult(replay=True)),
            (Move(action=Action.DRAW_BLIND_CARD), MoveResult()),
            (
                Move(action=Action.CLAIM_ROUTE, route_from=1, route_to=2, color=CardColor.BLUE),
                MoveResult(),
            ),
        ],
    )
    tally = Tally()
    state = run_game(client, make_game(starter=1), tally)
    assert client.opponent == []
    assert state.wagons_opp == INITIAL_WAGONS - BLUE_LENGTH
    assert (tally.wins, tally.games) == (0, 1)
    assert client.quitted
# railbot

A rule-based player for a two-player route-building train card game.
Cities are joined by tracks that have a length and one or two colours.
Players collect coloured wagon cards, spend them to claim tracks, and
score points for each track they claim and for objectives (pairs of
cities to connect).

railbot keeps its own view of the game, chooses objectives, plans paths
with Dijkstra's algorithm and decides on each turn whether to claim a
track or to draw cards.

## Modules

- `railbot.model`: the game vocabulary.
  - `CardColor` (an `IntEnum` from `NONE` = 0 through the eight plain
    colours to `LOCOMOTIVE` = 9) and `Action`.
  - The dataclasses `Route`, `Objective`, `Move`, `MoveResult` (with a
    `game_over` property) and `GameData`.
  - `BotState`, which holds the bot's cards (a `Counter` keyed by
    `CardColor`), wagons, objectives, scores and track counts.
    `BotState.from_game(game)` gives the state at the start of a game:
    45 wagons on each side and the first four dealt cards counted.
  - `route_points(length)` gives the points for a claimed track:
    1, 2, 4, 7, 10 and 15 for lengths 1 to 6, and 0 for any other length.
  - `routes_from_track_data(game)` builds the list of free `Route`s from
    the flat track data (five values per track). It raises `ValueError`
    if the data is too short.
  - `update_available_routes(state, claimed, routes)` uses the recorded
    claims to mark free tracks as taken by the opponent, updating its
    wagons and score, or as held by the bot.
  - `GameClient` is a `Protocol` with `send_move`, `get_move`,
    `board_cards` and `quit`. It is the interface the bot uses to talk
    to a game server.
- `railbot.graph`: algorithms on the map.
  - `build_weights` builds the adjacency matrix. Tracks the bot holds
    cost nothing, free tracks cost their length, and the opponent's
    tracks cannot be used.
  - `dijkstra(src, routes, nb_cities)` returns distances and
    predecessors, with `closest_unvisited` as its helper.
  - `path_between` and `format_path` read a path back out of the
    predecessors.
  - `find_route` finds the track that joins two cities.
  - `is_connected` and `objective_reached` check whether one player's
    tracks link two cities.
- `railbot.bot`: the strategy.
  - `choose_objectives` draws three objectives and keeps the ones that
    suit the phase of the game. At the start it keeps the two with the
    highest scores. In mid-game it keeps the two that need the fewest
    wagons still to lay. Late in the game it keeps only the shortest.
  - `choose_objectives_by_score` makes the same kind of choice by score
    alone.
  - `play_turn` claims a track on the shortest path to an unfinished
    objective. If no such claim is possible, it draws the face-up cards
    that those tracks need and then draws blind cards. When every
    objective is done and the game is nearly over, or when the bot holds
    26 cards or more, it sends nothing, sets `state.needs_fallback` and
    returns `None`.
  - `claim_longest` claims the longest free track the bot can pay for.
    If there is none, it draws cards.
  - `pick_color(route, cards)` chooses which colour of cards to pay for
    a track with.
- `railbot.manual`: turns played by a person answering prompts.
  `choose_objectives_manually(client, ask, out)` and
  `play_manual_turn(client, ask, out)` take their answers from `ask`,
  which defaults to `input`, and write to `out`, which defaults to
  standard output.
- `railbot.match`:
  - `run_game(client, game, tally)` plays one game to its end, records
    the result in `tally`, leaves the server and returns the final
    `BotState`.
  - `record_opponent_move` notes the opponent's claimed tracks and the
    objectives it kept.
  - `Tally` counts games and wins. `Tally.record(won)` adds a game, and
    `Tally.summary()` gives the win/loss score and the winning
    percentage.
- `railbot.display`: `format_board_cards` and `format_objectives`
  produce plain-text views of the face-up cards and of drawn objectives.

The bot reports what it is doing through the standard `logging` module,
under loggers named after its modules (`railbot.bot`, `railbot.match`, …).

## Playing a game

Write a `GameClient` for your server, then pass it to `run_game`:

```python
from railbot.match import Tally, run_game

tally = Tally()
run_game(client, game, tally)   # client: your GameClient, game: its GameData
print(tally.summary())
```

## Using the pieces on their own

```python
from railbot.model import route_points
from railbot.graph import dijkstra, path_between

route_points(4)                          # 7
dist, prev = dijkstra(0, routes, nb_cities)
path = path_between(0, 5, prev)          # cities from 0 to 5, or None
```

## What railbot does not do

railbot has no network code and no command-line program. It does not
connect to a game server, join or set up games, or read the map from
anywhere by itself. You supply a `GameClient` that does those things and
the `GameData` that describes the game.

railbot needs Python 3.10 or later and nothing beyond the standard
library.
"""Decisions of the bot: which objectives to keep, which routes to claim, what to draw."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from itertools import combinations, pairwise

from railbot.graph import dijkstra, find_route, format_path, objective_reached, path_between
from railbot.model import (
    BOT,
    FREE,
    INITIAL_WAGONS,
    Action,
    BotState,
    CardColor,
    GameClient,
    Move,
    MoveResult,
    Objective,
    Route,
    route_points,
)

log = logging.getLogger(__name__)

_PLAIN_COLORS = [CardColor(k) for k in range(1, 9)]
_OFFERED = 3
_BOARD_SLOTS = 5
_DRAWS_PER_TURN = 2
_MID_GAME_WAGONS = 14
_MAX_CARDS = 26


def _draw_objectives(client: GameClient) -> list[Objective]:
    result = client.send_move(Move(action=Action.DRAW_OBJECTIVES))
    if len(result.objectives) < _OFFERED:
        raise ValueError(
            f"server offered {len(result.objectives)} objectives, {_OFFERED} expected"
        )
    return [
        Objective(city1=o.city1, city2=o.city2, score=o.score, index=i)
        for i, o in enumerate(result.objectives[:_OFFERED])
    ]


def _keep_objectives(
    client: GameClient, state: BotState, offered: list[Objective], chosen: list[bool]
) -> MoveResult:
    for objective, keep in zip(offered, chosen):
        if keep:
            state.objectives.append(objective)
            log.info(
                "Objectif gardé : city1 = %d, city2 = %d, score = %d",
                objective.city1,
                objective.city2,
                objective.score,
            )
    return client.send_move(Move(action=Action.CHOOSE_OBJECTIVES, chosen=chosen))


def choose_objectives_by_score(client: GameClient, state: BotState) -> MoveResult:
    """Draw objectives and keep some by score alone, depending on the game phase."""
    offered = _draw_objectives(client)
    order = list(offered)
    for i, j in combinations(range(_OFFERED), 2):
        if order[i].score > order[j].score:
            order[i], order[j] = order[j], order[i]

    chosen = [False] * _OFFERED
    if state.wagons == INITIAL_WAGONS:
        keep = order[1:]
    elif _MID_GAME_WAGONS <= state.wagons <= INITIAL_WAGONS and state.wagons_opp > 20:
        keep = order[:2]
    else:
        keep = order[:1]
    for objective in keep:
        chosen[objective.index] = True
    return _keep_objectives(client, state, offered, chosen)


def _estimate_length(objective: Objective, routes: Sequence[Route], nb_cities: int) -> None:
    _, prev = dijkstra(objective.city1, routes, nb_cities)
    log.debug(format_path(objective.city1, objective.city2, prev))
    path = path_between(objective.city1, objective.city2, prev)
    if path is None:
        log.info("Pas de chemin dispo")
        return
    for c1, c2 in pairwise(path):
        route = find_route(routes, c1, c2)
        if route is not None and route.owner != BOT:
            objective.length += route.length


def choose_objectives(
    client: GameClient, state: BotState, routes: Sequence[Route], nb_cities: int
) -> MoveResult:
    """Draw objectives and keep the best ones for the current phase of the game.

    At the start the two highest scores are kept; in mid-game the two that need
    the fewest wagons still to lay; late in the game only the shortest one.
    """
    offered = _draw_objectives(client)
    for objective in offered:
        _estimate_length(objective, routes, nb_cities)

    o0, o1, o2 = offered
    chosen = [False] * _OFFERED
    if state.wagons == INITIAL_WAGONS:
        if o0.score > o1.score:
            picks = [o0, o1 if o1.score > o2.score else o2]
        else:
            picks = [o1, o0 if o0.score > o2.score else o2]
    elif _MID_GAME_WAGONS <= state.wagons <= INITIAL_WAGONS and state.wagons_opp > 18:
        if o0.length > o1.length:
            picks = [o1, o2 if o0.length > o2.length else o0]
        else:
            picks = [o0, o2 if o1.length > o2.length else o1]
    else:
        if o0.length > o1.length:
            picks = [o1 if o2.length > o1.length else o2]
        else:
            picks = [o2 if o0.length > o2.length else o0]
    for objective in picks:
        chosen[objective.index] = True
    return _keep_objectives(client, state, offered, chosen)


def pick_color(route: Route, cards: Mapping[CardColor, int]) -> tuple[CardColor, int] | None:
    """Colour to pay for ``route`` with and how many cards of it are held.

    A grey route (locomotive colour) takes the first plain colour that,
    with locomotives, covers its length. Returns None if no colour will do.
    """
    locomotives = cards.get(CardColor.LOCOMOTIVE, 0)
    best: CardColor | None = None
    best_count = 0
    for color in (route.color1, route.color2):
        if color == CardColor.NONE:
            continue
        if color != CardColor.LOCOMOTIVE:
            count = cards.get(color, 0)
            if count + locomotives >= route.length and count >= best_count:
                best, best_count = color, count
        else:
            found = next(
                (
                    (c, cards.get(c, 0))
                    for c in _PLAIN_COLORS
                    if cards.get(c, 0) + locomotives >= route.length
                ),
                None,
            )
            if found is not None:
                best, best_count = found
    return None if best is None else (best, best_count)


def _claim(
    client: GameClient,
    state: BotState,
    route: Route,
    color: CardColor,
    count: int,
    city_from: int,
    city_to: int,
) -> MoveResult:
    length = route.length
    nb_loco = max(length - count, 0)
    result = client.send_move(
        Move(
            action=Action.CLAIM_ROUTE,
            route_from=city_from,
            route_to=city_to,
            color=color,
            nb_locomotives=nb_loco,
        )
    )
    log.info("Claim: %d -> %d | color: %d | length: %d", city_from, city_to, color, length)
    route.owner = BOT
    state.wagons -= length
    state.nb_cards -= length
    state.cards[color] -= length - nb_loco
    state.cards[CardColor.LOCOMOTIVE] -= nb_loco
    state.score += route_points(length)
    return result


def _draw_visible(client: GameClient, state: BotState, card: CardColor) -> MoveResult:
    result = client.send_move(Move(action=Action.DRAW_CARD, draw_card=card))
    state.cards[card] += 1
    state.nb_cards += 1
    return result


def _draw_blind(client: GameClient, state: BotState) -> MoveResult:
    result = client.send_move(Move(action=Action.DRAW_BLIND_CARD))
    log.info("carte piochée : %d", result.card)
    state.cards[result.card] += 1
    state.nb_cards += 1
    return result


def claim_longest(client: GameClient, state: BotState, routes: Sequence[Route]) -> MoveResult:
    """Claim the longest free route the bot can pay for, or draw cards if none."""
    state.needs_fallback = False
    log.info(
        "Etat des cartes : %s | Wagons restants : %d",
        " ".join(f"{k}:{state.cards[CardColor(k)]}" for k in range(1, 10)),
        state.wagons,
    )

    best: tuple[Route, CardColor, int] | None = None
    for route in routes:
        if route.owner != FREE:
            continue
        choice = pick_color(route, state.cards)
        if choice is None or state.wagons < route.length:
            continue
        if route.length > (best[0].length if best else 0):
            best = (route, *choice)

    if best is not None:
        route, color, count = best
        result = _claim(client, state, route, color, count, route.city1, route.city2)
        state.nb_tracks_me += 1
        return result

    log.info("Pas de claim possible, on pioche.")
    board = client.board_cards()
    picked = 0
    result: MoveResult | None = None
    for card in board[:_BOARD_SLOTS]:
        if picked >= _DRAWS_PER_TURN:
            break
        if card == CardColor.LOCOMOTIVE:
            if picked == 0:
                result = _draw_visible(client, state, CardColor.LOCOMOTIVE)
                picked += 2
        else:
            result = _draw_visible(client, state, card)
            picked += 1
    while picked < _DRAWS_PER_TURN:
        result = _draw_blind(client, state)
        picked += 1
    return result


def _claim_on_paths(
    client: GameClient,
    state: BotState,
    routes: Sequence[Route],
    nb_cities: int,
    useful: Counter,
) -> MoveResult | None:
    for objective in state.objectives:
        if objective.done:
            continue
        src, dest = objective.city1, objective.city2
        _, prev = dijkstra(src, routes, nb_cities)
        log.debug(format_path(src, dest, prev))
        path = path_between(src, dest, prev)
        if path is None:
            log.info("Pas de chemin dispo")
            continue
        for c1, c2 in pairwise(path):
            for route in routes:
                if route.owner != FREE or {route.city1, route.city2} != {c1, c2}:
                    continue
                if route.color1 != CardColor.LOCOMOTIVE:
                    useful[route.color1] += route.length - state.cards[route.color1]
                if route.color2 not in (CardColor.NONE, CardColor.LOCOMOTIVE):
                    useful[route.color2] += route.length - state.cards[route.color2]
                choice = pick_color(route, state.cards)
                if choice is None or state.wagons < route.length:
                    continue
                return _claim(client, state, route, *choice, c1, c2)
    return None


def play_turn(
    client: GameClient, state: BotState, routes: Sequence[Route], nb_cities: int
) -> MoveResult | None:
    """Play one turn towards the bot's objectives.

    Returns the result of the last move sent, or None when the bot sent
    nothing and set ``needs_fallback`` so that another strategy plays.
    """
    reached = 0
    for objective in state.objectives:
        objective.done = objective_reached(objective, routes, BOT)
        log.info(
            "Objectif %d -> %d : %s",
            objective.city1,
            objective.city2,
            "ATTEINT" if objective.done else "PAS ENCORE",
        )
        reached += objective.done

    if reached == len(state.objectives):
        if state.wagons_opp >= _MID_GAME_WAGONS:
            return choose_objectives(client, state, routes, nb_cities)
        state.needs_fallback = True
        return None

    if state.nb_cards >= _MAX_CARDS:
        state.needs_fallback = True
        return None

    useful: Counter = Counter()
    result = _claim_on_paths(client, state, routes, nb_cities, useful)
    if result is not None:
        return result

    log.info("Pas de claim possible, on pioche.")
    board = client.board_cards()
    picked = 0
    for _ in range(2):
        for slot in range(_BOARD_SLOTS):
            if picked >= _DRAWS_PER_TURN:
                break
            card = board[slot]
            if useful[card] > 0 and card != CardColor.LOCOMOTIVE:
                log.info("carte piochée : %d, numéro : %d", card, slot)
                result = _draw_visible(client, state, card)
                useful[card] -= 1
                picked += 1
                board = client.board_cards()
    while picked < _DRAWS_PER_TURN:
        result = _draw_blind(client, state)
        picked += 1
    return result
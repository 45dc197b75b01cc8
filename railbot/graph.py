"""Shortest paths and connectivity on the map of cities and routes."""

from __future__ import annotations

from collections.abc import Sequence

from railbot.model import BOT, FREE, OPPONENT, Objective, Route

UNREACHABLE = 10000


def build_weights(routes: Sequence[Route], nb_cities: int) -> list[list[int]]:
    """Adjacency matrix of wagons still needed to travel each route.

    Routes held by the bot cost nothing, free routes cost their length and
    the opponent's routes cannot be used. When several routes join the same
    cities, the last one listed decides the weight.
    """
    weights = [
        [0 if i == j else UNREACHABLE for j in range(nb_cities)]
        for i in range(nb_cities)
    ]
    for route in routes:
        if route.owner == OPPONENT:
            continue
        cost = 0 if route.owner == BOT else route.length
        weights[route.city1][route.city2] = cost
        weights[route.city2][route.city1] = cost
    return weights


def closest_unvisited(dist: Sequence[int], visited: Sequence[bool]) -> int | None:
    """Index of the nearest reachable city not yet visited, or None."""
    best = None
    best_dist = UNREACHABLE
    for city, (d, seen) in enumerate(zip(dist, visited)):
        if not seen and d < best_dist:
            best, best_dist = city, d
    return best


def dijkstra(
    src: int, routes: Sequence[Route], nb_cities: int
) -> tuple[list[int], list[int | None]]:
    """Distances from ``src`` and each city's predecessor on its shortest path."""
    weights = build_weights(routes, nb_cities)
    dist = [UNREACHABLE] * nb_cities
    prev: list[int | None] = [None] * nb_cities
    visited = [False] * nb_cities
    dist[src] = 0
    for _ in range(nb_cities):
        u = closest_unvisited(dist, visited)
        if u is None:
            break
        visited[u] = True
        for v, weight in enumerate(weights[u]):
            if not visited[v] and weight < UNREACHABLE and dist[u] + weight < dist[v]:
                dist[v] = dist[u] + weight
                prev[v] = u
    return dist, prev


def path_between(
    src: int, dest: int, prev: Sequence[int | None]
) -> list[int] | None:
    """Cities from ``src`` to ``dest`` following ``prev``, or None if unreachable."""
    path = []
    city: int | None = dest
    while city is not None and city != src:
        path.append(city)
        city = prev[city]
    if city is None:
        return None
    path.append(src)
    path.reverse()
    return path


def format_path(src: int, dest: int, prev: Sequence[int | None]) -> str:
    """The path from ``src`` to ``dest`` written backwards, as shown to the user."""
    parts = [f"Chemin de {src} à {dest} : "]
    city: int | None = dest
    while city is not None and city != src:
        parts.append(f"{city} <- ")
        city = prev[city]
    parts.append("pas de chemin trouvé." if city is None else str(src))
    return "".join(parts)


def find_route(routes: Sequence[Route], city1: int, city2: int) -> Route | None:
    """First route joining the two cities, in either direction."""
    wanted = {city1, city2}
    return next((r for r in routes if {r.city1, r.city2} == wanted), None)


def is_connected(src: int, dest: int, routes: Sequence[Route], player: int) -> bool:
    """Whether ``player``'s routes link ``src`` to ``dest``."""
    if src == dest:
        return True
    owned = [r for r in routes if r.owner == player and player != FREE or
             (player == FREE and r.owner == FREE)]
    visited = {src}
    stack = [src]
    while stack:
        city = stack.pop()
        for route in owned:
            if route.city1 == city:
                nxt = route.city2
            elif route.city2 == city:
                nxt = route.city1
            else:
                continue
            if nxt == dest:
                return True
            if nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)
    return False


def objective_reached(objective: Objective, routes: Sequence[Route], player: int) -> bool:
    """Whether ``player``'s routes join the two cities of the objective."""
    return is_connected(objective.city1, objective.city2, routes, player)
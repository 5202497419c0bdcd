"""Graph of actors linked by the movies they appeared in together."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator

from reelshell.movies import Movie


class SameActorError(ValueError):
    """Both names given for a distance query are the same."""


class ActorNotFoundError(LookupError):
    """An actor name is not in the graph."""


class ActorsNotConnectedError(LookupError):
    """No chain of shared movies links two actors."""


def _split_actors(text: str) -> list[str]:
    """Split a comma separated cast list, trimming spaces around each name."""
    parts = text.split(",")
    if parts[-1] == "":
        parts.pop()
    return [part.strip(" ") for part in parts]


class Actor:
    """An actor, the movies they appeared in and the colleagues they share a movie with."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.movies: list[Movie] = []
        self.connections: list[Actor] = []

    def add_movie(self, movie: Movie) -> bool:
        """Add a movie unless one with the same title is present; return whether it was added."""
        if any(existing.title == movie.title for existing in self.movies):
            return False
        self.movies.append(movie)
        return True

    def __repr__(self) -> str:
        return (
            f"Actor({self.name!r}, movies={len(self.movies)}, "
            f"connections={len(self.connections)})"
        )


class ActorGraph:
    """Undirected graph whose vertices are actors and whose edges are shared movies."""

    def __init__(self) -> None:
        self._actors: dict[str, Actor] = {}
        self.duplicates_skipped = 0

    @classmethod
    def from_movies(cls, movies: Iterable[Movie]) -> ActorGraph:
        """Build a graph from the cast lists of the given movies."""
        graph = cls()
        for movie in movies:
            names = _split_actors(movie.actors)
            for name in names:
                graph.add_actor(name, movie)
            for first in names:
                for second in names:
                    graph.add_connection(first, second)
        return graph

    def add_actor(self, name: str, movie: Movie) -> bool:
        """Record that an actor appeared in a movie; return False for a duplicate title."""
        actor = self._actors.get(name)
        if actor is None:
            actor = Actor(name)
            self._actors[name] = actor
        added = actor.add_movie(movie)
        if not added:
            self.duplicates_skipped += 1
        return added

    def add_connection(self, actor1: str, actor2: str) -> bool:
        """Link two distinct, known actors; return whether a new edge was made."""
        first = self._actors.get(actor1)
        second = self._actors.get(actor2)
        if first is None or second is None or actor1 == actor2:
            return False
        if self.is_connection(actor1, actor2):
            return False
        first.connections.append(second)
        second.connections.append(first)
        return True

    def is_connection(self, actor1: str, actor2: str) -> bool:
        """Whether actor2 is a direct colleague of actor1."""
        first = self._require(actor1)
        return any(colleague.name == actor2 for colleague in first.connections)

    def find_distance(self, actor1: str, actor2: str) -> int:
        """Number of intermediate movies between two actors; 0 means they share a movie."""
        if actor1 == actor2:
            raise SameActorError("Please enter two different names!")
        source = self._actors.get(actor1)
        if source is None or actor2 not in self._actors:
            raise ActorNotFoundError("One or more actors not found in the database!")

        distances = {actor1: -1}
        queue = deque([source])
        while queue:
            current = queue.popleft()
            for colleague in current.connections:
                if colleague.name in distances:
                    continue
                distances[colleague.name] = distances[current.name] + 1
                if colleague.name == actor2:
                    return distances[colleague.name]
                queue.append(colleague)
        raise ActorsNotConnectedError(f"Actors {actor1} and {actor2} are not connected")

    def find_common_movie(self, actor1: str, actor2: str) -> str:
        """Title of a movie both actors appeared in, or an empty string."""
        first = self._require(actor1)
        titles = {movie.title for movie in self._require(actor2).movies}
        return next((movie.title for movie in first.movies if movie.title in titles), "")

    def search(self, name: str) -> Actor | None:
        """Return the actor with this name, or None."""
        return self._actors.get(name)

    def clear(self) -> None:
        """Remove every actor from the graph."""
        self._actors.clear()
        self.duplicates_skipped = 0

    def __len__(self) -> int:
        return len(self._actors)

    def __contains__(self, name: object) -> bool:
        return name in self._actors

    def __iter__(self) -> Iterator[Actor]:
        return iter(self._actors.values())

    def format_connections(self) -> str:
        """Render every actor followed by their colleagues."""
        lines = ["Displaying connections"]
        for actor in self._actors.values():
            lines.append(
                actor.name + "".join(f" --> {colleague.name}" for colleague in actor.connections)
            )
        return "\n".join(lines)

    def _require(self, name: str) -> Actor:
        actor = self._actors.get(name)
        if actor is None:
            raise ActorNotFoundError(f"Actor {name} not found in the database!")
        return actor
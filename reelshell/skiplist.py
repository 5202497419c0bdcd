"""Skip list of directors, each holding the movies they directed."""

from __future__ import annotations

import random
from typing import Iterator, Optional

from reelshell.movies import Movie

DEFAULT_LEVELS = 10
DEFAULT_CAPACITY = 2000

_HEAD_NAME = "0"


class DirectorNode:
    """A director in the skip list with forward links at each of its levels."""

    def __init__(self, director: str, levels: int) -> None:
        self.director = director
        self.movies: list[Movie] = []
        self.next: list[Optional[DirectorNode]] = [None] * levels

    def add_movie(self, movie: Movie) -> bool:
        """Add a movie unless one with the same title is present; return whether it was added."""
        if any(existing.title == movie.title for existing in self.movies):
            return False
        self.movies.append(movie)
        return True

    def __repr__(self) -> str:
        return f"DirectorNode({self.director!r}, movies={len(self.movies)})"


class DirectorSkipList:
    """Directors kept in name order, with randomised express lanes."""

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        levels: int = DEFAULT_LEVELS,
        rng: random.Random | None = None,
    ) -> None:
        if levels < 1:
            raise ValueError(f"levels must be at least 1, got {levels}")
        self.capacity = capacity
        self.levels = levels
        self._rng = rng if rng is not None else random.Random()
        self._head = DirectorNode(_HEAD_NAME, levels)
        self._size = 0

    def _random_height(self) -> int:
        height = 1
        while height < self.levels and self._rng.randrange(2) == 0:
            height += 1
        return height

    def insert(self, director: str, movie: Movie) -> bool:
        """File a movie under its director; return False if it was a duplicate title."""
        height = self._random_height()
        update: list[DirectorNode] = [self._head] * self.levels
        node = self._head
        for level in reversed(range(self.levels)):
            ahead = node.next[level]
            while ahead is not None and ahead.director < director:
                node = ahead
                ahead = node.next[level]
            update[level] = node

        candidate = node.next[0]
        if candidate is not None and candidate.director == director:
            return candidate.add_movie(movie)

        new_node = DirectorNode(director, height)
        new_node.add_movie(movie)
        for level, previous in enumerate(update[:height]):
            new_node.next[level] = previous.next[level]
            previous.next[level] = new_node
        self._size += 1
        return True

    def search(self, director: str) -> DirectorNode | None:
        """Return the node for a director, or None."""
        node = self._head
        for level in reversed(range(self.levels)):
            ahead = node.next[level]
            while ahead is not None and ahead.director < director:
                node = ahead
                ahead = node.next[level]
        candidate = node.next[0]
        if candidate is not None and candidate.director == director:
            return candidate
        return None

    def _nodes(self) -> Iterator[DirectorNode]:
        node = self._head.next[0]
        while node is not None:
            yield node
            node = node.next[0]

    def directors(self) -> list[str]:
        """Director names in sorted order."""
        return [node.director for node in self._nodes()]

    def __len__(self) -> int:
        return self._size

    def format_list(self) -> str:
        """Render the bottom level from the head node to the end."""
        names = [self._head.director, *self.directors()]
        return "".join(f"{name} -> " for name in names) + "NULL"
"""Movie records and a chained hash table keyed by title."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

DEFAULT_TABLE_SIZE = 2000

_HASH_KEY = "110638005"


@dataclass
class Movie:
    """One row of the movie database."""

    rank: int
    title: str
    genre: str
    description: str
    director: str
    actors: str
    year: int
    runtime: int
    rating: float
    votes: int
    revenue: float
    metascore: int


def _signed(byte: int) -> int:
    return byte - 256 if byte > 127 else byte


class MovieHashTable:
    """Hash table of movies with separate chaining, keyed by title."""

    def __init__(self, size: int = DEFAULT_TABLE_SIZE) -> None:
        if size < 1:
            raise ValueError(f"table size must be positive, got {size}")
        self.size = size
        self._buckets: list[list[Movie]] = [[] for _ in range(size)]
        self._collisions = 0

    def hash(self, title: str) -> int:
        """Return the bucket index for a title."""
        total = 0
        for position, byte in enumerate(title.encode("utf-8")):
            digit = _HASH_KEY[position % len(_HASH_KEY)]
            value = _signed(byte)
            total += value if digit == "0" else value * ord(digit)
        return total % self.size

    def insert(self, title: str, movie: Movie) -> None:
        """Add a movie under the given title, counting a collision if the bucket is taken."""
        bucket = self._buckets[self.hash(title)]
        if bucket:
            self._collisions += 1
        bucket.append(movie)

    def search(self, title: str) -> Movie | None:
        """Return the first movie with this title, or None."""
        return next(
            (movie for movie in self._buckets[self.hash(title)] if movie.title == title),
            None,
        )

    def collisions(self) -> int:
        """Number of insertions that landed in an occupied bucket."""
        return self._collisions

    def buckets(self) -> tuple[tuple[Movie, ...], ...]:
        """Snapshot of every bucket, in index order."""
        return tuple(tuple(bucket) for bucket in self._buckets)

    def __iter__(self) -> Iterator[Movie]:
        for bucket in self._buckets:
            yield from bucket

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets)

    def format_table(self) -> str:
        """Render the non-empty buckets, one per line."""
        lines = [
            f"{index}: " + "".join(f"{movie.title}-> " for movie in bucket) + "NULL"
            for index, bucket in enumerate(self._buckets)
            if bucket
        ]
        return "\n".join(lines)
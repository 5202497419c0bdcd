"""Interactive menu over a movie database loaded from CSV."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import Iterable, Iterator, TextIO

from reelshell.actorgraph import (
    ActorGraph,
    ActorNotFoundError,
    ActorsNotConnectedError,
    SameActorError,
)
from reelshell.movies import Movie, MovieHashTable
from reelshell.skiplist import DirectorSkipList

_FIELD_COUNT = 12
_SKIP_LIST_LEVELS = 10
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_USAGE = (
    "Invalid number of arguments \n"
    "Usage: ./<program_name> <file.csv> <hashTable_size> <skipList_size>"
)

_MENU = (
    "Please select one of the following: \n"
    "1. Find the director of a movie\n"
    "2. Find the number of movies by a director\n"
    "3. Find the description of a movie\n"
    "4. List the movies by a director\n"
    "5. Construct graph of actors\n"
    "6. Find the number of movies of an actor\n"
    "7. List all movies of an actor\n"
    "8. Find the distance between two actors\n"
    "9. Quit\n"
    "#> "
)


class MovieLineError(ValueError):
    """A CSV line does not describe a movie."""


def _split_fields(line: str) -> list[str]:
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def _number(pattern: re.Pattern[str], text: str, line: str) -> str:
    match = pattern.match(text)
    if match is None:
        raise MovieLineError(f"Invalid number {text!r} in movie line: {line}")
    return match.group()


def parse_movie_line(line: str) -> Movie:
    """Parse one CSV record into a Movie."""
    fields = _split_fields(line)
    if len(fields) != _FIELD_COUNT:
        raise MovieLineError(f"Invalid movie line format: {line}")
    rank, title, genre, description, director, actors, year, runtime, rating, votes, revenue, metascore = fields

    def as_int(text: str) -> int:
        return int(_number(_INT_PREFIX, text, line))

    def as_float(text: str) -> float:
        return float(_number(_FLOAT_PREFIX, text, line))

    return Movie(
        rank=as_int(rank),
        title=title,
        genre=genre,
        description=description,
        director=director,
        actors=actors,
        year=as_int(year),
        runtime=as_int(runtime),
        rating=as_float(rating),
        votes=as_int(votes),
        revenue=as_float(revenue),
        metascore=as_int(metascore),
    )


def read_movie_csv(path, table: MovieHashTable, directors: DirectorSkipList) -> int:
    """Load every movie after the header line into both indexes; return how many were read."""
    count = 0
    with open(path, encoding="utf-8") as handle:
        next(handle, None)
        for raw in handle:
            line = raw.rstrip("\r\n")
            if not line:
                continue
            movie = parse_movie_line(line)
            table.insert(movie.title, movie)
            directors.insert(movie.director, movie)
            count += 1
    return count


def menu_text() -> str:
    """The main menu, ending with the input prompt."""
    return _MENU


class _EndOfInput(Exception):
    pass


def _parse_choice(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group()) if match else 0


@dataclass
class _Session:
    table: MovieHashTable
    directors: DirectorSkipList
    table_size: int
    lines: Iterator[str]
    out: TextIO
    graph: ActorGraph = field(default_factory=ActorGraph)

    def write(self, text: str) -> None:
        self.out.write(text)

    def read(self) -> str:
        try:
            return next(self.lines).rstrip("\n")
        except StopIteration:
            raise _EndOfInput from None

    def ask(self, prompt: str) -> str:
        self.write(prompt)
        return self.read()

    def read_choice(self) -> int:
        self.write(menu_text())
        return _parse_choice(self.read())

    def offer_graph(self, choice: int) -> int:
        while 6 <= choice <= 8 and len(self.graph) == 0:
            self.write("\nGraph does not exist!\nDo you wish to construct it? (y/n)\n")
            answer = self.read()
            while answer not in ("y", "Y", "n", "N"):
                self.write("Invalid option. Do you wish to construct the graph? (y/n)\n")
                answer = self.read()
            choice = 5 if answer in ("y", "Y") else self.read_choice()
        return choice

    def movie_director(self) -> None:
        title = self.ask("Enter the name of the movie:\n#>")
        self.write("\n")
        movie = self.table.search(title)
        if movie is None:
            self.write(f"Movie {title} not found in the database!\n")
        else:
            self.write(f"The movie {title} was directed by {movie.director}!\n")
        self.write("\n")

    def director_count(self) -> None:
        director = self.ask("Enter the name of a director:\n#>")
        self.write("\n")
        node = self.directors.search(director)
        if node is None:
            self.write(f"Director {director} not found in the database!\n")
        else:
            self.write(
                f"Director {director} has {len(node.movies)} movie(s) recorded in our database!\n"
            )
        self.write("\n")

    def movie_description(self) -> None:
        title = self.ask("Enter the name of a movie:\n#>")
        self.write("\n")
        movie = self.table.search(title)
        if movie is None:
            self.write(f"Movie {title} not found in the database!\n")
        else:
            self.write(f"Here is a brief description of {title}:\n")
            self.write(
                f"Released in {movie.year} by director {movie.director}, {title} is a "
                f"{movie.genre} featuring actors {movie.actors}.\n"
            )
            self.write(f"Plot: {movie.description}\n")
        self.write("\n")

    def director_movies(self) -> None:
        director = self.ask("Enter the name of a director:\n#>")
        self.write("\n")
        node = self.directors.search(director)
        if node is None:
            self.write(f"Director {director} not found in the database!\n")
        else:
            self.write(f"Here is a list of all movies directed by {director} in our database:\n")
            self.write("".join(f"-{movie.title}\n" for movie in node.movies))
        self.write("\n")

    def build_graph(self) -> None:
        if len(self.graph) != 0:
            self.write("\nGraph already exists!\n")
        else:
            buckets = self.table.buckets()[: self.table_size]
            self.graph = ActorGraph.from_movies(movie for bucket in buckets for movie in bucket)
            self.write("Duplicate movie! Skipped\n" * self.graph.duplicates_skipped)
            self.write(f"\nActor graph has been created! {len(self.graph)} actors were added!\n")
        self.write("\n")

    def actor_count(self) -> None:
        name = self.ask("Enter the name of an actor:\n#>")
        self.write("\n")
        actor = self.graph.search(name)
        if actor is None:
            self.write(f"Actor {name} not found in the database!\n")
        else:
            self.write(f"{name} has acted in {len(actor.movies)} movie(s) in our database!\n")
        self.write("\n")

    def actor_movies(self) -> None:
        name = self.ask("Enter the name of an actor:\n#>")
        self.write("\n")
        actor = self.graph.search(name)
        if actor is None:
            self.write(f"Actor {name} not found in the database!\n")
        else:
            self.write(
                f"Here is a list of all movies that {name} has acted in recorded in our database:\n"
            )
            self.write("".join(f"-{movie.title}\n" for movie in actor.movies))
        self.write("\n")

    def actor_distance(self) -> None:
        first = self.ask("Enter the name of the first actor:\n#>")
        second = self.ask("Enter the name of the second actor:\n#>")
        self.write("\n")
        try:
            distance = self.graph.find_distance(first, second)
        except SameActorError:
            self.write("Please enter two different names!\n")
        except ActorNotFoundError:
            self.write("One or more actors not found in the database!\n")
        except ActorsNotConnectedError:
            self.write(f"Actors {first} and {second} are not connected in our database!\n")
        else:
            if distance == 0:
                common = self.graph.find_common_movie(first, second)
                self.write(
                    f"The distance between {first} and {second} is 0! "
                    f"They worked together in {common}\n"
                )
            else:
                self.write(f"{first} and {second} are {distance} movies apart!\n")
        self.write("\n")


_ACTIONS = {
    1: _Session.movie_director,
    2: _Session.director_count,
    3: _Session.movie_description,
    4: _Session.director_movies,
    5: _Session.build_graph,
    6: _Session.actor_count,
    7: _Session.actor_movies,
    8: _Session.actor_distance,
}


def run_menu(
    table: MovieHashTable,
    directors: DirectorSkipList,
    table_size: int,
    lines: Iterable[str],
    out: TextIO,
) -> None:
    """Serve menu requests read from lines until the user quits or input ends."""
    session = _Session(table, directors, table_size, iter(lines), out)
    try:
        choice = session.read_choice()
        while choice != 9:
            choice = session.offer_graph(choice)
            if choice == 9:
                break
            action = _ACTIONS.get(choice)
            if action is None:
                session.write("\nInvalid option. ")
            else:
                action(session)
            choice = session.read_choice()
    except _EndOfInput:
        pass
    session.graph.clear()
    session.write("Quitting... GoodBye!\n")


def main(argv=None) -> int:
    """Load a movie CSV and run the interactive menu on standard input."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3:
        print(_USAGE)
        return 0

    try:
        table_size = int(args[1])
        capacity = int(args[2])
        table = MovieHashTable(table_size)
    except ValueError as exc:
        print(f"Invalid size: {exc}", file=sys.stderr)
        return 1
    directors = DirectorSkipList(capacity, _SKIP_LIST_LEVELS)

    try:
        read_movie_csv(args[0], table, directors)
    except OSError:
        print("Failed to open CSV file!")
        return 0
    except MovieLineError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Number of collisions: {table.collisions()}")
    run_menu(table, directors, table_size, sys.stdin, sys.stdout)
    return 0
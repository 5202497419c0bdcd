# reelshell

Two small command-line tools in one package: a movie database explorer and a
tiny Unix shell with job control. Both need a POSIX system.

## Movie database explorer

`reelshell-movies` loads a CSV of movies into a hash table keyed by title and
a skip list keyed by director. It prints the number of hash collisions it saw,
then offers an interactive menu:

1. Find the director of a movie
2. Find the number of movies by a director
3. Find the description of a movie
4. List the movies by a director
5. Construct graph of actors
6. Find the number of movies of an actor
7. List all movies of an actor
8. Find the distance between two actors
9. Quit

Choosing 6, 7 or 8 before the actor graph exists asks whether to build it
first. The menu also ends when input runs out.

Run it as:

    reelshell-movies movies.csv 2000 2000

The arguments are the CSV file, the hash table size and the skip list
capacity. With a wrong number of arguments it prints a usage message. The
first line of the CSV is a header and is skipped, as are blank lines. Every
other line must have twelve fields: rank, title, genre, description,
director, actors (comma separated, inside double quotes), year, runtime,
rating, votes, revenue and metascore. A line that does not fit stops loading
with an error and exit status 1. A file that cannot be opened prints
`Failed to open CSV file!`.

### Using the data structures from Python

    from reelshell.movies import Movie, MovieHashTable
    from reelshell.skiplist import DirectorSkipList
    from reelshell.actorgraph import ActorGraph
    from reelshell.moviecli import parse_movie_line, read_movie_csv

    table = MovieHashTable(2000)
    directors = DirectorSkipList(2000, 10)
    read_movie_csv("movies.csv", table, directors)

    movie = table.search("Inception")           # Movie or None
    node = directors.search("Christopher Nolan")  # DirectorNode or None
    graph = ActorGraph.from_movies(table)
    hops = graph.find_distance("Actor A", "Actor B")

- `MovieHashTable` chains movies per bucket; `collisions()` counts inserts
  into an occupied bucket, `buckets()` returns a snapshot and iterating it
  yields every movie.
- `DirectorSkipList` keeps directors in name order; `directors()` lists them
  and each `DirectorNode` holds that director's movies, skipping duplicate
  titles. Pass `rng=random.Random(seed)` for reproducible node heights.
- `ActorGraph.find_distance` returns 0 for actors who share a movie and the
  number of intermediate movies otherwise. It raises `SameActorError`,
  `ActorNotFoundError` or `ActorsNotConnectedError` for the cases it cannot
  answer. `find_common_movie` returns a shared title or an empty string.

## Tiny shell

`tsh` reads command lines and runs them as jobs. Built-in commands:

- `quit` – leave the shell
- `jobs` – list the tracked jobs
- `bg <pid|%jid>` – resume a job in the background
- `fg <pid|%jid>` – resume a job in the foreground and wait for it

Any other command is started as a new process in its own process group. A
line whose last argument starts with `&` runs in the background. Text inside
single quotes forms one argument. Ctrl-C and Ctrl-Z are sent on to the
foreground job's process group, and the shell reports jobs that stop or are
terminated by a signal. At most 16 jobs are tracked at once.

    tsh        # interactive, with a "tsh> " prompt
    tsh -p     # no prompt, handy for scripted input
    tsh -v     # also report each job as it is added
    tsh -h     # print usage

Helper programs for trying out job control:

    myspin 5   # sleep for 5 seconds
    mysplit 5  # start a child that sleeps for 5 seconds and wait for it
    mystop 5   # sleep 5 seconds, then stop its process group with SIGTSTP
    myint 5    # sleep 5 seconds, then interrupt itself with SIGINT

## What it does not do

The movie explorer only reads its CSV: it cannot add, edit or save movies,
and nothing is kept between runs. The shell has no pipes, redirection,
variables, double-quote handling or command history.

## Tests

    pip install -e .[test]
    pytest
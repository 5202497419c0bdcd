import pytest

from reelshell.actorgraph import (
    Actor,
    ActorGraph,
    ActorNotFoundError,
    ActorsNotConnectedError,
    SameActorError,
)
from reelshell.movies import Movie


def _movie(title, actors):
    return Movie(1, title, "Drama", "desc", "Someone", actors, 2000, 100, 7.0, 10, 1.0, 50)


@pytest.fixture
def graph():
    return ActorGraph.from_movies(
        [
            _movie("First", "Ann, Bob"),
            _movie("Second", "Bob ,  Cid"),
            _movie("Third", "Dee, Eve"),
        ]
    )


def test_names_are_trimmed(graph):
    assert {actor.name for actor in graph} == {"Ann", "Bob", "Cid", "Dee", "Eve"}
    assert graph.search("Cid").name == "Cid"


def test_trailing_comma_adds_no_actor():
    graph = ActorGraph.from_movies([_movie("Solo", "Ann,Bob,")])
    assert sorted(actor.name for actor in graph) == ["Ann", "Bob"]


def test_connections_are_symmetric_and_unique(graph):
    assert graph.is_connection("Ann", "Bob")
    assert graph.is_connection("Bob", "Ann")
    assert not graph.is_connection("Ann", "Cid")
    assert not graph.add_connection("Ann", "Bob")
    assert [c.name for c in graph.search("Bob").connections] == ["Ann", "Cid"]


def test_no_self_connection(graph):
    assert not graph.add_connection("Ann", "Ann")
    assert all(c.name != "Ann" for c in graph.search("Ann").connections)


def test_is_connection_unknown_first_actor(graph):
    with pytest.raises(ActorNotFoundError):
        graph.is_connection("Zed", "Ann")


def test_distance_between_costars_is_zero(graph):
    assert graph.find_distance("Ann", "Bob") == 0


def test_distance_is_symmetric_and_grows_along_chain(graph):
    assert graph.find_distance("Ann", "Cid") == graph.find_distance("Cid", "Ann")
    assert graph.find_distance("Ann", "Cid") == 1


def test_distance_errors(graph):
    with pytest.raises(SameActorError):
        graph.find_distance("Ann", "Ann")
    with pytest.raises(ActorNotFoundError):
        graph.find_distance("Ann", "Zed")
    with pytest.raises(ActorsNotConnectedError):
        graph.find_distance("Ann", "Eve")


def test_same_name_checked_before_existence():
    with pytest.raises(SameActorError):
        ActorGraph().find_distance("Nobody", "Nobody")


def test_common_movie(graph):
    assert graph.find_common_movie("Bob", "Cid") == "Second"
    assert graph.find_common_movie("Ann", "Cid") == ""


def test_actor_add_movie_skips_duplicate_title():
    actor = Actor("Ann")
    assert actor.add_movie(_movie("First", "Ann"))
    assert not actor.add_movie(_movie("First", "Ann"))
    assert [m.title for m in actor.movies] == ["First"]


def test_add_actor_counts_duplicates():
    graph = ActorGraph()
    assert graph.add_actor("Ann", _movie("First", "Ann"))
    assert not graph.add_actor("Ann", _movie("First", "Ann"))
    assert graph.duplicates_skipped == 1
    assert len(graph) == 1


def test_format_connections():
    graph = ActorGraph.from_movies([_movie("First", "A, B")])
    assert graph.format_connections() == "Displaying connections\nA --> B\nB --> A"


def test_clear_empties_graph(graph):
    graph.clear()
    assert len(graph) == 0
    assert graph.search("Ann") is None
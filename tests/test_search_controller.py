import asyncio

import httpx
import pytest

from usemovies.exceptions import NetworkError, NoResultsError
from usemovies.schemas.movie import FetchState
from usemovies.services.omdb_service import OMDbService
from usemovies.services.reactive import Cell
from usemovies.services.search_controller import MovieSearchController


@pytest.mark.parametrize("text", ["", "a", " b ", "   ", "\tz\n"])
def test_short_queries_reset_without_fetching(omdb, text):
    query = Cell("")
    controller = MovieSearchController(omdb, query)

    query.set(text)

    assert controller.state == FetchState(items=[], is_loading=False, error=None)
    assert controller.observe(text) == FetchState()
    assert omdb.calls == []


def test_search_then_clear_query(omdb, make_summary):
    omdb.outcomes["ba"] = [make_summary("tt1", "Batman")]

    async def scenario():
        query = Cell("")
        controller = MovieSearchController(omdb, query)

        query.set("ba")
        assert controller.state == FetchState(is_loading=True)

        state = await controller.settled()
        assert len(state.items) == 1
        assert state.items[0].title == "Batman"
        assert state.is_loading is False
        assert state.error is None

        query.set("")
        assert controller.state == FetchState()
        assert omdb.calls == ["ba"]

    asyncio.run(scenario())


def test_no_results_sets_error(omdb):
    omdb.outcomes["zzzzz"] = NoResultsError()

    async def scenario():
        query = Cell("")
        controller = MovieSearchController(omdb, query)
        query.set("zzzzz")
        return await controller.settled()

    state = asyncio.run(scenario())
    assert state.error
    assert state.items == []
    assert state.is_loading is False


def test_network_error_clears_previous_items(omdb, make_summary):
    omdb.outcomes["alien"] = [make_summary("tt3", "Alien")]
    omdb.outcomes["aliens"] = NetworkError()

    async def scenario():
        query = Cell("")
        controller = MovieSearchController(omdb, query)
        query.set("alien")
        await controller.settled()
        query.set("aliens")
        return await controller.settled()

    state = asyncio.run(scenario())
    assert state.items == []
    assert state.error == NetworkError().message


def test_new_attempt_clears_previous_error(omdb, make_summary):
    omdb.outcomes["zzzzz"] = NoResultsError()
    omdb.outcomes["heat"] = [make_summary("tt4", "Heat", "1995")]

    async def scenario():
        query = Cell("")
        controller = MovieSearchController(omdb, query)
        query.set("zzzzz")
        await controller.settled()
        assert controller.state.error

        query.set("heat")
        assert controller.state.error is None
        assert controller.state.is_loading is True
        return await controller.settled()

    state = asyncio.run(scenario())
    assert [item.imdb_id for item in state.items] == ["tt4"]
    assert state.error is None


def test_late_response_to_old_query_is_dropped(omdb, make_summary):
    omdb.outcomes["bat"] = [make_summary("tt1", "Batman")]
    omdb.outcomes["batman"] = [make_summary("tt2", "Batman Returns", "1992")]

    async def scenario():
        slow = omdb.hold("bat")
        query = Cell("")
        controller = MovieSearchController(omdb, query)

        query.set("bat")
        await asyncio.sleep(0)
        query.set("batman")
        await controller.settled()

        # The old response arrives after the newer one was applied
        slow.set()
        await omdb.finished["bat"].wait()
        return controller.state

    state = asyncio.run(scenario())
    assert omdb.calls == ["bat", "batman"]
    assert [item.imdb_id for item in state.items] == ["tt2"]
    assert state.is_loading is False
    assert state.error is None


def test_cancelled_failure_is_silent(omdb, make_summary):
    omdb.outcomes["star"] = NetworkError()
    omdb.outcomes["star wars"] = [make_summary("tt5", "Star Wars", "1977")]

    async def scenario():
        slow = omdb.hold("star")
        query = Cell("")
        controller = MovieSearchController(omdb, query)
        published = []
        controller.states.subscribe(published.append, immediate=False)

        query.set("star")
        await asyncio.sleep(0)
        query.set("star wars")
        await controller.settled()
        slow.set()
        await omdb.finished["star"].wait()
        return controller.state, published

    state, published = asyncio.run(scenario())
    assert state.error is None
    assert [item.imdb_id for item in state.items] == ["tt5"]
    assert all(s.error is None for s in published)


def test_guard_supersedes_in_flight_search(omdb, make_summary):
    omdb.outcomes["matrix"] = [make_summary("tt6", "The Matrix", "1999")]

    async def scenario():
        slow = omdb.hold("matrix")
        query = Cell("")
        controller = MovieSearchController(omdb, query)

        query.set("matrix")
        await asyncio.sleep(0)
        query.set("m")
        assert controller.state == FetchState()

        slow.set()
        await omdb.finished["matrix"].wait()
        return controller.state

    assert asyncio.run(scenario()) == FetchState()


def test_close_cancels_in_flight_search(omdb, make_summary):
    omdb.outcomes["dune"] = [make_summary("tt7", "Dune", "2021")]

    async def scenario():
        slow = omdb.hold("dune")
        query = Cell("")
        controller = MovieSearchController(omdb, query)
        query.set("dune")
        await asyncio.sleep(0)

        controller.close()
        assert query.subscriber_count == 0

        slow.set()
        await omdb.finished["dune"].wait()
        query.set("dune 2")
        return controller.state

    state = asyncio.run(scenario())
    assert state.items == []
    assert omdb.calls == ["dune"]


def test_superseded_http_request_never_reaches_state():
    seen = []

    async def scenario():
        gate = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            term = request.url.params["s"]
            seen.append(term)
            if term == "alien":
                await gate.wait()
                return httpx.Response(
                    200,
                    json={
                        "Response": "True",
                        "Search": [{"Title": "Alien", "Year": "1979", "imdbID": "tt8"}],
                    },
                )
            return httpx.Response(
                200,
                json={
                    "Response": "True",
                    "Search": [{"Title": "Aliens", "Year": "1986", "imdbID": "tt9"}],
                },
            )

        omdb = OMDbService("test-key", transport=httpx.MockTransport(handler))
        query = Cell("")
        controller = MovieSearchController(omdb, query)

        query.set("alien")
        await asyncio.sleep(0.01)
        query.set("aliens")
        state = await controller.settled()
        gate.set()
        await asyncio.sleep(0.01)
        await omdb.close()
        return state, controller.state

    settled, final = asyncio.run(scenario())
    assert seen == ["alien", "aliens"]
    assert [item.imdb_id for item in settled.items] == ["tt9"]
    assert final == settled


def test_unexpected_failure_settles_as_network_error(omdb):
    omdb.outcomes["batman"] = RuntimeError("boom")

    async def scenario():
        query = Cell("")
        controller = MovieSearchController(omdb, query)
        query.set("batman")
        return await controller.settled()

    state = asyncio.run(scenario())
    assert state == FetchState(error=NetworkError().message)


@pytest.mark.parametrize(
    "payload",
    [
        {"Response": "True", "Search": [{"Title": "Batman", "Year": 1989, "imdbID": "tt1"}]},
        {"Response": "True", "Search": "oops"},
    ],
)
def test_malformed_search_payload_stops_loading(payload):
    async def scenario():
        omdb = OMDbService(
            "test-key",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=payload)),
        )
        query = Cell("")
        controller = MovieSearchController(omdb, query)
        query.set("batman")
        state = await controller.settled()
        await omdb.close()
        return state

    state = asyncio.run(scenario())
    assert state.is_loading is False
    assert state.items == []
    assert state.error == NetworkError().message

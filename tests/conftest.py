import asyncio
from typing import Dict, List

import pytest

from usemovies.schemas.movie import MovieDetail, MovieSummary


class ScriptedOMDb:
    """Stands in for OMDbService with canned outcomes per query or id

    ``hold(key)`` makes the call for ``key`` wait until the returned event is
    set. A held call ignores cancellation, like a transport that delivers its
    response even after the caller gave up on it.
    """

    def __init__(self):
        self.calls: List[str] = []
        self.outcomes: Dict[str, object] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.finished: Dict[str, asyncio.Event] = {}

    def hold(self, key: str) -> asyncio.Event:
        self.gates[key] = asyncio.Event()
        self.finished[key] = asyncio.Event()
        return self.gates[key]

    async def _answer(self, key: str):
        self.calls.append(key)
        gate = self.gates.get(key)
        try:
            if gate is not None:
                try:
                    await gate.wait()
                except asyncio.CancelledError:
                    await gate.wait()
            outcome = self.outcomes[key]
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        finally:
            if key in self.finished:
                self.finished[key].set()

    async def search_movies(self, query: str):
        return await self._answer(query)

    async def get_movie_details(self, imdb_id: str):
        return await self._answer(imdb_id)

    async def close(self):
        pass


@pytest.fixture
def omdb():
    return ScriptedOMDb()


def summary(imdb_id: str, title: str, year: str = "1989") -> MovieSummary:
    return MovieSummary(imdb_id=imdb_id, title=title, year=year)


def detail(imdb_id: str, title: str, **fields) -> MovieDetail:
    return MovieDetail(imdb_id=imdb_id, title=title, **fields)


@pytest.fixture
def make_summary():
    return summary


@pytest.fixture
def make_detail():
    return detail

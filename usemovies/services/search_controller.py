"""Query-driven movie search"""

from typing import List

from ..config import settings
from ..exceptions import MovieSearchError
from ..schemas.movie import FetchState, MovieSummary
from .fetch_controller import FetchController
from .log_service import log_service
from .omdb_service import OMDbService
from .reactive import Cell


class MovieSearchController(FetchController[FetchState]):
    """Keep a ``FetchState`` in sync with the search query

    Queries shorter than ``min_query_length`` (after trimming) reset the
    state without touching the network. A failed search clears ``items``.
    """

    def __init__(self, omdb: OMDbService, query: Cell, min_query_length: int = None):
        self.omdb = omdb
        self.min_query_length = (
            min_query_length
            if min_query_length is not None
            else settings.MIN_QUERY_LENGTH
        )
        super().__init__(query, FetchState())

    def observe(self, query: str) -> FetchState:
        self._cancel_pending()

        term = (query or "").strip()
        if len(term) < self.min_query_length:
            self._publish(FetchState())
            return self.state

        self._publish(FetchState(is_loading=True))
        self._start("search", term, lambda: self.omdb.search_movies(term))
        return self.state

    def _on_success(self, items: List[MovieSummary]):
        self._publish(FetchState(items=items))

    def _on_failure(self, error: MovieSearchError):
        log_service.error(f"Search failed: {error.message}")
        self._publish(FetchState(error=error.message))

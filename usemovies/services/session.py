"""In-memory movie session"""

from typing import Optional, Tuple

from ..exceptions import NothingSelectedError
from ..schemas.movie import DetailState, FetchState
from ..schemas.watched import WatchedItem, WatchedSummary
from .detail_controller import MovieDetailController
from .log_service import log_service
from .omdb_service import OMDbService
from .reactive import Cell
from .search_controller import MovieSearchController
from .watched_service import summarize


class MovieSession:
    """Query, selection and watched list for one user

    Holds the inputs the UI mutates and wires them to the search and detail
    controllers. Must be created inside a running event loop.
    """

    def __init__(self, omdb: OMDbService, min_query_length: int = None):
        self.omdb = omdb
        self.query: Cell = Cell("")
        self.selected_id: Cell = Cell(None)
        self.watched_items: Cell = Cell(())

        self.search = MovieSearchController(
            omdb, self.query, min_query_length=min_query_length
        )
        self.details = MovieDetailController(omdb, self.selected_id)

    @property
    def search_state(self) -> FetchState:
        return self.search.state

    @property
    def detail_state(self) -> DetailState:
        return self.details.state

    @property
    def watched(self) -> Tuple[WatchedItem, ...]:
        return self.watched_items.value

    def set_query(self, query: str):
        self.query.set(query)

    def select_movie(self, imdb_id: str) -> Optional[str]:
        """Select ``imdb_id``, or close it if it is already selected"""
        current = self.selected_id.value
        self.selected_id.set(None if imdb_id == current else imdb_id)
        return self.selected_id.value

    def close_movie(self):
        self.selected_id.set(None)

    def add_watched(self, item: WatchedItem):
        """Append ``item`` and close the detail view

        The same movie can be added more than once.
        """
        self.watched_items.set(self.watched + (item,))
        log_service.info(f"Added {item.imdb_id} ({item.title}) to watched list")
        self.close_movie()

    def add_selected_to_watched(self, user_rating: float) -> WatchedItem:
        """Rate the loaded detail and add it to the watched list"""
        detail = self.details.state.detail
        if detail is None:
            raise NothingSelectedError()

        item = WatchedItem.from_detail(detail, user_rating)
        self.add_watched(item)
        return item

    def summary(self) -> WatchedSummary:
        return summarize(self.watched)

    async def close(self):
        """Stop both controllers and close the HTTP client"""
        self.search.close()
        self.details.close()
        await self.omdb.close()

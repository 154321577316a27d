"""Selection-driven movie detail loading"""

from typing import Optional

from ..exceptions import MovieSearchError
from ..schemas.movie import DetailState, MovieDetail
from .fetch_controller import FetchController
from .log_service import log_service
from .omdb_service import OMDbService
from .reactive import Cell


class MovieDetailController(FetchController[DetailState]):
    """Load the full record of the selected movie

    Failures are logged and leave an empty, settled state; nothing is
    reported to the user.
    """

    def __init__(self, omdb: OMDbService, selected_id: Cell):
        self.omdb = omdb
        super().__init__(selected_id, DetailState())

    def observe(self, selected_id: Optional[str]) -> DetailState:
        self._cancel_pending()

        if not selected_id:
            self._publish(DetailState())
            return self.state

        self._publish(DetailState(is_loading=True))
        self._start(
            "detail", selected_id, lambda: self.omdb.get_movie_details(selected_id)
        )
        return self.state

    def _on_success(self, detail: MovieDetail):
        self._publish(DetailState(detail=detail))

    def _on_failure(self, error: MovieSearchError):
        log_service.error(f"Failed to load movie details: {error.message}")
        self._publish(DetailState())

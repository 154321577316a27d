"""Services layer"""

from .detail_controller import MovieDetailController
from .log_service import LogService
from .omdb_service import OMDbService
from .reactive import Cell, Subscription
from .search_controller import MovieSearchController
from .session import MovieSession
from .watched_service import summarize

__all__ = [
    "LogService",
    "OMDbService",
    "Cell",
    "Subscription",
    "MovieSearchController",
    "MovieDetailController",
    "MovieSession",
    "summarize",
]

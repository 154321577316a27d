"""Pydantic schemas for validation"""

from .movie import (
    DetailState,
    FetchState,
    MovieDetail,
    MovieSummary,
    QueryUpdate,
    SelectionResponse,
)
from .watched import WatchedCreate, WatchedItem, WatchedList, WatchedSummary

__all__ = [
    "MovieSummary",
    "MovieDetail",
    "FetchState",
    "DetailState",
    "QueryUpdate",
    "SelectionResponse",
    "WatchedItem",
    "WatchedCreate",
    "WatchedSummary",
    "WatchedList",
]

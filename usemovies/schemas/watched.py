"""Watched list schemas"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import settings
from .movie import MovieDetail


def _check_user_rating(value: float) -> float:
    if value > settings.MAX_USER_RATING:
        raise ValueError(f"user_rating must be at most {settings.MAX_USER_RATING}")
    return value


class WatchedItem(BaseModel):
    """A movie the user marked as watched"""

    imdb_id: str
    title: str
    year: Optional[str] = None
    poster: Optional[str] = None
    imdb_rating: Optional[float] = None
    user_rating: float = Field(..., ge=1)
    runtime: Optional[int] = None  # minutes

    model_config = ConfigDict(frozen=True)

    @field_validator("user_rating")
    @classmethod
    def check_user_rating(cls, value: float) -> float:
        return _check_user_rating(value)

    @classmethod
    def from_detail(cls, detail: MovieDetail, user_rating: float) -> "WatchedItem":
        """Build the watched record for a loaded detail, one field at a time"""
        return cls(
            imdb_id=detail.imdb_id,
            title=detail.title,
            year=detail.year,
            poster=detail.poster,
            imdb_rating=detail.imdb_rating,
            user_rating=user_rating,
            runtime=detail.runtime,
        )


class WatchedCreate(BaseModel):
    """Add the selected movie to the watched list"""

    user_rating: float = Field(..., ge=1)

    @field_validator("user_rating")
    @classmethod
    def check_user_rating(cls, value: float) -> float:
        return _check_user_rating(value)


class WatchedSummary(BaseModel):
    """Derived statistics over the watched list

    Averages are ``None`` when there is nothing to average.
    """

    count: int = 0
    avg_imdb_rating: Optional[float] = None
    avg_user_rating: Optional[float] = None
    avg_runtime: Optional[float] = None


class WatchedList(BaseModel):
    """Watched items together with their summary"""

    items: List[WatchedItem]
    summary: WatchedSummary

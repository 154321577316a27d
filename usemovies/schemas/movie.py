"""Movie search and detail schemas"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class MovieSummary(BaseModel):
    """Search result entry from OMDb"""

    imdb_id: str
    title: str
    year: Optional[str] = None
    poster: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class MovieDetail(MovieSummary):
    """Full OMDb record for one title"""

    runtime: Optional[int] = None  # minutes
    imdb_rating: Optional[float] = None
    plot: Optional[str] = None
    released: Optional[str] = None
    actors: Optional[str] = None
    director: Optional[str] = None
    genre: Optional[str] = None


class FetchState(BaseModel):
    """Observable outcome of the latest search attempt"""

    items: List[MovieSummary] = []
    is_loading: bool = False
    error: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class DetailState(BaseModel):
    """Observable outcome of the latest detail fetch"""

    detail: Optional[MovieDetail] = None
    is_loading: bool = False

    model_config = ConfigDict(frozen=True)


class QueryUpdate(BaseModel):
    """Query change event"""

    query: str


class SelectionResponse(BaseModel):
    """Selection after a toggle or close"""

    selected_id: Optional[str] = None

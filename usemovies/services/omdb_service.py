"""OMDb API service"""

import re
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..config import settings
from ..exceptions import NetworkError, NoResultsError
from ..schemas.movie import MovieDetail, MovieSummary
from .log_service import log_service

MISSING = "N/A"


class OMDbService:
    """The Open Movie Database API integration"""

    def __init__(
        self,
        api_key: str,
        base_url: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or settings.OMDB_BASE_URL
        self.client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
        )

    async def _request(self, params: Dict) -> Dict:
        """Make request to OMDb API"""
        params = dict(params)
        params["apikey"] = self.api_key

        log_service.fetch("request", url=self.base_url, params=_redact(params))
        try:
            response = await self.client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            log_service.error(f"OMDb API error: {e}")
            raise NetworkError() from e
        except ValueError as e:
            # Body was not JSON
            log_service.error(f"OMDb API returned an unreadable body: {e}")
            raise NetworkError() from e

        if not isinstance(data, dict):
            log_service.error(f"OMDb API returned {type(data).__name__}, expected object")
            raise NetworkError()
        return data

    async def search_movies(self, query: str) -> List[MovieSummary]:
        """Search titles matching ``query``"""
        data = await self._request({"s": query})

        if data.get("Response") == "False":
            raise NoResultsError()

        try:
            return [self.parse_summary(item) for item in data.get("Search") or []]
        except (ValidationError, TypeError, AttributeError) as e:
            log_service.error(f"OMDb search payload for {query!r} is malformed: {e}")
            raise NetworkError() from e

    async def get_movie_details(self, imdb_id: str) -> MovieDetail:
        """Get the full record for one IMDb id"""
        data = await self._request({"i": imdb_id})

        if data.get("Response") == "False":
            raise NoResultsError(f"No details found for {imdb_id}")

        try:
            return self.parse_detail(data, imdb_id)
        except (ValidationError, TypeError, AttributeError) as e:
            log_service.error(f"OMDb detail payload for {imdb_id} is malformed: {e}")
            raise NetworkError() from e

    def parse_summary(self, item: Dict) -> MovieSummary:
        """Parse OMDb search entry"""
        return MovieSummary(
            imdb_id=item.get("imdbID") or "",
            title=item.get("Title") or "",
            year=_text(item.get("Year")),
            poster=_text(item.get("Poster")),
        )

    def parse_detail(self, item: Dict, imdb_id: str = "") -> MovieDetail:
        """Parse OMDb detail record into standardized format"""
        return MovieDetail(
            imdb_id=item.get("imdbID") or imdb_id,
            title=item.get("Title") or "",
            year=_text(item.get("Year")),
            poster=_text(item.get("Poster")),
            runtime=parse_runtime(item.get("Runtime")),
            imdb_rating=parse_rating(item.get("imdbRating")),
            plot=_text(item.get("Plot")),
            released=_text(item.get("Released")),
            actors=_text(item.get("Actors")),
            director=_text(item.get("Director")),
            genre=_text(item.get("Genre")),
        )

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()


def parse_runtime(value: Optional[str]) -> Optional[int]:
    """Minutes from free text such as ``"148 min"``"""
    if not value:
        return None
    match = re.match(r"\s*(\d+)", value)
    if not match:
        return None
    return int(match.group(1))


def parse_rating(value: Optional[str]) -> Optional[float]:
    """IMDb rating as a number; ``"N/A"`` has none"""
    if not value or value == MISSING:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _text(value: Optional[str]) -> Optional[str]:
    if not value or value == MISSING:
        return None
    return value


def _redact(params: Dict) -> Dict:
    return {k: ("***" if k == "apikey" else v) for k, v in params.items()}

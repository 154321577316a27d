"""Movie session API routes

These are the only ways to change the session: a query change, a selection
change and add-to-watched. Everything else is a read of the latest state.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..exceptions import NothingSelectedError
from ..schemas.movie import DetailState, FetchState, QueryUpdate, SelectionResponse
from ..schemas.watched import WatchedCreate, WatchedItem, WatchedList
from ..services.session import MovieSession

router = APIRouter(prefix="/api/session", tags=["session"])


def get_session(request: Request) -> MovieSession:
    """Session created by the app lifespan"""
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Movie session not ready")
    return session


@router.put("/query", response_model=FetchState)
async def update_query(data: QueryUpdate, session: MovieSession = Depends(get_session)):
    """Change the search query; returns the state right after the change"""
    session.set_query(data.query)
    return session.search_state


@router.get("/search", response_model=FetchState)
async def get_search_state(
    wait: bool = Query(False, description="Wait for the in-flight search to settle"),
    session: MovieSession = Depends(get_session),
):
    """Current search results"""
    if wait:
        return await session.search.settled()
    return session.search_state


@router.post("/select/{imdb_id}", response_model=SelectionResponse)
async def select_movie(imdb_id: str, session: MovieSession = Depends(get_session)):
    """Toggle selection of a movie"""
    return SelectionResponse(selected_id=session.select_movie(imdb_id))


@router.delete("/select", response_model=SelectionResponse)
async def close_movie(session: MovieSession = Depends(get_session)):
    """Close the detail view"""
    session.close_movie()
    return SelectionResponse(selected_id=None)


@router.get("/detail", response_model=DetailState)
async def get_detail_state(
    wait: bool = Query(False, description="Wait for the in-flight detail to settle"),
    session: MovieSession = Depends(get_session),
):
    """Details of the selected movie"""
    if wait:
        return await session.details.settled()
    return session.detail_state


@router.post("/watched", response_model=WatchedItem, status_code=201)
async def add_watched(data: WatchedCreate, session: MovieSession = Depends(get_session)):
    """Add the selected movie to the watched list with the user's rating"""
    try:
        return session.add_selected_to_watched(data.user_rating)
    except NothingSelectedError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.get("/watched", response_model=WatchedList)
async def list_watched(session: MovieSession = Depends(get_session)):
    """Watched movies and their statistics"""
    return WatchedList(items=list(session.watched), summary=session.summary())

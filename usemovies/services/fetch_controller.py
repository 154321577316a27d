"""Base for controllers that fetch in response to a cell changing"""

import asyncio
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from ..exceptions import MovieSearchError, NetworkError
from .cancellation import CancellationToken
from .log_service import APPLIED, CANCELLED, DROPPED, FAILED, log_service
from .reactive import Cell, Cleanup

S = TypeVar("S")


class FetchController(Generic[S]):
    """Observe ``source`` and publish states of type ``S``

    Each change of ``source`` runs ``observe``. Only the most recent fetch
    may publish its result: the subscription cleanup signals the previous
    fetch's token before the next ``observe`` begins, and a result that
    arrives for a cancelled token is dropped.

    The first ``observe`` runs during construction, so a controller whose
    source already holds a fetchable value must be built inside a running
    event loop.
    """

    def __init__(self, source: Cell, initial: S):
        self.states: Cell[S] = Cell(initial)
        self._token: Optional[CancellationToken] = None
        self._subscription = source.subscribe(self._effect)

    @property
    def state(self) -> S:
        return self.states.value

    def observe(self, value: Any) -> S:
        raise NotImplementedError

    def _on_success(self, result: Any):
        raise NotImplementedError

    def _on_failure(self, error: MovieSearchError):
        raise NotImplementedError

    def _effect(self, value: Any) -> Cleanup:
        self.observe(value)
        token = self._token
        return token.cancel if token is not None else None

    def _publish(self, state: S):
        self.states.set(state)

    def _cancel_pending(self):
        token, self._token = self._token, None
        if token is not None:
            token.cancel()

    def _start(
        self, label: str, key: str, fetch: Callable[[], Awaitable[Any]]
    ) -> CancellationToken:
        """Run ``fetch`` for ``key`` in a task tied to a fresh token"""
        token = CancellationToken(label, key)
        self._token = token
        task = asyncio.get_running_loop().create_task(self._settle(token, fetch))
        token.attach(task)
        return token

    async def _settle(self, token: CancellationToken, fetch: Callable[[], Awaitable[Any]]):
        """Apply the outcome of ``fetch`` unless ``token`` went stale

        A live token always ends in a published, non-loading state: errors
        outside the ``MovieSearchError`` family are logged and reported as a
        ``NetworkError``.
        """
        try:
            result = await fetch()
        except asyncio.CancelledError:
            log_service.outcome(token.label, token.key, CANCELLED)
            return
        except MovieSearchError as e:
            error = e
        except Exception as e:
            log_service.error(
                f"Unexpected failure in {token.label} {token.key!r}: {e!r}", exc_info=e
            )
            error = NetworkError()
        else:
            if token.cancelled:
                log_service.outcome(token.label, token.key, DROPPED)
                return
            self._on_success(result)
            log_service.outcome(token.label, token.key, APPLIED)
            return

        if token.cancelled:
            log_service.outcome(token.label, token.key, DROPPED, reason=error.message)
            return
        self._on_failure(error)
        log_service.outcome(token.label, token.key, FAILED, reason=error.message)

    async def settled(self) -> S:
        """Wait until the latest fetch, if any, has settled"""
        while True:
            token = self._token
            if token is None or token.task is None or token.task.done():
                return self.state
            await asyncio.wait([token.task])

    def close(self):
        """Stop observing and cancel in-flight work"""
        self._subscription.unsubscribe()
        self._cancel_pending()

# src/core/lifecycle.py

"""Cancellation-safe loading/success/error state for one async fetch."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from src.models.request_state import ErrorInfo, RequestState

T = TypeVar("T")

FetchFn = Callable[[], Awaitable[T]]
Observer = Callable[[RequestState[T]], None]


class RequestLifecycle(Generic[T]):
    """Own the ``RequestState`` of one logical fetch at a time.

    Each ``start`` bumps a generation counter.  A completed fetch only
    publishes its outcome if its generation is still current, so a
    superseded or cancelled request never reports.  Calling ``start``
    again, for a new key or the same one, cancels and restarts.

    State transitions and observer callbacks run on the event loop
    thread; the only suspension point is awaiting the fetch itself.
    """

    def __init__(self) -> None:
        self._state: RequestState[T] = RequestState.idle()
        self._generation: int = 0
        self._key: object = None
        self._task: asyncio.Task[None] | None = None
        self._observers: list[Observer[T]] = []
        self._disposed: bool = False

    # ── Read side ────────────────────────────────────────

    @property
    def state(self) -> RequestState[T]:
        return self._state

    @property
    def key(self) -> object:
        """Key of the most recent ``start`` call."""
        return self._key

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, observer: Observer[T]) -> Callable[[], None]:
        """Register *observer* for every transition.

        Returns a callable that removes the observer again.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ── Write side ───────────────────────────────────────

    def start(self, key: object, fetch_fn: FetchFn[T]) -> asyncio.Task[None]:
        """Begin fetching *key*, superseding any request in flight.

        Raises ``RuntimeError`` outside a running event loop, before any
        state changes.  The task exists before ``loading`` is published,
        so a failing observer cannot strand the lifecycle in ``loading``.
        Returns the task driving the fetch so callers may await it.
        """
        if self._disposed:
            msg = "RequestLifecycle has been disposed"
            raise RuntimeError(msg)
        loop = asyncio.get_running_loop()

        self.cancel()
        generation = self._generation
        self._key = key
        task = loop.create_task(self._run(generation, fetch_fn))
        self._task = task
        self._transition(RequestState.loading())
        return task

    def cancel(self) -> None:
        """Supersede the in-flight request, if any.

        Idempotent.  The current state is left as it is; the cancelled
        request will never publish an outcome.
        """
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    def dispose(self) -> None:
        """Tear down: cancel and drop every observer."""
        self.cancel()
        self._observers.clear()
        self._disposed = True

    # ── Internals ────────────────────────────────────────

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and not self._disposed

    async def _run(self, generation: int, fetch_fn: FetchFn[T]) -> None:
        try:
            data = await fetch_fn()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            if self._is_current(generation):
                self._task = None
                self._transition(
                    RequestState.failure(ErrorInfo.from_exception(exc))
                )
            return

        if self._is_current(generation):
            self._task = None
            self._transition(RequestState.success(data))

    def _transition(self, state: RequestState[T]) -> None:
        self._state = state
        for observer in list(self._observers):
            observer(state)

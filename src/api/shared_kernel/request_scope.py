"""Execution-scoped request container and per-request memoization.

Every inbound request runs inside its own ``RequestScope``. The scope is held
in a ``ContextVar``, so it follows the request's task (and any task spawned
from it) but is never visible to another concurrently handled request.

The scope carries two things:

- the server copy of the request context (store id and locale), read by the
  commerce API client before every outbound call;
- the memo table behind ``request_cached``, which guarantees a decorated
  coroutine runs at most once per request for a given set of arguments, no
  matter how many independent call sites (page metadata, layout, page body)
  ask for it.

Example:
    @request_cached
    async def load_store(key: str) -> Store:
        ...

    with request_scope(hostname="shop1.example.com"):
        a, b = await asyncio.gather(load_store("shop1"), load_store("shop1"))
        # one upstream lookup, a is b
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Hashable, ParamSpec, TypeVar

from ulid import ULID

from shared_kernel.locale import Locale

P = ParamSpec("P")
T = TypeVar("T")


class RequestScopeError(RuntimeError):
    """Raised when request-scoped state is written outside a request scope."""


@dataclass(frozen=True)
class _Outcome:
    """Settled result of a memoized call: either a value or an exception."""

    value: Any = None
    error: BaseException | None = None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


@dataclass
class RequestScope:
    """Mutable state owned by exactly one inbound request.

    Attributes:
        request_id: Unique identifier for the request (ULID).
        hostname: Raw Host header of the request.
        cookies: Request cookies, read-only.
        preferred_locale: Locale negotiated for the visitor.
        store_id: Server copy of the resolved store id (None until resolved).
        locale: Server copy of the locale sent to the commerce API.
    """

    request_id: str = field(default_factory=lambda: str(ULID()))
    hostname: str = ""
    cookies: Mapping[str, str] = field(default_factory=dict)
    preferred_locale: Locale = Locale.ENGLISH
    store_id: str | None = None
    locale: Locale = Locale.ENGLISH
    _memo: dict[Hashable, asyncio.Future[_Outcome]] = field(
        default_factory=dict, repr=False
    )

    def is_memoized(self, key: Hashable) -> bool:
        """Whether a call for ``key`` has started in this request."""
        return key in self._memo

    async def memoize(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        """Run ``factory`` once for ``key`` and share its outcome.

        The first caller runs the factory inline. Callers arriving while it is
        running, or after it settled, await the same outcome: the same value
        or the same exception. If the running caller is cancelled, or exits
        with any other ``BaseException``, nothing is memoized and waiting
        callers start over.

        Args:
            key: Hashable memo key.
            factory: Zero-argument coroutine function producing the value.

        Returns:
            The memoized value.
        """
        entry = self._memo.get(key)

        if entry is None:
            entry = asyncio.get_running_loop().create_future()
            self._memo[key] = entry
            try:
                value = await factory()
            except Exception as e:
                entry.set_result(_Outcome(error=e))
                raise
            except BaseException:
                # Cancellation, SystemExit and the like: forget the call
                if self._memo.get(key) is entry:
                    del self._memo[key]
                entry.cancel()
                raise
            entry.set_result(_Outcome(value=value))
            return value

        try:
            outcome = await asyncio.shield(entry)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if entry.cancelled() and task is not None and not task.cancelling():
                return await self.memoize(key, factory)
            raise
        return outcome.unwrap()


_current_scope: ContextVar[RequestScope | None] = ContextVar(
    "storefront_request_scope", default=None
)


def current_scope() -> RequestScope | None:
    """Return the scope of the request being handled, if any."""
    return _current_scope.get()


def require_scope() -> RequestScope:
    """Return the current request scope.

    Raises:
        RequestScopeError: If called outside a request scope.
    """
    scope = _current_scope.get()
    if scope is None:
        raise RequestScopeError(
            "No request scope is active. Request-scoped state can only be "
            "written while handling a request."
        )
    return scope


@contextmanager
def request_scope(**attributes: Any) -> Iterator[RequestScope]:
    """Open a new request scope for the duration of the ``with`` block.

    Args:
        **attributes: Initial ``RequestScope`` field values.

    Yields:
        The new scope. It is discarded when the block exits.
    """
    scope = RequestScope(**attributes)
    token = _current_scope.set(scope)
    try:
        yield scope
    finally:
        _current_scope.reset(token)


def request_cached(
    func: Callable[P, Awaitable[T]] | None = None,
    *,
    ignore_self: bool = False,
) -> Any:
    """Memoize an async callable for the lifetime of the current request.

    The memo key is the function identity plus its arguments; there is no
    cross-request cache. Outside a request scope the callable runs uncached.

    Args:
        func: The coroutine function to wrap.
        ignore_self: Leave the first positional argument out of the key, so
            every instance of a service shares the same per-request result.

    Raises:
        TypeError: If ``func`` is not a coroutine function, or (at call time)
            if an argument is unhashable.
    """

    def decorator(fn: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        if not inspect.iscoroutinefunction(fn):
            raise TypeError(f"request_cached requires a coroutine function: {fn!r}")

        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            scope = current_scope()
            if scope is None:
                return await fn(*args, **kwargs)

            key_args = args[1:] if ignore_self else args
            key = (fn.__module__, fn.__qualname__, key_args, tuple(sorted(kwargs.items())))
            return await scope.memoize(key, lambda: fn(*args, **kwargs))

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator

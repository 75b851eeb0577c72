"""
BrewTracker IDs — Interceptor chains.

The ID interceptor adapter only needs a narrow capability from an HTTP
client: two chains (``interceptors.request`` / ``interceptors.response``)
that accept ``use(fulfilled, rejected)``, ideally ``clear()``, and expose a
``handlers`` list.  ``InterceptorChain`` / ``SupportsInterceptors`` describe
that contract; ``InterceptorManager`` is the concrete chain ``ApiClient``
uses.

Chain semantics follow a promise ``then(fulfilled, rejected)`` pipeline:

* while the chain carries a value, each handler's ``fulfilled`` transforms it;
* once a handler raises, the exception travels on and the next handler's
  ``rejected`` may recover by returning a value, or raise again;
* an exception still pending after the last handler is re-raised.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Iterator, List, Optional, Protocol, runtime_checkable

from brewtracker.domain.models import InterceptorHandler

Fulfilled = Callable[[Any], Any]
Rejected = Callable[[BaseException], Any]


# ---------------------------------------------------------------------------
# Capability contract
# ---------------------------------------------------------------------------

@runtime_checkable
class InterceptorChain(Protocol):
    """Minimum surface a chain must offer for interceptors to be installed."""

    def use(self, fulfilled: Optional[Fulfilled] = None, rejected: Optional[Rejected] = None) -> int:
        ...


class InterceptorPair(Protocol):
    request: InterceptorChain
    response: InterceptorChain


class SupportsInterceptors(Protocol):
    """An HTTP client exposing request and response interceptor chains."""

    interceptors: InterceptorPair


# ---------------------------------------------------------------------------
# Concrete chain
# ---------------------------------------------------------------------------

class InterceptorManager:
    """Ordered list of ``InterceptorHandler`` slots.

    Ejected handlers leave a ``None`` slot behind so indices returned by
    ``use`` stay valid.
    """

    def __init__(self) -> None:
        self.handlers: List[Optional[InterceptorHandler]] = []

    def use(self, fulfilled: Optional[Fulfilled] = None, rejected: Optional[Rejected] = None) -> int:
        """Register a handler pair; returns its index for ``eject``."""
        self.handlers.append(InterceptorHandler(fulfilled=fulfilled, rejected=rejected))
        return len(self.handlers) - 1

    def eject(self, index: int) -> None:
        if 0 <= index < len(self.handlers):
            self.handlers[index] = None

    def clear(self) -> None:
        self.handlers.clear()

    def active_handlers(self) -> Iterator[InterceptorHandler]:
        for handler in self.handlers:
            if handler is not None:
                yield handler

    async def run(self, value: Any, reverse: bool = False) -> Any:
        """Drive ``value`` through the chain."""
        return await self._drive(value, None, reverse)

    async def run_error(self, error: BaseException, reverse: bool = False) -> Any:
        """Drive an exception through the chain's ``rejected`` handlers."""
        return await self._drive(None, error, reverse)

    async def _drive(self, value: Any, error: Optional[BaseException], reverse: bool) -> Any:
        # Snapshot so handlers registered mid-run only apply to later calls
        handlers = list(self.active_handlers())
        if reverse:
            handlers.reverse()

        for handler in handlers:
            step = handler.fulfilled if error is None else handler.rejected
            if step is None:
                continue
            try:
                value = await _resolve(step(value if error is None else error))
                error = None
            except Exception as exc:
                error = exc

        if error is not None:
            raise error
        return value


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class Interceptors:
    """The ``interceptors`` attribute of an HTTP client."""

    def __init__(self) -> None:
        self.request = InterceptorManager()
        self.response = InterceptorManager()

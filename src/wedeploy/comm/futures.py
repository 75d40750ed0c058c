"""
Helpers to chain `concurrent.futures.Future` objects.

Every dispatch of the SDK returns a `Future` that resolves once with a value
or fails once with an exception. `then()` derives a new future from a
previous one without blocking any thread, so a chain of steps (send, check
the status, decode the body) stays asynchronous end to end.
"""

from concurrent.futures import Future
from typing import Any, Callable


def then(future: Future, fn: Callable[[Any], Any]) -> Future:
    """
    Returns a future resolving with `fn(future.result())`.

    If `fn` returns a `Future`, the derived future follows it instead of
    resolving with the future object itself. Failures and cancellations of
    `future`, and exceptions raised by `fn`, are forwarded to the derived
    future.
    """
    chained: Future = Future()

    def _resolve(done: Future):
        if done.cancelled():
            chained.cancel()
            return
        exc = done.exception()
        if exc is not None:
            chained.set_exception(exc)
            return
        try:
            result = fn(done.result())
        except Exception as e:
            chained.set_exception(e)
            return
        if isinstance(result, Future):
            result.add_done_callback(lambda inner: _transfer(inner, chained))
        else:
            chained.set_result(result)

    future.add_done_callback(_resolve)
    return chained


def resolved(value: Any) -> Future:
    """
    Returns an already resolved future.

    The SDK does not call it; custom transports and tests use it to answer a
    request synchronously.
    """
    future: Future = Future()
    future.set_result(value)
    return future


def _transfer(source: Future, target: Future):
    if source.cancelled():
        target.cancel()
        return
    exc = source.exception()
    if exc is not None:
        target.set_exception(exc)
    else:
        target.set_result(source.result())

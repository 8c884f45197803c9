"""Per-request context shared by the middleware and the log filter.

The request id lives in a ContextVar so any code running inside a request,
on the event loop or in a worker thread started by it, reads the right
value without explicit parameter passing.
"""

from contextvars import ContextVar, Token

_current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)


def get_request_id() -> str | None:
    """Return the id of the request being handled, or None outside one.

    Safe to call from any context within the request lifecycle::

        logger.info("working on %s", get_request_id())
    """
    return _current_request_id.get()


def bind_request_id(request_id: str) -> Token:
    return _current_request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _current_request_id.reset(token)

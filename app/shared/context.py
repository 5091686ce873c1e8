"""Request context management using contextvars.

Provides async-safe storage for request-scoped data: the request id (set
by the request-id middleware, read by logging) and the authenticated user
id (set by the auth dependency).

Usage:
    set_request_id("3f2b...")
    request_id = get_request_id()
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    """Set the request id for this request; return a token for reset_request_id()."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request."""
    return _request_id.get()


def set_current_user(user_id: str | None) -> None:
    """Set the authenticated user id. Call after authentication."""
    _current_user_id.set(user_id)


def get_current_actor_id() -> str | None:
    """Return the current user ID, or None if not authenticated."""
    return _current_user_id.get()

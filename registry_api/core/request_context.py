"""Request correlation ID carried through a ContextVar for log lines."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

_MAX_REQUEST_ID_LENGTH = 128

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Get the correlation ID of the request being handled (if any)."""

    return _request_id_var.get()


def resolve_request_id(candidate: str | None) -> str:
    """Accept a client supplied ID when it is safe to log, else mint one."""

    if candidate:
        candidate = candidate.strip()
        if (
            candidate
            and len(candidate) <= _MAX_REQUEST_ID_LENGTH
            and "\n" not in candidate
            and "\r" not in candidate
        ):
            return candidate
    return str(uuid4())


@contextmanager
def request_id_context(request_id: str | None):
    """Bind the correlation ID for the duration of the block."""

    token = _request_id_var.set(request_id)
    try:
        yield
    finally:
        _request_id_var.reset(token)

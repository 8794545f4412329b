"""Context propagation for structured logging.

Fields pushed here (job id, unit guid, operation name) are merged into every
log record emitted inside the scope by :class:`ContextualFilter`. Storage uses
``contextvars`` so nested scopes unwind correctly.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional


LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return LogContextVar.get().copy()


def push_log_context(**fields) -> Token:
    """Merge ``fields`` into the active context.

    Returns:
        Token for :func:`pop_log_context`

    Example:
        >>> token = push_log_context(job_id="job-42", guid="tu-1")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context that was active before the matching push."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every context field (mainly for tests)."""
    LogContextVar.set({})


class log_context:
    """Scoped logging context, restored on exit even when an exception escapes.

    Example:
        >>> with log_context(job_id="job-42", guid="tu-1"):
        ...     logger.info("Classifying unit")  # includes job_id and guid
    """

    def __init__(self, **fields):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False

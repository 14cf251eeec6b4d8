"""Error taxonomy shared by every bounded context.

Three outcomes are distinguished by callers:

- ``DomainError`` subclasses (``ConflictError``, ``NotFoundError``) are
  expected, client-correctable business errors.
- ``InfrastructureError`` wraps any unexpected failure coming from storage,
  the external catalog or the message broker.  The original exception is
  kept on ``cause`` for diagnosis.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional


class DomainError(Exception):
    """Base class for business errors the caller can correct."""


class ConflictError(DomainError):
    """A unique business key is already taken."""


class NotFoundError(DomainError):
    """A lookup found nothing where existence was required."""


class InfrastructureError(Exception):
    """An unexpected failure that cannot be recovered locally."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        if cause is not None:
            message = f"{message}: {cause!r}"
        super().__init__(message)
        self.cause = cause


@contextmanager
def infrastructure_guard(message: str) -> Iterator[None]:
    """Wrap unexpected exceptions raised inside the block.

    Domain errors and already wrapped infrastructure errors pass through
    unchanged, so an enclosing caller never re-classifies them.
    """
    try:
        yield
    except (DomainError, InfrastructureError):
        raise
    except Exception as exc:
        raise InfrastructureError(message, cause=exc) from exc

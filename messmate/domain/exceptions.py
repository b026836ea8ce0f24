"""Mini README: Error taxonomy raised by the MessMate ledger.

Lookup failures also subclass ``KeyError`` and validation failures also
subclass ``ValueError`` so callers may catch either the specific error or
the builtin family. Every error except ``PersistenceFailedError`` is raised
before any state is touched.
"""

from __future__ import annotations

from typing import Any, Optional


class MessMateError(Exception):
    """Base exception for the ledger domain."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0]) if self.args else self.__class__.__name__


class UnknownCustomerError(MessMateError, KeyError):
    """Referenced customer id does not exist."""


class UnknownPlanError(MessMateError, KeyError):
    """Referenced plan id does not exist."""


class UnknownMenuItemError(MessMateError, KeyError):
    """Referenced menu item id does not exist."""


class InvalidAmountError(MessMateError, ValueError):
    """Monetary amount must be strictly positive."""


class InvalidDurationError(MessMateError, ValueError):
    """Break duration must be a positive number of days."""


class InvalidQuantityError(MessMateError, ValueError):
    """Meal quantity must be a positive integer."""


class InvalidDescriptionError(MessMateError, ValueError):
    """Ledger descriptions cannot be blank."""


class InvalidCredentialsError(MessMateError):
    """Username and PIN do not match a known user."""


class PersistenceFailedError(MessMateError):
    """The in-memory change stands but could not be written to storage."""

    def __init__(self, message: str, *, result: Optional[Any] = None) -> None:
        super().__init__(message)
        self.result = result

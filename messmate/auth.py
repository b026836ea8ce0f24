"""Mini README: Operator login lookup.

``authenticate`` checks a username/PIN pair against the static user list.
Usernames match case-insensitively; nothing here is hardened against
brute force.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .domain.catalog import DEFAULT_USERS
from .domain.exceptions import InvalidCredentialsError
from .domain.models import User
from .logging_utils import get_logger

LOGGER = get_logger(__name__)


def authenticate(username: str, pin: str, users: Optional[Iterable[User]] = None) -> User:
    """Return the matching user or raise ``InvalidCredentialsError``."""

    candidates = DEFAULT_USERS if users is None else users
    wanted = username.strip().lower()
    for user in candidates:
        if user.username.lower() == wanted and user.pin == pin:
            LOGGER.info("User %s logged in as %s", user.username, user.role.value)
            return user
    LOGGER.warning("Rejected login attempt for '%s'", username)
    raise InvalidCredentialsError("Wrong name or PIN")

"""
Users API - User Store (Resource Management Core)
==================================================

What:  The exclusive owner of all user records and of identifier allocation.
Why:   Every read and write goes through one object with one lock, so no
       caller can observe a half-applied change or reach the collection directly.
How:   An insertion-ordered dict maps id → User. A monotonic counter hands out
       ids. One re-entrant lock guards the dict and the counter together.
Who:   Created by create_app() and attached to app.state; called by routes.

Operations:
    list_all()                     → ordered snapshot of every user
    get_by_id(id)                  → one user, or NotFoundError
    create(name, email)            → new user with the next id, or ValidationError
    update(id, name=None, email=None)
                                   → updated user, or NotFoundError / ValidationError
    delete(id)                     → None, or NotFoundError

Identifier allocation:
    _next_id starts one past the highest seed id and is incremented exactly
    once per successful create. It is never derived from the collection size,
    so deleting the last user and creating a new one cannot reuse its id.

Concurrency:
    The lock is a threading.RLock. No operation awaits or does I/O while
    holding it, so it is correct both for `async def` handlers on the event
    loop and for sync handlers running in FastAPI's threadpool. Validation
    runs before any mutation, so a failed call leaves the store untouched.
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from users_api.exceptions import NotFoundError, ValidationError
from users_api.models.user import User

logger = logging.getLogger(__name__)

# Seed data used when settings.seed_demo_users is enabled
DEMO_USERS = (
    User(id=1, name="John Doe", email="john.doe@example.com"),
    User(id=2, name="Jane Smith", email="jane.smith@example.com"),
)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class UserStore:
    """
    In-memory, thread-safe collection of uniquely identified users.

    Args:
        seed: Users to preload, in listing order. Ids must be positive and
              distinct; the counter starts one past the highest of them.

    Raises:
        ValueError: A seed id is duplicated or not a positive integer.
    """

    def __init__(self, seed: Iterable[User] = ()):
        self._lock = threading.RLock()
        self._users: Dict[int, User] = {}

        for user in seed:
            if user.id < 1:
                raise ValueError(f"Seed user id must be positive, got {user.id}")
            if user.id in self._users:
                raise ValueError(f"Duplicate seed user id {user.id}")
            self._users[user.id] = user

        self._next_id = max(self._users, default=0) + 1
        logger.debug(
            "UserStore initialized with %d user(s); next id %d",
            len(self._users),
            self._next_id,
        )

    # ══════════════════════════════════════════════════════════════════════
    # Reads
    # ══════════════════════════════════════════════════════════════════════

    def list_all(self) -> List[User]:
        """
        Return every user in insertion order.

        The list is a new object on every call. Users are frozen, so nothing
        the store does afterwards can change what this list contains.
        """
        with self._lock:
            return list(self._users.values())

    def get_by_id(self, user_id: int) -> User:
        """
        Return the user with the given id.

        Raises:
            NotFoundError: No user with that id exists (never did, or was deleted)
        """
        with self._lock:
            return self._require(user_id)

    def count(self) -> int:
        """Number of users currently held."""
        with self._lock:
            return len(self._users)

    # ══════════════════════════════════════════════════════════════════════
    # Writes
    # ══════════════════════════════════════════════════════════════════════

    def create(self, name: Optional[str], email: Optional[str]) -> User:
        """
        Validate, allocate the next id, and append a new user.

        Both fields are required. `None`, the empty string, and whitespace-only
        strings all count as missing; every missing field is reported at once.

        Args:
            name:  Display name
            email: Email address

        Returns:
            The stored User, including its assigned id

        Raises:
            ValidationError: name and/or email missing (`fields` lists which)
        """
        missing = [
            field
            for field, value in (("name", name), ("email", email))
            if _is_blank(value)
        ]
        if missing:
            logger.debug("Rejected create: missing %s", missing)
            raise ValidationError(fields=missing)

        # Allocation and insertion happen under one lock acquisition so two
        # concurrent creates can never be handed the same id.
        with self._lock:
            user = User(id=self._next_id, name=name, email=email)
            self._users[user.id] = user
            self._next_id += 1

        logger.info("Created user %d", user.id)
        return user

    def update(
        self,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """
        Apply a partial update to an existing user.

        Only supplied fields change. `None` means "not supplied" and keeps the
        previous value; a supplied but blank field is rejected. The user keeps
        its id and its position in list_all().

        Existence is checked first, so updating a missing id with blank fields
        reports NotFoundError rather than ValidationError.

        Returns:
            The updated User

        Raises:
            NotFoundError:   No user with that id exists
            ValidationError: A supplied field is empty
        """
        with self._lock:
            current = self._require(user_id)

            invalid = [
                field
                for field, value in (("name", name), ("email", email))
                if value is not None and not value.strip()
            ]
            if invalid:
                logger.debug("Rejected update of user %d: empty %s", user_id, invalid)
                raise ValidationError(fields=invalid)

            changes = {}
            if name is not None:
                changes["name"] = name
            if email is not None:
                changes["email"] = email

            updated = replace(current, **changes)
            # Reassigning an existing key keeps its insertion position
            self._users[user_id] = updated

        logger.info("Updated user %d (%s)", user_id, ", ".join(changes) or "no changes")
        return updated

    def delete(self, user_id: int) -> None:
        """
        Remove a user. Its id is retired and never handed out again.

        Raises:
            NotFoundError: No user with that id exists
        """
        with self._lock:
            self._require(user_id)
            del self._users[user_id]

        logger.info("Deleted user %d", user_id)

    # ══════════════════════════════════════════════════════════════════════
    # Internals
    # ══════════════════════════════════════════════════════════════════════

    def _require(self, user_id: int) -> User:
        # Caller must hold self._lock
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return user


def build_default_store(seed_demo_users: bool = True) -> UserStore:
    """Create the store used by the application at startup."""
    return UserStore(seed=DEMO_USERS if seed_demo_users else ())

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict

from common.errors import Conflict, NotFound

logger = logging.getLogger("user_service")


@dataclass(frozen=True)
class User:
    name: str
    email: str
    age: int = 0

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email, "age": self.age}


class UserStore:
    """
    In-memory user directory keyed by email.

    Every operation holds the same lock, so two concurrent adds for one
    email cannot both pass the existence check.
    """

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def add_user(self, user: User) -> None:
        with self._lock:
            if user.email in self._users:
                logger.warning(f"user '{user.email}' already exists")
                raise Conflict("user already exists")
            self._users[user.email] = user
        logger.info(f"user added: {user.email}")

    def get_user(self, email: str) -> User:
        with self._lock:
            user = self._users.get(email)
        if user is None:
            raise NotFound("user not found")
        return user

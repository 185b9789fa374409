from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from library_core.library import LibraryManager


class Observer(ABC):
    """Anything that wants to hear about catalog changes."""

    @abstractmethod
    def notify(self, message: str) -> None:
        pass


class User(Observer):
    """A library member. Constructing one does not subscribe it anywhere."""

    def __init__(self, user_id: str, email: str) -> None:
        self.user_id = user_id
        self.email = email
        self.inbox: List[str] = []

    def __repr__(self) -> str:
        return f"User(user_id={self.user_id!r}, email={self.email!r})"

    def notify(self, message: str) -> None:
        self.inbox.append(message)
        print(f"User {self.user_id} notified: {message}")

    @classmethod
    def register(cls, user_id: str, email: str, library: Optional["LibraryManager"] = None) -> "User":
        """Create a user and register it with ``library`` (the shared manager by default)."""
        if library is None:
            from library_core.library import LibraryManager
            library = LibraryManager.get_instance()
        user = cls(user_id, email)
        library.register_user(user)
        return user

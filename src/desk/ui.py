"""User interface collaborator port.

The core never renders anything. It reports user-facing outcomes through
notify() and requests page changes through navigate(); the presentation
layer decides how to show them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

LOGIN_PATH = "/auth/login"


class NoticeLevel(str, Enum):
    """Severity of a user-facing notice."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Notice:
    """A toast-style message for the user."""

    level: NoticeLevel
    message: str


class UserInterface(ABC):
    """Capabilities the presentation layer exposes to the core."""

    @abstractmethod
    def notify(self, level: NoticeLevel, message: str) -> None:
        """Show a transient notice."""
        ...

    @abstractmethod
    def navigate(self, path: str) -> None:
        """Move the user to another page."""
        ...

    def success(self, message: str) -> None:
        self.notify(NoticeLevel.SUCCESS, message)

    def error(self, message: str) -> None:
        self.notify(NoticeLevel.ERROR, message)


class RecordingInterface(UserInterface):
    """Buffers notices and navigation requests until a client collects them.

    Used by the HTTP surface: each response drains what accumulated while
    the request was handled.
    """

    def __init__(self) -> None:
        self._notices: list[Notice] = []
        self._navigation: str | None = None

    def notify(self, level: NoticeLevel, message: str) -> None:
        self._notices.append(Notice(level=level, message=message))

    def navigate(self, path: str) -> None:
        self._navigation = path

    @property
    def notices(self) -> list[Notice]:
        return list(self._notices)

    @property
    def navigation(self) -> str | None:
        return self._navigation

    def drain(self) -> tuple[list[Notice], str | None]:
        """Return and clear buffered notices and the pending navigation."""
        notices, navigation = self._notices, self._navigation
        self._notices = []
        self._navigation = None
        return notices, navigation

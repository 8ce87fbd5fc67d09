"""Session lifecycle: forced exit on expiry and user-initiated logout."""

from collections.abc import Iterable
from typing import Protocol

from desk.backend.client import BackendClient
from desk.exceptions import DeskError
from desk.logging import get_logger
from desk.ui import LOGIN_PATH, UserInterface

logger = get_logger(__name__)


class Resettable(Protocol):
    """Per-user state that must not outlive the session."""

    def reset(self) -> None: ...


def expire_session(ui: UserInterface) -> None:
    """Tell the user the session is gone and send them to the login page."""
    logger.warning("session_expired")
    ui.error("Session expired. Please login again.")
    ui.navigate(LOGIN_PATH)


class Session:
    """User session operations backed by the marketplace backend.

    Args:
        backend: Receives the logout call.
        ui: Collaborator for notices and the login redirect.
        local_state: Components holding per-user state (favorites, snapshots,
                     chart selection, purchase workflow); all are reset on logout.
    """

    def __init__(
        self,
        backend: BackendClient,
        ui: UserInterface,
        local_state: Iterable[Resettable] = (),
    ) -> None:
        self._backend = backend
        self._ui = ui
        self._local_state = list(local_state)

    async def logout(self) -> bool:
        """End the session. Local state is cleared and the user lands on the
        login page whatever the backend answers.

        Returns:
            True if the backend confirmed the logout.
        """
        try:
            await self._backend.logout()
        except DeskError as e:
            logger.warning("logout_failed", error=str(e))
            self._ui.error("Logout failed")
            return False
        else:
            logger.info("logged_out")
            self._ui.success("Logged out successfully")
            return True
        finally:
            self._clear_local_state()
            self._ui.navigate(LOGIN_PATH)

    def _clear_local_state(self) -> None:
        for component in self._local_state:
            component.reset()
        logger.debug("local_state_cleared", components=len(self._local_state))

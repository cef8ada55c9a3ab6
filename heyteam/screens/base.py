import logging
from collections.abc import Awaitable
from typing import Optional, TypeVar

from ..context import AppContext
from ..errors import HeyTeamError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Screen:
    """Common loading flags and the error boundary"""

    def __init__(self, context: AppContext):
        self.context = context
        self.loading = False
        self.refreshing = False

    @property
    def toasts(self):
        return self.context.toasts

    async def guard(self, action: Awaitable[T], fallback_message: str) -> tuple[bool, Optional[T]]:
        """
        Await action, turning any HeyTeamError into an error toast.

        Returns:
            (True, result) on success, (False, None) when action raised
        """
        try:
            return True, await action
        except HeyTeamError as e:
            logger.warning(f"⚠️ {type(self).__name__}: {e.message}")
            self.toasts.error(e.message or fallback_message)
            return False, None

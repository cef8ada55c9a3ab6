"""
App-session context

Created once at startup and handed to every screen explicitly: the API
client, the session, the toast centre, the theme and the navigator.
"""

import logging
import time
from typing import Callable, Optional

from pydantic import BaseModel

from . import config
from .api_client import ApiClient
from .session import Session

logger = logging.getLogger(__name__)

TOAST_TYPES = ("success", "error", "info", "warning")


class Toast(BaseModel):
    """A transient notice"""

    message: str
    type: str = "info"
    duration_ms: int = config.TOAST_DURATION_MS
    shown_at: float = 0.0

    def expired(self, now: Optional[float] = None) -> bool:
        now = time.monotonic() if now is None else now
        return (now - self.shown_at) * 1000 >= self.duration_ms


class ToastCenter:
    """Queue of notices shown to the user"""

    def __init__(self, duration_ms: Optional[int] = None):
        self.duration_ms = duration_ms or config.TOAST_DURATION_MS
        self.toasts: list[Toast] = []
        self._listeners: list[Callable[[Toast], None]] = []

    def subscribe(self, listener: Callable[[Toast], None]) -> None:
        self._listeners.append(listener)

    def show(self, message: str, type: str = "info", duration_ms: Optional[int] = None) -> Toast:
        if type not in TOAST_TYPES:
            raise ValueError(f"Unknown toast type: {type}")
        self.prune()
        toast = Toast(
            message=message,
            type=type,
            duration_ms=duration_ms or self.duration_ms,
            shown_at=time.monotonic(),
        )
        self.toasts.append(toast)
        log = logger.warning if type == "error" else logger.info
        log(f"🔔 [{type}] {message}")
        for listener in self._listeners:
            listener(toast)
        return toast

    def success(self, message: str) -> Toast:
        return self.show(message, "success")

    def error(self, message: str) -> Toast:
        return self.show(message, "error")

    def info(self, message: str) -> Toast:
        return self.show(message, "info")

    def warning(self, message: str) -> Toast:
        return self.show(message, "warning")

    @property
    def latest(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None

    def prune(self, now: Optional[float] = None) -> None:
        """Drop toasts whose display time has run out"""
        self.toasts = [t for t in self.toasts if not t.expired(now)]

    def active(self, now: Optional[float] = None) -> list[Toast]:
        self.prune(now)
        return list(self.toasts)

    def clear(self) -> None:
        self.toasts.clear()


LIGHT_PALETTE = {
    "background": "#ffffff",
    "text": "#111827",
    "textSecondary": "#4b5563",
    "primary": "#0db2b5",
    "success": "#059669",
    "error": "#dc2626",
    "warning": "#d97706",
}

DARK_PALETTE = {
    "background": "#0f172a",
    "text": "#f9fafb",
    "textSecondary": "#9ca3af",
    "primary": "#22d3d6",
    "success": "#34d399",
    "error": "#f87171",
    "warning": "#fbbf24",
}

MESSAGE_STATUS_COLORS = {"sent": "primary", "delivered": "success", "failed": "error"}


class Theme:
    """Light or dark palette"""

    def __init__(self, mode: str = "light"):
        self.mode = "dark" if mode == "dark" else "light"

    @property
    def colors(self) -> dict[str, str]:
        return DARK_PALETTE if self.mode == "dark" else LIGHT_PALETTE

    def toggle(self) -> None:
        self.mode = "light" if self.mode == "dark" else "dark"

    def message_status_color(self, status: str) -> str:
        return self.colors[MESSAGE_STATUS_COLORS.get(status, "textSecondary")]


class Navigator:
    """Stack of visited routes"""

    def __init__(self, initial: str = "/"):
        self.stack = [initial]

    @property
    def current(self) -> str:
        return self.stack[-1]

    def push(self, route: str) -> None:
        self.stack.append(route)

    def back(self) -> str:
        if len(self.stack) > 1:
            self.stack.pop()
        return self.current


class AppContext:
    """Everything a screen needs from the running app"""

    def __init__(
        self,
        client: ApiClient,
        toasts: Optional[ToastCenter] = None,
        theme: Optional[Theme] = None,
        navigator: Optional[Navigator] = None,
    ):
        self.client = client
        self.toasts = toasts or ToastCenter()
        self.theme = theme or Theme()
        self.navigator = navigator or Navigator()

    @property
    def session(self) -> Session:
        return self.client.session

    async def aclose(self) -> None:
        await self.client.aclose()

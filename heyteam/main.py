import logging
from typing import Optional

import httpx

from . import config
from .api_client import ApiClient
from .context import AppContext, Theme
from .session import Session


def configure_logging(level: Optional[str] = None) -> None:
    """Root logging setup shared by every entry point"""
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Reduce verbosity of third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_context(
    session: Optional[Session] = None,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    theme_mode: str = "light",
) -> AppContext:
    """Build the app-session context once at startup"""
    session = session or Session.from_config()
    client = ApiClient(session=session, base_url=base_url, transport=transport)
    context = AppContext(client=client, theme=Theme(theme_mode))
    logging.getLogger(__name__).info(
        f"🚀 HeyTeam client ready for {client.base_url} "
        f"(user type: {session.user_type or 'unknown'})"
    )
    return context

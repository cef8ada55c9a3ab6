"""
Session credentials for the portal API

Holds the cookie and bearer token issued by the login flow plus the kind of
user signed in. Login itself happens elsewhere; this only carries the result.
"""

import logging
from typing import Optional

from . import config

logger = logging.getLogger(__name__)

USER_TYPES = ("admin", "contact")


class Session:
    """Credentials attached to every API request"""

    def __init__(
        self,
        token: Optional[str] = None,
        cookie: Optional[str] = None,
        user_type: Optional[str] = None,
        push_token: Optional[str] = None,
    ):
        if user_type is not None and user_type not in USER_TYPES:
            raise ValueError(f"Unknown user type: {user_type}")
        self.token = token
        self.cookie = cookie
        self.user_type = user_type
        self.push_token = push_token

    @classmethod
    def from_config(cls) -> "Session":
        """Build a session from HEYTEAM_* environment settings"""
        user_type = config.USER_TYPE if config.USER_TYPE in USER_TYPES else None
        if config.USER_TYPE and user_type is None:
            logger.warning(f"⚠️ Ignoring unknown HEYTEAM_USER_TYPE: {config.USER_TYPE}")
        return cls(token=config.SESSION_TOKEN, cookie=config.SESSION_COOKIE, user_type=user_type)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token or self.cookie)

    @property
    def is_contact(self) -> bool:
        return self.user_type == "contact"

    def auth_headers(self) -> dict[str, str]:
        """Headers carrying the session credentials"""
        headers = {}
        if self.cookie:
            headers["Cookie"] = self.cookie
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def clear(self) -> None:
        """Forget every credential (sign out)"""
        self.token = None
        self.cookie = None
        self.user_type = None
        self.push_token = None
        logger.info("🔒 Session cleared")

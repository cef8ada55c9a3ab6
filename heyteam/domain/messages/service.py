"""Message history service"""

import logging
import re

from ...api_client import ApiClient, parse_models
from ...errors import ApiError, NetworkError, NotFoundError
from .schemas import Message, MessageSegment

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"(https?://\S+|www\.\S+)", re.IGNORECASE)


class MessageService:
    """Service layer for the message history views"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_history(self) -> list[Message]:
        """Every message of the organization, newest first as the backend sends them"""
        try:
            data = await self.client.get("/api/messages/history")
            return parse_models(Message, data)
        except (ApiError, NotFoundError) as e:
            raise NetworkError(e.message or "Failed to load messages") from e


def filter_messages(messages: list[Message], name: str = "", content: str = "") -> list[Message]:
    """Messages whose contact name and content contain the search terms (case-insensitive)"""
    name = name.lower()
    content = content.lower()
    return [
        m for m in messages if name in m.contactName.lower() and content in m.content.lower()
    ]


def split_links(content: str) -> list[MessageSegment]:
    """
    Split message text into plain and link segments.

    Links starting with www. are given an https:// scheme.
    """
    segments = []
    last_index = 0
    for match in URL_PATTERN.finditer(content):
        if match.start() > last_index:
            segments.append(MessageSegment(text=content[last_index : match.start()]))

        link = match.group(0)
        url = link if link.lower().startswith("http") else f"https://{link}"
        segments.append(MessageSegment(text=link, is_link=True, url=url))
        last_index = match.end()

    if last_index < len(content):
        segments.append(MessageSegment(text=content[last_index:]))
    return segments

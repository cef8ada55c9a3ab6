"""Admin message history screen"""

from ..context import AppContext
from ..domain.messages.schemas import Message
from ..domain.messages.service import MessageService, filter_messages, split_links
from ..shared.formatting import format_timestamp
from .base import Screen


class MessageHistoryScreen(Screen):
    """Read-only list of inbound and outbound messages with search"""

    def __init__(self, context: AppContext):
        super().__init__(context)
        self.service = MessageService(context.client)
        self.messages: list[Message] = []
        self.search_name = ""
        self.search_content = ""

    async def load(self) -> None:
        self.loading = True
        try:
            ok, messages = await self.guard(self.service.get_history(), "Failed to load messages")
        finally:
            self.loading = False
        if ok:
            self.messages = messages

    async def refresh(self) -> None:
        self.refreshing = True
        try:
            await self.load()
        finally:
            self.refreshing = False

    @property
    def visible(self) -> list[Message]:
        return filter_messages(self.messages, self.search_name, self.search_content)

    def render(self) -> list[dict]:
        theme = self.context.theme
        return [
            {
                "id": m.id,
                "contact": m.contactName,
                "job": m.jobName,
                "direction": m.direction,
                "status": m.status,
                "status_color": theme.message_status_color(m.status),
                "timestamp": format_timestamp(m.createdAt),
                "segments": [s.model_dump() for s in split_links(m.content)],
            }
            for m in self.visible
        ]

from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from ..llm.types import ChatMessage


class ChatMemoryBuffer(BaseModel):
    """
    Ordered, unbounded log of chat messages.

    All mutations happen in place. ``get`` returns a snapshot list, so callers
    can iterate it while the buffer keeps growing.
    """

    chat_history: List[ChatMessage] = Field(default_factory=list)

    @classmethod
    def from_messages(cls, messages: Optional[Iterable[ChatMessage]] = None) -> 'ChatMemoryBuffer':
        return cls(chat_history=list(messages or []))

    def get(self) -> List[ChatMessage]:
        return list(self.chat_history)

    def get_all(self) -> List[ChatMessage]:
        return self.get()

    def put(self, message: ChatMessage) -> None:
        self.chat_history.append(message)

    def set(self, messages: Iterable[ChatMessage]) -> None:
        self.chat_history[:] = list(messages)

    def reset(self) -> None:
        self.chat_history.clear()

    def __len__(self) -> int:
        return len(self.chat_history)

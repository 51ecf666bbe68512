"""Abstract interfaces for transport-agnostic bot clients."""
from abc import ABC, abstractmethod


class TypingIndicator(ABC):
    """Shows a 'working on it' state in one chat while a reply is prepared."""

    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def stop(self) -> None: ...


class BotClient(ABC):
    @abstractmethod
    def run(self) -> None:
        """Block serving incoming voice notes until the process is stopped."""

    @abstractmethod
    async def send_message(self, to: str, text: str) -> bool:
        """Send text to a chat id. Returns False instead of raising on failure."""

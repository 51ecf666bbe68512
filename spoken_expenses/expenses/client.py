"""ExpenseExtractor — abstract base for audio → expense backends."""
from abc import ABC, abstractmethod

from spoken_expenses.audio.encoder import AudioClip
from spoken_expenses.expenses.models import ExpenseResponse


class ExpenseExtractor(ABC):
    name: str = ""
    model: str = ""

    @abstractmethod
    async def process_audio(self, audio: AudioClip) -> ExpenseResponse:
        """Extract expenses from a spoken clip. Raises after retries are exhausted."""
        ...

from abc import ABC, abstractmethod


class INotifier(ABC):
    """Out-of-band notification channel (e.g. email)"""

    @abstractmethod
    async def send(self, destination: str, message: str) -> None:
        """Deliver a one-shot message. May raise; callers treat it as best-effort."""
        pass

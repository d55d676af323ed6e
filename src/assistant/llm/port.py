"""Language model port (abstract interface)."""

from abc import ABC, abstractmethod


class LanguageModelError(Exception):
    """No configured model produced a reply."""


class LanguageModel(ABC):
    @abstractmethod
    def complete(self, system_prompt: str, user_message: str) -> str:
        """Return the assistant's reply to a single user message."""
        ...

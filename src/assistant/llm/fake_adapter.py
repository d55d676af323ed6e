"""Scripted language model for development and testing."""

from assistant.llm.port import LanguageModel, LanguageModelError


class FakeLanguageModel(LanguageModel):
    def __init__(self, reply: str = "Try our Big Mac!") -> None:
        self.reply = reply
        self.should_fail = False
        self.calls: list[dict] = []

    def configure(self, reply: str | None = None, should_fail: bool = False) -> None:
        if reply is not None:
            self.reply = reply
        self.should_fail = should_fail

    def complete(self, system_prompt: str, user_message: str) -> str:
        self.calls.append({"system_prompt": system_prompt, "user_message": user_message})
        if self.should_fail:
            raise LanguageModelError("All models failed")
        return self.reply

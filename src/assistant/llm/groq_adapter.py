"""Groq chat completions through the OpenAI-compatible client.

Models are tried in order until one answers; a retired or overloaded model
only costs a warning.
"""

import structlog
from openai import OpenAI, OpenAIError

from assistant.llm.port import LanguageModel, LanguageModelError

logger = structlog.get_logger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODELS = (
    "llama-3.1-8b-instant",
    "llama-3.3-70b-versatile",
    "mixtral-8x7b-32768",
)


class GroqLanguageModel(LanguageModel):
    def __init__(self, api_key: str, models=DEFAULT_MODELS, base_url: str = GROQ_BASE_URL, client=None) -> None:
        self.models = tuple(models)
        self.client = client or OpenAI(base_url=base_url, api_key=api_key)

    def complete(self, system_prompt: str, user_message: str) -> str:
        for model in self.models:
            try:
                completion = self.client.chat.completions.create(
                    model=model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_message},
                    ],
                    temperature=0.7,
                    max_tokens=500,
                )
            except OpenAIError as exc:
                logger.warning("Model failed, trying next", model=model, error=str(exc))
                continue

            content = completion.choices[0].message.content if completion.choices else None
            logger.info("Model replied", model=model)
            return content or "I apologize, but I encountered an error. Please try again."

        raise LanguageModelError(f"All models failed: {', '.join(self.models)}")

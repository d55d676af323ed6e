"""Language model factory.

get_language_model() returns the Groq adapter when GROQ_API_KEY is set and
None otherwise; callers fall back to keyword replies without a model.
GROQ_MODELS overrides the model list (comma-separated).
"""

import os

from assistant.llm.port import LanguageModel

_current_model: LanguageModel | None = None
_overridden = False


def get_language_model() -> LanguageModel | None:
    global _current_model
    if _overridden or _current_model is not None:
        return _current_model

    api_key = os.environ.get("GROQ_API_KEY")
    if not api_key:
        return None

    from assistant.llm.groq_adapter import DEFAULT_MODELS, GroqLanguageModel

    configured = os.environ.get("GROQ_MODELS", "")
    models = tuple(name.strip() for name in configured.split(",") if name.strip()) or DEFAULT_MODELS
    _current_model = GroqLanguageModel(api_key=api_key, models=models)
    return _current_model


def set_language_model(model: LanguageModel | None) -> None:
    """Override the active model (useful for tests). None disables the model."""
    global _current_model, _overridden
    _current_model = model
    _overridden = True


def reset_language_model() -> None:
    """Reset to environment-driven selection."""
    global _current_model, _overridden
    _current_model = None
    _overridden = False

"""Build the generative fallback provider from config and environment."""

import os

from .base import LLMError, LLMProvider

# Both names are honoured by google-genai; the first one set wins
GEMINI_KEY_ENV_VARS = ("GOOGLE_API_KEY", "GEMINI_API_KEY")


def _env_key() -> str | None:
    for var in GEMINI_KEY_ENV_VARS:
        value = os.getenv(var)
        if value:
            return value
    return None


def _auto_detect_provider(api_key: str | None = None) -> str:
    """Pick a provider from the key shape, else from the environment."""
    if api_key and api_key.startswith("AI"):
        return "gemini"
    if _env_key():
        return "gemini"
    raise LLMError("No LLM API key found. Set GOOGLE_API_KEY or GEMINI_API_KEY")


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
) -> LLMProvider:
    """Create the provider behind GenerativeResponder.

    Args:
        provider: "gemini", "auto", or None (auto-detect)
        api_key: Explicit API key (overrides env vars)
        model: Model name (None = provider default)
        client: Pre-built SDK client for tests
    """
    name = provider or "auto"
    if name == "auto":
        name = _auto_detect_provider(api_key)
    if name != "gemini":
        raise LLMError(f"Unknown provider: {name}. Use: gemini")

    from .providers.gemini import GeminiProvider

    if not api_key and client is None:
        api_key = _env_key()
    return GeminiProvider(api_key=api_key, model=model, client=client)

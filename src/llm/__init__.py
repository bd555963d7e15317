"""LLM provider abstraction and the generative fallback responder."""

from .base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError
from .factory import create_llm_provider
from .responder import GenerativeResponder

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "GenerativeResponder",
    "LLMError",
    "LLMRateLimitError",
    "LLMAuthError",
]

"""Google Gemini LLM provider using google-genai SDK."""

from ..base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError

DEFAULT_MODEL = "gemini-1.5-flash"


def _handle_gemini_error(e: Exception):
    err_str = str(e).lower()
    if "api key" in err_str or "authentication" in err_str or "permission" in err_str:
        raise LLMAuthError(f"Gemini auth failed: {e}") from e
    if ("resource" in err_str and "exhausted" in err_str) or "rate" in err_str or "quota" in err_str:
        raise LLMRateLimitError(f"Gemini rate limit: {e}") from e
    raise LLMError(f"Gemini API error: {e}") from e


class GeminiProvider(LLMProvider):
    """Google Gemini provider (google-genai SDK)."""

    provider_name = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        self.model_name = model or DEFAULT_MODEL
        self._api_key = api_key

        if client:
            self.client = client
            return

        try:
            from google import genai
        except ImportError:
            raise LLMError(
                "google-genai package not installed. Run: pip install google-genai"
            )

        self.client = genai.Client(api_key=api_key)

    def generate(
        self, messages: list[dict], system: str | None = None, max_tokens: int = 1000
    ) -> str:
        try:
            from google.genai import types

            response = self.client.models.generate_content(
                model=self.model_name,
                contents=[self._to_content(types, m) for m in messages],
                config=types.GenerateContentConfig(
                    system_instruction=system,
                    max_output_tokens=max_tokens,
                ),
            )
        except LLMError:
            raise
        except Exception as e:
            _handle_gemini_error(e)

        text = response.text
        if not text:
            raise LLMError("Gemini returned an empty response")
        return text

    @staticmethod
    def _to_content(types, message: dict):
        role = "model" if message.get("role") == "assistant" else "user"
        return types.Content(role=role, parts=[types.Part.from_text(text=message["content"])])

"""Tests for LLM factory and auto-detection."""

from unittest.mock import MagicMock, patch

import pytest

from llm import LLMError, create_llm_provider
from llm.factory import _auto_detect_provider


class TestAutoDetection:
    def test_detects_google_key(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "AIza-test")
        assert _auto_detect_provider() == "gemini"

    def test_detects_from_explicit_key(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        assert _auto_detect_provider("AIzaSyExample") == "gemini"

    def test_unrecognized_key_falls_back_to_env(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "AIza-test")
        assert _auto_detect_provider("sk-something") == "gemini"

    def test_no_keys_raises(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with pytest.raises(LLMError, match="No LLM API key found"):
            _auto_detect_provider()


class TestCreateProvider:
    def test_explicit_gemini_with_client(self):
        mock_client = MagicMock()
        provider = create_llm_provider(provider="gemini", client=mock_client)
        assert provider.provider_name == "gemini"
        assert provider.client is mock_client

    def test_unknown_provider_raises(self):
        with pytest.raises(LLMError, match="Unknown provider"):
            create_llm_provider(provider="claude", client=MagicMock())

    def test_auto_with_google_key(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "AIza-test")
        # Mock genai client to avoid real init
        with patch("google.genai.Client") as client_cls:
            provider = create_llm_provider()
            assert provider.provider_name == "gemini"
            client_cls.assert_called_once_with(api_key="AIza-test")

    def test_custom_model(self):
        provider = create_llm_provider(
            provider="gemini", client=MagicMock(), model="gemini-2.0-flash"
        )
        assert provider.model_name == "gemini-2.0-flash"

    def test_default_model(self):
        provider = create_llm_provider(provider="gemini", client=MagicMock())
        assert provider.model_name == "gemini-1.5-flash"

    def test_gemini_api_key_env(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "AIza-gemini")
        with patch("google.genai.Client") as client_cls:
            create_llm_provider()
            client_cls.assert_called_once_with(api_key="AIza-gemini")

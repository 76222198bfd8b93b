import pytest

from readiness_bot.ai_assistant.model_factory import ModelFactory, ModelProvider


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        ModelFactory.build_model(ModelProvider.GEMINI)


def test_local_provider_needs_no_key():
    model = ModelFactory.build_model(ModelProvider.OLLAMA, model_name="llama3")

    assert model.model == "llama3"


def test_explicit_key_and_client_overrides():
    model = ModelFactory.build_model(ModelProvider.OPENAI, api_key="sk-test", client_kwargs={"max_retries": 0})

    assert model.model == "gpt-4.1"

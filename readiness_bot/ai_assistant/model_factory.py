import enum
import os
from typing import Any, Optional

from agents import OpenAIChatCompletionsModel
from loguru import logger
from openai import AsyncOpenAI


class ModelProvider(enum.Enum):
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OLLAMA = "ollama"


class ModelFactory:
    """
    Builds chat-completions models for the remote recommendation advisor.

    Every provider is reached through an OpenAI-compatible endpoint, so one AsyncOpenAI
    client type covers all of them.
    """

    _DEFAULT_CONFIG = {
        ModelProvider.GEMINI: {
            "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
            "model_name": "gemini-2.0-flash",
            "api_key_env": "GEMINI_API_KEY",
        },
        ModelProvider.ANTHROPIC: {
            "base_url": "https://api.anthropic.com/v1/",
            "model_name": "claude-3-5-sonnet-latest",
            "api_key_env": "ANTHROPIC_API_KEY",
        },
        ModelProvider.OPENAI: {
            "base_url": None,
            "model_name": "gpt-4.1",
            "api_key_env": "OPENAI_API_KEY",
        },
        ModelProvider.OLLAMA: {
            "base_url": "http://localhost:11434/v1",
            "model_name": "qwen3:4b",
            "api_key_env": None,  # Local server, any non-empty key is accepted
        },
    }

    # The advisor falls back to local rules when a call fails
    _DEFAULT_CLIENT_KWARGS = {"timeout": 30.0, "max_retries": 1}

    @staticmethod
    def build_model(
        model_type: ModelProvider,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        base_url: Optional[str] = None,
        client_kwargs: Optional[dict[str, Any]] = None,
    ) -> OpenAIChatCompletionsModel:
        """
        Builds a model for the given provider.

        Args:
            model_type: The model provider.
            api_key: API key. If None, read from the provider's environment variable.
            model_name: Model name. If None, the provider default is used.
            base_url: Endpoint override. If None, the provider default is used.
            client_kwargs: Extra AsyncOpenAI constructor arguments (timeout, max_retries, ...).

        Returns:
            An OpenAIChatCompletionsModel bound to a configured AsyncOpenAI client.

        Raises:
            ValueError: If the provider is unknown or no API key can be resolved.
        """
        if model_type not in ModelFactory._DEFAULT_CONFIG:
            raise ValueError(f"Unsupported model type: {model_type}")

        config = ModelFactory._DEFAULT_CONFIG[model_type]

        api_key_env = config["api_key_env"]
        if api_key_env is None:
            resolved_api_key = api_key or model_type.value
        else:
            resolved_api_key = api_key or os.getenv(api_key_env)
        if not resolved_api_key:
            raise ValueError(
                f"API key for {model_type.value} not provided and environment variable '{api_key_env}' not set."
            )

        resolved_model_name = model_name or config["model_name"]
        resolved_base_url = base_url if base_url is not None else config["base_url"]
        client_args = {**ModelFactory._DEFAULT_CLIENT_KWARGS, **(client_kwargs or {})}

        logger.debug(
            f"Building {model_type.name} model {resolved_model_name} "
            f"(base URL: {resolved_base_url or 'default OpenAI'}, "
            f"key from {'argument' if api_key else 'environment'}, client kwargs: {client_args})"
        )

        client = AsyncOpenAI(api_key=resolved_api_key, base_url=resolved_base_url, **client_args)
        return OpenAIChatCompletionsModel(model=resolved_model_name, openai_client=client)

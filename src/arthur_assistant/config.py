"""
Settings and wiring.

``Settings.from_env()`` reads the environment (and a ``.env`` file when present),
``build_provider`` creates the SDK client once for the process and
``build_assistant`` wires registry, executor, loop and endpoint together.
"""

import os
from typing import Any, Callable, Literal, Mapping, Optional

from anthropic import AsyncAnthropic
from dotenv import find_dotenv, load_dotenv
from google import genai
from openai import AsyncOpenAI
from pydantic import BaseModel, Field, ValidationError

from arthur_assistant.api import ChatEndpoint
from arthur_assistant.catalog import build_instructions, build_registry
from arthur_assistant.core import ConfigurationError, HandlerToolExecutor, ModelProvider, OrchestrationLoop, get_logger
from arthur_assistant.providers import AnthropicProvider, GeminiProvider, OpenAIProvider
from arthur_assistant.providers.anthropic_api import DEFAULT_MODEL as ANTHROPIC_DEFAULT_MODEL
from arthur_assistant.providers.gemini import DEFAULT_MODEL as GEMINI_DEFAULT_MODEL

logger = get_logger(__name__)

OPENAI_DEFAULT_MODEL = "gpt-4o-mini"

_ENV_KEYS = {
    "provider": "ARTHUR_PROVIDER",
    "model": "ARTHUR_MODEL",
    "max_tokens": "ARTHUR_MAX_TOKENS",
    "temperature": "ARTHUR_TEMPERATURE",
    "max_rounds": "ARTHUR_MAX_ROUNDS",
    "tool_timeout": "ARTHUR_TOOL_TIMEOUT",
    "provider_max_retries": "ARTHUR_PROVIDER_MAX_RETRIES",
    "anthropic_api_key": "ANTHROPIC_API_KEY",
    "openai_api_key": "OPENAI_API_KEY",
    "openai_base_url": "OPENAI_BASE_URL",
}


class Settings(BaseModel):
    """
    Runtime configuration of the assistant.

    Attributes:
        provider: Which model vendor to use.
        model: Model name; each provider has its own default.
        max_tokens: Maximum tokens generated per round-trip.
        temperature: Sampling temperature, or None for the API default.
        max_rounds: Maximum tool dispatch rounds per request.
        tool_timeout: Timeout in seconds for a single tool call.
        provider_max_retries: Retries done by the SDK client itself.
        anthropic_api_key: Key for Anthropic.
        openai_api_key: Key for OpenAI or a compatible server.
        openai_base_url: Base URL of an OpenAI-compatible server.
        gemini_api_key: Key for Google Gemini.
    """

    provider: Literal["anthropic", "openai", "gemini"] = "anthropic"
    model: Optional[str] = None
    max_tokens: int = Field(default=4096, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_rounds: int = Field(default=10, ge=1)
    tool_timeout: float = Field(default=180.0, gt=0)
    provider_max_retries: int = Field(default=0, ge=0)
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    gemini_api_key: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Load settings from the environment.

        Args:
            environ: Mapping to read instead of ``os.environ``. No ``.env`` file is
                loaded when it is given.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        if environ is None:
            load_dotenv(find_dotenv())
            environ = os.environ

        values = {field: environ[key] for field, key in _ENV_KEYS.items() if environ.get(key)}
        gemini_key = environ.get("GOOGLE_API_KEY") or environ.get("GEMINI_API_KEY")
        if gemini_key:
            values["gemini_api_key"] = gemini_key

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid assistant settings: {e}") from e

    @property
    def model_name(self) -> str:
        if self.model:
            return self.model
        return {
            "anthropic": ANTHROPIC_DEFAULT_MODEL,
            "openai": OPENAI_DEFAULT_MODEL,
            "gemini": GEMINI_DEFAULT_MODEL,
        }[self.provider]


def build_provider(settings: Settings) -> ModelProvider[Any]:
    """
    Create the SDK client and the provider wrapping it.

    Raises:
        ConfigurationError: If the API key of the selected provider is missing.
    """
    common = {"model_name": settings.model_name, "max_tokens": settings.max_tokens, "temperature": settings.temperature}

    if settings.provider == "anthropic":
        if not settings.anthropic_api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY is not set.")
        client = AsyncAnthropic(api_key=settings.anthropic_api_key, max_retries=settings.provider_max_retries)
        provider: ModelProvider[Any] = AnthropicProvider(client, **common)
    elif settings.provider == "openai":
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set.")
        openai_client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            max_retries=settings.provider_max_retries,
        )
        provider = OpenAIProvider(openai_client, **common)
    else:
        if not settings.gemini_api_key:
            raise ConfigurationError("GOOGLE_API_KEY or GEMINI_API_KEY is not set.")
        provider = GeminiProvider(genai.Client(api_key=settings.gemini_api_key), **common)

    logger.info(f"Using {settings.provider} provider with model '{settings.model_name}'.")
    return provider


def build_assistant(
    settings: Optional[Settings] = None,
    handlers: Optional[Mapping[str, Callable[..., Any]]] = None,
    provider: Optional[ModelProvider[Any]] = None,
) -> ChatEndpoint:
    """
    Wire the organization assistant.

    Args:
        settings: Settings to use; loaded from the environment when None.
        handlers: Mapping of tool name to the callable performing it.
        provider: Provider to use instead of one built from the settings.

    Returns:
        The chat endpoint ready to serve requests.
    """
    settings = settings or Settings.from_env()
    registry = build_registry()
    executor = HandlerToolExecutor(registry, handlers or {}, tool_timeout=settings.tool_timeout)
    loop = OrchestrationLoop(
        provider=provider or build_provider(settings),
        registry=registry,
        executor=executor,
        instructions=build_instructions,
        max_rounds=settings.max_rounds,
    )
    return ChatEndpoint(loop)

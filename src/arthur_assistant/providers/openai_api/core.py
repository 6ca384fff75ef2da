from typing import Any, Dict, Iterable, Optional, Sequence, cast

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from arthur_assistant.core import ModelProvider, ProviderResponse, ToolSpec, Transcript, get_logger
from .adapter import OpenAIMessageAdapter

logger = get_logger(__name__)


class OpenAIProvider(ModelProvider[ChatCompletion]):
    """
    ModelProvider backed by OpenAI's Chat Completions API (or a compatible server).
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        max_tokens: int = 4096,
        temperature: Optional[float] = None,
    ):
        """
        Initializes the OpenAI provider.

        Args:
            client: The initialized AsyncOpenAI client, shared for the process lifetime.
            model_name: The identifier for the OpenAI model to use (e.g., 'gpt-4o-mini').
            max_tokens: The maximum number of tokens to generate per round-trip.
            temperature: Optional sampling temperature; the API default applies when None.
        """
        super().__init__(model_name=model_name, max_tokens=max_tokens, temperature=temperature)
        self.client: AsyncOpenAI = client
        self._adapter = OpenAIMessageAdapter()

    async def _complete_impl(
        self, transcript: Transcript, instructions: str, tools: Sequence[ToolSpec]
    ) -> ProviderResponse[ChatCompletion]:
        messages = self._adapter.to_provider_messages(transcript, instructions)
        request: Dict[str, Any] = {
            "model": self.model,
            # The library expects a union of message param types; our dicts are structurally compatible.
            "messages": cast(Iterable[Any], messages),
            "max_tokens": self.max_tokens,
        }
        if tools:
            request["tools"] = self._adapter.tool_object(tools)
        if self.temperature is not None:
            request["temperature"] = self.temperature

        logger.debug(f"Sending {len(messages)} message(s) to OpenAI model {self.model}.")
        response = await self.client.chat.completions.create(**request)
        return self._adapter.from_provider(response)

from typing import Any, Dict, Optional, Sequence

from anthropic import AsyncAnthropic
from anthropic.types import Message

from arthur_assistant.core import ModelProvider, ProviderResponse, ToolSpec, Transcript, get_logger
from .adapter import AnthropicMessageAdapter

logger = get_logger(__name__)

DEFAULT_MODEL = "claude-3-haiku-20240307"


class AnthropicProvider(ModelProvider[Message]):
    """
    ModelProvider backed by Anthropic's Messages API.
    """

    def __init__(
        self,
        client: AsyncAnthropic,
        model_name: str = DEFAULT_MODEL,
        max_tokens: int = 4096,
        temperature: Optional[float] = None,
    ):
        """
        Initializes the Anthropic provider.

        Args:
            client: The initialized AsyncAnthropic client, shared for the process lifetime.
            model_name: The Claude model identifier.
            max_tokens: The maximum number of tokens to generate per round-trip.
            temperature: Optional sampling temperature; the API default applies when None.
        """
        super().__init__(model_name=model_name, max_tokens=max_tokens, temperature=temperature)
        self.client: AsyncAnthropic = client
        self._adapter = AnthropicMessageAdapter()

    async def _complete_impl(
        self, transcript: Transcript, instructions: str, tools: Sequence[ToolSpec]
    ) -> ProviderResponse[Message]:
        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": instructions,
            "messages": self._adapter.to_provider_messages(transcript),
        }
        if tools:
            request["tools"] = self._adapter.tool_object(tools)
        if self.temperature is not None:
            request["temperature"] = self.temperature

        logger.debug(f"Sending {len(request['messages'])} message(s) to Anthropic model {self.model}.")
        response: Message = await self.client.messages.create(**request)
        return self._adapter.from_provider(response)

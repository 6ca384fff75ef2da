from typing import Optional, Sequence

from google import genai
from google.genai import types
from google.genai.types import GenerateContentResponse

from arthur_assistant.core import ModelProvider, ProviderResponse, ToolSpec, Transcript, get_logger
from .adapter import GeminiContentAdapter

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-flash-latest"


class GeminiProvider(ModelProvider[GenerateContentResponse]):
    """
    ModelProvider for Google's Gemini models.

    Every round-trip sends the full contents list through
    ``client.aio.models.generate_content``; no chat session is kept between calls.
    """

    def __init__(
        self,
        client: genai.Client,
        model_name: str = DEFAULT_MODEL,
        max_tokens: int = 4096,
        temperature: Optional[float] = None,
    ):
        """
        Initializes the Gemini provider.

        Args:
            client: The initialized Google GenAI client.
            model_name: The identifier for the Gemini model to use (e.g., 'gemini-flash-latest').
            max_tokens: The maximum number of tokens to generate per round-trip.
            temperature: Optional sampling temperature; the API default applies when None.
        """
        super().__init__(model_name=model_name, max_tokens=max_tokens, temperature=temperature)
        self.client: genai.Client = client
        self._adapter = GeminiContentAdapter()

    def _config(self, instructions: str, tools: Sequence[ToolSpec]) -> types.GenerateContentConfig:
        tool_obj = self._adapter.tool_object(tools)
        return types.GenerateContentConfig(
            system_instruction=instructions,
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            tools=[tool_obj] if tool_obj else None,
            automatic_function_calling=types.AutomaticFunctionCallingConfig(disable=True),
        )

    async def _complete_impl(
        self, transcript: Transcript, instructions: str, tools: Sequence[ToolSpec]
    ) -> ProviderResponse[GenerateContentResponse]:
        contents = self._adapter.to_provider_contents(transcript)
        logger.debug(f"Sending {len(contents)} content(s) to Gemini model {self.model}.")
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=self._config(instructions, tools),
        )
        return self._adapter.from_provider(response)

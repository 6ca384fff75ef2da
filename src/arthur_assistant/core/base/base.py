"""Core abstractions for model provider implementations."""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ProviderError, classify_provider_error
from ..logger import get_logger
from ..messages import Transcript
from ..tools.models import ToolCallRequest, ToolSpec

logger = get_logger(__name__)


ProviderResT = TypeVar("ProviderResT")


class Usage(BaseModel):
    """Token counts reported by the provider.

    Attributes:
        input_tokens: Tokens sent to the model.
        output_tokens: Tokens generated by the model.
    """

    input_tokens: int = 0
    output_tokens: int = 0

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )


class ProviderResponse(BaseModel, Generic[ProviderResT]):
    """Normalized output of one provider round-trip.

    Attributes:
        text: Text content returned by the provider, joined across blocks.
        tool_calls: Tool calls requested by the model; empty for a terminal answer.
        usage: Token usage of this round-trip.
        stop_reason: Provider-specific reason the generation stopped.
        raw: Provider-specific response payload for advanced use cases.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    text: str = ""
    tool_calls: List[ToolCallRequest] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)
    stop_reason: Optional[str] = None
    raw: Optional[ProviderResT] = None

    @property
    def is_terminal(self) -> bool:
        return not self.tool_calls


class ModelProvider(ABC, Generic[ProviderResT]):
    """Abstract base class for model provider implementations.

    A provider is stateless between calls: every round-trip resubmits the full
    transcript, including earlier tool calls and their results. Failures are
    never retried here; they are translated into ``ProviderError`` subclasses.
    """

    def __init__(self, model_name: str, max_tokens: int = 4096, temperature: Optional[float] = None):
        self.model = model_name
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def complete(
        self, transcript: Transcript, instructions: str, tools: Sequence[ToolSpec]
    ) -> ProviderResponse[ProviderResT]:
        """
        Submit the transcript, instructions and tool catalogue to the model.

        Args:
            transcript: The conversation so far.
            instructions: System instructions for this request.
            tools: The tools the model may request.

        Returns:
            The normalized response: either terminal text or one or more tool calls.

        Raises:
            ProviderError: If the provider fails the request.
        """
        try:
            return await self._complete_impl(transcript, instructions, tools)
        except ProviderError:
            raise
        except Exception as e:
            error = classify_provider_error(e)
            logger.error(f"Provider error from model '{self.model}': {e}")
            raise error from e

    @abstractmethod
    async def _complete_impl(
        self, transcript: Transcript, instructions: str, tools: Sequence[ToolSpec]
    ) -> ProviderResponse[ProviderResT]:
        pass

"""The multi-round tool-calling loop run once per chat request."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Callable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..base import ModelProvider, Usage
from ..confirmation import ConfirmationGate, ConversationPhase
from ..exceptions import ConfirmationRequiredError, RequestValidationError, ToolExecutionError
from ..logger import get_logger
from ..messages import AssistantTurn, ToolResultTurn, Transcript
from ..tools import ToolCallRequest, ToolCallResult, ToolExecutor, ToolRegistry, ToolSpec

logger = get_logger(__name__)

FALLBACK_MESSAGE = "I apologize, but I couldn't generate a response."
ROUND_LIMIT_MESSAGE = "I wasn't able to finish that request. Please try again or rephrase it."
INTERNAL_ERROR_MESSAGE = "An internal error occurred while executing the tool."


class RequestContext(BaseModel):
    """Identifiers of the acting user, injected into the instructions.

    Attributes:
        organization_id: The organization whose records are managed.
        user_id: The user chatting with the assistant.
        today: The date relative dates are resolved against.
    """

    organization_id: str
    user_id: str
    today: date = Field(default_factory=date.today)


class FinalAnswer(BaseModel):
    """Outcome of one run of the loop.

    Attributes:
        message: Text shown to the user.
        usage: Token usage summed over every provider round-trip.
        transcript: The transcript including this request's turns.
        rounds: Number of tool dispatch rounds executed.
        completed: False when the round ceiling stopped the loop.
        phase: Confirmation phase the conversation is left in.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    message: str
    usage: Usage
    transcript: Transcript
    rounds: int = 0
    completed: bool = True
    phase: ConversationPhase = ConversationPhase.GATHERING


InstructionBuilder = Callable[[RequestContext, Sequence[ToolSpec]], str]


class OrchestrationLoop:
    """Runs provider round-trips and tool dispatch until the model answers in text.

    Every round's tool calls are executed concurrently and each receives exactly
    one result before the transcript is resubmitted. Tool failures never end the
    loop; they are reported back to the model as the tool's result.
    """

    # Failures whose message is safe to show the model. Anything else is logged
    # and replaced by a generic message.
    RECOVERABLE_ERRORS = (
        ValueError,
        TypeError,
        LookupError,
        PermissionError,
    )

    def __init__(
        self,
        *,
        provider: ModelProvider[Any],
        registry: ToolRegistry,
        executor: ToolExecutor,
        instructions: InstructionBuilder,
        max_rounds: int = 10,
        enforce_confirmation: bool = True,
    ) -> None:
        """Initialize the loop.

        Args:
            provider: Model provider used for every round-trip.
            registry: The tool catalogue offered to the model.
            executor: Performs the requested tool calls.
            instructions: Builds the system instructions from the request context.
            max_rounds: Maximum number of tool dispatch rounds per request.
            enforce_confirmation: Refuse write calls that lack a confirmation.
        """
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")
        self._provider = provider
        self._registry = registry
        self._executor = executor
        self._instructions = instructions
        self._max_rounds = max_rounds
        self._enforce_confirmation = enforce_confirmation

    async def run(self, transcript: Transcript, context: RequestContext) -> FinalAnswer:
        """Run the loop for one request.

        Args:
            transcript: The prior conversation, ending with the user's latest turn.
            context: Organization and user identifiers.

        Returns:
            The final answer with usage and the extended transcript.

        Raises:
            RequestValidationError: If the transcript has tool calls without results.
            ProviderError: If the model provider fails; nothing is retried.
        """
        if transcript.pending_calls():
            raise RequestValidationError("messages contain tool calls without results")

        transcript = transcript.copy()
        tools = self._registry.specs
        instructions = self._instructions(context, tools)
        gate = ConfirmationGate(transcript, self._registry, enforce=self._enforce_confirmation)
        usage = Usage()
        logger.debug(f"Starting loop in phase '{gate.phase.value}' with {len(transcript)} turn(s).")

        for round_index in range(self._max_rounds + 1):
            response = await self._provider.complete(transcript, instructions, tools)
            usage = usage + response.usage

            if response.is_terminal:
                message = response.text.strip() or FALLBACK_MESSAGE
                transcript.append(AssistantTurn(content=message))
                logger.debug(f"Loop finished after {round_index} tool round(s).")
                return FinalAnswer(
                    message=message,
                    usage=usage,
                    transcript=transcript,
                    rounds=round_index,
                    phase=gate.phase_after(message),
                )

            if round_index == self._max_rounds:
                break

            calls = response.tool_calls
            logger.info(f"Round {round_index + 1}/{self._max_rounds}: Processing {len(calls)} tool call(s).")
            transcript.append(AssistantTurn(content=response.text, tool_calls=calls))

            outcomes = await asyncio.gather(*(self._dispatch(call, gate) for call in calls))
            results = [result for result, _ in outcomes]
            gate.close_round(spec for _, spec in outcomes if spec is not None)
            transcript.append(ToolResultTurn(results=results))

        logger.warning(f"Max tool rounds ({self._max_rounds}) reached. Stopping execution.")
        transcript.append(AssistantTurn(content=ROUND_LIMIT_MESSAGE))
        return FinalAnswer(
            message=ROUND_LIMIT_MESSAGE,
            usage=usage,
            transcript=transcript,
            rounds=self._max_rounds,
            completed=False,
            phase=gate.phase_after(ROUND_LIMIT_MESSAGE),
        )

    async def _dispatch(
        self, call: ToolCallRequest, gate: ConfirmationGate
    ) -> Tuple[ToolCallResult, Optional[ToolSpec]]:
        """Handle a single tool call request.

        Returns:
            The result for the call and, when the executor was invoked, the tool spec.
        """
        logger.debug(f"Handling tool call: {call.name} (ID: {call.call_id})")

        spec = self._registry.tools.get(call.name)
        if spec is None:
            msg = f"Tool '{call.name}' not found in registry."
            logger.warning(msg)
            return ToolCallResult.failure(call, msg, "unknown_tool"), None

        if call.argument_error:
            logger.warning(f"Argument normalization failed for '{call.name}': {call.argument_error}")
            return ToolCallResult.failure(call, call.argument_error, "invalid_arguments"), None

        try:
            gate.authorize(spec)
        except ConfirmationRequiredError as exc:
            return ToolCallResult.failure(call, str(exc), exc.error_type), None

        try:
            logger.info(f"Executing tool '{call.name}'...")
            payload = await self._executor.execute(call.name, dict(call.arguments))
        except ToolExecutionError as exc:
            logger.warning(f"Tool '{call.name}' failed: {exc} ({exc.error_type})")
            return ToolCallResult.failure(call, str(exc), exc.error_type, exc.details), spec
        except self.RECOVERABLE_ERRORS as exc:
            logger.warning(f"Recoverable error in '{call.name}': {exc} ({type(exc).__name__})")
            return ToolCallResult.failure(call, str(exc), type(exc).__name__), spec
        except Exception:
            logger.error(f"Unexpected error executing tool '{call.name}'", exc_info=True)
            return ToolCallResult.failure(call, INTERNAL_ERROR_MESSAGE, "internal_error"), spec

        logger.info(f"Tool '{call.name}' executed successfully.")
        return ToolCallResult.success(call, payload), spec

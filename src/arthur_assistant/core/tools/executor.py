"""The tool executor contract and a handler-based implementation.

The persistence behind each tool belongs to the hosting application. The core only
talks to it through ``ToolExecutor.execute(name, arguments)``, which returns the
result payload or raises ``ToolExecutionError``.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Dict, Mapping, Protocol, runtime_checkable

from pydantic import ValidationError

from .registry import ToolRegistry
from ..exceptions import ToolExecutionError, ToolNotFoundError
from ..logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ToolExecutor(Protocol):
    """Performs exactly one mutation or query for a tool call."""

    async def execute(self, name: str, arguments: Dict[str, Any]) -> Any:
        """Run the named tool.

        Returns:
            The JSON-serializable result payload.

        Raises:
            ToolExecutionError: With an ``error_type`` such as ``validation`` or ``not_found``.
        """
        ...


class HandlerToolExecutor:
    """Validates arguments against the tool's model and dispatches to a handler callable.

    Handlers receive the validated arguments as keyword arguments and may be sync
    or async. Sync handlers run in a worker thread so the event loop stays free.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        handlers: Mapping[str, Callable[..., Any]],
        tool_timeout: float = 180.0,
    ) -> None:
        """Initialize the executor.

        Args:
            registry: Registry used to resolve tool specs and argument models.
            handlers: Mapping of tool name to the callable performing it.
            tool_timeout: Timeout in seconds for a single handler call.
        """
        self._registry = registry
        self._handlers = dict(handlers)
        self._tool_timeout = tool_timeout

        unknown = sorted(set(self._handlers) - set(registry.tools))
        if unknown:
            logger.warning(f"Handlers registered for unknown tools: {', '.join(unknown)}")
        missing = sorted(set(registry.tools) - set(self._handlers))
        if missing:
            logger.warning(f"No handler for tools: {', '.join(missing)}")

    async def execute(self, name: str, arguments: Dict[str, Any]) -> Any:
        try:
            spec = self._registry.get(name)
        except ToolNotFoundError as exc:
            raise ToolExecutionError(str(exc), error_type="unknown_tool") from exc

        handler = self._handlers.get(name)
        if handler is None:
            raise ToolExecutionError(f"Tool '{name}' is not available right now.", error_type="not_implemented")

        kwargs = dict(arguments)
        if spec.args_model is not None:
            try:
                kwargs = spec.args_model.model_validate(arguments).model_dump()
            except ValidationError as exc:
                errors = [
                    {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]} for err in exc.errors()
                ]
                logger.warning(f"Validation error for '{name}': {errors}")
                raise ToolExecutionError(
                    f"Argument validation failed for '{name}'.",
                    error_type="validation",
                    details={"errors": errors},
                ) from exc

        logger.debug(f"Dispatching '{name}' to its handler.")
        return await self._call_handler(handler, kwargs)

    async def _call_handler(self, handler: Callable[..., Any], kwargs: Dict[str, Any]) -> Any:
        """Execute the handler, handling async/sync and timeouts.

        Raises:
            ToolExecutionError: If execution times out.
        """
        try:
            if inspect.iscoroutinefunction(handler):
                return await asyncio.wait_for(handler(**kwargs), timeout=self._tool_timeout)

            return await asyncio.wait_for(asyncio.to_thread(handler, **kwargs), timeout=self._tool_timeout)

        except asyncio.TimeoutError as exc:
            msg = f"Tool execution timed out after {self._tool_timeout} seconds."
            raise ToolExecutionError(msg, error_type="timeout") from exc

"""The inbound chat endpoint: one request runs one orchestration loop."""

from typing import Any, Callable, Optional

from pydantic import ValidationError

from arthur_assistant.core import (
    OrchestrationLoop,
    ProviderError,
    RequestContext,
    RequestValidationError,
    Transcript,
    get_logger,
)
from arthur_assistant.core.exceptions import DEFAULT_MESSAGE
from .models import ChatRequest, HttpResponse

logger = get_logger(__name__)

MISSING_IDS_MESSAGE = "Missing organizationId or userId"


class ChatEndpoint:
    """
    Handles ``POST /chat`` bodies ``{messages, organizationId, userId}``.

    The endpoint does not depend on a web framework; hosts pass the decoded JSON
    body to ``handle`` and send back the returned status code and body.
    """

    def __init__(self, loop: OrchestrationLoop, context_factory: Optional[Callable[..., RequestContext]] = None):
        """
        Args:
            loop: The orchestration loop shared by all requests.
            context_factory: Builds the request context; defaults to ``RequestContext``.
        """
        self._loop = loop
        self._context_factory = context_factory or RequestContext

    async def handle(self, payload: Any) -> HttpResponse:
        """
        Run one chat request.

        Args:
            payload: The decoded JSON body.

        Returns:
            200 with ``{message, usage}``, 400 for malformed requests, or the
            provider error's status with a user-facing message.
        """
        if not isinstance(payload, dict):
            return HttpResponse.error(400, "Request body must be a JSON object")

        try:
            request = ChatRequest.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Rejected malformed chat request: {e}")
            return HttpResponse.error(400, "Malformed chat request")

        if not request.organization_id or not request.user_id:
            return HttpResponse.error(400, MISSING_IDS_MESSAGE)

        try:
            transcript = Transcript.from_wire(request.messages)
            context = self._context_factory(organization_id=request.organization_id, user_id=request.user_id)
            answer = await self._loop.run(transcript, context)
        except RequestValidationError as e:
            logger.warning(f"Rejected chat request: {e}")
            return HttpResponse.error(e.status_code, str(e))
        except ProviderError as e:
            logger.error(f"Arthur chat error ({type(e).__name__}): {e}")
            return HttpResponse.error(e.status_code, str(e) or DEFAULT_MESSAGE)

        if not answer.completed:
            logger.warning(f"Request for organization {request.organization_id} hit the round limit.")
        return HttpResponse.ok(answer.message, answer.usage)

"""Request and response bodies of the chat endpoint."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from arthur_assistant.core import Usage


class ChatRequest(BaseModel):
    """
    Body of ``POST /chat``.

    Attributes:
        messages: The conversation so far, as sent by the browser.
        organization_id: The organization whose records are managed.
        user_id: The user chatting with the assistant.
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: List[Any] = Field(default_factory=list)
    organization_id: Optional[str] = Field(default=None, alias="organizationId")
    user_id: Optional[str] = Field(default=None, alias="userId")


class ChatResponseBody(BaseModel):
    message: str
    usage: Usage


class ErrorBody(BaseModel):
    error: str


class HttpResponse(BaseModel):
    """A status code and JSON body, independent of the web framework serving it."""

    status_code: int
    body: Dict[str, Any]

    @classmethod
    def ok(cls, message: str, usage: Usage) -> "HttpResponse":
        return cls(status_code=200, body=ChatResponseBody(message=message, usage=usage).model_dump())

    @classmethod
    def error(cls, status_code: int, message: str) -> "HttpResponse":
        return cls(status_code=status_code, body=ErrorBody(error=message).model_dump())

from enum import Enum
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict


class OperationCategory(str, Enum):
    """Closed set of operation kinds a tool can perform."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def is_write(self) -> bool:
        return self is not OperationCategory.READ


class ToolSpec(BaseModel):
    """
    Represents a tool the model is allowed to request.

    Attributes:
        name: The unique name of the tool.
        description: What the tool does, written for the model.
        category: Read, create, update or delete. Everything but read needs a confirmation.
        parameters: JSON schema of the tool input, already sanitized for providers.
        args_model: Pydantic model used for validating and coercing arguments.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    category: OperationCategory
    parameters: Dict[str, Any]
    args_model: Optional[Type[BaseModel]] = None

    @property
    def is_write(self) -> bool:
        return self.category.is_write

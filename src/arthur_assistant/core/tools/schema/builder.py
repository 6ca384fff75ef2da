from typing import Any, Dict, Type

import jsonref  # type: ignore
from pydantic import BaseModel

from .schema_validator import SchemaValidator


def build_parameters_schema(args_model: Type[BaseModel], tool_name: str) -> Dict[str, Any]:
    """Derive the provider-ready JSON schema of a tool from its argument model.

    Args:
        args_model: Pydantic model describing the tool input.
        tool_name: The tool name, used in error messages.

    Returns:
        A self-contained JSON schema without ``$ref`` indirections.

    Raises:
        ToolValidationError: If a field lacks a description or the model is recursive.
    """
    SchemaValidator.assert_fields_described(args_model, tool_name)

    raw_schema = args_model.model_json_schema()
    SchemaValidator.assert_no_recursive_refs(raw_schema)

    # proxies=False ensures we get a plain dict back, not JsonRef objects
    resolved = jsonref.replace_refs(raw_schema, proxies=False)
    return SchemaValidator.sanitize_schema(resolved)

from typing import Any, Dict, Set, Type

from pydantic import BaseModel

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "$schema", "$id", "title", "definitions")


class SchemaValidator:
    """
    Helper class for validating and sanitizing JSON schemas for tools.
    """

    @staticmethod
    def assert_fields_described(model: Type[BaseModel], tool_name: str) -> None:
        """Every tool argument needs a description so the model knows what to ask the user for.

        Args:
            model: The pydantic argument model of the tool.
            tool_name: The name of the tool for error reporting.

        Raises:
            ToolValidationError: If a field is missing a description.
        """
        for field_name, field in model.model_fields.items():
            if not field.description:
                msg = (
                    f"Parameter '{field_name}' in tool '{tool_name}' is missing a description.\n"
                    f"Usage: {field_name}: Annotated[Type, Field(description='...')]"
                )
                logger.error(msg)
                raise ToolValidationError(msg)

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks if the schema contains recursive references by traversing the graph.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                if "$ref" in node:
                    ref = node["$ref"]
                    if ref in path:
                        msg = (
                            f"Recursive structure detected: {ref}. "
                            "Recursive structures are not allowed in tool inputs."
                        )
                        logger.error(msg)
                        raise ToolValidationError(msg)

                    # e.g. #/$defs/MyModel
                    if ref.startswith("#"):
                        parts = ref.split("/")
                        if len(parts) >= 3 and parts[-1] in defs:
                            check(defs[parts[-1]], path | {ref})
                    return

                for v in node.values():
                    check(v, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up the schema for better compatibility with model providers.
        Removes $defs, $schema, $id, title.
        Simplifies Optional fields (anyOf with null).
        Enforces additionalProperties: false for objects.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        for key in _METADATA_KEYS:
            new_schema.pop(key, None)

        if "anyOf" in new_schema:
            non_null = [x for x in new_schema["anyOf"] if x.get("type") != "null"]
            if len(non_null) == 1 and isinstance(non_null[0], dict):
                merged = non_null[0].copy()
                # The parent carries the field description and default
                for key in ("description", "default"):
                    if key in new_schema:
                        merged[key] = new_schema[key]
                return SchemaValidator.sanitize_schema(merged)

        if new_schema.get("type") == "object" and "additionalProperties" not in new_schema:
            new_schema["additionalProperties"] = False

        for key, value in new_schema.items():
            if key == "properties" and isinstance(value, dict):
                # Property names are data, not schema keywords
                new_schema[key] = {name: SchemaValidator.sanitize_schema(prop) for name, prop in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item) if isinstance(item, dict) else item for item in value
                ]

        return new_schema

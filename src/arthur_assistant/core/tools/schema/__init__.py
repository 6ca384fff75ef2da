"""Tool schema generation and validation."""

from .schema_validator import SchemaValidator
from .builder import build_parameters_schema

__all__ = ["SchemaValidator", "build_parameters_schema"]

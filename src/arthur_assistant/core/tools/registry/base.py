"""Tool registry holding the static catalogue of operations the model may request."""

from typing import Callable, Dict, Iterator, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from ..models import OperationCategory, ToolSpec
from ..schema import build_parameters_schema
from ...exceptions import ToolNotFoundError, ToolRegistrationError
from ...logger import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=Type[BaseModel])


class ToolRegistry:
    """
    A central registry to manage and access the tools offered to the model.

    The registry is configuration, not state: it is filled at start-up, then
    sealed, and only read while requests are served.
    """

    def __init__(self) -> None:
        """Initialize an empty, unsealed registry."""
        self.tools: Dict[str, ToolSpec] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Freeze the registry. Any later registration raises ``ToolRegistrationError``."""
        self._sealed = True
        logger.info(f"Tool registry sealed with {len(self.tools)} tool(s).")

    def register(self, spec: ToolSpec) -> None:
        """
        Register a fully built tool spec.

        Args:
            spec: The tool to offer to the model.

        Raises:
            ToolRegistrationError: If the registry is sealed or the name is taken.
        """
        if self._sealed:
            msg = f"Cannot register '{spec.name}': the tool registry is sealed."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        if spec.name in self.tools:
            msg = f"Tool '{spec.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[spec.name] = spec
        logger.info(f"Successfully registered {spec.category.value} tool: '{spec.name}'")

    def register_model(
        self,
        name: str,
        description: str,
        args_model: Type[BaseModel],
        category: Union[OperationCategory, str],
    ) -> ToolSpec:
        """
        Register a tool whose input is described by a pydantic model.

        Args:
            name: The tool name the model calls.
            description: What the tool does.
            args_model: Pydantic model of the input; every field needs a description.
            category: Read, create, update or delete.

        Returns:
            The registered spec.

        Raises:
            ToolValidationError: If the argument model cannot be turned into a tool schema.
            ToolRegistrationError: If the registry is sealed or the name is taken.
        """
        spec = ToolSpec(
            name=name,
            description=description,
            category=OperationCategory(category),
            parameters=build_parameters_schema(args_model, name),
            args_model=args_model,
        )
        self.register(spec)
        return spec

    def tool(
        self, name: str, category: Union[OperationCategory, str], description: Optional[str] = None
    ) -> Callable[[M], M]:
        """A decorator to turn an argument model into a tool.

        The model's docstring is used as the description unless one is given.

        Args:
            name: The tool name the model calls.
            category: Read, create, update or delete.
            description: Optional description override.

        Returns:
            A decorator returning the model unchanged.
        """

        def decorator(args_model: M) -> M:
            doc = description or (args_model.__doc__ or "").strip()
            if not doc:
                raise ToolRegistrationError(f"Tool '{name}' missing description. Models need to know what it does.")
            self.register_model(name, doc, args_model, category)
            return args_model

        return decorator

    def get(self, name: str) -> ToolSpec:
        """Look up a tool by name.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        try:
            return self.tools[name]
        except KeyError:
            raise ToolNotFoundError(f"Tool '{name}' not found in the registry.") from None

    def __contains__(self, name: object) -> bool:
        return name in self.tools

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self.tools.values())

    def __len__(self) -> int:
        return len(self.tools)

    @property
    def specs(self) -> List[ToolSpec]:
        """Tools in registration order."""
        return list(self.tools.values())

    @property
    def write_tools(self) -> List[str]:
        return [spec.name for spec in self.tools.values() if spec.is_write]

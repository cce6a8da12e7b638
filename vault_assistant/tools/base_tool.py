# The module is to define the base class for all tools the model can call.
# Date: 2026-10-18
# Version: 0.1.0

from abc import ABC, abstractmethod
from pydantic import BaseModel
from typing import Any, Dict, FrozenSet, Type

from vault_assistant.models.common import ChatMode, ToolName

# JSON-schema keys that are not portable across vendor function-calling dialects.
_UNPORTABLE_KEYS = {"title", "default", "examples"}


def _portable_schema(schema: Any) -> Any:
    if isinstance(schema, dict):
        cleaned = {}
        for key, value in schema.items():
            if key in _UNPORTABLE_KEYS:
                continue
            if key == "properties":
                # Property names are user data, only their schemas get cleaned.
                cleaned[key] = {name: _portable_schema(prop) for name, prop in value.items()}
            else:
                cleaned[key] = _portable_schema(value)
        return cleaned
    if isinstance(schema, list):
        return [_portable_schema(item) for item in schema]
    return schema


class BaseTool(ABC):
    """
    Abstract Base Class for all tools.

    This class defines a standard interface that all tools must implement.
    Attributes:
        name (ToolName): The tool id, used for dispatch and in the vendor schema.
        description (str): A brief description of what the tool does.
        args_schema (Type[BaseModel]): A Pydantic model defining the arguments
            that the tool accepts, which will be validated before execution.
        modes (FrozenSet[ChatMode]): The capability profiles exposing this tool.
    """
    name: ToolName
    description: str
    args_schema: Type[BaseModel]
    modes: FrozenSet[ChatMode] = frozenset({ChatMode.DOCUMENT})

    @abstractmethod
    async def execute(self, **kwargs) -> str:
        """
        The core logic of the tool. This method must be implemented by all subclasses.

        Args:
            **kwargs: The arguments for the tool, validated against args_schema.

        Returns:
            A string summarizing the result of the tool's execution.
        """

    async def run(self, arguments: Dict[str, Any]) -> str:
        """Validates raw model arguments against args_schema, then executes."""
        validated = self.args_schema.model_validate(arguments)
        return await self.execute(**validated.model_dump())

    def get_definition(self) -> Dict[str, Any]:
        """
        Returns the tool's vendor-neutral definition: name, description and a
        JSON schema for its parameters. Provider adapters wrap this in their
        own function-calling syntax.
        """
        parameters = _portable_schema(self.args_schema.model_json_schema())
        parameters.setdefault("properties", {})
        return {
            "name": self.name.value,
            "description": self.description,
            "parameters": parameters,
        }

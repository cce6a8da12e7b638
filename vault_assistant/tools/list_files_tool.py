# A tool to list the documents stored in the vault.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import Type

from .base_tool import BaseTool
from vault_assistant.models.common import ToolName
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


class ListFilesInput(BaseModel):
    """Input model for the List Files tool."""
    directory: str = Field(default="/", description="Vault folder to list. Use '/' for the vault root.")
    recursive: bool = Field(default=False, description="Also list files in nested folders.")
    limit: int = Field(default=100, ge=1, description="Maximum number of paths to return.")


class ListFilesTool(BaseTool):
    """Lists document paths in a vault folder, optionally recursing into subfolders."""
    name: ToolName = ToolName.LIST_FILES
    description: str = "List files in the vault."
    args_schema: Type[BaseModel] = ListFilesInput

    def __init__(self, vault: VaultService):
        self._vault = vault

    async def execute(self, directory: str = "/", recursive: bool = False, limit: int = 100) -> str:
        console.info(f"Executing tool '{self.name.value}' on '{directory}' (recursive={recursive}, limit={limit})")
        files = self._vault.list_files(directory, recursive, limit)
        if not files:
            return f"No files found in {directory}."
        return "\n".join(files)

# A tool to find vault files whose name contains a fragment.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import Type

from .base_tool import BaseTool
from vault_assistant.models.common import ToolName
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


class FindFilesInput(BaseModel):
    """Input model for the Find Files tool."""
    name: str = Field(..., min_length=1, description="Part of the file name to look for (case-insensitive).")


class FindFilesTool(BaseTool):
    name: ToolName = ToolName.FIND_FILES_BY_NAME
    description: str = "Find files by name (fuzzy match). Returns the FULL PATH of matching files. " \
    "Use this FULL PATH when fixing links."
    args_schema: Type[BaseModel] = FindFilesInput

    def __init__(self, vault: VaultService):
        self._vault = vault

    async def execute(self, name: str) -> str:
        console.info(f"Executing tool '{self.name.value}' with fragment '{name}'")
        files = self._vault.find_files_by_name(name)
        return "\n".join(files) if files else "No files found."

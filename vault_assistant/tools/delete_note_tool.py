# A tool to soft-delete a note by moving it to the trash folder.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import Type

from .base_tool import BaseTool
from vault_assistant.models.common import ToolName
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


class DeleteNoteInput(BaseModel):
    """Input model for the Delete Note tool."""
    path: str = Field(..., description="The path of the file to delete")


class DeleteNoteTool(BaseTool):
    name: ToolName = ToolName.DELETE_NOTE
    description: str = "Safely delete a note by moving it to the Trash folder."
    args_schema: Type[BaseModel] = DeleteNoteInput

    def __init__(self, vault: VaultService):
        self._vault = vault

    async def execute(self, path: str) -> str:
        console.info(f"Executing tool '{self.name.value}' for '{path}'")
        result = self._vault.delete_note(path)
        console.success(result)
        return result

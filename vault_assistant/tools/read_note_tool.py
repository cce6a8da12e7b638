# A tool to read one note from the vault.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import Type

from .base_tool import BaseTool
from vault_assistant.models.common import ToolName
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


class ReadNoteInput(BaseModel):
    """Input model for the Read Note tool."""
    filename: str = Field(..., description="Full vault path of the note to read.")


class ReadNoteTool(BaseTool):
    name: ToolName = ToolName.READ_NOTE
    description: str = "Read the content of a note."
    args_schema: Type[BaseModel] = ReadNoteInput

    def __init__(self, vault: VaultService):
        self._vault = vault

    async def execute(self, filename: str) -> str:
        console.info(f"Executing tool '{self.name.value}' for '{filename}'")
        return self._vault.read_file(filename)

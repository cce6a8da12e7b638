# A tool to create or overwrite a note in the vault.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import Type

from .base_tool import BaseTool
from vault_assistant.models.common import ToolName
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


class SaveNoteInput(BaseModel):
    """Input model for the Save Note tool."""
    filename: str = Field(..., description="Full vault path of the note, including the .md extension.")
    content: str = Field(..., description="The complete new content of the note.")


class SaveNoteTool(BaseTool):
    """
    Writes a note. Existing notes are overwritten, new notes are created along
    with any missing folders.
    """
    name: ToolName = ToolName.SAVE_NOTE
    description: str = "Save or overwrite a note."
    args_schema: Type[BaseModel] = SaveNoteInput

    def __init__(self, vault: VaultService):
        self._vault = vault

    async def execute(self, filename: str, content: str) -> str:
        console.info(f"Executing tool '{self.name.value}' for '{filename}' ({len(content)} chars)")
        result = self._vault.save_note(filename, content)
        console.success(result)
        return result

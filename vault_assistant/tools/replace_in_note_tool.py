# A tool to replace one string inside a note.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import Type

from .base_tool import BaseTool
from vault_assistant.models.common import ToolName
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


class ReplaceInNoteInput(BaseModel):
    """Input model for the Replace In Note tool."""
    path: str = Field(..., description="Full vault path of the note.")
    target: str = Field(..., min_length=1, description="The exact text to replace.")
    replacement: str = Field(..., description="The text to put in its place.")


class ReplaceInNoteTool(BaseTool):
    """
    Replaces the first occurrence of `target` in a note. A target that cannot be
    found is reported back as text rather than as an error, so the model can
    retry with a corrected string.
    """
    name: ToolName = ToolName.REPLACE_IN_NOTE
    description: str = "Replace a specific string in a note with a new string. When fixing links, " \
    "replace the old link with a Wikilink containing the FULL PATH (e.g., \"![[Path/To/File.png]]\")."
    args_schema: Type[BaseModel] = ReplaceInNoteInput

    def __init__(self, vault: VaultService):
        self._vault = vault

    async def execute(self, path: str, target: str, replacement: str) -> str:
        console.info(f"Executing tool '{self.name.value}' on '{path}'")
        result = self._vault.replace_in_note(path, target, replacement)
        if result.startswith("Successfully"):
            console.success(result)
        else:
            console.warning(result)
        return result

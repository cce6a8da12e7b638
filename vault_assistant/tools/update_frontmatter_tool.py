# A tool to patch a single front matter property of a note.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import Type

from .base_tool import BaseTool
from vault_assistant.models.common import ToolName
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


class UpdateFrontmatterInput(BaseModel):
    """Input model for the Update Frontmatter tool."""
    path: str = Field(..., description="Full vault path of the note.")
    key: str = Field(..., description="Frontmatter property to set.")
    value: str = Field(..., description="New value of the property.")


class UpdateFrontmatterTool(BaseTool):
    name: ToolName = ToolName.UPDATE_FRONTMATTER
    description: str = "Update frontmatter property."
    args_schema: Type[BaseModel] = UpdateFrontmatterInput

    def __init__(self, vault: VaultService):
        self._vault = vault

    async def execute(self, path: str, key: str, value: str) -> str:
        console.info(f"Executing tool '{self.name.value}': {path} [{key}]")
        result = self._vault.update_frontmatter(path, key, value)
        console.success(result)
        return result

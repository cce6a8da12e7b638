# The module is to define the SearchWebTool exposed in web mode.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import Type

from .base_tool import BaseTool
from vault_assistant.models.common import ChatMode, ToolName
from vault_assistant.services.web_search import WebSearchService
from vault_assistant.utils.logger import console


class SearchWebInput(BaseModel):
    """
    Input model for the SearchWebTool.
    Attributes:
        query (str): The search query to look up on the web.
    """
    query: str = Field(..., min_length=1, description="The search query to look up on the web. Be specific and descriptive.")


class SearchWebTool(BaseTool):
    """
    Searches the web through the Tavily adapter. This is the only tool in the
    web-mode profile.
    """
    name: ToolName = ToolName.WEB_SEARCH
    description: str = "Searches the web for a given query to find up-to-date information. " \
    "Returns a direct answer when available plus ranked result snippets with their URLs."
    args_schema: Type[BaseModel] = SearchWebInput
    modes = frozenset({ChatMode.WEB})

    def __init__(self, search: WebSearchService):
        self._search = search

    async def execute(self, query: str) -> str:
        console.info(f"Executing tool '{self.name.value}' with query: '{query}'")
        result = await self._search.search(query)
        if not result.startswith("Error"):
            console.success(f"Tool '{self.name.value}' executed successfully.")
        return result

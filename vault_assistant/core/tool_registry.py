# Builds the closed set of tools and dispatches model tool calls to them.
# Date: 2026-10-18
# Version: 0.1.0

from typing import Any, Dict, List

from pydantic import ValidationError

from vault_assistant.core.errors import ToolNotAllowedError, UnknownToolError, VaultAssistantError
from vault_assistant.models.common import ChatMode, ToolCallRequest, ToolCallResult, ToolName
from vault_assistant.services.vault import VaultService
from vault_assistant.services.web_search import WebSearchService
from vault_assistant.tools.base_tool import BaseTool
from vault_assistant.tools.delete_note_tool import DeleteNoteTool
from vault_assistant.tools.find_files_tool import FindFilesTool
from vault_assistant.tools.list_files_tool import ListFilesTool
from vault_assistant.tools.read_note_tool import ReadNoteTool
from vault_assistant.tools.replace_in_note_tool import ReplaceInNoteTool
from vault_assistant.tools.save_note_tool import SaveNoteTool
from vault_assistant.tools.search_web_tool import SearchWebTool
from vault_assistant.tools.update_frontmatter_tool import UpdateFrontmatterTool
from vault_assistant.utils.logger import console


class ToolRegistry:
    """
    Holds exactly one handler per ToolName and dispatches tool calls to them.

    The handler table is checked against the ToolName enum when the registry is
    built, so a tool id without a handler (or a handler without an id) fails at
    start-up instead of in the middle of a conversation.
    """

    def __init__(self, tools: List[BaseTool]):
        self.tools: Dict[ToolName, BaseTool] = {}
        for tool in tools:
            if tool.name in self.tools:
                raise ValueError(f"Tool already registered: {tool.name.value}")
            self.tools[tool.name] = tool

        missing = set(ToolName) - set(self.tools)
        if missing:
            raise ValueError(f"No handler registered for tools: {sorted(name.value for name in missing)}")
        console.info(f"Tool registry ready with {len(self.tools)} tools.")

    @classmethod
    def create(cls, vault: VaultService, search: WebSearchService) -> "ToolRegistry":
        return cls([
            ListFilesTool(vault),
            ReadNoteTool(vault),
            SaveNoteTool(vault),
            UpdateFrontmatterTool(vault),
            FindFilesTool(vault),
            ReplaceInNoteTool(vault),
            DeleteNoteTool(vault),
            SearchWebTool(search),
        ])

    def tools_for_mode(self, mode: ChatMode) -> List[BaseTool]:
        return [tool for tool in self.tools.values() if mode in tool.modes]

    def get_definitions(self, mode: ChatMode) -> List[Dict[str, Any]]:
        """Returns the vendor-neutral definitions of the tools exposed in `mode`."""
        return [tool.get_definition() for tool in self.tools_for_mode(mode)]

    def resolve(self, name: str, mode: ChatMode) -> BaseTool:
        try:
            tool_name = ToolName(name)
        except ValueError:
            raise UnknownToolError(f"Unknown tool: {name}") from None

        tool = self.tools[tool_name]
        if mode not in tool.modes:
            raise ToolNotAllowedError(f"Tool '{name}' is not available in {mode.value} mode.")
        return tool

    async def execute(self, call: ToolCallRequest, mode: ChatMode) -> ToolCallResult:
        """
        Executes one tool call. Any failure is converted into an error string
        result, so the model sees it and can recover; nothing is raised.
        """
        try:
            tool = self.resolve(call.name, mode)
            result = await tool.run(call.arguments)
            return ToolCallResult(tool_name=call.name, result=result, call_id=call.call_id)
        except (VaultAssistantError, ValidationError, OSError) as e:
            console.error(f"Tool execution error ({call.name}): {e}")
            error = str(e)
        except Exception as e:
            console.exception(f"Unexpected error while executing tool '{call.name}'")
            error = str(e)
        return ToolCallResult(tool_name=call.name, result=f"Error: {error}", call_id=call.call_id, is_error=True)

# vault_assistant/core/orchestrator.py
# Runs one conversational turn: provider round-trips plus tool resolution.
# Date: 2026-10-18
# Version: 0.1.0

from typing import Any, Callable, Dict, List, Optional

from vault_assistant.core.errors import VaultAssistantError
from vault_assistant.core.project_config import ProjectConfig
from vault_assistant.core.rendering import render_response
from vault_assistant.core.tool_registry import ToolRegistry
from vault_assistant.models.common import (
    Attachment,
    ChatMode,
    ChatOptions,
    ConversationTurn,
    ProviderResponse,
    ToolCallResult,
)
from vault_assistant.services.providers.base import LLMProvider, ProviderSession
from vault_assistant.utils.logger import console

MAX_TOOL_ROUNDS = 5

ToolNotifier = Callable[[str], None]
MetadataCallback = Callable[[Dict[str, Any]], None]


def compose_prompt(prompt: str, context: Optional[str]) -> str:
    """Context is always attached to the outgoing prompt, never to stored history."""
    if not context:
        return prompt
    return f"Context:\n{context}\n\nUser Request: {prompt}"


def usable_history(history: List[ConversationTurn]) -> List[ConversationTurn]:
    """Drops empty turns and turns that recorded a failed reply."""
    return [turn for turn in history if turn.text.strip() and not turn.text.startswith("Error:")]


class Orchestrator:
    """
    Drives the tool-calling loop for one turn against a chosen provider:
    send the prompt, execute every requested tool call in order, send the
    results back, and repeat until the model stops calling tools or the
    round budget runs out. Every failure ends as displayable text.
    """

    def __init__(self, tool_registry: ToolRegistry, project_config: ProjectConfig,
                 max_tool_rounds: int = MAX_TOOL_ROUNDS):
        self.tool_registry = tool_registry
        self.project_config = project_config
        self.max_tool_rounds = max_tool_rounds

    async def chat(
        self,
        provider: LLMProvider,
        prompt: str,
        history: List[ConversationTurn],
        context: Optional[str],
        model_id: str,
        mode: ChatMode,
        on_tool_notify: Optional[ToolNotifier] = None,
        attachments: Optional[List[Attachment]] = None,
        on_metadata: Optional[MetadataCallback] = None,
        options: Optional[ChatOptions] = None,
    ) -> str:
        options = options or ChatOptions()
        try:
            return await self._run_turn(provider, prompt, history, context, model_id, mode,
                                        on_tool_notify, attachments or [], on_metadata, options)
        except VaultAssistantError as e:
            console.error(f"Turn failed on {provider.name}: {e}")
            return f"Error: {e}"
        except Exception as e:
            console.exception(f"Unexpected error during a {provider.name} turn")
            console.display_error_panel(f"{provider.name} turn failed", str(e))
            return f"Error: {e}"

    async def _run_turn(self, provider: LLMProvider, prompt: str, history: List[ConversationTurn],
                        context: Optional[str], model_id: str, mode: ChatMode,
                        on_tool_notify: Optional[ToolNotifier], attachments: List[Attachment],
                        on_metadata: Optional[MetadataCallback], options: ChatOptions) -> str:
        session = provider.start_session(
            model_id=model_id,
            system_instruction=self.project_config.system_instruction(mode),
            history=usable_history(history),
            tools=self.tool_registry.get_definitions(mode),
            mode=mode,
            options=options,
        )

        console.info(f"Calling {provider.name} ({model_id}) in {mode.value} mode...")
        response = await session.send_message(compose_prompt(prompt, context), attachments)

        rounds = 0
        while response.tool_calls and rounds < self.max_tool_rounds:
            rounds += 1
            console.rule(f"Tool Round {rounds}")
            console.info(f"Processing {len(response.tool_calls)} tool call(s)")
            results = await self._resolve_tool_calls(response, mode, on_tool_notify)
            response = await session.send_tool_results(results)

        if response.tool_calls:
            console.warning(f"Tool round limit ({self.max_tool_rounds}) reached with tool calls still pending.")

        if response.usage and on_metadata:
            try:
                on_metadata({"usage": response.usage})
            except Exception:
                console.exception("Metadata callback failed")

        output = render_response(response, high_reasoning=options.high_reasoning)
        console.success(f"{provider.name} turn completed after {rounds} tool round(s).")
        return output

    async def _resolve_tool_calls(self, response: ProviderResponse, mode: ChatMode,
                                  on_tool_notify: Optional[ToolNotifier]) -> List[ToolCallResult]:
        # One at a time, in emitted order: a later call may read an earlier call's writes.
        results = []
        for call in response.tool_calls:
            if on_tool_notify:
                try:
                    on_tool_notify(f"Executing {call.name}...")
                except Exception:
                    console.exception("Tool notification callback failed")
            result = await self.tool_registry.execute(call, mode)
            results.append(result)
        return results

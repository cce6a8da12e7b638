# Anthropic Claude adapter built on the official anthropic SDK.
# Date: 2026-10-18
# Version: 0.1.0

from typing import Any, Callable, Dict, List, Optional

from anthropic import APIError, AsyncAnthropic

from vault_assistant.core.errors import ProviderAPIError
from vault_assistant.models.common import (
    Attachment,
    ChatMode,
    ChatOptions,
    ConversationTurn,
    FinishReason,
    ProviderModel,
    ProviderResponse,
    TextPart,
    ThoughtPart,
    ToolCallRequest,
    ToolCallResult,
)
from vault_assistant.services.providers.base import LLMProvider, ProviderSession, attachment_placeholder
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console

_STOP_REASONS = {
    "end_turn": FinishReason.STOP,
    "stop_sequence": FinishReason.STOP,
    "tool_use": FinishReason.TOOL_CALLS,
    "max_tokens": FinishReason.MAX_TOKENS,
    "refusal": FinishReason.SAFETY,
}


def parse_message(response: Any) -> ProviderResponse:
    """Translates an Anthropic Message into the canonical response."""
    parts = []
    tool_calls = []
    for block in response.content:
        if block.type == "text" and block.text:
            parts.append(TextPart(text=block.text))
        elif block.type == "thinking" and block.thinking:
            parts.append(ThoughtPart(text=block.thinking))
        elif block.type == "tool_use":
            tool_calls.append(ToolCallRequest(name=block.name, arguments=dict(block.input or {}), call_id=block.id))

    usage = response.usage.model_dump(exclude_none=True) if response.usage else None
    finish = _STOP_REASONS.get(response.stop_reason or "", FinishReason.UNKNOWN)
    return ProviderResponse(parts=parts, tool_calls=tool_calls, finish_reason=finish, usage=usage)


class ClaudeSession(ProviderSession):

    def __init__(self, client: AsyncAnthropic, request_params: Dict[str, Any], messages: List[Dict[str, Any]]):
        self._client = client
        self._params = request_params
        self.messages = messages

    async def send_message(self, prompt: str, attachments: List[Attachment]) -> ProviderResponse:
        content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        for attachment in attachments:
            if attachment.is_image:
                content.append({
                    "type": "image",
                    "source": {"type": "base64", "media_type": attachment.mime_type, "data": attachment.data},
                })
            else:
                content.append({"type": "text", "text": attachment_placeholder(attachment, "Claude")})
        self.messages.append({"role": "user", "content": content})
        return await self._create()

    async def send_tool_results(self, results: List[ToolCallResult]) -> ProviderResponse:
        self.messages.append({
            "role": "user",
            "content": [
                {
                    "type": "tool_result",
                    "tool_use_id": result.call_id,
                    "content": result.result,
                    "is_error": result.is_error,
                }
                for result in results
            ],
        })
        return await self._create()

    async def _create(self) -> ProviderResponse:
        try:
            response = await self._client.messages.create(messages=self.messages, **self._params)
        except APIError as e:
            console.error(f"Anthropic API error: {e.message}")
            raise ProviderAPIError(e.message) from e

        # Tool use and thinking blocks must be replayed unchanged on the next request.
        self.messages.append({
            "role": "assistant",
            "content": [block.model_dump(exclude_none=True) for block in response.content],
        })
        return parse_message(response)


class ClaudeProvider(LLMProvider):
    """
    Anthropic messages API. There is no public model listing endpoint, so the
    catalog is a curated static list shown once a key is configured.
    """
    id = "anthropic"
    name = "Anthropic"

    MODELS = [
        ProviderModel(id="claude-opus-4-5-20251101", display_name="Claude 4.5 Opus"),
        ProviderModel(id="claude-sonnet-4-5-20250929", display_name="Claude 4.5 Sonnet"),
        ProviderModel(id="claude-haiku-4-5-20251001", display_name="Claude 4.5 Haiku"),
        ProviderModel(id="claude-3-5-sonnet-20241022", display_name="Claude 3.5 Sonnet"),
        ProviderModel(id="claude-3-opus-20240229", display_name="Claude 3 Opus"),
        ProviderModel(id="claude-3-haiku-20240307", display_name="Claude 3 Haiku"),
    ]

    def __init__(self, vault: VaultService, key_file: str = "anthropic_api_key.txt",
                 max_tokens: int = 4096, thinking_budget: int = 2048,
                 client_factory: Optional[Callable[[str], Any]] = None):
        super().__init__(vault, key_file)
        self._max_tokens = max_tokens
        self._thinking_budget = thinking_budget
        self._client_factory = client_factory or (lambda api_key: AsyncAnthropic(api_key=api_key))
        self._client: Optional[Any] = None

    def _on_credential(self, api_key: str):
        self._client = self._client_factory(api_key)

    async def _fetch_models(self) -> List[ProviderModel]:
        return list(self.MODELS)

    def start_session(self, model_id: str, system_instruction: Optional[str], history: List[ConversationTurn],
                      tools: List[Dict[str, Any]], mode: ChatMode, options: ChatOptions) -> ClaudeSession:
        self.require_ready()

        messages = [
            {"role": "assistant" if turn.role == "model" else "user", "content": turn.text}
            for turn in history
        ]

        params: Dict[str, Any] = {"model": model_id, "max_tokens": self._max_tokens}
        if system_instruction:
            params["system"] = system_instruction
        if tools:
            params["tools"] = [
                {"name": tool["name"], "description": tool["description"], "input_schema": tool["parameters"]}
                for tool in tools
            ]
        if options.high_reasoning:
            # max_tokens has to leave room for the answer on top of the thinking budget.
            params["thinking"] = {"type": "enabled", "budget_tokens": self._thinking_budget}
            params["max_tokens"] = self._max_tokens + self._thinking_budget

        return ClaudeSession(self._client, params, messages)

# OpenAI ChatGPT adapter built on the official openai SDK.
# Date: 2026-10-18
# Version: 0.1.0

import json
from typing import Any, Callable, Dict, List, Optional

from openai import APIError, AsyncOpenAI

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
    ToolCallRequest,
    ToolCallResult,
)
from vault_assistant.services.providers.base import LLMProvider, ProviderSession, attachment_placeholder
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console

REASONING_MODEL_PREFIXES = ("o1", "o3", "o4")

_FINISH_REASONS = {
    "stop": FinishReason.STOP,
    "tool_calls": FinishReason.TOOL_CALLS,
    "function_call": FinishReason.TOOL_CALLS,
    "length": FinishReason.MAX_TOKENS,
    "content_filter": FinishReason.SAFETY,
}


def is_reasoning_model(model_id: str) -> bool:
    return model_id.startswith(REASONING_MODEL_PREFIXES)


def _api_error_message(e: APIError) -> str:
    message = str(e.body) if e.body is not None else e.message
    if isinstance(e.body, dict):
        message = e.body.get("message", e.message)
    return message


def parse_chat_completion(response: Any) -> ProviderResponse:
    """Translates an OpenAI ChatCompletion into the canonical response."""
    usage = response.usage.model_dump(exclude_none=True) if response.usage else None
    if not response.choices:
        return ProviderResponse(usage=usage)

    choice = response.choices[0]
    message = choice.message
    parts = []
    if message.content:
        parts.append(TextPart(text=message.content))
    elif getattr(message, "refusal", None):
        parts.append(TextPart(text=message.refusal))

    tool_calls = []
    for call in message.tool_calls or []:
        try:
            arguments = json.loads(call.function.arguments or "{}")
        except json.JSONDecodeError:
            console.warning(f"Could not decode arguments for tool '{call.function.name}': {call.function.arguments!r}")
            arguments = {}
        tool_calls.append(ToolCallRequest(name=call.function.name, arguments=arguments, call_id=call.id))

    finish = _FINISH_REASONS.get(choice.finish_reason or "", FinishReason.UNKNOWN)
    return ProviderResponse(parts=parts, tool_calls=tool_calls, finish_reason=finish, usage=usage)


class ChatGPTSession(ProviderSession):

    def __init__(self, client: AsyncOpenAI, request_params: Dict[str, Any], messages: List[Dict[str, Any]]):
        self._client = client
        self._params = request_params
        self.messages = messages

    async def send_message(self, prompt: str, attachments: List[Attachment]) -> ProviderResponse:
        content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        for attachment in attachments:
            if attachment.is_image:
                content.append({
                    "type": "image_url",
                    "image_url": {"url": f"data:{attachment.mime_type};base64,{attachment.data}"},
                })
            else:
                content.append({"type": "text", "text": attachment_placeholder(attachment, "ChatGPT")})
        self.messages.append({"role": "user", "content": content})
        return await self._complete()

    async def send_tool_results(self, results: List[ToolCallResult]) -> ProviderResponse:
        for result in results:
            self.messages.append({"role": "tool", "tool_call_id": result.call_id, "content": result.result})
        return await self._complete()

    async def _complete(self) -> ProviderResponse:
        try:
            response = await self._client.chat.completions.create(messages=self.messages, **self._params)
        except APIError as e:
            message = _api_error_message(e)
            console.error(f"An API error occurred: {message}")
            raise ProviderAPIError(message) from e

        parsed = parse_chat_completion(response)
        if response.choices:
            message = response.choices[0].message
            assistant: Dict[str, Any] = {"role": "assistant", "content": message.content}
            if message.tool_calls:
                assistant["tool_calls"] = [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {"name": call.function.name, "arguments": call.function.arguments},
                    }
                    for call in message.tool_calls
                ]
            self.messages.append(assistant)
        return parsed


class ChatGPTProvider(LLMProvider):
    """
    OpenAI chat completions. Reasoning models (o1/o3/o4) take no system message
    and a larger `max_completion_tokens` budget.
    """
    id = "chatgpt"
    name = "ChatGPT"
    models_require_credential = False

    # OpenAI models - latest first
    MODELS = [
        ProviderModel(id="gpt-4.1", display_name="GPT-4.1"),
        ProviderModel(id="gpt-4.1-mini", display_name="GPT-4.1 Mini"),
        ProviderModel(id="gpt-4.1-nano", display_name="GPT-4.1 Nano"),
        ProviderModel(id="gpt-4o", display_name="GPT-4o"),
        ProviderModel(id="gpt-4o-mini", display_name="GPT-4o Mini"),
        ProviderModel(id="gpt-4-turbo", display_name="GPT-4 Turbo"),
        ProviderModel(id="o4-mini", display_name="o4 Mini"),
        ProviderModel(id="o3", display_name="o3"),
        ProviderModel(id="o3-mini", display_name="o3 Mini"),
        ProviderModel(id="o1", display_name="o1"),
        ProviderModel(id="o1-mini", display_name="o1 Mini"),
        ProviderModel(id="o1-pro", display_name="o1 Pro"),
    ]

    def __init__(self, vault: VaultService, key_file: str = "chatgpt_api_key.txt",
                 max_tokens: int = 4096, reasoning_max_tokens: int = 16384,
                 client_factory: Optional[Callable[[str], Any]] = None):
        super().__init__(vault, key_file)
        self._max_tokens = max_tokens
        self._reasoning_max_tokens = reasoning_max_tokens
        self._client_factory = client_factory or (lambda api_key: AsyncOpenAI(api_key=api_key))
        self._client: Optional[Any] = None

    def _on_credential(self, api_key: str):
        self._client = self._client_factory(api_key)

    async def _fetch_models(self) -> List[ProviderModel]:
        return list(self.MODELS)

    def start_session(self, model_id: str, system_instruction: Optional[str], history: List[ConversationTurn],
                      tools: List[Dict[str, Any]], mode: ChatMode, options: ChatOptions) -> ChatGPTSession:
        self.require_ready()

        reasoning = is_reasoning_model(model_id)
        messages: List[Dict[str, Any]] = []
        if system_instruction and not reasoning:
            messages.append({"role": "system", "content": system_instruction})
        messages.extend(
            {"role": "assistant" if turn.role == "model" else "user", "content": turn.text}
            for turn in history
        )

        params: Dict[str, Any] = {"model": model_id}
        if tools:
            params["tools"] = [{"type": "function", "function": tool} for tool in tools]
            params["tool_choice"] = "auto"
        if reasoning:
            params["max_completion_tokens"] = self._reasoning_max_tokens
            if options.high_reasoning:
                params["reasoning_effort"] = "high"
        else:
            params["max_tokens"] = self._max_tokens

        return ChatGPTSession(self._client, params, messages)

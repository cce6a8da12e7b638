# Google Gemini adapter built directly on the Generative Language REST API.
# Date: 2026-10-18
# Version: 0.1.0

from typing import Any, Dict, List, Optional

import httpx

from vault_assistant.core.errors import ProviderAPIError
from vault_assistant.models.common import (
    Attachment,
    ChatMode,
    ChatOptions,
    CodeResultPart,
    ConversationTurn,
    ExecutableCodePart,
    FinishReason,
    InlineDataPart,
    ProviderModel,
    ProviderResponse,
    TextPart,
    ThoughtPart,
    ToolCallRequest,
    ToolCallResult,
)
from vault_assistant.services.providers.base import LLMProvider, ProviderSession
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console

_FINISH_REASONS = {
    "STOP": FinishReason.STOP,
    "MAX_TOKENS": FinishReason.MAX_TOKENS,
    "SAFETY": FinishReason.SAFETY,
    "BLOCKLIST": FinishReason.SAFETY,
    "PROHIBITED_CONTENT": FinishReason.SAFETY,
    "SPII": FinishReason.SAFETY,
    "IMAGE_SAFETY": FinishReason.SAFETY,
    "RECITATION": FinishReason.RECITATION,
    "OTHER": FinishReason.BLOCKED_OTHER,
}


def _gemini_schema(schema: Any) -> Any:
    """Gemini's OpenAPI subset spells JSON types in upper case."""
    if isinstance(schema, dict):
        converted = {}
        for key, value in schema.items():
            if key == "type" and isinstance(value, str):
                converted[key] = value.upper()
            elif key == "properties":
                converted[key] = {name: _gemini_schema(prop) for name, prop in value.items()}
            else:
                converted[key] = _gemini_schema(value)
        return converted
    if isinstance(schema, list):
        return [_gemini_schema(item) for item in schema]
    return schema


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message", response.reason_phrase)
    return response.reason_phrase


def parse_gemini_response(data: Dict[str, Any]) -> ProviderResponse:
    """Translates a generateContent JSON body into the canonical response."""
    usage = data.get("usageMetadata")
    candidates = data.get("candidates") or []
    if not candidates:
        block_reason = (data.get("promptFeedback") or {}).get("blockReason")
        finish = FinishReason.UNKNOWN
        if block_reason:
            finish = _FINISH_REASONS.get(block_reason, FinishReason.BLOCKED_OTHER)
        return ProviderResponse(finish_reason=finish, usage=usage)

    candidate = candidates[0]
    parts = []
    tool_calls = []
    for part in (candidate.get("content") or {}).get("parts") or []:
        if part.get("thought") and part.get("text"):
            parts.append(ThoughtPart(text=part["text"]))
        elif "functionCall" in part:
            call = part["functionCall"]
            tool_calls.append(ToolCallRequest(name=call.get("name", ""), arguments=call.get("args") or {}, call_id=call.get("id")))
        elif part.get("text"):
            parts.append(TextPart(text=part["text"]))
        elif "inlineData" in part:
            inline = part["inlineData"]
            parts.append(InlineDataPart(mime_type=inline.get("mimeType", "application/octet-stream"), data=inline.get("data", "")))
        elif "executableCode" in part:
            code = part["executableCode"]
            parts.append(ExecutableCodePart(language=code.get("language", "").lower(), code=code.get("code", "")))
        elif "codeExecutionResult" in part:
            parts.append(CodeResultPart(output=part["codeExecutionResult"].get("output", "")))

    finish = _FINISH_REASONS.get(candidate.get("finishReason", ""), FinishReason.UNKNOWN)
    if tool_calls:
        finish = FinishReason.TOOL_CALLS
    return ProviderResponse(parts=parts, tool_calls=tool_calls, finish_reason=finish, usage=usage)


class GeminiSession(ProviderSession):
    """Keeps the `contents` list of one generateContent conversation."""

    def __init__(self, provider: "GeminiProvider", model_id: str, request_template: Dict[str, Any],
                 contents: List[Dict[str, Any]]):
        self._provider = provider
        self._model_id = model_id
        self._template = request_template
        self.contents = contents

    async def send_message(self, prompt: str, attachments: List[Attachment]) -> ProviderResponse:
        parts: List[Dict[str, Any]] = [{"text": prompt}]
        for attachment in attachments:
            parts.append({"inlineData": {"mimeType": attachment.mime_type, "data": attachment.data}})
        self.contents.append({"role": "user", "parts": parts})
        return await self._generate()

    async def send_tool_results(self, results: List[ToolCallResult]) -> ProviderResponse:
        parts = []
        for result in results:
            function_response: Dict[str, Any] = {"name": result.tool_name, "response": {"result": result.result}}
            if result.call_id:
                function_response["id"] = result.call_id
            parts.append({"functionResponse": function_response})
        self.contents.append({"role": "user", "parts": parts})
        return await self._generate()

    async def _generate(self) -> ProviderResponse:
        body = dict(self._template)
        body["contents"] = self.contents
        data = await self._provider.request("POST", f"models/{self._model_id}:generateContent", json=body)

        candidates = data.get("candidates") or []
        if candidates and candidates[0].get("content"):
            # The model turn, function calls included, must be replayed verbatim.
            content = dict(candidates[0]["content"])
            content.setdefault("role", "model")
            self.contents.append(content)
        return parse_gemini_response(data)


class GeminiProvider(LLMProvider):
    """
    Google Gemini over REST. Web mode uses Gemini's native Google Search tool,
    so the web-search function is never declared to this provider.
    """
    id = "gemini"
    name = "Google Gemini"
    fallback_models = [
        ProviderModel(id="gemini-2.5-flash", display_name="Gemini 2.5 Flash"),
        ProviderModel(id="gemini-2.5-pro", display_name="Gemini 2.5 Pro"),
    ]

    def __init__(self, vault: VaultService, key_file: str = "gemini_api_key.txt",
                 base_url: str = "https://generativelanguage.googleapis.com/v1beta",
                 timeout: float = 120.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(vault, key_file)
        self._base_url = base_url.rstrip("/") + "/"
        self._timeout = timeout
        self._transport = transport

    async def request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        headers = {"x-goog-api-key": self._api_key or ""}
        console.debug(f"Gemini {method} {path}")
        try:
            async with httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout,
                                         transport=self._transport) as client:
                response = await client.request(method, path, headers=headers, **kwargs)
                response.raise_for_status()
                try:
                    return response.json()
                except ValueError as e:
                    console.error(f"Gemini returned a non-JSON body for {method} {path}")
                    raise ProviderAPIError("Gemini returned a non-JSON response") from e
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            console.error(f"Gemini API error ({e.response.status_code}): {message}")
            raise ProviderAPIError(message) from e
        except httpx.HTTPError as e:
            console.error(f"Gemini request failed: {e}")
            raise ProviderAPIError(f"Request to Gemini failed: {e}") from e

    async def _fetch_models(self) -> List[ProviderModel]:
        data = await self.request("GET", "models", params={"pageSize": 1000})
        models = [
            ProviderModel(id=model["name"].replace("models/", ""), display_name=model.get("displayName") or model["name"])
            for model in data.get("models", [])
            if model.get("name") and "generateContent" in (model.get("supportedGenerationMethods") or [])
        ]
        return sorted(models, key=lambda model: model.display_name, reverse=True)

    def start_session(self, model_id: str, system_instruction: Optional[str], history: List[ConversationTurn],
                      tools: List[Dict[str, Any]], mode: ChatMode, options: ChatOptions) -> GeminiSession:
        self.require_ready()

        template: Dict[str, Any] = {}
        if mode == ChatMode.WEB:
            template["tools"] = [{"googleSearch": {}}]
        elif tools:
            template["tools"] = [{"functionDeclarations": [_gemini_schema(tool) for tool in tools]}]
        if system_instruction:
            template["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        if options.high_reasoning:
            template["generationConfig"] = {"thinkingConfig": {"includeThoughts": True}}
            console.info("Gemini: high reasoning enabled (thinkingConfig added)")

        contents = [{"role": turn.role, "parts": [{"text": turn.text}]} for turn in history]
        return GeminiSession(self, model_id, template, contents)

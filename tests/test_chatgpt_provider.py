import asyncio
import json
from types import SimpleNamespace

import httpx
import openai
import pytest
from openai.types.chat import ChatCompletion

from fakes import RecordingCreate
from vault_assistant.core.errors import ProviderAPIError
from vault_assistant.models.common import (
    Attachment,
    ChatMode,
    ChatOptions,
    ConversationTurn,
    FinishReason,
    ToolCallResult,
)
from vault_assistant.services.providers.chatgpt import ChatGPTProvider, is_reasoning_model, parse_chat_completion

TOOLS = [{"name": "read_note", "description": "Read the content of a note.",
          "parameters": {"type": "object", "properties": {"filename": {"type": "string"}}, "required": ["filename"]}}]


def completion(content=None, tool_calls=None, finish_reason="stop", usage=None) -> ChatCompletion:
    message = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = [
            {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}
            for call_id, name, arguments in tool_calls
        ]
    data = {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o",
        "choices": [{"index": 0, "finish_reason": finish_reason, "message": message}],
    }
    if usage:
        data["usage"] = usage
    return ChatCompletion.model_validate(data)


def _provider(vault, create: RecordingCreate) -> ChatGPTProvider:
    vault.save_note("chatgpt_api_key.txt", "sk-test")
    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return ChatGPTProvider(vault, max_tokens=1000, reasoning_max_tokens=9000, client_factory=lambda api_key: client)


def test_reasoning_model_detection() -> None:
    assert is_reasoning_model("o1-mini")
    assert is_reasoning_model("o3")
    assert is_reasoning_model("o4-mini")
    assert not is_reasoning_model("gpt-4o")


def test_parse_text_and_usage() -> None:
    response = parse_chat_completion(completion(
        content="Hi", usage={"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
    ))

    assert response.parts[0].text == "Hi"
    assert response.finish_reason == FinishReason.STOP
    assert response.usage["total_tokens"] == 5


def test_parse_tool_calls_and_bad_arguments() -> None:
    response = parse_chat_completion(completion(
        tool_calls=[("call_1", "read_note", '{"filename": "a.md"}'), ("call_2", "list_files", "{not json")],
        finish_reason="tool_calls",
    ))

    assert response.parts == []
    assert response.finish_reason == FinishReason.TOOL_CALLS
    assert [(call.call_id, call.name, call.arguments) for call in response.tool_calls] == [
        ("call_1", "read_note", {"filename": "a.md"}),
        ("call_2", "list_files", {}),
    ]


def test_content_filter_maps_to_safety() -> None:
    assert parse_chat_completion(completion(finish_reason="content_filter")).finish_reason == FinishReason.SAFETY


def test_session_round_trip(vault) -> None:
    create = RecordingCreate([
        completion(tool_calls=[("call_1", "read_note", '{"filename": "a.md"}')], finish_reason="tool_calls"),
        completion(content="It says A."),
    ])
    provider = _provider(vault, create)
    history = [ConversationTurn(role="user", text="q0"), ConversationTurn(role="model", text="a0")]
    attachments = [
        Attachment(name="cat.png", mime_type="image/png", data="QUJD"),
        Attachment(name="doc.pdf", mime_type="application/pdf", data="JVBE"),
    ]

    async def scenario():
        session = provider.start_session("gpt-4o", "System says hi.", history, TOOLS, ChatMode.DOCUMENT, ChatOptions())
        first = await session.send_message("read a.md", attachments)
        second = await session.send_tool_results([
            ToolCallResult(tool_name="read_note", result="A", call_id="call_1"),
        ])
        return first, second

    first, second = asyncio.run(scenario())

    assert first.tool_calls[0].call_id == "call_1"
    assert second.parts[0].text == "It says A."

    request = create.calls[0]
    assert request["model"] == "gpt-4o"
    assert request["max_tokens"] == 1000
    assert request["tool_choice"] == "auto"
    assert request["tools"] == [{"type": "function", "function": TOOLS[0]}]
    messages = request["messages"]
    assert messages[0] == {"role": "system", "content": "System says hi."}
    assert messages[1:3] == [{"role": "user", "content": "q0"}, {"role": "assistant", "content": "a0"}]
    user_content = messages[3]["content"]
    assert user_content[0] == {"type": "text", "text": "read a.md"}
    assert user_content[1]["image_url"]["url"] == "data:image/png;base64,QUJD"
    assert "doc.pdf" in user_content[2]["text"]

    follow_up = create.calls[1]["messages"]
    assert follow_up[4]["role"] == "assistant"
    assert follow_up[4]["tool_calls"][0]["id"] == "call_1"
    assert json.loads(follow_up[4]["tool_calls"][0]["function"]["arguments"]) == {"filename": "a.md"}
    assert follow_up[5] == {"role": "tool", "tool_call_id": "call_1", "content": "A"}


def test_reasoning_model_request_shape(vault) -> None:
    create = RecordingCreate([completion(content="ok")])
    provider = _provider(vault, create)

    async def scenario():
        session = provider.start_session("o3-mini", "ignored", [], [], ChatMode.DOCUMENT,
                                         ChatOptions(high_reasoning=True))
        await session.send_message("think", [])

    asyncio.run(scenario())

    request = create.calls[0]
    assert request["max_completion_tokens"] == 9000
    assert request["reasoning_effort"] == "high"
    assert "max_tokens" not in request
    assert "tools" not in request
    assert all(message["role"] != "system" for message in request["messages"])


def test_api_error_becomes_provider_error(vault) -> None:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    create = RecordingCreate([openai.APIError("boom", request, body={"message": "Invalid model"})])
    provider = _provider(vault, create)

    async def scenario():
        session = provider.start_session("gpt-4o", None, [], [], ChatMode.DOCUMENT, ChatOptions())
        await session.send_message("hi", [])

    with pytest.raises(ProviderAPIError, match="Invalid model"):
        asyncio.run(scenario())


def test_static_catalog_without_key(vault) -> None:
    provider = ChatGPTProvider(vault, client_factory=lambda api_key: None)

    models = asyncio.run(provider.get_models())

    assert models[0].id == "gpt-4.1"
    assert len(models) == 12

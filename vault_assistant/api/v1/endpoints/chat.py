# The module is to define the API endpoint for one conversation turn.
# Date: 2026-10-18
# Version: 0.1.0

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from vault_assistant.core.assistant import Assistant, get_assistant
from vault_assistant.core.context import build_context
from vault_assistant.models.api_models import ChatRequest, ChatResponse
from vault_assistant.models.common import ChatOptions
from vault_assistant.utils.logger import console

router = APIRouter()


@router.post("/", response_model=ChatResponse)
async def chat_with_assistant(request: ChatRequest, assistant: Assistant = Depends(get_assistant)):
    """
    Handles a single turn in a conversation. Turn failures are part of the
    conversation, so they come back as 200 with 'Error: ...' content.
    """
    provider_id = request.provider or assistant.settings.DEFAULT_PROVIDER
    try:
        provider = assistant.get_provider(provider_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown provider: {provider_id}")

    console.info(f"Received {request.mode.value} chat request for {provider_id}/{request.model}")

    context = build_context(assistant.vault, assistant.templates,
                            request.active_document_path, request.template_path)
    tool_events: List[str] = []
    metadata: Dict[str, Any] = {}

    content = await assistant.orchestrator.chat(
        provider,
        request.prompt,
        request.history,
        context,
        request.model,
        request.mode,
        on_tool_notify=tool_events.append,
        attachments=request.attachments,
        on_metadata=metadata.update,
        options=ChatOptions(high_reasoning=request.high_reasoning),
    )

    return ChatResponse(content=content, usage=metadata.get("usage"), tool_events=tool_events)

# The module is to define the API models for the vault assistant.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from vault_assistant.models.common import Attachment, ChatMode, ConversationTurn, ProviderModel


class ChatRequest(BaseModel):
    """
    Defines the request body for the /v1/chat endpoint.
    Attributes:
        provider (str): Provider id; the configured default when omitted.
        model (str): Model id within the provider's catalog.
        prompt (str): The user's new message.
        history (list): Prior user and model turns, oldest first.
        mode (ChatMode): Document or web capability profile.
        attachments (list): Files staged for this turn only.
        active_document_path (str): Vault note to include as context.
        template_path (str): Template note to include as context.
        high_reasoning (bool): Ask the model for its thinking process.
    """
    provider: Optional[str] = Field(default=None, description="Provider id, e.g. 'gemini'.")
    model: str = Field(..., description="Model id to use for this turn.")
    prompt: str = Field(..., description="The user's text input.")
    history: List[ConversationTurn] = Field(default_factory=list)
    mode: ChatMode = ChatMode.DOCUMENT
    attachments: List[Attachment] = Field(default_factory=list)
    active_document_path: Optional[str] = None
    template_path: Optional[str] = None
    high_reasoning: bool = False


class ChatResponse(BaseModel):
    """
    Defines the response body for the /v1/chat endpoint.
    Attributes:
        role (str): Always 'model'.
        content (str): The rendered assistant message, errors included.
        usage (dict): Token accounting reported by the provider, if any.
        tool_events (list): The tool notifications emitted during the turn.
    """
    role: str = "model"
    content: str
    usage: Optional[Dict[str, Any]] = None
    tool_events: List[str] = Field(default_factory=list)


class ProviderInfo(BaseModel):
    id: str
    name: str


class ModelCatalogResponse(BaseModel):
    provider: str
    models: List[ProviderModel]
    last_used: Optional[str] = None


class ModelSelection(BaseModel):
    model: str


class ProofreadRequest(BaseModel):
    provider: Optional[str] = None
    model: str
    text: str = Field(..., min_length=1)


class ProofreadResponse(BaseModel):
    text: str

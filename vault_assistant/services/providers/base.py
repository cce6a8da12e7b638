# The module is to define the contract every LLM provider adapter implements.
# Date: 2026-10-18
# Version: 0.1.0

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from vault_assistant.core.errors import CredentialsNotFoundError, ProviderAPIError
from vault_assistant.models.common import (
    Attachment,
    ChatMode,
    ChatOptions,
    ConversationTurn,
    ProviderModel,
    ProviderResponse,
    ToolCallResult,
)
from vault_assistant.services.credentials import load_credential
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


def attachment_placeholder(attachment: Attachment, provider_name: str) -> str:
    """Text sent in place of an attachment the vendor cannot receive."""
    return f"\n[Attachment: {attachment.name} ({attachment.mime_type}) - Content not sent to {provider_name} yet]"


class ProviderSession(ABC):
    """
    Vendor-shaped message state for one conversational turn.

    A session is created per turn and discarded afterwards; it is the only
    place the vendor's own message format lives. Both methods return the
    canonical ProviderResponse.
    """

    @abstractmethod
    async def send_message(self, prompt: str, attachments: List[Attachment]) -> ProviderResponse:
        """Sends the user message for this turn."""

    @abstractmethod
    async def send_tool_results(self, results: List[ToolCallResult]) -> ProviderResponse:
        """Sends one result per tool call of the previous response, in order."""


class LLMProvider(ABC):
    """
    Abstract Base Class for all LLM providers.
    Attributes:
        id (str): Stable identifier used by the UI and in preferences.
        name (str): Human readable provider name.
        fallback_models (list): Catalog used when a live listing fails.
        models_require_credential (bool): Whether the catalog is hidden until a key exists.
    """
    id: str
    name: str
    fallback_models: List[ProviderModel] = []
    models_require_credential: bool = True

    def __init__(self, vault: VaultService, key_file: str):
        self._vault = vault
        self._key_file = key_file
        self._api_key: Optional[str] = None
        self._models: Optional[List[ProviderModel]] = None

    @property
    def is_ready(self) -> bool:
        return self._api_key is not None

    def initialize(self):
        """Loads the credential from the vault, if present."""
        api_key = load_credential(self._vault, self._key_file)
        if api_key:
            self._api_key = api_key
            self._on_credential(api_key)
            console.info(f"{self.name} API Key loaded.")

    def _on_credential(self, api_key: str):
        """Hook for adapters that build an SDK client once the key is known."""

    def require_ready(self):
        if not self.is_ready:
            self.initialize()
        if not self.is_ready:
            raise CredentialsNotFoundError(self.name, self._key_file)

    async def get_models(self) -> List[ProviderModel]:
        """
        Returns the model catalog. Never raises: a missing credential or a
        failing listing endpoint degrades to an empty or fallback list.
        """
        if self._models is not None:
            return self._models

        if not self.is_ready:
            self.initialize()
        if self.models_require_credential and not self.is_ready:
            return []

        try:
            models = await self._fetch_models()
        except ProviderAPIError as e:
            console.error(f"Error fetching {self.name} models: {e}")
            return list(self.fallback_models)

        if models:
            self._models = models
        return models

    @abstractmethod
    async def _fetch_models(self) -> List[ProviderModel]:
        """Builds the catalog, raising ProviderAPIError when a live listing fails."""

    @abstractmethod
    def start_session(
        self,
        model_id: str,
        system_instruction: Optional[str],
        history: List[ConversationTurn],
        tools: List[Dict[str, Any]],
        mode: ChatMode,
        options: ChatOptions,
    ) -> ProviderSession:
        """
        Opens the vendor message state for one turn.

        Raises:
            CredentialsNotFoundError: If no credential is available.
        """

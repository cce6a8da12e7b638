# Wires the vault, tools, providers and orchestrator together from the settings.
# Date: 2026-10-18
# Version: 0.1.0

from functools import lru_cache
from typing import Dict, List

from vault_assistant.core.config import Settings, get_settings
from vault_assistant.core.orchestrator import Orchestrator
from vault_assistant.core.project_config import ProjectConfig
from vault_assistant.core.tool_registry import ToolRegistry
from vault_assistant.services.preferences import PreferenceStore
from vault_assistant.services.providers.base import LLMProvider
from vault_assistant.services.providers.chatgpt import ChatGPTProvider
from vault_assistant.services.providers.claude import ClaudeProvider
from vault_assistant.services.providers.gemini import GeminiProvider
from vault_assistant.services.templates import TemplateService
from vault_assistant.services.vault import VaultService
from vault_assistant.services.web_search import WebSearchService
from vault_assistant.utils.logger import console


class Assistant:
    """Everything one vault needs to serve conversation turns."""

    def __init__(self, settings: Settings, vault: VaultService, providers: List[LLMProvider],
                 orchestrator: Orchestrator, project_config: ProjectConfig,
                 templates: TemplateService, preferences: PreferenceStore):
        self.settings = settings
        self.vault = vault
        self.providers: Dict[str, LLMProvider] = {provider.id: provider for provider in providers}
        self.orchestrator = orchestrator
        self.project_config = project_config
        self.templates = templates
        self.preferences = preferences

    def get_provider(self, provider_id: str) -> LLMProvider:
        """Raises KeyError for an unknown provider id."""
        return self.providers[provider_id]


def build_assistant(settings: Settings) -> Assistant:
    vault = VaultService(settings.VAULT_PATH, trash_folder=settings.TRASH_FOLDER)
    search = WebSearchService(vault, key_file=settings.TAVILY_KEY_FILE)
    project_config = ProjectConfig(vault, settings.CONFIG_DOCUMENT)

    providers: List[LLMProvider] = [
        GeminiProvider(vault, key_file=settings.GEMINI_KEY_FILE, base_url=settings.GEMINI_BASE_URL,
                       timeout=settings.GEMINI_TIMEOUT),
        ChatGPTProvider(vault, key_file=settings.CHATGPT_KEY_FILE, max_tokens=settings.MAX_OUTPUT_TOKENS,
                        reasoning_max_tokens=settings.REASONING_MAX_TOKENS),
        ClaudeProvider(vault, key_file=settings.ANTHROPIC_KEY_FILE, max_tokens=settings.MAX_OUTPUT_TOKENS,
                       thinking_budget=settings.THINKING_BUDGET_TOKENS),
    ]

    orchestrator = Orchestrator(ToolRegistry.create(vault, search), project_config,
                                max_tool_rounds=settings.MAX_TOOL_ROUNDS)
    console.info(f"Assistant ready for vault {vault.root}")
    return Assistant(
        settings=settings,
        vault=vault,
        providers=providers,
        orchestrator=orchestrator,
        project_config=project_config,
        templates=TemplateService(vault, settings.TEMPLATES_FOLDER),
        preferences=PreferenceStore(vault.root / settings.PREFERENCES_FILE),
    )


@lru_cache
def get_assistant() -> Assistant:
    return build_assistant(get_settings())

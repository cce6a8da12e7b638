import pytest

from fakes import FakeTavilyClient
from vault_assistant.core.project_config import ProjectConfig
from vault_assistant.core.tool_registry import ToolRegistry
from vault_assistant.services.vault import VaultService
from vault_assistant.services.web_search import WebSearchService


@pytest.fixture
def vault(tmp_path) -> VaultService:
    return VaultService(str(tmp_path))


@pytest.fixture
def tavily_client() -> FakeTavilyClient:
    return FakeTavilyClient()


@pytest.fixture
def web_search(vault, tavily_client) -> WebSearchService:
    return WebSearchService(vault, client_factory=lambda api_key: tavily_client)


@pytest.fixture
def registry(vault, web_search) -> ToolRegistry:
    return ToolRegistry.create(vault, web_search)


@pytest.fixture
def project_config(vault) -> ProjectConfig:
    return ProjectConfig(vault)

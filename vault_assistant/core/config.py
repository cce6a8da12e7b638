# The module is to define the configuration settings for the vault assistant.
# Date: 2026-10-18
# Version: 0.1.0

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """
    The Settings class is used to define the configuration settings for the application.
    It inherits from BaseSettings, which allows it to load environment variables
    and provides type validation for the settings.
    Attributes:
        VAULT_PATH (str): Root directory of the note vault.
        CONFIG_DOCUMENT (str): Vault path of the project config document.
        TEMPLATES_FOLDER (str): Vault folder holding context templates.
        VOCABULARY_DOCUMENT (str): Vault path of the proofreading vocabulary.
        TRASH_FOLDER (str): Vault folder that receives soft-deleted notes.
        PREFERENCES_FILE (str): Vault path of the last-used model store.
        GEMINI_KEY_FILE (str): Credential file for Google Gemini.
        CHATGPT_KEY_FILE (str): Credential file for OpenAI ChatGPT.
        ANTHROPIC_KEY_FILE (str): Credential file for Anthropic Claude.
        TAVILY_KEY_FILE (str): Credential file for Tavily web search.
        GEMINI_BASE_URL (str): Base URL for the Gemini REST API.
        GEMINI_TIMEOUT (float): HTTP timeout in seconds for Gemini requests.
        MAX_TOOL_ROUNDS (int): Maximum tool-resolution rounds per turn.
        MAX_OUTPUT_TOKENS (int): Output token cap for regular chat models.
        REASONING_MAX_TOKENS (int): Output token cap for reasoning models.
        THINKING_BUDGET_TOKENS (int): Token budget for extended thinking.
        DEFAULT_PROVIDER (str): Provider id selected when the UI sends none.
    """
    # Vault layout
    VAULT_PATH: str = "."
    CONFIG_DOCUMENT: str = "ASSISTANT.md"
    TEMPLATES_FOLDER: str = "Assistant Templates"
    VOCABULARY_DOCUMENT: str = "Assistant/Spelling Check.md"
    TRASH_FOLDER: str = "Trash"
    PREFERENCES_FILE: str = ".assistant/preferences.json"

    # Credentials, read from the vault root
    GEMINI_KEY_FILE: str = "gemini_api_key.txt"
    CHATGPT_KEY_FILE: str = "chatgpt_api_key.txt"
    ANTHROPIC_KEY_FILE: str = "anthropic_api_key.txt"
    TAVILY_KEY_FILE: str = "tavily_api_key.txt"

    # Gemini
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT: float = 120.0

    # Orchestration
    MAX_TOOL_ROUNDS: int = 5
    MAX_OUTPUT_TOKENS: int = 4096
    REASONING_MAX_TOKENS: int = 16384
    THINKING_BUDGET_TOKENS: int = 2048
    DEFAULT_PROVIDER: str = "gemini"

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'

# lru_cache to cache the settings instance.
@lru_cache
def get_settings():
    return Settings()

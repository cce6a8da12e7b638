# The module is to define the exception types shared across the vault assistant.
# Date: 2026-10-18
# Version: 0.1.0


class VaultAssistantError(Exception):
    """Base class for every error raised by the vault assistant."""


class CredentialsNotFoundError(VaultAssistantError):
    """A provider credential file is missing from the vault root."""

    def __init__(self, provider_name: str, key_file: str):
        self.provider_name = provider_name
        self.key_file = key_file
        super().__init__(
            f"{provider_name} API Key not found. Please create {key_file} in your vault root."
        )


class ProviderAPIError(VaultAssistantError):
    """A vendor API or network call failed at the provider boundary."""


class DocumentNotFoundError(VaultAssistantError):
    """A vault path does not resolve to a document."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class InvalidPathError(VaultAssistantError):
    """A vault path escapes the vault root."""


class UnknownToolError(VaultAssistantError):
    """The model asked for a tool that is not part of the closed tool set."""


class ToolNotAllowedError(VaultAssistantError):
    """The model asked for a tool outside the active mode's profile."""

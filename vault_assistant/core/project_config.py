# Reads the optional project config document: system instruction and custom commands.
# Date: 2026-10-18
# Version: 0.1.0

import re
from typing import List, Optional

from vault_assistant.core.errors import DocumentNotFoundError, InvalidPathError
from vault_assistant.models.common import ChatMode, CustomCommand
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console

DEFAULT_DOCUMENT_INSTRUCTION = (
    "You are a helpful AI assistant integrated into the user's note vault. "
    "You can read and modify notes in the vault."
)
WEB_INSTRUCTION = (
    "You are a helpful AI assistant with access to web search. "
    "Use it to provide up-to-date information. Always cite your sources."
)

CUSTOM_COMMANDS_SECTION = re.compile(r"^##[ \t]+Custom Commands[ \t]*\r?\n(.*?)(?=^#|\Z)", re.MULTILINE | re.DOTALL)


def parse_custom_commands(content: str) -> List[CustomCommand]:
    """
    Parses `- Label: prompt text` lines under the `## Custom Commands` heading.
    The label ends at the first colon; the prompt keeps any later colons.
    """
    match = CUSTOM_COMMANDS_SECTION.search(content)
    if not match:
        return []

    commands = []
    for line in match.group(1).splitlines():
        line = line.strip()
        if not line.startswith("-"):
            continue
        label, separator, prompt = line[1:].partition(":")
        if not separator or not label.strip() or not prompt.strip():
            continue
        commands.append(CustomCommand(label=label.strip(), prompt=prompt.strip()))
    return commands


class ProjectConfig:
    """The project-level config document stored at the vault root."""

    def __init__(self, vault: VaultService, document_path: str = "ASSISTANT.md"):
        self._vault = vault
        self.document_path = document_path

    def _read(self) -> Optional[str]:
        try:
            return self._vault.read_file(self.document_path)
        except DocumentNotFoundError:
            return None
        except (InvalidPathError, OSError, UnicodeDecodeError) as e:
            console.warning(f"Failed to load {self.document_path}: {e}")
            return None

    def system_instruction(self, mode: ChatMode) -> str:
        if mode == ChatMode.WEB:
            return WEB_INSTRUCTION

        content = self._read()
        if content and content.strip():
            console.info(f"Loaded system instructions from {self.document_path}")
            return content
        return DEFAULT_DOCUMENT_INSTRUCTION

    def custom_commands(self) -> List[CustomCommand]:
        content = self._read()
        return parse_custom_commands(content) if content else []

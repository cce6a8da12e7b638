# Builds the optional context block attached to an outgoing prompt.
# Date: 2026-10-18
# Version: 0.1.0

from typing import Optional

from vault_assistant.core.errors import VaultAssistantError
from vault_assistant.services.templates import TemplateService
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


def build_context(vault: VaultService, templates: TemplateService,
                  active_path: Optional[str] = None, template_path: Optional[str] = None) -> Optional[str]:
    """
    Combines the active note and the selected template into one context string.
    A note or template that cannot be read is skipped with a warning.
    Returns None when there is nothing to add.
    """
    context = None

    if active_path:
        try:
            content = vault.read_file(active_path)
            context = f"Active File Context ({active_path}):\n\n{content}"
            console.info(f"Included active file '{active_path}' as context")
        except (VaultAssistantError, UnicodeDecodeError) as e:
            console.warning(f"Skipping active file context: {e}")

    if template_path:
        try:
            template_content = templates.read_template(template_path)
            name = template_path.rsplit("/", 1)[-1]
            template_context = f"\n\nAdditional Context from Template ({name}):\n{template_content}"
            context = context + template_context if context else template_context
            console.info(f"Included template '{name}'")
        except (VaultAssistantError, UnicodeDecodeError) as e:
            console.warning(f"Failed to read selected template: {e}")

    return context

# Lists and reads the context templates kept in a vault folder.
# Date: 2026-10-18
# Version: 0.1.0

from typing import List

from vault_assistant.models.common import Template
from vault_assistant.services.vault import VaultService


class TemplateService:
    """
    Templates are ordinary notes inside one vault folder. The UI offers them
    by name and the selected one is appended to the turn's context.
    """

    def __init__(self, vault: VaultService, folder: str = "Assistant Templates"):
        self._vault = vault
        self.folder = folder

    def list_templates(self) -> List[Template]:
        paths = self._vault.list_files(self.folder, recursive=False, limit=1000)
        templates = []
        for path in paths:
            file_name = path.rsplit("/", 1)[-1]
            name = file_name[:-3] if file_name.endswith(".md") else file_name
            templates.append(Template(name=name, path=path))
        return templates

    def read_template(self, path: str) -> str:
        return self._vault.read_file(path)

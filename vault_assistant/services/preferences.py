# Remembers the last model selected for each provider.
# Date: 2026-10-18
# Version: 0.1.0

from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from vault_assistant.utils.logger import console


class ModelPreferences(BaseModel):
    """Persisted preference document."""
    last_models: Dict[str, str] = Field(default_factory=dict, description="Provider id to last used model id.")


class PreferenceStore:
    """
    A small JSON-backed settings store scoped to one file. It is handed to the
    UI layer explicitly; the orchestrator never reads it.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    def _load(self) -> ModelPreferences:
        if not self._path.is_file():
            return ModelPreferences()
        try:
            return ModelPreferences.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (ValidationError, OSError) as e:
            console.warning(f"Ignoring unreadable preferences file {self._path}: {e}")
            return ModelPreferences()

    def get_last_model(self, provider_id: str) -> Optional[str]:
        return self._load().last_models.get(provider_id)

    def set_last_model(self, provider_id: str, model_id: str):
        preferences = self._load()
        preferences.last_models[provider_id] = model_id
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(preferences.model_dump_json(indent=2), encoding="utf-8")

# The module is to define the API endpoints for the provider and model pickers.
# Date: 2026-10-18
# Version: 0.1.0

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from vault_assistant.core.assistant import Assistant, get_assistant
from vault_assistant.models.api_models import ModelCatalogResponse, ModelSelection, ProviderInfo
from vault_assistant.services.providers.base import LLMProvider

router = APIRouter()


def _provider_or_404(assistant: Assistant, provider_id: str) -> LLMProvider:
    try:
        return assistant.get_provider(provider_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown provider: {provider_id}")


@router.get("/", response_model=List[ProviderInfo])
def list_providers(assistant: Assistant = Depends(get_assistant)):
    return [ProviderInfo(id=provider.id, name=provider.name) for provider in assistant.providers.values()]


@router.get("/{provider_id}/models", response_model=ModelCatalogResponse)
async def list_models(provider_id: str, assistant: Assistant = Depends(get_assistant)):
    """
    Returns the provider's model catalog and the model last used with it, when
    that model is still in the catalog.
    """
    provider = _provider_or_404(assistant, provider_id)
    models = await provider.get_models()
    last_used = assistant.preferences.get_last_model(provider_id)
    if last_used not in {model.id for model in models}:
        last_used = None
    return ModelCatalogResponse(provider=provider_id, models=models, last_used=last_used)


@router.put("/{provider_id}/model", response_model=ModelSelection)
def select_model(provider_id: str, selection: ModelSelection, assistant: Assistant = Depends(get_assistant)):
    _provider_or_404(assistant, provider_id)
    assistant.preferences.set_last_model(provider_id, selection.model)
    return selection

# The module is to define the API endpoints for custom commands, templates and proofreading.
# Date: 2026-10-18
# Version: 0.1.0

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from vault_assistant.core.assistant import Assistant, get_assistant
from vault_assistant.core.errors import VaultAssistantError
from vault_assistant.core.proofreader import fix_spelling
from vault_assistant.models.api_models import ProofreadRequest, ProofreadResponse
from vault_assistant.models.common import CustomCommand, Template
from vault_assistant.utils.logger import console

router = APIRouter()


@router.get("/commands", response_model=List[CustomCommand])
def list_custom_commands(assistant: Assistant = Depends(get_assistant)):
    """Custom commands declared in the project config document."""
    return assistant.project_config.custom_commands()


@router.get("/templates", response_model=List[Template])
def list_templates(assistant: Assistant = Depends(get_assistant)):
    return assistant.templates.list_templates()


@router.post("/proofread", response_model=ProofreadResponse)
async def proofread(request: ProofreadRequest, assistant: Assistant = Depends(get_assistant)):
    provider_id = request.provider or assistant.settings.DEFAULT_PROVIDER
    try:
        provider = assistant.get_provider(provider_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown provider: {provider_id}")

    try:
        corrected = await fix_spelling(provider, assistant.vault, request.text, request.model,
                                       vocabulary_path=assistant.settings.VOCABULARY_DOCUMENT)
    except VaultAssistantError as e:
        console.error(f"Proofreading failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    return ProofreadResponse(text=corrected)

# The module is to define the API router for the vault assistant.
# Date: 2026-10-18
# Version: 0.1.0

from fastapi import APIRouter
from vault_assistant.api.v1.endpoints import chat, library, providers

api_router = APIRouter()

# Include the chat router with a '/chat' prefix
api_router.include_router(chat.router, prefix="/chat", tags=["Conversation"])

# Include the providers router with a '/providers' prefix
api_router.include_router(providers.router, prefix="/providers", tags=["Providers"])

# Commands, templates and proofreading hang off the root of /v1
api_router.include_router(library.router, tags=["Library"])

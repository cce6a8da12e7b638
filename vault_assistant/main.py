# The module provides the FastAPI application the chat UI talks to.
# Date: 2026-10-18
# Version: 0.1.0

from fastapi import FastAPI
from vault_assistant.api.v1.api import api_router
from vault_assistant.utils.logger import console

app = FastAPI(
    title="Vault Assistant",
    version="0.1.0",
    description="Chat assistant back end with tool access to a local note vault.",
)

@app.get("/", summary="Health Check", tags=["Status"])
def read_root():
    """Root endpoint to check if the service is alive."""
    console.info("Health check endpoint was hit.")
    return {"message": "Vault Assistant is alive and running!"}

# Include the v1 router with a global '/v1' prefix
app.include_router(api_router, prefix="/v1")

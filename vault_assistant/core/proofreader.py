# Fixes spelling, grammar and punctuation of a text with a single model call.
# Date: 2026-10-18
# Version: 0.1.0

from vault_assistant.core.errors import DocumentNotFoundError, ProviderAPIError
from vault_assistant.models.common import ChatMode, ChatOptions, TextPart
from vault_assistant.services.providers.base import LLMProvider
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console

PROOFREAD_PROMPT = """You are a helpful assistant.
Task:
1.  Fix the spelling, grammar, and punctuation of the following text.
2.  Use this SPECIALIZED VOCABULARY as the source of truth:

{vocabulary}

3.  Return ONLY the corrected text.

Input Text:
{text}"""


async def fix_spelling(provider: LLMProvider, vault: VaultService, text: str, model_id: str,
                       vocabulary_path: str = "Assistant/Spelling Check.md") -> str:
    """
    Returns `text` corrected by the model. The vocabulary note, when present,
    tells the model how domain words are spelled.

    Raises:
        CredentialsNotFoundError: If the provider has no credential.
        ProviderAPIError: If the call fails or the model returns no text.
    """
    try:
        vocabulary = vault.read_file(vocabulary_path)
    except DocumentNotFoundError:
        vocabulary = ""

    session = provider.start_session(
        model_id=model_id,
        system_instruction=None,
        history=[],
        tools=[],
        mode=ChatMode.DOCUMENT,
        options=ChatOptions(),
    )
    response = await session.send_message(PROOFREAD_PROMPT.format(vocabulary=vocabulary, text=text), [])

    corrected = "".join(part.text for part in response.parts if isinstance(part, TextPart)).strip()
    if not corrected:
        raise ProviderAPIError("The model returned no corrected text.")
    console.success(f"Proofread {len(text)} chars with {provider.name}.")
    return corrected

# Loads plaintext API credentials stored at well-known paths in the vault.
# Date: 2026-10-18
# Version: 0.1.0

from typing import Optional

from vault_assistant.core.errors import DocumentNotFoundError, InvalidPathError
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


def load_credential(vault: VaultService, key_file: str) -> Optional[str]:
    """
    Reads a single credential from `key_file` in the vault root.
    Returns None when the file is missing or empty, so callers can degrade.
    """
    try:
        key = vault.read_file(key_file).strip()
    except DocumentNotFoundError:
        console.warning(f"{key_file} not found.")
        return None
    except (InvalidPathError, OSError, UnicodeDecodeError) as e:
        console.error(f"Failed to read credential file {key_file}: {e}")
        return None

    if not key:
        console.warning(f"{key_file} is empty.")
        return None
    return key

# This module gives capability-scoped access to the note vault on disk.
# Date: 2026-10-18
# Version: 0.1.0

import re
import shutil
import time
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from vault_assistant.core.errors import DocumentNotFoundError, InvalidPathError, VaultAssistantError
from vault_assistant.utils.logger import console

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.MULTILINE | re.DOTALL)


def normalize_path(path: Optional[str]) -> str:
    """
    Normalizes a vault path: forward slashes, no leading or trailing slash,
    no empty or '.' segments. The vault root is the empty string.

    Raises:
        InvalidPathError: If the path tries to leave the vault with '..'.
    """
    if not path:
        return ""
    segments = [segment for segment in path.replace("\\", "/").split("/") if segment and segment != "."]
    if ".." in segments:
        raise InvalidPathError(f"Path escapes the vault: {path}")
    return "/".join(segments)


def split_frontmatter(content: str) -> Tuple[Optional[str], str]:
    """Splits a note into its raw YAML front matter (or None) and its body."""
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return None, content
    return match.group(1), content[match.end():]


class VaultService:
    """
    Reads and writes notes inside a vault directory.

    Every path handed to this class is vault-relative. Dot-prefixed entries
    (the host's own config folders) are never listed.
    """

    def __init__(self, root: str, trash_folder: str = "Trash"):
        self.root = Path(root).resolve()
        self.trash_folder = normalize_path(trash_folder) or "Trash"

    def _contains(self, target: Path) -> bool:
        return target.resolve().is_relative_to(self.root)

    def _resolve(self, path: str) -> Path:
        normalized = normalize_path(path)
        target = self.root / normalized if normalized else self.root
        # Symlinks must not lead out of the vault.
        if not self._contains(target):
            raise InvalidPathError(f"Path escapes the vault: {path}")
        return target

    def _relative(self, absolute: Path) -> str:
        return absolute.relative_to(self.root).as_posix()

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def list_files(self, directory: Optional[str] = "/", recursive: bool = False, limit: int = 100) -> List[str]:
        """Returns document paths under `directory`, depth-first, truncated to `limit`."""
        folder = self._resolve(directory or "/")
        files: List[str] = []
        if folder.is_dir():
            self._collect_files(folder, files, recursive)
        return files[:limit]

    def _collect_files(self, folder: Path, files: List[str], recursive: bool):
        for child in sorted(folder.iterdir(), key=lambda entry: entry.name):
            if child.name.startswith(".") or not self._contains(child):
                continue
            if child.is_file():
                files.append(self._relative(child))
            elif child.is_dir() and recursive:
                self._collect_files(child, files, recursive)

    def all_files(self) -> List[str]:
        files: List[str] = []
        self._collect_files(self.root, files, recursive=True)
        return files

    def read_file(self, path: str) -> str:
        target = self._resolve(path)
        if not target.is_file():
            raise DocumentNotFoundError(path)
        return target.read_text(encoding="utf-8")

    def save_note(self, path: str, content: str) -> str:
        normalized = normalize_path(path)
        if not normalized:
            raise InvalidPathError("A note path is required.")
        target = self._resolve(normalized)

        if target.is_file():
            target.write_text(content, encoding="utf-8")
            return f"Successfully updated note: {normalized}"

        # Ignore if folder exists
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return f"Successfully created note: {normalized}"

    def update_frontmatter(self, path: str, key: str, value: str) -> str:
        content = self.read_file(path)
        raw_frontmatter, body = split_frontmatter(content)

        data = yaml.safe_load(raw_frontmatter) if raw_frontmatter else None
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise VaultAssistantError(f"Frontmatter of {path} is not a key/value mapping.")

        data[key] = value
        dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
        self._resolve(path).write_text(f"---\n{dumped}---\n{body}", encoding="utf-8")
        return f"Successfully updated frontmatter for {path}"

    def find_files_by_name(self, name: str) -> List[str]:
        fragment = name.lower()
        return [path for path in self.all_files() if fragment in path.rsplit("/", 1)[-1].lower()]

    def replace_in_note(self, path: str, target: str, replacement: str) -> str:
        content = self.read_file(path)

        # Model-generated targets may carry the other encoding of '/'.
        candidates = [target, target.replace("/", "%2F"), target.replace("%2F", "/")]
        actual_target = next((candidate for candidate in candidates if candidate and candidate in content), None)
        if actual_target is None:
            return f"Target string not found in {path}."

        self._resolve(path).write_text(content.replace(actual_target, replacement, 1), encoding="utf-8")
        return f"Successfully replaced content in {path}"

    def delete_note(self, path: str) -> str:
        source = self._resolve(path)
        if not normalize_path(path) or not source.exists():
            raise DocumentNotFoundError(path)

        trash = self._resolve(self.trash_folder)
        trash.mkdir(parents=True, exist_ok=True)

        destination = trash / source.name
        if destination.exists():
            timestamp = int(time.time() * 1000)
            destination = trash / f"{source.stem}_{timestamp}{source.suffix}"

        shutil.move(str(source), str(destination))
        new_path = self._relative(destination)
        console.info(f"Moved '{normalize_path(path)}' to trash as '{new_path}'.")
        return f"Successfully moved {path} to {new_path}"

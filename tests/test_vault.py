import pytest
import yaml

from vault_assistant.core.errors import DocumentNotFoundError, InvalidPathError
from vault_assistant.services import vault as vault_module
from vault_assistant.services.vault import normalize_path, split_frontmatter


def _snapshot(root):
    return {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def test_normalize_path_variants() -> None:
    assert normalize_path("/") == ""
    assert normalize_path("") == ""
    assert normalize_path("//Folder//note.md/") == "Folder/note.md"
    assert normalize_path("./a/./b.md") == "a/b.md"
    assert normalize_path("a\\b.md") == "a/b.md"

    with pytest.raises(InvalidPathError):
        normalize_path("../outside.md")


def test_list_files_recursive_is_depth_first(vault) -> None:
    vault.save_note("a.md", "A")
    vault.save_note("b/c.md", "C")

    assert vault.list_files("/", recursive=True) == ["a.md", "b/c.md"]
    assert vault.list_files("/", recursive=False) == ["a.md"]
    assert vault.list_files("b") == ["b/c.md"]


def test_list_files_limit_hidden_and_missing(vault, tmp_path) -> None:
    for index in range(5):
        vault.save_note(f"notes/{index}.md", str(index))
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / ".obsidian" / "app.json").write_text("{}", encoding="utf-8")

    assert vault.list_files("notes", limit=2) == ["notes/0.md", "notes/1.md"]
    assert vault.list_files("/", recursive=True, limit=100) == [f"notes/{index}.md" for index in range(5)]
    assert vault.list_files("does-not-exist") == []
    assert vault.list_files("notes/0.md") == []


def test_read_missing_note_raises(vault) -> None:
    with pytest.raises(DocumentNotFoundError):
        vault.read_file("missing.md")


def test_save_creates_then_updates(vault) -> None:
    assert vault.save_note("deep/nested/note.md", "v1") == "Successfully created note: deep/nested/note.md"
    assert vault.save_note("/deep/nested/note.md", "v2") == "Successfully updated note: deep/nested/note.md"
    assert vault.read_file("deep/nested/note.md") == "v2"


def test_save_twice_is_idempotent(vault, tmp_path) -> None:
    vault.save_note("x.md", "same content")
    once = _snapshot(tmp_path)
    vault.save_note("x.md", "same content")

    assert _snapshot(tmp_path) == once


def test_update_frontmatter_creates_block(vault) -> None:
    vault.save_note("n.md", "# Title\nbody\n")

    vault.update_frontmatter("n.md", "status", "draft")

    raw, body = split_frontmatter(vault.read_file("n.md"))
    assert yaml.safe_load(raw) == {"status": "draft"}
    assert body == "# Title\nbody\n"


def test_update_frontmatter_keeps_other_keys(vault) -> None:
    vault.save_note("n.md", "---\ntags:\n- a\nstatus: old\n---\nbody\n")

    result = vault.update_frontmatter("n.md", "status", "done")

    assert result == "Successfully updated frontmatter for n.md"
    raw, body = split_frontmatter(vault.read_file("n.md"))
    assert yaml.safe_load(raw) == {"tags": ["a"], "status": "done"}
    assert body == "body\n"


def test_update_frontmatter_on_empty_block(vault) -> None:
    vault.save_note("n.md", "---\n---\nbody")

    vault.update_frontmatter("n.md", "k", "v")

    raw, body = split_frontmatter(vault.read_file("n.md"))
    assert yaml.safe_load(raw) == {"k": "v"}
    assert body == "body"


def test_find_files_by_name_is_case_insensitive(vault) -> None:
    vault.save_note("Projects/Alpha Plan.md", "")
    vault.save_note("archive/alpha.png", "")
    vault.save_note("beta.md", "")

    assert vault.find_files_by_name("ALPHA") == ["Projects/Alpha Plan.md", "archive/alpha.png"]
    assert vault.find_files_by_name("gamma") == []


def test_replace_round_trip(vault) -> None:
    vault.save_note("x.md", "keep old keep")

    result = vault.replace_in_note("x.md", "old", "new")

    content = vault.read_file("x.md")
    assert result == "Successfully replaced content in x.md"
    assert "old" not in content
    assert content.count("new") == 1


def test_replace_only_first_occurrence(vault) -> None:
    vault.save_note("x.md", "a a a")
    vault.replace_in_note("x.md", "a", "b")
    assert vault.read_file("x.md") == "b a a"


def test_replace_falls_back_to_other_slash_encodings(vault) -> None:
    vault.save_note("encoded.md", "![[Images%2Fcat.png]]")
    vault.save_note("decoded.md", "![[Images/cat.png]]")

    assert vault.replace_in_note("encoded.md", "Images/cat.png", "Media/cat.png").startswith("Successfully")
    assert vault.read_file("encoded.md") == "![[Media/cat.png]]"

    assert vault.replace_in_note("decoded.md", "Images%2Fcat.png", "Media/cat.png").startswith("Successfully")
    assert vault.read_file("decoded.md") == "![[Media/cat.png]]"


def test_replace_reports_missing_target(vault) -> None:
    vault.save_note("x.md", "nothing here")

    assert vault.replace_in_note("x.md", "old", "new") == "Target string not found in x.md."
    assert vault.read_file("x.md") == "nothing here"


def test_delete_moves_to_trash(vault) -> None:
    vault.save_note("folder/doc.md", "precious")

    result = vault.delete_note("folder/doc.md")

    assert result == "Successfully moved folder/doc.md to Trash/doc.md"
    assert not vault.exists("folder/doc.md")
    assert vault.read_file("Trash/doc.md") == "precious"


def test_delete_collision_appends_timestamp(vault, monkeypatch) -> None:
    vault.save_note("doc.md", "first")
    vault.save_note("other/doc.md", "second")
    vault.delete_note("doc.md")

    monkeypatch.setattr(vault_module.time, "time", lambda: 1700000000.123)
    result = vault.delete_note("other/doc.md")

    assert result == "Successfully moved other/doc.md to Trash/doc_1700000000123.md"
    assert vault.read_file("Trash/doc.md") == "first"
    assert vault.read_file("Trash/doc_1700000000123.md") == "second"


def test_delete_missing_note_raises(vault) -> None:
    with pytest.raises(DocumentNotFoundError):
        vault.delete_note("ghost.md")


def test_symlinks_cannot_leave_the_vault(vault, tmp_path, tmp_path_factory) -> None:
    outside = tmp_path_factory.mktemp("outside")
    (outside / "secret.md").write_text("top secret", encoding="utf-8")
    (tmp_path / "escape").symlink_to(outside, target_is_directory=True)
    (tmp_path / "secret-link.md").symlink_to(outside / "secret.md")
    vault.save_note("inside.md", "ok")

    with pytest.raises(InvalidPathError):
        vault.read_file("escape/secret.md")
    with pytest.raises(InvalidPathError):
        vault.read_file("secret-link.md")
    with pytest.raises(InvalidPathError):
        vault.save_note("escape/planted.md", "x")

    assert not (outside / "planted.md").exists()
    assert vault.list_files("/", recursive=True) == ["inside.md"]
    assert vault.find_files_by_name("secret") == []


def test_symlinks_within_the_vault_still_work(vault, tmp_path) -> None:
    vault.save_note("real/note.md", "shared")
    (tmp_path / "alias").symlink_to(tmp_path / "real", target_is_directory=True)

    assert vault.read_file("alias/note.md") == "shared"

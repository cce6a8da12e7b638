import asyncio

import pytest

from fakes import ScriptedProvider, text_response
from vault_assistant.core.context import build_context
from vault_assistant.core.errors import ProviderAPIError
from vault_assistant.core.proofreader import fix_spelling
from vault_assistant.models.common import ProviderResponse
from vault_assistant.services.preferences import PreferenceStore
from vault_assistant.services.templates import TemplateService


@pytest.fixture
def templates(vault) -> TemplateService:
    return TemplateService(vault)


def test_list_templates(vault, templates) -> None:
    vault.save_note("Assistant Templates/Meeting.md", "## Attendees")
    vault.save_note("Assistant Templates/checklist.txt", "- [ ]")
    vault.save_note("Assistant Templates/nested/Deep.md", "deep")

    assert [(template.name, template.path) for template in templates.list_templates()] == [
        ("Meeting", "Assistant Templates/Meeting.md"),
        ("checklist.txt", "Assistant Templates/checklist.txt"),
    ]


def test_list_templates_without_folder(templates) -> None:
    assert templates.list_templates() == []


def test_context_from_active_note_and_template(vault, templates) -> None:
    vault.save_note("Daily/today.md", "Buy milk")
    vault.save_note("Assistant Templates/Tone.md", "Be formal.")

    context = build_context(vault, templates, "Daily/today.md", "Assistant Templates/Tone.md")

    assert context == (
        "Active File Context (Daily/today.md):\n\nBuy milk"
        "\n\nAdditional Context from Template (Tone.md):\nBe formal."
    )


def test_context_edge_cases(vault, templates) -> None:
    vault.save_note("Assistant Templates/Tone.md", "Be formal.")

    assert build_context(vault, templates) is None
    assert build_context(vault, templates, "missing.md") is None
    assert build_context(vault, templates, "missing.md", "Assistant Templates/Tone.md") == \
        "\n\nAdditional Context from Template (Tone.md):\nBe formal."


def test_preferences_round_trip(tmp_path) -> None:
    path = tmp_path / ".assistant" / "preferences.json"
    store = PreferenceStore(path)

    assert store.get_last_model("gemini") is None
    store.set_last_model("gemini", "gemini-2.5-pro")
    store.set_last_model("chatgpt", "gpt-4o")

    reopened = PreferenceStore(path)
    assert reopened.get_last_model("gemini") == "gemini-2.5-pro"
    assert reopened.get_last_model("chatgpt") == "gpt-4o"


def test_corrupt_preferences_are_ignored(tmp_path) -> None:
    path = tmp_path / "preferences.json"
    path.write_text("{not json", encoding="utf-8")
    store = PreferenceStore(path)

    assert store.get_last_model("gemini") is None
    store.set_last_model("gemini", "gemini-2.5-flash")
    assert store.get_last_model("gemini") == "gemini-2.5-flash"


def test_fix_spelling_uses_vocabulary(vault) -> None:
    vault.save_note("Assistant/Spelling Check.md", "Kubernetes, PostgreSQL")
    provider = ScriptedProvider(vault, [text_response("  Kubernetes runs PostgreSQL.\n")])

    corrected = asyncio.run(fix_spelling(provider, vault, "kubernets runs postgres", "scripted-1"))

    assert corrected == "Kubernetes runs PostgreSQL."
    _, prompt, _ = provider.sent[0]
    assert "Kubernetes, PostgreSQL" in prompt
    assert prompt.endswith("Input Text:\nkubernets runs postgres")
    session = provider.sessions[0]
    assert session["tools"] == []
    assert session["system_instruction"] is None


def test_fix_spelling_without_text_raises(vault) -> None:
    provider = ScriptedProvider(vault, [ProviderResponse()])

    with pytest.raises(ProviderAPIError):
        asyncio.run(fix_spelling(provider, vault, "teh", "scripted-1"))


def test_undecodable_active_note_is_skipped(vault, templates, tmp_path) -> None:
    (tmp_path / "binary.md").write_bytes(b"\xff\xfe\xfa")
    vault.save_note("Assistant Templates/Tone.md", "Be formal.")

    assert build_context(vault, templates, "binary.md", "Assistant Templates/Tone.md") == \
        "\n\nAdditional Context from Template (Tone.md):\nBe formal."

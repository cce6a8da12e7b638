import asyncio

import pytest

from vault_assistant.core.errors import ToolNotAllowedError, UnknownToolError
from vault_assistant.core.tool_registry import ToolRegistry
from vault_assistant.models.common import ChatMode, ToolCallRequest, ToolName
from vault_assistant.tools.list_files_tool import ListFilesTool
from vault_assistant.tools.read_note_tool import ReadNoteTool


def _walk_keys(schema):
    if isinstance(schema, dict):
        for key, value in schema.items():
            yield key
            if key == "properties":
                for prop in value.values():
                    yield from _walk_keys(prop)
            else:
                yield from _walk_keys(value)
    elif isinstance(schema, list):
        for item in schema:
            yield from _walk_keys(item)


def test_registry_requires_a_handler_for_every_tool(vault) -> None:
    with pytest.raises(ValueError, match="No handler registered"):
        ToolRegistry([ListFilesTool(vault), ReadNoteTool(vault)])


def test_registry_rejects_duplicate_handlers(vault) -> None:
    with pytest.raises(ValueError, match="already registered"):
        ToolRegistry([ListFilesTool(vault), ListFilesTool(vault)])


def test_definitions_per_mode(registry) -> None:
    document = {definition["name"] for definition in registry.get_definitions(ChatMode.DOCUMENT)}
    web = {definition["name"] for definition in registry.get_definitions(ChatMode.WEB)}

    assert document == {name.value for name in ToolName} - {ToolName.WEB_SEARCH.value}
    assert web == {ToolName.WEB_SEARCH.value}


def test_definitions_are_portable(registry) -> None:
    for definition in registry.get_definitions(ChatMode.DOCUMENT):
        parameters = definition["parameters"]
        assert parameters["type"] == "object"
        assert definition["description"]
        assert "title" not in set(_walk_keys(parameters))
        assert "default" not in set(_walk_keys(parameters))


def test_replace_definition_lists_required_fields(registry) -> None:
    definitions = {definition["name"]: definition for definition in registry.get_definitions(ChatMode.DOCUMENT)}
    parameters = definitions["replace_in_note"]["parameters"]

    assert set(parameters["properties"]) == {"path", "target", "replacement"}
    assert set(parameters["required"]) == {"path", "target", "replacement"}


def test_resolve_errors(registry) -> None:
    with pytest.raises(UnknownToolError):
        registry.resolve("format_disk", ChatMode.DOCUMENT)
    with pytest.raises(ToolNotAllowedError):
        registry.resolve("save_note", ChatMode.WEB)
    with pytest.raises(ToolNotAllowedError):
        registry.resolve("web_search", ChatMode.DOCUMENT)


def test_unknown_tool_becomes_error_result(registry) -> None:
    call = ToolCallRequest(name="format_disk", arguments={}, call_id="c1")

    result = asyncio.run(registry.execute(call, ChatMode.DOCUMENT))

    assert result.is_error
    assert result.call_id == "c1"
    assert result.tool_name == "format_disk"
    assert result.result == "Error: Unknown tool: format_disk"


def test_tool_outside_mode_becomes_error_result(registry, vault) -> None:
    call = ToolCallRequest(name="save_note", arguments={"filename": "x.md", "content": "x"})

    result = asyncio.run(registry.execute(call, ChatMode.WEB))

    assert result.is_error
    assert "not available in web mode" in result.result
    assert not vault.exists("x.md")


def test_invalid_arguments_become_error_result(registry) -> None:
    call = ToolCallRequest(name="read_note", arguments={})

    result = asyncio.run(registry.execute(call, ChatMode.DOCUMENT))

    assert result.is_error
    assert result.result.startswith("Error:")


def test_missing_note_becomes_error_result(registry) -> None:
    call = ToolCallRequest(name="read_note", arguments={"filename": "nope.md"})

    result = asyncio.run(registry.execute(call, ChatMode.DOCUMENT))

    assert result.is_error
    assert result.result == "Error: File not found: nope.md"


def test_execute_each_document_tool(registry, vault) -> None:
    def run(tool, **arguments):
        return asyncio.run(registry.execute(ToolCallRequest(name=tool, arguments=arguments), ChatMode.DOCUMENT))

    assert run("save_note", filename="Inbox/idea.md", content="old idea").result == \
        "Successfully created note: Inbox/idea.md"
    assert run("read_note", filename="Inbox/idea.md").result == "old idea"
    assert run("list_files", directory="/", recursive=True).result == "Inbox/idea.md"
    assert run("list_files", directory="Empty").result == "No files found in Empty."
    assert run("find_files_by_name", name="IDEA").result == "Inbox/idea.md"
    assert run("find_files_by_name", name="zzz").result == "No files found."
    assert run("replace_in_note", path="Inbox/idea.md", target="old", replacement="new").result == \
        "Successfully replaced content in Inbox/idea.md"
    assert run("update_frontmatter", path="Inbox/idea.md", key="status", value="draft").result == \
        "Successfully updated frontmatter for Inbox/idea.md"
    assert run("delete_note", path="Inbox/idea.md").result == "Successfully moved Inbox/idea.md to Trash/idea.md"

    assert vault.read_file("Trash/idea.md") == "---\nstatus: draft\n---\nnew idea"

# The module is to define the common models for the vault assistant.
# Date: 2026-10-18
# Version: 0.1.0

from enum import Enum
from pydantic import BaseModel, Field
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

Role = Literal["user", "model"]


class ChatMode(str, Enum):
    """The two mutually exclusive tool-capability profiles a turn can run under."""
    DOCUMENT = "document"
    WEB = "web"


class ToolName(str, Enum):
    """The closed set of tools the model may call."""
    LIST_FILES = "list_files"
    READ_NOTE = "read_note"
    SAVE_NOTE = "save_note"
    UPDATE_FRONTMATTER = "update_frontmatter"
    FIND_FILES_BY_NAME = "find_files_by_name"
    REPLACE_IN_NOTE = "replace_in_note"
    DELETE_NOTE = "delete_note"
    WEB_SEARCH = "web_search"


class Attachment(BaseModel):
    """
    A file staged by the UI for a single submitted turn.
    Attributes:
        name (str): Original file name.
        mime_type (str): MIME type, e.g. 'image/png'.
        data (str): Base64 payload without the data-URL prefix.
    """
    name: str = Field(..., description="Original file name.")
    mime_type: str = Field(..., description="MIME type of the attachment.")
    data: str = Field(..., description="Base64 encoded file content.")

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


class ConversationTurn(BaseModel):
    """
    One message of the conversation history, as owned by the UI layer.
    Only user turns and final model text turns are stored here.
    """
    role: Role = Field(..., description="Who sent the message.")
    text: str = Field(..., description="Plain text of the message.")
    attachments: List[Attachment] = Field(default_factory=list)
    usage: Optional[Dict[str, Any]] = Field(default=None, description="Token accounting reported for model turns.")


class ToolCallRequest(BaseModel):
    """
    A tool invocation requested by the model during one turn.
    Attributes:
        name (str): The tool name as emitted by the model.
        arguments (dict): Parameter name to value mapping.
        call_id (str): Vendor id used to pair the result, if the vendor has one.
    """
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)
    call_id: Optional[str] = None


class ToolCallResult(BaseModel):
    """The outcome of one ToolCallRequest, fed back to the model."""
    tool_name: str
    result: str
    call_id: Optional[str] = None
    is_error: bool = False


class ProviderModel(BaseModel):
    """A read-only model catalog entry."""
    id: str
    display_name: str


class CustomCommand(BaseModel):
    """A canned prompt declared in the project config document."""
    label: str
    prompt: str


class Template(BaseModel):
    """A note from the templates folder that can be added as context."""
    name: str
    path: str


class ChatOptions(BaseModel):
    """Request-level options for one turn."""
    high_reasoning: bool = Field(default=False, description="Ask the provider for intermediate thought content.")


# --- Canonical response parts ---

class TextPart(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class InlineDataPart(BaseModel):
    kind: Literal["inline_data"] = "inline_data"
    mime_type: str
    data: str


class ExecutableCodePart(BaseModel):
    kind: Literal["executable_code"] = "executable_code"
    language: str = ""
    code: str


class CodeResultPart(BaseModel):
    kind: Literal["code_result"] = "code_result"
    output: str = ""


class ThoughtPart(BaseModel):
    kind: Literal["thought"] = "thought"
    text: str


ResponsePart = Annotated[
    Union[TextPart, InlineDataPart, ExecutableCodePart, CodeResultPart, ThoughtPart],
    Field(discriminator="kind"),
]


class FinishReason(str, Enum):
    STOP = "stop"
    TOOL_CALLS = "tool_calls"
    MAX_TOKENS = "max_tokens"
    SAFETY = "safety"
    RECITATION = "recitation"
    BLOCKED_OTHER = "blocked_other"
    UNKNOWN = "unknown"


class ProviderResponse(BaseModel):
    """
    The canonical form every provider adapter translates its vendor response into.
    Attributes:
        parts (list): Ordered response parts.
        tool_calls (list): Tool invocations requested by the model, in emitted order.
        finish_reason (FinishReason): Why the model stopped.
        usage (dict): Vendor usage metadata, if reported.
    """
    parts: List[ResponsePart] = Field(default_factory=list)
    tool_calls: List[ToolCallRequest] = Field(default_factory=list)
    finish_reason: FinishReason = FinishReason.UNKNOWN
    usage: Optional[Dict[str, Any]] = None

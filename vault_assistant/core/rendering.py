# Turns a canonical provider response into the markdown shown in the chat.
# Date: 2026-10-18
# Version: 0.1.0

from typing import List

from vault_assistant.models.common import (
    CodeResultPart,
    ExecutableCodePart,
    FinishReason,
    InlineDataPart,
    ProviderResponse,
    TextPart,
    ThoughtPart,
)

SAFETY_MESSAGE = "Response blocked by safety filters. Please try a different prompt."
RECITATION_MESSAGE = "Response blocked due to recitation check."
BLOCKED_OTHER_MESSAGE = "Response blocked for unknown reasons (finishReason: OTHER)."
NO_RESPONSE_MESSAGE = "Error: No response received from the model. It might be blocked or encountered an error."
THOUGHTS_UNSUPPORTED_NOTE = (
    '<div class="assistant-note">(Note: The "Thinking Process" is not supported by this model. '
    "Try a reasoning model if available.)</div>"
)

_BLOCK_MESSAGES = {
    FinishReason.SAFETY: SAFETY_MESSAGE,
    FinishReason.RECITATION: RECITATION_MESSAGE,
    FinishReason.BLOCKED_OTHER: BLOCKED_OTHER_MESSAGE,
}


def render_response(response: ProviderResponse, high_reasoning: bool = False) -> str:
    """
    Concatenates the response parts in order. Thoughts are gathered into a
    collapsible block placed in front of the answer.

    A response with nothing to show is mapped to a fixed message derived from
    its finish reason; this function never raises for an empty response.
    """
    output = ""
    thoughts: List[str] = []

    for part in response.parts:
        if isinstance(part, ThoughtPart):
            thoughts.append(part.text)
        elif isinstance(part, TextPart):
            output += part.text
        elif isinstance(part, InlineDataPart):
            output += f"\n![Generated Image](data:{part.mime_type};base64,{part.data})\n"
        elif isinstance(part, ExecutableCodePart):
            output += f"\n```{part.language}\n{part.code}\n```\n"
        elif isinstance(part, CodeResultPart):
            output += f"\nOutput:\n```\n{part.output}\n```\n"

    if not output and not thoughts:
        return _BLOCK_MESSAGES.get(response.finish_reason, NO_RESPONSE_MESSAGE)

    if thoughts:
        thought_text = "\n".join(thoughts)
        output = (
            '<details class="assistant-thoughts">\n'
            "<summary>Thinking Process</summary>\n\n"
            f"{thought_text}\n\n"
            "</details>\n\n"
            f"{output}"
        )
    elif high_reasoning:
        output = f"{output}\n\n{THOUGHTS_UNSUPPORTED_NOTE}"

    return output

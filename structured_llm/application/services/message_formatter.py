"""Message formatter: converts domain chat messages into the Ollama wire shape."""

import re
from typing import Any

from structured_llm.domain.entities import ChatMessage, ImagePart, TextPart

# Only inline base64 images are accepted; the payload after the comma is sent as-is.
_BASE64_IMAGE_PATTERN = re.compile(r"^data:image/[^;]+;base64,(.+)$")


def extract_base64_payload(data_uri: str) -> str | None:
    """Return the base64 payload of an image data URI, or None if it doesn't match."""
    match = _BASE64_IMAGE_PATTERN.match(data_uri)
    return match.group(1) if match else None


def format_message(message: ChatMessage) -> dict[str, Any]:
    """Convert a ChatMessage to ``{"role", "content", "images"?}``.

    Text parts are joined with a single space. Images that are not
    ``data:image/<subtype>;base64,...`` URIs are skipped, and the ``images`` key
    is only present when at least one image survived.
    """
    if isinstance(message.content, str):
        return {"role": message.role, "content": message.content}

    text_parts: list[str] = []
    images: list[str] = []
    for part in message.content:
        if isinstance(part, TextPart):
            if part.text:
                text_parts.append(part.text)
        elif isinstance(part, ImagePart):
            payload = extract_base64_payload(part.data_uri)
            if payload is not None:
                images.append(payload)

    formatted: dict[str, Any] = {
        "role": message.role,
        "content": " ".join(text_parts),
    }
    if images:
        formatted["images"] = images
    return formatted


def format_messages(messages: tuple[ChatMessage, ...]) -> list[dict[str, Any]]:
    """Format a whole conversation, preserving order."""
    return [format_message(m) for m in messages]

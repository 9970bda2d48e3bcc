"""Unit tests for the caller-facing pydantic DTOs."""

import pytest
from pydantic import ValidationError

from structured_llm.application.schemas.chat import (
    ChatCompletionOptionsSchema,
    ChatMessageSchema,
    ContentPartSchema,
    ImageUrlDetail,
)
from structured_llm.domain.entities import ImagePart, TextPart
from tests.unit.fakes import Answer


def test_string_message_to_domain():
    message = ChatMessageSchema(role="system", content="Be terse.").to_domain()

    assert message.role == "system"
    assert message.content == "Be terse."


def test_multimodal_parts_become_tagged_variants():
    message = ChatMessageSchema(
        role="user",
        content=[
            ContentPartSchema(type="text", text="What is in this image?"),
            ContentPartSchema(
                type="image_url",
                image_url=ImageUrlDetail(url="data:image/png;base64,AAAA"),
            ),
            ContentPartSchema(type="image_url"),
            ContentPartSchema(type="input_audio"),
        ],
    ).to_domain()

    assert message.content == (
        TextPart(text="What is in this image?"),
        ImagePart(data_uri="data:image/png;base64,AAAA"),
    )


def test_role_is_validated():
    with pytest.raises(ValidationError):
        ChatMessageSchema(role="tool", content="{}")


def test_options_to_domain_request():
    options = ChatCompletionOptionsSchema(
        messages=[{"role": "user", "content": "2+2?"}],
        temperature=0.3,
        top_p=0.8,
        frequency_penalty=0.2,
        maxTokens=100,
        response_model={"name": "Answer", "schema": Answer},
        tools=[{"name": "click", "parameters": {"type": "object"}}],
        requestId="act-7",
        retries=5,
    )

    request = options.to_domain()

    assert request.temperature == 0.3
    assert request.top_p == 0.8
    assert request.frequency_penalty == 0.2
    assert request.max_tokens == 100
    assert request.response_schema is Answer
    assert request.tools[0].name == "click"
    assert request.tools[0].description == ""
    assert request.tools[0].parameters == {"type": "object"}
    assert request.correlation_id == "act-7"
    assert request.retry_budget == 5


def test_options_defaults():
    request = ChatCompletionOptionsSchema(
        messages=[{"role": "user", "content": "hi"}]
    ).to_domain()

    assert request.temperature == 0.1
    assert request.response_schema is None
    assert request.tools == ()
    assert request.correlation_id is None
    assert request.retry_budget is None


def test_empty_request_id_is_not_a_correlation_id():
    request = ChatCompletionOptionsSchema(
        messages=[{"role": "user", "content": "hi"}], request_id=""
    ).to_domain()

    assert request.correlation_id is None


def test_messages_required():
    with pytest.raises(ValidationError):
        ChatCompletionOptionsSchema(messages=[])

from __future__ import annotations

import json

import pytest
from mcp.types import CallToolResult, TextContent as McpTextContent

from ucp_host.normalizer import (
    ContentList,
    ContentListResult,
    GenericMap,
    ImageContent,
    NoResult,
    ResponseNormalizer,
    Scalar,
    SimpleUCPResult,
    TextContent,
    TypedResult,
    classify,
)

CHECKOUT = "dev.ucp.shopping.checkout"
SENTINEL = "__UCP_STRUCTURED_DATA__:"


@pytest.fixture()
def normalizer() -> ResponseNormalizer:
    return ResponseNormalizer()


def test_envelope_carries_ucp_metadata(normalizer) -> None:
    envelope = normalizer.normalize(CHECKOUT, SimpleUCPResult.of("id", "abc"))

    assert envelope["ucp"] == {
        "version": "2026-01-11",
        "capabilities": [{"name": CHECKOUT, "version": "2026-01-11"}],
    }
    assert envelope["id"] == "abc"


def test_structured_data_in_content_map_is_merged(normalizer) -> None:
    """MCP-style content text carrying the sentinel becomes top-level data."""
    raw = {"content": [{"type": "text", "text": SENTINEL + '{"id":"abc"}'}]}

    envelope = normalizer.normalize(CHECKOUT, raw)

    assert envelope["id"] == "abc"
    assert envelope["ucp"]["capabilities"][0]["name"] == CHECKOUT
    assert "result" not in envelope


def test_plain_text_in_content_map_goes_to_result(normalizer) -> None:
    raw = {"content": [{"type": "text", "text": "done"}], "type": "tool_result"}

    envelope = normalizer.normalize(CHECKOUT, raw)

    assert envelope["result"] == "done"
    assert "type" not in envelope


def test_generic_map_drops_plumbing_keys(normalizer) -> None:
    raw = {"id": "abc", "status": "ready", "type": "x", "textResult": "y"}

    envelope = normalizer.normalize(CHECKOUT, raw)

    assert set(envelope) == {"ucp", "id", "status"}


def test_content_list_plain_text_goes_to_message(normalizer) -> None:
    raw = ContentListResult(content=[TextContent(text="hello")])

    envelope = normalizer.normalize(CHECKOUT, raw)

    assert envelope["message"] == "hello"


def test_content_list_structured_data_is_merged(normalizer) -> None:
    raw = ContentListResult(content=[TextContent(text=SENTINEL + json.dumps({"id": "x", "total": 10}))])

    envelope = normalizer.normalize(CHECKOUT, raw)

    assert envelope["id"] == "x"
    assert envelope["total"] == 10


def test_mcp_call_tool_result_is_a_content_list(normalizer) -> None:
    """Objects exposing a content list attribute are recognized structurally."""
    raw = CallToolResult(content=[McpTextContent(type="text", text=SENTINEL + '{"id":"mcp"}')])

    assert isinstance(classify(raw), ContentList)
    assert normalizer.normalize(CHECKOUT, raw)["id"] == "mcp"


def test_content_list_non_text_item(normalizer) -> None:
    raw = ContentListResult(content=[ImageContent(data="aGk=", mime_type="image/png")])

    envelope = normalizer.normalize(CHECKOUT, raw)

    assert "message" in envelope
    assert set(envelope) == {"ucp", "message"}


def test_invalid_structured_payload_falls_back_to_text(normalizer) -> None:
    text = SENTINEL + "{not json"
    envelope = normalizer.normalize(CHECKOUT, ContentListResult(content=[TextContent(text=text)]))

    assert envelope["message"] == text


def test_none_result_uses_placeholder(normalizer) -> None:
    envelope = normalizer.normalize(CHECKOUT, None)

    assert envelope["message"] == "Operation completed with no result"


def test_scalar_is_stringified(normalizer) -> None:
    assert normalizer.normalize(CHECKOUT, 42)["result"] == "42"
    assert normalizer.normalize(CHECKOUT, "plain text")["result"] == "plain text"


@pytest.mark.parametrize("value, rendered", [(True, "true"), (False, "false")])
def test_booleans_render_in_lowercase(normalizer, value, rendered) -> None:
    assert normalizer.normalize(CHECKOUT, value)["result"] == rendered


@pytest.mark.parametrize(
    "raw",
    [
        {"ucp": "hijacked", "id": "abc"},
        SimpleUCPResult({"ucp": "hijacked"}),
        {"content": [{"type": "text", "text": SENTINEL + '{"ucp": "hijacked"}'}]},
        "ucp",
    ],
)
def test_ucp_key_is_never_overwritten(normalizer, raw) -> None:
    envelope = normalizer.normalize(CHECKOUT, raw)

    assert envelope["ucp"] == normalizer.metadata(CHECKOUT)


def test_normalizing_canonical_envelope_is_a_no_op(normalizer) -> None:
    """Feeding an envelope back through the normalizer yields an equal envelope."""
    first = normalizer.normalize(CHECKOUT, SimpleUCPResult({"id": "abc", "status": "ready"}))

    second = normalizer.normalize(CHECKOUT, first)

    assert second == first


def test_error_envelope(normalizer) -> None:
    envelope = normalizer.error_envelope(CHECKOUT, "Checkout not found")

    assert envelope == {"ucp": normalizer.metadata(CHECKOUT), "error": "Checkout not found"}


def test_classify_shapes() -> None:
    assert isinstance(classify(None), NoResult)
    assert isinstance(classify(SimpleUCPResult()), TypedResult)
    assert isinstance(classify({"a": 1}), GenericMap)
    assert isinstance(classify(3.5), Scalar)

# Copyright 2026 UCP Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
UCP Response Normalization

Downstream capability calls return results in several shapes. Each raw result
is classified into one of a closed set of shapes and projected into the
canonical envelope:

    {"ucp": {"version": ..., "capabilities": [{"name": ..., "version": ...}]},
     <business data keys>}

Shapes, in classification order:
- NoResult: None. A placeholder message is returned.
- TypedResult: exposes `get_result()` returning a flat string mapping.
- ContentList: exposes `as_content_list()` or a `content` list attribute
  (e.g. an MCP CallToolResult). The first item decides the output.
- GenericMap: any mapping. An MCP-style `content` array is unwrapped,
  otherwise the fields are merged minus transport plumbing keys.
- Scalar: anything else, stringified.

Text that starts with the structured-data sentinel carries a JSON object whose
fields become business data. The `ucp` key is reserved and never overwritten.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

from pydantic import BaseModel

from .constants import Constants

logger = logging.getLogger(__name__)

UCPEnvelope = Dict[str, Any]


# ============================================================================
# Downstream result adapters
# ============================================================================

@runtime_checkable
class UCPResult(Protocol):
    """A downstream result that already carries flat UCP business data."""

    def get_result(self) -> Mapping[str, str]:
        ...


@runtime_checkable
class ContentListAdapter(Protocol):
    """A downstream result made of ordered content items."""

    def as_content_list(self) -> Sequence[Any]:
        ...


@runtime_checkable
class TextItemAdapter(Protocol):
    """A content item that may carry text; returns None for other media."""

    def as_text_item(self) -> Optional[str]:
        ...


class SimpleUCPResult:
    """Wraps a flat mapping returned by business logic."""

    def __init__(self, result: Optional[Mapping[str, str]] = None):
        self._result = dict(result or {})

    @classmethod
    def of(cls, key: str, value: str) -> "SimpleUCPResult":
        return cls({key: value})

    def get_result(self) -> Dict[str, str]:
        return self._result

    def __repr__(self) -> str:
        return f"SimpleUCPResult({self._result!r})"


class TextContent(BaseModel):
    type: str = "text"
    text: str

    def as_text_item(self) -> Optional[str]:
        return self.text


class ImageContent(BaseModel):
    type: str = "image"
    data: str
    mime_type: str

    def as_text_item(self) -> Optional[str]:
        return None


class ContentListResult(BaseModel):
    """A content-array result produced by business logic."""
    content: list = []

    def as_content_list(self) -> Sequence[Any]:
        return self.content


# ============================================================================
# Result shapes
# ============================================================================

@dataclass(frozen=True)
class TypedResult:
    result: Mapping[str, Any]


@dataclass(frozen=True)
class ContentList:
    items: Sequence[Any] = field(default_factory=tuple)


@dataclass(frozen=True)
class GenericMap:
    data: Mapping[str, Any]


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class NoResult:
    pass


ResultShape = Union[TypedResult, ContentList, GenericMap, Scalar, NoResult]


def classify(raw: Any) -> ResultShape:
    """Classify a raw downstream result by its structure."""
    if raw is None:
        return NoResult()
    if isinstance(raw, UCPResult):
        return TypedResult(raw.get_result() or {})
    if isinstance(raw, ContentListAdapter):
        return ContentList(tuple(raw.as_content_list() or ()))
    if isinstance(raw, Mapping):
        return GenericMap(raw)
    content = getattr(raw, "content", None)
    if isinstance(content, (list, tuple)):
        return ContentList(tuple(content))
    return Scalar(raw)


def extract_text(item: Any) -> Optional[str]:
    """Text of a content item, or None when the item is not text."""
    if isinstance(item, TextItemAdapter):
        return item.as_text_item()
    if isinstance(item, Mapping):
        if item.get("type", "text") == "text" and isinstance(item.get("text"), str):
            return item["text"]
        return None
    if getattr(item, "type", None) == "text" and isinstance(getattr(item, "text", None), str):
        return item.text
    return None


def parse_structured_data(text: str) -> Optional[Dict[str, Any]]:
    """Decode sentinel-prefixed structured data; None if `text` carries none."""
    if not text.startswith(Constants.UCP_STRUCTURED_DATA_PREFIX):
        return None
    payload = text[len(Constants.UCP_STRUCTURED_DATA_PREFIX):]
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        logger.warning("Structured data sentinel found but payload is not valid JSON")
        return None
    if not isinstance(data, dict):
        logger.warning("Structured data payload is not a JSON object")
        return None
    return data


# ============================================================================
# Normalizer
# ============================================================================

class ResponseNormalizer:
    """Projects downstream results into the canonical UCP envelope."""

    def __init__(self, version: str = Constants.UCP_VERSION):
        self.version = version

    def metadata(self, capability_name: str) -> Dict[str, Any]:
        return {
            "version": self.version,
            "capabilities": [{"name": capability_name, "version": self.version}],
        }

    def normalize(self, capability_name: str, raw: Any) -> UCPEnvelope:
        envelope: UCPEnvelope = {Constants.UCP_METADATA_KEY: self.metadata(capability_name)}
        for key, value in self.project(classify(raw)).items():
            if key == Constants.UCP_METADATA_KEY:
                continue
            envelope[key] = value
        return envelope

    def error_envelope(self, capability_name: str, message: str) -> UCPEnvelope:
        """Minimal envelope reporting a failed downstream call."""
        return {
            Constants.UCP_METADATA_KEY: self.metadata(capability_name),
            "error": message,
        }

    def project(self, shape: ResultShape) -> Dict[str, Any]:
        """Business data for a classified result."""
        if isinstance(shape, NoResult):
            return {"message": Constants.UCP_NO_RESULT_MESSAGE}
        if isinstance(shape, TypedResult):
            return dict(shape.result)
        if isinstance(shape, ContentList):
            return self._project_content(shape.items)
        if isinstance(shape, GenericMap):
            return self._project_map(shape.data)
        if isinstance(shape.value, bool):
            return {"result": json.dumps(shape.value)}
        return {"result": str(shape.value)}

    def _project_content(self, items: Sequence[Any]) -> Dict[str, Any]:
        if not items:
            return {"message": Constants.UCP_NO_RESULT_MESSAGE}
        first = items[0]
        text = extract_text(first)
        if text is None:
            # non-text media
            return {"message": str(first)}
        return self._project_text(text, "message")

    def _project_map(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        content = data.get("content")
        if isinstance(content, (list, tuple)) and content:
            text = extract_text(content[0])
            if text is not None:
                return self._project_text(text, "result")
        return {
            key: value
            for key, value in data.items()
            if key not in Constants.UCP_PLUMBING_KEYS
        }

    def _project_text(self, text: str, fallback_key: str) -> Dict[str, Any]:
        structured = parse_structured_data(text)
        if structured is not None:
            return structured
        return {fallback_key: text}

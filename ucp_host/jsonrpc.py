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
JSON-RPC 2.0 Bridge

Routes JSON-RPC calls (and REST/MCP calls that reuse the same path) to the
business implementation and returns the normalized UCP envelope as `result`.

A failing business call never breaks the wire contract: the bridge logs the
full diagnostics and answers with an envelope whose `error` key holds a
sanitized message. JSON-RPC error objects are reserved for malformed requests
and unknown methods.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .business import OPERATION_CAPABILITIES, UCPAware
from .errors import DownstreamProcessingError, PaymentError, UCPLookupError
from .normalizer import ResponseNormalizer, UCPEnvelope

logger = logging.getLogger(__name__)

RequestId = Optional[Union[str, int]]


class JsonRpcMessage(BaseModel):
    """Base JSON-RPC 2.0 message."""
    jsonrpc: str = "2.0"


class JsonRpcRequest(JsonRpcMessage):
    """JSON-RPC 2.0 request."""
    id: RequestId = None
    method: str
    params: Dict[str, Any] = Field(default_factory=dict)


class JsonRpcResponse(JsonRpcMessage):
    """JSON-RPC 2.0 success response."""
    id: RequestId = None
    result: Dict[str, Any] = Field(default_factory=dict)


class JsonRpcErrorData(BaseModel):
    """JSON-RPC 2.0 error data."""
    code: int
    message: str
    data: Optional[Dict[str, Any]] = None


class JsonRpcErrorResponse(JsonRpcMessage):
    """JSON-RPC 2.0 error response."""
    id: RequestId = None
    error: JsonRpcErrorData


class JsonRpcErrorCode(int, Enum):
    """Standard JSON-RPC 2.0 error codes."""
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


def _require(params: Mapping[str, Any], name: str) -> Any:
    value = params.get(name)
    if not value:
        raise DownstreamProcessingError(f"Missing required parameter: {name}")
    return value


class JsonRpcBridge:
    """Invokes business operations and normalizes their results."""

    def __init__(self, business: UCPAware, normalizer: Optional[ResponseNormalizer] = None):
        self.business = business
        self.normalizer = normalizer or ResponseNormalizer()
        self._operations: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
            "create_checkout": lambda p: business.create_checkout(p),
            "get_checkout": lambda p: business.get_checkout(_require(p, "id")),
            "update_checkout": lambda p: business.update_checkout(_require(p, "id"), p),
            "complete_checkout": lambda p: business.complete_checkout(
                _require(p, "id"), p.get("payment") or {}
            ),
            "cancel_checkout": lambda p: business.cancel_checkout(_require(p, "id")),
            "link_identity": lambda p: business.link_identity(p),
            "get_order": lambda p: business.get_order(_require(p, "id")),
        }

    @property
    def methods(self):
        return list(self._operations)

    def supports(self, method: str) -> bool:
        return method in self._operations

    def invoke(self, method: str, params: Optional[Mapping[str, Any]] = None) -> UCPEnvelope:
        """Run one operation and return its envelope (an error envelope on failure)."""
        capability = OPERATION_CAPABILITIES[method]
        try:
            raw = self._operations[method](params or {})
        except (DownstreamProcessingError, UCPLookupError, PaymentError) as e:
            logger.exception(f"Error processing {method}")
            return self.normalizer.error_envelope(capability, e.message)
        except Exception:
            logger.exception(f"Unexpected error processing {method}")
            return self.normalizer.error_envelope(
                capability, f"An unexpected error occurred while processing {method}"
            )
        return self.normalizer.normalize(capability, raw)

    def handle(self, payload: Any) -> Dict[str, Any]:
        """Handle a decoded JSON-RPC request body."""
        request_id = payload.get("id") if isinstance(payload, Mapping) else None
        if not isinstance(request_id, (str, int)):
            request_id = None
        try:
            request = JsonRpcRequest.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Invalid JSON-RPC request: {e.error_count()} validation error(s)")
            return self._error(request_id, JsonRpcErrorCode.INVALID_REQUEST, "Invalid Request")

        if not self.supports(request.method):
            return self._error(
                request.id, JsonRpcErrorCode.METHOD_NOT_FOUND, f"Method not found: {request.method}"
            )

        envelope = self.invoke(request.method, request.params)
        return JsonRpcResponse(id=request.id, result=envelope).model_dump(mode="json")

    @staticmethod
    def _error(request_id: RequestId, code: JsonRpcErrorCode, message: str) -> Dict[str, Any]:
        return JsonRpcErrorResponse(
            id=request_id,
            error=JsonRpcErrorData(code=code.value, message=message),
        ).model_dump(mode="json", exclude={"error": {"data"}})

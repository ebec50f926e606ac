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

from dataclasses import dataclass
@dataclass
class Constants:

    UCP_VERSION = "2026-01-11"
    UCP_VERSION_PATTERN = r"[0-9]{4}-[0-9]{2}-[0-9]{2}"

    UCP_WELL_KNOWN_PATH = "/.well-known/ucp"
    UCP_REST_PREFIX = "/ucp/v1"
    UCP_JSONRPC_PATH = "/ucp/jsonrpc"
    UCP_MCP_PATH = "/mcp"

    UCP_SHOPPING_SERVICE = "dev.ucp.shopping"
    UCP_SHOPPING_SPEC = "https://ucp.dev/specification/overview"

    UCP_CHECKOUT_CAPABILITY = "dev.ucp.shopping.checkout"
    UCP_ORDER_CAPABILITY = "dev.ucp.shopping.order"
    UCP_IDENTITY_LINKING_CAPABILITY = "dev.ucp.common.identity_linking"

    # Envelope
    UCP_METADATA_KEY = "ucp"
    UCP_STRUCTURED_DATA_PREFIX = "__UCP_STRUCTURED_DATA__:"
    UCP_NO_RESULT_MESSAGE = "Operation completed with no result"
    UCP_PLUMBING_KEYS = ("type", "textResult")

    # Transports
    TRANSPORT_REST = "rest"
    TRANSPORT_MCP = "mcp"
    TRANSPORT_A2A = "a2a"
    TRANSPORT_EMBEDDED = "embedded"

    REST_SCHEMA = "https://ucp.dev/services/shopping/rest.openapi.json"
    MCP_SCHEMA = "https://ucp.dev/services/shopping/mcp.openrpc.json"
    A2A_SCHEMA = "https://ucp.dev/services/shopping/a2a.json"
    EMBEDDED_SCHEMA = "https://ucp.dev/services/shopping/embedded.openrpc.json"

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
UCP MCP Binding

Exposes the host's standard capability operations as MCP tools. Every tool
returns the normalized UCP envelope, the same body the REST and JSON-RPC
bindings return.

Tools:
- create_checkout, get_checkout, update_checkout, complete_checkout, cancel_checkout
- link_identity
- get_order
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .constants import Constants
from .host import UCPHost

logger = logging.getLogger(__name__)


def _extract_ucp_profile(meta: Optional[Dict] = None) -> Optional[str]:
    """
    Extracts the UCP platform profile from _meta structure.

    MCP clients MUST include the UCP platform profile URI with every request
    in the _meta.ucp structure.
    """
    if meta and "ucp" in meta and "profile" in meta["ucp"]:
        return meta["ucp"]["profile"]
    return None


def register_tools(mcp: FastMCP, host: UCPHost) -> Dict[str, Callable[..., Dict]]:
    """Register the UCP tools on `mcp` and return them by name."""
    bridge = host.bridge

    def _call(method: str, params: Dict[str, Any], ucp_meta: Optional[Dict[str, Any]]) -> Dict:
        logger.info(f"{method} called with profile: {_extract_ucp_profile(ucp_meta)}")
        return bridge.invoke(method, params)

    @mcp.tool("create_checkout")
    def create_checkout(
        line_items: List[Dict[str, Any]],
        currency: str = "USD",
        buyer: Optional[Dict[str, Any]] = None,
        fulfillment: Optional[Dict[str, Any]] = None,
        ucp_meta: Optional[Dict[str, Any]] = None,
    ) -> Dict:
        """Creates a new checkout session."""
        params = {"line_items": line_items, "currency": currency}
        if buyer:
            params["buyer"] = buyer
        if fulfillment:
            params["fulfillment"] = fulfillment
        return _call("create_checkout", params, ucp_meta)

    @mcp.tool("get_checkout")
    def get_checkout(id: str, ucp_meta: Optional[Dict[str, Any]] = None) -> Dict:
        """Retrieves the current state of a checkout session."""
        return _call("get_checkout", {"id": id}, ucp_meta)

    @mcp.tool("update_checkout")
    def update_checkout(
        id: str,
        line_items: Optional[List[Dict[str, Any]]] = None,
        currency: Optional[str] = None,
        buyer: Optional[Dict[str, Any]] = None,
        fulfillment: Optional[Dict[str, Any]] = None,
        ucp_meta: Optional[Dict[str, Any]] = None,
    ) -> Dict:
        """Updates an existing checkout session."""
        params: Dict[str, Any] = {"id": id}
        for key, value in (
            ("line_items", line_items),
            ("currency", currency),
            ("buyer", buyer),
            ("fulfillment", fulfillment),
        ):
            if value is not None:
                params[key] = value
        return _call("update_checkout", params, ucp_meta)

    @mcp.tool("complete_checkout")
    def complete_checkout(
        id: str,
        payment: Optional[Dict[str, Any]] = None,
        ucp_meta: Optional[Dict[str, Any]] = None,
    ) -> Dict:
        """Finalizes the checkout and places the order."""
        return _call("complete_checkout", {"id": id, "payment": payment or {}}, ucp_meta)

    @mcp.tool("cancel_checkout")
    def cancel_checkout(id: str, ucp_meta: Optional[Dict[str, Any]] = None) -> Dict:
        """Cancels a checkout session."""
        return _call("cancel_checkout", {"id": id}, ucp_meta)

    @mcp.tool("link_identity")
    def link_identity(
        code: str,
        redirect_uri: Optional[str] = None,
        ucp_meta: Optional[Dict[str, Any]] = None,
    ) -> Dict:
        """Links a platform identity with a business account using an OAuth 2.0 code."""
        params = {"code": code}
        if redirect_uri:
            params["redirect_uri"] = redirect_uri
        return _call("link_identity", params, ucp_meta)

    @mcp.tool("get_order")
    def get_order(id: str, ucp_meta: Optional[Dict[str, Any]] = None) -> Dict:
        """Retrieves order details."""
        return _call("get_order", {"id": id}, ucp_meta)

    return {
        "create_checkout": create_checkout,
        "get_checkout": get_checkout,
        "update_checkout": update_checkout,
        "complete_checkout": complete_checkout,
        "cancel_checkout": cancel_checkout,
        "link_identity": link_identity,
        "get_order": get_order,
    }


def build_mcp_server(host: UCPHost) -> FastMCP:
    """Create a stateless streamable-HTTP MCP server for `host`."""
    mcp = FastMCP(
        "UCP_Host_MCP_Server",
        host=host.settings.host,
        port=host.settings.port,
        streamable_http_path=Constants.UCP_MCP_PATH,
        stateless_http=True,
    )
    register_tools(mcp, host)
    return mcp

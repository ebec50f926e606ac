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
UCP Host Server

FastAPI application exposing one host over HTTP:
1. GET  /.well-known/ucp - discovery manifest
2. REST binding under /ucp/v1 (checkout sessions, orders, identity linking, payments)
3. POST /ucp/jsonrpc - JSON-RPC binding
4. MCP binding at /mcp when enabled in settings

Usage:
    python -m ucp_app serve
"""

import contextlib
import logging
from typing import Any, Dict

import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .constants import Constants
from .errors import InstrumentAcquisitionFailed, NoBusinessIdentity, UnknownPaymentHandler
from .host import UCPHost
from .payment import BindingContext, PaymentCredential

logger = logging.getLogger(__name__)


def _rest_router(host: UCPHost) -> APIRouter:
    router = APIRouter(prefix=Constants.UCP_REST_PREFIX, tags=["UCP REST"])
    bridge = host.bridge

    @router.post("/checkout-sessions", status_code=201)
    async def create_checkout(body: Dict[str, Any]):
        return bridge.invoke("create_checkout", body)

    @router.get("/checkout-sessions/{checkout_id}")
    async def get_checkout(checkout_id: str):
        return bridge.invoke("get_checkout", {"id": checkout_id})

    @router.put("/checkout-sessions/{checkout_id}")
    async def update_checkout(checkout_id: str, body: Dict[str, Any]):
        return bridge.invoke("update_checkout", {**body, "id": checkout_id})

    @router.post("/checkout-sessions/{checkout_id}/complete")
    async def complete_checkout(checkout_id: str, body: Dict[str, Any]):
        return bridge.invoke("complete_checkout", {"id": checkout_id, "payment": body})

    @router.post("/checkout-sessions/{checkout_id}/cancel")
    async def cancel_checkout(checkout_id: str):
        return bridge.invoke("cancel_checkout", {"id": checkout_id})

    @router.get("/orders/{order_id}")
    async def get_order(order_id: str):
        return bridge.invoke("get_order", {"id": order_id})

    @router.post("/identity-linking")
    async def link_identity(body: Dict[str, Any]):
        return bridge.invoke("link_identity", body)

    @router.post("/payments/{handler_name}")
    async def process_payment(handler_name: str, credential: PaymentCredential):
        binding = BindingContext(transport=Constants.TRANSPORT_REST)
        try:
            result = host.dispatcher.dispatch(handler_name, credential, binding)
        except (UnknownPaymentHandler, InstrumentAcquisitionFailed) as e:
            raise HTTPException(status_code=400, detail={"code": e.code.value, "message": e.message})
        return result.model_dump(mode="json", exclude_none=True)

    return router


def create_app(host: UCPHost) -> FastAPI:
    """Create the FastAPI application for `host`."""
    mcp_app = None
    lifespan = None
    if host.settings.mcp_enabled:
        from .mcp_server import build_mcp_server

        mcp = build_mcp_server(host)
        mcp_app = mcp.streamable_http_app()

        @contextlib.asynccontextmanager
        async def lifespan(app: FastAPI):
            async with mcp.session_manager.run():
                yield

    app = FastAPI(
        title="UCP Host Server",
        description="UCP discovery, REST, JSON-RPC and MCP bindings",
        version=Constants.UCP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "UCP Host Server"}

    @app.get(Constants.UCP_WELL_KNOWN_PATH)
    async def ucp_discovery():
        """UCP service discovery endpoint."""
        try:
            return host.manifest()
        except NoBusinessIdentity as e:
            raise HTTPException(status_code=404, detail=e.message)

    @app.post(Constants.UCP_JSONRPC_PATH)
    async def jsonrpc(request: Request):
        try:
            payload = await request.json()
        except ValueError:
            return JSONResponse(
                {"jsonrpc": "2.0", "id": None, "error": {"code": -32700, "message": "Parse error"}}
            )
        return host.bridge.handle(payload)

    app.include_router(_rest_router(host))

    if mcp_app is not None:
        # serves Constants.UCP_MCP_PATH
        app.mount("/", mcp_app)

    return app


def run_server(host: UCPHost):
    """Run the host server."""
    settings = host.settings
    logger.info(f"Starting UCP Host Server on http://{settings.host}:{settings.port}")
    logger.info("Available endpoints:")
    logger.info(f"  - GET  {Constants.UCP_WELL_KNOWN_PATH} - UCP service discovery")
    logger.info("  - GET  /health - Health check")
    logger.info(f"  - *    {Constants.UCP_REST_PREFIX}/... - REST binding")
    logger.info(f"  - POST {Constants.UCP_JSONRPC_PATH} - JSON-RPC binding")
    if settings.mcp_enabled:
        logger.info(f"  - POST {Constants.UCP_MCP_PATH} - MCP binding")

    uvicorn.run(create_app(host), host=settings.host, port=settings.port)

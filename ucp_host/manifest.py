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
UCP Discovery Manifest

Renders the document served at /.well-known/ucp:

    {"ucp": {"version": ..., "services": {...}, "capabilities": [...]},
     "payment": {"handlers": [...]}}

The payment block is only present when payment handlers are registered.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .config import UCPSettings
from .constants import Constants
from .errors import NoBusinessIdentity
from .payment.models import PaymentHandlerDeclaration
from .registry import CapabilityRegistry

logger = logging.getLogger(__name__)


class TransportEndpoint(BaseModel):
    """One transport binding of a service."""
    model_config = ConfigDict(populate_by_name=True)

    transport: str
    endpoint: Optional[str] = Field(None, description="Absolute URL or path relative to the base URL")
    schema_url: Optional[str] = Field(None, alias="schema")

    def render(self, base_url: str) -> Dict[str, str]:
        entry = {}
        if self.endpoint:
            if self.endpoint.startswith(("http://", "https://")):
                entry["endpoint"] = self.endpoint
            else:
                entry["endpoint"] = f"{base_url.rstrip('/')}/{self.endpoint.lstrip('/')}"
        if self.schema_url:
            entry["schema"] = self.schema_url
        return entry


class ServiceConfig(BaseModel):
    """A UCP service and the transports it is reachable over."""

    name: str = Constants.UCP_SHOPPING_SERVICE
    version: str = Constants.UCP_VERSION
    spec: Optional[str] = Constants.UCP_SHOPPING_SPEC
    endpoints: List[TransportEndpoint] = Field(default_factory=list)

    def render(self, base_url: str) -> Dict[str, Any]:
        entry: Dict[str, Any] = {"version": self.version}
        if self.spec:
            entry["spec"] = self.spec
        for binding in self.endpoints:
            entry[binding.transport] = binding.render(base_url)
        return entry


_DEFAULT_BINDINGS = {
    Constants.TRANSPORT_REST: (Constants.UCP_REST_PREFIX, Constants.REST_SCHEMA),
    Constants.TRANSPORT_MCP: (Constants.UCP_MCP_PATH, Constants.MCP_SCHEMA),
    Constants.TRANSPORT_A2A: ("/a2a", Constants.A2A_SCHEMA),
    # embedded checkout is opened from a continue_url, it has no fixed endpoint
    Constants.TRANSPORT_EMBEDDED: (None, Constants.EMBEDDED_SCHEMA),
}


def default_endpoints(settings: UCPSettings) -> List[TransportEndpoint]:
    """Endpoints for every transport enabled in `settings`."""
    endpoints = []
    for transport in settings.enabled_transports():
        path, schema = _DEFAULT_BINDINGS[transport]
        endpoints.append(TransportEndpoint(transport=transport, endpoint=path, schema=schema))
    return endpoints


class ManifestBuilder:
    """Builds the discovery manifest for one host."""

    def __init__(
        self,
        service_name: str = Constants.UCP_SHOPPING_SERVICE,
        service_spec: str = Constants.UCP_SHOPPING_SPEC,
    ):
        self.service_name = service_name
        self.service_spec = service_spec

    def build(
        self,
        registry: CapabilityRegistry,
        base_url: str,
        transport_endpoints: Sequence[TransportEndpoint],
        payment_handlers: Optional[Sequence[PaymentHandlerDeclaration]] = None,
    ) -> Dict[str, Any]:
        """
        Render the manifest.

        Raises NoBusinessIdentity when the registry has no business: a host
        without a declared business cannot describe itself.
        """
        business = registry.business_identity()
        if business is None:
            raise NoBusinessIdentity()

        service = ServiceConfig(
            name=self.service_name,
            spec=self.service_spec,
            endpoints=list(transport_endpoints),
        )

        manifest: Dict[str, Any] = {
            Constants.UCP_METADATA_KEY: {
                "version": business.version or Constants.UCP_VERSION,
                "services": {service.name: service.render(base_url)},
                "capabilities": [cap.to_manifest() for cap in registry.all()],
            }
        }
        if payment_handlers:
            manifest["payment"] = {
                "handlers": [handler.to_manifest() for handler in payment_handlers]
            }
        logger.debug(f"Manifest built for {business.name} with {len(registry)} capabilities")
        return manifest

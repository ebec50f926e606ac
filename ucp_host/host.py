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
UCP Host Assembly

Builds every host component once at startup from explicit configuration and
hands them to the transport layer. Configuration errors raised here are fatal:
a host that fails to assemble must not serve traffic.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .business import UCPAware
from .capabilities import BusinessIdentity, CapabilityDescriptor, DiscoveryFeed
from .config import UCPSettings
from .jsonrpc import JsonRpcBridge
from .manifest import ManifestBuilder, TransportEndpoint, default_endpoints
from .negotiation import CapabilityNegotiator, UCPProfile
from .normalizer import ResponseNormalizer
from .payment import PaymentHandler, PaymentHandlerDispatcher, PaymentHandlerRegistry
from .registry import CapabilityRegistry

logger = logging.getLogger(__name__)


class UCPHost:
    """All host components, wired together."""

    def __init__(
        self,
        settings: UCPSettings,
        registry: CapabilityRegistry,
        business: UCPAware,
        payment_registry: Optional[PaymentHandlerRegistry] = None,
        transport_endpoints: Optional[Sequence[TransportEndpoint]] = None,
    ):
        self.settings = settings
        self.registry = registry
        self.business = business
        self.payment_registry = payment_registry or PaymentHandlerRegistry()
        self.dispatcher = PaymentHandlerDispatcher(self.payment_registry)
        self.transport_endpoints = list(transport_endpoints or default_endpoints(settings))
        self.negotiator = CapabilityNegotiator()
        self.manifest_builder = ManifestBuilder()
        self.normalizer = ResponseNormalizer()
        self.bridge = JsonRpcBridge(business, self.normalizer)

    @classmethod
    def create(
        cls,
        business: UCPAware,
        business_identity: Union[BusinessIdentity, Dict[str, Any]],
        settings: Optional[UCPSettings] = None,
        feed: Optional[DiscoveryFeed] = None,
        payment_handlers: Iterable[PaymentHandler] = (),
        payment_registry: Optional[PaymentHandlerRegistry] = None,
    ) -> "UCPHost":
        """
        Assemble a host around `business`.

        The business is registered as the primary capability provider carrying
        `business_identity`; `feed` may declare further capability units.
        Pass `payment_registry` when the business itself needs to dispatch
        payments, so both share the same handlers.
        """
        settings = settings or UCPSettings.from_env()
        # copy so repeated calls never mutate the caller's feed
        feed = DiscoveryFeed(list(feed or []))
        feed.register_provider(type(business).__name__, business, business=business_identity)

        registry = CapabilityRegistry.build(feed)

        payment_registry = payment_registry or PaymentHandlerRegistry()
        for handler in payment_handlers:
            payment_registry.register_handler(handler)

        logger.info(
            f"UCP host assembled: transports={settings.enabled_transports()}, "
            f"payment handlers={len(payment_registry)}"
        )
        return cls(settings, registry, business, payment_registry)

    def manifest(self) -> Dict[str, Any]:
        return self.manifest_builder.build(
            self.registry,
            self.settings.public_url,
            self.transport_endpoints,
            self.payment_registry.declarations(),
        )

    def negotiate(self, platform_capabilities: Sequence[CapabilityDescriptor]) -> List[CapabilityDescriptor]:
        return self.negotiator.negotiate(platform_capabilities, self.registry.all())

    def negotiate_profile(self, profile: UCPProfile) -> List[CapabilityDescriptor]:
        return self.negotiator.negotiate_with_profile(profile, self.registry)

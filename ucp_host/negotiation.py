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
UCP Capability Negotiation

Computes the capabilities a platform and a business both support. For each
platform capability the first business capability with the same name and a
compatible version is a match, and the platform's descriptor is kept.

Versions are YYYY-MM-DD strings, so lexicographic order is chronological
order: a platform version is compatible when it is not newer than the
business version.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx
from pydantic import BaseModel, Field

from .capabilities import CapabilityDescriptor
from .constants import Constants

logger = logging.getLogger(__name__)


class UCPProfile(BaseModel):
    """A platform or business profile as published at its profile URI."""
    version: Optional[str] = None
    capabilities: List[CapabilityDescriptor] = Field(default_factory=list)
    services: Dict[str, Any] = Field(default_factory=dict)
    payment: Dict[str, Any] = Field(default_factory=dict)
    signing_keys: List[Dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "UCPProfile":
        """Parse a profile document; capabilities may sit under `ucp` or at the top level."""
        body = document.get(Constants.UCP_METADATA_KEY, document)
        return cls(
            version=body.get("version"),
            capabilities=[CapabilityDescriptor(**cap) for cap in body.get("capabilities", [])],
            services=body.get("services", {}),
            payment=document.get("payment", body.get("payment", {})),
            signing_keys=document.get("signing_keys", body.get("signing_keys", [])),
        )


def is_compatible(platform_version: str, business_version: str) -> bool:
    """Platform version must be no newer than the business version."""
    return platform_version <= business_version


class CapabilityNegotiator:
    """Handles UCP capability negotiation between platform and business."""

    def negotiate(
        self,
        platform_capabilities: Sequence[CapabilityDescriptor],
        business_capabilities: Sequence[CapabilityDescriptor],
    ) -> List[CapabilityDescriptor]:
        """Intersect two capability lists, keeping the platform's descriptors."""
        negotiated = []
        for platform_cap in platform_capabilities:
            for business_cap in business_capabilities:
                if platform_cap.name == business_cap.name and is_compatible(
                    platform_cap.version, business_cap.version
                ):
                    negotiated.append(platform_cap)
                    break
        logger.debug(
            f"Negotiated {len(negotiated)} of {len(platform_capabilities)} platform capabilities"
        )
        return negotiated

    def negotiate_with_profile(self, profile: UCPProfile, registry) -> List[CapabilityDescriptor]:
        """Negotiate a platform profile against a host's capability registry."""
        return self.negotiate(profile.capabilities, registry.all())

    def fetch_platform_profile(
        self,
        profile_uri: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> UCPProfile:
        """
        Fetch and parse the platform profile published at `profile_uri`.

        Raises httpx.HTTPError when the profile cannot be retrieved.
        """
        logger.info(f"Fetching platform profile: {profile_uri}")
        if client is not None:
            response = client.get(profile_uri)
        else:
            with httpx.Client(timeout=timeout) as own_client:
                response = own_client.get(profile_uri)
        response.raise_for_status()
        return UCPProfile.from_document(response.json())

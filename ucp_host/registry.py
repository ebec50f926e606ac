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
UCP Capability Registry

The registry is built once at startup from a discovery feed and is read-only
afterwards. Building it enforces the structural rules of a UCP host:

- At most one business identity per host.
- At most one primary capability provider per host.
- Every capability version is a YYYY-MM-DD date.
- Every unit declaring capabilities is reachable over the REST binding.

When both a business identity and a primary provider are present the standard
capabilities (checkout, order, identity linking) are seeded as well.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Set

from .capabilities import (
    STANDARD_CAPABILITIES,
    BusinessIdentity,
    CapabilityDescriptor,
    DiscoveryRecord,
)
from .constants import Constants
from .errors import (
    InvalidVersionFormat,
    MultipleBusinessIdentities,
    MultipleCapabilityProviders,
    TransportRequirementViolated,
)

logger = logging.getLogger(__name__)

VERSION_RE = re.compile(Constants.UCP_VERSION_PATTERN, re.ASCII)


def validate_version(version: str, capability: Optional[str] = None) -> str:
    """Return `version` unchanged if it is a YYYY-MM-DD string."""
    if not isinstance(version, str) or not VERSION_RE.fullmatch(version):
        raise InvalidVersionFormat(str(version), capability)
    return version


class CapabilityRegistry:
    """Authoritative, immutable set of capabilities for a running host."""

    def __init__(
        self,
        capabilities: Mapping[str, CapabilityDescriptor],
        business: Optional[BusinessIdentity] = None,
        provider_unit: Optional[str] = None,
    ):
        self._capabilities = MappingProxyType(dict(capabilities))
        self._business = business
        self._provider_unit = provider_unit

    @classmethod
    def build(cls, feed: Iterable[DiscoveryRecord]) -> "CapabilityRegistry":
        """
        Build a registry from `feed` in a single pass.

        Raises a ConfigurationError subclass when the feed describes an
        invalid host; the process should not serve traffic in that case.
        """
        capabilities: Dict[str, CapabilityDescriptor] = {}
        businesses: Dict[str, BusinessIdentity] = {}
        providers: Set[str] = set()

        for record in feed:
            if record.business is not None:
                businesses[record.unit_id] = record.business
            if record.primary_provider:
                providers.add(record.unit_id)

            for capability in record.capabilities:
                validate_version(capability.version, capability.name)
                if not record.transport_reachable:
                    raise TransportRequirementViolated(record.unit_id)
                if capability.name in capabilities:
                    logger.debug(
                        f"Capability {capability.name} redeclared by {record.unit_id}, "
                        f"replacing version {capabilities[capability.name].version}"
                    )
                capabilities[capability.name] = capability
                logger.debug(f"Registered capability {capability.name}@{capability.version}")

        if len(businesses) > 1:
            raise MultipleBusinessIdentities(businesses.keys())
        if len(providers) > 1:
            raise MultipleCapabilityProviders(providers)

        business = next(iter(businesses.values()), None)
        provider_unit = next(iter(providers), None)

        if business is not None and provider_unit is not None:
            for capability in STANDARD_CAPABILITIES:
                capabilities[capability.name] = capability

        logger.info(
            f"Capability registry built: {len(capabilities)} capabilities, "
            f"business={business.name if business else None}, provider={provider_unit}"
        )
        return cls(capabilities, business, provider_unit)

    def get(self, name: str) -> Optional[CapabilityDescriptor]:
        return self._capabilities.get(name)

    def all(self) -> List[CapabilityDescriptor]:
        """All descriptors, in registration order."""
        return list(self._capabilities.values())

    def business_identity(self) -> Optional[BusinessIdentity]:
        return self._business

    @property
    def provider_unit(self) -> Optional[str]:
        return self._provider_unit

    def __contains__(self, name: str) -> bool:
        return name in self._capabilities

    def __len__(self) -> int:
        return len(self._capabilities)

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
UCP Capability Declarations

Capabilities use reverse-DNS naming (e.g. dev.ucp.shopping.checkout) and
YYYY-MM-DD versions. This module holds the immutable descriptor models and
the discovery feed that the capability registry is built from.

The discovery feed is filled by explicit registration (`DiscoveryFeed.register`)
or from static configuration (`DiscoveryFeed.from_config`).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import Constants


class CapabilityDescriptor(BaseModel):
    """One declared capability."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Capability name in reverse-DNS format")
    version: str = Field(..., description="Capability version in YYYY-MM-DD format")
    spec: Optional[str] = Field(None, description="Capability specification URI")
    schema_url: Optional[str] = Field(None, alias="schema", description="Capability schema URI")
    extends: Optional[str] = Field(None, description="Parent capability this extends")

    def to_manifest(self) -> Dict[str, str]:
        """Render as a manifest entry, leaving out empty optional fields."""
        entry = {"name": self.name, "version": self.version}
        if self.spec:
            entry["spec"] = self.spec
        if self.schema_url:
            entry["schema"] = self.schema_url
        if self.extends:
            entry["extends"] = self.extends
        return entry


class BusinessIdentity(BaseModel):
    """The merchant-of-record a host represents."""
    model_config = ConfigDict(frozen=True)

    name: str
    version: str = Constants.UCP_VERSION


class DiscoveryRecord(BaseModel):
    """What the discovery feed knows about one declaring unit."""
    model_config = ConfigDict(frozen=True)

    unit_id: str
    business: Optional[BusinessIdentity] = None
    capabilities: List[CapabilityDescriptor] = Field(default_factory=list)
    transport_reachable: bool = True
    primary_provider: bool = False


STANDARD_CAPABILITIES = (
    CapabilityDescriptor(
        name=Constants.UCP_CHECKOUT_CAPABILITY,
        version=Constants.UCP_VERSION,
        spec="https://ucp.dev/specification/checkout",
        schema="https://ucp.dev/schemas/shopping/checkout.json",
    ),
    CapabilityDescriptor(
        name=Constants.UCP_ORDER_CAPABILITY,
        version=Constants.UCP_VERSION,
        spec="https://ucp.dev/specification/order",
        schema="https://ucp.dev/schemas/shopping/order.json",
    ),
    CapabilityDescriptor(
        name=Constants.UCP_IDENTITY_LINKING_CAPABILITY,
        version=Constants.UCP_VERSION,
        spec="https://ucp.dev/specification/identity-linking",
        schema="https://ucp.dev/schemas/common/identity_linking.json",
    ),
)


class DiscoveryFeed:
    """Ordered sequence of discovery records."""

    def __init__(self, records: Optional[List[DiscoveryRecord]] = None):
        self._records: List[DiscoveryRecord] = list(records or [])

    def __iter__(self) -> Iterator[DiscoveryRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: DiscoveryRecord) -> "DiscoveryFeed":
        self._records.append(record)
        return self

    def register(
        self,
        unit_id: str,
        capabilities: Optional[List[Union[CapabilityDescriptor, Mapping[str, Any]]]] = None,
        business: Optional[Union[BusinessIdentity, Mapping[str, Any]]] = None,
        transport_reachable: bool = True,
        primary_provider: bool = False,
    ) -> "DiscoveryFeed":
        """Declare a unit and the capabilities it provides."""
        if isinstance(business, Mapping):
            business = BusinessIdentity(**business)
        descriptors = [
            cap if isinstance(cap, CapabilityDescriptor) else CapabilityDescriptor(**cap)
            for cap in capabilities or []
        ]
        return self.add(
            DiscoveryRecord(
                unit_id=unit_id,
                business=business,
                capabilities=descriptors,
                transport_reachable=transport_reachable,
                primary_provider=primary_provider,
            )
        )

    def register_provider(
        self,
        unit_id: str,
        provider: Any,
        business: Optional[Union[BusinessIdentity, Mapping[str, Any]]] = None,
    ) -> "DiscoveryFeed":
        """Declare a primary capability provider (a `UCPAware` implementation)."""
        return self.register(
            unit_id,
            capabilities=list(getattr(provider, "capabilities", ())),
            business=business,
            transport_reachable=True,
            primary_provider=True,
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "DiscoveryFeed":
        """
        Build a feed from static configuration.

        Expected shape:
            {"units": [{"id": "...", "business": {"name": "...", "version": "..."},
                        "capabilities": [{"name": "...", "version": "..."}],
                        "rest": true, "provider": false}]}
        """
        feed = cls()
        for unit in config.get("units", []):
            feed.register(
                unit["id"],
                capabilities=unit.get("capabilities", []),
                business=unit.get("business"),
                transport_reachable=unit.get("rest", True),
                primary_provider=unit.get("provider", False),
            )
        return feed

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "DiscoveryFeed":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_config(json.load(f))

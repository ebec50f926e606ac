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
UCP Host

Capability registry, negotiation, discovery manifest and response
normalization for a Universal Commerce Protocol business host, plus the
payment handler dispatch used during checkout completion.
"""

from .business import UCPAware
from .capabilities import (
    STANDARD_CAPABILITIES,
    BusinessIdentity,
    CapabilityDescriptor,
    DiscoveryFeed,
    DiscoveryRecord,
)
from .config import UCPSettings
from .constants import Constants
from .host import UCPHost
from .manifest import ManifestBuilder, ServiceConfig, TransportEndpoint
from .negotiation import CapabilityNegotiator, UCPProfile
from .normalizer import ResponseNormalizer, SimpleUCPResult
from .registry import CapabilityRegistry

__all__ = [
    "STANDARD_CAPABILITIES",
    "BusinessIdentity",
    "CapabilityDescriptor",
    "CapabilityNegotiator",
    "CapabilityRegistry",
    "Constants",
    "DiscoveryFeed",
    "DiscoveryRecord",
    "ManifestBuilder",
    "ResponseNormalizer",
    "ServiceConfig",
    "SimpleUCPResult",
    "TransportEndpoint",
    "UCPAware",
    "UCPHost",
    "UCPProfile",
    "UCPSettings",
]

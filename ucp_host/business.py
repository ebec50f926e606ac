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
UCP Business Surface

`UCPAware` is the primary capability-provider surface: the standard
checkout, identity linking and order operations a business implements.
Registering an implementation as the provider seeds the standard
capabilities into the host's registry.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping

from .capabilities import STANDARD_CAPABILITIES
from .constants import Constants

# Operation name -> capability it belongs to
OPERATION_CAPABILITIES: Dict[str, str] = {
    "create_checkout": Constants.UCP_CHECKOUT_CAPABILITY,
    "get_checkout": Constants.UCP_CHECKOUT_CAPABILITY,
    "update_checkout": Constants.UCP_CHECKOUT_CAPABILITY,
    "complete_checkout": Constants.UCP_CHECKOUT_CAPABILITY,
    "cancel_checkout": Constants.UCP_CHECKOUT_CAPABILITY,
    "link_identity": Constants.UCP_IDENTITY_LINKING_CAPABILITY,
    "get_order": Constants.UCP_ORDER_CAPABILITY,
}


class UCPAware(ABC):
    """Standard UCP capabilities a business implements.

    Methods may return any result shape the response normalizer understands.
    """

    capabilities = STANDARD_CAPABILITIES

    @abstractmethod
    def create_checkout(self, checkout_request: Mapping[str, Any]) -> Any:
        """Creates a new checkout session with line items, currency and payment configuration."""

    @abstractmethod
    def get_checkout(self, checkout_id: str) -> Any:
        """Retrieves an existing checkout session."""

    @abstractmethod
    def update_checkout(self, checkout_id: str, checkout_update: Mapping[str, Any]) -> Any:
        """Updates line items, buyer, fulfillment or payment details."""

    @abstractmethod
    def complete_checkout(self, checkout_id: str, payment: Mapping[str, Any]) -> Any:
        """Completes the checkout and places the order."""

    @abstractmethod
    def cancel_checkout(self, checkout_id: str) -> Any:
        """Cancels a pending checkout session."""

    @abstractmethod
    def link_identity(self, oauth_request: Mapping[str, Any]) -> Any:
        """Links a platform identity with a business account (OAuth 2.0)."""

    @abstractmethod
    def get_order(self, order_id: str) -> Any:
        """Retrieves order details."""

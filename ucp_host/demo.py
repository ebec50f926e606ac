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
In-memory demonstration business.

Backs the CLI `serve` command and the integration tests. State lives in
process memory only.
"""

import json
import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from uuid import uuid4

from .business import UCPAware
from .capabilities import BusinessIdentity
from .constants import Constants
from .errors import DownstreamProcessingError
from .host import UCPHost
from .normalizer import ContentListResult, SimpleUCPResult, TextContent
from .payment import (
    BindingContext,
    MockPaymentHandler,
    PaymentCredential,
    PaymentHandlerDispatcher,
    PaymentHandlerRegistry,
    ProcessingStatus,
)

logger = logging.getLogger(__name__)


class CheckoutStatus(str, Enum):
    INCOMPLETE = "incomplete"
    REQUIRES_ESCALATION = "requires_escalation"
    READY_FOR_COMPLETE = "ready_for_complete"
    COMPLETE_IN_PROGRESS = "complete_in_progress"
    COMPLETED = "completed"
    CANCELED = "canceled"


def _structured(data: Dict[str, Any]) -> ContentListResult:
    return ContentListResult(
        content=[TextContent(text=Constants.UCP_STRUCTURED_DATA_PREFIX + json.dumps(data))]
    )


class DemoBusiness(UCPAware):
    """A tiny merchant keeping checkouts and orders in dictionaries."""

    def __init__(self, dispatcher: Optional[PaymentHandlerDispatcher] = None):
        self.dispatcher = dispatcher
        self.checkouts: Dict[str, Dict[str, Any]] = {}
        self.orders: Dict[str, Dict[str, Any]] = {}

    def _checkout(self, checkout_id: str) -> Dict[str, Any]:
        checkout = self.checkouts.get(checkout_id)
        if checkout is None:
            raise DownstreamProcessingError(f"Checkout with ID {checkout_id} was not found")
        return checkout

    def create_checkout(self, checkout_request: Mapping[str, Any]) -> Any:
        line_items = checkout_request.get("line_items") or []
        if not line_items:
            raise DownstreamProcessingError("At least one line item is required")
        checkout = {
            "id": f"chk_{uuid4().hex[:12]}",
            "status": CheckoutStatus.READY_FOR_COMPLETE.value,
            "currency": checkout_request.get("currency", "USD"),
            "line_items": list(line_items),
        }
        self.checkouts[checkout["id"]] = checkout
        logger.info(f"Checkout created with id: {checkout['id']}")
        return _structured(checkout)

    def get_checkout(self, checkout_id: str) -> Any:
        return _structured(self._checkout(checkout_id))

    def update_checkout(self, checkout_id: str, checkout_update: Mapping[str, Any]) -> Any:
        checkout = self._checkout(checkout_id)
        if checkout["status"] in (CheckoutStatus.COMPLETED.value, CheckoutStatus.CANCELED.value):
            raise DownstreamProcessingError(f"Checkout {checkout_id} can no longer be updated")
        for key in ("line_items", "currency", "buyer", "fulfillment"):
            if key in checkout_update:
                checkout[key] = checkout_update[key]
        return _structured(checkout)

    def complete_checkout(self, checkout_id: str, payment: Mapping[str, Any]) -> Any:
        checkout = self._checkout(checkout_id)
        if checkout["status"] == CheckoutStatus.COMPLETED.value:
            raise DownstreamProcessingError("This checkout has already been completed")
        if checkout["status"] == CheckoutStatus.CANCELED.value:
            raise DownstreamProcessingError("This checkout has been canceled and cannot be completed")

        if self.dispatcher is not None and payment.get("handler"):
            result = self.dispatcher.dispatch(
                payment["handler"],
                PaymentCredential(**payment.get("credential", {})),
                BindingContext(**payment.get("binding", {})),
            )
            checkout["payment_status"] = result.status.value
            if result.status == ProcessingStatus.FAILED:
                raise DownstreamProcessingError(result.message or "Payment failed")
            if result.status != ProcessingStatus.SUCCESS:
                # buyer or provider still has to act
                checkout["status"] = CheckoutStatus.REQUIRES_ESCALATION.value
                return _structured(checkout)

        order_id = f"ord_{uuid4().hex[:12]}"
        self.orders[order_id] = {
            "id": order_id,
            "checkout_id": checkout_id,
            "line_items": checkout["line_items"],
        }
        checkout["status"] = CheckoutStatus.COMPLETED.value
        checkout["order"] = {"id": order_id}
        logger.info(f"Checkout completed, order created: {order_id}")
        return _structured(checkout)

    def cancel_checkout(self, checkout_id: str) -> Any:
        checkout = self._checkout(checkout_id)
        if checkout["status"] == CheckoutStatus.COMPLETED.value:
            raise DownstreamProcessingError("A completed checkout cannot be canceled")
        checkout["status"] = CheckoutStatus.CANCELED.value
        return SimpleUCPResult({"id": checkout_id, "status": checkout["status"]})

    def link_identity(self, oauth_request: Mapping[str, Any]) -> Any:
        if not oauth_request.get("code"):
            raise DownstreamProcessingError("Authorization code is required")
        return SimpleUCPResult({"linked": "true", "account_id": f"acct_{uuid4().hex[:8]}"})

    def get_order(self, order_id: str) -> Any:
        order = self.orders.get(order_id)
        if order is None:
            raise DownstreamProcessingError(f"Order with ID {order_id} was not found")
        return dict(order)


def build_demo_host(settings=None, feed=None):
    """Assemble a host around `DemoBusiness` with the mock payment handler."""
    payment_registry = PaymentHandlerRegistry()
    payment_registry.register_handler(MockPaymentHandler())
    business = DemoBusiness(PaymentHandlerDispatcher(payment_registry))
    return UCPHost.create(
        business,
        BusinessIdentity(name="UCP Demo Store", version=Constants.UCP_VERSION),
        settings=settings,
        feed=feed,
        payment_registry=payment_registry,
    )

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
Payment Handler Registry and Dispatch

Handlers are registered once at startup; afterwards the registry is only read.
A payment attempt is a plain call sequence:

    credential + binding -> acquire_instrument -> instrument
                         -> process_payment    -> ProcessingResult

The dispatcher never retries. `pending` and `requires_action` results are
returned to the caller as-is.
"""

import logging
from typing import Dict, List, Optional

from ..errors import InstrumentAcquisitionFailed, UnknownPaymentHandler
from .handler import PaymentHandler
from .models import (
    BindingContext,
    PaymentCredential,
    PaymentHandlerDeclaration,
    ProcessingResult,
)

logger = logging.getLogger(__name__)


class PaymentHandlerRegistry:
    """Maps handler names to handler implementations."""

    def __init__(self):
        self._handlers: Dict[str, PaymentHandler] = {}

    def register(self, name: str, handler: PaymentHandler) -> None:
        """Register `handler` under `name`; a later registration replaces an earlier one."""
        if name in self._handlers:
            logger.warning(f"Payment handler {name} registered twice, replacing previous handler")
        self._handlers[name] = handler

    def register_handler(self, handler: PaymentHandler) -> None:
        """Register a handler under its declared name."""
        self.register(handler.declaration().name, handler)

    def get(self, name: str) -> Optional[PaymentHandler]:
        return self._handlers.get(name)

    def all(self) -> Dict[str, PaymentHandler]:
        return dict(self._handlers)

    def declarations(self) -> List[PaymentHandlerDeclaration]:
        return [handler.declaration() for handler in self._handlers.values()]

    def __len__(self) -> int:
        return len(self._handlers)


class PaymentHandlerDispatcher:
    """Drives the acquire -> process flow for one payment attempt."""

    def __init__(self, registry: PaymentHandlerRegistry):
        self.registry = registry

    def dispatch(
        self,
        handler_name: str,
        credential: PaymentCredential,
        binding: Optional[BindingContext] = None,
    ) -> ProcessingResult:
        handler = self.registry.get(handler_name)
        if handler is None:
            raise UnknownPaymentHandler(handler_name)

        instrument = handler.acquire_instrument(credential, binding or BindingContext())
        if instrument is None:
            raise InstrumentAcquisitionFailed(handler_name, credential.schema_url)

        result = handler.process_payment(instrument)
        logger.info(
            f"Payment via {handler_name}: status={result.status.value}, "
            f"transaction={result.transaction_id}"
        )
        return result

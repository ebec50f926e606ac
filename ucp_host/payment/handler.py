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

"""Payment handler interface."""

from abc import ABC, abstractmethod

from ..errors import InstrumentAcquisitionFailed
from .models import (
    BindingContext,
    PaymentCredential,
    PaymentHandlerDeclaration,
    PaymentInstrument,
    ProcessingResult,
)


class PaymentHandler(ABC):
    """
    Processes payment credentials into instruments and executes payments.

    `acquire_instrument` must refuse credentials whose schema is not listed in
    the declaration's `instrument_schemas`; `ensure_supported` does that check.
    """

    @abstractmethod
    def declaration(self) -> PaymentHandlerDeclaration:
        """Handler declaration with configuration and supported instruments."""

    @abstractmethod
    def acquire_instrument(
        self, credential: PaymentCredential, binding: BindingContext
    ) -> PaymentInstrument:
        """Acquire a payment instrument from a payment credential."""

    @abstractmethod
    def process_payment(self, instrument: PaymentInstrument) -> ProcessingResult:
        """Process a payment using the instrument."""

    def supports(self, credential: PaymentCredential) -> bool:
        return credential.schema_url in self.declaration().instrument_schemas

    def ensure_supported(self, credential: PaymentCredential) -> None:
        if not self.supports(credential):
            raise InstrumentAcquisitionFailed(self.declaration().name, credential.schema_url)

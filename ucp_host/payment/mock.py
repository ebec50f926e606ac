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

from uuid import uuid4

from .handler import PaymentHandler
from .models import (
    BindingContext,
    PaymentCredential,
    PaymentHandlerDeclaration,
    PaymentInstrument,
    ProcessingResult,
    ProcessingStatus,
)

MOCK_HANDLER_NAME = "dev.ucp.mock_payment"
MOCK_TOKEN_SCHEMA = "https://ucp.dev/schemas/shopping/types/token_credential.json"


class MockPaymentHandler(PaymentHandler):
  """Mock payment handler simulating a call to a payment service provider.

  Tokens starting with "fail" are declined and tokens starting with "3ds"
  require buyer action; everything else succeeds.
  """

  def declaration(self) -> PaymentHandlerDeclaration:
    return PaymentHandlerDeclaration(
        name=MOCK_HANDLER_NAME,
        spec="https://ucp.dev/specification/payment-handlers",
        instrument_schemas=[MOCK_TOKEN_SCHEMA],
    )

  def acquire_instrument(
      self, credential: PaymentCredential, binding: BindingContext
  ) -> PaymentInstrument:
    self.ensure_supported(credential)
    return PaymentInstrument(
        type=credential.type,
        provider="mock",
        data={"token": str(credential.data.get("token", "")), "transport": binding.transport},
        schema=credential.schema_url,
    )

  def process_payment(self, instrument: PaymentInstrument) -> ProcessingResult:
    token = str(instrument.data.get("token", ""))
    if token.startswith("fail"):
      return ProcessingResult(status=ProcessingStatus.FAILED, message="Payment declined")
    if token.startswith("3ds"):
      return ProcessingResult(
          status=ProcessingStatus.REQUIRES_ACTION,
          message="Buyer authentication required",
          data={"instrument_id": instrument.id},
      )
    return ProcessingResult(
        status=ProcessingStatus.SUCCESS,
        transaction_id=f"txn_{uuid4().hex[:12]}",
    )

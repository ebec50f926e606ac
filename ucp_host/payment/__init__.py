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
UCP Payment Handlers

Payment handlers turn platform credentials into instruments and process them.
"""

from .handler import PaymentHandler
from .mock import MockPaymentHandler
from .models import (
    BindingContext,
    PaymentCredential,
    PaymentHandlerDeclaration,
    PaymentInstrument,
    ProcessingResult,
    ProcessingStatus,
)
from .registry import PaymentHandlerDispatcher, PaymentHandlerRegistry

__all__ = [
    "BindingContext",
    "MockPaymentHandler",
    "PaymentCredential",
    "PaymentHandler",
    "PaymentHandlerDeclaration",
    "PaymentHandlerDispatcher",
    "PaymentHandlerRegistry",
    "PaymentInstrument",
    "ProcessingResult",
    "ProcessingStatus",
]
